import pygame
import pytest

from dotgame.input.pointer import PointerInput
from dotgame.input.speed_control import SpeedControl, parse_speed
from dotgame.render.board import Board

BOARD = Board(800, 552, (0, 48))
WINDOW = (800, 600)


def mouse_down(pos, button=1, touch=False):
    return pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=button, pos=pos, touch=touch)


def finger_down(x, y):
    return pygame.event.Event(pygame.FINGERDOWN, x=x, y=y, touch_id=0, finger_id=0)


def key_down(key, unicode=""):
    return pygame.event.Event(pygame.KEYDOWN, key=key, unicode=unicode, mod=0)


def test_mouse_press_is_translated_to_board_coords():
    p = PointerInput().translate(mouse_down((100, 148)), BOARD, WINDOW)
    assert (p.x, p.y, p.source) == (100, 100, "mouse")
    assert not p.default_prevented


def test_other_buttons_and_hud_presses_are_ignored():
    inp = PointerInput()
    assert inp.translate(mouse_down((100, 148), button=3), BOARD, WINDOW) is None
    assert inp.translate(mouse_down((100, 20)), BOARD, WINDOW) is None
    assert inp.translate(key_down(pygame.K_a, "a"), BOARD, WINDOW) is None


def test_finger_press_scales_normalised_coords():
    p = PointerInput().translate(finger_down(0.5, 0.5), BOARD, WINDOW)
    assert (p.x, p.y, p.source) == (400, 252, "touch")


def test_emulated_mouse_dropped_after_prevented_touch():
    inp = PointerInput()
    inp.begin_frame()
    assert inp.translate(mouse_down((400, 300), touch=True), BOARD, WINDOW) is None
    touch = inp.translate(finger_down(0.5, 0.5), BOARD, WINDOW)
    touch.prevent_default()
    inp.delivered(touch)
    assert inp.end_frame() == []


def test_emulated_mouse_kept_when_touch_not_prevented():
    inp = PointerInput()
    inp.begin_frame()
    inp.translate(mouse_down((400, 300), touch=True), BOARD, WINDOW)
    touch = inp.translate(finger_down(0.5, 0.5), BOARD, WINDOW)
    inp.delivered(touch)
    held = inp.end_frame()
    assert [(p.x, p.y) for p in held] == [(400, 252)]
    # nothing carries over into the next frame
    inp.begin_frame()
    assert inp.end_frame() == []


@pytest.mark.parametrize("raw, expected", [
    ("120", 120),
    ("  7", 7),
    ("12abc", 12),
    ("abc", 0),
    ("", 0),
    ("-5", 0),
    (None, 0),
    (42, 42),
    (-3, 0),
])
def test_parse_speed(raw, expected):
    assert parse_speed(raw) == expected


def test_speed_control_notifies_on_change_only():
    control = SpeedControl(text="60")
    seen = []
    control.subscribe(seen.append)
    control.set_text("90")
    control.set_text("90")
    control.set_text("x")
    assert seen == [90, 0]
    control.unsubscribe(seen.append)
    control.set_text("10")
    assert seen == [90, 0]


def test_speed_control_steps_within_bounds():
    control = SpeedControl(text="90", minimum=0, maximum=100, step=10)
    control.step_by(1)
    assert control.value == 100
    control.step_by(1)
    assert control.value == 100
    control.step_by(-20)
    assert control.text == "0"


def test_speed_control_keyboard_editing():
    control = SpeedControl(text="6", step=10)
    assert control.handle_event(key_down(pygame.K_0, "0"))
    assert control.value == 60
    assert control.handle_event(key_down(pygame.K_UP))
    assert control.value == 70
    assert control.handle_event(key_down(pygame.K_BACKSPACE))
    assert control.text == "7"
    assert not control.handle_event(key_down(pygame.K_r, "r"))
    assert control.text == "7"
