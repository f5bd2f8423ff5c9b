import pygame
import pytest

from dotgame.api import ConfigError, PointerEvent
from games.falling_dots.dots import Dot, calculate_score


def timer_names(game):
    return sorted(t.name for t in game.scheduler.pending)


def press(game, x, y):
    pointer = PointerEvent(x, y)
    return game.handle_pointer(pointer), pointer


def test_start_spawns_one_dot_and_ticks_once(make_game):
    game = make_game()
    assert len(game.dots) == 1
    dot = game.dots[0]
    # spawned at -r - stroke, then one tick at 60px/s and 60fps
    assert dot.y == pytest.approx(-dot.r - 1 + 1)
    assert timer_names(game) == ["spawn", "tick"]
    assert game.score == 0
    assert game.ctx.score_display.text == "0"


def test_board_too_narrow_fails_at_start(make_game):
    with pytest.raises(ConfigError):
        make_game(width=100)


def test_spawned_dots_start_above_board_inside_width(make_game):
    game = make_game()
    game.dots.clear()
    for _ in range(200):
        dot = game.spawn_dot()
        x = game.resolve_x(dot)
        assert dot.y == -dot.r - 1
        assert 0 <= x - dot.r - 1 and x + dot.r + 1 <= 400
    assert len(game.dots) == 200


def test_tick_moves_every_dot_by_speed_over_fps(make_game):
    game = make_game(speed="45")
    game.dots[:] = [Dot(50, 50, -51), Dot(10, 50, 100)]
    for _ in range(100):
        game.tick()
    # 100 * 45 / 60
    assert game.dots[0].y == pytest.approx(-51 + 75)
    assert game.dots[1].y == pytest.approx(100 + 75)


def test_speed_change_applies_on_next_tick(make_game):
    game = make_game()
    game.dots[:] = [Dot(10, 50, 0)]
    game.tick()
    game.ctx.speed_control.set_text("120")
    game.tick()
    assert game.dots[0].y == pytest.approx(1 + 2)


@pytest.mark.parametrize("text", ["0", "abc", "-20"])
def test_zero_or_malformed_speed_keeps_dots_still(make_game, text):
    game = make_game()
    game.dots[:] = [Dot(10, 50, 200)]
    game.ctx.speed_control.set_text(text)
    game.tick()
    assert game.speed == 0
    assert game.dots[0].y == 200


def test_scenario_large_dot_expires_after_703_ticks(make_game):
    # 400x600 board, speed 60, 60 fps -> 1px per tick
    game = make_game(options={"x_placement": "absolute"})
    game.dots[:] = [Dot(50, 200, -51)]
    game.tick()
    assert game.dots[0].y == -50
    for _ in range(701):
        game.tick()
    assert game.dots[0].y == 651  # top of stroke exactly on the bottom edge
    game.tick()
    assert game.dots == []


def test_expire_never_removes_early(make_game):
    game = make_game()
    game.dots[:] = [Dot(10, 50, 611)]
    assert game.expire_dots() == 0
    game.dots[0].y = 611.01
    assert game.expire_dots() == 1


def test_prefix_expiry_keeps_dot_behind_live_one(make_game):
    game = make_game()
    big, small = Dot(50, 50, 640), Dot(5, 50, 620)
    game.dots[:] = [big, small]
    assert game.expire_dots() == 0
    assert game.dots == [big, small]


def test_full_expiry_removes_any_expired_dot(make_game):
    game = make_game(options={"expiry_scan": "full"})
    big, small = Dot(50, 50, 640), Dot(5, 50, 620)
    game.dots[:] = [big, small]
    assert game.expire_dots() == 1
    assert game.dots == [big]


def test_single_hit_scores_only_newest_overlapping_dot(make_game):
    game = make_game(options={"x_placement": "absolute"})
    oldest, middle, newest = Dot(30, 200, 300), Dot(20, 200, 300), Dot(10, 200, 300)
    game.dots[:] = [oldest, middle, newest]
    hits, pointer = press(game, 200, 300)
    assert hits == 1
    assert pointer.default_prevented
    assert game.dots == [oldest, middle]
    assert game.score == calculate_score(10, 100) == 5
    assert game.ctx.score_display.text == "5"
    assert timer_names(game) == ["respawn", "spawn", "tick"]


def test_single_hit_picks_newest_that_contains_point(make_game):
    game = make_game(options={"x_placement": "absolute"})
    big, small_elsewhere = Dot(40, 200, 300), Dot(10, 100, 100)
    game.dots[:] = [big, small_elsewhere]
    hits, _ = press(game, 220, 300)
    assert hits == 1
    assert game.dots == [small_elsewhere]


def test_propagated_hit_scores_every_overlapping_dot(make_game):
    game = make_game(options={"x_placement": "absolute", "propagate_hits": True})
    game.dots[:] = [Dot(30, 200, 300), Dot(20, 200, 300), Dot(10, 200, 300), Dot(10, 50, 50)]
    hits, _ = press(game, 200, 300)
    assert hits == 3
    # 100/60 -> 2, 100/40 -> 3, 100/20 -> 5
    assert game.score == 2 + 3 + 5
    assert [(d.x, d.y) for d in game.dots] == [(50, 50)]
    assert timer_names(game).count("respawn") == 3


def test_miss_scores_nothing_but_still_prevents_default(make_game):
    game = make_game(options={"x_placement": "absolute"})
    game.dots[:] = [Dot(10, 200, 300)]
    hits, pointer = press(game, 10, 10)
    assert hits == 0
    assert pointer.default_prevented
    assert game.score == 0
    assert "respawn" not in timer_names(game)


def test_respawn_arrives_after_delay(make_game):
    game = make_game(options={"x_placement": "absolute", "new_dot_delay_ms": 60000})
    game.dots[:] = [Dot(10, 200, 300), Dot(20, 100, 300)]
    press(game, 200, 300)
    assert len(game.dots) == 1
    game.on_update(999)
    assert len(game.dots) == 1
    game.on_update(1)
    assert len(game.dots) == 2


def test_on_update_drives_tick_and_spawn_timers(make_game):
    game = make_game(options={"frames_per_second": 50})
    first = game.dots[0]
    y0 = first.y
    game.on_update(1000)
    assert len(game.dots) == 2
    # 50 ticks of 60 / 50 px
    assert first.y == pytest.approx(y0 + 60)


def test_on_pointer_routes_to_hit_test(make_game):
    game = make_game(options={"x_placement": "absolute"})
    game.dots[:] = [Dot(10, 200, 300)]
    game.on_pointer(PointerEvent(205, 300))
    assert game.dots == []
    assert game.score == 5


def test_resize_waits_for_next_tick(make_game):
    game = make_game()
    game.ctx.window_resized(pygame.Surface((800, 600)))
    game.on_event(pygame.event.Event(pygame.VIDEORESIZE, size=(800, 600), w=800, h=600))
    assert game.ctx.canvas.width == 400
    game.tick()
    assert game.ctx.canvas.width == 800
    assert game.ctx.canvas.surface.get_size() == (800, 600)


def test_hit_test_uses_last_rendered_geometry(make_game):
    game = make_game(speed="0")
    # percent placement: 100% of the span sits at 400 - 10 - 6
    game.dots[:] = [Dot(10, 100, 300)]
    game.ctx.window_resized(pygame.Surface((800, 600)))
    game.request_resize()
    # not applied yet: the dot is still where it was last drawn
    hits, _ = press(game, 384, 300)
    assert hits == 1


def test_percent_dot_moves_with_board_after_resize(make_game):
    game = make_game(speed="0")
    game.dots[:] = [Dot(10, 100, 300)]
    game.ctx.window_resized(pygame.Surface((800, 600)))
    game.request_resize()
    game.tick()
    assert press(game, 384, 300)[0] == 0
    assert press(game, 784, 300)[0] == 1


def test_absolute_dot_stays_put_after_resize(make_game):
    game = make_game(options={"x_placement": "absolute"}, speed="0")
    game.dots[:] = [Dot(10, 100, 300)]
    game.ctx.window_resized(pygame.Surface((800, 600)))
    game.request_resize()
    game.tick()
    assert game.resolve_x(game.dots[0]) == 100
    assert press(game, 100, 300)[0] == 1


def test_restart_resets_score_dots_and_timers(make_game):
    game = make_game(options={"x_placement": "absolute"})
    game.dots[:] = [Dot(10, 200, 300), Dot(10, 100, 100), Dot(10, 300, 100)]
    press(game, 200, 300)
    assert game.score == 5
    game.on_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_r, unicode="r", mod=0))
    assert game.score == 0
    assert game.ctx.score_display.text == "0"
    assert len(game.dots) == 1
    assert timer_names(game) == ["spawn", "tick"]


def test_unload_cancels_pending_timers_and_unsubscribes(make_game):
    game = make_game(options={"x_placement": "absolute"})
    game.dots[:] = [Dot(10, 200, 300)]
    press(game, 200, 300)
    game.on_unload()
    assert game.scheduler.pending == []
    game.on_update(5000)
    assert game.dots == []
    game.ctx.speed_control.set_text("300")
    assert game.speed == 60


def test_draw_blits_dots_onto_screen(make_game):
    game = make_game(options={"x_placement": "absolute"}, hud_height=40)
    game.dots[:] = [Dot(20, 200, 300)]
    game.tick()
    screen = game.ctx.screen
    screen.fill((0, 0, 0))
    game.on_draw(screen)
    # board is 40px below the top of the window; the dot moved 1px
    assert tuple(screen.get_at((200, 341)))[:3] == (255, 255, 255)
    assert tuple(screen.get_at((200, 341 - 20 - 5)))[:3] == game.options.board_color
