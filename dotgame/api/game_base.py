from __future__ import annotations

from typing import TYPE_CHECKING

import pygame

from .frame_data import PointerEvent

if TYPE_CHECKING:
    from dotgame.app.context import Context


class Game:
    """
    Base interface games should implement.
    """

    def on_load(self, ctx: Context, manifest: dict) -> None:
        """Called once after the game module loads."""
        ...

    def on_pointer(self, pointer: PointerEvent) -> None:
        """Called synchronously for every pointer-down, in board-local coords."""
        ...

    def on_update(self, dt_ms: float) -> None:
        """Called every frame; dt_ms is milliseconds elapsed."""
        ...

    def on_draw(self, surface: pygame.Surface) -> None:
        """Draw your game to the provided surface."""
        ...

    def on_event(self, event: pygame.event.Event) -> None:
        """Optional: Handle pygame events (keyboard, resize, etc.)."""
        ...

    def on_unload(self) -> None:
        """Optional: cleanup when the game exits."""
        ...
