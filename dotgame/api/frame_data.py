from __future__ import annotations
from dataclasses import dataclass


@dataclass
class PointerEvent:
    x: float
    y: float
    # "mouse" or "touch"
    source: str = "mouse"
    default_prevented: bool = False

    def prevent_default(self) -> None:
        self.default_prevented = True
