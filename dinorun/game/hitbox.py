# dinorun/game/hitbox.py
from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class Box:
    """Axis-aligned box in float screen coordinates (top-left + size)."""
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def inset(self, left: float, top: float, right: float | None = None, bottom: float | None = None) -> "Box":
        """Shrink the box; right/bottom default to left/top."""
        if right is None:
            right = left
        if bottom is None:
            bottom = top
        return Box(self.x + left, self.y + top, self.width - left - right, self.height - top - bottom)


def boxes_overlap(a: Box, b: Box) -> bool:
    """Open-interval AABB test: touching edges do not count as a hit."""
    return (a.x < b.x + b.width and
            a.x + a.width > b.x and
            a.y < b.y + b.height and
            a.y + a.height > b.y)


def first_hit(box: Box, others):
    """Return the first item of `others` whose .hitbox() overlaps `box`, else None."""
    for other in others:
        if boxes_overlap(box, other.hitbox()):
            return other
    return None
