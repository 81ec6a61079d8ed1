"""
Per-frame context and shared input state.

Input handlers only write to ``InputState``; the animation driver reads it
once at the start of each tick. Last write wins for every field.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

# Pointer position used when no pointer is over the surface.
OFF_CANVAS: Tuple[float, float] = (-9999.0, -9999.0)


@dataclass(frozen=True)
class FrameContext:
    """Read-only values shared by every entity during one tick."""
    width: int
    height: int
    pointer: Tuple[float, float] = OFF_CANVAS
    time: float = 0.0
    global_hue: float = 0.0


@dataclass
class InputState:
    """Last-known pointer plus pending discrete events."""
    pointer: Tuple[float, float] = OFF_CANVAS
    pending_trigger: Optional[Tuple[float, float]] = None
    pending_resize: Optional[Tuple[int, int]] = None

    def move_pointer(self, x: float, y: float):
        self.pointer = (float(x), float(y))

    def leave(self):
        self.pointer = OFF_CANVAS

    def trigger(self, x: float, y: float):
        """Record a click/tap; the pointer jumps to the trigger point."""
        self.pointer = (float(x), float(y))
        self.pending_trigger = (float(x), float(y))

    def resize(self, width: int, height: int):
        self.pending_resize = (int(width), int(height))

    def take_trigger(self) -> Optional[Tuple[float, float]]:
        trig, self.pending_trigger = self.pending_trigger, None
        return trig

    def take_resize(self) -> Optional[Tuple[int, int]]:
        size, self.pending_resize = self.pending_resize, None
        return size
