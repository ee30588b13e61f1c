"""
Display Module
==============

Output surfaces for rendered frames.

All displays implement:
    - measure(grid) -> ((block_w, block_h), (viewport_w, viewport_h))
    - show(frame, scale)
    - poll() -> DisplayEvents
    - close()

Components:
    - CanvasDisplay: Off-screen OpenCV canvas
    - WindowDisplay: cv2.imshow window
    - TerminalDisplay: ANSI text output
"""

from typing import Protocol, Tuple

from asciicam.display.canvas import CanvasDisplay, DisplayEvents, WindowDisplay
from asciicam.display.terminal import TerminalDisplay
from asciicam.models.frame import AsciiFrame, GridSize


class Display(Protocol):
    """Protocol for output surfaces."""

    def measure(self, grid: GridSize) -> Tuple[Tuple[int, int], Tuple[int, int]]:
        ...

    def show(self, frame: AsciiFrame, scale: float) -> None:
        ...

    def poll(self) -> DisplayEvents:
        ...

    def close(self) -> None:
        ...


__all__ = [
    "Display",
    "DisplayEvents",
    "CanvasDisplay",
    "WindowDisplay",
    "TerminalDisplay",
]
