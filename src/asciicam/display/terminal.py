"""
Terminal Display
================

Writes AsciiFrames verbatim to a text stream.

Units are character cells: the block is grid.width x grid.height cells
and the viewport is the terminal size. Terminals cannot shrink glyphs,
so the fit scale is only reported in the status line; a scale below 1
means the frame will wrap or scroll.
"""

import logging
import shutil
import sys
from typing import Optional, TextIO, Tuple

from asciicam.display.canvas import DisplayEvents
from asciicam.models.frame import AsciiFrame, GridSize


logger = logging.getLogger(__name__)


CURSOR_HOME = "\x1b[H"
CLEAR_SCREEN = "\x1b[2J"


class TerminalDisplay:
    """
    ANSI terminal display.

    Example:
        display = TerminalDisplay()
        display.show(frame, scale=1.0)
    """

    def __init__(
        self,
        stream: Optional[TextIO] = None,
        status_line: bool = True,
        size: Optional[Tuple[int, int]] = None,
    ) -> None:
        """
        Initialize terminal display.

        Args:
            stream: Output stream (default: sys.stdout)
            status_line: Append a one-line status under the frame
            size: Fixed (columns, lines) viewport; None queries the terminal
        """
        self.stream = stream if stream is not None else sys.stdout
        self.status_line = status_line
        self._fixed_size = size
        self._last_size: Optional[Tuple[int, int]] = None
        self._cleared = False
        self._warned_overflow = False

    @property
    def viewport(self) -> Tuple[int, int]:
        if self._fixed_size is not None:
            return self._fixed_size
        size = shutil.get_terminal_size(fallback=(80, 24))
        lines = size.lines - 1 if self.status_line else size.lines
        return (size.columns, max(0, lines))

    def measure(self, grid: GridSize) -> Tuple[Tuple[int, int], Tuple[int, int]]:
        """Block and viewport sizes in character cells."""
        return (grid.width, grid.height), self.viewport

    def show(self, frame: AsciiFrame, scale: float) -> None:
        if scale < 1 and not self._warned_overflow:
            logger.warning(
                f"Frame {frame.width}x{frame.height} exceeds terminal "
                f"{self.viewport[0]}x{self.viewport[1]}; lower columns or density"
            )
            self._warned_overflow = True

        out = []
        if not self._cleared:
            out.append(CLEAR_SCREEN)
            self._cleared = True
        out.append(CURSOR_HOME)
        out.append(frame.text)
        if self.status_line:
            out.append(f"{frame.width}x{frame.height} fit={scale:.2f}")
        self.stream.write("".join(out))
        self.stream.flush()

    def poll(self) -> DisplayEvents:
        size = self.viewport
        resized = self._last_size is not None and size != self._last_size
        self._last_size = size
        if resized:
            self._warned_overflow = False
        return DisplayEvents(resized=resized)

    def close(self) -> None:
        self.stream.write("\n")
        self.stream.flush()
