"""
Canvas Display
==============

Draws AsciiFrames onto a fixed-size OpenCV canvas.

Glyphs are rasterized once per character into equal-size cells (a
monospace atlas), tiled into the block at natural size, then shrunk by
the fit scale and centered in the viewport. This mirrors a CSS
`transform: scale(s)` on a <pre> element.

Block elements such as the shade ramp " ░▒▓█" are drawn as coverage
tiles, since Hershey fonts have no glyphs for them.

WindowDisplay adds a cv2.imshow window on top of the canvas.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

import cv2
import numpy as np

from asciicam.models.frame import AsciiFrame, GridSize


logger = logging.getLogger(__name__)


FONT = cv2.FONT_HERSHEY_SIMPLEX

# Cell width probe; the widest common glyph
_PROBE = "W"

# Hershey fonts only cover ASCII; block elements (U+2580-U+259F) are
# drawn as cell coverage tiles instead.
_SHADES = {"░": 64, "▒": 128, "▓": 192}

# Quadrant characters: (upper-left, upper-right, lower-left, lower-right)
_QUADRANTS = {
    "▖": (0, 0, 1, 0),
    "▗": (0, 0, 0, 1),
    "▘": (1, 0, 0, 0),
    "▙": (1, 0, 1, 1),
    "▚": (1, 0, 0, 1),
    "▛": (1, 1, 1, 0),
    "▜": (1, 1, 0, 1),
    "▝": (0, 1, 0, 0),
    "▞": (0, 1, 1, 0),
    "▟": (0, 1, 1, 1),
}


def block_element(char: str, cell_w: int, cell_h: int) -> Optional[np.ndarray]:
    """
    Coverage tile for a Unicode block element.

    Args:
        char: Single character
        cell_w: Cell width in pixels
        cell_h: Cell height in pixels

    Returns:
        Coverage mask (cell_h, cell_w), uint8, or None if `char` is not
        a block element
    """
    code = ord(char)
    if not 0x2580 <= code <= 0x259F:
        return None

    tile = np.zeros((cell_h, cell_w), dtype=np.uint8)
    if char in _SHADES:
        tile[:] = _SHADES[char]
    elif char in _QUADRANTS:
        half_w, half_h = cell_w // 2, cell_h // 2
        ul, ur, ll, lr = _QUADRANTS[char]
        tile[:half_h, :half_w] = 255 * ul
        tile[:half_h, half_w:] = 255 * ur
        tile[half_h:, :half_w] = 255 * ll
        tile[half_h:, half_w:] = 255 * lr
    elif char == "▀":
        tile[:cell_h // 2] = 255
    elif char == "▐":
        tile[:, cell_w // 2:] = 255
    elif char == "▔":
        tile[:max(1, cell_h // 8)] = 255
    elif char == "▕":
        tile[:, cell_w - max(1, cell_w // 8):] = 255
    elif code <= 0x2588:
        # Lower eighths, U+2581 (1/8) to U+2588 (full block)
        eighths = code - 0x2580
        tile[cell_h - round(cell_h * eighths / 8):] = 255
    else:
        # Left eighths, U+2589 (7/8) to U+258F (1/8)
        eighths = 0x2590 - code
        tile[:, :round(cell_w * eighths / 8)] = 255
    return tile


@dataclass(frozen=True, slots=True)
class DisplayEvents:
    """
    Display state changes observed since the last poll.

    Attributes:
        resized: Viewport size changed
        closed: User closed the display (window closed, q or ESC)
    """

    resized: bool = False
    closed: bool = False


class CanvasDisplay:
    """
    Off-screen OpenCV display.

    Attributes:
        viewport: (width, height) of the canvas in pixels
        cell: (width, height) of one glyph cell in pixels

    Example:
        display = CanvasDisplay(width=1280, height=720)
        display.show(frame, scale=0.8)
        image = display.canvas
    """

    def __init__(
        self,
        width: int = 1280,
        height: int = 720,
        font_scale: float = 0.4,
        thickness: int = 1,
        background: Tuple[int, int, int] = (0, 0, 0),
        foreground: Tuple[int, int, int] = (0, 255, 0),
    ) -> None:
        """
        Initialize canvas display.

        Args:
            width: Viewport width in pixels
            height: Viewport height in pixels
            font_scale: Hershey font scale for glyph cells
            thickness: Glyph stroke thickness
            background: Background color (BGR)
            foreground: Glyph color (BGR)
        """
        self.font_scale = font_scale
        self.thickness = thickness
        self.background = np.array(background, dtype=np.float32)
        self.foreground = np.array(foreground, dtype=np.float32)

        (probe_w, probe_h), baseline = cv2.getTextSize(_PROBE, FONT, font_scale, thickness)
        self.cell: Tuple[int, int] = (probe_w + 1, probe_h + baseline + 2)
        self._baseline = baseline

        self._glyphs: Dict[str, np.ndarray] = {}
        self._canvas = np.zeros((height, width, 3), dtype=np.uint8)
        self._canvas[:] = background
        self._frames_shown: int = 0

    @property
    def viewport(self) -> Tuple[int, int]:
        return (int(self._canvas.shape[1]), int(self._canvas.shape[0]))

    @property
    def canvas(self) -> np.ndarray:
        """Current canvas image (BGR)."""
        return self._canvas

    @property
    def frames_shown(self) -> int:
        return self._frames_shown

    def resize(self, width: int, height: int) -> None:
        """Resize the viewport. Zero sizes are allowed (not laid out)."""
        self._canvas = np.zeros((max(0, height), max(0, width), 3), dtype=np.uint8)
        self._canvas[:] = self.background.astype(np.uint8)

    def block_size(self, grid: GridSize) -> Tuple[int, int]:
        """Natural pixel size of a rendered block for the grid."""
        cell_w, cell_h = self.cell
        return (grid.width * cell_w, grid.height * cell_h)

    def measure(self, grid: GridSize) -> Tuple[Tuple[int, int], Tuple[int, int]]:
        """Block and viewport sizes in pixels, for the fitter."""
        return self.block_size(grid), self.viewport

    def _glyph(self, char: str) -> np.ndarray:
        tile = self._glyphs.get(char)
        if tile is None:
            cell_w, cell_h = self.cell
            tile = block_element(char, cell_w, cell_h)
            if tile is not None:
                self._glyphs[char] = tile
                return tile

            tile = np.zeros((cell_h, cell_w), dtype=np.uint8)
            if not char.isascii():
                logger.warning(f"No Hershey glyph for {char!r}, drawing it blank")
            elif not char.isspace():
                cv2.putText(
                    tile, char, (0, cell_h - self._baseline - 1),
                    FONT, self.font_scale, 255, self.thickness, cv2.LINE_AA,
                )
            self._glyphs[char] = tile
        return tile

    def rasterize(self, frame: AsciiFrame) -> np.ndarray:
        """
        Rasterize a frame at natural size.

        Returns:
            Coverage mask as np.ndarray (H, W), uint8, 255 = glyph ink
        """
        rows = [np.hstack([self._glyph(c) for c in line]) for line in frame.lines]
        return np.vstack(rows)

    def compose(self, frame: AsciiFrame, scale: float) -> np.ndarray:
        """Draw the frame, scaled and centered, onto the canvas."""
        view_w, view_h = self.viewport
        self._canvas[:] = self.background.astype(np.uint8)
        if view_w == 0 or view_h == 0:
            return self._canvas

        mask = self.rasterize(frame)
        block_h, block_w = mask.shape
        out_w = max(1, min(view_w, round(block_w * scale)))
        out_h = max(1, min(view_h, round(block_h * scale)))
        if (out_w, out_h) != (block_w, block_h):
            mask = cv2.resize(mask, (out_w, out_h), interpolation=cv2.INTER_AREA)

        alpha = (mask.astype(np.float32) / 255.0)[..., None]
        tile = self.background * (1.0 - alpha) + self.foreground * alpha

        x0 = (view_w - out_w) // 2
        y0 = (view_h - out_h) // 2
        self._canvas[y0:y0 + out_h, x0:x0 + out_w] = tile.astype(np.uint8)
        return self._canvas

    def show(self, frame: AsciiFrame, scale: float) -> None:
        self.compose(frame, scale)
        self._frames_shown += 1

    def poll(self) -> DisplayEvents:
        return DisplayEvents()

    def close(self) -> None:
        pass


class WindowDisplay(CanvasDisplay):
    """
    On-screen OpenCV window.

    Polls the window each tick: a size change is reported as `resized`,
    closing the window or pressing q/ESC as `closed`.
    """

    def __init__(self, window_name: str = "AsciiCam", **kwargs) -> None:
        super().__init__(**kwargs)
        self.window_name = window_name
        self._opened = False

    def open(self) -> None:
        if self._opened:
            return
        view_w, view_h = self.viewport
        cv2.namedWindow(self.window_name, cv2.WINDOW_NORMAL)
        cv2.resizeWindow(self.window_name, view_w, view_h)
        self._opened = True
        logger.info(f"WindowDisplay opened '{self.window_name}' ({view_w}x{view_h})")

    def show(self, frame: AsciiFrame, scale: float) -> None:
        self.open()
        super().show(frame, scale)
        cv2.imshow(self.window_name, self._canvas)

    def poll(self) -> DisplayEvents:
        if not self._opened:
            return DisplayEvents()

        key = cv2.waitKey(1) & 0xFF
        if key in (ord("q"), 27):
            return DisplayEvents(closed=True)
        if cv2.getWindowProperty(self.window_name, cv2.WND_PROP_VISIBLE) < 1:
            return DisplayEvents(closed=True)

        _, _, win_w, win_h = cv2.getWindowImageRect(self.window_name)
        if (win_w, win_h) != self.viewport and win_w >= 0 and win_h >= 0:
            logger.debug(f"Window resized to {win_w}x{win_h}")
            self.resize(win_w, win_h)
            return DisplayEvents(resized=True)

        return DisplayEvents()

    def close(self) -> None:
        if self._opened:
            cv2.destroyWindow(self.window_name)
            cv2.waitKey(1)
            self._opened = False
            logger.info(f"WindowDisplay closed '{self.window_name}'")
