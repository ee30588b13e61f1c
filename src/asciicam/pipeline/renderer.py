"""
ASCII Renderer
==============

Maps an RGBA PixelBuffer onto a character ramp.

Per pixel:
    v   = 0.299*R + 0.587*G + 0.114*B        (ITU-R BT.601)
    v   = 255 - v                             (if inverted)
    idx = round(v / 255 * (n - 1)), clamped   (nearest density step)

Rounding is half-up (2.5 -> 3), not numpy's half-to-even, so midpoint
luminances step to the denser character consistently.
"""

import logging
from typing import Union

import numpy as np

from asciicam.models.frame import AsciiFrame, PixelBuffer


logger = logging.getLogger(__name__)


Number = Union[float, np.ndarray]

LUMA_R = 0.299
LUMA_G = 0.587
LUMA_B = 0.114


def luminance(r: Number, g: Number, b: Number) -> Number:
    """Perceptual luminance (BT.601) of RGB channels in 0-255."""
    return LUMA_R * r + LUMA_G * g + LUMA_B * b


def ramp_indices(values: Number, ramp_length: int, invert: bool = False) -> np.ndarray:
    """
    Quantize luminance values into ramp indices.

    Args:
        values: Luminance scalar or array, 0-255
        ramp_length: Number of characters in the ramp (>= 1)
        invert: Use 255 - v instead of v

    Returns:
        Integer array of indices in [0, ramp_length - 1]
    """
    v = np.asarray(values, dtype=np.float64)
    if invert:
        v = 255.0 - v
    top = ramp_length - 1
    idx = np.floor((v / 255.0) * top + 0.5)
    return np.clip(idx, 0, top).astype(np.intp)


def render(buffer: PixelBuffer, ramp: str, invert: bool = False) -> AsciiFrame:
    """
    Render a PixelBuffer as character art.

    The ramp must be non-empty; callers validate it (see RenderControls).

    Args:
        buffer: RGBA samples
        ramp: Characters from least to most dense
        invert: Invert luminance before lookup

    Returns:
        AsciiFrame with buffer.height lines of buffer.width characters
    """
    rgb = buffer.data[..., :3].astype(np.float64)
    v = luminance(rgb[..., 0], rgb[..., 1], rgb[..., 2])
    indices = ramp_indices(v, len(ramp), invert)

    glyphs = np.array(list(ramp), dtype=object)
    lines = tuple("".join(row) for row in glyphs[indices])

    return AsciiFrame(lines=lines, width=buffer.width, height=buffer.height)


class AsciiRenderer:
    """
    Stateful wrapper around render() that keeps counters for metrics.

    Example:
        renderer = AsciiRenderer()
        frame = renderer.render(buffer, " .:-=+*#%@", invert=False)
        print(frame.text)
    """

    def __init__(self) -> None:
        self._frames_rendered: int = 0
        self._last_ramp: str = ""

    @property
    def frames_rendered(self) -> int:
        return self._frames_rendered

    def render(self, buffer: PixelBuffer, ramp: str, invert: bool = False) -> AsciiFrame:
        if ramp != self._last_ramp:
            logger.info(f"Ramp changed to {ramp!r} ({len(ramp)} levels)")
            self._last_ramp = ramp
        frame = render(buffer, ramp, invert)
        self._frames_rendered += 1
        return frame

    def reset(self) -> None:
        self._frames_rendered = 0
        self._last_ramp = ""
