"""
Frame Sampler
=============

Samples a source frame into a small RGBA grid.

Grid sizing:
    targetW = max(20, floor(columns * density)), capped at MAX_GRID_WIDTH
    targetH = max(10, floor(targetW * (srcH / srcW) / char_aspect))

`char_aspect` compensates for glyphs being taller than wide, so the
rendered text is not vertically stretched. The actual resampling is
delegated to the source's draw() (OpenCV INTER_AREA).
"""

import logging
import math
from typing import Any, Optional

import numpy as np

from asciicam.models.frame import GridSize, PixelBuffer
from asciicam.stream.source import SourceFrame


logger = logging.getLogger(__name__)


MIN_COLUMNS = 40
MAX_COLUMNS = 240
DEFAULT_COLUMNS = 120
DEFAULT_DENSITY = 1.0
MIN_GRID_WIDTH = 20
MIN_GRID_HEIGHT = 10
MAX_GRID_WIDTH = 480
DEFAULT_CHAR_ASPECT = 2.0


def _as_finite(value: Any) -> Optional[float]:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def clamp_columns(value: Any) -> float:
    """
    Clamp a column count into [MIN_COLUMNS, MAX_COLUMNS].

    Missing, zero or non-numeric values fall back to DEFAULT_COLUMNS.
    """
    number = _as_finite(value)
    if not number:
        return float(DEFAULT_COLUMNS)
    return float(max(MIN_COLUMNS, min(MAX_COLUMNS, number)))


def normalize_density(value: Any) -> float:
    """Return a positive density factor; anything else becomes DEFAULT_DENSITY."""
    number = _as_finite(value)
    if number is None or number <= 0:
        return DEFAULT_DENSITY
    return number


def compute_grid_size(
    source_width: int,
    source_height: int,
    columns: Any = DEFAULT_COLUMNS,
    density: Any = DEFAULT_DENSITY,
    char_aspect: float = DEFAULT_CHAR_ASPECT,
) -> GridSize:
    """
    Compute the sampling grid for a source frame.

    Args:
        source_width: Source width in pixels (> 0)
        source_height: Source height in pixels (> 0)
        columns: Base column count (clamped)
        density: Column multiplier (defaulted when not positive)
        char_aspect: Glyph height/width ratio

    Returns:
        GridSize of the target grid
    """
    if source_width <= 0 or source_height <= 0:
        raise ValueError(f"source has no area: {source_width}x{source_height}")
    if char_aspect <= 0:
        char_aspect = DEFAULT_CHAR_ASPECT

    cols = clamp_columns(columns)
    factor = normalize_density(density)

    target_w = max(MIN_GRID_WIDTH, math.floor(cols * factor))
    target_w = min(MAX_GRID_WIDTH, target_w)

    ratio = source_height / source_width
    target_h = max(MIN_GRID_HEIGHT, math.floor(target_w * ratio / char_aspect))

    return GridSize(width=target_w, height=target_h)


class FrameSampler:
    """
    Samples frames into PixelBuffers.

    Owns the sampling surface, which is resized to the current grid
    before each draw.

    Example:
        sampler = FrameSampler()
        buffer = sampler.sample(source, columns=120, density=1.0)
        if buffer is None:
            pass  # source not streaming yet
    """

    def __init__(self) -> None:
        self._surface: np.ndarray = np.zeros((0, 0, 4), dtype=np.uint8)
        self._last_grid: Optional[GridSize] = None
        self._skipped: int = 0

    @property
    def last_grid(self) -> Optional[GridSize]:
        """Grid of the most recent successful sample."""
        return self._last_grid

    @property
    def skipped_count(self) -> int:
        """Number of samples skipped because the source was not ready."""
        return self._skipped

    def sample(
        self,
        source: SourceFrame,
        columns: Any = DEFAULT_COLUMNS,
        density: Any = DEFAULT_DENSITY,
        char_aspect: float = DEFAULT_CHAR_ASPECT,
    ) -> Optional[PixelBuffer]:
        """
        Sample the source's current frame.

        Args:
            source: Frame source, borrowed for this call
            columns: Base column count
            density: Column multiplier
            char_aspect: Glyph height/width ratio

        Returns:
            PixelBuffer of exactly grid.width x grid.height samples,
            or None if the source has zero width or height.
        """
        source_w, source_h = source.width, source.height
        if not source_w or not source_h:
            self._skipped += 1
            logger.debug("Source not ready, skipping sample")
            return None

        grid = compute_grid_size(source_w, source_h, columns, density, char_aspect)

        if self._surface.shape[:2] != (grid.height, grid.width):
            self._surface = np.zeros((grid.height, grid.width, 4), dtype=np.uint8)
            if grid != self._last_grid:
                logger.debug(f"Sampling surface resized to {grid} (source {source_w}x{source_h})")

        drawn = source.draw(grid.width, grid.height)
        if drawn.shape != self._surface.shape:
            raise ValueError(
                f"Source drew {drawn.shape}, expected {self._surface.shape}"
            )
        np.copyto(self._surface, drawn)

        self._last_grid = grid
        return PixelBuffer(self._surface.copy())
