"""
Viewport Fitter
===============

Computes the uniform scale that fits the rendered block into the
viewport without clipping or scrolling.

    scale = min(viewport_w / block_w, viewport_h / block_h, 1)

The block is only ever shrunk, never enlarged. Measuring layout is
comparatively expensive, so the scale is recomputed only when the grid
size changes (luminance content changes every frame, geometry rarely).
"""

import logging
from typing import Callable, Optional, Tuple

from asciicam.models.fit import FitState, FitTransform
from asciicam.models.frame import GridSize


logger = logging.getLogger(__name__)


Size = Tuple[float, float]

# Maps a grid to ((block_w, block_h), (viewport_w, viewport_h)) in one unit
Measure = Callable[[GridSize], Tuple[Size, Size]]


def fit(
    block_width: float,
    block_height: float,
    viewport_width: float,
    viewport_height: float,
) -> Optional[float]:
    """
    Compute the fit scale for a block inside a viewport.

    Args:
        block_width: Natural width of the rendered block
        block_height: Natural height of the rendered block
        viewport_width: Available width
        viewport_height: Available height

    Returns:
        Scale in (0, 1], or None if any dimension is zero (not laid
        out or not rendered yet).
    """
    if min(block_width, block_height, viewport_width, viewport_height) <= 0:
        return None
    return min(viewport_width / block_width, viewport_height / block_height, 1.0)


class ViewportFitter:
    """
    Grid-size-keyed fit cache driver.

    The fitter itself holds no per-tick state; the FitState is passed
    in and a new one returned, so the tick driver owns it.

    Example:
        fitter = ViewportFitter()
        state = FitState()
        state = fitter.update(state, GridSize(120, 45), display.measure)
        display.show(frame, state.scale)
    """

    def __init__(self) -> None:
        self._fit_count: int = 0

    @property
    def fit_count(self) -> int:
        """Number of successful fit computations."""
        return self._fit_count

    def update(self, state: FitState, grid: GridSize, measure: Measure) -> FitState:
        """
        Refit if the grid changed since the cached fit.

        A not-ready measurement keeps the previous transform and cache,
        so the next tick retries.

        Args:
            state: Fit state from the previous tick
            grid: Grid size rendered this tick
            measure: Callable mapping a grid to block and viewport sizes

        Returns:
            Updated FitState (the same object when nothing changed)
        """
        if state.grid == grid:
            return state
        return self._compute(state, grid, measure)

    def refit(self, state: FitState, measure: Measure) -> FitState:
        """
        Recompute unconditionally for the cached grid.

        Used when the viewport itself is resized.
        """
        if state.grid is None:
            return state
        return self._compute(state, state.grid, measure)

    def _compute(self, state: FitState, grid: GridSize, measure: Measure) -> FitState:
        (block_w, block_h), (view_w, view_h) = measure(grid)
        scale = fit(block_w, block_h, view_w, view_h)

        if scale is None:
            logger.debug(
                f"Fit skipped for grid {grid}: block={block_w}x{block_h}, "
                f"viewport={view_w}x{view_h}"
            )
            return state

        self._fit_count += 1
        logger.debug(f"Fit grid {grid} into {view_w}x{view_h}: scale={scale:.3f}")
        return FitState(grid=grid, transform=FitTransform(scale=scale))
