"""
Fit Models
==========

Display transform and the fit cache owned by the tick driver.
"""

from dataclasses import dataclass
from typing import Optional

from asciicam.models.frame import GridSize


@dataclass(frozen=True, slots=True)
class FitTransform:
    """
    Uniform shrink applied to the rendered block for display.

    Attributes:
        scale: Factor in (0, 1]; 1 means natural size
    """

    scale: float = 1.0

    def __post_init__(self) -> None:
        if not 0 < self.scale <= 1:
            raise ValueError(f"scale must be in (0, 1], got {self.scale}")


@dataclass(frozen=True, slots=True)
class FitState:
    """
    Fit cache carried from one tick to the next.

    The transform is recomputed only when the grid differs from
    `grid`. `grid` is None until a fit has succeeded once.

    Attributes:
        grid: Grid size the current transform was computed for
        transform: Last successfully computed transform
    """

    grid: Optional[GridSize] = None
    transform: FitTransform = FitTransform()

    @property
    def scale(self) -> float:
        return self.transform.scale

    def __repr__(self) -> str:
        return f"FitState(grid={self.grid}, scale={self.transform.scale:.3f})"
