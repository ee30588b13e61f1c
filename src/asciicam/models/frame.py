"""
Frame Data Models
=================

Typed containers passed between pipeline stages.

    SourceFrame (camera) -> PixelBuffer -> AsciiFrame -> display

Design Rules:
    - Created fresh each tick; no persistent identity
    - Immutable (frozen) to prevent accidental modification
    - Constructors validate shape invariants and fail fast
"""

from dataclasses import dataclass
from typing import Tuple

import numpy as np


@dataclass(frozen=True, slots=True)
class GridSize:
    """
    Target sampling grid, in samples (one sample per output character).

    Attributes:
        width: Columns of the grid
        height: Rows of the grid
    """

    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"grid dimensions must be positive: {self.width}x{self.height}")

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"


@dataclass(frozen=True, slots=True)
class PixelBuffer:
    """
    RGBA samples of one frame, row-major, top-to-bottom.

    Attributes:
        data: uint8 array of shape (height, width, 4), channels R, G, B, A
    """

    data: np.ndarray

    def __post_init__(self) -> None:
        """Validate invariants."""
        if self.data.ndim != 3 or self.data.shape[2] != 4:
            raise ValueError(f"PixelBuffer expects (H, W, 4) data, got {self.data.shape}")
        if self.data.dtype != np.uint8:
            raise ValueError(f"PixelBuffer expects uint8 data, got {self.data.dtype}")

    @property
    def width(self) -> int:
        return int(self.data.shape[1])

    @property
    def height(self) -> int:
        return int(self.data.shape[0])

    @property
    def grid(self) -> GridSize:
        return GridSize(self.width, self.height)

    def __repr__(self) -> str:
        """Compact repr that doesn't dump the pixels."""
        return f"PixelBuffer({self.width}x{self.height})"


@dataclass(frozen=True, slots=True)
class AsciiFrame:
    """
    Rendered character art for one frame.

    Invariant: one line per buffer row, each line exactly `width`
    characters long.

    Attributes:
        lines: Rendered rows, top to bottom, without separators
        width: Characters per line
        height: Number of lines
    """

    lines: Tuple[str, ...]
    width: int
    height: int

    def __post_init__(self) -> None:
        if len(self.lines) != self.height:
            raise ValueError(
                f"AsciiFrame has {len(self.lines)} lines, expected {self.height}"
            )
        for row, line in enumerate(self.lines):
            if len(line) != self.width:
                raise ValueError(
                    f"AsciiFrame line {row} has {len(line)} characters, expected {self.width}"
                )

    @property
    def text(self) -> str:
        """Full text block, one line separator per row."""
        return "".join(line + "\n" for line in self.lines)

    def __repr__(self) -> str:
        return f"AsciiFrame({self.width}x{self.height})"
