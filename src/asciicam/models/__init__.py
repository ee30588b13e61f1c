"""
Data Models
===========

Typed data passed through the AsciiCam pipeline.

Models:
    Frames:
        - GridSize: Target sampling grid
        - PixelBuffer: RGBA samples of one frame
        - AsciiFrame: Rendered character lines

    Fit:
        - FitTransform: Uniform display shrink in (0, 1]
        - FitState: Fit cache carried between ticks

    Controls:
        - RenderControls: Columns, density, ramp, invert
        - CHARSETS: Named ramp presets
"""

from asciicam.models.frame import AsciiFrame, GridSize, PixelBuffer
from asciicam.models.fit import FitState, FitTransform
from asciicam.models.controls import CHARSETS, RenderControls, format_density, resolve_ramp

__all__ = [
    # Frames
    "GridSize",
    "PixelBuffer",
    "AsciiFrame",
    # Fit
    "FitTransform",
    "FitState",
    # Controls
    "RenderControls",
    "CHARSETS",
    "resolve_ramp",
    "format_density",
]
