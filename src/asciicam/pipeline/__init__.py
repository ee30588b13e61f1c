"""
Pipeline Module
===============

Per-frame conversion: sample -> render -> fit.

Components:
    - FrameSampler: Source frame -> PixelBuffer (aspect-corrected grid)
    - AsciiRenderer: PixelBuffer -> AsciiFrame (BT.601 luminance ramp)
    - ViewportFitter: Block/viewport geometry -> fit scale
    - run_tick: One full pass, owning no hidden state
"""

from asciicam.pipeline.sampler import FrameSampler, clamp_columns, compute_grid_size, normalize_density
from asciicam.pipeline.renderer import AsciiRenderer, luminance, ramp_indices, render
from asciicam.pipeline.fitter import ViewportFitter, fit
from asciicam.pipeline.tick import TickResult, run_tick

__all__ = [
    "FrameSampler",
    "clamp_columns",
    "compute_grid_size",
    "normalize_density",
    "AsciiRenderer",
    "luminance",
    "ramp_indices",
    "render",
    "ViewportFitter",
    "fit",
    "TickResult",
    "run_tick",
]
