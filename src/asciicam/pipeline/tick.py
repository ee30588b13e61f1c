"""
Tick
====

One pass of the pipeline: sample -> render -> (on grid change) fit.

The tick is synchronous and never suspends. Everything it reads
(controls, source size) is read once at the start, and the fit cache
comes in as an argument and goes out in the result.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from asciicam.models.controls import RenderControls
from asciicam.models.fit import FitState
from asciicam.models.frame import AsciiFrame, GridSize
from asciicam.pipeline.fitter import Measure, ViewportFitter
from asciicam.pipeline.renderer import AsciiRenderer
from asciicam.pipeline.sampler import FrameSampler
from asciicam.stream.source import SourceFrame


logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TickResult:
    """
    Outcome of one tick.

    Attributes:
        frame: Rendered frame, or None if the source was not ready
        grid: Grid sampled this tick (None when skipped)
        state: Fit state to carry into the next tick
        refitted: Whether the fit transform was recomputed
    """

    frame: Optional[AsciiFrame]
    grid: Optional[GridSize]
    state: FitState
    refitted: bool = False

    @property
    def skipped(self) -> bool:
        return self.frame is None


def run_tick(
    source: SourceFrame,
    controls: RenderControls,
    sampler: FrameSampler,
    renderer: AsciiRenderer,
    fitter: ViewportFitter,
    state: FitState,
    measure: Measure,
) -> TickResult:
    """
    Run the pipeline once.

    Args:
        source: Frame source for this tick
        controls: Render controls snapshot
        sampler: Frame sampler
        renderer: ASCII renderer
        fitter: Viewport fitter
        state: Fit state from the previous tick
        measure: Display measurement callable, invoked only on refit

    Returns:
        TickResult; on a not-ready source, frame is None and state is
        passed through unchanged.
    """
    buffer = sampler.sample(
        source,
        columns=controls.columns,
        density=controls.density,
        char_aspect=controls.char_aspect,
    )
    if buffer is None:
        return TickResult(frame=None, grid=None, state=state)

    frame = renderer.render(buffer, controls.ramp, controls.invert)

    grid = buffer.grid
    new_state = fitter.update(state, grid, measure)

    return TickResult(
        frame=frame,
        grid=grid,
        state=new_state,
        refitted=new_state is not state,
    )
