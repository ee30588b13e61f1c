"""
AsciiCam Application
====================

Wires a frame source, render controls, the pipeline, a display and the
frame clock together.

    start():  acquire camera -> schedule ticks
    tick():   poll display -> sample -> render -> (grid change) fit -> show
    stop():   cancel ticks -> release camera

The app owns the fit state and swaps it each tick; controls are
replaced wholesale (never mutated) so a tick always sees a consistent
snapshot.
"""

import logging
import time
from typing import Optional

from asciicam.clock import FrameClock, TickHandle
from asciicam.display import Display
from asciicam.models.controls import RenderControls
from asciicam.models.fit import FitState
from asciicam.models.frame import AsciiFrame, GridSize
from asciicam.pipeline import AsciiRenderer, FrameSampler, ViewportFitter, run_tick
from asciicam.stream.source import CameraSource, SourceError, SourceFrame


logger = logging.getLogger(__name__)


class AsciiCamApp:
    """
    Live ASCII camera.

    Attributes:
        source: Frame source
        display: Output surface
        clock: Frame clock
        controls: Current render controls snapshot

    Example:
        app = AsciiCamApp(CameraSource(0), WindowDisplay(), FrameClock(30))
        if app.start():
            await app.wait()
    """

    def __init__(
        self,
        source: SourceFrame,
        display: Display,
        clock: FrameClock,
        controls: Optional[RenderControls] = None,
        log_every_n_frames: int = 300,
    ) -> None:
        self.source = source
        self.display = display
        self.clock = clock
        self._controls = controls or RenderControls()
        self.log_every_n_frames = log_every_n_frames

        self.sampler = FrameSampler()
        self.renderer = AsciiRenderer()
        self.fitter = ViewportFitter()

        self._fit_state = FitState()
        self._handle: Optional[TickHandle] = None
        self._current_frame: Optional[AsciiFrame] = None
        self._current_grid: Optional[GridSize] = None
        self._started_at: float = 0.0
        self._skipped_ticks: int = 0
        self._last_error: Optional[str] = None

    # -------------------------------------------------------------------------
    # Controls
    # -------------------------------------------------------------------------

    @property
    def controls(self) -> RenderControls:
        return self._controls

    def set_controls(self, controls: RenderControls) -> None:
        """Replace the render controls; takes effect on the next tick."""
        self._controls = controls
        logger.info(
            f"Controls updated: columns={controls.columns}, "
            f"density={controls.density_label}, charset={controls.charset!r}, "
            f"invert={controls.invert}"
        )

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    @property
    def running(self) -> bool:
        return self._handle is not None and not self._handle.cancelled

    def start(self) -> bool:
        """
        Acquire the source and start ticking.

        Must be called from within a running event loop.

        Returns:
            True if running after the call, False if the camera
            could not be opened.
        """
        if self.running:
            return True

        if isinstance(self.source, CameraSource):
            try:
                self.source.open()
            except SourceError as e:
                self._last_error = str(e)
                logger.error(f"Could not start camera: {e}")
                return False

        self._last_error = None
        self._started_at = time.time()
        self._handle = self.clock.schedule(self.tick)
        logger.info("AsciiCamApp started")
        return True

    def stop(self) -> None:
        """Stop ticking and release the source. A running tick completes."""
        if self._handle is not None:
            self._handle.cancel()

        if isinstance(self.source, CameraSource):
            self.source.release()

        logger.info("AsciiCamApp stopped")

    async def wait(self) -> None:
        """Wait until the tick loop exits."""
        if self._handle is not None:
            await self._handle.wait()

    # -------------------------------------------------------------------------
    # Tick
    # -------------------------------------------------------------------------

    def tick(self) -> None:
        """Run one frame. Called by the frame clock."""
        events = self.display.poll()
        if events.closed:
            logger.info("Display closed")
            self.stop()
            return
        if events.resized:
            self._fit_state = self.fitter.refit(self._fit_state, self.display.measure)

        if isinstance(self.source, CameraSource):
            self.source.poll()

        result = run_tick(
            source=self.source,
            controls=self._controls,
            sampler=self.sampler,
            renderer=self.renderer,
            fitter=self.fitter,
            state=self._fit_state,
            measure=self.display.measure,
        )
        self._fit_state = result.state

        if result.frame is None:
            self._skipped_ticks += 1
            return

        self._current_frame = result.frame
        self._current_grid = result.grid
        self.display.show(result.frame, self._fit_state.scale)

        if result.refitted:
            logger.info(f"Grid {result.grid}: fit scale {self._fit_state.scale:.3f}")

        rendered = self.renderer.frames_rendered
        if rendered % self.log_every_n_frames == 0:
            logger.info(
                f"AsciiCam [frame {rendered}]: grid={result.grid}, "
                f"scale={self._fit_state.scale:.3f}, skipped={self._skipped_ticks}"
            )

    # -------------------------------------------------------------------------
    # Observability
    # -------------------------------------------------------------------------

    @property
    def current_frame(self) -> Optional[AsciiFrame]:
        return self._current_frame

    @property
    def fit_state(self) -> FitState:
        return self._fit_state

    def metrics(self) -> dict:
        """Counters and current geometry for observability."""
        grid = self._current_grid
        clock_metrics = self._handle.metrics() if self._handle else {
            "ticks": 0,
            "tick_errors": 0,
            "running": False,
        }
        return {
            "uptime_seconds": round(time.time() - self._started_at, 1) if self._started_at else 0.0,
            "frames_rendered": self.renderer.frames_rendered,
            "skipped_ticks": self._skipped_ticks,
            "fit_count": self.fitter.fit_count,
            "grid_width": grid.width if grid else None,
            "grid_height": grid.height if grid else None,
            "scale": round(self._fit_state.scale, 4),
            "last_error": self._last_error,
            **clock_metrics,
        }
