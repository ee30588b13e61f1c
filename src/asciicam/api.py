"""
AsciiCam Control API
====================

FastAPI surface for the UI controls of a running AsciiCamApp.

Endpoints:
    GET  /          - Service information
    GET  /health    - Liveness probe
    GET  /metrics   - Tick counters, grid and fit scale
    GET  /controls  - Current render controls
    PUT  /controls  - Replace render controls (422 on empty charset)
    POST /start     - Acquire camera and start ticking
    POST /stop      - Stop ticking and release camera

Frames themselves are never served; this API only steers the pipeline.
"""

import logging

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from asciicam import __version__
from asciicam.app import AsciiCamApp
from asciicam.models.controls import CHARSETS, RenderControls


logger = logging.getLogger(__name__)


def create_api(cam: AsciiCamApp) -> FastAPI:
    """
    Build the control API for an app instance.

    Args:
        cam: Application to control

    Returns:
        FastAPI application
    """
    api = FastAPI(
        title="AsciiCam",
        description="Live camera to character art",
        version=__version__,
    )

    @api.get("/")
    async def root() -> JSONResponse:
        """Service information endpoint."""
        return JSONResponse({
            "service": "AsciiCam",
            "version": __version__,
            "status": "running" if cam.running else "stopped",
            "charsets": sorted(CHARSETS),
        })

    @api.get("/health")
    async def health() -> JSONResponse:
        """Liveness probe. Always 200 while the process is up."""
        return JSONResponse({"status": "healthy"})

    @api.get("/metrics")
    async def metrics() -> JSONResponse:
        """Detailed metrics for observability."""
        return JSONResponse(cam.metrics())

    @api.get("/controls")
    async def get_controls() -> JSONResponse:
        controls = cam.controls
        return JSONResponse({
            **controls.model_dump(mode="json"),
            "ramp": controls.ramp,
            "density_label": controls.density_label,
        })

    @api.put("/controls")
    async def put_controls(controls: RenderControls) -> JSONResponse:
        cam.set_controls(controls)
        return JSONResponse(controls.model_dump(mode="json"))

    @api.post("/start")
    async def start() -> JSONResponse:
        if not cam.start():
            return JSONResponse(
                {"status": "stopped", "error": cam.metrics()["last_error"]},
                status_code=503,
            )
        return JSONResponse({"status": "running"})

    @api.post("/stop")
    async def stop() -> JSONResponse:
        cam.stop()
        return JSONResponse({"status": "stopped"})

    return api
