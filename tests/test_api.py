"""
Control API Tests
=================

FastAPI endpoints for controls, lifecycle, and metrics.
"""

import pytest
from fastapi.testclient import TestClient

from asciicam.api import create_api
from asciicam.app import AsciiCamApp
from asciicam.clock import FrameClock
from asciicam.display import CanvasDisplay
from asciicam.stream import CameraSource, ImageSource, SourceError


class BrokenCamera(CameraSource):
    """Camera that can never be opened."""

    def open(self) -> None:
        raise SourceError(f"Unable to open camera {self.camera_index}")


@pytest.fixture
def cam(vga_source):
    return AsciiCamApp(vga_source, CanvasDisplay(width=320, height=240), FrameClock(fps=60))


@pytest.fixture
def client(cam):
    with TestClient(create_api(cam)) as test_client:
        yield test_client


class TestInfoEndpoints:
    """Tests for /, /health, /metrics."""

    def test_root(self, client):
        body = client.get("/").json()
        assert body["service"] == "AsciiCam"
        assert body["status"] == "stopped"
        assert "standard" in body["charsets"]

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    def test_metrics_after_tick(self, cam, client):
        cam.tick()
        body = client.get("/metrics").json()

        assert body["frames_rendered"] == 1
        assert body["grid_width"] == 120
        assert body["grid_height"] == 45
        assert 0 < body["scale"] <= 1


class TestControlsEndpoints:
    """Tests for GET/PUT /controls."""

    def test_get_controls(self, client):
        body = client.get("/controls").json()
        assert body["charset"] == "standard"
        assert body["ramp"] == " .:-=+*#%@"
        assert body["density_label"] == "1.0x"

    def test_put_controls(self, cam, client):
        response = client.put(
            "/controls",
            json={"columns": 300, "density": 1.5, "charset": " #", "invert": True},
        )
        assert response.status_code == 200
        assert cam.controls.charset == " #"
        assert cam.controls.invert is True

        cam.tick()
        assert cam.current_frame.width == 360  # clamp 300 -> 240, * 1.5

    def test_empty_charset_rejected(self, cam, client):
        response = client.put("/controls", json={"charset": ""})
        assert response.status_code == 422
        assert cam.controls.charset == "standard"


class TestLifecycleEndpoints:
    """Tests for /start and /stop."""

    def test_start_and_stop(self, cam, client):
        assert client.post("/start").json() == {"status": "running"}
        assert cam.running

        assert client.post("/stop").json() == {"status": "stopped"}
        assert not cam.running

    def test_start_fails_when_camera_unavailable(self):
        cam = AsciiCamApp(BrokenCamera(7), CanvasDisplay(width=320, height=240), FrameClock(fps=60))
        with TestClient(create_api(cam)) as client:
            response = client.post("/start")

        assert response.status_code == 503
        assert "camera 7" in response.json()["error"]
        assert not cam.running
