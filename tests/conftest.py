"""
Test Configuration
==================

Pytest fixtures and test configuration for AsciiCam.
"""

import numpy as np
import pytest


STANDARD_RAMP = " .:-=+*#%@"


@pytest.fixture
def standard_ramp():
    """The 10-level ramp used throughout the scenarios."""
    return STANDARD_RAMP


@pytest.fixture
def vga_source():
    """A 640x480 mid-gray ImageSource."""
    from asciicam.stream import ImageSource

    return ImageSource(np.full((480, 640, 3), 128, dtype=np.uint8))


@pytest.fixture
def gradient_source():
    """A 640x480 horizontal black-to-white gradient."""
    from asciicam.stream import ImageSource

    row = np.linspace(0, 255, 640).astype(np.uint8)
    gray = np.tile(row, (480, 1))
    return ImageSource(np.dstack([gray, gray, gray]))


@pytest.fixture
def make_buffer():
    """Build a PixelBuffer from a (H, W, 3) RGB array or a flat gray level."""
    from asciicam.models import PixelBuffer

    def _make(rgb=None, width=4, height=3, gray=None):
        if rgb is None:
            rgb = np.full((height, width, 3), gray if gray is not None else 0, dtype=np.uint8)
        rgb = np.asarray(rgb, dtype=np.uint8)
        alpha = np.full(rgb.shape[:2] + (1,), 255, dtype=np.uint8)
        return PixelBuffer(np.concatenate([rgb, alpha], axis=2))

    return _make


class FakeDisplay:
    """Display double with fixed geometry and scripted poll events."""

    def __init__(self, block=(1200, 900), viewport=(800, 600)):
        from asciicam.display import DisplayEvents

        self.block = block
        self.viewport = viewport
        self.events = DisplayEvents()
        self.shown = []
        self.measure_calls = 0
        self.closed = False

    def measure(self, grid):
        self.measure_calls += 1
        return self.block, self.viewport

    def show(self, frame, scale):
        self.shown.append((frame, scale))

    def poll(self):
        return self.events

    def close(self):
        self.closed = True


@pytest.fixture
def fake_display():
    return FakeDisplay()
