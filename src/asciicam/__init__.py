"""
AsciiCam
========

Live camera to monospaced character art.

Each tick samples the current camera frame into a small aspect-corrected
grid, maps every sample's luminance onto a character ramp, and scales the
resulting text block to fit its viewport.

Components:
    - stream: Frame sources (OpenCV camera, still image)
    - pipeline: FrameSampler, AsciiRenderer, ViewportFitter, run_tick
    - clock: FrameClock tick scheduler with cancel handle
    - display: OpenCV window/canvas and terminal outputs
    - app: AsciiCamApp wiring it all together
    - api: FastAPI control surface

Example:
    from asciicam.pipeline import FrameSampler, render
    from asciicam.stream import ImageSource

    buffer = FrameSampler().sample(ImageSource.from_file("me.jpg"), columns=120)
    print(render(buffer, " .:-=+*#%@").text)
"""

__version__ = "0.1.0"
__author__ = "AsciiCam Project"

__all__ = [
    "__version__",
]
