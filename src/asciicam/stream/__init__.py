"""
Stream Module
=============

Frame sources for the AsciiCam pipeline.

    - SourceFrame: Protocol (width, height, draw)
    - CameraSource: OpenCV capture device
    - ImageSource: Still image or in-memory array

Example:
    from asciicam.stream import CameraSource

    camera = CameraSource(camera_index=0)
    camera.open()
    camera.poll()
    rgba = camera.draw(120, 45)
"""

from asciicam.stream.source import (
    CameraSource,
    ImageSource,
    SourceError,
    SourceFrame,
    scale_to_rgba,
)


__all__ = [
    "SourceFrame",
    "CameraSource",
    "ImageSource",
    "SourceError",
    "scale_to_rgba",
]
