"""
Frame Sources
=============

Live and still frame sources for the sampling stage.

A source exposes its current pixel size and can draw itself scaled into
a target of arbitrary size. The pipeline borrows a source per tick and
never manages its lifecycle: opening and releasing the camera is the
application's job.

Design Rules:
    - Width/height are 0 while the source is not streaming
    - draw() returns RGBA uint8 of exactly (target_height, target_width, 4)
    - Scaling uses OpenCV INTER_AREA (box filter for downscaling)
"""

import logging
import threading
from typing import Optional, Protocol

import cv2
import numpy as np


logger = logging.getLogger(__name__)


class SourceError(Exception):
    """Raised when a frame source cannot be opened or read."""
    pass


class SourceFrame(Protocol):
    """
    Protocol for frame sources.

    Implemented by:
        - CameraSource (OpenCV capture device)
        - ImageSource (still image or in-memory array)
    """

    @property
    def width(self) -> int:
        """Current frame width in pixels (0 when not streaming)."""
        ...

    @property
    def height(self) -> int:
        """Current frame height in pixels (0 when not streaming)."""
        ...

    def draw(self, target_width: int, target_height: int) -> np.ndarray:
        """
        Draw the current frame scaled into a target surface.

        Args:
            target_width: Surface width in pixels
            target_height: Surface height in pixels

        Returns:
            RGBA image as np.ndarray (target_height, target_width, 4), uint8
        """
        ...


def scale_to_rgba(bgr: np.ndarray, target_width: int, target_height: int) -> np.ndarray:
    """
    Scale a BGR (or grayscale) image to exactly the target size as RGBA.

    Args:
        bgr: Image as np.ndarray (H, W, 3) BGR or (H, W) grayscale, uint8
        target_width: Output width
        target_height: Output height

    Returns:
        RGBA image as np.ndarray (target_height, target_width, 4), uint8
    """
    resized = cv2.resize(bgr, (target_width, target_height), interpolation=cv2.INTER_AREA)
    if resized.ndim == 2:
        return cv2.cvtColor(resized, cv2.COLOR_GRAY2RGBA)
    return cv2.cvtColor(resized, cv2.COLOR_BGR2RGBA)


class ImageSource:
    """
    Source backed by a single BGR image.

    Used for still images and tests. An empty array behaves like a
    camera that has not started streaming yet.

    Example:
        source = ImageSource.from_file("portrait.jpg")
        rgba = source.draw(120, 45)
    """

    def __init__(self, image: np.ndarray) -> None:
        """
        Initialize image source.

        Args:
            image: BGR (H, W, 3) or grayscale (H, W) image, uint8
        """
        if image.dtype != np.uint8:
            raise SourceError(f"Invalid image dtype: {image.dtype}")
        self._image = image

    @classmethod
    def from_file(cls, path: str) -> "ImageSource":
        """
        Load a still image from disk.

        Raises:
            SourceError: If the file cannot be decoded
        """
        image = cv2.imread(path, cv2.IMREAD_COLOR)
        if image is None:
            raise SourceError(f"Failed to read image: {path}")
        logger.info(f"ImageSource loaded {path} ({image.shape[1]}x{image.shape[0]})")
        return cls(image)

    @classmethod
    def blank(cls) -> "ImageSource":
        """A source that is never ready."""
        return cls(np.zeros((0, 0, 3), dtype=np.uint8))

    @property
    def width(self) -> int:
        return int(self._image.shape[1]) if self._image.ndim >= 2 else 0

    @property
    def height(self) -> int:
        return int(self._image.shape[0]) if self._image.ndim >= 2 else 0

    def update(self, image: np.ndarray) -> None:
        """Replace the current image."""
        self._image = image

    def draw(self, target_width: int, target_height: int) -> np.ndarray:
        return scale_to_rgba(self._image, target_width, target_height)


class CameraSource:
    """
    Source backed by an OpenCV capture device.

    `VideoCapture.read()` blocks until the device delivers a frame. By
    default a daemon reader thread does the blocking reads and keeps the
    latest result; `poll()` only latches that result, so the event loop
    (and the control API sharing it) is never held up by the camera.
    With `threaded=False`, `poll()` reads from the device directly.

    Width and height reflect the latched frame. A failed read leaves the
    source not ready (size 0) until the next successful read.

    Example:
        camera = CameraSource(camera_index=0)
        camera.open()
        camera.poll()
        rgba = camera.draw(120, 45)
        camera.release()
    """

    def __init__(self, camera_index: int = 0, threaded: bool = True) -> None:
        """
        Initialize camera source.

        Args:
            camera_index: OpenCV device index
            threaded: Read frames on a background thread
        """
        self.camera_index = camera_index
        self.threaded = threaded
        self._capture: Optional[cv2.VideoCapture] = None
        self._frame: Optional[np.ndarray] = None
        self._latest: Optional[np.ndarray] = None
        self._read_failures: int = 0

        self._lock = threading.Lock()
        self._stop = threading.Event()
        self._reader: Optional[threading.Thread] = None

    @property
    def is_open(self) -> bool:
        return self._capture is not None and self._capture.isOpened()

    @property
    def read_failures(self) -> int:
        """Number of failed frame reads since open()."""
        return self._read_failures

    def open(self) -> None:
        """
        Acquire the camera device.

        Raises:
            SourceError: If the device cannot be opened
        """
        if self.is_open:
            return

        capture = cv2.VideoCapture(self.camera_index)
        if not capture.isOpened():
            capture.release()
            raise SourceError(f"Unable to open camera {self.camera_index}")

        self._capture = capture
        self._read_failures = 0
        logger.info(f"CameraSource opened camera {self.camera_index}")

        if self.threaded:
            self._start_reader()

    def release(self) -> None:
        """Release the camera device. Safe to call when not open."""
        self._stop.set()
        if self._reader is not None:
            self._reader.join(timeout=1.0)
            self._reader = None

        if self._capture is not None:
            self._capture.release()
            self._capture = None
            logger.info(f"CameraSource released camera {self.camera_index}")

        with self._lock:
            self._frame = None
            self._latest = None

    def _start_reader(self) -> None:
        self._stop.clear()
        self._reader = threading.Thread(
            target=self._read_loop,
            name=f"camera-{self.camera_index}",
            daemon=True,
        )
        self._reader.start()

    def _read_loop(self) -> None:
        while not self._stop.is_set():
            frame = self._read()
            with self._lock:
                self._latest = frame
            if frame is None:
                self._stop.wait(0.05)

    def _read(self) -> Optional[np.ndarray]:
        capture = self._capture
        if capture is None or not capture.isOpened():
            return None

        ok, frame = capture.read()
        if not ok or frame is None:
            self._read_failures += 1
            logger.debug(f"Camera {self.camera_index} read failed ({self._read_failures} total)")
            return None
        return frame

    def poll(self) -> bool:
        """
        Latch the latest frame for this tick.

        Returns:
            True if a frame is available, False otherwise
        """
        if self.threaded:
            with self._lock:
                self._frame = self._latest if self.is_open else None
        else:
            self._frame = self._read()
        return self._frame is not None

    @property
    def width(self) -> int:
        return 0 if self._frame is None else int(self._frame.shape[1])

    @property
    def height(self) -> int:
        return 0 if self._frame is None else int(self._frame.shape[0])

    def draw(self, target_width: int, target_height: int) -> np.ndarray:
        if self._frame is None:
            raise SourceError(f"Camera {self.camera_index} has no frame to draw")
        return scale_to_rgba(self._frame, target_width, target_height)
