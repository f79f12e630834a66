"""OpenCV-backed kiosk camera."""

import asyncio
import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import cv2

from aibooth.domain.errors import CaptureError
from aibooth.services.capture import CaptureDevice

logger = logging.getLogger(__name__)


@dataclass
class OpenCVCaptureDevice(CaptureDevice):
    """Grabs mirrored JPEG frames from a local camera."""

    camera_index: int = 0
    width: int = 1920
    height: int = 1080
    jpeg_quality: int = 95
    video_capture_factory: Callable[[int], Any] = cv2.VideoCapture
    _camera: Any = field(default=None, init=False, repr=False)
    _io_lock: threading.Lock = field(
        default_factory=threading.Lock, init=False, repr=False
    )

    async def capture(self) -> bytes:
        """Capture one frame off the event loop."""
        return await asyncio.to_thread(self._capture_sync)

    def _capture_sync(self) -> bytes:
        with self._io_lock:
            camera = self._open()
            ok, frame = camera.read()
            if not ok or frame is None:
                raise CaptureError("Failed to capture photo")
            try:
                frame = cv2.flip(frame, 1)
                ok, buffer = cv2.imencode(
                    ".jpg", frame, [cv2.IMWRITE_JPEG_QUALITY, self.jpeg_quality]
                )
            except cv2.error as exc:
                raise CaptureError("Failed to encode photo") from exc
            if not ok:
                raise CaptureError("Failed to encode photo")
            return buffer.tobytes()

    def _open(self) -> Any:
        if self._camera is not None:
            return self._camera
        camera = self.video_capture_factory(self.camera_index)
        if not camera.isOpened():
            camera.release()
            raise CaptureError(f"Could not open camera {self.camera_index}")
        camera.set(cv2.CAP_PROP_FRAME_WIDTH, self.width)
        camera.set(cv2.CAP_PROP_FRAME_HEIGHT, self.height)
        logger.info("Camera opened", extra={"camera_index": self.camera_index})
        self._camera = camera
        return camera

    async def close(self) -> None:
        """Release the camera if it was opened."""
        with self._io_lock:
            if self._camera is not None:
                self._camera.release()
                self._camera = None
