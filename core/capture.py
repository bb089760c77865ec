# core/capture.py
"""
Capture session: owns the camera and the poll timer.

Every POLL_INTERVAL seconds the ticker asks for a poll. A poll grabs the
current camera frame, puts it on the display canvas, posts it to the
configured endpoint and hands the first detection to the display. At most
one poll is in flight; ticks that arrive while one is running are skipped.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Optional

import cv2
import requests

from core.config import Settings
from core.display import EmotionDisplay
from core.models import SessionStatus
from core.ticker import Ticker
from core.transport import encode_frame, post_frame

logger = logging.getLogger(__name__)

INVALID_URL_ALERT = "Please enter a valid API URL"
CAMERA_ALERT = "Failed to access camera. Please grant permissions or check your device."
FRAME_ALERT = "Error processing frame. Make sure the API URL is correct and the backend is running."


class CameraUnavailableError(RuntimeError):
    """Raised when the camera cannot be opened."""


def open_camera(index: int, width: int, height: int):
    """Open a capture device and request the given resolution."""
    cap = cv2.VideoCapture(index)
    if not cap.isOpened():
        cap.release()
        raise CameraUnavailableError(f"Could not open camera index {index}")
    cap.set(cv2.CAP_PROP_FRAME_WIDTH, width)
    cap.set(cv2.CAP_PROP_FRAME_HEIGHT, height)
    return cap


class CaptureSession:
    """Start/stop the camera + poll timer; usable as a context manager."""
    def __init__(self, settings: Settings,
                 display: Optional[EmotionDisplay] = None,
                 alert: Optional[Callable[[str], None]] = None,
                 http: Optional[requests.Session] = None):
        self.s = settings
        self.display = display or EmotionDisplay(settings.FRAME_WIDTH, settings.FRAME_HEIGHT)
        self.endpoint_url = settings.ENDPOINT_URL
        self.started_at: Optional[float] = None
        self.last_alert: Optional[str] = None
        self._alert_cb = alert
        self._http = http
        self._state_lock = threading.Lock()
        self._busy = threading.Lock()
        self._cap = None
        self._ticker: Optional[Ticker] = None
        self._worker: Optional[threading.Thread] = None
        self._session_url = ""
        self._generation = 0

    # ---- state ----
    @property
    def running(self) -> bool:
        return self._cap is not None

    @property
    def processing(self) -> bool:
        return self._busy.locked()

    def status(self) -> SessionStatus:
        return SessionStatus(
            running=self.running,
            processing=self.processing,
            endpoint_url=self.endpoint_url,
            started_at=self.started_at,
            current_emotion=self.display.current,
            last_alert=self.last_alert,
        )

    def alert(self, message: str) -> None:
        self.last_alert = message
        logger.warning(f"[capture] alert: {message}")
        if self._alert_cb is not None:
            self._alert_cb(message)

    def set_endpoint(self, url: str) -> None:
        """Change the URL used by the next start."""
        self.endpoint_url = (url or "").strip()

    # ---- lifecycle ----
    def start(self, endpoint_url: Optional[str] = None) -> bool:
        """
        Open the camera and begin polling. Returns False (after alerting) when
        the URL is invalid or the camera is unavailable; state is unchanged.
        """
        url = (self.endpoint_url if endpoint_url is None else (endpoint_url or "")).strip()
        failure = None
        with self._state_lock:
            if self._cap is not None:
                return True
            if not url.startswith("http"):
                failure = INVALID_URL_ALERT
            else:
                try:
                    cap = open_camera(self.s.CAMERA_INDEX, self.s.FRAME_WIDTH, self.s.FRAME_HEIGHT)
                except CameraUnavailableError:
                    logger.exception("[capture] error accessing camera")
                    failure = CAMERA_ALERT
                else:
                    w = int(cap.get(cv2.CAP_PROP_FRAME_WIDTH) or 0) or self.s.FRAME_WIDTH
                    h = int(cap.get(cv2.CAP_PROP_FRAME_HEIGHT) or 0) or self.s.FRAME_HEIGHT
                    self.display.resize(w, h)
                    self._cap = cap
                    self.endpoint_url = url
                    self._session_url = url
                    self._generation += 1
                    self.started_at = time.time()
                    self._ticker = Ticker(self.tick, self.s.POLL_INTERVAL)
                    self._ticker.start()
        if failure:
            self.alert(failure)
            return False
        logger.info(f"[capture] started camera={self.s.CAMERA_INDEX} {w}x{h} url={url} "
                    f"interval={self.s.POLL_INTERVAL}s")
        return True

    def stop(self) -> bool:
        """Release the camera and cancel the timer. Returns False if already stopped."""
        with self._state_lock:
            cap, ticker = self._cap, self._ticker
            self._cap = None
            self._ticker = None
            if cap is None and ticker is None:
                return False
            # an in-flight poll finishes on its own; its result is dropped
            self._generation += 1
            self.started_at = None
            if ticker is not None:
                ticker.cancel()
            if cap is not None:
                cap.release()
        self.display.clear()
        logger.info("[capture] stopped")
        return True

    def close(self) -> None:
        self.stop()

    def join(self, timeout: Optional[float] = None) -> None:
        """Wait for the in-flight poll, if any."""
        worker = self._worker
        if worker is not None and worker.is_alive():
            worker.join(timeout)

    def __enter__(self) -> "CaptureSession":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    # ---- polling ----
    def tick(self) -> bool:
        """Dispatch one poll unless one is already in flight."""
        if self._cap is None:
            return False
        if not self._busy.acquire(blocking=False):
            logger.debug("[capture] previous frame still in flight; tick skipped")
            return False
        gen = self._generation
        try:
            self._worker = threading.Thread(target=self._process_frame, args=(gen,), daemon=True)
            self._worker.start()
        except Exception:
            self._busy.release()
            raise
        return True

    def _process_frame(self, gen: int) -> None:
        try:
            with self._state_lock:
                cap = self._cap
                if cap is None or gen != self._generation:
                    return
                url = self._session_url
                ok, frame = cap.read()
            if not ok or frame is None:
                logger.warning("[capture] camera returned no frame; tick skipped")
                return

            self.display.show_frame(frame)
            image = encode_frame(frame, self.s.JPEG_QUALITY)
            result = post_frame(url, image, timeout=self.s.REQUEST_TIMEOUT, session=self._http)

            # stop() bumps the generation under the same lock
            with self._state_lock:
                if gen != self._generation:
                    logger.debug("[capture] session ended mid-request; result discarded")
                    return
                desc = self.display.render(result)
            if desc is not None:
                logger.debug(f"[capture] emotion={desc.name} bbox={result.bbox}")
            elif result is not None:
                logger.debug(f"[capture] unrecognised emotion {result.emotion!r}; overlay unchanged")
        except Exception:
            logger.exception("[capture] error processing frame")
            if gen == self._generation:
                self.alert(FRAME_ALERT)
        finally:
            self._busy.release()
