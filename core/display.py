"""Render/display helpers.

- draw_detection: draw the bbox rectangle and a filled label tag above it
- EmotionDisplay: the canvas plus the current-emotion indicator, with a
  composed view (indicator panel, legend strip, alert banner) for the window

Drawing is best-effort: the overlay goes on top of whatever frame is already
on the canvas, and anything falling outside the canvas is clipped.
"""
from __future__ import annotations
import threading
import time
import cv2
import numpy as np
from typing import Optional, Tuple

from core.emotions import EMOTIONS, hex_to_bgr, match_emotion
from core.models import DetectionResult, EmotionDescriptor

BOX_COLOR = hex_to_bgr("#3b82f6")
LABEL_ALPHA = 0.7
LABEL_W, LABEL_H = 150, 30
PLACEHOLDER_COLOR = hex_to_bgr("#e5e7eb")
ALERT_COLOR = (68, 68, 239)
TEXT_DARK = (55, 65, 81)
FONT = cv2.FONT_HERSHEY_SIMPLEX

INDICATOR_H = 56
LEGEND_H = 44


def bbox_corners(result: DetectionResult) -> Tuple[Tuple[int, int], Tuple[int, int]]:
    """(x, y, w, h) -> ((x0, y0), (x1, y1)) in integer pixels."""
    x, y, w, h = (int(round(v)) for v in result.bbox)
    return (x, y), (x + w, y + h)


def draw_detection(canvas: np.ndarray, result: DetectionResult) -> np.ndarray:
    """Draw the detection box and its label tag onto `canvas` in place.

    Args:
        canvas: BGR image
        result: detection with pixel-space bbox

    Returns:
        The same canvas, annotated
    """
    (x, y), (x1, y1) = bbox_corners(result)
    cv2.rectangle(canvas, (x, y), (x1, y1), BOX_COLOR, 2)

    # translucent tag directly above the box, clipped to the canvas
    H, W = canvas.shape[:2]
    tx0, ty0 = max(0, x), max(0, y - LABEL_H)
    tx1, ty1 = min(W, x + LABEL_W), min(H, y)
    if tx1 > tx0 and ty1 > ty0:
        roi = canvas[ty0:ty1, tx0:tx1]
        tag = np.empty_like(roi)
        tag[:] = BOX_COLOR
        canvas[ty0:ty1, tx0:tx1] = cv2.addWeighted(tag, LABEL_ALPHA, roi, 1.0 - LABEL_ALPHA, 0)

    cv2.putText(canvas, result.emotion, (x + 5, y - 10), FONT, 0.5, (255, 255, 255), 1, cv2.LINE_AA)
    return canvas


class EmotionDisplay:
    """Canvas + current-emotion indicator shared by the poller and the UI."""

    def __init__(self, width: int = 640, height: int = 480):
        self._lock = threading.Lock()
        self._canvas: Optional[np.ndarray] = None
        self._current: Optional[EmotionDescriptor] = None
        self._alert: Optional[str] = None
        self._alert_until = 0.0
        self.width = int(width)
        self.height = int(height)

    # ---- canvas ----
    def resize(self, width: int, height: int) -> None:
        with self._lock:
            self.width, self.height = int(width), int(height)
            self._canvas = np.zeros((self.height, self.width, 3), dtype=np.uint8)

    def show_frame(self, frame: np.ndarray) -> None:
        """Put a freshly captured frame on the canvas (previous overlay is gone)."""
        with self._lock:
            self._canvas = frame.copy()
            self.height, self.width = self._canvas.shape[:2]

    def snapshot(self) -> Optional[np.ndarray]:
        with self._lock:
            return None if self._canvas is None else self._canvas.copy()

    # ---- indicator ----
    @property
    def current(self) -> Optional[EmotionDescriptor]:
        return self._current

    def render(self, result: Optional[DetectionResult]) -> Optional[EmotionDescriptor]:
        """
        Apply one detection. Unknown emotion names (or no result at all)
        change nothing and return None.
        """
        if result is None:
            return None
        desc = match_emotion(result.emotion)
        if desc is None:
            return None
        with self._lock:
            if self._canvas is not None:
                draw_detection(self._canvas, result)
            self._current = desc
        return desc

    def clear(self) -> None:
        with self._lock:
            self._current = None

    # ---- alerts ----
    def show_alert(self, message: str, seconds: float = 4.0) -> None:
        with self._lock:
            self._alert = message
            self._alert_until = time.time() + seconds

    def active_alert(self) -> Optional[str]:
        if self._alert and time.time() < self._alert_until:
            return self._alert
        return None

    # ---- composed view ----
    def compose(self, processing: bool = False) -> np.ndarray:
        """Canvas on top, indicator panel, then the legend of all emotions."""
        canvas = self.snapshot()
        if canvas is None:
            canvas = np.empty((self.height, self.width, 3), dtype=np.uint8)
            canvas[:] = PLACEHOLDER_COLOR
        H, W = canvas.shape[:2]

        alert = self.active_alert()
        if alert:
            cv2.rectangle(canvas, (0, 0), (W, 28), ALERT_COLOR, -1)
            cv2.putText(canvas, alert[:90], (8, 19), FONT, 0.45, (255, 255, 255), 1, cv2.LINE_AA)
        if processing:
            cv2.putText(canvas, "Processing...", (max(0, W - 130), H - 12), FONT, 0.5,
                        BOX_COLOR, 1, cv2.LINE_AA)

        panel = np.empty((INDICATOR_H, W, 3), dtype=np.uint8)
        cur = self._current
        if cur is not None:
            panel[:] = hex_to_bgr(cur.color)
            cv2.putText(panel, cur.name, (W // 2 - 50, 36), FONT, 0.8, TEXT_DARK, 2, cv2.LINE_AA)
        else:
            panel[:] = (255, 255, 255)

        legend = np.full((LEGEND_H, W, 3), 255, dtype=np.uint8)
        cell = max(1, W // len(EMOTIONS))
        for i, e in enumerate(EMOTIONS):
            x0 = i * cell
            cv2.rectangle(legend, (x0 + 2, 4), (x0 + cell - 3, LEGEND_H - 5), hex_to_bgr(e.color), -1)
            cv2.putText(legend, e.name, (x0 + 6, LEGEND_H // 2 + 5), FONT, 0.38, TEXT_DARK, 1, cv2.LINE_AA)

        return np.vstack([canvas, panel, legend])
