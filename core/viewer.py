# core/viewer.py
"""
Live window for the emotion poller.

Shows the canvas (last polled frame + overlay), the current-emotion panel and
the legend of supported emotions. Keys:
  s / space  toggle detection on and off
  q          quit
"""

from __future__ import annotations

import logging
from typing import Optional

import cv2

from core.capture import CaptureSession
from core.config import Settings
from core.display import EmotionDisplay

logger = logging.getLogger(__name__)

WINDOW_TITLE = "Emotion Detection (s: start/stop, q: quit)"
TOGGLE_KEYS = (ord("s"), ord(" "))


def run_viewer(settings: Settings, endpoint_url: Optional[str] = None,
               autostart: bool = True) -> None:
    """Open the window and run the UI loop until 'q' is pressed."""
    display = EmotionDisplay(settings.FRAME_WIDTH, settings.FRAME_HEIGHT)
    session = CaptureSession(settings, display=display, alert=display.show_alert)
    if endpoint_url is not None:
        session.set_endpoint(endpoint_url)

    with session:
        if autostart:
            session.start()
        try:
            while True:
                cv2.imshow(WINDOW_TITLE, display.compose(processing=session.processing))
                key = cv2.waitKey(30) & 0xFF
                if key == ord("q"):
                    break
                if key in TOGGLE_KEYS:
                    if session.running:
                        session.stop()
                    else:
                        session.start()
        finally:
            cv2.destroyAllWindows()
    logger.info("[viewer] closed")
