"""Run the emotion detection window.

Usage:
    uvicorn api.main:app --reload  # (separate, for the control API)
    python scripts/live_overlay.py [endpoint_url]  # (to see the camera window)

Press 's' to start/stop detection and 'q' to quit the window.
"""
import logging
import sys
from core.config import Settings
from core.viewer import run_viewer

if __name__ == '__main__':
    s = Settings()
    logging.basicConfig(level=getattr(logging, s.LOG_LEVEL, logging.INFO))
    run_viewer(s, endpoint_url=sys.argv[1] if len(sys.argv) > 1 else None)
