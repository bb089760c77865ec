"""
REST endpoints for driving the capture session.
"""
from fastapi import APIRouter, HTTPException, Response
import logging

import cv2

from core.capture import CaptureSession, INVALID_URL_ALERT
from core.config import Settings
from core.emotions import EMOTIONS
from core.models import EmotionDescriptor, EndpointUpdate, SessionStatus, StartRequest

router = APIRouter()
settings = Settings()
session = CaptureSession(settings)
logger = logging.getLogger(__name__)


@router.get("/emotions", response_model=list[EmotionDescriptor])
def list_emotions():
    """Legend of every supported emotion."""
    return list(EMOTIONS)


@router.get("/session/status", response_model=SessionStatus)
def session_status():
    return session.status()


@router.put("/session/endpoint", response_model=SessionStatus)
def set_endpoint(body: EndpointUpdate):
    """
    Change the detection endpoint URL. Takes effect on the next start.
    """
    logger.debug(f"[api] endpoint -> {body.endpoint_url}")
    session.set_endpoint(body.endpoint_url)
    return session.status()


@router.post("/session/start", response_model=SessionStatus)
def session_start(body: StartRequest | None = None):
    """
    Start polling.

    Returns:
        SessionStatus: current state after the start attempt.

    Raises:
        HTTPException: 400 for an invalid URL, 503 when the camera cannot be opened.
    """
    url = body.endpoint_url if body is not None else None
    if not session.start(url):
        code = 400 if session.last_alert == INVALID_URL_ALERT else 503
        raise HTTPException(status_code=code, detail=session.last_alert)
    return session.status()


@router.post("/session/stop", response_model=SessionStatus)
def session_stop():
    session.stop()
    return session.status()


@router.get("/session/frame")
def session_frame():
    """Latest canvas (frame + overlay) as JPEG."""
    canvas = session.display.snapshot()
    if canvas is None:
        raise HTTPException(status_code=404, detail="No frame captured yet")
    ok, buf = cv2.imencode(".jpg", canvas)
    if not ok:
        logger.error("[api] canvas encoding failed")
        raise HTTPException(status_code=500, detail="Could not encode frame")
    return Response(content=buf.tobytes(), media_type="image/jpeg")
