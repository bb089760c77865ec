"""
Frame transport: JPEG data-URL encoding, the HTTP POST and response parsing.

The remote detector is an opaque collaborator. Only the documented shape is
relied on: {"results": [{"emotion": str, "bbox": [x, y, w, h]}, ...]}.
"""
from __future__ import annotations
from typing import Optional
import base64
import logging

import cv2
import numpy as np
import requests
from pydantic import ValidationError

from core.models import DetectionResponse, DetectionResult, FrameRequest

logger = logging.getLogger(__name__)

DATA_URL_PREFIX = "data:image/jpeg;base64,"


class FrameProcessingError(RuntimeError):
    """Raised when a frame could not be sent or the reply could not be read."""


def encode_frame(frame: np.ndarray, quality: int = 92) -> str:
    """Encode a BGR frame as a JPEG data URL."""
    ok, buf = cv2.imencode(".jpg", frame, [int(cv2.IMWRITE_JPEG_QUALITY), int(quality)])
    if not ok:
        raise FrameProcessingError("JPEG encoding failed")
    return DATA_URL_PREFIX + base64.b64encode(buf.tobytes()).decode("ascii")


def parse_detection(payload) -> Optional[DetectionResult]:
    """
    Pick the first detection out of a decoded response body.

    Returns None when `results` is missing, empty or malformed; the caller
    keeps whatever overlay it already has in that case.
    """
    if not isinstance(payload, dict):
        return None
    results = payload.get("results")
    if not isinstance(results, list) or not results:
        return None
    try:
        return DetectionResponse(results=results[:1]).results[0]
    except ValidationError:
        logger.debug(f"[transport] malformed first result: {results[0]!r}")
        return None


def post_frame(url: str, image: str, timeout: float = 10.0,
               session: Optional[requests.Session] = None) -> Optional[DetectionResult]:
    """
    POST one encoded frame and return the first detection, if any.

    Raises:
        FrameProcessingError: on network errors, non-2xx replies or a body
            that is not JSON.
    """
    http = session or requests
    body = FrameRequest(image=image).model_dump()
    try:
        resp = http.post(url, json=body, timeout=timeout,
                         headers={"Content-Type": "application/json"})
        resp.raise_for_status()
    except requests.RequestException as e:
        raise FrameProcessingError(f"request to {url} failed: {e}") from e
    try:
        payload = resp.json()
    except ValueError as e:
        # requests.JSONDecodeError is a ValueError as well
        raise FrameProcessingError(f"response from {url} is not JSON") from e
    logger.debug(f"[transport] {url} -> {resp.status_code}")
    return parse_detection(payload)
