"""
Pydantic data models for wire IO and session status.
"""
from __future__ import annotations
from pydantic import BaseModel, ConfigDict, Field, FiniteFloat, field_validator
from typing import List, Optional, Tuple

MAX_COORD = 100_000

class EmotionDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    emoji: str
    color: str

class FrameRequest(BaseModel):
    image: str

class DetectionResult(BaseModel):
    emotion: str
    bbox: Tuple[FiniteFloat, FiniteFloat, FiniteFloat, FiniteFloat]
    emoji: Optional[str] = None

    @field_validator("bbox")
    @classmethod
    def _pixel_range(cls, v):
        # OpenCV drawing takes int32 coordinates
        if any(abs(c) > MAX_COORD for c in v):
            raise ValueError(f"bbox coordinate out of range: {v}")
        return v

class DetectionResponse(BaseModel):
    results: List[DetectionResult] = Field(default_factory=list)



# control api


class StartRequest(BaseModel):
    endpoint_url: Optional[str] = None

class EndpointUpdate(BaseModel):
    endpoint_url: str

class SessionStatus(BaseModel):
    running: bool
    processing: bool = False
    endpoint_url: str
    started_at: float | None = None
    current_emotion: EmotionDescriptor | None = None
    last_alert: str | None = None
