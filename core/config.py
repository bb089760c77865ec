"""
Configuration for the emotion poller.
"""
from pydantic import BaseModel
import os

class Settings(BaseModel):
    """
    Runtime settings with environment-variable overrides.
    """
    ENDPOINT_URL: str = os.getenv(
        "ENDPOINT_URL", "https://your-colab-ngrok-url.ngrok.io/detect_emotion"
    )
    POLL_INTERVAL: float = float(os.getenv("POLL_INTERVAL", "1"))
    REQUEST_TIMEOUT: float = float(os.getenv("REQUEST_TIMEOUT", "10"))

    CAMERA_INDEX: int = int(os.getenv("CAMERA_INDEX", "0"))
    FRAME_WIDTH: int = int(os.getenv("FRAME_WIDTH", "640"))
    FRAME_HEIGHT: int = int(os.getenv("FRAME_HEIGHT", "480"))
    JPEG_QUALITY: int = int(os.getenv("JPEG_QUALITY", "92"))

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    def __init__(self, **data):
        super().__init__(**data)
        # Normalize: floor the poll period, clamp JPEG quality, upper-case level
        object.__setattr__(self, "POLL_INTERVAL", max(0.1, float(self.POLL_INTERVAL)))
        object.__setattr__(self, "JPEG_QUALITY", max(1, min(100, int(self.JPEG_QUALITY))))
        level = (self.LOG_LEVEL or "INFO").strip().split()[0].upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            level = "INFO"
        object.__setattr__(self, "LOG_LEVEL", level)
        object.__setattr__(self, "ENDPOINT_URL", (self.ENDPOINT_URL or "").strip())
