"""
The fixed table of supported emotions.

Each descriptor pairs a label with the glyph shown in the indicator and the
panel tint used behind it. The table is immutable; lookups never mutate it.
"""
from __future__ import annotations
from typing import Optional, Tuple

from core.models import EmotionDescriptor

EMOTIONS: Tuple[EmotionDescriptor, ...] = (
    EmotionDescriptor(name="Happy", emoji="😊", color="#fef9c3"),
    EmotionDescriptor(name="Sad", emoji="😢", color="#dbeafe"),
    EmotionDescriptor(name="Angry", emoji="😠", color="#fee2e2"),
    EmotionDescriptor(name="Surprised", emoji="😲", color="#f3e8ff"),
    EmotionDescriptor(name="Fearful", emoji="😨", color="#e0e7ff"),
    EmotionDescriptor(name="Disgusted", emoji="🤢", color="#dcfce7"),
    EmotionDescriptor(name="Neutral", emoji="😐", color="#f3f4f6"),
)


def match_emotion(name: Optional[str]) -> Optional[EmotionDescriptor]:
    """Case-insensitive lookup; returns None for unknown or empty names."""
    if not isinstance(name, str) or not name.strip():
        return None
    key = name.strip().lower()
    for e in EMOTIONS:
        if e.name.lower() == key:
            return e
    return None


def hex_to_bgr(color: str) -> Tuple[int, int, int]:
    """'#rrggbb' -> OpenCV BGR tuple."""
    c = color.lstrip("#")
    r, g, b = int(c[0:2], 16), int(c[2:4], 16), int(c[4:6], 16)
    return (b, g, r)
