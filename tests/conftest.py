import pytest

import core.capture as capture
from core.config import Settings
from tests.fakes import DummyCap, DummyTicker, DummyResponse


@pytest.fixture
def settings():
    return Settings(ENDPOINT_URL="http://detector.test/detect_emotion", POLL_INTERVAL=60)

@pytest.fixture
def cameras(monkeypatch):
    """Every VideoCapture() call returns (and records) a DummyCap."""
    opened = []
    def factory(idx):
        cap = DummyCap()
        opened.append(cap)
        return cap
    monkeypatch.setattr(capture.cv2, "VideoCapture", factory)
    return opened

@pytest.fixture
def tickers(monkeypatch):
    DummyTicker.instances = []
    monkeypatch.setattr(capture, "Ticker", DummyTicker)
    return DummyTicker.instances

@pytest.fixture
def happy_response():
    return DummyResponse({"results": [{"emotion": "Happy", "bbox": [10, 20, 30, 40]}]})
