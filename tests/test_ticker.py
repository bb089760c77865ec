import threading
from core.ticker import Ticker


def test_ticker_fires_until_cancelled():
    calls = {"n": 0}
    fired = threading.Event()
    def cb():
        calls["n"] += 1
        if calls["n"] >= 3:
            fired.set()
    t = Ticker(cb, period=0.01)
    t.start()
    assert fired.wait(5)
    t.cancel()
    t.join(2)
    assert not t.is_alive()
    assert t.cancelled
    assert calls["n"] >= 3


def test_ticker_survives_callback_errors():
    fired = threading.Event()
    calls = {"n": 0}
    def cb():
        calls["n"] += 1
        if calls["n"] == 1:
            raise RuntimeError("boom")
        fired.set()
    t = Ticker(cb, period=0.01)
    t.start()
    assert fired.wait(5)
    t.cancel()
    t.join(2)
