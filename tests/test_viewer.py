import core.viewer as viewer
from core.config import Settings


def _keys(monkeypatch, *seq):
    pressed = list(seq)
    shown = []
    monkeypatch.setattr(viewer.cv2, "imshow", lambda title, img: shown.append(img.shape))
    monkeypatch.setattr(viewer.cv2, "waitKey", lambda d: pressed.pop(0) if pressed else ord("q"))
    monkeypatch.setattr(viewer.cv2, "destroyAllWindows", lambda: None)
    return shown


def test_run_viewer_toggle_and_quit(monkeypatch, cameras, tickers):
    # autostart, 's' stops, space starts again, 'q' quits
    shown = _keys(monkeypatch, -1, ord("s"), ord(" "), ord("q"))
    s = Settings(ENDPOINT_URL="http://detector.test/detect_emotion", POLL_INTERVAL=60)
    viewer.run_viewer(s)

    assert len(shown) == 4
    assert len(cameras) == 2
    assert all(c.released == 1 for c in cameras)
    assert [t.cancels for t in tickers] == [1, 1]


def test_run_viewer_invalid_url_does_not_open_camera(monkeypatch, cameras, tickers):
    shown = _keys(monkeypatch, ord("q"))
    viewer.run_viewer(Settings(POLL_INTERVAL=60), endpoint_url="localhost:5000")
    assert cameras == []
    assert len(shown) == 1
