import numpy as np
import time
from core.display import EmotionDisplay, draw_detection, BOX_COLOR, INDICATOR_H, LEGEND_H
from core.emotions import hex_to_bgr
from core.models import DetectionResult


def test_draw_detection_box_and_tag():
    canvas = np.zeros((100, 200, 3), dtype=np.uint8)
    draw_detection(canvas, DetectionResult(emotion="Happy", bbox=[10, 20, 30, 40]))
    # box corners (10,20)-(40,60)
    assert tuple(canvas[40, 10]) == BOX_COLOR
    assert tuple(canvas[40, 40]) == BOX_COLOR
    assert tuple(canvas[20, 25]) == BOX_COLOR or tuple(canvas[21, 25]) == BOX_COLOR
    assert tuple(canvas[60, 25]) == BOX_COLOR
    assert not canvas[40, 25].any()
    # translucent tag above the box spans 150px wide
    assert canvas[2, 150].any()
    assert not canvas[2, 5].any()
    assert not canvas[2, 170].any()


def test_draw_detection_clips_outside_canvas():
    canvas = np.zeros((40, 40, 3), dtype=np.uint8)
    out = draw_detection(canvas, DetectionResult(emotion="Sad", bbox=[-20, -20, 500, 500]))
    assert out.shape == (40, 40, 3)


def test_render_matches_case_insensitively():
    d = EmotionDisplay(64, 64)
    d.show_frame(np.zeros((64, 64, 3), dtype=np.uint8))
    desc = d.render(DetectionResult(emotion="sUrPrIsEd", bbox=[5, 35, 10, 10]))
    assert desc.name == "Surprised"
    assert d.current.emoji == "😲"


def test_render_ignores_unknown_and_missing():
    d = EmotionDisplay(64, 64)
    d.show_frame(np.zeros((64, 64, 3), dtype=np.uint8))
    assert d.render(DetectionResult(emotion="Bored", bbox=[5, 35, 10, 10])) is None
    assert d.render(None) is None
    assert d.current is None
    # nothing drawn
    assert not d.snapshot().any()


def test_compose_layout_and_indicator_tint():
    d = EmotionDisplay(140, 80)
    view = d.compose()
    assert view.shape == (80 + INDICATOR_H + LEGEND_H, 140, 3)
    d.resize(140, 80)
    d.render(DetectionResult(emotion="Happy", bbox=[0, 40, 5, 5]))
    view = d.compose(processing=True)
    # left edge of the indicator panel carries the Happy tint
    assert tuple(view[80 + 2, 1]) == hex_to_bgr("#fef9c3")
    d.clear()
    view = d.compose()
    assert tuple(view[80 + 2, 1]) == (255, 255, 255)


def test_alert_banner_expires(monkeypatch):
    d = EmotionDisplay(100, 60)
    d.show_alert("boom", seconds=5)
    assert d.active_alert() == "boom"
    now = time.time()
    monkeypatch.setattr("core.display.time.time", lambda: now + 10)
    assert d.active_alert() is None
