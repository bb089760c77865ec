import json
from core.models import EmotionDescriptor
from scripts.cli import main


def test_cli_rejects_bad_url(cameras, tickers, capsys):
    assert main(["--url", "not-a-url", "--seconds", "0.1"]) == 1
    assert "valid API URL" in capsys.readouterr().err
    assert cameras == []


def test_cli_prints_emotion_changes(monkeypatch, cameras, tickers, capsys):
    import core.display as display
    seq = iter([None, EmotionDescriptor(name="Sad", emoji="😢", color="#dbeafe")])
    last = {"v": None}
    def fake_current(self):
        last["v"] = next(seq, last["v"])
        return last["v"]
    monkeypatch.setattr(display.EmotionDisplay, "current", property(fake_current))

    assert main(["--url", "http://detector.test/x", "--camera", "2", "--interval", "5", "--seconds", "0.35"]) == 0
    lines = [json.loads(l) for l in capsys.readouterr().out.splitlines()]
    assert [l["name"] for l in lines] == ["Sad"]
    assert tickers[0].period == 5
    assert cameras[0].released == 1
