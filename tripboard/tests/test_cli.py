"""
Tests for the command line interface.
"""

import json

import cv2
import pytest

from tripboard.cli import build_parser
from tripboard.core import CanvasSession


def run(argv):
    args = build_parser().parse_args(argv)
    args.fn(args)


class TestTransitCommand:
    def test_lists_options(self, capsys):
        run(["transit", "40", "1500"])
        out = capsys.readouterr().out
        assert "40.0 km:" in out
        assert "Public transit" in out
        assert "Flight" in out

    def test_json_output(self, capsys):
        run(["transit", "--json", "900"])
        data = json.loads(capsys.readouterr().out)
        assert [o["mode"] for o in data["900.0"]] == ["drive", "flight"]


class TestReplayCommand:
    def test_replay_writes_image(self, tmp_path, capsys):
        script = tmp_path / "trip.json"
        script.write_text(
            json.dumps(
                [
                    {"tool": "LOCATION_PIN"},
                    {"option": {"name": "label", "value": "Paris, France"}},
                    {"down": [50, 50]},
                    {"up": [50, 50]},
                    {"option": {"name": "label", "value": "Rome, Italy"}},
                    {"down": [250, 50]},
                    {"up": [250, 50]},
                    {"tool": "TRANSIT"},
                    {"down": [50, 50]},
                    {"move": [250, 50]},
                    {"tick": 0.6},
                    {"up": [250, 50]},
                    {"tool": "DOODLE"},
                    {"down": [10, 100]},
                    {"move": [100, 120]},
                    {"up": [100, 120]},
                    {"undo": True},
                ]
            )
        )
        output = tmp_path / "out" / "trip.png"
        run(["replay", str(script), str(output), "--width", "300", "--height", "150"])

        image = cv2.imread(str(output))
        assert image.shape == (150, 300, 3)
        summary = json.loads(capsys.readouterr().out)
        assert [p["label"] for p in summary["pins"]] == ["Paris, France", "Rome, Italy"]
        assert summary["lines"][0]["distance"] == 100

    def test_malformed_action(self, cfg):
        from tripboard.cli.replay.replay import run_script

        session = CanvasSession(cfg)
        session.mount(100, 100)
        with pytest.raises(ValueError):
            run_script(session, [{"jump": [1, 2]}])
        with pytest.raises(ValueError):
            run_script(session, [{"down": [1, 2], "up": [1, 2]}])
        with pytest.raises(ValueError):
            run_script(session, {"down": [1, 2]})

    def test_press_button(self, cfg):
        from tripboard.cli.replay.replay import run_script

        session = CanvasSession(cfg)
        session.mount(100, 100)
        run_script(
            session,
            [{"down": [10, 10]}, {"move": [50, 50]}, {"up": [50, 50]}, {"press": "undo"}],
        )
        assert session.history.step == 0
