import base64
import json
import os
import sys

import pytest

# Offscreen platform for Qt
os.environ["QT_QPA_PLATFORM"] = "offscreen"
from PySide6.QtWidgets import QApplication

from cardwizard.main import main
from cardwizard.utils.qt_helpers import solid_png

app = QApplication.instance() or QApplication(sys.argv)


@pytest.fixture
def deck_file(tmp_path):
    png = base64.b64encode(solid_png(10, 14)).decode("ascii")
    data = {
        "name": "Minis",
        "width": 44.45,
        "height": 63.5,
        "paperSize": "letter",
        "cards": [
            {"id": "a", "data": {}, "count": 12, "frontStyleId": "f"},
            {"id": "b", "data": {}, "count": 1},
        ],
        "renderedCards": [
            {"styleId": "f", "side": "front", "image": "data:image/png;base64," + png},
        ],
    }
    path = tmp_path / "deck.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_layout_only_prints_grid(deck_file, capsys):
    assert main([str(deck_file), "--layout-only"]) == 0
    summary = json.loads(capsys.readouterr().out)
    assert summary["cardsPerRow"] == 4
    assert summary["cardsPerCol"] == 3
    assert summary["totalCards"] == 13
    assert summary["totalPages"] == 4


def test_paper_override(deck_file, capsys):
    assert main([str(deck_file), "--layout-only", "--paper", "a4"]) == 0
    summary = json.loads(capsys.readouterr().out)
    assert summary["paperSize"] == "a4"
    assert summary["pageWidth"] == 210.0


def test_export_writes_pdf(deck_file, tmp_path):
    out = tmp_path / "minis.pdf"
    assert main([str(deck_file), "--export", str(out), "--cut-guides", "--dpi", "150"]) == 0
    assert out.read_bytes().startswith(b"%PDF")


@pytest.mark.parametrize(
    "extra",
    [
        [],                                  # no --export
        ["--export", "out.txt"],             # wrong extension
        ["--export", "/no/such/dir/x.pdf"],  # missing directory
    ],
)
def test_bad_export_arguments_exit_2(deck_file, extra, capsys):
    with pytest.raises(SystemExit) as exc:
        main([str(deck_file), *extra])
    assert exc.value.code == 2
    assert "Error:" in capsys.readouterr().err


def test_missing_deck_exits_2(tmp_path):
    with pytest.raises(SystemExit) as exc:
        main([str(tmp_path / "missing.json"), "--layout-only"])
    assert exc.value.code == 2


def test_invalid_deck_exits_2(tmp_path, capsys):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"width": 0, "height": 10}), encoding="utf-8")
    with pytest.raises(SystemExit) as exc:
        main([str(path), "--layout-only"])
    assert exc.value.code == 2
    assert "Validation Error in width" in capsys.readouterr().err
