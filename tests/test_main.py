import json
import logging

import pytest

from lqip import __version__
from lqip.main import main


def test_version(capsys):
    assert main(["-v"]) == 0
    assert capsys.readouterr().out.strip() == __version__
    assert main(["-version"]) == 0
    assert capsys.readouterr().out.strip() == __version__


def test_table_output(png_path, capsys):
    assert main(["-i", str(png_path)]) == 0
    out = capsys.readouterr().out
    assert out.startswith(f"File ::: {png_path}")
    for label in ("Height", "Width", "Aspect ratio", "Color Palette",
                  "Preview src", "Preview enhanced src"):
        assert label in out
    assert "0.750000" in out
    assert "data:image/png;base64," in out


def test_json_output_next_to_input(png_path):
    assert main(["-i", str(png_path), "-json"]) == 0
    data = json.loads(png_path.with_suffix(".json").read_text(encoding="utf-8"))
    assert data["height"] == 30
    assert data["width"] == 40
    assert data["aspectRatio"] == 0.75
    assert data["previewSrc"].startswith("data:image/png;base64,")
    assert data["previewEnhancedSrc"].startswith("data:image/png;base64,")
    assert isinstance(data["colorPalette"], dict)


def test_json_output_path(png_path, tmp_path):
    out = tmp_path / "out" / "lqip.json"
    assert main(["-i", str(png_path), "-o", str(out)]) == 0
    assert json.loads(out.read_text(encoding="utf-8"))["width"] == 40


def test_unsupported_format_exits_non_zero(make_image, caplog):
    bmp = make_image("photo.bmp", (20, 10))
    with caplog.at_level(logging.ERROR, logger="lqip"):
        assert main(["-i", str(bmp), "-json"]) == 1
    assert "Unsupported image format" in caplog.text
    assert not bmp.with_suffix(".json").exists()


def test_missing_file_exits_non_zero(tmp_path, caplog):
    with caplog.at_level(logging.ERROR, logger="lqip"):
        assert main(["-i", str(tmp_path / "nope.png")]) == 1
    assert "Cannot obtain image config from the file" in caplog.text


def test_input_is_required():
    with pytest.raises(SystemExit) as exc:
        main([])
    assert exc.value.code == 2
