import logging
import os
import warnings

import pytest
from PIL import Image

from dots_wallpaper import formats
from dots_wallpaper.__main__ import main, parse_args

logger = logging.getLogger(__name__)

RED = (255, 0, 0)
GREEN = (0, 255, 0)


def _close(actual, expected, tolerance=8):
    return all(abs(a - e) <= tolerance for a, e in zip(actual, expected))


@pytest.mark.parametrize("argv", [["-h"], ["--version"]])
def test_info(argv):
    with pytest.raises(SystemExit) as excinfo:
        main(argv)
    assert excinfo.value.code == 0


@pytest.mark.parametrize(
    "argv",
    [
        [],
        ["out.png"],
        ["out.png", "1920x1080"],
        ["out.png", "1920", "20"],
        ["out.png", "1920X1080", "20"],
        ["out.png", "0x1080", "20"],
        ["out.png", "1920x-5", "20"],
        ["out.png", "1920x1080", "abc"],
        ["out.png", "1920x1080", "nan"],
        ["out.png", "1920x1080", "inf"],
        ["--format", "nope", "out.png", "1920x1080", "20"],
        ["--jobs", "0", "out.png", "1920x1080", "20"],
        ["--background", "notacolour", "out.png", "1920x1080", "20"],
        ["--resample", "cubic", "out.png", "1920x1080", "20"],
    ],
)
def test_invalid_arguments(argv):
    with pytest.raises(SystemExit) as excinfo:
        main(argv)
    assert excinfo.value.code == 2


def test_parse_args():
    args = parse_args(["out.png", "1920x1080", "-20", "a.png", "b.png"])
    assert args.output_path == "out.png"
    assert args.resolution == (1920, 1080)
    assert args.angle == -20.0
    assert args.images == ["a.png", "b.png"]
    assert args.format is None
    assert args.resample == "lanczos"
    assert args.background == (0, 0, 0)
    assert args.jobs == 1


def test_parse_options():
    args = parse_args(
        ["-f", "jpg", "-r", "nearest", "-b", "#ffffff", "-j", "3", "o", "2x2", "0"]
    )
    assert args.format == "JPEG"
    assert args.resample == "nearest"
    assert args.background == (255, 255, 255)
    assert args.jobs == 3
    assert args.images == []


def test_no_images(output_path):
    assert main([output_path, "64x48", "20"]) is None
    with Image.open(output_path) as image:
        assert image.format == "PNG"
        assert image.size == (64, 48)
        assert image.getextrema() == ((0, 0), (0, 0), (0, 0))


def test_vertical_seam(make_image, output_path):
    a = make_image("a.png", RED, (320, 240))
    b = make_image("b.jpg", GREEN, (320, 240), fmt="JPEG")
    assert main([output_path, "800x600", "0", a, b]) is None
    with Image.open(output_path) as image:
        image = image.convert("RGB")
        assert image.size == (800, 600)
        for y in (0, 300, 599):
            assert image.getpixel((0, y)) == RED
            assert image.getpixel((399, y)) == RED
            assert _close(image.getpixel((400, y)), GREEN)
            assert _close(image.getpixel((799, y)), GREEN)


def test_skips_corrupt_input(make_image, make_file, output_path, caplog):
    a = make_image("a.png", RED)
    bad = make_file("corrupt.png", b"\x89PNG\r\n\x1a\n" + b"\x00" * 32)
    b = make_image("b.png", GREEN)
    with caplog.at_level(logging.WARNING):
        assert main([output_path, "100x80", "45", a, bad, b]) is None
    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert "corrupt.png" in warnings[0].getMessage()
    with Image.open(output_path) as image:
        image = image.convert("RGB")
        assert image.getpixel((5, 40)) == RED
        assert image.getpixel((94, 40)) == GREEN


def test_warning_per_failure(make_image, tmp_path, output_path, caplog):
    paths = [
        make_image("a.png", RED),
        str(tmp_path / "missing.png"),
        str(tmp_path),
        make_image("b.bmp", GREEN, fmt="BMP"),
        str(tmp_path / "missing.jpg"),
    ]
    with caplog.at_level(logging.WARNING):
        assert main(["-j", "2", output_path, "50x50", "10"] + paths) is None
    warnings = [r.getMessage() for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 3
    assert "missing.png" in warnings[0]
    assert "missing.jpg" in warnings[2]


def test_write_failure(make_image, tmp_path, caplog):
    a = make_image("a.png", RED)
    output = str(tmp_path / "missing" / "out.png")
    with caplog.at_level(logging.ERROR):
        assert main([output, "10x10", "0", a]) == 1
    assert any(r.levelno == logging.ERROR for r in caplog.records)
    assert not os.path.exists(output)


def test_explicit_format(make_image, tmp_path):
    a = make_image("a.png", RED)
    output = str(tmp_path / "wallpaper")
    assert main(["--format", "bmp", output, "10x10", "0", a]) is None
    with Image.open(output) as image:
        assert image.format == "BMP"


def test_background_option(make_image, output_path):
    a = make_image("a.png", (255, 0, 0, 0), (10, 10), mode="RGBA")
    assert main(["-b", "white", output_path, "10x10", "0", a]) is None
    with Image.open(output_path) as image:
        assert image.convert("RGB").getpixel((5, 5)) == (255, 255, 255)


def test_deterministic(make_image, tmp_path):
    paths = [
        make_image("a.png", RED, (30, 90)),
        make_image("b.png", GREEN, (120, 40)),
        make_image("c.png", (0, 0, 255), (64, 64)),
    ]
    first, second = str(tmp_path / "first.png"), str(tmp_path / "second.png")
    assert main([first, "160x90", "30"] + paths) is None
    assert main(["-j", "3", second, "160x90", "30"] + paths) is None
    with open(first, "rb") as f, open(second, "rb") as g:
        assert f.read() == g.read()


@pytest.fixture
def broken_tiff(monkeypatch):
    """Make TIFF decoding fail the way malformed IFDs do."""
    decode = formats.decode

    def broken_decode(data, format_name):
        if format_name == "TIFF":
            warnings.warn("Truncated File Read")
            raise TypeError("'float' object cannot be interpreted as an integer")
        return decode(data, format_name)

    monkeypatch.setattr(formats, "decode", broken_decode)


def test_unexpected_decoder_error(make_image, output_path, caplog, broken_tiff):
    good = make_image("good.png", RED)
    bad = make_image("corrupt.tif", GREEN, fmt="TIFF")
    with caplog.at_level(logging.WARNING):
        assert main([output_path, "20x20", "0", good, bad]) is None
    warnings_ = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings_) == 1
    assert "corrupt.tif" in warnings_[0].getMessage()
    with Image.open(output_path) as image:
        assert image.convert("RGB").getpixel((10, 10)) == RED


def test_one_warning_line_per_skipped_input(
    make_image, tmp_path, output_path, caplog, broken_tiff
):
    paths = [
        make_image("g.png", RED),
        make_image("w.tif", GREEN, fmt="TIFF"),
        str(tmp_path / "nope.png"),
    ]
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        with caplog.at_level(logging.WARNING):
            assert main([output_path, "20x20", "0"] + paths) is None
    assert not caught
    messages = [r.getMessage() for r in caplog.records]
    assert len(messages) == 2
    assert "w.tif" in messages[0]
    assert "nope.png" in messages[1]


@pytest.mark.parametrize("name", ["wall.xbm", "wall.h5"])
def test_unusable_output_suffix(make_image, tmp_path, name):
    a = make_image("a.png", RED)
    output = str(tmp_path / name)
    assert main([output, "20x20", "0", a, a]) is None
    with Image.open(output) as image:
        assert image.format == "PNG"
        assert image.size == (20, 20)
