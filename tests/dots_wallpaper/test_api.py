import logging

import pytest
from PIL import Image

from dots_wallpaper import CanvasSpec, CompositeResult, create_wallpaper
from dots_wallpaper.exceptions import EncodeError

logger = logging.getLogger(__name__)

RED = (255, 0, 0)
GREEN = (0, 255, 0)
BLUE = (0, 0, 255)


def test_create_wallpaper(make_image, make_file, tmp_path, output_path):
    missing = str(tmp_path / "missing.png")
    paths = [
        make_image("a.png", RED),
        missing,
        make_file("notes.txt", b"hello"),
        make_image("b.png", GREEN),
    ]
    result = create_wallpaper(output_path, CanvasSpec(90, 60, 15), paths)
    assert result == CompositeResult(
        output_path, "PNG", 2, (missing, paths[2])
    )
    with Image.open(output_path) as image:
        assert image.size == (90, 60)
        assert image.mode == "RGB"


def test_create_wallpaper_empty(output_path):
    result = create_wallpaper(output_path, CanvasSpec(8, 4), [])
    assert result.strips == 0
    assert result.skipped == ()
    with Image.open(output_path) as image:
        assert image.getpixel((0, 0)) == (0, 0, 0)


def test_create_wallpaper_duplicates(make_image, output_path):
    a = make_image("a.png", RED)
    b = make_image("b.png", BLUE)
    result = create_wallpaper(output_path, CanvasSpec(30, 10), [a, b, a])
    assert result.strips == 3
    with Image.open(output_path) as image:
        assert image.getpixel((0, 5)) == RED
        assert image.getpixel((15, 5)) == BLUE
        assert image.getpixel((29, 5)) == RED


def test_create_wallpaper_options(make_image, tmp_path):
    a = make_image("a.png", RED)
    output = str(tmp_path / "out.dat")
    result = create_wallpaper(
        output,
        CanvasSpec(10, 10),
        [a],
        jobs=2,
        resample="nearest",
        fmt="BMP",
        background=(255, 255, 255),
    )
    assert result.format == "BMP"
    with Image.open(output) as image:
        assert image.format == "BMP"


def test_create_wallpaper_write_failure(make_image, tmp_path):
    a = make_image("a.png", RED)
    with pytest.raises(EncodeError):
        create_wallpaper(str(tmp_path / "no" / "out.png"), CanvasSpec(4, 4), [a])
