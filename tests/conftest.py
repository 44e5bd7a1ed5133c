"""Pytest configuration for dots-wallpaper tests."""

import os
from typing import Callable, Tuple

import pytest
from PIL import Image


@pytest.fixture
def make_image(tmp_path) -> Callable[..., str]:
    """Write a solid colour image and return its path."""

    def _make(
        name: str,
        color: Tuple[int, ...] = (255, 0, 0),
        size: Tuple[int, int] = (100, 100),
        fmt: str = "PNG",
        mode: str = "RGB",
    ) -> str:
        path = os.path.join(str(tmp_path), name)
        Image.new(mode, size, color).save(path, format=fmt)
        return path

    return _make


@pytest.fixture
def make_file(tmp_path) -> Callable[[str, bytes], str]:
    """Write raw bytes and return the path."""

    def _make(name: str, data: bytes) -> str:
        path = os.path.join(str(tmp_path), name)
        with open(path, "wb") as f:
            f.write(data)
        return path

    return _make


@pytest.fixture
def output_path(tmp_path) -> str:
    return os.path.join(str(tmp_path), "output.png")
