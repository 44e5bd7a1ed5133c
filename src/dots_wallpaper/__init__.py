"""
dots-wallpaper: compose one wallpaper out of angled strips of source images.

Basic usage::

    from dots_wallpaper import CanvasSpec, create_wallpaper

    create_wallpaper(
        "wallpaper.png", CanvasSpec(1920, 1080, 20.0), ["a.jpg", "b.png", "c.webp"]
    )

Architecture:

- :py:mod:`dots_wallpaper.formats`: Content sniffing and decoding per format
- :py:mod:`dots_wallpaper.loader`: Per-path loading with failure isolation
- :py:mod:`dots_wallpaper.layout`: Strip geometry at a shear angle
- :py:mod:`dots_wallpaper.transform`: Cover-resize and strip masking
- :py:mod:`dots_wallpaper.composite`: Canvas painting and fallback policy
- :py:mod:`dots_wallpaper.encoder`: Atomic, deterministic output encoding
"""

from dots_wallpaper.api import CompositeResult, create_wallpaper
from dots_wallpaper.composite import compose
from dots_wallpaper.layout import CanvasSpec
from dots_wallpaper.version import __version__

__all__ = [
    "CanvasSpec",
    "CompositeResult",
    "compose",
    "create_wallpaper",
    "__version__",
]
