"""
High-level entry point tying the loader, compositor and encoder together.

Example::

    from dots_wallpaper import CanvasSpec, create_wallpaper

    result = create_wallpaper(
        "wallpaper.png", CanvasSpec(1920, 1080, 20.0), ["a.jpg", "b.png"]
    )
    print(result.strips, result.skipped)
"""

import logging
from typing import Iterable, List, Optional, Tuple, Union

from attrs import define, field

from dots_wallpaper import encoder, loader
from dots_wallpaper.composite import compose
from dots_wallpaper.constants import DEFAULT_BACKGROUND, DEFAULT_RESAMPLE, Resample
from dots_wallpaper.layout import CanvasSpec

logger = logging.getLogger(__name__)


@define(frozen=True)
class CompositeResult:
    """Summary of a finished run."""

    output_path: str
    format: str
    strips: int
    skipped: Tuple[str, ...] = field(factory=tuple)


def create_wallpaper(
    output_path: str,
    spec: CanvasSpec,
    paths: Iterable[str],
    jobs: int = 1,
    resample: Union[Resample, str] = DEFAULT_RESAMPLE,
    fmt: Optional[str] = None,
    background: Tuple[int, int, int] = DEFAULT_BACKGROUND,
) -> CompositeResult:
    """
    Build the wallpaper for ``paths`` and write it to ``output_path``.

    Unreadable inputs are skipped with a warning. Only a failure to write the
    output raises (:py:exc:`~dots_wallpaper.exceptions.EncodeError`).
    """
    outcomes = loader.load_all(paths, jobs=jobs)
    skipped = tuple(
        outcome.path
        for outcome in outcomes
        if isinstance(outcome, loader.DecodeFailure)
    )
    images: List[loader.DecodedImage] = loader.valid_images(outcomes)
    del outcomes
    strips = len(images)

    image = compose(spec, images, resample=resample, background=background)
    format_name = encoder.save(image, output_path, fmt)
    return CompositeResult(output_path, format_name, strips, skipped)
