"""
Image loader.

Turns candidate paths into decoded images. A path that cannot be read or
decoded yields a :py:class:`DecodeFailure` instead of raising, so a single
bad input never aborts a run. Failures are reported as warnings in input
order, one line per path.

Example::

    from dots_wallpaper import loader

    outcomes = loader.load_all(["a.png", "missing.jpg", "b.bmp"], jobs=4)
    images = loader.valid_images(outcomes)
"""

import logging
import warnings
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Union

from attrs import define, field
from PIL import Image

from dots_wallpaper import formats
from dots_wallpaper.constants import FailureReason

logger = logging.getLogger(__name__)


@define(eq=False)
class DecodedImage:
    """
    A successfully decoded source image.

    .. py:attribute:: path

        Path the image was read from.

    .. py:attribute:: format

        Sniffed format name, e.g. ``"PNG"``.

    .. py:attribute:: image

        8-bit ``RGBA`` :py:class:`PIL.Image.Image`.
    """

    path: str
    format: str
    image: Image.Image = field(repr=False)

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height

    @property
    def size(self) -> tuple[int, int]:
        return self.image.size


@define(frozen=True)
class DecodeFailure:
    """A candidate path that did not produce an image."""

    path: str
    reason: FailureReason
    detail: str = ""

    @property
    def message(self) -> str:
        if self.detail:
            return "Skipping %s: %s (%s)" % (self.path, self.reason, self.detail)
        return "Skipping %s: %s" % (self.path, self.reason)


Outcome = Union[DecodedImage, DecodeFailure]


def load(path: str) -> Outcome:
    """Read and decode a single candidate path."""
    try:
        with open(path, "rb") as f:
            data = f.read()
    except FileNotFoundError as e:
        return DecodeFailure(path, FailureReason.NOT_FOUND, _describe(e))
    except PermissionError as e:
        return DecodeFailure(path, FailureReason.PERMISSION_DENIED, _describe(e))
    except IsADirectoryError as e:
        return DecodeFailure(path, FailureReason.NOT_A_FILE, _describe(e))
    except OSError as e:
        return DecodeFailure(path, FailureReason.UNREADABLE, _describe(e))

    if not data:
        return DecodeFailure(path, FailureReason.EMPTY)

    format_name = formats.sniff(data)
    if format_name is None:
        return DecodeFailure(
            path, FailureReason.UNSUPPORTED, "unrecognized file signature"
        )

    try:
        image = formats.decode(data, format_name)
    except Image.UnidentifiedImageError:
        return DecodeFailure(
            path, FailureReason.CORRUPT, "cannot identify %s data" % format_name
        )
    except Exception as e:
        # Pillow plugins raise arbitrary errors on malformed content.
        return DecodeFailure(path, FailureReason.CORRUPT, _describe(e))

    logger.debug("Loaded %s as %s %dx%d" % (path, format_name, *image.size))
    return DecodedImage(path, format_name, image)


def load_all(paths: Iterable[str], jobs: int = 1) -> List[Outcome]:
    """
    Load every candidate path and report failures.

    Outcomes are returned in input order, duplicates included. With
    ``jobs > 1`` paths are decoded on a thread pool; warnings are still
    emitted in input order once all outcomes are known. Warnings issued by
    the Pillow decoders themselves are only logged at debug level.
    """
    paths = list(paths)
    if jobs < 1:
        raise ValueError("jobs must be at least 1: %r" % jobs)

    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        if jobs == 1 or len(paths) <= 1:
            outcomes = [load(path) for path in paths]
        else:
            with ThreadPoolExecutor(max_workers=jobs) as executor:
                outcomes = list(executor.map(load, paths))
    for message in caught:
        logger.debug("Decoder warning: %s" % message.message)

    for outcome in outcomes:
        if isinstance(outcome, DecodeFailure):
            logger.warning(outcome.message)
    return outcomes


def valid_images(outcomes: Iterable[Outcome]) -> List[DecodedImage]:
    """Return the decoded images in their original order."""
    return [outcome for outcome in outcomes if isinstance(outcome, DecodedImage)]


def _describe(error: BaseException) -> str:
    text = getattr(error, "strerror", None) or str(error) or type(error).__name__
    return " ".join(text.split())
