"""Cover-resize and strip masking of decoded images."""

import logging
from typing import Tuple, Union

import numpy as np
from PIL import Image, ImageOps

from dots_wallpaper.constants import DEFAULT_RESAMPLE, Resample
from dots_wallpaper.layout import Strip, strip_mask
from dots_wallpaper.loader import DecodedImage

logger = logging.getLogger(__name__)


def cover_resize(
    image: Image.Image,
    size: Tuple[int, int],
    resample: Union[Resample, str] = DEFAULT_RESAMPLE,
) -> Image.Image:
    """
    Scale ``image`` uniformly until it covers ``size``, then crop the overflow
    around the centre. The source aspect ratio is preserved; tiny sources are
    upscaled.
    """
    resample = Resample(resample)
    if image.size == size:
        return image.copy()
    return ImageOps.fit(image, size, method=resample.filter, centering=(0.5, 0.5))


def to_array(image: Image.Image) -> Tuple[np.ndarray, np.ndarray]:
    """
    Convert an ``RGBA`` image to ``(color, alpha)`` float32 arrays in [0, 1]
    with shapes ``(height, width, 3)`` and ``(height, width, 1)``.
    """
    if image.mode != "RGBA":
        image = image.convert("RGBA")
    array = np.asarray(image, dtype=np.float32) / 255.0
    return array[:, :, :3], array[:, :, 3:]


def transform_strip(
    decoded: DecodedImage,
    strip: Strip,
    resample: Union[Resample, str] = DEFAULT_RESAMPLE,
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Fit ``decoded`` into the bounding box of ``strip``.

    Returns ``(color, shape, alpha)`` float32 arrays covering the strip bbox.
    ``shape`` is 1 inside the strip and 0 outside; ``alpha`` is the source
    opacity restricted to the shape.
    """
    assert not strip.is_empty(), "Cannot transform into an empty strip"
    logger.debug(
        "Fitting %s into strip %d %r" % (decoded.path, strip.index, strip.bbox)
    )
    image = cover_resize(decoded.image, (strip.width, strip.height), resample)
    color, alpha = to_array(image)
    shape = np.expand_dims(strip_mask(strip).astype(np.float32), 2)
    return color, shape, alpha * shape
