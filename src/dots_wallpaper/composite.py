"""
Strip compositing.

:py:func:`compose` implements the whole policy: a blank canvas when there
is nothing to paint, a plain cover-resize for a single image, and angled
strips otherwise. :py:class:`Compositor` holds the opaque canvas the strips
are painted onto.
"""

import logging
from typing import List, Tuple, Union

import numpy as np
from PIL import Image

from dots_wallpaper import utils
from dots_wallpaper.constants import DEFAULT_BACKGROUND, DEFAULT_RESAMPLE, Resample
from dots_wallpaper.layout import CanvasSpec, compute_layout
from dots_wallpaper.loader import DecodedImage
from dots_wallpaper.transform import cover_resize, to_array, transform_strip

logger = logging.getLogger(__name__)

RGB = Tuple[int, int, int]


def compose(
    spec: CanvasSpec,
    images: List[DecodedImage],
    resample: Union[Resample, str] = DEFAULT_RESAMPLE,
    background: RGB = DEFAULT_BACKGROUND,
) -> Image.Image:
    """
    Compose the decoded ``images`` into one ``RGB`` canvas.

    Images are popped from ``images`` as soon as their strip is painted, so
    at most one source image is alive besides the canvas once the caller
    drops its own references.

    Args:
        spec: Canvas size and shear angle
        images: Decoded images in input order, duplicates included
        resample: Resampling filter for cover-resizing
        background: Canvas fill and alpha flattening colour

    Returns:
        PIL Image in mode ``RGB`` with the size of ``spec``
    """
    compositor = Compositor(spec.size, background)
    count = len(images)

    if count == 0:
        logger.info("No valid images, creating a blank canvas.")
        return compositor.finish()

    if count == 1:
        logger.info("Only one image, resizing it to the canvas.")
        decoded = images.pop()
        image = cover_resize(decoded.image, spec.size, resample)
        del decoded
        color, alpha = to_array(image)
        compositor.apply(color, np.ones_like(alpha), alpha, spec.viewbox)
        return compositor.finish()

    logger.info("Compositing %d strips at %g degrees." % (count, spec.angle))
    for strip in compute_layout(spec, count):
        decoded = images.pop(0)
        if strip.is_empty():
            logger.debug(
                "Strip %d of %s is outside the canvas" % (strip.index, decoded.path)
            )
            continue
        color, shape, alpha = transform_strip(decoded, strip, resample)
        del decoded
        compositor.apply(color, shape, alpha, strip.bbox)
    return compositor.finish()


class Compositor(object):
    """Composite context.

    Example::

        compositor = Compositor((800, 600))
        for strip in strips:
            compositor.apply(color, shape, alpha, strip.bbox)
        image = compositor.finish()
    """

    def __init__(
        self,
        size: Tuple[int, int],
        background: RGB = DEFAULT_BACKGROUND,
    ):
        width, height = size
        self._viewport = (0, 0, width, height)
        self._background = np.array(background[:3], dtype=np.float32) / 255.0
        self._canvas = np.empty((height, width, 3), dtype=np.uint8)
        self._canvas[:, :] = utils.to_uint8(self._background)

    def apply(
        self,
        color: np.ndarray,
        shape: np.ndarray,
        alpha: np.ndarray,
        bbox: Tuple[int, int, int, int],
    ) -> None:
        """
        Paint a source given in ``bbox`` coordinates onto the canvas.

        Pixels are written where ``shape`` is non-zero. Their colour is first
        flattened onto the background using ``alpha``.
        """
        inter = utils.intersect(self._viewport, bbox)
        if inter == (0, 0, 0, 0):
            logger.debug("Out of viewport %r" % (bbox,))
            return

        b = (
            inter[0] - bbox[0],
            inter[1] - bbox[1],
            inter[2] - bbox[0],
            inter[3] - bbox[1],
        )
        color = color[b[1] : b[3], b[0] : b[2], :]
        alpha = alpha[b[1] : b[3], b[0] : b[2], :]
        covered = shape[b[1] : b[3], b[0] : b[2], 0] > 0

        flat = utils.to_uint8(utils.flatten(color, alpha, self._background))
        view = self._canvas[inter[1] : inter[3], inter[0] : inter[2], :]
        view[covered] = flat[covered]

    def finish(self) -> Image.Image:
        return Image.fromarray(self._canvas.copy())

    @property
    def viewport(self) -> Tuple[int, int, int, int]:
        return self._viewport

    @property
    def width(self) -> int:
        return self._viewport[2] - self._viewport[0]

    @property
    def height(self) -> int:
        return self._viewport[3] - self._viewport[1]

    @property
    def canvas(self) -> np.ndarray:
        return self._canvas
