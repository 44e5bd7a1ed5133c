"""
Content sniffing and decoding of the supported source image formats.

Every supported format registers a sniffer keyed by its Pillow format name.
A sniffer inspects the leading bytes of a file and returns ``True`` when it
recognizes its signature; file extensions are never consulted. Decoding is
delegated to Pillow, restricted to the sniffed format, and always yields an
8-bit ``RGBA`` image of the first frame.

Example::

    from dots_wallpaper import formats

    name = formats.sniff(data)
    if name is not None:
        image = formats.decode(data, name)
"""

import io
import logging
from typing import List, Optional

from PIL import Image

from dots_wallpaper.registry import new_registry

logger = logging.getLogger(__name__)

#: Number of leading bytes the sniffers look at.
HEADER_SIZE = 16

SNIFFERS, register = new_registry(attribute="format_name")

_PNM_MAGIC = (b"P1", b"P2", b"P3", b"P4", b"P5", b"P6")


@register("PNG")
def _sniff_png(header: bytes) -> bool:
    return header.startswith(b"\x89PNG\r\n\x1a\n")


@register("JPEG")
def _sniff_jpeg(header: bytes) -> bool:
    return header.startswith(b"\xff\xd8\xff")


@register("GIF")
def _sniff_gif(header: bytes) -> bool:
    return header[:6] in (b"GIF87a", b"GIF89a")


@register("BMP")
def _sniff_bmp(header: bytes) -> bool:
    return header.startswith(b"BM")


@register("TIFF")
def _sniff_tiff(header: bytes) -> bool:
    return header[:4] in (b"II*\x00", b"MM\x00*")


@register("WEBP")
def _sniff_webp(header: bytes) -> bool:
    return header[:4] == b"RIFF" and header[8:12] == b"WEBP"


@register("PPM")
def _sniff_pnm(header: bytes) -> bool:
    """PBM, PGM and PPM in both plain and raw encodings."""
    return header[:2] in _PNM_MAGIC and header[2:3].isspace()


def supported_formats() -> List[str]:
    """Return the names of the registered formats in sniffing order."""
    return list(SNIFFERS)


def sniff(data: bytes) -> Optional[str]:
    """Return the format name matching the content, or ``None``."""
    header = data[:HEADER_SIZE]
    for name, sniffer in SNIFFERS.items():
        if sniffer(header):
            return name
    return None


def decode(data: bytes, format_name: str) -> Image.Image:
    """
    Decode ``data`` as ``format_name`` and return an ``RGBA`` image.

    Only the first frame of animated or multi-page images is used. Pillow
    errors (``OSError``, ``SyntaxError``, ``ValueError``, ...) propagate to
    the caller.
    """
    with Image.open(io.BytesIO(data), formats=[format_name]) as image:
        image.seek(0)
        image.load()
        logger.debug(
            "Decoded %s image %dx%d in mode %s"
            % (format_name, image.width, image.height, image.mode)
        )
        return _to_rgba(image)


def _to_rgba(image: Image.Image) -> Image.Image:
    if image.mode == "RGBA":
        return image.copy()
    if image.mode.startswith("I;16"):
        image = image.convert("I")
    if image.mode == "I":
        # 16-bit samples.
        image = image.point(lambda x: x * (1.0 / 256.0)).convert("L")
    elif image.mode == "F":
        image = image.convert("L")
    return image.convert("RGBA")
