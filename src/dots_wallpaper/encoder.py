"""
Encoding of the composed canvas.

The output format comes from, in order: an explicit format name, the output
path suffix as known to Pillow, or :py:data:`~dots_wallpaper.constants.DEFAULT_FORMAT`.
When the format only comes from the suffix and its writer cannot encode the
canvas, :py:data:`~dots_wallpaper.constants.DEFAULT_FORMAT` is used instead.
The encoded file is written next to its destination under a temporary name
and moved into place atomically, so a failed write never leaves a truncated
file.
"""

import io
import logging
import os
import stat
import tempfile
from typing import Optional

from PIL import Image

from dots_wallpaper.constants import DEFAULT_FORMAT
from dots_wallpaper.exceptions import EncodeError

logger = logging.getLogger(__name__)


def writable_formats() -> list[str]:
    """Return the Pillow format names that can be written."""
    Image.init()
    return sorted(Image.SAVE)


def resolve_format(path: str, fmt: Optional[str] = None) -> str:
    """
    Pick the encoding for ``path``.

    :raises ValueError: when ``fmt`` names a format Pillow cannot write.
    """
    Image.init()
    if fmt:
        name = fmt.upper()
        if name == "JPG":
            name = "JPEG"
        if name not in Image.SAVE:
            raise ValueError("Unsupported output format: %s" % fmt)
        return name

    suffix = os.path.splitext(path)[1].lower()
    name = Image.registered_extensions().get(suffix)
    if name is None or name not in Image.SAVE:
        logger.debug(
            "No writable format for suffix %r, using %s" % (suffix, DEFAULT_FORMAT)
        )
        return DEFAULT_FORMAT
    return name


def save(image: Image.Image, path: str, fmt: Optional[str] = None) -> str:
    """
    Encode ``image`` to ``path`` and return the format name used.

    :raises EncodeError: when the file cannot be written. No partial output
        is left behind.
    """
    format_name = resolve_format(path, fmt)
    try:
        data = _encode(image, format_name)
    except (OSError, ValueError, KeyError) as e:
        if fmt or format_name == DEFAULT_FORMAT:
            raise EncodeError(path, getattr(e, "strerror", None) or str(e)) from e
        # Some suffixes map to writers that cannot store RGB, or to stubs.
        logger.debug(
            "Cannot encode as %s (%s), using %s" % (format_name, e, DEFAULT_FORMAT)
        )
        format_name = DEFAULT_FORMAT
        data = _encode(image, format_name)

    directory = os.path.dirname(os.path.abspath(path))
    try:
        fd, temp_path = tempfile.mkstemp(
            prefix=".%s." % os.path.basename(path), suffix=".tmp", dir=directory
        )
    except OSError as e:
        raise EncodeError(path, e.strerror or str(e)) from e

    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        os.chmod(temp_path, _file_mode(path))
        os.replace(temp_path, path)
    except OSError as e:
        _remove(temp_path)
        raise EncodeError(path, getattr(e, "strerror", None) or str(e)) from e

    logger.info("Wallpaper saved to %s as %s" % (path, format_name))
    return format_name


def _encode(image: Image.Image, format_name: str) -> bytes:
    buffer = io.BytesIO()
    image.save(buffer, format=format_name)
    return buffer.getvalue()


def _file_mode(path: str) -> int:
    try:
        return stat.S_IMODE(os.stat(path).st_mode)
    except OSError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def _remove(path: str) -> None:
    try:
        os.unlink(path)
    except FileNotFoundError:
        pass
