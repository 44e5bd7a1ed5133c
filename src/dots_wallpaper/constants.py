"""
Various constants for dots_wallpaper
"""

from enum import Enum

from PIL import Image


class FailureReason(str, Enum):
    """
    Reason a candidate path did not produce a decoded image.
    """

    NOT_FOUND = "file not found"
    PERMISSION_DENIED = "permission denied"
    NOT_A_FILE = "not a regular file"
    UNREADABLE = "unreadable"
    EMPTY = "empty file"
    UNSUPPORTED = "unsupported format"
    CORRUPT = "malformed image data"

    def __str__(self) -> str:
        return self.value


class Resample(str, Enum):
    """
    Resampling filters accepted by the transformer.
    """

    NEAREST = "nearest"
    BILINEAR = "bilinear"
    BICUBIC = "bicubic"
    LANCZOS = "lanczos"

    @property
    def filter(self) -> Image.Resampling:
        return {
            Resample.NEAREST: Image.Resampling.NEAREST,
            Resample.BILINEAR: Image.Resampling.BILINEAR,
            Resample.BICUBIC: Image.Resampling.BICUBIC,
            Resample.LANCZOS: Image.Resampling.LANCZOS,
        }[self]


#: Encoding used when neither ``--format`` nor the output suffix names one.
DEFAULT_FORMAT = "PNG"

#: Canvas fill and alpha flattening colour.
DEFAULT_BACKGROUND = (0, 0, 0)

DEFAULT_RESAMPLE = Resample.LANCZOS
