"""
Exceptions raised by dots_wallpaper.
"""


class Error(Exception):
    """Base class for dots_wallpaper errors."""


class EncodeError(Error):
    """The composed canvas could not be written to the output path."""

    def __init__(self, path: str, reason: str):
        super().__init__("Cannot write %s: %s" % (path, reason))
        self.path = path
        self.reason = reason
