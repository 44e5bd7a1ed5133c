import argparse
import logging
import math
import re
import sys
from typing import Optional, Tuple

from PIL import ImageColor

from dots_wallpaper import encoder
from dots_wallpaper.api import create_wallpaper
from dots_wallpaper.constants import DEFAULT_BACKGROUND, DEFAULT_RESAMPLE, Resample
from dots_wallpaper.exceptions import EncodeError
from dots_wallpaper.layout import CanvasSpec
from dots_wallpaper.version import __version__

logger = logging.getLogger(__name__)

_RESOLUTION = re.compile(r"(\d+)x(\d+)")


def resolution(value: str) -> Tuple[int, int]:
    """Parse ``<width>x<height>``."""
    match = _RESOLUTION.fullmatch(value)
    if match is None:
        raise argparse.ArgumentTypeError(
            "resolution must be <width>x<height>: %r" % value
        )
    width, height = int(match.group(1)), int(match.group(2))
    if width < 1 or height < 1:
        raise argparse.ArgumentTypeError(
            "width and height must be positive: %r" % value
        )
    return width, height


def angle(value: str) -> float:
    try:
        degrees = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError("angle must be a number: %r" % value)
    if not math.isfinite(degrees):
        raise argparse.ArgumentTypeError("angle must be finite: %r" % value)
    return degrees


def output_format(value: str) -> str:
    try:
        return encoder.resolve_format("", value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def color(value: str) -> Tuple[int, int, int]:
    try:
        rgb = ImageColor.getrgb(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))
    return rgb[0], rgb[1], rgb[2]


def jobs(value: str) -> int:
    try:
        count = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError("jobs must be an integer: %r" % value)
    if count < 1:
        raise argparse.ArgumentTypeError("jobs must be at least 1: %r" % value)
    return count


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="dots-wallpaper",
        description="Compose one wallpaper out of angled strips of images.",
        epilog="Example: dots-wallpaper ./output.png 1920x1080 20 a.jpg b.png",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Be more verbose.")
    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument(
        "-f",
        "--format",
        type=output_format,
        default=None,
        help="Output encoding, e.g. PNG or JPEG (default: from the output "
        "suffix, PNG when unknown).",
    )
    parser.add_argument(
        "-r",
        "--resample",
        choices=[r.value for r in Resample],
        default=DEFAULT_RESAMPLE.value,
        help="Resampling filter [default: %(default)s].",
    )
    parser.add_argument(
        "-b",
        "--background",
        type=color,
        default=DEFAULT_BACKGROUND,
        help="Canvas and transparency background colour [default: black].",
    )
    parser.add_argument(
        "-j",
        "--jobs",
        type=jobs,
        default=1,
        help="Number of decoding threads [default: %(default)s].",
    )
    parser.add_argument("output_path", help="Output image file")
    parser.add_argument(
        "resolution", type=resolution, help="Canvas size as <width>x<height>"
    )
    parser.add_argument(
        "angle", type=angle, help="Strip angle in degrees, 0 is vertical"
    )
    parser.add_argument("images", nargs="*", help="Source images, left to right")

    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> Optional[int]:
    args = parse_args(argv)

    logging.basicConfig(level=logging.WARNING, format="%(levelname)s: %(message)s")
    package_logger = logging.getLogger("dots_wallpaper")
    if args.verbose:
        package_logger.setLevel(logging.DEBUG)
    else:
        package_logger.setLevel(logging.WARNING)

    width, height = args.resolution
    spec = CanvasSpec(width, height, args.angle)
    try:
        result = create_wallpaper(
            args.output_path,
            spec,
            args.images,
            jobs=args.jobs,
            resample=args.resample,
            fmt=args.format,
            background=args.background,
        )
    except EncodeError as e:
        logger.error(str(e))
        return 1

    logger.debug(
        "Used %d of %d images, skipped %s"
        % (result.strips, len(args.images), list(result.skipped))
    )
    return None


if __name__ == "__main__":
    sys.exit(main())
