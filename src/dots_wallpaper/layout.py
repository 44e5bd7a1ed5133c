"""
Strip layout calculation.

The canvas is divided into ``count`` strips, left to right. At angle 0 the
strips are axis-aligned rectangles. Otherwise every boundary between two
strips is a line through a point on the baseline (the horizontal centre line
of the canvas) that moves ``tan(angle)`` pixels to the right for every row
down, turning the strips into parallelograms. The outer edges of the first
and last strips are pushed out by the overdraw margin ``|height * tan(angle)|``
so that the canvas corners are covered, and each parallelogram is clipped
back to the canvas rectangle.

A pixel belongs to the strip whose half-open interval
``[left_edge, right_edge)`` contains the pixel centre on its row, so the
strip masks partition the canvas exactly.

Example::

    from dots_wallpaper.layout import CanvasSpec, compute_layout, strip_mask

    spec = CanvasSpec(800, 600, 20.0)
    for strip in compute_layout(spec, 3):
        mask = strip_mask(strip)
"""

import logging
import math
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np
from attrs import define, field

from dots_wallpaper.validators import finite, instance_of, range_

logger = logging.getLogger(__name__)

Point = Tuple[float, float]
BBox = Tuple[int, int, int, int]

#: Slopes smaller than this are treated as vertical boundaries.
_EPSILON = 1e-12


@define(frozen=True)
class CanvasSpec:
    """
    Target canvas size and shear angle.

    .. py:attribute:: width

        Canvas width in pixels, at least 1.

    .. py:attribute:: height

        Canvas height in pixels, at least 1.

    .. py:attribute:: angle

        Shear angle of the strip boundaries in degrees from vertical.
    """

    width: int = field(validator=[instance_of(int), range_(1, math.inf)])
    height: int = field(validator=[instance_of(int), range_(1, math.inf)])
    angle: float = field(default=0.0, converter=float, validator=finite)

    @property
    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)

    @property
    def viewbox(self) -> BBox:
        return (0, 0, self.width, self.height)

    @property
    def slope(self) -> float:
        """Horizontal shift of a boundary per row, ``tan(angle)``."""
        slope = math.tan(math.radians(self.angle))
        return 0.0 if abs(slope) < _EPSILON else slope

    @property
    def baseline(self) -> float:
        return self.height / 2.0


@define(frozen=True)
class Edge:
    """A strip boundary, ``x = x0 + (y - baseline) * slope``."""

    x0: float
    slope: float = 0.0
    baseline: float = 0.0

    def at(self, y: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
        if self.slope == 0.0:
            return self.x0 + 0.0 * y
        return self.x0 + (y - self.baseline) * self.slope


@define(frozen=True)
class Strip:
    """
    One region of the canvas.

    .. py:attribute:: index

        Position of the strip, 0 is the leftmost.

    .. py:attribute:: left

        Left boundary :py:class:`Edge`.

    .. py:attribute:: right

        Right boundary :py:class:`Edge`.

    .. py:attribute:: polygon

        Vertices of the strip clipped to the canvas, clockwise from the top
        left. Empty when the strip does not reach into the canvas.

    .. py:attribute:: bbox

        Integer bounding box ``(left, top, right, bottom)`` of the polygon,
        ``(0, 0, 0, 0)`` when empty.
    """

    index: int
    left: Edge
    right: Edge
    polygon: Tuple[Point, ...] = field(repr=False)
    bbox: BBox

    @property
    def width(self) -> int:
        return self.bbox[2] - self.bbox[0]

    @property
    def height(self) -> int:
        return self.bbox[3] - self.bbox[1]

    def is_empty(self) -> bool:
        return self.bbox == (0, 0, 0, 0)

    def is_sheared(self) -> bool:
        return self.left.slope != 0.0 or self.right.slope != 0.0


def strip_widths(width: int, count: int) -> List[int]:
    """
    Split ``width`` into ``count`` baseline widths.

    Every strip gets ``width // count`` pixels and the last one absorbs the
    remainder, so the widths always sum to ``width``.
    """
    if count < 1:
        raise ValueError("count must be at least 1: %r" % count)
    base = width // count
    widths = [base] * count
    widths[-1] += width - base * count
    return widths


def compute_layout(spec: CanvasSpec, count: int) -> List[Strip]:
    """Compute ``count`` strips tiling the canvas described by ``spec``."""
    if count < 1:
        raise ValueError("count must be at least 1: %r" % count)

    if count == 1:
        # A single image covers the whole canvas without shear.
        edges = [Edge(0.0), Edge(float(spec.width))]
        return [_make_strip(spec, 0, edges[0], edges[1])]

    slope = spec.slope
    baseline = spec.baseline
    margin = abs(spec.height * slope)

    positions = [0.0]
    for w in strip_widths(spec.width, count):
        positions.append(positions[-1] + w)
    positions[0] -= margin
    positions[-1] += margin

    edges = [Edge(x, slope, baseline) for x in positions]
    strips = [
        _make_strip(spec, index, edges[index], edges[index + 1])
        for index in range(count)
    ]
    logger.debug(
        "Layout %dx%d at %g degrees: %s"
        % (spec.width, spec.height, spec.angle, [s.bbox for s in strips])
    )
    return strips


def strip_mask(strip: Strip, bbox: Optional[BBox] = None) -> np.ndarray:
    """
    Return the boolean pixel mask of ``strip`` over ``bbox``.

    The mask has shape ``(height, width)`` of the bbox, which defaults to
    the strip's own bounding box.
    """
    left, top, right, bottom = strip.bbox if bbox is None else bbox
    ys = np.arange(top, bottom, dtype=np.float64) + 0.5
    xs = np.arange(left, right, dtype=np.float64) + 0.5
    lo = np.expand_dims(strip.left.at(ys), 1)
    hi = np.expand_dims(strip.right.at(ys), 1)
    xs = np.expand_dims(xs, 0)
    return (xs >= lo) & (xs < hi)


def clip_polygon(polygon: Sequence[Point], viewbox: BBox) -> List[Point]:
    """Clip a convex polygon to a rectangle (Sutherland-Hodgman)."""
    x_min, y_min, x_max, y_max = viewbox
    planes = (
        (lambda p: p[0] >= x_min, lambda a, b: _cross_x(a, b, x_min)),
        (lambda p: p[1] >= y_min, lambda a, b: _cross_y(a, b, y_min)),
        (lambda p: p[0] <= x_max, lambda a, b: _cross_x(a, b, x_max)),
        (lambda p: p[1] <= y_max, lambda a, b: _cross_y(a, b, y_max)),
    )
    points = list(polygon)
    for inside, intersect in planes:
        if not points:
            break
        clipped = []
        previous = points[-1]
        for current in points:
            if inside(current):
                if not inside(previous):
                    clipped.append(intersect(previous, current))
                clipped.append(current)
            elif inside(previous):
                clipped.append(intersect(previous, current))
            previous = current
        points = clipped
    return points


def polygon_bbox(polygon: Sequence[Point], viewbox: BBox) -> BBox:
    """Integer bounding box of ``polygon`` clamped to ``viewbox``."""
    if len(polygon) < 3:
        return (0, 0, 0, 0)
    xs = [p[0] for p in polygon]
    ys = [p[1] for p in polygon]
    bbox = (
        max(viewbox[0], int(math.floor(min(xs)))),
        max(viewbox[1], int(math.floor(min(ys)))),
        min(viewbox[2], int(math.ceil(max(xs)))),
        min(viewbox[3], int(math.ceil(max(ys)))),
    )
    if bbox[0] >= bbox[2] or bbox[1] >= bbox[3]:
        return (0, 0, 0, 0)
    return bbox


def _make_strip(spec: CanvasSpec, index: int, left: Edge, right: Edge) -> Strip:
    top, bottom = 0.0, float(spec.height)
    parallelogram = (
        (float(left.at(top)), top),
        (float(right.at(top)), top),
        (float(right.at(bottom)), bottom),
        (float(left.at(bottom)), bottom),
    )
    polygon = tuple(clip_polygon(parallelogram, spec.viewbox))
    return Strip(index, left, right, polygon, polygon_bbox(polygon, spec.viewbox))


def _cross_x(a: Point, b: Point, x: float) -> Point:
    t = (x - a[0]) / (b[0] - a[0])
    return (x, a[1] + t * (b[1] - a[1]))


def _cross_y(a: Point, b: Point, y: float) -> Point:
    t = (y - a[1]) / (b[1] - a[1])
    return (a[0] + t * (b[0] - a[0]), y)
