"""Rectangles and 2D affine transforms used for sprite placement and hit tests."""

from __future__ import annotations

import math
from dataclasses import dataclass

Point = tuple[float, float]


@dataclass(frozen=True)
class Rect:
    """An axis-aligned rectangle given by its top-left corner and size."""

    left: float
    top: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    @property
    def center(self) -> Point:
        return (self.left + self.width / 2.0, self.top + self.height / 2.0)

    def _extent(self) -> tuple[float, float, float, float]:
        x0, x1 = sorted((self.left, self.left + self.width))
        y0, y1 = sorted((self.top, self.top + self.height))
        return x0, y0, x1, y1

    def contains(self, x: float, y: float) -> bool:
        """True if the point lies inside; left and top edges count, right and bottom do not."""
        x0, y0, x1, y1 = self._extent()
        return x0 <= x < x1 and y0 <= y < y1

    def intersection(self, other: Rect) -> Rect | None:
        """The overlapping area of two rectangles, or None if they do not overlap."""
        ax0, ay0, ax1, ay1 = self._extent()
        bx0, by0, bx1, by1 = other._extent()
        left = max(ax0, bx0)
        top = max(ay0, by0)
        right = min(ax1, bx1)
        bottom = min(ay1, by1)
        if left < right and top < bottom:
            return Rect(left, top, right - left, bottom - top)
        return None

    def intersects(self, other: Rect) -> bool:
        return self.intersection(other) is not None


@dataclass(frozen=True)
class Transform:
    """An affine map: x' = a*x + b*y + tx, y' = c*x + d*y + ty."""

    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    d: float = 1.0
    tx: float = 0.0
    ty: float = 0.0

    def transform_point(self, x: float, y: float) -> Point:
        return (self.a * x + self.b * y + self.tx, self.c * x + self.d * y + self.ty)

    def inverse(self) -> Transform:
        """The inverse map; a singular transform yields the identity."""
        det = self.a * self.d - self.b * self.c
        if det == 0:
            return Transform()
        return Transform(
            self.d / det,
            -self.b / det,
            -self.c / det,
            self.a / det,
            (self.b * self.ty - self.d * self.tx) / det,
            (self.c * self.tx - self.a * self.ty) / det,
        )

    def transform_rect(self, rect: Rect) -> Rect:
        """The axis-aligned bounding box of a transformed rectangle."""
        corners = [
            self.transform_point(rect.left, rect.top),
            self.transform_point(rect.left, rect.bottom),
            self.transform_point(rect.right, rect.top),
            self.transform_point(rect.right, rect.bottom),
        ]
        xs = [p[0] for p in corners]
        ys = [p[1] for p in corners]
        return Rect(min(xs), min(ys), max(xs) - min(xs), max(ys) - min(ys))


def make_transform(origin: Point, position: Point, rotation: float, scale: Point) -> Transform:
    """Build the transform of an object scaled and rotated (clockwise, degrees) about its origin."""
    angle = -math.radians(rotation)
    cosine = math.cos(angle)
    sine = math.sin(angle)
    sx, sy = scale
    ox, oy = origin
    px, py = position
    sxc = sx * cosine
    syc = sy * cosine
    sxs = sx * sine
    sys_ = sy * sine
    tx = -ox * sxc - oy * sys_ + px
    ty = ox * sxs - oy * syc + py
    return Transform(sxc, sys_, -sxs, syc, tx, ty)