"""Sprite collision tests: per-pixel alpha, circle and oriented bounding box."""

from __future__ import annotations

import math

import pygame

from towerdef.geometry import Point
from towerdef.sprite import Sprite, Texture


class BitmaskManager:
    """Caches the alpha channel of each texture as a flat byte string."""

    def __init__(self) -> None:
        self._masks: dict[Texture, bytes] = {}

    def get_pixel(self, mask: bytes, texture: Texture, x: int, y: int) -> int:
        width, height = texture.size
        if x > width or y > height:
            return 0
        index = x + y * width
        if index >= len(mask):
            return 0
        return mask[index]

    def get_mask(self, texture: Texture) -> bytes:
        mask = self._masks.get(texture)
        if mask is None:
            mask = self.create_mask(texture)
        return mask

    def create_mask(self, texture: Texture) -> bytes:
        mask = pygame.image.tobytes(texture.surface, "RGBA")[3::4]
        self._masks[texture] = mask
        return mask


_bitmasks = BitmaskManager()


def pixel_perfect_test(first: Sprite, second: Sprite, alpha_limit: int = 0) -> bool:
    """True if both sprites have a pixel with alpha above the limit at the same place."""
    area = first.global_bounds().intersection(second.global_bounds())
    if area is None:
        return False

    w1, h1 = first.texture.size
    w2, h2 = second.texture.size
    mask1 = _bitmasks.get_mask(first.texture)
    mask2 = _bitmasks.get_mask(second.texture)
    inverse1 = first.inverse_transform()
    inverse2 = second.inverse_transform()

    for i in range(int(area.left), math.ceil(area.right)):
        for j in range(int(area.top), math.ceil(area.bottom)):
            x1, y1 = inverse1.transform_point(i, j)
            x2, y2 = inverse2.transform_point(i, j)
            if not (0 < x1 < w1 and 0 < y1 < h1 and 0 < x2 < w2 and 0 < y2 < h2):
                continue
            if (
                _bitmasks.get_pixel(mask1, first.texture, int(x1), int(y1)) > alpha_limit
                and _bitmasks.get_pixel(mask2, second.texture, int(x2), int(y2)) > alpha_limit
            ):
                return True
    return False


def create_texture_and_bitmask(path) -> Texture:
    """Load a texture from a file and build its bitmask ahead of time."""
    texture = Texture.from_file(path)
    _bitmasks.create_mask(texture)
    return texture


def sprite_center(sprite: Sprite) -> Point:
    return sprite.global_bounds().center


def sprite_size(sprite: Sprite) -> Point:
    width, height = sprite.texture.size
    sx, sy = sprite.scale
    return (width * sx, height * sy)


def circle_test(first: Sprite, second: Sprite) -> bool:
    """Collision of circles whose radii average each sprite's width and height."""
    w1, h1 = sprite_size(first)
    w2, h2 = sprite_size(second)
    radius1 = (w1 + h1) / 4
    radius2 = (w2 + h2) / 4
    c1x, c1y = sprite_center(first)
    c2x, c2y = sprite_center(second)
    dx = c1x - c2x
    dy = c1y - c2y
    return dx * dx + dy * dy <= (radius1 + radius2) ** 2


class OrientedBoundingBox:
    """The four corners of a transformed sprite."""

    def __init__(self, sprite: Sprite) -> None:
        transform = sprite.transform()
        width, height = sprite.texture.size
        self.points: list[Point] = [
            transform.transform_point(0.0, 0.0),
            transform.transform_point(width, 0.0),
            transform.transform_point(width, height),
            transform.transform_point(0.0, height),
        ]

    def project_onto_axis(self, axis: Point) -> tuple[float, float]:
        """The smallest and largest dot product of the corners with the axis."""
        ax, ay = axis
        projections = [px * ax + py * ay for px, py in self.points]
        return min(projections), max(projections)


def bounding_box_test(first: Sprite, second: Sprite) -> bool:
    """Separating-axis test between two oriented sprite rectangles."""
    box1 = OrientedBoundingBox(first)
    box2 = OrientedBoundingBox(second)
    p1, p2 = box1.points, box2.points
    axes = [
        (p1[1][0] - p1[0][0], p1[1][1] - p1[0][1]),
        (p1[1][0] - p1[2][0], p1[1][1] - p1[2][1]),
        (p2[0][0] - p2[3][0], p2[0][1] - p2[3][1]),
        (p2[0][0] - p2[1][0], p2[0][1] - p2[1][1]),
    ]
    for axis in axes:
        min1, max1 = box1.project_onto_axis(axis)
        min2, max2 = box2.project_onto_axis(axis)
        if not (min2 <= max1 and max2 >= min1):
            return False
    return True