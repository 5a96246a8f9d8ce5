"""Textured sprites with hover, click, visibility and mounted sub-sprites."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from pathlib import Path as FilePath
from typing import Callable

import pygame

from towerdef.geometry import Point, Rect, Transform, make_transform

Color = tuple[int, int, int, int]
WHITE: Color = (255, 255, 255, 255)


class Origin(enum.IntEnum):
    TOP_LEFT = 0
    CENTER = 1
    BOTTOM_RIGHT = 2


@dataclass(eq=False)
class Texture:
    """An image held in memory; compared and hashed by identity."""

    surface: pygame.Surface

    @classmethod
    def from_file(cls, path) -> Texture:
        file = FilePath(path)
        if not file.is_file():
            raise FileNotFoundError(str(file))
        return cls(pygame.image.load(str(file)))

    @classmethod
    def from_surface(cls, surface: pygame.Surface) -> Texture:
        return cls(surface)

    @property
    def size(self) -> tuple[int, int]:
        return self.surface.get_size()

    @property
    def width(self) -> int:
        return self.surface.get_width()

    @property
    def height(self) -> int:
        return self.surface.get_height()

    def alpha_at(self, x: int, y: int) -> int:
        return self.surface.get_at((x, y)).a


class Sprite:
    """A positioned, scaled and rotated texture that may carry a mounted sprite."""

    def __init__(
        self,
        texture: Texture,
        x: float = 0.0,
        y: float = 0.0,
        scale: float = 1.0,
        origin: Origin | None = None,
        angle: float = 0.0,
    ) -> None:
        self.texture = texture
        self.origin_point: Point = (0.0, 0.0)
        self.position: Point = (x, y)
        self.scale: Point = (scale, scale)
        self._rotation = 0.0
        self.rotation = angle
        self.color: Color = WHITE
        self.hovered = False
        self.clicked = False
        self.visible = True
        self.riding: Sprite | None = None
        if origin is not None:
            self.set_origin(origin)

    @property
    def rotation(self) -> float:
        return self._rotation

    @rotation.setter
    def rotation(self, angle: float) -> None:
        self._rotation = angle % 360.0

    def set_origin(self, origin: Origin) -> None:
        width, height = self.texture.size
        if origin == Origin.TOP_LEFT:
            self.origin_point = (0.0, 0.0)
        elif origin == Origin.CENTER:
            self.origin_point = (width / 2.0, height / 2.0)
        elif origin == Origin.BOTTOM_RIGHT:
            self.origin_point = (float(width), float(height))

    def transform(self) -> Transform:
        return make_transform(self.origin_point, self.position, self.rotation, self.scale)

    def inverse_transform(self) -> Transform:
        return self.transform().inverse()

    def local_bounds(self) -> Rect:
        width, height = self.texture.size
        return Rect(0.0, 0.0, float(width), float(height))

    def global_bounds(self) -> Rect:
        return self.transform().transform_rect(self.local_bounds())

    def set_visible(self, visible: bool) -> None:
        self.visible = visible
        if self.riding is not None:
            self.riding.set_visible(visible)

    def set_mount(self, sprite: Sprite) -> None:
        self.remove_mounts()
        self.riding = sprite

    def has_mount(self) -> bool:
        return self.riding is not None

    def remove_mounts(self) -> None:
        if self.riding is not None:
            self.riding.remove_mounts()
            self.riding = None

    def kill(self) -> None:
        self.remove_mounts()

    def update(self, mouse_pos: Point) -> None:
        """Track the hover state against the mouse position."""
        if self.global_bounds().contains(*mouse_pos):
            if not self.hovered:
                self.hover()
        elif self.hovered:
            self.un_hover()

    def click(self) -> None:
        pass

    def no_click(self) -> None:
        pass

    def hover(self) -> None:
        self.hovered = True

    def un_hover(self) -> None:
        self.hovered = False

    def draw(self, surface: pygame.Surface) -> None:
        if self.riding is not None:
            self.riding.draw(surface)
        if self.visible:
            self._blit(surface)

    def _blit(self, surface: pygame.Surface) -> None:
        sx, sy = self.scale
        width, height = self.texture.size
        target_size = (round(abs(sx) * width), round(abs(sy) * height))
        if target_size[0] <= 0 or target_size[1] <= 0:
            return
        image = self.texture.surface
        if target_size != (width, height):
            image = pygame.transform.scale(image, target_size)
        if sx < 0 or sy < 0:
            image = pygame.transform.flip(image, sx < 0, sy < 0)
        if self.rotation:
            image = pygame.transform.rotate(image, -self.rotation)
        if self.color != WHITE:
            image = image.copy()
            image.fill(self.color, special_flags=pygame.BLEND_RGBA_MULT)
        bounds = self.global_bounds()
        surface.blit(image, (round(bounds.left), round(bounds.top)))


class Button(Sprite):
    """A sprite that runs a command when clicked and grows while hovered."""

    def __init__(
        self,
        texture: Texture,
        command: Callable[[], None],
        x: float = 0.0,
        y: float = 0.0,
        scale: float = 1.0,
        origin: Origin | None = None,
    ) -> None:
        super().__init__(texture, x, y, scale, origin)
        self.command = command

    def click(self) -> None:
        self.command()

    def hover(self) -> None:
        super().hover()
        grown = self.scale[0] + 0.1
        self.scale = (grown, grown)

    def un_hover(self) -> None:
        super().un_hover()
        shrunk = self.scale[0] - 0.1
        self.scale = (shrunk, shrunk)


class Canopy(Sprite):
    """A tree top that turns translucent while the mouse is over it."""

    def __init__(
        self,
        texture: Texture,
        x: float,
        y: float,
        angle: float,
        scale: float,
        origin: Origin,
    ) -> None:
        super().__init__(texture, x, y, scale, origin, angle)

    def hover(self) -> None:
        super().hover()
        self.color = (255, 255, 255, 128)

    def un_hover(self) -> None:
        super().un_hover()
        self.color = (255, 255, 255, 255)


class Obstacle(Sprite):
    """A map obstacle that towers cannot be placed on."""


class Terrain(Sprite):
    """A ground tile."""


class Path(Terrain):
    """A tile of the enemy path."""

    def __init__(
        self,
        texture: Texture,
        x: float = 0.0,
        y: float = 0.0,
        scale: float = 1.0,
        origin: Origin | None = None,
    ) -> None:
        super().__init__(texture, x, y, scale, origin)
        self.next_waypoint: Path | None = None


class TowerGUI(Button):
    """A tower-menu button that shows a highlight sprite while hovered."""

    def __init__(
        self,
        texture: Texture,
        x: float,
        y: float,
        scale: float,
        origin: Origin,
        command: Callable[[], None],
        hover_sprite: Sprite,
    ) -> None:
        super().__init__(texture, command, x, y, scale, origin)
        self.riding = hover_sprite
        self.riding.set_visible(False)

    def hover(self) -> None:
        Sprite.hover(self)
        if self.riding is not None:
            self.riding.set_visible(True)

    def un_hover(self) -> None:
        Sprite.un_hover(self)
        if self.riding is not None:
            self.riding.set_visible(False)

    def set_visible(self, visible: bool) -> None:
        super().set_visible(visible)
        if visible:
            self.un_hover()