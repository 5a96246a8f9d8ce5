"""Objects the player carries with the mouse and drops onto free ground, such as towers."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Callable, Optional

from towerdef.collision import pixel_perfect_test
from towerdef.geometry import Point
from towerdef.group import Group
from towerdef.sprite import Origin, Sprite, Texture

FREE_COLOR = (255, 255, 255, 128)
BLOCKED_COLOR = (255, 0, 0, 128)
PLACED_COLOR = (0, 0, 0, 128)


@dataclass
class Resources:
    """The player's stock of energy, gears and health."""

    energy: int = 100
    gears: int = 100
    health: int = 100


@dataclass
class Hand:
    """What the player is currently carrying, if anything."""

    item: Optional[Sprite] = None


class Placeable(Sprite):
    """A sprite that follows the mouse until dropped on a free, affordable spot."""

    def __init__(
        self,
        texture: Texture,
        x: float,
        y: float,
        scale: float,
        origin: Origin,
        tile_width: float,
        price: int,
        resources: Resources,
        hand: Hand,
        collide_layers: list[int],
        collide_group: Group,
        disk: Sprite,
        uncommand: Callable[[], None],
    ) -> None:
        super().__init__(texture, x, y, scale, origin)
        self.riding = disk
        self.hand = hand
        self.collide_layers = list(collide_layers)
        self.collide_group = collide_group
        self.uncommand = uncommand
        self.command: Optional[Callable[[], None]] = None
        self.price = price
        self.resources = resources
        self.placing = True
        self.reach = 0.0
        self.set_reach(tile_width)

    def set_reach(self, reach: float) -> None:
        """Set the reach and size the disk to a circle of that radius."""
        self.reach = reach
        if self.riding is not None:
            width, height = self.riding.texture.size
            self.riding.scale = (reach * 2 / float(width), reach * 2 / float(height))

    def is_colliding(self) -> bool:
        bounds = self.global_bounds()
        for layer in self.collide_layers:
            for sprite in self.collide_group.layer_sprites(layer) or []:
                if (
                    sprite is not self
                    and sprite.global_bounds().intersects(bounds)
                    and pixel_perfect_test(sprite, self)
                ):
                    return True
        return False

    def update(self, mouse_pos: Point) -> None:
        super().update(mouse_pos)
        if self.placing:
            position = (float(mouse_pos[0]), float(mouse_pos[1]))
            self.position = position
            if self.riding is not None:
                self.riding.position = position
                self.riding.color = BLOCKED_COLOR if self.is_colliding() else FREE_COLOR

    def click(self) -> None:
        affordable = self.price == 0 or self.resources.energy >= self.price
        if self.placing and not self.is_colliding() and affordable:
            self.placing = False
            if self.price != 0:
                self.resources.energy -= self.price
            if self.riding is not None:
                self.riding.color = PLACED_COLOR

        if not self.placing:
            if self.hand.item is self:
                self.hand.item = None
            if self.hand.item is None:
                self.clicked = True
                if self.command is not None:
                    self.command()
                if self.riding is not None:
                    self.riding.set_visible(True)

    def no_click(self) -> None:
        if self.riding is not None:
            self.riding.set_visible(False)
        if self.clicked:
            self.uncommand()
        self.clicked = False


class Focus(enum.IntEnum):
    FIRST = 0
    LAST = 1
    STRONG = 2
    WEAK = 3
    HEALTHY = 4
    UNHEALTHY = 5
    FAST = 6
    SLOW = 7
    INFILE = 8
    CLUSTERED = 9


class Tower(Placeable):
    """A placeable with a reach measured in tiles and two targeting priorities."""

    def __init__(
        self,
        texture: Texture,
        x: float,
        y: float,
        scale: float,
        origin: Origin,
        reach: float,
        tile_width: float,
        price: int,
        resources: Resources,
        hand: Hand,
        collide_layers: list[int],
        collide_group: Group,
        disk: Sprite,
        uncommand: Callable[[], None],
    ) -> None:
        super().__init__(
            texture, x, y, scale, origin, tile_width, price, resources, hand,
            collide_layers, collide_group, disk, uncommand,
        )
        self.focus1: int = Focus.FIRST
        self.focus2: int = Focus.FIRST
        self.set_reach(reach * tile_width)