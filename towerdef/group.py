"""Layered collections of sprites and labels that update, draw and take clicks together."""

from __future__ import annotations

from typing import Union

import pygame

from towerdef.geometry import Point
from towerdef.label import Label
from towerdef.sprite import Sprite

Item = Union[Sprite, Label]


class Group:
    """Sprites and labels kept in numbered layers, drawn from layer 0 upward."""

    def __init__(self, window: pygame.Surface | None = None) -> None:
        self.window = window
        self._layers: list[list[Item]] = []

    def layer_sprites(self, layer: int) -> list[Sprite] | None:
        """The sprites of a layer in insertion order, or None if the layer does not exist."""
        if layer < len(self._layers):
            return [item for item in self._layers[layer] if isinstance(item, Sprite)]
        return None

    def layer_labels(self, layer: int) -> list[Label] | None:
        """The labels of a layer in insertion order, or None if the layer does not exist."""
        if layer < len(self._layers):
            return [item for item in self._layers[layer] if isinstance(item, Label)]
        return None

    def add(self, item: Item, layer: int = 0) -> None:
        while len(self._layers) < layer + 1:
            self._layers.append([])
        self._layers[layer].append(item)

    def kill(self, target: Sprite) -> None:
        """Remove a sprite from every layer and drop its mounts."""
        for layer in self._layers:
            if any(item is target for item in layer):
                target.kill()
                layer[:] = [item for item in layer if item is not target]

    def empty(self) -> None:
        for index in range(len(self._layers)):
            self.empty_layer(index)
        self._layers.clear()

    def empty_layer(self, layer: int) -> None:
        if layer >= len(self._layers):
            return
        for item in self._layers[layer]:
            if isinstance(item, Sprite):
                item.kill()
        self._layers[layer].clear()

    def update(self, mouse_pos: Point) -> None:
        for layer in self._layers:
            for item in list(layer):
                if isinstance(item, Sprite):
                    if item.visible:
                        item.update(mouse_pos)
                else:
                    item.update()

    def draw(self) -> None:
        for layer in self._layers:
            for item in layer:
                item.draw(self.window)

    def do_clicked(self, pos: Point) -> None:
        """Click visible sprites under the position and tell the others they were missed."""
        x, y = float(pos[0]), float(pos[1])
        sprites = [item for layer in self._layers for item in layer if isinstance(item, Sprite)]
        for sprite in sprites:
            if not sprite.visible:
                continue
            if sprite.global_bounds().contains(x, y):
                sprite.click()
            else:
                sprite.no_click()

    def hide_layer(self, layer: int) -> None:
        self._set_layer_visible(layer, False)

    def show_layer(self, layer: int) -> None:
        self._set_layer_visible(layer, True)

    def _set_layer_visible(self, layer: int, visible: bool) -> None:
        if layer < len(self._layers):
            for item in self._layers[layer]:
                item.set_visible(visible)