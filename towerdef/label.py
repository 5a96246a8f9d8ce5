"""Text labels: plain, word-wrapped, and bound to a changing value."""

from __future__ import annotations

import enum
import os
from typing import Callable, Union

import pygame

from towerdef.geometry import Point, Rect

FontSource = Union[str, "os.PathLike[str]", None]
Color = tuple[int, int, int, int]


class Anchor(enum.IntEnum):
    TOP_LEFT = 0
    CENTER = 1
    LEFT_CENTER = 3


def _load_font(font: FontSource, size: float) -> pygame.font.Font:
    """Open a font file (or pygame's default font for None) at a pixel size."""
    source = os.fspath(font) if font is not None else None
    return pygame.font.Font(source, max(1, int(size)))


class Label:
    """A string drawn with a font, anchored at a point."""

    def __init__(
        self,
        text: str,
        font: FontSource,
        size: float,
        x: float,
        y: float,
        origin: Anchor = Anchor.TOP_LEFT,
    ) -> None:
        self.font = font
        self.size = max(1, int(size))
        self._font = _load_font(font, self.size)
        self._text = text
        self.position: Point = (x, y)
        self.color: Color = (255, 255, 255, 255)
        self.visible = True
        self.origin = Anchor.TOP_LEFT
        self.origin_point: Point = (0.0, 0.0)
        self.set_origin(origin)

    @property
    def text(self) -> str:
        return self._text

    @text.setter
    def text(self, value: str) -> None:
        self._text = value

    @property
    def lines(self) -> list[str]:
        return self._text.split("\n")

    def local_bounds(self) -> Rect:
        lines = self.lines
        width = max(self._font.size(line)[0] for line in lines)
        height = self._font.get_height() + (len(lines) - 1) * self._font.get_linesize()
        return Rect(0.0, 0.0, float(width), float(height))

    def global_bounds(self) -> Rect:
        local = self.local_bounds()
        x, y = self.position
        ox, oy = self.origin_point
        return Rect(x - ox, y - oy, local.width, local.height)

    def set_origin(self, origin: Anchor) -> None:
        """Fix the anchor point from the current text's bounds."""
        bounds = self.local_bounds()
        self.origin = Anchor(origin)
        if self.origin == Anchor.TOP_LEFT:
            self.origin_point = (bounds.left, bounds.top)
        elif self.origin == Anchor.CENTER:
            self.origin_point = bounds.center
        elif self.origin == Anchor.LEFT_CENTER:
            self.origin_point = (bounds.left, bounds.top + bounds.height / 2.0)

    def set_visible(self, visible: bool) -> None:
        self.visible = visible

    def update(self) -> None:
        pass

    def draw(self, surface: pygame.Surface) -> None:
        if not self.visible:
            return
        bounds = self.global_bounds()
        line_height = self._font.get_linesize()
        for row, line in enumerate(self.lines):
            if not line:
                continue
            image = self._font.render(line, True, self.color[:3])
            if self.color[3] < 255:
                image.set_alpha(self.color[3])
            surface.blit(image, (round(bounds.left), round(bounds.top + row * line_height)))


def word_wrap(text: str, length: float, font: FontSource, char_size: float) -> str:
    """Break text into lines narrower than length, each word followed by a space."""
    measure = _load_font(font, char_size)
    pending = ""
    result = ""
    for word in text.split():
        pending += word + " "
        if measure.size(pending)[0] < length:
            result += word + " "
        else:
            result += "\n" + word + " "
            pending = word
    return result


class TextBox(Label):
    """A label whose text is wrapped to a given width."""

    def __init__(
        self,
        text: str,
        font: FontSource,
        size: float,
        x: float,
        y: float,
        width: float,
        origin: Anchor = Anchor.TOP_LEFT,
    ) -> None:
        super().__init__(word_wrap(text, width, font, size), font, size, x, y, origin)
        self.width = width


class VariableLabel(Label):
    """A label that shows the current value of a tracked number."""

    def __init__(
        self,
        track: Callable[[], int],
        font: FontSource,
        size: float,
        x: float,
        y: float,
        origin: Anchor = Anchor.TOP_LEFT,
    ) -> None:
        super().__init__(str(track()), font, size, x, y, origin)
        self.track = track

    def update(self) -> None:
        self.text = str(self.track())