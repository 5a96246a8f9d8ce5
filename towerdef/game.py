"""The tower-defense game: main menu, map generation, dashboard and tower selection."""

from __future__ import annotations

import argparse
import os
import random
from pathlib import Path as FilePath
from typing import Optional

import pygame

from towerdef.geometry import Point, Rect
from towerdef.group import Group
from towerdef.label import Anchor, Label, TextBox, VariableLabel
from towerdef.pathgen import (
    DIFFICULTY_OBSTACLE_PERCS,
    EASY,
    MAP_HEIGHT,
    MAP_WIDTH,
    PathGenerator,
    environment_files,
    load_tower_data,
    wrap,
)
from towerdef.placeable import Hand, Resources, Tower
from towerdef.sprite import (
    Button,
    Canopy,
    Obstacle,
    Origin,
    Path,
    Sprite,
    Terrain,
    Texture,
    TowerGUI,
)

BASE_RESOLUTION = (1920.0, 1080.0)

PLAINS = 1

TERRAIN_LAYER = 0
PATH_LAYER = 1
OBSTACLE_LAYER = 2
TOWER_LAYER = 3
CANOPY_LAYER = 4
GUI_LAYER = 5
TOWER_BUTTONS_LAYER = 6
TOWER_DESC_LAYER = 7

TILE_UNIT = 36

FOCI_STRINGS = (
    "First", "Last", "Strong", "Weak", "Fast",
    "Slow", "In-file", "Clustered", "Healthy", "Unhealthy",
)


class Game:
    """Owns the window, the menu and play groups, and every game action."""

    def __init__(self, assets: str | os.PathLike[str] = "assets", window: Optional[pygame.Surface] = None) -> None:
        pygame.init()
        pygame.font.init()
        self.assets = FilePath(assets)
        if window is None:
            window = pygame.display.set_mode((0, 0), pygame.NOFRAME)
            pygame.display.set_caption("Tower Defense")
        self.window = window
        width, height = window.get_size()
        self.screen_ratio: Point = (width / BASE_RESOLUTION[0], height / BASE_RESOLUTION[1])

        font_file = self.assets / "fonts" / "FreePixel.ttf"
        self.font = font_file if font_file.is_file() else None

        self.rng = random.Random()
        self.path_difficulty = EASY
        self.environment = PLAINS
        self.resources = Resources()
        self.hand = Hand()
        self.waypoints: list[tuple[int, int]] = []
        self.map_corner = 0.0
        self.map_bottom = 0.0
        self.sidebar: Optional[Sprite] = None
        self.mouse_left_menu = False
        self.focus1_label: Optional[Label] = None
        self.focus2_label: Optional[Label] = None
        self.running = True
        self.show_fps = False

        self.menu = Group(window)
        self.play = Group(window)
        self.display_group = self.menu

        self.terrain_textures: list[Texture] = []
        self.path_textures: list[Texture] = []
        self.obstacles: list[tuple[Texture, Optional[Texture]]] = []
        self.tower_textures: list[Texture] = []

        data_file = self.assets / "data" / "towers.dat"
        self.tower_data = load_tower_data(data_file) if data_file.is_file() else [{}]

        self.create_menu()

    # --- helpers -----------------------------------------------------------------

    def _texture(self, *parts: str) -> Texture:
        return Texture.from_file(self.assets.joinpath("textures", *parts))

    def _listing(self, *parts: str) -> list[str]:
        directory = self.assets.joinpath("textures", *parts)
        return sorted(os.listdir(directory))

    @staticmethod
    def _mouse_pos() -> Point:
        x, y = pygame.mouse.get_pos()
        return (float(x), float(y))

    def _drop_hand(self) -> None:
        if self.hand.item is not None:
            self.play.kill(self.hand.item)
            self.hand.item = None
            self.unpick_tower()

    # --- main loop ---------------------------------------------------------------

    def run(self) -> None:
        """Run the draw and event loop until the game is ended."""
        clock = pygame.time.Clock()
        fps_label = Label("0", self.font, 14, 10, 10, Anchor.TOP_LEFT)
        self.running = True
        while self.running:
            self.window.fill((0, 0, 0))
            mouse = self._mouse_pos()
            group = self.display_group
            group.update(mouse)
            if group is self.play:
                self._track_hand(mouse)
            group.draw()

            elapsed = clock.tick()
            if self.show_fps:
                fps = 1000.0 / elapsed if elapsed else 0.0
                fps_label.text = str(int(fps))
                fps_label.draw(self.window)

            if self.window is pygame.display.get_surface():
                pygame.display.flip()

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self.running = False
                elif event.type == pygame.MOUSEBUTTONUP:
                    self.display_group.do_clicked(event.pos)
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_F1:
                        self.show_fps = not self.show_fps
                    elif event.key == pygame.K_ESCAPE:
                        self._drop_hand()
        self._clean_up()

    def _track_hand(self, mouse: Point) -> None:
        if self.sidebar is None:
            return
        over_sidebar = self.sidebar.global_bounds().contains(*mouse)
        if not self.mouse_left_menu:
            if not over_sidebar:
                self.mouse_left_menu = True
        elif self.hand.item is not None and (over_sidebar or not pygame.mouse.get_focused()):
            self._drop_hand()

    # --- screens -----------------------------------------------------------------

    def create_menu(self) -> None:
        start = self._texture("menu", "start_button.png")
        quit_texture = self._texture("menu", "quit_button.png")
        width, height = self.window.get_size()

        self.menu.empty()
        scale = ((width / 10.0) / start.width) * self.screen_ratio[0]
        play_button = Button(start, self.create_play, width / 2.0, height / 2.0, scale, Origin.CENTER)
        self.menu.add(play_button)
        px, py = play_button.position
        self.menu.add(Button(
            quit_texture, self.end_game, px, py + 1.5 * play_button.global_bounds().height,
            play_button.scale[0], Origin.CENTER,
        ))
        self.display_group = self.menu

    def create_play(self) -> None:
        self.load_textures()
        self.play.empty()
        self.waypoints = PathGenerator(self.path_difficulty, self.rng).generate()
        self.build_map()
        self.generate_obstacles()
        self.show_dash()
        self.display_group = self.play

    def load_textures(self) -> None:
        self.placeable_disk_texture = self._texture("gui", "placeable_disk.png")
        self.select_arrow_left = self._texture("gui", "select_arrow_left.png")
        self.select_arrow_right = self._texture("gui", "select_arrow_right.png")
        self.damage_texture = self._texture("gui", "damage_icon.png")
        self.range_texture = self._texture("gui", "range_icon.png")
        self.speed_texture = self._texture("gui", "attack_speed_icon.png")
        self.pierce_texture = self._texture("gui", "pierce_icon.png")
        self.splash_damage_texture = self._texture("gui", "splash_damage_icon.png")
        self.splash_range_texture = self._texture("gui", "splash_radius.png")

        env = ("environments",)
        self.terrain_textures = [
            self._texture(*env, "terrain", name)
            for name in environment_files(self._listing(*env, "terrain"), self.environment)
        ]
        self.path_textures = [
            self._texture(*env, "paths", name)
            for name in environment_files(self._listing(*env, "paths"), self.environment)
        ]
        self.obstacles = []
        for name in environment_files(self._listing(*env, "obstacles"), self.environment):
            if "_top" in name:
                continue
            base = self._texture(*env, "obstacles", name)
            top = None
            if "_bottom" in name:
                top = self._texture(*env, "obstacles", name.replace("_bottom", "_top"))
            self.obstacles.append((base, top))
        self.tower_textures = [self._texture("towers", name) for name in self._listing("towers")]

    def build_map(self) -> None:
        """Lay path and terrain tiles over the grid for the current waypoints."""
        width, height = self.window.get_size()
        tile_width = height / 30.0
        self.map_corner = width - tile_width * MAP_WIDTH
        self.map_bottom = tile_width * MAP_HEIGHT
        on_path = set(self.waypoints)
        path_scale = tile_width / float(self.path_textures[0].height)
        terrain_scale = tile_width / float(self.terrain_textures[0].height)

        for row in range(MAP_HEIGHT):
            for col in range(MAP_WIDTH):
                x = self.map_corner + col * tile_width
                y = row * tile_width
                if (col, row) in on_path:
                    texture = self.rng.choice(self.path_textures)
                    self.play.add(Path(texture, x, y, path_scale, Origin.TOP_LEFT), PATH_LAYER)
                else:
                    texture = self.rng.choice(self.terrain_textures)
                    self.play.add(Terrain(texture, x, y, terrain_scale, Origin.TOP_LEFT), TERRAIN_LAYER)

    def _collides(self, sprite: Sprite, layer: int) -> bool:
        from towerdef.collision import pixel_perfect_test

        bounds = sprite.global_bounds()
        return any(
            bounds.intersects(other.global_bounds()) and pixel_perfect_test(sprite, other)
            for other in self.play.layer_sprites(layer) or []
        )

    def generate_obstacles(self) -> None:
        """Scatter obstacles over the map, clear of the path and of each other."""
        if not self.obstacles:
            return
        width, _ = self.window.get_size()
        obstacle_perc = DIFFICULTY_OBSTACLE_PERCS[self.path_difficulty] / 100.0
        base_scale = 1.5
        obstacle_scale = self.screen_ratio[0] * base_scale
        full_area = BASE_RESOLUTION[1] * 4 * (BASE_RESOLUTION[1] / 3)

        area = 0.0
        while area / full_area < obstacle_perc:
            base, top = self.rng.choice(self.obstacles)
            area += base.width * base.height * base_scale * base_scale

            obstacle = Obstacle(base, origin=Origin.CENTER)
            obstacle.scale = (obstacle_scale, obstacle_scale)
            while True:
                obstacle.rotation = self.rng.randint(0, 359)
                bounds = obstacle.global_bounds()
                x = self.rng.randint(int(self.map_corner + bounds.width / 2.0), int(width - bounds.width / 2.0))
                y = self.rng.randint(int(bounds.height / 2.0), int(self.map_bottom - bounds.height / 2.0))
                obstacle.position = (float(x), float(y))
                if not self._collides(obstacle, PATH_LAYER) and not self._collides(obstacle, OBSTACLE_LAYER):
                    break

            self.play.add(obstacle, OBSTACLE_LAYER)
            if top is not None:
                canopy = Canopy(top, x, y, self.rng.randint(0, 359), obstacle_scale, Origin.CENTER)
                self.play.add(canopy, CANOPY_LAYER)

    def show_dash(self) -> None:
        """Build the sidebar with resources, lives and the tower menu."""
        sidebar_texture = self._texture("gui", "backdrop.png")
        self.energy_texture = self._texture("gui", "energy.png")
        gears_texture = self._texture("gui", "gears.png")
        money_box_texture = self._texture("gui", "money_box.png")
        lives_box_texture = self._texture("gui", "lives_box.png")
        lives_bar_texture = self._texture("gui", "health_bar.png")
        tower_box_texture = self._texture("gui", "tower_box.png")

        _, height = self.window.get_size()
        ry = self.screen_ratio[1]
        self.sidebar = Sprite(
            sidebar_texture, self.map_corner, self.map_bottom,
            height / float(sidebar_texture.height), Origin.BOTTOM_RIGHT,
        )
        self.play.add(self.sidebar, GUI_LAYER)

        tile_ratio = (TILE_UNIT / 30.0) * ry
        tile_width = TILE_UNIT * ry
        money_h = 70 * tile_ratio
        lives_h = 40 * tile_ratio
        tower_h = 540 * tile_ratio
        spacing = float(height // 72)
        total = money_h + lives_h + tower_h + 2 * spacing
        start_y = (height - total) / 2.0
        margin_right = 18 * height / float(sidebar_texture.height)

        def box_x(texture: Texture) -> float:
            return self.map_corner - (margin_right + self.map_corner + texture.width * tile_ratio) / 2.0

        money_box = Sprite(money_box_texture, box_x(money_box_texture), start_y,
                           money_h / float(money_box_texture.height), Origin.TOP_LEFT)
        self.play.add(money_box, GUI_LAYER)
        mx, my = money_box.position
        energy_icon = Sprite(self.energy_texture, mx + tile_width / 4.0, my + tile_width / 4.0,
                             tile_width / float(self.energy_texture.height), Origin.TOP_LEFT)
        self.play.add(energy_icon, GUI_LAYER)
        gears_icon = Sprite(gears_texture, mx + tile_width / 4.0, my + tile_width * 1.25,
                            tile_width / float(gears_texture.height), Origin.TOP_LEFT)
        self.play.add(gears_icon, GUI_LAYER)
        for icon, track in (
            (energy_icon, lambda: self.resources.energy),
            (gears_icon, lambda: self.resources.gears),
        ):
            ix, iy = icon.position
            self.play.add(VariableLabel(track, self.font, tile_width, ix + tile_width * 1.25,
                                        iy + tile_width / 2.0, Anchor.LEFT_CENTER), GUI_LAYER)

        lives_box = Sprite(lives_box_texture, box_x(lives_box_texture), start_y + money_h + spacing,
                           lives_h / float(lives_box_texture.height), Origin.TOP_LEFT)
        self.play.add(lives_box, GUI_LAYER)
        lives_center = lives_box.global_bounds().center
        self.play.add(Sprite(lives_bar_texture, lives_center[0], lives_center[1],
                             tile_width / 32.0, Origin.CENTER), GUI_LAYER)
        self.play.add(Label(str(self.resources.health), self.font, tile_width,
                            lives_center[0], lives_center[1], Anchor.CENTER), GUI_LAYER)

        tower_box = Sprite(tower_box_texture, box_x(tower_box_texture),
                           start_y + money_h + lives_h + 2 * spacing,
                           tower_h / float(tower_box_texture.height), Origin.TOP_LEFT)
        self.play.add(tower_box, GUI_LAYER)
        self.fill_tower_box(tower_box.global_bounds())

    def fill_tower_box(self, bounds: Rect) -> None:
        """Add one button per tower texture, three to a row."""
        tower_width = bounds.width / 4
        start_offset = tower_width / 4
        hover_texture = self._texture("gui", "hover_tower.png")

        for index, texture in enumerate(self.tower_textures):
            row, col = divmod(index, 3)
            highlight = Sprite(
                hover_texture,
                bounds.left + start_offset + tower_width * 1.25 * col,
                bounds.top + start_offset + tower_width * 1.5 * row,
                self.screen_ratio[0], Origin.TOP_LEFT,
            )
            cx, cy = highlight.global_bounds().center
            button = TowerGUI(
                texture, cx, cy, tower_width / float(texture.width), Origin.CENTER,
                lambda index=index: self.pick_tower(index, bounds), highlight,
            )
            self.play.add(button, TOWER_BUTTONS_LAYER)

    # --- tower selection ---------------------------------------------------------

    def pick_tower(self, index: int, bounds: Rect) -> Tower:
        """Put a new tower in the player's hand and show its stats."""
        self.mouse_left_menu = False
        data = self.tower_data[index]
        mx, my = self._mouse_pos()
        tower = Tower(
            self.tower_textures[index], mx, my, self.screen_ratio[0], Origin.CENTER,
            float(data["range"]), TILE_UNIT, int(data["price"]), self.resources, self.hand,
            [PATH_LAYER, OBSTACLE_LAYER, TOWER_LAYER, GUI_LAYER], self.play,
            Sprite(self.placeable_disk_texture, origin=Origin.CENTER), self.unpick_tower,
        )
        tower.command = lambda: self.select_tower(index, tower, bounds)
        self.hand.item = tower
        self.play.add(tower, TOWER_LAYER)
        self.play.hide_layer(TOWER_BUTTONS_LAYER)
        self.show_stats(index, bounds)
        return tower

    def select_tower(self, index: int, tower: Tower, bounds: Rect) -> None:
        self.play.empty_layer(TOWER_DESC_LAYER)
        self.play.hide_layer(TOWER_BUTTONS_LAYER)
        self.show_stats(index, bounds, tower)

    def _add_stat(self, texture: Texture, x: float, y: float, text: str) -> Sprite:
        ry = self.screen_ratio[1]
        icon = Sprite(texture, x, y, (TILE_UNIT * ry) / float(self.energy_texture.height), Origin.TOP_LEFT)
        self.play.add(icon, TOWER_DESC_LAYER)
        bounds = icon.global_bounds()
        self.play.add(Label(text, self.font, TILE_UNIT * ry, icon.position[0] + bounds.width + 12 * ry,
                            icon.position[1] + bounds.height / 2.0, Anchor.LEFT_CENTER), TOWER_DESC_LAYER)
        return icon

    def _show_foci(self, tower: Tower, bounds: Rect, y: float) -> None:
        ry = self.screen_ratio[1]
        center_x = bounds.left + bounds.width / 2.0
        arrow_scale = (20 * ry) / float(self.select_arrow_left.height)
        offset = 1.5 * TILE_UNIT * ry

        labels = []
        for focus, value in ((1, tower.focus1), (2, tower.focus2)):
            label = Label(FOCI_STRINGS[value], self.font, 20 * ry, center_x, y, Anchor.CENTER)
            self.play.add(label, TOWER_DESC_LAYER)
            lx, ly = label.position
            self.play.add(Button(self.select_arrow_left, lambda f=focus: self.prev_focus(f, tower),
                                 lx - offset, ly, arrow_scale, Origin.CENTER), TOWER_DESC_LAYER)
            self.play.add(Button(self.select_arrow_right, lambda f=focus: self.next_focus(f, tower),
                                 lx + offset, ly, arrow_scale, Origin.CENTER), TOWER_DESC_LAYER)
            labels.append(label)
            y = ly + label.size + 6 * ry
        self.focus1_label, self.focus2_label = labels
        self.play.add(Label(FOCI_STRINGS[0], self.font, 20 * ry, center_x, y, Anchor.CENTER), TOWER_DESC_LAYER)

    def show_stats(self, index: int, bounds: Rect, tower: Optional[Tower] = None) -> None:
        """Describe a tower type; with a placed tower, also offer its targeting foci."""
        data = self.tower_data[index]
        ry = self.screen_ratio[1]
        unit = TILE_UNIT * ry
        icon_spacing = (bounds.width - unit / 2.0) / 3.0
        bottom_mult = 4 if "pierce" in data or "splash_radius" in data else 3

        texture = self.tower_textures[index]
        icon = Sprite(texture, bounds.left + unit / 4.0, bounds.top + unit / 2.0,
                      (bounds.width / 6.0) / float(texture.width), Origin.TOP_LEFT)
        self.play.add(icon, TOWER_DESC_LAYER)
        icon_bounds = icon.global_bounds()
        ix, iy = icon.position
        self.play.add(Label(data.get("name", ""), self.font, unit, ix + icon_bounds.width + 12 * ry,
                            iy + icon_bounds.height / 2.0, Anchor.LEFT_CENTER), TOWER_DESC_LAYER)

        desc_y = iy + icon_bounds.height
        if tower is not None:
            self._show_foci(tower, bounds, desc_y)
            desc_y += 2 * unit
        self.play.add(TextBox(data.get("description", ""), self.font, 16 * ry, ix, desc_y,
                              bounds.width - ix, Anchor.TOP_LEFT), TOWER_DESC_LAYER)

        price_y = bounds.top + bounds.height - unit * bottom_mult
        left = bounds.left + unit / 4.0
        if tower is None:
            self._add_stat(self.energy_texture, left, price_y, data.get("price", ""))

        damage = self._add_stat(self.damage_texture, left, price_y + unit + 12 * ry, data.get("damage", ""))
        dx, dy = damage.position
        range_icon = self._add_stat(self.range_texture, dx + icon_spacing, dy, data.get("range", ""))
        self._add_stat(self.speed_texture, range_icon.position[0] + icon_spacing, dy, data.get("speed", ""))

        second_row = dy + damage.global_bounds().height + 12 * ry
        offset = 0
        if "pierce" in data:
            self._add_stat(self.pierce_texture, dx, second_row, data["pierce"])
            offset += 1
        if "splash_radius" in data:
            self._add_stat(self.splash_range_texture, dx + icon_spacing * offset, second_row, data["splash_radius"])
            offset += 1
            self._add_stat(self.splash_damage_texture, dx + icon_spacing * offset, second_row,
                           data.get("splash_damage", ""))

    def _step_focus(self, focus: int, tower: Tower, step: int) -> None:
        last = len(FOCI_STRINGS) - 1
        if focus == 1:
            tower.focus1 = wrap(tower.focus1 + step, 0, last)
            if self.focus1_label is not None:
                self.focus1_label.text = FOCI_STRINGS[tower.focus1]
        else:
            tower.focus2 = wrap(tower.focus2 + step, 0, last)
            if self.focus2_label is not None:
                self.focus2_label.text = FOCI_STRINGS[tower.focus2]

    def prev_focus(self, focus: int, tower: Tower) -> None:
        self._step_focus(focus, tower, -1)

    def next_focus(self, focus: int, tower: Tower) -> None:
        self._step_focus(focus, tower, 1)

    def unpick_tower(self) -> None:
        self.play.empty_layer(TOWER_DESC_LAYER)
        self.play.show_layer(TOWER_BUTTONS_LAYER)

    def end_game(self) -> None:
        self.running = False

    def _clean_up(self) -> None:
        self.menu.empty()
        self.play.empty()


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="towerdef", description="Play the tower defense game.")
    parser.add_argument("--assets", default="./assets", help="directory holding the game assets")
    args = parser.parse_args(argv)
    try:
        Game(args.assets).run()
    finally:
        pygame.quit()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())