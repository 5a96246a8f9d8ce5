import pygame
import pytest

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


def make_texture(width=4, height=4, color=(255, 0, 0, 255)):
    surface = pygame.Surface((width, height), pygame.SRCALPHA)
    surface.fill(color)
    return Texture.from_surface(surface)


def test_texture_size_and_alpha():
    tex = make_texture(6, 3, (10, 20, 30, 77))
    assert tex.size == (6, 3)
    assert tex.alpha_at(2, 1) == 77


def test_texture_from_file_round_trip(tmp_path):
    surface = pygame.Surface((5, 7))
    file = tmp_path / "tex.bmp"
    pygame.image.save(surface, str(file))
    assert Texture.from_file(file).size == (5, 7)


def test_texture_from_missing_file():
    with pytest.raises(FileNotFoundError):
        Texture.from_file("does/not/exist.png")


def test_default_sprite_bounds_at_position():
    sprite = Sprite(make_texture(4, 6), 10, 20)
    bounds = sprite.global_bounds()
    assert (bounds.left, bounds.top) == pytest.approx((10, 20))
    assert (bounds.width, bounds.height) == pytest.approx((4, 6))


def test_center_origin_centers_on_position():
    sprite = Sprite(make_texture(8, 4), 50, 60, 2.0, Origin.CENTER)
    assert sprite.global_bounds().center == pytest.approx((50, 60))
    assert sprite.global_bounds().width == pytest.approx(8 * 2.0)


def test_bottom_right_origin():
    sprite = Sprite(make_texture(8, 4), 50, 60, 1.0, Origin.BOTTOM_RIGHT)
    bounds = sprite.global_bounds()
    assert (bounds.right, bounds.bottom) == pytest.approx((50, 60))


def test_rotation_is_normalised():
    sprite = Sprite(make_texture(), angle=450)
    assert sprite.rotation == pytest.approx(90)


def test_inverse_transform_round_trip():
    sprite = Sprite(make_texture(), 10, 10, 1.5, Origin.CENTER, 30)
    x, y = sprite.transform().transform_point(1, 2)
    assert sprite.inverse_transform().transform_point(x, y) == pytest.approx((1, 2))


def test_update_tracks_hover():
    sprite = Sprite(make_texture(4, 4), 0, 0)
    sprite.update((1, 1))
    assert sprite.hovered is True
    sprite.update((100, 100))
    assert sprite.hovered is False


def test_set_visible_propagates_to_mount():
    parent = Sprite(make_texture())
    rider = Sprite(make_texture())
    parent.set_mount(rider)
    parent.set_visible(False)
    assert rider.visible is False
    assert parent.visible is False


def test_kill_removes_mounts_recursively():
    parent = Sprite(make_texture())
    rider = Sprite(make_texture())
    nested = Sprite(make_texture())
    rider.set_mount(nested)
    parent.set_mount(rider)
    assert parent.has_mount() is True
    parent.kill()
    assert parent.has_mount() is False
    assert rider.has_mount() is False


def test_draw_blits_texture_at_position():
    target = pygame.Surface((10, 10))
    target.fill((0, 0, 0))
    Sprite(make_texture(4, 4, (255, 0, 0, 255)), 2, 2).draw(target)
    assert target.get_at((3, 3)) == (255, 0, 0, 255)
    assert target.get_at((0, 0)) == (0, 0, 0, 255)


def test_invisible_sprite_is_not_drawn():
    target = pygame.Surface((10, 10))
    target.fill((0, 0, 0))
    sprite = Sprite(make_texture(4, 4, (255, 0, 0, 255)), 2, 2)
    sprite.set_visible(False)
    sprite.draw(target)
    assert target.get_at((3, 3)) == (0, 0, 0, 255)


def test_button_click_runs_command():
    calls = []
    button = Button(make_texture(), lambda: calls.append("clicked"))
    button.click()
    assert calls == ["clicked"]


def test_button_hover_grows_and_restores():
    button = Button(make_texture(), lambda: None, 5, 5, 2.0, Origin.CENTER)
    button.hover()
    assert button.scale[0] > 2.0
    assert button.position == (5, 5)
    button.un_hover()
    assert button.scale == pytest.approx((2.0, 2.0))
    assert button.hovered is False


def test_canopy_translucent_on_hover():
    canopy = Canopy(make_texture(), 5, 5, 0, 1.0, Origin.CENTER)
    canopy.hover()
    assert canopy.color == (255, 255, 255, 128)
    canopy.un_hover()
    assert canopy.color == (255, 255, 255, 255)


def test_tower_gui_shows_highlight_only_while_hovered():
    rider = Sprite(make_texture())
    gui = TowerGUI(make_texture(), 0, 0, 1.0, Origin.TOP_LEFT, lambda: None, rider)
    assert rider.visible is False
    gui.hover()
    assert rider.visible is True
    assert gui.scale == (1.0, 1.0)
    gui.un_hover()
    assert rider.visible is False


def test_tower_gui_set_visible_resets_hover():
    rider = Sprite(make_texture())
    gui = TowerGUI(make_texture(), 0, 0, 1.0, Origin.TOP_LEFT, lambda: None, rider)
    gui.hover()
    gui.set_visible(False)
    assert rider.visible is False
    gui.set_visible(True)
    assert gui.visible is True
    assert gui.hovered is False
    assert rider.visible is False


def test_subclasses_keep_sprite_placement():
    tex = make_texture(4, 4)
    path = Path(tex, 3, 4, 1.0, Origin.TOP_LEFT)
    assert path.next_waypoint is None
    assert path.global_bounds().left == pytest.approx(3)
    assert Terrain(tex, 7, 8).position == (7, 8)
    assert Obstacle(tex).position == (0.0, 0.0)