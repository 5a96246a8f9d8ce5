import pygame
import pytest

from towerdef.label import Anchor, Label, TextBox, VariableLabel, word_wrap


@pytest.fixture(autouse=True)
def fonts():
    pygame.font.init()
    yield


def test_top_left_anchor_places_corner_at_position():
    label = Label("Hello", None, 20, 30.0, 40.0, Anchor.TOP_LEFT)
    bounds = label.global_bounds()
    assert bounds.left == pytest.approx(30.0)
    assert bounds.top == pytest.approx(40.0)


def test_center_anchor_centres_on_position():
    label = Label("Hello", None, 20, 30.0, 40.0, Anchor.CENTER)
    cx, cy = label.global_bounds().center
    assert cx == pytest.approx(30.0)
    assert cy == pytest.approx(40.0)


def test_left_center_anchor():
    label = Label("Hello", None, 20, 30.0, 40.0, Anchor.LEFT_CENTER)
    bounds = label.global_bounds()
    assert bounds.left == pytest.approx(30.0)
    assert bounds.center[1] == pytest.approx(40.0)


def test_character_size_is_kept():
    label = Label("x", None, 20.7, 0, 0)
    assert label.size == 20


def test_setting_text_keeps_origin_and_changes_width():
    label = Label("ab", None, 20, 0, 0, Anchor.CENTER)
    origin = label.origin_point
    narrow = label.local_bounds().width
    label.text = "abcdefgh"
    assert label.origin_point == origin
    assert label.local_bounds().width > narrow


def test_draw_visible_changes_surface():
    surface = pygame.Surface((200, 100))
    before = pygame.image.tobytes(surface, "RGB")
    Label("XXXX", None, 30, 10, 10).draw(surface)
    assert pygame.image.tobytes(surface, "RGB") != before


def test_hidden_label_draws_nothing():
    surface = pygame.Surface((200, 100))
    before = pygame.image.tobytes(surface, "RGB")
    label = Label("XXXX", None, 30, 10, 10)
    label.set_visible(False)
    label.draw(surface)
    assert label.visible is False
    assert pygame.image.tobytes(surface, "RGB") == before


def test_word_wrap_wide_keeps_one_line():
    assert word_wrap("alpha beta  gamma", 10000, None, 16) == "alpha beta gamma "


def test_word_wrap_zero_width_breaks_before_every_word():
    assert word_wrap("alpha beta", 0, None, 16) == "\nalpha \nbeta "


def test_word_wrap_preserves_words():
    text = "the quick brown fox jumps over the lazy dog"
    wrapped = word_wrap(text, 80, None, 16)
    assert wrapped.split() == text.split()
    assert "\n" in wrapped
    assert wrapped.count("\n") <= len(text.split())


def test_textbox_wraps_its_text():
    text = "the quick brown fox jumps over the lazy dog"
    box = TextBox(text, None, 16, 0, 0, 80)
    single = Label(text, None, 16, 0, 0)
    assert box.text == word_wrap(text, 80, None, 16)
    assert box.width == 80
    assert box.local_bounds().height > single.local_bounds().height


def test_variable_label_tracks_value():
    value = {"energy": 100}
    label = VariableLabel(lambda: value["energy"], None, 16, 0, 0)
    assert label.text == "100"
    value["energy"] = 42
    label.update()
    assert label.text == "42"