import pytest

from towerdef.geometry import Rect, Transform, make_transform


def test_contains_includes_top_left_excludes_bottom_right():
    rect = Rect(0, 0, 10, 10)
    assert rect.contains(0, 0)
    assert rect.contains(9.5, 9.5)
    assert not rect.contains(10, 5)
    assert not rect.contains(5, 10)
    assert not rect.contains(-1, 5)


def test_contains_with_negative_size():
    rect = Rect(10, 10, -10, -10)
    assert rect.contains(5, 5)
    assert not rect.contains(11, 5)


def test_intersection_overlapping():
    assert Rect(0, 0, 10, 10).intersection(Rect(5, 5, 10, 10)) == Rect(5, 5, 5, 5)


def test_intersection_is_symmetric_and_inside_both():
    a = Rect(1, 2, 8, 6)
    b = Rect(4, -1, 10, 5)
    inter = a.intersection(b)
    assert inter == b.intersection(a)
    assert inter.left >= a.left and inter.left >= b.left
    assert inter.right <= a.right and inter.right <= b.right
    assert inter.top >= a.top and inter.top >= b.top
    assert inter.bottom <= a.bottom and inter.bottom <= b.bottom


def test_touching_rects_do_not_intersect():
    a = Rect(0, 0, 10, 10)
    b = Rect(10, 0, 10, 10)
    assert a.intersection(b) is None
    assert a.intersects(b) is False


def test_disjoint_rects():
    assert not Rect(0, 0, 1, 1).intersects(Rect(5, 5, 1, 1))


def test_identity_transform_keeps_points():
    assert Transform().transform_point(3, 4) == (3, 4)


def test_translation_maps_origin_to_position():
    t = make_transform((0, 0), (7, 9), 0, (1, 1))
    assert t.transform_point(0, 0) == pytest.approx((7, 9))


def test_origin_maps_to_position_under_rotation_and_scale():
    t = make_transform((3, 2), (20, 30), 37, (1.5, 0.5))
    assert t.transform_point(3, 2) == pytest.approx((20, 30))


def test_rotation_is_clockwise_in_screen_space():
    t = make_transform((0, 0), (0, 0), 90, (1, 1))
    assert t.transform_point(1, 0) == pytest.approx((0, 1), abs=1e-9)


def test_inverse_round_trip():
    t = make_transform((4, 5), (100, 50), 33, (2, 3))
    x, y = t.transform_point(12.5, -3.0)
    assert t.inverse().transform_point(x, y) == pytest.approx((12.5, -3.0))


def test_singular_inverse_is_identity():
    assert Transform(0, 0, 0, 0, 5, 5).inverse() == Transform()


def test_transform_rect_scales_size():
    t = make_transform((0, 0), (10, 20), 0, (2, 3))
    rect = t.transform_rect(Rect(0, 0, 4, 5))
    assert rect.left == pytest.approx(10)
    assert rect.top == pytest.approx(20)
    assert rect.width == pytest.approx(4 * 2)
    assert rect.height == pytest.approx(5 * 3)


def test_transform_rect_bounds_contain_all_corners():
    t = make_transform((2, 2), (50, 50), 45, (1, 1))
    local = Rect(0, 0, 4, 4)
    bounds = t.transform_rect(local)
    for cx, cy in [(0, 0), (4, 0), (4, 4), (0, 4)]:
        px, py = t.transform_point(cx, cy)
        assert bounds.left - 1e-9 <= px <= bounds.right + 1e-9
        assert bounds.top - 1e-9 <= py <= bounds.bottom + 1e-9