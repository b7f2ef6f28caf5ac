import pytest

pytest.importorskip("pygame")

from lastline.client.pygame_app import DOT_RADIUS, pixel_position, point_at_pixel  # noqa: E402
from lastline.grid import generate  # noqa: E402


def test_pixel_position_centres_points_in_cells():
    points = generate(4)
    assert pixel_position(points[0], 100) == (50, 50)
    assert pixel_position(points[6], 100) == (250, 150)


def test_click_near_a_point():
    points = generate(4)
    assert point_at_pixel(points, 100, (50, 50)) == points[0]
    assert point_at_pixel(points, 100, (160, 250)).index == 9
    assert point_at_pixel(points, 100, (50 + DOT_RADIUS * 2, 50)) == points[0]


def test_click_between_points_misses():
    points = generate(4)
    assert point_at_pixel(points, 100, (100, 100)) is None
    assert point_at_pixel(points, 100, (50 + DOT_RADIUS * 2 + 1, 50)) is None
