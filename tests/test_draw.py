import math

import numpy as np
import pytest

from softrender.draw import (
    Camera,
    Paint,
    Reader,
    Triangle,
    TriangleData,
    point_in_triangle,
)
from softrender.tgaimage import TGAColor, TGAImage

RED = TGAColor(0, 0, 255, 255)


def _colored(image):
    return {
        (x, y)
        for x in range(image.width)
        for y in range(image.height)
        if image.get(x, y).bgra[:3] != (0, 0, 0)
    }


def test_point_in_clockwise_triangle():
    assert point_in_triangle(1, 1, 0, 0, 0, 10, 10, 0)
    assert point_in_triangle(0, 5, 0, 0, 0, 10, 10, 0)
    assert not point_in_triangle(20, 20, 0, 0, 0, 10, 10, 0)


def test_counterclockwise_triangle_contains_nothing():
    assert not point_in_triangle(1, 1, 0, 0, 10, 0, 0, 10)


def test_horizontal_line_endpoints_and_length():
    image = TGAImage(20, 20, TGAImage.RGB)
    Paint(20, 20).draw_line(2, 5, 12, 5, image, RED)
    pixels = _colored(image)
    assert pixels == {(x, 5) for x in range(2, 13)}


def test_steep_line_covers_each_row_once():
    image = TGAImage(20, 20, TGAImage.RGB)
    Paint(20, 20).draw_line(3, 1, 6, 15, image, RED)
    pixels = _colored(image)
    assert (3, 1) in pixels and (6, 15) in pixels
    assert sorted(y for _, y in pixels) == list(range(1, 16))


def test_line_direction_does_not_matter():
    forward = TGAImage(30, 30, TGAImage.RGB)
    backward = TGAImage(30, 30, TGAImage.RGB)
    paint = Paint(30, 30)
    paint.draw_line(7, 3, 12, 27, forward, RED)
    paint.draw_line(12, 27, 7, 3, backward, RED)
    assert forward.pixels == backward.pixels


def test_fill_triangle_includes_corners_and_stays_in_box():
    image = TGAImage(20, 20, TGAImage.RGB)
    Paint(20, 20).fill_triangle(2, 2, 2, 12, 12, 2, image, RED)
    pixels = _colored(image)
    assert {(2, 2), (2, 12), (12, 2), (4, 4)} <= pixels
    assert all(2 <= x <= 12 and 2 <= y <= 12 for x, y in pixels)
    assert all(point_in_triangle(x, y, 2, 2, 2, 12, 12, 2) for x, y in pixels)


def test_fill_counterclockwise_triangle_draws_nothing():
    image = TGAImage(20, 20, TGAImage.RGB)
    Paint(20, 20).fill_triangle(2, 2, 12, 2, 2, 12, image, RED)
    assert _colored(image) == set()


def test_set_size():
    paint = Paint(4, 3)
    paint.set_size(8, 6)
    assert (paint.width, paint.height) == (8, 6)


def test_add_point():
    triangle = TriangleData()
    triangle.add_point(1.0, 2.0, 3.0)
    assert len(triangle.point_array) == 1
    assert np.allclose(triangle.point_array[0], [1.0, 2.0, 3.0])
    assert triangle.point_array_in_screen_space == []


def test_view_matrix_sends_camera_position_to_origin():
    camera = Camera()
    position = np.array([*camera.position, 1.0], dtype=np.float32)
    assert np.allclose(camera.view_matrix() @ position, [0, 0, 0, 1], atol=1e-4)


def test_view_matrix_rotation_is_orthonormal():
    rotation = Camera().view_matrix()[:3, :3]
    assert np.allclose(rotation @ rotation.T, np.identity(3), atol=1e-5)
    assert np.allclose(Camera().view_matrix()[3], [0, 0, 0, 1])


def test_view_matrix_without_rotation_is_translation():
    camera = Camera(position=(1.0, 2.0, 3.0), rotation=(0.0, 0.0, 0.0))
    expected = np.identity(4)
    expected[:3, 3] = [-1.0, -2.0, -3.0]
    assert np.allclose(camera.view_matrix(), expected, atol=1e-6)


def test_camera_rejects_short_position():
    with pytest.raises(ValueError):
        Camera(position=(1.0, 2.0))


def test_projection_maps_frustum_edges_to_unit():
    camera = Camera()
    projection = camera.projection_matrix()
    half_width = math.tan(camera.fov / 2.0)
    half_height = half_width / camera.aspect
    for depth in (1.0, 5.0, 50.0):
        clip = projection @ np.array(
            [half_width * depth, half_height * depth, -depth, 1.0], dtype=np.float32
        )
        assert np.allclose(clip[:2] / clip[3], [1.0, 1.0], atol=1e-4)
    assert projection[3, 2] == -1


def _facing_camera():
    return Camera(position=(0.0, 0.0, 5.0), rotation=(0.0, 0.0, 0.0))


def test_draw_pixel_by_camera_fills_center():
    image = TGAImage(32, 18, TGAImage.RGB)
    triangle = TriangleData()
    triangle.add_point(-1.0, -1.0, 0.0)
    triangle.add_point(0.0, 1.0, 0.0)
    triangle.add_point(1.0, -1.0, 0.0)
    Paint(32, 18).draw_pixel_by_camera(_facing_camera(), [triangle], 32, 18, image, RED)
    assert image.get(16, 9).bgra[:3] == (0, 0, 255)
    assert image.get(0, 0).bgra[:3] == (0, 0, 0)
    assert len(triangle.point_array_in_screen_space) == 3


def test_point_on_axis_projects_to_screen_center():
    image = TGAImage(32, 18, TGAImage.RGB)
    triangle = TriangleData()
    triangle.add_point(0.0, 0.0, 0.0)
    triangle.add_point(0.0, 1.0, 0.0)
    triangle.add_point(1.0, 0.0, 0.0)
    Paint(32, 18).draw_pixel_by_camera(_facing_camera(), [triangle], 32, 18, image, RED)
    assert np.allclose(triangle.point_array_in_screen_space[0][:2], [16, 9], atol=1e-3)


def test_draw_pixel_by_camera_needs_three_points():
    triangle = TriangleData()
    triangle.add_point(0.0, 0.0, 0.0)
    image = TGAImage(8, 8, TGAImage.RGB)
    with pytest.raises(ValueError):
        Paint(8, 8).draw_pixel_by_camera(_facing_camera(), [triangle], 8, 8, image, RED)


def test_reader_is_abstract():
    with pytest.raises(TypeError):
        Reader()


class _IncompleteReader(Reader):
    pass


class _FixedReader(Reader):
    def __init__(self, triangles):
        self._triangles = triangles

    def get_triangles(self):
        return list(self._triangles)


def test_reader_subclass_must_provide_get_triangles():
    with pytest.raises(TypeError):
        _IncompleteReader()

    triangle = Triangle([0.0, 1.0, 2.0])
    reader = _FixedReader([triangle])
    triangles = reader.get_triangles()
    assert len(triangles) == 1
    assert triangles[0] is triangle
    assert list(triangles[0].vertices) == [0.0, 1.0, 2.0]


def test_triangle_keeps_vertices():
    triangle = Triangle([0.0, 1.0, 2.0])
    assert list(triangle.vertices) == [0.0, 1.0, 2.0]