"""Rasterising triangles seen through a perspective camera."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Sequence

import numpy as np

from .tgaimage import TGAColor, TGAImage


def _f32(rows) -> np.ndarray:
    return np.array(rows, dtype=np.float32)


def _normalized(vector: np.ndarray) -> np.ndarray:
    return vector / np.linalg.norm(vector)


@dataclass
class Triangle:
    """A triangle given as a flat list of vertex coordinates."""

    vertices: list[float] = field(default_factory=list)


class Reader(ABC):
    """A source of triangles read from a model file."""

    @abstractmethod
    def get_triangles(self) -> list[Triangle]:
        """Return every triangle of the model."""


@dataclass
class TriangleData:
    """World-space points of a triangle and their projected screen positions."""

    point_array: list[np.ndarray] = field(default_factory=list)
    point_array_in_screen_space: list[np.ndarray] = field(default_factory=list)

    def add_point(self, x: float, y: float, z: float) -> None:
        self.point_array.append(np.array([x, y, z], dtype=np.float64))


@dataclass
class Camera:
    """A perspective camera; rotation is pitch, yaw, roll in radians, applied x, y, z."""

    position: Sequence[float] = (6.441, 0.645, 6.734)
    rotation: Sequence[float] = (
        347.08 * math.pi / 180.0,
        38 * math.pi / 180.0,
        0 * math.pi / 180.0,
    )
    near_clip_plane: float = 0.100
    far_clip_plane: float = 10000.0
    focal_length: float = 30.0
    fov: float = 70.84 * math.pi / 180.0  # horizontal field of view
    aspect: float = 16.0 / 9.0  # width / height

    def __post_init__(self) -> None:
        self.position = tuple(float(v) for v in self.position)
        self.rotation = tuple(float(v) for v in self.rotation)
        if len(self.position) != 3 or len(self.rotation) != 3:
            raise ValueError("position and rotation need three components each")

    def view_matrix(self) -> np.ndarray:
        """Return the 4x4 world-to-camera matrix."""
        px, py, pz = self.position
        translation = _f32([
            [1, 0, 0, -px],
            [0, 1, 0, -py],
            [0, 0, 1, -pz],
            [0, 0, 0, 1],
        ])
        rx, ry, rz = self.rotation
        rot_x = _f32([
            [1, 0, 0],
            [0, math.cos(rx), -math.sin(rx)],
            [0, math.sin(rx), math.cos(rx)],
        ])
        rot_y = _f32([
            [math.cos(ry), 0, math.sin(ry)],
            [0, 1, 0],
            [-math.sin(ry), 0, math.cos(ry)],
        ])
        rot_z = _f32([
            [math.cos(rz), -math.sin(rz), 0],
            [math.sin(rz), math.cos(rz), 0],
            [0, 0, 1],
        ])
        rotation = rot_z @ rot_y @ rot_x
        look = _normalized(rotation @ _f32([0, 0, -1]))
        up = _normalized(rotation @ _f32([0, 1, 0]))
        right = _normalized(np.cross(look, up))
        basis = np.identity(4, dtype=np.float32)
        basis[0, :3] = right
        basis[1, :3] = up
        basis[2, :3] = -look
        return basis @ translation

    def projection_matrix(self) -> np.ndarray:
        """Return the 4x4 perspective projection matrix."""
        near, far = self.near_clip_plane, self.far_clip_plane
        right = near * math.tan(self.fov / 2.0)
        top = right / self.aspect
        return _f32([
            [near / right, 0, 0, 0],
            [0, near / top, 0, 0],
            [0, 0, (far + near) / (far - near), (2 * far * near) / (near - far)],
            [0, 0, -1, 0],
        ])


def _signed_areas(px, py, x1, y1, x2, y2, x3, y3):
    area1 = 0.5 * ((y1 + py) * (x1 - px) + (y1 + y2) * (x2 - x1) + (y2 + py) * (px - x2))
    area2 = 0.5 * ((y2 + py) * (x2 - px) + (y2 + y3) * (x3 - x2) + (y3 + py) * (px - x3))
    area3 = 0.5 * ((y3 + py) * (x3 - px) + (y3 + y1) * (x1 - x3) + (y1 + py) * (px - x1))
    return area1, area2, area3


def point_in_triangle(px: int, py: int, x1: int, y1: int, x2: int, y2: int,
                      x3: int, y3: int) -> bool:
    """Tell whether (px, py) lies in a triangle whose corners run clockwise (y up)."""
    return all(area >= 0 for area in _signed_areas(px, py, x1, y1, x2, y2, x3, y3))


class Paint:
    """Draws lines and filled triangles into a :class:`TGAImage`."""

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height

    def set_size(self, width: int, height: int) -> None:
        self.width = width
        self.height = height

    def draw_line(self, x0: int, y0: int, x1: int, y1: int,
                  image: TGAImage, color: TGAColor) -> None:
        """Draw a line from (x0, y0) to (x1, y1), both ends included."""
        steep = abs(x0 - x1) < abs(y0 - y1)
        if steep:
            x0, y0 = y0, x0
            x1, y1 = y1, x1
        if x0 > x1:
            x0, x1 = x1, x0
            y0, y1 = y1, y0
        y = y0
        error = 0
        rise = 2 * abs(y1 - y0)
        step = 1 if y1 > y0 else -1
        for x in range(x0, x1 + 1):
            if steep:
                image.set(y, x, color)
            else:
                image.set(x, y, color)
            error += rise
            if error > x1 - x0:
                y += step
                error -= 2 * (x1 - x0)

    def fill_triangle(self, x1: int, y1: int, x2: int, y2: int, x3: int, y3: int,
                      image: TGAImage, color: TGAColor) -> None:
        """Fill every pixel of the clockwise triangle, edges included."""
        min_x, max_x = min(x1, x2, x3), max(x1, x2, x3)
        min_y, max_y = min(y1, y2, y3), max(y1, y2, y3)
        xs = np.arange(min_x, max_x + 1, dtype=np.int64)[:, None]
        ys = np.arange(min_y, max_y + 1, dtype=np.int64)[None, :]
        areas = _signed_areas(xs, ys, x1, y1, x2, y2, x3, y3)
        inside = (areas[0] >= 0) & (areas[1] >= 0) & (areas[2] >= 0)
        for dx, dy in zip(*np.nonzero(inside)):
            image.set(min_x + int(dx), min_y + int(dy), color)

    def draw_pixel_by_camera(self, camera: Camera, triangles: Sequence[TriangleData],
                             width: int, height: int, image: TGAImage,
                             color: TGAColor) -> None:
        """Project each triangle through ``camera`` and fill it on ``image``."""
        viewport = _f32([
            [width / 2.0, 0, 0, width / 2.0],
            [0, height / 2.0, 0, height / 2.0],
            [0, 0, 1.0, 0],
            [0, 0, 0, 0],
        ])
        view = camera.view_matrix()
        projection = camera.projection_matrix()
        for triangle in triangles:
            for point in triangle.point_array:
                world = np.array([point[0], point[1], point[2], 1.0], dtype=np.float32)
                clip = projection @ (view @ world)
                ndc = clip / clip[3]
                screen = viewport @ ndc
                triangle.point_array_in_screen_space.append(
                    screen[:3].astype(np.float64)
                )
            corners = triangle.point_array_in_screen_space[:3]
            if len(corners) < 3:
                raise ValueError("a triangle needs three points")
            (ax, ay), (bx, by), (cx, cy) = ((int(p[0]), int(p[1])) for p in corners)
            self.fill_triangle(ax, ay, bx, by, cx, cy, image, color)