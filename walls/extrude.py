"""Extruded wall view: every traced edge becomes a vertical quad.

Image pixels (x, y) lie on the floor plane; y in the image is depth z in
3D and height goes up. The camera orbits the image centre by yaw (about the
vertical axis) and pitch (tilt towards the viewer), with an orthographic
projection scaled by view_scale().
"""
import math
from typing import NamedTuple

import numpy as np

from shared.geometry import shape_edges
from shared.types import Point2, Vector2, Matrix2, AffineMap

from .constants import (
    DEFAULT_YAW, DEFAULT_PITCH, PITCH_MIN, PITCH_MAX, ORBIT_SPEED, DEFAULT_WALL_HEIGHT_PX,
)


class Orbit(NamedTuple):
    yaw: float = DEFAULT_YAW
    pitch: float = DEFAULT_PITCH

    def dragged(self, dx: float, dy: float) -> "Orbit":
        """Orbit after a pointer drag of (dx, dy) screen pixels."""
        pitch = min(max(self.pitch + dy * ORBIT_SPEED, PITCH_MIN), PITCH_MAX)
        return Orbit(self.yaw + dx * ORBIT_SPEED, pitch)


class WallQuad(NamedTuple):
    """Screen quad of one extruded edge: floor a, floor b, top b, top a."""
    shape: int
    edge: int
    points: tuple[Point2, Point2, Point2, Point2]


def wall_height_px(height_m: float | None, scale: float | None) -> float:
    """Wall height in image pixels from metres and the pixel-per-metre scale."""
    if scale is None or height_m is None or math.isnan(height_m):
        return DEFAULT_WALL_HEIGHT_PX
    return height_m * scale


def view_scale(viewport_size, image_size, pixel_ratio: float = 1.0) -> float:
    """Screen pixels per image pixel so the image fits the smaller viewport side."""
    return min(viewport_size) / max(image_size) * pixel_ratio


def floor_transform(orbit: Orbit, scale: float, image_size, canvas_size) -> AffineMap:
    """Affine map drawing the floorplan image on the floor plane."""
    cos_yaw, sin_yaw = math.cos(orbit.yaw), math.sin(orbit.yaw)
    sp = math.sin(orbit.pitch)
    icx, icy = image_size[0] / 2, image_size[1] / 2
    ccx, ccy = canvas_size[0] / 2, canvas_size[1] / 2
    m = Matrix2(scale * cos_yaw, scale * sin_yaw, -scale * sin_yaw * sp, scale * cos_yaw * sp)
    e = ccx - scale * (icx * cos_yaw + icy * sin_yaw)
    f = ccy + scale * (icx * sin_yaw - icy * cos_yaw) * sp
    return AffineMap(m, Vector2(e, f))


def project_points(points3: np.ndarray, orbit: Orbit, scale: float, canvas_size) -> np.ndarray:
    """Project (N, 3) centred points (x, height, z) to (N, 2) screen points."""
    pts = np.asarray(points3, dtype=float).reshape(-1, 3)
    cos_yaw, sin_yaw = math.cos(orbit.yaw), math.sin(orbit.yaw)
    cp, sp = math.cos(orbit.pitch), math.sin(orbit.pitch)
    x = pts[:, 0] * cos_yaw + pts[:, 2] * sin_yaw
    z = -pts[:, 0] * sin_yaw + pts[:, 2] * cos_yaw
    y = pts[:, 1] * cp - z * sp
    centre = np.array([canvas_size[0] / 2, canvas_size[1] / 2])
    return np.column_stack((centre[0] + x * scale, centre[1] - y * scale))


def project_walls(shapes, orbit: Orbit, scale: float, image_size, canvas_size,
                  height: float = DEFAULT_WALL_HEIGHT_PX) -> list[WallQuad]:
    """One screen quad per edge of every shape, closing edges included."""
    index = [(i, k, edge) for i, shape in enumerate(shapes)
             for k, edge in enumerate(shape_edges(shape))]
    if not index:
        return []
    icx, icy = image_size[0] / 2, image_size[1] / 2
    ends = np.array([[e.p.x, e.p.y, e.q.x, e.q.y] for _, _, e in index], dtype=float)
    ends -= [icx, icy, icx, icy]
    n = len(index)
    corners = np.empty((n, 4, 3))
    corners[:, 0] = np.column_stack((ends[:, 0], np.zeros(n), ends[:, 1]))
    corners[:, 1] = np.column_stack((ends[:, 2], np.zeros(n), ends[:, 3]))
    corners[:, 2] = np.column_stack((ends[:, 2], np.full(n, height), ends[:, 3]))
    corners[:, 3] = np.column_stack((ends[:, 0], np.full(n, height), ends[:, 1]))
    screen = project_points(corners.reshape(-1, 3), orbit, scale, canvas_size).reshape(n, 4, 2)
    return [WallQuad(i, k, tuple(Point2(float(x), float(y)) for x, y in quad))
            for (i, k, _), quad in zip(index, screen)]
