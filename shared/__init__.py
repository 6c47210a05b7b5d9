"""Shared types, geometry, status levels, wire schemas and SVG utilities."""

from .types import Point2, Vector2, Angle2, Matrix2, AffineMap, Ray2, BoundingBox2
from .geometry import (
    GeometryError,
    orientation, Segment2, Polygon2, Shape,
    shape_vertices, shape_edges, is_invalid,
)
from .status import Status, aggregate_status
from .svg import make_svg_transform
