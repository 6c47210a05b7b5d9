"""Segments and polygons: projection, intersection, containment, validity."""
from typing import NamedTuple

from .types import Point2, Vector2, Ray2, BoundingBox2

# ============================================================
# Error Type
# ============================================================
class GeometryError(ValueError):
    """Raised for impossible geometry operations."""

# Relative tolerance for collinearity in orientation tests
ORIENT_EPS = 1e-9
# Absolute distance under which a point is considered on an edge
ON_EDGE_EPS = 1e-9

# ============================================================
# Predicates
# ============================================================
def orientation(a: Point2, b: Point2, c: Point2) -> int:
    """Turn direction of a -> b -> c: 1 left, -1 right, 0 collinear."""
    ab = a.to(b); ac = a.to(c)
    cr = ab.cross(ac)
    if abs(cr) <= ORIENT_EPS * max(1.0, ab.norm() * ac.norm()):
        return 0
    return 1 if cr > 0 else -1

# ============================================================
# Segment
# ============================================================
class Segment2(NamedTuple):
    """Ordered pair of endpoints. Also the wall shape of the editor."""
    p: Point2
    q: Point2

    @property
    def points(self) -> tuple[Point2, Point2]:
        return (self.p, self.q)

    def vector(self) -> Vector2:
        return self.p.to(self.q)

    def project(self, pt: Point2, clamp: bool = True) -> Point2:
        """Closest point to *pt* on the supporting line.

        With *clamp* the result is restricted to the segment itself. A
        zero-length segment projects everything onto its endpoint.
        """
        d = self.vector(); sq = d.sqnorm()
        if sq == 0.0:
            return self.p
        t = self.p.to(pt).dot(d) / sq
        if clamp:
            t = min(1.0, max(0.0, t))
        return self.p.plus(d.scaled(t))

    def distance(self, pt: Point2) -> float:
        return pt.distance(self.project(pt, True))

    def intersect(self, ray: Ray2) -> Point2 | None:
        """Intersection with *ray*, or None if parallel or out of range."""
        d = self.vector(); r = ray.direction()
        den = r.cross(d)
        if abs(den) < 1e-12:
            return None
        w = ray.source.to(self.p)
        t = w.cross(d) / den  # along the ray
        u = w.cross(r) / den  # along the segment
        if t < 0.0 or u < 0.0 or u > 1.0:
            return None
        return ray.source.plus(r.scaled(t))

    def crosses(self, other: "Segment2") -> bool:
        """Proper crossing: each segment strictly separates the other's endpoints.

        Touching at an endpoint or overlapping collinearly is not a crossing.
        """
        o1 = orientation(self.p, self.q, other.p)
        o2 = orientation(self.p, self.q, other.q)
        o3 = orientation(other.p, other.q, self.p)
        o4 = orientation(other.p, other.q, self.q)
        return o1 * o2 < 0 and o3 * o4 < 0

    def update(self, index: int, pt: Point2) -> "Segment2":
        pts = [self.p, self.q]
        pts[index % 2] = pt
        return Segment2(*pts)

    def scaled(self, k: float) -> "Segment2":
        return Segment2(self.p.scaled(k), self.q.scaled(k))

    def bounding_box(self) -> BoundingBox2:
        return BoundingBox2.of_points(self.points)

# ============================================================
# Polygon
# ============================================================
class Polygon2(NamedTuple):
    """Implicitly closed vertex ring: the last vertex connects to the first.

    Validity (no self-crossing, no overlap with neighbours) is a derived
    property, checked by is_invalid(); the editor keeps invalid polygons so
    they can be shown and fixed.
    """
    points: tuple[Point2, ...]

    @classmethod
    def of(cls, points) -> "Polygon2":
        """Build from any iterable of (x, y) pairs."""
        return cls(tuple(Point2(float(x), float(y)) for x, y in points))

    def edges(self) -> list[Segment2]:
        n = len(self.points)
        return [Segment2(self.points[i], self.points[(i+1) % n]) for i in range(n)]

    def winding_number(self, pt: Point2) -> int:
        """Signed number of turns of the boundary around *pt* (Sunday's rule).

        Upward edges include their start and exclude their end, so points
        exactly on the boundary get whatever that half-open rule gives.
        Use contains() for a boundary-inclusive test.
        """
        wn = 0
        for e in self.edges():
            side = e.p.to(e.q).cross(e.p.to(pt))
            if e.p.y <= pt.y:
                if e.q.y > pt.y and side > 0:
                    wn += 1
            elif e.q.y <= pt.y and side < 0:
                wn -= 1
        return wn

    def contains(self, pt: Point2) -> bool:
        """Point-in-polygon with the boundary counted as inside."""
        if any(e.distance(pt) <= ON_EDGE_EPS for e in self.edges()):
            return True
        return self.winding_number(pt) != 0

    def is_self_intersecting(self) -> bool:
        """True if two non-adjacent edges cross."""
        edges = self.edges(); n = len(edges)
        for i in range(n):
            for j in range(i+2, n):
                if i == 0 and j == n-1:
                    continue  # first and last edges share vertex 0
                if edges[i].crosses(edges[j]):
                    return True
        return False

    def intersects(self, other: "Polygon2") -> bool:
        """True if any edge of this polygon crosses any edge of *other*."""
        theirs = other.edges()
        return any(e.crosses(f) for e in self.edges() for f in theirs)

    def bounding_box(self) -> BoundingBox2:
        return BoundingBox2.of_points(self.points)

    def insert(self, index: int, pt: Point2) -> "Polygon2":
        pts = list(self.points)
        pts.insert(index % len(pts) if pts else 0, pt)
        return Polygon2(tuple(pts))

    def remove(self, index: int) -> "Polygon2":
        """Drop a vertex. A triangle is returned unchanged."""
        if len(self.points) <= 3:
            return self
        pts = list(self.points)
        del pts[index % len(pts)]
        return Polygon2(tuple(pts))

    def update(self, index: int, pt: Point2) -> "Polygon2":
        pts = list(self.points)
        pts[index % len(pts)] = pt
        return Polygon2(tuple(pts))

    def scaled(self, k: float) -> "Polygon2":
        return Polygon2(tuple(p.scaled(k) for p in self.points))


Shape = Segment2 | Polygon2

# ============================================================
# Shape helpers
# ============================================================
def shape_vertices(shape: Shape) -> tuple[Point2, ...]:
    """Vertices of a shape in drawing order."""
    if isinstance(shape, Segment2):
        return shape.points
    if isinstance(shape, Polygon2):
        return shape.points
    raise GeometryError(f"Unknown shape type: {type(shape).__name__}")

def shape_edges(shape: Shape) -> list[Segment2]:
    """Boundary segments: the segment itself, or the polygon ring."""
    if isinstance(shape, Segment2):
        return [shape]
    if isinstance(shape, Polygon2):
        return shape.edges()
    raise GeometryError(f"Unknown shape type: {type(shape).__name__}")

def is_invalid(polygon: Polygon2, shapes, skip: int | None = None) -> bool:
    """Self-intersecting, or crossing any other polygon of *shapes*.

    *skip* is the index of *polygon* itself when it is already in the list.
    """
    if polygon.is_self_intersecting():
        return True
    for i, shape in enumerate(shapes):
        if i == skip or not isinstance(shape, Polygon2):
            continue
        if polygon.intersects(shape):
            return True
    return False
