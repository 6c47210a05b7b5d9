"""Affine map from three local anchors to three geographic anchors."""
import logging

from shared.geometry import GeometryError
from shared.types import Point2, Vector2, Matrix2, AffineMap

from .constants import DEGENERATE_DET

logger = logging.getLogger(__name__)


def solve_affine(src, dst) -> AffineMap | None:
    """Exact affine map taking src[i] to dst[i] for three pairs.

    Solves M.v1 = w1, M.v2 = w2 with Cramer's rule, where v1, v2 are the
    source edge vectors from src[0] and w1, w2 their images. The offset is
    back-substituted at src[0]. Returns None when the source points are
    collinear (|det| below DEGENERATE_DET).
    """
    if len(src) != 3 or len(dst) != 3:
        raise GeometryError(f"Need exactly 3 anchor pairs, got {len(src)} and {len(dst)}")
    src = [Point2(*p) for p in src]
    dst = [Point2(*p) for p in dst]

    v1, v2 = src[0].to(src[1]), src[0].to(src[2])
    w1, w2 = dst[0].to(dst[1]), dst[0].to(dst[2])
    det = v1.cross(v2)
    if abs(det) < DEGENERATE_DET:
        logger.debug("Degenerate anchors, det=%g", det)
        return None

    a = (w1.dx * v2.dy - w2.dx * v1.dy) / det
    b = (w2.dx * v1.dx - w1.dx * v2.dx) / det
    c = (w1.dy * v2.dy - w2.dy * v1.dy) / det
    d = (w2.dy * v1.dx - w1.dy * v2.dx) / det
    e = dst[0].x - a * src[0].x - b * src[0].y
    f = dst[0].y - c * src[0].x - d * src[0].y
    return AffineMap(Matrix2(a, b, c, d), Vector2(e, f))


def rectangle_corners(width: float, height: float) -> tuple[Point2, Point2, Point2]:
    """Origin, width-corner and height-corner of the image rectangle."""
    return Point2(0.0, 0.0), Point2(width, 0.0), Point2(0.0, height)


def project_rectangle(affine: AffineMap, width: float, height: float) -> list[Point2]:
    """Map the three reference corners of the image into geographic space."""
    return affine.apply_all(rectangle_corners(width, height))
