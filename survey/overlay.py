"""Placing the floorplan image on the world map.

The overlay pairs three local anchors (image pixels) with three geographic
anchors (lng, lat). Each change re-solves the affine map and re-projects
the image corners; a degenerate solve leaves the last good placement.
"""
import logging

from shared.geometry import GeometryError
from shared.schema import AnchorRecord
from shared.status import Status
from shared.types import Point2, BoundingBox2, AffineMap

from .constants import DEFAULT_LOCAL_ANCHORS, PLACEMENT_MARGIN
from .geodesy import pixel_scale
from .transform import solve_affine, project_rectangle

logger = logging.getLogger(__name__)


def place_in_view(local_anchors, floorplan_size, view: BoundingBox2, viewport_size,
                  margin: float = PLACEMENT_MARGIN) -> list[Point2]:
    """Geographic anchors that show the floorplan centred in the visible map.

    *view* spans (west, south) to (east, north); *viewport_size* is the map
    widget size in screen pixels. The view is shrunk by *margin* on every
    side and to a screen square, then cropped to the floorplan aspect ratio.
    Local anchors are interpolated linearly into the resulting box, with
    image y pointing south.
    """
    fp_w, fp_h = floorplan_size
    vp_w, vp_h = viewport_size
    if fp_w <= 0 or fp_h <= 0 or vp_w <= 0 or vp_h <= 0:
        raise GeometryError(f"Sizes must be positive: floorplan {floorplan_size}, viewport {viewport_size}")
    west, south = view.min
    east, north = view.max
    width, height = view.width(), view.height()

    half = 0.5 - margin
    if vp_w > vp_h:
        dx = width * (margin + half * (vp_w - vp_h) / vp_w)
        dy = margin * height
    else:
        dx = margin * width
        dy = height * (margin + half * (vp_h - vp_w) / vp_h)
    west, east, south, north = west + dx, east - dx, south + dy, north - dy

    if fp_w > fp_h:
        crop = (north - south) * (fp_w - fp_h) / fp_w / 2
        south, north = south + crop, north - crop
    else:
        crop = (east - west) * (fp_h - fp_w) / fp_h / 2
        west, east = west + crop, east - crop

    return [Point2(west + x * (east - west) / fp_w, north - y * (north - south) / fp_h)
            for x, y in local_anchors]


class GeoOverlay:
    """Anchor pairs, the solved map and the projected image corners."""

    def __init__(self, width: float, height: float, local_anchors=DEFAULT_LOCAL_ANCHORS):
        self.width = width
        self.height = height
        self.local_anchors = [Point2(*p).clamped(width, height) for p in local_anchors]
        self.geo_anchors: list[Point2] | None = None
        self.affine: AffineMap | None = None
        self.corners: list[Point2] | None = None
        self.scale: float | None = None
        self.persisted = False
        self._solved: tuple[list[Point2], list[Point2]] | None = None

    @property
    def placed(self) -> bool:
        return self.affine is not None

    @property
    def status(self) -> Status:
        return Status.OK if self.placed else Status.WARNING

    def move_local_anchor(self, index: int, point: Point2) -> bool:
        self.local_anchors[index] = Point2(*point).clamped(self.width, self.height)
        return self.update()

    def move_geo_anchor(self, index: int, point: Point2) -> bool:
        if self.geo_anchors is None:
            raise GeometryError("Overlay is not placed")
        self.geo_anchors[index] = Point2(*point)
        return self.update()

    def place(self, view: BoundingBox2, viewport_size) -> bool:
        """Drop the geographic anchors into the visible part of the map."""
        self.geo_anchors = place_in_view(self.local_anchors, (self.width, self.height),
                                         view, viewport_size)
        return self.update()

    def load(self, records) -> bool:
        """Restore a persisted placement; scale stays unavailable."""
        records = [AnchorRecord.model_validate(r) for r in records]
        if len(records) != 3:
            raise GeometryError(f"Need exactly 3 anchor records, got {len(records)}")
        self.local_anchors = [Point2(r.x, r.y) for r in records]
        self.geo_anchors = [Point2(r.lng, r.lat) for r in records]
        return self.update(persisted=True)

    def update(self, persisted: bool = False) -> bool:
        """Re-solve the map.

        On a degenerate solve returns False and restores the anchors of the
        last good placement, so the anchors always determine the map shown.
        """
        if self.geo_anchors is None:
            return False
        affine = solve_affine(self.local_anchors, self.geo_anchors)
        if affine is None:
            logger.debug("Degenerate anchors, keeping previous placement")
            if self._solved is not None:
                self.local_anchors, self.geo_anchors = (list(a) for a in self._solved)
            return False
        self._solved = (list(self.local_anchors), list(self.geo_anchors))
        self.affine = affine
        self.corners = project_rectangle(affine, self.width, self.height)
        self.persisted = persisted
        self.scale = None if persisted else pixel_scale(self.width, self.height, self.corners)
        logger.debug("Overlay corners %s, scale %s", self.corners, self.scale)
        return True

    def remove(self) -> None:
        self.geo_anchors = None
        self._solved = None
        self.affine = None
        self.corners = None
        self.scale = None
        self.persisted = False

    def anchor_payload(self) -> list[AnchorRecord]:
        """Index-aligned {x, y, lng, lat} records."""
        if self.geo_anchors is None:
            raise GeometryError("Overlay is not placed")
        return [AnchorRecord(x=p.x, y=p.y, lng=g.x, lat=g.y)
                for p, g in zip(self.local_anchors, self.geo_anchors)]
