"""Great-circle distance and the local pixel-per-metre estimate."""
import math

from shared.types import Point2

from .constants import AVERAGE_EARTH_RADIUS


def haversine(p1: Point2, p2: Point2, radius: float = AVERAGE_EARTH_RADIUS) -> float:
    """Distance in metres between two (lng, lat) points in degrees."""
    lng1, lat1 = math.radians(p1[0]), math.radians(p1[1])
    lng2, lat2 = math.radians(p2[0]), math.radians(p2[1])
    h = (1 - math.cos(lat2 - lat1)
         + math.cos(lat1) * math.cos(lat2) * (1 - math.cos(lng2 - lng1))) / 2
    return 2 * radius * math.asin(math.sqrt(min(max(h, 0.0), 1.0)))


def pixel_scale(width: float, height: float, corners) -> float | None:
    """Image pixels per metre along the width-corner to height-corner diagonal.

    *corners* are the projected origin, width-corner and height-corner.
    Flat approximation, fine over the extent of one building. None when the
    projected corners coincide.
    """
    metres = haversine(corners[1], corners[2])
    if metres == 0.0:
        return None
    return math.hypot(width, height) / metres
