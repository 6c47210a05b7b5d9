"""Georeferencing constants.

Geographic points are (lng, lat) in degrees; local points are image pixels.
"""

AVERAGE_EARTH_RADIUS = 6_371_008.771  # metres, IUGG mean radius

# |v1 x v2| below this means the local anchors are collinear
DEGENERATE_DET = 1e-12

# Where the three local anchors start on a fresh floorplan
DEFAULT_LOCAL_ANCHORS = ((50.0, 50.0), (200.0, 50.0), (50.0, 200.0))

# Fraction of the visible map trimmed on each side when placing
PLACEMENT_MARGIN = 0.05
