"""Constants for the pseudo-3D wall view.

Angles in radians; lengths in floorplan image pixels unless noted.
"""
import math

DEFAULT_YAW = math.pi / 4
DEFAULT_PITCH = math.pi / 8
PITCH_MIN = math.pi / 12             # keep a little of the wall faces visible
PITCH_MAX = 5 * math.pi / 12
ORBIT_SPEED = 0.01                   # radians per screen pixel of drag

# Wall height used when no pixel-per-metre scale is available
DEFAULT_WALL_HEIGHT_PX = 200.0

WALL_FILL = "rgba(170,170,170,0.7)"
FLOOR_STROKE = "#666"
