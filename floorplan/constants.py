"""Named constants for the floorplan editor.

Distances are image pixels at zoom 1; the editor multiplies them by the
current viewport scale.
"""

# Snapping / hit-test tolerance
MAGNETISM = 8.0

# Pointer buttons (DOM numbering)
PRIMARY_BUTTON = 0
SECONDARY_BUTTON = 2

# Key that cancels the gesture in progress
ESCAPE_KEY = "Escape"

# Stroke widths
LINE_WIDTH = 1
HOVERED_LINE_WIDTH = 2
HANDLE_RADIUS = 2 * HOVERED_LINE_WIDTH

# Dash pattern of edges that are not committed yet
GHOST_DASH = (4 * LINE_WIDTH, 4 * LINE_WIDTH)

# Colors
STROKE_COLOR = "#000"
INVALID_COLOR = "#f00"
HANDLE_FILL = "#fff"
CLOSE_HANDLE_FILL = "#ff0"
INSERT_MARKER_FILL = "#0828"
MASK_FILL = "rgba(0,0,0,0.33)"

# Pointer cursors reported with each frame
CURSOR_DRAW = "crosshair"
CURSOR_CLOSE = "cell"
CURSOR_GRAB = "grab"
CURSOR_GRABBING = "grabbing"
CURSOR_INSERT = "copy"
