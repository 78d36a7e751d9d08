"""Named constants for camera coverage: defaults, thresholds, and lookup tables.

Plan distances are in pixels, physical distances in meters, angles in degrees
unless noted.
"""

# Plan scale
DEFAULT_PIXELS_PER_METER = 17.5   # px per meter when the plan has no calibration

# Coverage defaults
DEFAULT_RADIUS_M = 10.0           # initial draw distance
DEFAULT_MAX_RANGE_M = 50.0        # user range cap when nothing else is known
DEFAULT_START_ANGLE = 270.0       # 90 degree wedge pointing up-right on screen
DEFAULT_END_ANGLE = 0.0
DEFAULT_FILL_COLOR = "rgba(165, 155, 155, 0.3)"
DEFAULT_BASE_COLOR = "rgb(165, 155, 155)"
DEFAULT_OPACITY = 0.3
DEFAULT_EDGE_STYLE = "solid"
DEFAULT_PROJECTION = "circular"

# Mounting defaults
DEFAULT_CAMERA_HEIGHT = 3.0       # m
DEFAULT_CAMERA_TILT = 25.0        # deg below horizontal

# UI input bounds (values outside are clamped, never rejected)
MIN_SPAN = 1.0                    # deg
MAX_SPAN = 360.0                  # deg
FULL_CIRCLE_SNAP = 359.0          # requested span at or above snaps to 0..360
MIN_DISTANCE_M = 1.0
MAX_DISTANCE_M = 500.0
MIN_CAMERA_HEIGHT = 0.1           # m
MAX_CAMERA_HEIGHT = 50.0          # m
MIN_CAMERA_TILT = 0.0             # deg
MAX_CAMERA_TILT = 90.0            # deg

# Polygon construction
FULL_CIRCLE_SPAN = 359.9          # span at or above is drawn as a closed ring
FULL_CIRCLE_RAYS = 180
MIN_RAYS = 20
RECT_MAX_SPAN = 170.0             # rectangular projection only below this span
RECT_MAX_OFFSET_RAD = 1.4         # rad, ~80 deg either side of the mid-angle
RECT_MIN_COS = 0.1                # asymptote guard for radius / cos
RECT_MIN_RADIUS = 0.01            # px, outer radius below this is never stretched
MIN_DEAD_ZONE = 0.1               # px, smaller dead zones close to the center

# Physics
INFINITE_RANGE_M = 10000.0        # sentinel for "top ray never reaches the ground"
MIN_TAN = 1e-10                   # near-horizontal ray guard

# DORI (IEC 62676-4), pixels per meter
DORI_PPM = {
    "detection": 25.0,
    "observation": 62.5,
    "recognition": 125.0,
    "identification": 250.0,
}
DORI_COLORS = {                   # light pastel fills, rgb only
    "detection": (186, 225, 255),
    "observation": (186, 255, 201),
    "recognition": (255, 255, 186),
    "identification": (255, 179, 186),
}
DEFAULT_RESOLUTION_WIDTH = 1920   # px, when a resolution string cannot be parsed
MIN_TAN_HALF_FOV = 0.001
MIN_ZONE_RADIUS_M = 0.1

# Edge styles -> SVG/canvas dash arrays
EDGE_DASH = {
    "solid": None,
    "dashed": [10, 5],
    "dotted": [2, 2],
}

# Interaction
HANDLE_OFFSET = 5.0               # deg, handle spread for full circles / tiny spans
HANDLE_HIT_RADIUS = 10.0          # px, pointer-down tolerance around a handle
COLLAPSE_OFFSET = 5.0             # deg, where both angles land on a collapsing resize

# Sensor formats -> active area (mm)
DEFAULT_SENSOR = "1/2.0"
SENSOR_DIMENSIONS = {
    "1/1.1": (12.68, 7.13),
    "1/1.2": (11.62, 6.54),
    "2/3":   (9.35, 5.26),
    "1/1.6": (8.72, 4.9),
    "1/1.7": (8.2, 4.61),
    "1/1.8": (7.75, 4.36),
    "1/1.9": (7.34, 4.13),
    "1/2.0": (6.97, 3.92),
    "1/2.3": (6.82, 3.84),
    "1/2.5": (6.28, 3.53),
    "1/2.7": (5.81, 3.27),
    "1/2.8": (5.6, 3.15),
    "1/2.9": (5.41, 3.04),
    "1/3.0": (5.23, 2.94),
    "1/3.2": (4.9, 2.76),
    "1/3.4": (4.61, 2.6),
    "1/3.6": (4.36, 2.45),
    "1/4.0": (3.92, 2.21),
    "1/5.0": (3.14, 1.76),
    "1/6.0": (2.61, 1.47),
    "1/7.5": (2.09, 1.18),
}
