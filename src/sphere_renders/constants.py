"""
Fixed camera, background and scene configuration for the Sphere Renderer.
"""

# Camera
CAMERA_ORIGIN = (0.0, 0.0, 0.0, 1.0)

# Image plane bounds in normalized device coordinates (2:1 aspect, baked in)
NDC_LOWER_LEFT = (-2.0, -1.0, -1.0, 1.0)
NDC_UPPER_RIGHT = (2.0, 1.0, -1.0, 1.0)

# Number of z-planes the projection is divided into. Only one plane is
# addressed, so the resulting z spacing is never consumed.
Z_STEPS = 100.0

# Background gradient (RGB in [0, 1]), blended bottom (white) to top (blue)
BACKGROUND_WHITE = (0.8, 0.8, 0.8)
BACKGROUND_BLUE = (0.1, 0.2, 0.65)

# Default scene
DEFAULT_SPHERE_CENTER = (0.0, 0.0, -1.0)
DEFAULT_SPHERE_RADIUS = 0.5
DEFAULT_SPHERE_COLOR = (255, 0, 0, 255) # Red

# Default canvas
DEFAULT_WIDTH = 400
DEFAULT_HEIGHT = 200
