from dataclasses import dataclass
import functools
import logging
import numbers
import numpy as np
from sphere_renders import constants
from sphere_renders.camera import Camera
from sphere_renders.rendering import BackgroundGradient, Compositor, HitSelector, Sphere

logger = logging.getLogger(__name__)


def default_scene():
    """The single red sphere one unit in front of the camera."""
    return (Sphere.from_center(constants.DEFAULT_SPHERE_CENTER,
                               constants.DEFAULT_SPHERE_RADIUS,
                               constants.DEFAULT_SPHERE_COLOR),)


@dataclass(frozen=True)
class Canvas:
    """Output image size. Pixels are addressed (x, y) with the origin top-left."""
    width: int
    height: int

    def __post_init__(self):
        for name in ("width", "height"):
            value = getattr(self, name)
            if not isinstance(value, numbers.Integral) or isinstance(value, bool):
                raise ValueError(f"{name} must be an integer, got {value!r}")
            if value <= 0:
                raise ValueError(f"{name} must be positive, got {value}")


class Renderer:
    def __init__(self, scene=None, lower_left=None, upper_right=None, z_steps=None,
                 white=None, blue=None):
        """
        Initialize the renderer with a scene and camera configuration.

        Coordinate System (Camera-Centric):
        - Origin (0,0,0): The camera position.
        - Image plane: z = -1, spanning x in [-2, 2] and y in [-1, 1] by default.
        - Y-Axis: Up. Pixel rows grow downward, so the projection flips y.

        Args:
            scene: Ordered sequence of primitives; the first hit in order wins
            lower_left, upper_right: NDC viewport corners
            z_steps: Number of z-planes in the projection
            white, blue: Background gradient end colors (RGB in [0, 1])
        """
        self.scene = tuple(scene) if scene is not None else default_scene()
        self.lower_left = lower_left if lower_left is not None else constants.NDC_LOWER_LEFT
        self.upper_right = upper_right if upper_right is not None else constants.NDC_UPPER_RIGHT
        self.z_steps = z_steps if z_steps is not None else constants.Z_STEPS

        self.hit_selector = HitSelector(self.scene)
        self.compositor = Compositor(self.scene, BackgroundGradient(white, blue))

    def camera(self, width, height):
        return Camera(width, height, lower_left=self.lower_left,
                      upper_right=self.upper_right, steps=self.z_steps)

    def get_color(self, ray_origin, ray_directions):
        """
        Calculate the color for each ray.
        vectorized for N rays.
        """
        hits = self.hit_selector.select_primary(ray_origin, ray_directions)
        colors = self.compositor.composite(hits, ray_directions)
        return colors[0] if np.ndim(ray_directions) == 1 else colors

    def shade(self, ray):
        """RGBA8 tuple for a single Ray."""
        color = self.get_color(ray.origin.as_array(), ray.direction.as_array())
        return tuple(int(c) for c in color)

    def render_frame(self, width, height):
        """
        Full-frame render without caching.

        Returns:
            (height, width, 4) uint8 RGBA array, row-major, origin top-left
        """
        canvas = Canvas(width, height)
        logger.debug("Rendering %dx%d, %d primitive(s)", canvas.width, canvas.height, len(self.scene))
        camera = self.camera(canvas.width, canvas.height)
        ray_dirs = camera.ray_directions()

        # Flatten and shade
        flat_ray_dirs = ray_dirs.reshape(-1, 4)
        colors = self.get_color(camera.origin, flat_ray_dirs)

        return colors.reshape(canvas.height, canvas.width, 4)

    @functools.lru_cache(maxsize=32)
    def _render_cached(self, width, height):
        """
        Internal cached render call using hashable arguments.
        """
        image = self.render_frame(width, height)
        image.flags.writeable = False
        return image

    def render(self, width=constants.DEFAULT_WIDTH, height=constants.DEFAULT_HEIGHT):
        """
        Render the scene with NumPy vectorization.

        Frames are memoized per renderer, so reuse one Renderer for repeated
        renders of the same scene.

        Returns:
            (height, width, 4) uint8 RGBA array, row-major, origin top-left
        """
        canvas = Canvas(width, height)
        return self._render_cached(canvas.width, canvas.height).copy()


def render(canvas, scene):
    """
    Render a scene onto a canvas.

    The renderer is throwaway, so the frame cache is bypassed.

    Args:
        canvas: Canvas giving the output size
        scene: Ordered sequence of primitives

    Returns:
        (canvas.height, canvas.width, 4) uint8 RGBA pixel grid
    """
    return Renderer(scene=scene).render_frame(canvas.width, canvas.height)
