"""
Pinhole camera for the Sphere Renderer.

Pixel indices (origin top-left, y down) are carried onto the image plane in
camera space (y up) by a single affine matrix, and the ray for a pixel runs
from the camera origin through that image-plane point.
"""
import logging
import numpy as np
from sphere_renders import constants
from sphere_renders.ray import Ray
from sphere_renders.vectors import Vec4

logger = logging.getLogger(__name__)

FLIP_Y = np.array([
    [1.0, 0.0, 0.0, 0.0],
    [0.0, -1.0, 0.0, 0.0],
    [0.0, 0.0, 1.0, 0.0],
    [0.0, 0.0, 0.0, 1.0],
])


def scale_matrix(width, height, lower_left=None, upper_right=None, steps=None):
    """
    Scale + translate part of the pixel to image-plane transform (before the Y flip).

    Pixel (0, 0) lands on lower_left and pixel (width, height) on upper_right.
    No validation happens here: a zero width or height produces inf/NaN entries.

    Args:
        width, height: Canvas size in pixels
        lower_left, upper_right: (4,) NDC viewport corners
        steps: Number of z-planes between the corners

    Returns:
        (4, 4) float64 matrix
    """
    lower_left = np.asarray(constants.NDC_LOWER_LEFT if lower_left is None else lower_left, dtype=np.float64)
    upper_right = np.asarray(constants.NDC_UPPER_RIGHT if upper_right is None else upper_right, dtype=np.float64)
    steps = constants.Z_STEPS if steps is None else steps

    extent = upper_right - lower_left
    with np.errstate(divide='ignore', invalid='ignore'):
        spacing = extent[:3] / np.array([width, height, steps], dtype=np.float64)

    return np.array([
        [spacing[0], 0.0, 0.0, lower_left[0]],
        [0.0, spacing[1], 0.0, lower_left[1]],
        [0.0, 0.0, spacing[2], lower_left[2]],
        [0.0, 0.0, 0.0, 1.0],
    ])


def image_to_ndc(width, height, lower_left=None, upper_right=None, steps=None):
    """
    Transform image pixel (i, j) to image plane coordinates.

    Returns:
        (4, 4) matrix FLIP_Y @ scale, applied to column vectors (px, py, 0, 1)
    """
    return FLIP_Y @ scale_matrix(width, height, lower_left, upper_right, steps)


class Camera:
    def __init__(self, width, height, origin=None, lower_left=None, upper_right=None, steps=None):
        """
        Fixed pinhole camera for one canvas size.

        Args:
            width, height: Canvas size in pixels
            origin: (4,) camera position, defaults to the world origin
            lower_left, upper_right, steps: Projection overrides, see image_to_ndc
        """
        self.width = width
        self.height = height
        self.origin = np.asarray(constants.CAMERA_ORIGIN if origin is None else origin, dtype=np.float64)
        self.projection = image_to_ndc(width, height, lower_left, upper_right, steps)
        logger.debug("Projection for %dx%d:\n%s", width, height, self.projection)

    def ray_for_pixel(self, x, y):
        """
        Ray through pixel (x, y). The direction is left unnormalized.
        """
        point_ndc = self.projection @ np.array([x, y, 0.0, 1.0])
        return Ray(
            origin=Vec4.from_array(self.origin),
            direction=Vec4.from_array(point_ndc - self.origin),
        )

    def ray_directions(self):
        """
        Ray directions for every pixel in one matrix product.

        Returns:
            (height, width, 4) array; entry [y, x] is the direction of pixel (x, y)
        """
        ys, xs = np.mgrid[0:self.height, 0:self.width]
        points_image = np.zeros((self.height, self.width, 4))
        points_image[..., 0] = xs
        points_image[..., 1] = ys
        points_image[..., 3] = 1.0

        points_ndc = points_image @ self.projection.T
        return points_ndc - self.origin
