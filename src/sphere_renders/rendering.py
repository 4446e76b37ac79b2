"""
Data structures and interfaces for the Sphere rendering pipeline.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
import logging
import numpy as np
from sphere_renders import constants
from sphere_renders.intersections import intersect_sphere
from sphere_renders.utils import ensure_batch, to_rgba8, unbatch_if_needed
from sphere_renders.vectors import Vec4

logger = logging.getLogger(__name__)


class HitType(Enum):
    """Enumeration of possible per-pixel outcomes."""
    PRIMITIVE = "primitive"
    BACKGROUND = "background"


class Renderable(ABC):
    """
    Anything the renderer can test rays against.

    Subclasses supply a vectorized hit test and a flat RGBA8 color; render()
    builds the single-ray contract on top of those.
    """

    color: tuple

    @abstractmethod
    def hit_mask(self, ray_origin, ray_directions):
        """
        Args:
            ray_origin: (4,) origin point
            ray_directions: (4,) or (N, 4) directions

        Returns:
            Boolean hit flag, scalar for a single direction else (N,)
        """

    def render(self, ray):
        """Flat color if the ray hits, otherwise None."""
        if self.hit_mask(ray.origin.as_array(), ray.direction.as_array()):
            return self.color
        return None


@dataclass(frozen=True)
class Sphere(Renderable):
    """
    Attributes:
        center: Sphere center, a point (w=1)
        radius: Sphere radius, > 0
        color: RGBA8 tuple
    """
    center: Vec4
    radius: float
    color: tuple = constants.DEFAULT_SPHERE_COLOR

    def __post_init__(self):
        """Validate geometry and color."""
        if not self.center.is_point:
            raise ValueError(f"center must be a point (w=1), got w={self.center.w}")
        if not self.radius > 0:
            raise ValueError(f"radius must be positive, got {self.radius}")
        if len(self.color) != 4:
            raise ValueError(f"color must have 4 channels (RGBA), got {len(self.color)}")
        for channel in self.color:
            if not 0 <= channel <= 255 or int(channel) != channel:
                raise ValueError(f"color channels must be integers in [0, 255], got {self.color}")
        object.__setattr__(self, "color", tuple(int(c) for c in self.color))

    @classmethod
    def from_center(cls, center, radius, color=constants.DEFAULT_SPHERE_COLOR):
        """Build a sphere from a plain (x, y, z) center."""
        return cls(Vec4.point(*center), float(radius), tuple(color))

    def intersects(self, ray):
        """True iff the ray's line crosses the sphere surface at two points."""
        return bool(self.hit_mask(ray.origin.as_array(), ray.direction.as_array()))

    def hit_mask(self, ray_origin, ray_directions):
        return intersect_sphere(ray_origin, ray_directions, self.center.as_array(), self.radius)


@dataclass
class HitResult:
    """
    Result of testing a batch of rays against the scene.

    Attributes:
        hit_type: (N,) HitType values
        primitive_index: (N,) index into the scene, -1 for background
    """
    hit_type: np.ndarray  # (N,) HitType values
    primitive_index: np.ndarray  # (N,) int

    def __post_init__(self):
        """Validate array shapes and types."""
        if self.hit_type.ndim != 1:
            raise ValueError(f"hit_type must be 1D array, got shape {self.hit_type.shape}")
        if self.primitive_index.shape != self.hit_type.shape:
            raise ValueError(f"primitive_index shape {self.primitive_index.shape} doesn't match hit_type shape {self.hit_type.shape}")

        valid_types = {ht.value for ht in HitType}
        invalid_types = set(self.hit_type) - valid_types
        if invalid_types:
            raise ValueError(f"Invalid hit types: {invalid_types}. Valid types: {valid_types}")

        is_background = self.hit_type == HitType.BACKGROUND.value
        if np.any(self.primitive_index[is_background] != -1):
            raise ValueError("Background hits must have primitive_index -1")
        if np.any(self.primitive_index[~is_background] < 0):
            raise ValueError("Primitive hits must reference a scene index")


class HitSelector:
    """
    Responsible for deciding which primitive, if any, owns each ray.

    Primitives are tested in scene order and the first one that reports a hit
    wins; there is no depth comparison.
    """

    def __init__(self, scene):
        """
        Args:
            scene: Ordered sequence of Renderable primitives
        """
        self.scene = tuple(scene)

    def select_primary(self, ray_origin, ray_directions):
        """
        Args:
            ray_origin: (4,) origin point
            ray_directions: (4,) or (N, 4) ray directions

        Returns:
            HitResult with one entry per ray
        """
        ray_directions, _ = ensure_batch(ray_directions)
        n_rays = ray_directions.shape[0]

        hit_types = np.full(n_rays, HitType.BACKGROUND.value, dtype=object)
        indices = np.full(n_rays, -1, dtype=np.int64)
        unassigned = np.ones(n_rays, dtype=bool)

        for i, primitive in enumerate(self.scene):
            if not np.any(unassigned):
                break
            mask = np.atleast_1d(primitive.hit_mask(ray_origin, ray_directions[unassigned]))
            claimed = np.zeros(n_rays, dtype=bool)
            claimed[unassigned] = mask

            hit_types[claimed] = HitType.PRIMITIVE.value
            indices[claimed] = i
            unassigned &= ~claimed

        logger.debug("%d of %d rays hit a primitive", n_rays - np.count_nonzero(unassigned), n_rays)
        return HitResult(hit_type=hit_types, primitive_index=indices)


class BackgroundGradient:
    """
    Vertical background blend, front-to-back style.

    t = 0.5 * (dir.y + 1) linearly interpolates from white (t=0) to blue (t=1).
    dir.y is not clamped, so t may leave [0, 1] for unnormalized directions.
    """

    def __init__(self, white=None, blue=None):
        self.white = np.asarray(constants.BACKGROUND_WHITE if white is None else white, dtype=np.float64)
        self.blue = np.asarray(constants.BACKGROUND_BLUE if blue is None else blue, dtype=np.float64)

    def get_color(self, ray_directions):
        """
        Args:
            ray_directions: (4,) or (N, 4) ray directions

        Returns:
            RGBA8 uint8 array, (4,) for a single direction else (N, 4)
        """
        ray_directions, is_single = ensure_batch(ray_directions)
        param_y = 0.5 * (ray_directions[:, 1] + 1.0)

        color = ((1.0 - param_y)[:, None] * self.white + param_y[:, None] * self.blue) * 255.0
        return unbatch_if_needed(to_rgba8(color), is_single)


class Compositor:
    """
    Responsible for turning hit results into final pixel colors.

    HIT -> the primitive's flat color, BACKGROUND -> the gradient color.
    """

    def __init__(self, scene, background=None):
        self.scene = tuple(scene)
        self.background = background if background is not None else BackgroundGradient()

    def composite(self, hits, ray_directions):
        """
        Args:
            hits: HitResult from HitSelector
            ray_directions: (N, 4) directions the hits were computed for

        Returns:
            (N, 4) uint8 RGBA colors, every row written exactly once
        """
        ray_directions, _ = ensure_batch(ray_directions)
        colors = np.zeros((hits.hit_type.shape[0], 4), dtype=np.uint8)

        background_mask = hits.hit_type == HitType.BACKGROUND.value
        if np.any(background_mask):
            colors[background_mask] = self.background.get_color(ray_directions[background_mask])

        for i, primitive in enumerate(self.scene):
            mask = hits.primitive_index == i
            if np.any(mask):
                colors[mask] = np.array(primitive.color, dtype=np.uint8)

        return colors
