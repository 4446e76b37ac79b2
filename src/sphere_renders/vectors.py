"""
Homogeneous 4-component vectors for the Sphere Renderer.

Points carry w=1 and directions carry w=0, so the usual affine algebra holds:
Point - Point = Direction, Point + Direction = Point and
Direction + Direction = Direction. Adding two points is rejected.
"""
from dataclasses import dataclass
import numpy as np


def l2_norm(x):
    """Euclidean norm over every component of a numpy vector."""
    return np.sqrt(np.dot(x, x))


def normalize(x):
    """
    Normalize a numpy vector in place.

    Every stored component takes part in the norm, so callers must restrict
    to the geometrically meaningful components first.

    Returns:
        The same array, now unit length
    """
    x /= l2_norm(x)
    return x


@dataclass(frozen=True)
class Vec4:
    """
    Immutable homogeneous vector.

    Attributes:
        x, y, z: Spatial components (or r, g, b for colors)
        w: Homogeneous component (or a for colors). 1 for points, 0 for directions.
    """
    x: float
    y: float
    z: float
    w: float

    @classmethod
    def point(cls, x, y, z):
        return cls(float(x), float(y), float(z), 1.0)

    @classmethod
    def direction(cls, x, y, z):
        return cls(float(x), float(y), float(z), 0.0)

    @classmethod
    def from_array(cls, arr):
        arr = np.asarray(arr, dtype=np.float64)
        if arr.shape != (4,):
            raise ValueError(f"Vec4 needs exactly 4 components, got shape {arr.shape}")
        return cls(*(float(v) for v in arr))

    # Color aliases
    @property
    def r(self):
        return self.x

    @property
    def g(self):
        return self.y

    @property
    def b(self):
        return self.z

    @property
    def a(self):
        return self.w

    @property
    def is_point(self):
        return self.w == 1.0

    @property
    def is_direction(self):
        return self.w == 0.0

    def as_array(self):
        """Fresh (4,) float64 array; mutating it never touches this vector."""
        return np.array([self.x, self.y, self.z, self.w], dtype=np.float64)

    def xyz(self):
        """The spatial part as a direction (w dropped to 0)."""
        return Vec4(self.x, self.y, self.z, 0.0)

    def __add__(self, other):
        if not isinstance(other, Vec4):
            return NotImplemented
        if self.is_point and other.is_point:
            raise TypeError("Cannot add two points")
        return Vec4.from_array(self.as_array() + other.as_array())

    def __sub__(self, other):
        if not isinstance(other, Vec4):
            return NotImplemented
        return Vec4.from_array(self.as_array() - other.as_array())

    def __mul__(self, scalar):
        if isinstance(scalar, Vec4):
            return NotImplemented
        return Vec4.from_array(self.as_array() * float(scalar))

    __rmul__ = __mul__

    def dot(self, other):
        """Dot product over x, y, z only."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def l2_norm(self):
        return float(l2_norm(self.as_array()))

    def normalized(self):
        return Vec4.from_array(normalize(self.as_array()))
