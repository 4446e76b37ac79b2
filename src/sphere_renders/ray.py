"""
Ray representation for the Sphere Renderer.
"""
from dataclasses import dataclass
from sphere_renders.vectors import Vec4


@dataclass(frozen=True)
class Ray:
    """
    A half-line in homogeneous coordinates.

    Attributes:
        origin: Start point (w=1)
        direction: Direction vector (w=0), not necessarily unit length
    """
    origin: Vec4
    direction: Vec4

    def point_at_parameter(self, t):
        """Point reached after travelling t direction-lengths from the origin."""
        return self.origin + self.direction * t
