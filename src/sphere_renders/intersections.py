"""
Ray-geometry intersection calculations for the Sphere renderer.

Solving the sphere equation analytically leads to real solutions (front / back
hit) or complex ones (miss):

    |Origin + t * Dir - Center|^2 = radius^2

    t^2 dot(Dir, Dir) + 2 t dot(Dir, Origin - Center)
        + dot(Origin - Center, Origin - Center) - radius^2 = 0

Only the sign of the discriminant is needed for a hit/miss decision, and that
sign does not depend on the length of Dir.
"""
import numpy as np
from sphere_renders.utils import ensure_batch, unbatch_if_needed


def sphere_discriminant(ray_origin, ray_directions, center, radius):
    """
    Vectorized discriminant of the ray/sphere quadratic.

    Homogeneous w components are ignored; all dot products use x, y, z.

    Args:
        ray_origin: (4,) or (3,) origin point
        ray_directions: (4,) single direction or (N, 4) batch
        center: (4,) or (3,) sphere center
        radius: Sphere radius

    Returns:
        Discriminant b^2 - 4ac, scalar for a single direction else (N,)
    """
    ray_directions, is_single = ensure_batch(ray_directions)
    dirs = ray_directions[:, :3]

    oc = np.asarray(ray_origin, dtype=np.float64)[:3] - np.asarray(center, dtype=np.float64)[:3]

    # Quadratic equation coefficients
    a = np.sum(dirs * dirs, axis=1)
    b = 2.0 * np.sum(oc * dirs, axis=1)
    c = np.dot(oc, oc) - radius * radius

    discriminant = b * b - 4.0 * a * c
    return unbatch_if_needed(discriminant, is_single)


def intersect_sphere(ray_origin, ray_directions, center, radius):
    """
    Vectorized hit test of the infinite ray line against a sphere.

    A tangent line (discriminant exactly 0) counts as a miss. Spheres behind
    the origin are hit as well, since no root is computed.

    Returns:
        Boolean hit mask, scalar for a single direction else (N,)
    """
    return sphere_discriminant(ray_origin, ray_directions, center, radius) > 0.0
