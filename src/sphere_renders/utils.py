"""
Utility functions for Sphere Renderer.

This module provides the single-vs-batch conversion used by the vectorized
geometry and shading routines, plus the float-to-byte color conversion.
"""

import numpy as np


def ensure_batch(arr):
    """
    Ensure an array is in batch format.

    Single homogeneous vectors (ndim=1) get a leading batch axis; arrays
    already in batch format are left unchanged.

    Args:
        arr: (4,) or (N, 4) array

    Returns:
        tuple: (batched_array, was_single)
    """
    arr = np.asarray(arr, dtype=np.float64)
    if arr.ndim == 1:
        return arr[None, :], True
    return arr, False


def unbatch_if_needed(arr, was_single):
    """
    Convert a batched array back to a single value if the input was single.

    Examples:
        hit = unbatch_if_needed(hit_mask, was_single=True)  # -> np.bool_
    """
    if was_single and arr.shape[0] == 1:
        return arr[0]
    return arr


def to_rgba8(rgb):
    """
    Convert float colors scaled to [0, 255] into opaque RGBA8.

    Channels are truncated toward zero and saturate at the byte range;
    NaN becomes 0. Values are not clamped before this step, so an
    out-of-range blend ends up at 0 or 255.

    Args:
        rgb: (..., 3) array of already scaled channel values

    Returns:
        (..., 4) uint8 array with alpha 255
    """
    rgb = np.nan_to_num(np.asarray(rgb, dtype=np.float64), nan=0.0,
                        posinf=255.0, neginf=0.0)
    rgb = np.clip(rgb, 0.0, 255.0)

    rgba = np.full(rgb.shape[:-1] + (4,), 255, dtype=np.uint8)
    rgba[..., :3] = np.trunc(rgb).astype(np.uint8)
    return rgba
