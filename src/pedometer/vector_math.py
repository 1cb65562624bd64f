"""
Vector operations used by the step detector.

Small, purposefully specific helpers over fixed-length float vectors. All
functions are pure and hold no state, so they are safe to call from any thread.
"""

import numpy as np


def sum(v) -> float:
    """Return the arithmetic sum of all elements of ``v``."""
    return float(np.sum(v))


def cross(a, b) -> np.ndarray:
    """
    Right-handed cross product of two 3D vectors.

    Lengths are not checked; only the first three components are used.
    """
    return np.array([
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    ], dtype=np.float64)


def norm(v) -> float:
    """Euclidean (L2) norm of ``v``."""
    v = np.asarray(v, dtype=np.float64)
    return float(np.sqrt(np.dot(v, v)))


def dot(a, b) -> float:
    """Dot product. Note: only works with 3D vectors."""
    return float(a[0] * b[0] + a[1] * b[1] + a[2] * b[2])


def normalize(v) -> np.ndarray:
    """
    Scale ``v`` to unit length.

    A zero vector gives NaN components instead of raising.
    """
    v = np.asarray(v, dtype=np.float64)
    with np.errstate(divide='ignore', invalid='ignore'):
        return v / norm(v)
