"""
3D vector primitives used by feature extraction.
"""

import numpy as np
from dataclasses import dataclass
from typing import Sequence


@dataclass(frozen=True)
class Point3:
    """Immutable 3D point or vector in landmark coordinates."""
    x: float
    y: float
    z: float = 0.0

    def to_array(self) -> np.ndarray:
        """Return the coordinates as a float64 numpy array."""
        return np.array([self.x, self.y, self.z], dtype=np.float64)

    @classmethod
    def from_array(cls, values: Sequence[float]) -> "Point3":
        """Build a point from any length-3 sequence or array."""
        x, y, z = values
        return cls(float(x), float(y), float(z))


ZERO_VECTOR = Point3(0.0, 0.0, 0.0)


def displacement(a: Point3, b: Point3) -> Point3:
    """Vector from ``a`` to ``b``."""
    return Point3.from_array(b.to_array() - a.to_array())


def magnitude(v: Point3) -> float:
    """Euclidean norm of ``v``."""
    return float(np.linalg.norm(v.to_array()))


def dot(v1: Point3, v2: Point3) -> float:
    return float(np.dot(v1.to_array(), v2.to_array()))


def cross(v1: Point3, v2: Point3) -> Point3:
    return Point3.from_array(np.cross(v1.to_array(), v2.to_array()))


def normalize(v: Point3) -> Point3:
    """
    Scale ``v`` to unit length.

    A zero-length input yields the zero vector, which callers read as
    "direction undefined".
    """
    mag = magnitude(v)
    if mag == 0:
        return ZERO_VECTOR
    return Point3.from_array(v.to_array() / mag)


def distance(a: Point3, b: Point3) -> float:
    """Euclidean distance between two points."""
    return magnitude(displacement(a, b))


def angle_between(v1: Point3, v2: Point3) -> float:
    """
    Angle between two vectors in degrees.

    Args:
        v1: First vector
        v2: Second vector

    Returns:
        Angle in ``[0, 180]``; 0 when either vector has zero length
    """
    mag = magnitude(v1) * magnitude(v2)
    if mag == 0:
        return 0.0

    cos_angle = np.clip(dot(v1, v2) / mag, -1.0, 1.0)  # Avoid numerical errors
    return float(np.degrees(np.arccos(cos_angle)))
