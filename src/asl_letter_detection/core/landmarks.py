"""
Hand landmark schema: handedness, landmark indices and per-hand container.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .vector_math import Point3


NUM_LANDMARKS = 21

# MediaPipe hand landmark indices (21 landmarks per hand)
LANDMARK_INDICES: Dict[str, int] = {
    'wrist': 0,
    'thumb_cmc': 1, 'thumb_mcp': 2, 'thumb_ip': 3, 'thumb_tip': 4,
    'index_mcp': 5, 'index_pip': 6, 'index_dip': 7, 'index_tip': 8,
    'middle_mcp': 9, 'middle_pip': 10, 'middle_dip': 11, 'middle_tip': 12,
    'ring_mcp': 13, 'ring_pip': 14, 'ring_dip': 15, 'ring_tip': 16,
    'pinky_mcp': 17, 'pinky_pip': 18, 'pinky_dip': 19, 'pinky_tip': 20
}

# Finger chains ordered base -> tip
FINGER_INDICES: Dict[str, Tuple[int, int, int, int]] = {
    'thumb': (1, 2, 3, 4),
    'index': (5, 6, 7, 8),
    'middle': (9, 10, 11, 12),
    'ring': (13, 14, 15, 16),
    'pinky': (17, 18, 19, 20),
}

NON_THUMB_FINGERS: Tuple[str, ...] = ('index', 'middle', 'ring', 'pinky')

DISTANCE_PAIRS: Dict[str, Tuple[int, int]] = {
    'thumb_index': (LANDMARK_INDICES['thumb_tip'], LANDMARK_INDICES['index_tip']),
    'index_middle': (LANDMARK_INDICES['index_tip'], LANDMARK_INDICES['middle_tip']),
    'middle_ring': (LANDMARK_INDICES['middle_tip'], LANDMARK_INDICES['ring_tip']),
    'ring_pinky': (LANDMARK_INDICES['ring_tip'], LANDMARK_INDICES['pinky_tip']),
    'wrist_middle': (LANDMARK_INDICES['wrist'], LANDMARK_INDICES['middle_tip']),
}


class Handedness(str, Enum):
    """Hand side as reported by the landmark estimator."""
    LEFT = "Left"
    RIGHT = "Right"

    @property
    def sign(self) -> int:
        """+1 for a right hand, -1 for a left hand."""
        return 1 if self is Handedness.RIGHT else -1

    @classmethod
    def from_label(cls, label: Any) -> "Handedness":
        """
        Parse an estimator label such as ``"Right"`` or ``"left"``.

        Raises:
            ValueError: If the label is neither left nor right
        """
        if isinstance(label, Handedness):
            return label

        normalized = str(label).strip().lower()
        if normalized == 'left':
            return cls.LEFT
        elif normalized == 'right':
            return cls.RIGHT
        raise ValueError(f"Unknown handedness label: {label!r}")


@dataclass(frozen=True)
class HandLandmarks:
    """Container for one detected hand."""
    landmarks: Tuple[Point3, ...]
    handedness: Handedness
    confidence: float = 1.0
    timestamp: float = 0.0

    @classmethod
    def from_coordinates(
        cls,
        coordinates: Iterable[Any],
        handedness: Any,
        confidence: float = 1.0,
        timestamp: float = 0.0
    ) -> "HandLandmarks":
        """
        Build a hand from raw coordinates.

        Args:
            coordinates: Iterable of ``(x, y, z)`` sequences or objects with
                ``x``/``y``/``z`` attributes (e.g. MediaPipe landmarks)
            handedness: Handedness or label string
            confidence: Handedness score from the estimator
            timestamp: Frame timestamp in seconds

        Returns:
            HandLandmarks object
        """
        points = []
        for coordinate in coordinates:
            if isinstance(coordinate, Point3):
                points.append(coordinate)
            elif hasattr(coordinate, 'x') and hasattr(coordinate, 'y'):
                points.append(Point3(
                    float(coordinate.x),
                    float(coordinate.y),
                    float(getattr(coordinate, 'z', 0.0) or 0.0)
                ))
            else:
                points.append(Point3.from_array(coordinate))

        return cls(
            landmarks=tuple(points),
            handedness=Handedness.from_label(handedness),
            confidence=float(confidence),
            timestamp=float(timestamp)
        )

    @property
    def wrist(self) -> Point3:
        return self.landmarks[LANDMARK_INDICES['wrist']]

    def to_coordinates(self) -> List[List[float]]:
        """Return landmarks as nested ``[x, y, z]`` lists."""
        return [[p.x, p.y, p.z] for p in self.landmarks]


def select_primary_hand(hands: Optional[List[HandLandmarks]]) -> Optional[HandLandmarks]:
    """Pick the hand to classify: the first detected one."""
    if not hands:
        return None
    return hands[0]
