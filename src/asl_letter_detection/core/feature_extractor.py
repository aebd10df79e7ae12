"""
Feature extraction from hand landmarks for letter classification.
"""

import logging
import numpy as np
from typing import Dict, List, Optional, Sequence, Tuple
from dataclasses import dataclass

from .landmarks import (
    DISTANCE_PAIRS,
    FINGER_INDICES,
    LANDMARK_INDICES,
    NUM_LANDMARKS,
    Handedness,
    HandLandmarks,
)
from .vector_math import Point3, angle_between, cross, displacement, distance, normalize


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HandOrientation:
    """Palm orientation of a hand."""
    palm_normal_vector: Point3


@dataclass(frozen=True)
class HandFeatures:
    """Container for extracted hand features."""
    handedness: Handedness
    landmarks: Tuple[Point3, ...]
    joint_angles: Dict[str, float]
    relative_distances: Dict[str, float]
    hand_orientation: HandOrientation

    @property
    def feature_vector(self) -> np.ndarray:
        """Joint angles, distances and palm normal as one flat array."""
        normal = self.hand_orientation.palm_normal_vector
        return np.concatenate([
            np.array(list(self.joint_angles.values()), dtype=np.float64),
            np.array(list(self.relative_distances.values()), dtype=np.float64),
            normal.to_array()
        ])


class FeatureExtractor:
    """Extract joint angles, distances and palm orientation from hand landmarks."""

    def __init__(
        self,
        finger_indices: Dict[str, Tuple[int, int, int, int]] = FINGER_INDICES,
        distance_pairs: Dict[str, Tuple[int, int]] = DISTANCE_PAIRS
    ):
        """
        Initialize the feature extractor.

        Args:
            finger_indices: Finger name -> four landmark indices, base to tip
            distance_pairs: Distance name -> pair of landmark indices
        """
        self.finger_indices = finger_indices
        self.distance_pairs = distance_pairs

    def extract_features(self, hand_landmarks: HandLandmarks) -> Optional[HandFeatures]:
        """
        Extract features from hand landmarks.

        Args:
            hand_landmarks: HandLandmarks object

        Returns:
            HandFeatures object or None if the skeleton is not 21 points
        """
        if not hand_landmarks or len(hand_landmarks.landmarks) != NUM_LANDMARKS:
            logger.debug("Skipping feature extraction for malformed skeleton")
            return None

        return self.compute_features(hand_landmarks.landmarks, hand_landmarks.handedness)

    def compute_features(self, landmarks: Sequence[Point3], handedness: Handedness) -> HandFeatures:
        """
        Compute the feature set for a 21-point skeleton.

        The skeleton length is not checked here.
        """
        landmarks = tuple(landmarks)

        return HandFeatures(
            handedness=Handedness.from_label(handedness),
            landmarks=landmarks,
            joint_angles=self._extract_joint_angles(landmarks),
            relative_distances=self._extract_relative_distances(landmarks),
            hand_orientation=self._extract_hand_orientation(landmarks)
        )

    def _extract_joint_angles(self, landmarks: Sequence[Point3]) -> Dict[str, float]:
        """Flexion at the base and tip joint of each finger, in degrees."""
        joint_angles = {}

        for finger_name, (i0, i1, i2, i3) in self.finger_indices.items():
            v1 = displacement(landmarks[i0], landmarks[i1])
            v2 = displacement(landmarks[i1], landmarks[i2])
            v3 = displacement(landmarks[i2], landmarks[i3])

            joint_angles[f"{finger_name}_base"] = angle_between(v1, v2)
            joint_angles[f"{finger_name}_tip"] = angle_between(v2, v3)

        return joint_angles

    def _extract_relative_distances(self, landmarks: Sequence[Point3]) -> Dict[str, float]:
        return {
            name: distance(landmarks[p1_idx], landmarks[p2_idx])
            for name, (p1_idx, p2_idx) in self.distance_pairs.items()
        }

    def _extract_hand_orientation(self, landmarks: Sequence[Point3]) -> HandOrientation:
        """Palm normal from the wrist, index MCP and pinky MCP."""
        wrist = landmarks[LANDMARK_INDICES['wrist']]
        v1 = displacement(wrist, landmarks[LANDMARK_INDICES['index_mcp']])
        v2 = displacement(wrist, landmarks[LANDMARK_INDICES['pinky_mcp']])

        # Sign follows the input coordinate system and flips between hands
        return HandOrientation(palm_normal_vector=normalize(cross(v1, v2)))

    def get_feature_names(self) -> List[str]:
        """Get names of all entries of ``HandFeatures.feature_vector``."""
        names = []

        for finger_name in self.finger_indices:
            names.append(f"angle_{finger_name}_base")
            names.append(f"angle_{finger_name}_tip")

        for name in self.distance_pairs:
            names.append(f"distance_{name}")

        names.extend(["palm_normal_x", "palm_normal_y", "palm_normal_z"])

        return names

    def validate_features(self, features: Optional[HandFeatures]) -> bool:
        """Validate extracted features."""
        if not features:
            return False

        if len(features.landmarks) != NUM_LANDMARKS:
            return False

        vector = features.feature_vector

        # Check for NaN or infinite values
        if not np.all(np.isfinite(vector)):
            return False

        expected_length = 2 * len(self.finger_indices) + len(self.distance_pairs) + 3
        if len(vector) != expected_length:
            return False

        return all(0.0 <= angle <= 180.0 for angle in features.joint_angles.values())
