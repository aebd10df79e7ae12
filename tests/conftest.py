"""
Shared fixtures and skeleton builders for the test suite.
"""

import sys
from pathlib import Path
from typing import Dict, Tuple

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from asl_letter_detection.core.feature_extractor import FeatureExtractor, HandFeatures, HandOrientation
from asl_letter_detection.core.landmarks import Handedness, HandLandmarks
from asl_letter_detection.core.vector_math import Point3
from asl_letter_detection.utils.logger import Logger


FINGERTIPS = (8, 12, 16, 20)


def make_hand(
    overrides: Dict[int, Tuple[float, float, float]] = None,
    handedness: str = "Right",
    num_points: int = 21
) -> HandLandmarks:
    """Hand with every landmark at the image centre except the overrides."""
    points = [(0.5, 0.5, 0.0)] * num_points
    for idx, value in (overrides or {}).items():
        points[idx] = value
    return HandLandmarks.from_coordinates(points, handedness=handedness)


def letter_a_hand(handedness: str = "Right") -> HandLandmarks:
    """Four fingertips below their MCPs, thumb 4-3-2 ordered along x."""
    overrides = {}
    for tip in FINGERTIPS:
        overrides[tip] = (0.5, 0.8, 0.0)
        overrides[tip - 3] = (0.5, 0.5, 0.0)

    thumb_x = (0.6, 0.5, 0.4) if handedness == "Right" else (0.4, 0.5, 0.6)
    for idx, x in zip((2, 3, 4), thumb_x):
        overrides[idx] = (x, 0.6, 0.0)

    return make_hand(overrides, handedness)


def letter_b_hand(handedness: str = "Right") -> HandLandmarks:
    """Four fingertips above PIP, DIP and MCP; thumb tip across the palm."""
    overrides = {}
    for tip in FINGERTIPS:
        overrides[tip] = (0.5, 0.2, 0.0)
        overrides[tip - 2] = (0.5, 0.5, 0.0)  # PIP
        overrides[tip - 1] = (0.5, 0.6, 0.0)  # DIP
        overrides[tip - 3] = (0.5, 0.7, 0.0)  # MCP

    tip_x = 0.3 if handedness == "Right" else 0.7
    overrides[1] = (0.5, 0.8, 0.0)
    overrides[4] = (tip_x, 0.6, 0.0)

    return make_hand(overrides, handedness)


def half_extended_hand(handedness: str = "Right") -> HandLandmarks:
    """Tips between PIP and MCP height: neither curled nor extended."""
    overrides = {}
    for tip in FINGERTIPS:
        overrides[tip - 3] = (0.5, 0.5, 0.0)   # MCP
        overrides[tip - 2] = (0.5, 0.4, 0.0)   # PIP
        overrides[tip - 1] = (0.5, 0.42, 0.0)  # DIP
        overrides[tip] = (0.5, 0.45, 0.0)
    overrides[1] = (0.6, 0.7, 0.0)
    overrides[4] = (0.4, 0.6, 0.0)
    return make_hand(overrides, handedness)


def realistic_hand(handedness: str = "Right") -> HandLandmarks:
    """Loosely open right hand in image coordinates with some depth."""
    points = [
        (0.50, 0.90, 0.00),
        (0.42, 0.85, -0.02), (0.36, 0.78, -0.03), (0.32, 0.72, -0.04), (0.29, 0.66, -0.05),
        (0.42, 0.62, -0.01), (0.41, 0.52, -0.02), (0.40, 0.46, -0.03), (0.40, 0.40, -0.04),
        (0.49, 0.60, -0.01), (0.49, 0.49, -0.02), (0.49, 0.42, -0.03), (0.49, 0.36, -0.04),
        (0.56, 0.62, -0.01), (0.57, 0.52, -0.02), (0.57, 0.46, -0.03), (0.58, 0.41, -0.04),
        (0.62, 0.66, -0.01), (0.64, 0.58, -0.02), (0.65, 0.53, -0.03), (0.66, 0.49, -0.04),
    ]
    return HandLandmarks.from_coordinates(points, handedness=handedness)


def features_with_landmarks(landmarks, handedness=Handedness.RIGHT) -> HandFeatures:
    """Feature set carrying an arbitrary skeleton, bypassing extraction."""
    return HandFeatures(
        handedness=handedness,
        landmarks=tuple(landmarks),
        joint_angles={},
        relative_distances={},
        hand_orientation=HandOrientation(palm_normal_vector=Point3(0.0, 0.0, 0.0))
    )


@pytest.fixture
def extractor():
    return FeatureExtractor()


@pytest.fixture
def quiet_logger():
    return Logger("test", console_output=False, file_output=False)
