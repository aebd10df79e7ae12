"""
Core modules for letter detection.
"""

from .vector_math import (
    Point3,
    angle_between,
    cross,
    displacement,
    distance,
    dot,
    magnitude,
    normalize,
)
from .landmarks import (
    DISTANCE_PAIRS,
    FINGER_INDICES,
    LANDMARK_INDICES,
    NUM_LANDMARKS,
    Handedness,
    HandLandmarks,
    select_primary_hand,
)
from .feature_extractor import FeatureExtractor, HandFeatures, HandOrientation
# Note: detector and landmark extractor are not imported at package level; the detector
# depends on classifiers (which import core) and the extractor needs MediaPipe.
# Import them directly when needed:
# from .detector import LetterDetector
# from .landmark_extractor import HandLandmarkExtractor

__all__ = [
    "Point3",
    "angle_between",
    "cross",
    "displacement",
    "distance",
    "dot",
    "magnitude",
    "normalize",
    "DISTANCE_PAIRS",
    "FINGER_INDICES",
    "LANDMARK_INDICES",
    "NUM_LANDMARKS",
    "Handedness",
    "HandLandmarks",
    "select_primary_hand",
    "FeatureExtractor",
    "HandFeatures",
    "HandOrientation",
]
