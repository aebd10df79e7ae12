"""
ASL Letter Detection

Rule-based detection of alphabet letters from MediaPipe hand landmarks:
joint angles, fingertip distances and palm orientation feed a registry of
geometric letter classifiers.
"""

__version__ = "1.0.0"

from .core import FeatureExtractor, HandFeatures, Handedness, HandLandmarks, Point3
from .classifiers import LetterA, LetterB, LetterClassifier, LetterClassifierRegistry, detect_letter
from .core.detector import LetterDetection, LetterDetector
# Note: MediaPipe-dependent imports removed to avoid import issues at package level
# Import them directly when needed:
# from .core.landmark_extractor import HandLandmarkExtractor
from .data import load_landmark_frames, save_landmark_frames
from .utils import ConfigManager, Logger, PerformanceMonitor

__all__ = [
    "FeatureExtractor",
    "HandFeatures",
    "Handedness",
    "HandLandmarks",
    "Point3",
    "LetterA",
    "LetterB",
    "LetterClassifier",
    "LetterClassifierRegistry",
    "detect_letter",
    "LetterDetection",
    "LetterDetector",
    # "HandLandmarkExtractor",  # Removed to avoid MediaPipe dependency
    "load_landmark_frames",
    "save_landmark_frames",
    "ConfigManager",
    "Logger",
    "PerformanceMonitor",
]
