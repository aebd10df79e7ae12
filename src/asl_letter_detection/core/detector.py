"""
Frame-level letter detector joining landmark extraction and letter classification.
"""

import time
import numpy as np
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .feature_extractor import FeatureExtractor, HandFeatures
from .landmarks import HandLandmarks, select_primary_hand
from ..classifiers.classifier_registry import NO_LETTER, LetterClassifierRegistry, create_default_registry
from ..utils.logger import Logger


@dataclass
class LetterDetection:
    """Result of classifying one frame."""
    hand_detected: bool
    letter: str = NO_LETTER
    features: Optional[HandFeatures] = None
    landmarks: Optional[HandLandmarks] = None
    timestamp: float = 0.0

    @property
    def letter_detected(self) -> bool:
        return self.letter != NO_LETTER

    @property
    def hand_position(self) -> Optional[Tuple[float, float]]:
        """Normalized wrist position of the classified hand."""
        if self.landmarks is None or not self.landmarks.landmarks:
            return None
        wrist = self.landmarks.wrist
        return (wrist.x, wrist.y)


@dataclass
class DetectionStats:
    """Container for detection statistics."""
    frames_processed: int = 0
    hand_frames: int = 0
    letter_frames: int = 0
    letter_counts: Dict[str, int] = field(default_factory=dict)


class LetterDetector:
    """
    Detects alphabet letters frame by frame.

    Every frame is classified independently: the first detected hand is
    turned into features and handed to the classifier registry. Holding or
    smoothing letters across frames is left to the caller.
    """

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        landmark_extractor: Optional[Any] = None,
        feature_extractor: Optional[FeatureExtractor] = None,
        registry: Optional[LetterClassifierRegistry] = None,
        logger: Optional[Logger] = None
    ):
        """
        Initialize the letter detector.

        Args:
            config: Configuration dictionary; its ``mediapipe`` section is used
                to build a landmark extractor when none is given
            landmark_extractor: Object with ``extract_landmarks(frame, timestamp_ms)``
            feature_extractor: Feature extractor instance
            registry: Letter classifiers in priority order
            logger: Logger instance
        """
        self.config = config or {}
        self.logger = logger or Logger.from_config("letter_detector", self.config.get('logging'))
        self.feature_extractor = feature_extractor or FeatureExtractor()
        self.registry = registry or create_default_registry()
        self._landmark_extractor = landmark_extractor

        self.stats = DetectionStats()
        self._letter_counter = Counter()

    @property
    def landmark_extractor(self):
        """Landmark extractor, created from the configuration on first use."""
        if self._landmark_extractor is None:
            if 'mediapipe' not in self.config:
                raise ValueError("Configuration has no 'mediapipe' section for landmark extraction")

            # MediaPipe is only needed for frame-based detection
            from .landmark_extractor import HandLandmarkExtractor

            self._landmark_extractor = HandLandmarkExtractor.from_config(self.config['mediapipe'])
            self.logger.info(f"Loaded hand landmarker from {self.config['mediapipe']['model_path']}")

        return self._landmark_extractor

    def detect_letter(self, frame: np.ndarray, timestamp_ms: Optional[int] = None) -> LetterDetection:
        """
        Detect a letter in a single frame.

        Args:
            frame: Input frame (BGR format)
            timestamp_ms: Frame timestamp for video-mode extraction

        Returns:
            LetterDetection for the frame
        """
        hands = self.landmark_extractor.extract_landmarks(frame, timestamp_ms)
        return self.detect_from_hands(hands)

    def detect_from_hands(self, hands: Optional[List[HandLandmarks]]) -> LetterDetection:
        """
        Classify the first of the detected hands.

        Args:
            hands: Hands detected in one frame, possibly empty or None

        Returns:
            LetterDetection for the frame
        """
        hand = select_primary_hand(hands)

        if hand is None:
            detection = LetterDetection(hand_detected=False, timestamp=time.time())
            self._update_stats(detection)
            return detection

        return self.detect_from_landmarks(hand)

    def detect_from_landmarks(self, hand_landmarks: HandLandmarks) -> LetterDetection:
        """
        Classify one hand.

        Args:
            hand_landmarks: HandLandmarks object

        Returns:
            LetterDetection with the hand's features and letter
        """
        features = self.feature_extractor.extract_features(hand_landmarks)

        letter = NO_LETTER
        if features is None:
            self.logger.debug(
                f"Malformed skeleton with {len(hand_landmarks.landmarks)} landmarks, no letter"
            )
        else:
            letter = self.registry.detect_letter(features)

        detection = LetterDetection(
            hand_detected=True,
            letter=letter,
            features=features,
            landmarks=hand_landmarks,
            timestamp=hand_landmarks.timestamp or time.time()
        )
        self._update_stats(detection)

        return detection

    def _update_stats(self, detection: LetterDetection) -> None:
        self.stats.frames_processed += 1

        if detection.hand_detected:
            self.stats.hand_frames += 1

        if detection.letter_detected:
            self.stats.letter_frames += 1
            self._letter_counter[detection.letter] += 1
            self.stats.letter_counts = dict(self._letter_counter)

    def get_stats(self) -> DetectionStats:
        """Get current detection statistics."""
        return self.stats

    def reset_stats(self) -> None:
        """Reset detection statistics."""
        self.stats = DetectionStats()
        self._letter_counter.clear()

    def close(self) -> None:
        """Release the landmark extractor."""
        if self._landmark_extractor is not None and hasattr(self._landmark_extractor, 'close'):
            self._landmark_extractor.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
