"""
Hand landmark extraction using the MediaPipe Tasks hand landmarker.
"""

import time
import cv2
import numpy as np
import mediapipe as mp
from mediapipe.tasks import python as mp_tasks
from mediapipe.tasks.python import vision
from pathlib import Path
from typing import Any, List, Optional

from .landmarks import HandLandmarks


RUNNING_MODES = {
    "image": vision.RunningMode.IMAGE,
    "video": vision.RunningMode.VIDEO,
}


class HandLandmarkExtractor:
    """Hand landmark extraction backed by a MediaPipe ``HandLandmarker``."""

    def __init__(
        self,
        model_path: str,
        running_mode: str = "video",
        num_hands: int = 2,
        min_hand_detection_confidence: float = 0.5,
        min_hand_presence_confidence: float = 0.5,
        min_tracking_confidence: float = 0.5
    ):
        """
        Initialize the hand landmark extractor.

        Args:
            model_path: Path to the ``hand_landmarker.task`` model asset
            running_mode: "image" for independent frames, "video" for streams
            num_hands: Maximum number of hands to detect
            min_hand_detection_confidence: Minimum confidence for palm detection
            min_hand_presence_confidence: Minimum confidence for hand presence
            min_tracking_confidence: Minimum confidence for hand tracking

        Raises:
            FileNotFoundError: If the model asset does not exist
            ValueError: If the running mode is unknown
        """
        if running_mode not in RUNNING_MODES:
            raise ValueError(f"Unknown running mode: {running_mode}. Available: {list(RUNNING_MODES)}")

        self.model_path = Path(model_path)
        if not self.model_path.exists():
            raise FileNotFoundError(f"Hand landmarker model not found: {self.model_path}")

        self.running_mode = running_mode
        self.num_hands = num_hands

        options = vision.HandLandmarkerOptions(
            base_options=mp_tasks.BaseOptions(model_asset_path=str(self.model_path)),
            running_mode=RUNNING_MODES[running_mode],
            num_hands=num_hands,
            min_hand_detection_confidence=min_hand_detection_confidence,
            min_hand_presence_confidence=min_hand_presence_confidence,
            min_tracking_confidence=min_tracking_confidence
        )
        self.landmarker = vision.HandLandmarker.create_from_options(options)

        # VIDEO mode requires strictly increasing timestamps
        self._last_timestamp_ms = -1

    @classmethod
    def from_config(cls, config: Any) -> "HandLandmarkExtractor":
        """Create an extractor from the ``mediapipe`` configuration section."""
        return cls(
            model_path=config['model_path'],
            running_mode=config.get('running_mode', 'video'),
            num_hands=config.get('num_hands', 2),
            min_hand_detection_confidence=config.get('min_hand_detection_confidence', 0.5),
            min_hand_presence_confidence=config.get('min_hand_presence_confidence', 0.5),
            min_tracking_confidence=config.get('min_tracking_confidence', 0.5)
        )

    def extract_landmarks(
        self,
        image: np.ndarray,
        timestamp_ms: Optional[int] = None
    ) -> Optional[List[HandLandmarks]]:
        """
        Extract hand landmarks from an image.

        Args:
            image: Input image (BGR format)
            timestamp_ms: Frame timestamp, used in video mode (defaults to now)

        Returns:
            List of HandLandmarks objects or None if no hands detected
        """
        # Convert BGR to RGB
        rgb_image = cv2.cvtColor(image, cv2.COLOR_BGR2RGB)
        mp_image = mp.Image(image_format=mp.ImageFormat.SRGB, data=rgb_image)

        if self.running_mode == "video":
            if timestamp_ms is None:
                timestamp_ms = int(time.time() * 1000)
            timestamp_ms = max(int(timestamp_ms), self._last_timestamp_ms + 1)
            self._last_timestamp_ms = timestamp_ms
            result = self.landmarker.detect_for_video(mp_image, timestamp_ms)
        else:
            result = self.landmarker.detect(mp_image)

        timestamp = (timestamp_ms or 0) / 1000.0
        hands = self.convert_result(result, timestamp=timestamp)

        return hands or None

    @staticmethod
    def convert_result(result: Any, timestamp: float = 0.0) -> List[HandLandmarks]:
        """
        Convert a ``HandLandmarkerResult`` into HandLandmarks objects.

        Hands without a handedness classification are skipped.

        Args:
            result: Object with ``hand_landmarks`` and ``handedness`` lists
            timestamp: Frame timestamp in seconds

        Returns:
            List of HandLandmarks, in detection order
        """
        hands = []

        if not result.hand_landmarks:
            return hands

        for idx, landmarks in enumerate(result.hand_landmarks):
            if idx >= len(result.handedness) or not result.handedness[idx]:
                continue

            category = result.handedness[idx][0]
            hands.append(HandLandmarks.from_coordinates(
                landmarks,
                handedness=category.category_name,
                confidence=category.score,
                timestamp=timestamp
            ))

        return hands

    def close(self) -> None:
        """Close the MediaPipe hand landmarker."""
        if hasattr(self, 'landmarker'):
            self.landmarker.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
