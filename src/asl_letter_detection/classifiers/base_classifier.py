"""
Base class for rule-based letter classifiers.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from ..core.feature_extractor import HandFeatures
from ..core.landmarks import FINGER_INDICES, NUM_LANDMARKS


class LetterClassifier(ABC):
    """Base class for all letter classifiers."""

    letter: str = ""

    def matches(self, features: Optional[HandFeatures]) -> bool:
        """
        Test whether the features match this classifier's letter.

        Args:
            features: Features of one hand, or None when extraction failed

        Returns:
            True if the hand shows the letter; False for skeletons that are
            missing or not exactly 21 points
        """
        if features is None or len(features.landmarks) != NUM_LANDMARKS:
            return False
        return self._matches(features)

    @abstractmethod
    def _matches(self, features: HandFeatures) -> bool:
        """
        Geometric test on a well-formed skeleton.

        Args:
            features: Features with a 21-point skeleton

        Returns:
            True if the hand shows the letter
        """
        pass

    @staticmethod
    def finger_chain(features: HandFeatures, finger_name: str):
        """Landmarks of one finger ordered base -> tip."""
        return tuple(features.landmarks[idx] for idx in FINGER_INDICES[finger_name])

    def get_classifier_info(self) -> Dict[str, Any]:
        """Get classifier information."""
        return {
            'letter': self.letter,
            'classifier': self.__class__.__name__,
            'description': (self.__doc__ or "No description available").strip()
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(letter={self.letter!r})"
