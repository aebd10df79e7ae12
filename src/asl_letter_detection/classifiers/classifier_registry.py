"""
Ordered registry of letter classifiers with first-match-wins dispatch.
"""

from typing import Any, Dict, Iterable, List, Optional, Tuple

from ..core.feature_extractor import HandFeatures
from ..utils.logger import Logger
from .base_classifier import LetterClassifier
from .letters import LetterA, LetterB


NO_LETTER = ""


class LetterClassifierRegistry:
    """
    Holds letter classifiers in priority order.

    Letters are added by registration; ``detect_letter`` returns the label of
    the first classifier that matches, so earlier registrations win when a
    frame satisfies several letters.
    """

    def __init__(
        self,
        classifiers: Optional[Iterable[LetterClassifier]] = None,
        logger: Optional[Logger] = None
    ):
        """
        Initialize the registry.

        Args:
            classifiers: Classifiers to register, highest priority first
            logger: Optional logger for debug tracing
        """
        self.logger = logger
        self._classifiers: List[LetterClassifier] = []

        for classifier in classifiers or []:
            self.register(classifier)

    def register(self, classifier: LetterClassifier) -> None:
        """
        Append a classifier at the lowest priority.

        Args:
            classifier: Classifier instance to register

        Raises:
            TypeError: If the object is not a LetterClassifier
            ValueError: If the letter is empty or already registered
        """
        if not isinstance(classifier, LetterClassifier):
            raise TypeError("Classifier must inherit from LetterClassifier")

        if not classifier.letter:
            raise ValueError(f"{classifier.__class__.__name__} has no letter label")

        if classifier.letter in self.letters:
            raise ValueError(f"Letter already registered: {classifier.letter}")

        self._classifiers.append(classifier)

    @property
    def classifiers(self) -> Tuple[LetterClassifier, ...]:
        return tuple(self._classifiers)

    @property
    def letters(self) -> List[str]:
        """Registered letters in priority order."""
        return [classifier.letter for classifier in self._classifiers]

    def detect_letter(self, features: Optional[HandFeatures]) -> str:
        """
        Classify a hand.

        Args:
            features: Features of one hand

        Returns:
            The first matching letter, or an empty string if none match
        """
        for classifier in self._classifiers:
            if classifier.matches(features):
                if self.logger:
                    self.logger.debug(f"Letter matched: {classifier.letter}")
                return classifier.letter

        return NO_LETTER

    def matching_letters(self, features: Optional[HandFeatures]) -> List[str]:
        """Every registered letter whose classifier matches, in priority order."""
        return [c.letter for c in self._classifiers if c.matches(features)]

    def get_registry_info(self) -> List[Dict[str, Any]]:
        return [classifier.get_classifier_info() for classifier in self._classifiers]

    def __len__(self) -> int:
        return len(self._classifiers)


def create_default_registry(logger: Optional[Logger] = None) -> LetterClassifierRegistry:
    """Registry with the built-in alphabet, A before B."""
    return LetterClassifierRegistry([LetterA(), LetterB()], logger=logger)


_default_registry = create_default_registry()


def detect_letter(features: Optional[HandFeatures]) -> str:
    """Classify a hand with the built-in alphabet."""
    return _default_registry.detect_letter(features)
