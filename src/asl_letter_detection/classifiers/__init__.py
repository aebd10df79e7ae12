"""
Rule-based letter classifiers.
"""

from .base_classifier import LetterClassifier
from .letters import LetterA, LetterB
from .classifier_registry import (
    NO_LETTER,
    LetterClassifierRegistry,
    create_default_registry,
    detect_letter,
)

__all__ = [
    "LetterClassifier",
    "LetterA",
    "LetterB",
    "NO_LETTER",
    "LetterClassifierRegistry",
    "create_default_registry",
    "detect_letter",
]
