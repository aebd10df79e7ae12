"""
Rule-based classifiers for individual alphabet letters.

Image y grows downward, so "above" means a smaller y value.
"""

from ..core.feature_extractor import HandFeatures
from ..core.landmarks import LANDMARK_INDICES, NON_THUMB_FINGERS
from .base_classifier import LetterClassifier


class LetterA(LetterClassifier):
    """Fist with all four fingers curled and the thumb resting along the side."""

    letter = "A"

    def _matches(self, features: HandFeatures) -> bool:
        for finger_name in NON_THUMB_FINGERS:
            mcp, _, _, tip = self.finger_chain(features, finger_name)
            # Curled: tip below its own knuckle
            if not tip.y > mcp.y:
                return False

        landmarks = features.landmarks
        tip = landmarks[LANDMARK_INDICES['thumb_tip']]
        ip = landmarks[LANDMARK_INDICES['thumb_ip']]
        mcp = landmarks[LANDMARK_INDICES['thumb_mcp']]

        # Right hand: tip.x < ip.x < mcp.x, mirrored for the left hand
        sign = features.handedness.sign
        return sign * (ip.x - tip.x) > 0 and sign * (mcp.x - ip.x) > 0


class LetterB(LetterClassifier):
    """Flat hand with all four fingers extended and the thumb across the palm."""

    letter = "B"

    def _matches(self, features: HandFeatures) -> bool:
        for finger_name in NON_THUMB_FINGERS:
            mcp, pip, dip, tip = self.finger_chain(features, finger_name)
            if not (tip.y < pip.y and tip.y < dip.y and tip.y < mcp.y):
                return False

        landmarks = features.landmarks
        tip = landmarks[LANDMARK_INDICES['thumb_tip']]
        base = landmarks[LANDMARK_INDICES['thumb_cmc']]

        # Only the thumb tip and the base of the chain are compared
        return features.handedness.sign * (base.x - tip.x) > 0
