"""
Tests for the letter classifiers and the classifier registry.
"""

from dataclasses import replace

import pytest

from asl_letter_detection.classifiers import (
    NO_LETTER,
    LetterA,
    LetterB,
    LetterClassifier,
    LetterClassifierRegistry,
    create_default_registry,
    detect_letter,
)
from asl_letter_detection.core.landmarks import Handedness

from conftest import (
    features_with_landmarks,
    half_extended_hand,
    letter_a_hand,
    letter_b_hand,
    make_hand,
    realistic_hand,
)


@pytest.fixture
def features_of(extractor):
    return extractor.extract_features


class AlwaysMatches(LetterClassifier):
    """Matches any well-formed hand."""

    def __init__(self, letter):
        self.letter = letter

    def _matches(self, features):
        return True


class TestLetterA:

    @pytest.mark.parametrize("handedness", ["Right", "Left"])
    def test_fist_with_thumb_alongside(self, features_of, handedness):
        assert LetterA().matches(features_of(letter_a_hand(handedness)))

    def test_thumb_order_depends_on_handedness(self, features_of):
        # Right-hand thumb ordering presented as a left hand
        mirrored = replace(letter_a_hand("Right"), handedness=Handedness.LEFT)

        assert not LetterA().matches(features_of(mirrored))

    def test_thumb_order_must_be_strict(self, features_of):
        hand = letter_a_hand()
        points = {i: (p.x, p.y, p.z) for i, p in enumerate(hand.landmarks)}
        points[3] = (0.6, 0.6, 0.0)  # IP level with MCP

        assert not LetterA().matches(features_of(make_hand(points)))

    def test_one_extended_finger_fails(self, features_of):
        hand = letter_a_hand()
        points = {i: (p.x, p.y, p.z) for i, p in enumerate(hand.landmarks)}
        points[20] = (0.5, 0.3, 0.0)  # pinky tip above its MCP

        assert not LetterA().matches(features_of(make_hand(points)))

    def test_tip_level_with_knuckle_is_not_curled(self, features_of):
        hand = letter_a_hand()
        points = {i: (p.x, p.y, p.z) for i, p in enumerate(hand.landmarks)}
        points[8] = (0.5, 0.5, 0.0)

        assert not LetterA().matches(features_of(make_hand(points)))

    def test_flat_hand_is_not_a(self, features_of):
        assert not LetterA().matches(features_of(letter_b_hand()))


class TestLetterB:

    @pytest.mark.parametrize("handedness", ["Right", "Left"])
    def test_flat_hand_with_thumb_across(self, features_of, handedness):
        assert LetterB().matches(features_of(letter_b_hand(handedness)))

    def test_realistic_open_hand(self, features_of):
        assert LetterB().matches(features_of(realistic_hand()))

    def test_thumb_on_wrong_side(self, features_of):
        hand = replace(letter_b_hand("Right"), handedness=Handedness.LEFT)
        assert not LetterB().matches(features_of(hand))

    def test_tip_must_clear_every_joint(self, features_of):
        hand = letter_b_hand()
        points = {i: (p.x, p.y, p.z) for i, p in enumerate(hand.landmarks)}
        points[11] = (0.5, 0.1, 0.0)  # middle DIP above its tip

        assert not LetterB().matches(features_of(make_hand(points)))

    def test_fist_is_not_b(self, features_of):
        assert not LetterB().matches(features_of(letter_a_hand()))


@pytest.mark.parametrize("num_points", [0, 20, 22])
@pytest.mark.parametrize("classifier", [LetterA(), LetterB(), AlwaysMatches("Z")])
def test_malformed_skeleton_never_matches(classifier, num_points):
    landmarks = letter_a_hand().landmarks + letter_b_hand().landmarks
    features = features_with_landmarks(landmarks[:num_points])

    assert classifier.matches(features) is False


class TestDispatcher:

    def test_scenario_letter_a(self, features_of):
        assert detect_letter(features_of(letter_a_hand())) == "A"

    def test_scenario_letter_b(self, features_of):
        assert detect_letter(features_of(letter_b_hand())) == "B"

    def test_scenario_no_match(self, features_of):
        features = features_of(half_extended_hand())

        assert detect_letter(features) == NO_LETTER == ""

    def test_first_registered_letter_wins(self, features_of):
        class EagerB(LetterB):
            def _matches(self, features):
                return True

        registry = LetterClassifierRegistry([LetterA(), EagerB()])
        features = features_of(letter_a_hand())

        assert registry.matching_letters(features) == ["A", "B"]
        assert registry.detect_letter(features) == "A"

    def test_priority_follows_registration_order(self, features_of):
        registry = LetterClassifierRegistry([AlwaysMatches("Y"), AlwaysMatches("X")])
        assert registry.detect_letter(features_of(half_extended_hand())) == "Y"

    def test_new_letters_added_by_registration(self, features_of):
        registry = create_default_registry()
        registry.register(AlwaysMatches("C"))

        assert registry.letters == ["A", "B", "C"]
        assert len(registry) == 3
        assert registry.detect_letter(features_of(letter_b_hand())) == "B"
        assert registry.detect_letter(features_of(half_extended_hand())) == "C"

    def test_register_rejects_duplicates(self):
        registry = create_default_registry()
        with pytest.raises(ValueError):
            registry.register(LetterA())

    def test_register_rejects_unlabelled(self):
        with pytest.raises(ValueError):
            LetterClassifierRegistry([AlwaysMatches("")])

    def test_register_rejects_non_classifiers(self):
        with pytest.raises(TypeError):
            LetterClassifierRegistry([lambda features: True])

    def test_malformed_skeleton_gives_no_letter(self):
        features = features_with_landmarks(letter_a_hand().landmarks[:20])
        assert detect_letter(features) == NO_LETTER

    def test_failed_extraction_gives_no_letter(self, features_of):
        features = features_of(make_hand(num_points=20))

        assert features is None
        assert detect_letter(features) == NO_LETTER
        assert create_default_registry().matching_letters(features) == []
        assert LetterA().matches(None) is False

    def test_classification_is_deterministic(self, features_of):
        features = features_of(letter_b_hand("Left"))
        assert {detect_letter(features) for _ in range(10)} == {"B"}

    def test_registry_info(self):
        info = create_default_registry().get_registry_info()

        assert [entry['letter'] for entry in info] == ["A", "B"]
        assert info[0]['classifier'] == "LetterA"


def test_handedness_sign_mirrors_thumb_tests(features_of):
    left = features_of(letter_a_hand("Left"))
    assert left.handedness is Handedness.LEFT
    assert LetterA().matches(left)
