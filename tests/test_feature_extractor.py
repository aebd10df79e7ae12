"""
Tests for feature extraction from hand landmarks.
"""

import numpy as np
import pytest

from asl_letter_detection.core.feature_extractor import FeatureExtractor
from asl_letter_detection.core.landmarks import (
    DISTANCE_PAIRS,
    FINGER_INDICES,
    Handedness,
    HandLandmarks,
    select_primary_hand,
)
from asl_letter_detection.core.vector_math import Point3, magnitude

from conftest import letter_a_hand, make_hand, realistic_hand


class TestHandedness:

    @pytest.mark.parametrize("label, expected", [
        ("Right", Handedness.RIGHT),
        ("left", Handedness.LEFT),
        (" RIGHT ", Handedness.RIGHT),
        (Handedness.LEFT, Handedness.LEFT),
    ])
    def test_from_label(self, label, expected):
        assert Handedness.from_label(label) is expected

    def test_unknown_label_rejected(self):
        with pytest.raises(ValueError):
            Handedness.from_label("unknown")

    def test_sign(self):
        assert Handedness.RIGHT.sign == 1
        assert Handedness.LEFT.sign == -1


class TestHandLandmarks:

    def test_from_attribute_objects(self):
        class Landmark:
            def __init__(self, x, y, z):
                self.x, self.y, self.z = x, y, z

        hand = HandLandmarks.from_coordinates(
            [Landmark(0.1, 0.2, -0.3)] * 21, handedness="Left", confidence=0.9
        )

        assert hand.landmarks[0] == Point3(0.1, 0.2, -0.3)
        assert hand.handedness is Handedness.LEFT
        assert hand.confidence == pytest.approx(0.9)

    def test_select_primary_hand(self):
        first = letter_a_hand()
        second = realistic_hand()

        assert select_primary_hand([first, second]) is first
        assert select_primary_hand([]) is None
        assert select_primary_hand(None) is None


class TestFeatureExtractor:

    def test_feature_schema(self, extractor):
        features = extractor.extract_features(realistic_hand())

        assert features.handedness is Handedness.RIGHT
        assert len(features.landmarks) == 21
        assert set(features.joint_angles) == {
            f"{finger}_{joint}" for finger in FINGER_INDICES for joint in ("base", "tip")
        }
        assert set(features.relative_distances) == {
            "thumb_index", "index_middle", "middle_ring", "ring_pinky", "wrist_middle"
        }
        assert extractor.validate_features(features)

    def test_joint_angles_measure_bend(self, extractor):
        # Index finger straight up to the DIP, then bent 90 degrees at the tip
        hand = make_hand({
            5: (0.5, 0.7, 0.0),
            6: (0.5, 0.6, 0.0),
            7: (0.5, 0.5, 0.0),
            8: (0.6, 0.5, 0.0),
        })

        features = extractor.extract_features(hand)

        assert features.joint_angles["index_base"] == pytest.approx(0.0, abs=1e-4)
        assert features.joint_angles["index_tip"] == pytest.approx(90.0)

    def test_degenerate_finger_has_zero_angles(self, extractor):
        features = extractor.extract_features(make_hand())

        assert all(angle == 0.0 for angle in features.joint_angles.values())
        assert features.hand_orientation.palm_normal_vector == Point3(0.0, 0.0, 0.0)

    def test_relative_distances(self, extractor):
        hand = make_hand({
            0: (0.5, 0.9, 0.0),
            4: (0.2, 0.5, 0.0),
            8: (0.5, 0.1, 0.0),
            12: (0.5, 0.5, 0.0),
        })

        distances = extractor.extract_features(hand).relative_distances

        assert distances["thumb_index"] == pytest.approx(0.5)
        assert distances["index_middle"] == pytest.approx(0.4)
        assert distances["wrist_middle"] == pytest.approx(0.4)
        assert distances["middle_ring"] == 0.0

    def test_palm_normal_is_unit_length(self, extractor):
        features = extractor.extract_features(realistic_hand())
        assert magnitude(features.hand_orientation.palm_normal_vector) == pytest.approx(1.0)

    def test_palm_normal_direction(self, extractor):
        # wrist -> index MCP along -y, wrist -> pinky MCP along +x
        hand = make_hand({
            0: (0.5, 0.9, 0.0),
            5: (0.5, 0.6, 0.0),
            17: (0.8, 0.9, 0.0),
        })

        normal = extractor.extract_features(hand).hand_orientation.palm_normal_vector

        assert normal.x == pytest.approx(0.0)
        assert normal.y == pytest.approx(0.0)
        assert normal.z == pytest.approx(1.0)

    def test_palm_normal_not_corrected_for_handedness(self, extractor):
        right = extractor.extract_features(realistic_hand("Right"))
        left = extractor.extract_features(realistic_hand("Left"))

        assert right.hand_orientation == left.hand_orientation

    def test_extraction_is_deterministic(self, extractor):
        hand = realistic_hand()

        first = extractor.extract_features(hand)
        second = extractor.extract_features(hand)

        assert first == second
        np.testing.assert_array_equal(first.feature_vector, second.feature_vector)

    def test_joint_angles_within_bounds(self, extractor):
        rng = np.random.default_rng(7)

        for _ in range(50):
            points = rng.uniform(-1.0, 1.0, size=(21, 3))
            hand = HandLandmarks.from_coordinates(points, handedness="Left")
            features = extractor.extract_features(hand)

            for angle in features.joint_angles.values():
                assert 0.0 <= angle <= 180.0

    @pytest.mark.parametrize("num_points", [0, 20, 22])
    def test_malformed_skeleton_returns_none(self, extractor, num_points):
        assert extractor.extract_features(make_hand(num_points=num_points)) is None

    def test_feature_vector_matches_names(self, extractor):
        features = extractor.extract_features(realistic_hand())
        names = extractor.get_feature_names()

        assert len(features.feature_vector) == len(names) == 18
        assert names[0] == "angle_thumb_base"
        assert names[-3:] == ["palm_normal_x", "palm_normal_y", "palm_normal_z"]

    def test_custom_tables(self):
        extractor = FeatureExtractor(
            finger_indices={'index': FINGER_INDICES['index']},
            distance_pairs={'thumb_index': DISTANCE_PAIRS['thumb_index']}
        )

        features = extractor.extract_features(realistic_hand())

        assert set(features.joint_angles) == {"index_base", "index_tip"}
        assert set(features.relative_distances) == {"thumb_index"}
        assert extractor.validate_features(features)

    def test_validate_rejects_non_finite(self, extractor):
        hand = make_hand({8: (float("nan"), 0.5, 0.0)})
        features = extractor.extract_features(hand)

        assert not extractor.validate_features(features)
        assert not extractor.validate_features(None)
