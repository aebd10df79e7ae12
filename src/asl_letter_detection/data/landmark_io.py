"""
Reading and writing recorded hand landmark frames.

Recordings are JSON documents of the form::

    {"frames": [{"timestamp": 0.0,
                 "hands": [{"handedness": "Right",
                            "confidence": 0.97,
                            "landmarks": [[x, y, z], ...]}]}]}
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from ..core.landmarks import HandLandmarks


def frame_to_dict(hands: List[HandLandmarks], timestamp: float = 0.0) -> Dict[str, Any]:
    """Serialize the hands of one frame."""
    return {
        "timestamp": timestamp,
        "hands": [
            {
                "handedness": hand.handedness.value,
                "confidence": hand.confidence,
                "landmarks": hand.to_coordinates()
            }
            for hand in hands
        ]
    }


def save_landmark_frames(
    frames: List[List[HandLandmarks]],
    path: Union[str, Path],
    timestamps: Optional[Sequence[float]] = None
) -> Path:
    """
    Save recorded frames to a JSON file.

    Without explicit timestamps a frame takes the timestamp of its first
    hand, so frames without hands are written as 0.0.

    Args:
        frames: Hands per frame, in frame order
        path: Output file path
        timestamps: Capture time of each frame in seconds

    Returns:
        Path of the written file
    """
    if timestamps is not None and len(timestamps) != len(frames):
        raise ValueError(f"Got {len(timestamps)} timestamps for {len(frames)} frames")

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    records = []
    for frame_idx, hands in enumerate(frames):
        if timestamps is not None:
            timestamp = float(timestamps[frame_idx])
        else:
            timestamp = hands[0].timestamp if hands else 0.0
        records.append(frame_to_dict(hands, timestamp))

    with open(path, 'w') as f:
        json.dump({"frames": records}, f, indent=2)

    return path


def load_landmark_frames(path: Union[str, Path]) -> List[List[HandLandmarks]]:
    """
    Load recorded frames from a JSON file.

    Skeletons are not checked for length here; malformed skeletons are
    classified as "no letter" downstream.

    Args:
        path: Recording file path

    Returns:
        Hands per frame, in frame order

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is not a valid recording
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Landmark recording not found: {path}")

    try:
        with open(path, 'r') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {path}: {e}")

    if not isinstance(data, dict) or not isinstance(data.get("frames"), list):
        raise ValueError(f"Recording {path} has no 'frames' list")

    return [_parse_frame(record, frame_idx) for frame_idx, record in enumerate(data["frames"])]


def _parse_frame(record: Any, frame_idx: int) -> List[HandLandmarks]:
    if not isinstance(record, dict):
        raise ValueError(f"Frame {frame_idx} is not an object")

    timestamp = record.get("timestamp", 0.0)
    hands = []

    for hand_idx, hand in enumerate(record.get("hands", [])):
        try:
            hands.append(HandLandmarks.from_coordinates(
                hand["landmarks"],
                handedness=hand["handedness"],
                confidence=hand.get("confidence", 1.0),
                timestamp=timestamp
            ))
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Invalid hand {hand_idx} in frame {frame_idx}: {e}")

    return hands
