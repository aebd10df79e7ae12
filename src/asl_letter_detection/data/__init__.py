"""
Recorded landmark data.
"""

from .landmark_io import load_landmark_frames, save_landmark_frames

__all__ = [
    "load_landmark_frames",
    "save_landmark_frames",
]
