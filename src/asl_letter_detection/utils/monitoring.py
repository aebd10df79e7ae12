"""
Performance monitoring for the live detection loop.
"""

import time
import psutil
import numpy as np
from typing import Dict, Any, List
from dataclasses import dataclass
from collections import deque


@dataclass
class PerformanceMetrics:
    """Metrics of one processed frame, or averages over the window."""
    fps: float
    cpu_usage: float
    memory_usage: float
    frame_time: float
    detection_time: float
    hand_rate: float
    letter_rate: float


class PerformanceMonitor:
    """
    Sliding-window monitor for camera-driven letter detection.

    Besides throughput and system load it tracks how often a hand and a
    letter were found, and compares the detection time with the frame
    budget implied by the camera frame rate.
    """

    def __init__(self, window_size: int = 100, target_fps: float = 30.0):
        """
        Initialize the performance monitor.

        Args:
            window_size: Number of frames kept for averages
            target_fps: Camera frame rate the loop should keep up with
        """
        self.window_size = window_size
        self.target_fps = target_fps

        self.fps_history = deque(maxlen=window_size)
        self.cpu_history = deque(maxlen=window_size)
        self.memory_history = deque(maxlen=window_size)
        self.frame_time_history = deque(maxlen=window_size)
        self.detection_time_history = deque(maxlen=window_size)
        self.hand_history = deque(maxlen=window_size)
        self.letter_history = deque(maxlen=window_size)

        self.frame_count = 0
        self.hand_frames = 0
        self.letter_frames = 0
        self.start_time = time.time()
        self.last_frame_time = self.start_time

    @property
    def frame_budget(self) -> float:
        """Seconds available per frame at the target frame rate."""
        return 1.0 / self.target_fps if self.target_fps > 0 else float('inf')

    def update_frame_metrics(
        self,
        detection_time: float = 0.0,
        hand_detected: bool = False,
        letter_detected: bool = False
    ) -> PerformanceMetrics:
        """
        Record one processed frame.

        Args:
            detection_time: Landmark extraction plus classification time in seconds
            hand_detected: Whether the frame contained a hand
            letter_detected: Whether a letter was recognised

        Returns:
            Metrics of this frame
        """
        current_time = time.time()
        frame_time = current_time - self.last_frame_time
        self.last_frame_time = current_time

        self.frame_count += 1
        self.hand_frames += int(hand_detected)
        self.letter_frames += int(letter_detected)

        elapsed_time = current_time - self.start_time
        fps = self.frame_count / elapsed_time if elapsed_time > 0 else 0.0

        cpu_usage = psutil.cpu_percent()
        memory_usage = psutil.virtual_memory().percent

        self.fps_history.append(fps)
        self.cpu_history.append(cpu_usage)
        self.memory_history.append(memory_usage)
        self.frame_time_history.append(frame_time)
        self.detection_time_history.append(detection_time)
        self.hand_history.append(hand_detected)
        self.letter_history.append(letter_detected)

        return PerformanceMetrics(
            fps=fps,
            cpu_usage=cpu_usage,
            memory_usage=memory_usage,
            frame_time=frame_time,
            detection_time=detection_time,
            hand_rate=float(hand_detected),
            letter_rate=float(letter_detected)
        )

    @staticmethod
    def _mean(values) -> float:
        return float(np.mean(values)) if values else 0.0

    def get_average_metrics(self) -> PerformanceMetrics:
        """Average metrics over the monitoring window."""
        return PerformanceMetrics(
            fps=self._mean(self.fps_history),
            cpu_usage=self._mean(self.cpu_history),
            memory_usage=self._mean(self.memory_history),
            frame_time=self._mean(self.frame_time_history),
            detection_time=self._mean(self.detection_time_history),
            hand_rate=self._mean(self.hand_history),
            letter_rate=self._mean(self.letter_history)
        )

    def get_performance_summary(self) -> Dict[str, Any]:
        """Window averages and totals since the monitor started."""
        avg_metrics = self.get_average_metrics()

        return {
            'average': {
                'fps': avg_metrics.fps,
                'cpu_usage': avg_metrics.cpu_usage,
                'memory_usage': avg_metrics.memory_usage,
                'frame_time_ms': avg_metrics.frame_time * 1000,
                'detection_time_ms': avg_metrics.detection_time * 1000
            },
            'detection': {
                'hand_rate': avg_metrics.hand_rate,
                'letter_rate': avg_metrics.letter_rate
            },
            'statistics': {
                'total_frames': self.frame_count,
                'hand_frames': self.hand_frames,
                'letter_frames': self.letter_frames,
                'monitoring_duration': time.time() - self.start_time,
                'window_size': self.window_size
            }
        }

    def get_performance_warnings(self) -> List[str]:
        """Warnings for the most recent frames of the window."""
        warnings = []

        if not self.fps_history:
            return warnings

        recent_detection = self._mean(list(self.detection_time_history)[-10:])
        if recent_detection > self.frame_budget:
            warnings.append(
                f"Detection over frame budget: {recent_detection * 1000:.1f}ms "
                f"> {self.frame_budget * 1000:.1f}ms"
            )

        recent_fps = self._mean(list(self.fps_history)[-10:])
        if recent_fps < self.target_fps / 2:
            warnings.append(f"Low FPS: {recent_fps:.1f} (target {self.target_fps:.0f})")

        recent_cpu = self._mean(list(self.cpu_history)[-10:])
        if recent_cpu > 90.0:
            warnings.append(f"High CPU usage: {recent_cpu:.1f}%")

        recent_memory = self._mean(list(self.memory_history)[-10:])
        if recent_memory > 90.0:
            warnings.append(f"High memory usage: {recent_memory:.1f}%")

        return warnings
