#!/usr/bin/env python3
"""
Letter detection from a camera, image files or recorded landmarks.
"""

import sys
import argparse
import time
from pathlib import Path
from typing import List, Optional

import cv2
from omegaconf import OmegaConf

from asl_letter_detection.core.detector import LetterDetection, LetterDetector
from asl_letter_detection.core.landmarks import HandLandmarks
from asl_letter_detection.data.landmark_io import load_landmark_frames, save_landmark_frames
from asl_letter_detection.utils.config import PACKAGE_CONFIG_DIR, ConfigManager
from asl_letter_detection.utils.logger import Logger
from asl_letter_detection.utils.monitoring import PerformanceMonitor


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Detect alphabet letters from hand landmarks")

    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--image",
        type=str,
        nargs="+",
        help="Image file(s) to classify"
    )
    source.add_argument(
        "--landmarks",
        type=str,
        help="Recorded landmark JSON file to classify"
    )

    parser.add_argument(
        "--config",
        type=str,
        default=str(PACKAGE_CONFIG_DIR / "inference.yaml"),
        help="Path to configuration file"
    )
    parser.add_argument(
        "--model-path",
        type=str,
        help="Path to the MediaPipe hand_landmarker.task model (overrides config)"
    )
    parser.add_argument(
        "--camera-id",
        type=int,
        help="Camera device ID (overrides config)"
    )
    parser.add_argument(
        "--max-frames",
        type=int,
        help="Stop the camera loop after this many frames"
    )
    parser.add_argument(
        "--record",
        type=str,
        help="Save camera landmarks to this JSON file"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (overrides config)"
    )

    return parser


def load_inference_config(config_path: str):
    """Load a .yaml/.yml file over the inference defaults."""
    config_manager = ConfigManager(config_dir=str(Path(config_path).parent))
    return OmegaConf.merge(
        config_manager.get_default_config("inference"),
        config_manager.load_file(config_path)
    )


def run_on_landmarks(detector: LetterDetector, landmarks_path: str, logger: Logger) -> List[LetterDetection]:
    """Classify every frame of a landmark recording."""
    frames = load_landmark_frames(landmarks_path)
    logger.info(f"Loaded {len(frames)} frames from {landmarks_path}")

    detections = []
    for frame_idx, hands in enumerate(frames):
        detection = detector.detect_from_hands(hands)
        if detection.letter_detected:
            logger.log_detection(detection.letter, detection.landmarks.handedness.value, frame_idx)
        detections.append(detection)

    return detections


def run_on_images(detector: LetterDetector, image_paths: List[str], logger: Logger) -> List[LetterDetection]:
    """Classify each image independently."""
    detections = []

    for image_path in image_paths:
        image = cv2.imread(image_path)
        if image is None:
            raise FileNotFoundError(f"Could not read image: {image_path}")

        detection = detector.detect_letter(image)
        if not detection.hand_detected:
            logger.info(f"{image_path}: no hand detected")
        elif detection.letter_detected:
            logger.info(f"{image_path}: letter {detection.letter}")
        else:
            logger.info(f"{image_path}: hand detected, no letter")
        detections.append(detection)

    return detections


def run_on_camera(
    detector: LetterDetector,
    config,
    logger: Logger,
    max_frames: Optional[int] = None,
    record_path: Optional[str] = None
) -> None:
    """Run detection on live camera frames."""
    camera_id = config['camera']['device_id']
    cap = cv2.VideoCapture(camera_id)

    if not cap.isOpened():
        raise RuntimeError(f"Could not open camera {camera_id}")

    cap.set(cv2.CAP_PROP_FRAME_WIDTH, config['camera']['width'])
    cap.set(cv2.CAP_PROP_FRAME_HEIGHT, config['camera']['height'])
    cap.set(cv2.CAP_PROP_FPS, config['camera']['fps'])
    logger.info(f"Using camera {camera_id}")

    monitor = PerformanceMonitor(
        window_size=config['monitoring']['window_size'],
        target_fps=config['camera']['fps']
    )
    report_interval = config['monitoring']['report_interval']
    recorded: List[List[HandLandmarks]] = []
    recorded_timestamps: List[float] = []
    last_letter = ""
    frame_idx = 0

    try:
        while max_frames is None or frame_idx < max_frames:
            ret, frame = cap.read()
            if not ret:
                logger.warning("Failed to read frame from camera")
                break

            start_time = time.time()
            hands = detector.landmark_extractor.extract_landmarks(frame, int(start_time * 1000))
            detection = detector.detect_from_hands(hands)
            monitor.update_frame_metrics(
                time.time() - start_time, detection.hand_detected, detection.letter_detected
            )

            if record_path:
                recorded.append(hands or [])
                recorded_timestamps.append(start_time)

            # Only log letter changes to keep the console readable
            if detection.letter != last_letter and detection.letter_detected:
                logger.log_detection(detection.letter, detection.landmarks.handedness.value, frame_idx)
            last_letter = detection.letter

            frame_idx += 1
            if report_interval and frame_idx % report_interval == 0:
                summary = monitor.get_performance_summary()
                logger.info(
                    f"Performance: FPS={summary['average']['fps']:.1f}, "
                    f"detection={summary['average']['detection_time_ms']:.1f}ms, "
                    f"CPU={summary['average']['cpu_usage']:.1f}%, "
                    f"hand rate={summary['detection']['hand_rate']:.0%}"
                )
                for warning in monitor.get_performance_warnings():
                    logger.warning(warning)
    finally:
        cap.release()
        if record_path:
            save_landmark_frames(recorded, record_path, timestamps=recorded_timestamps)
            logger.info(f"Recorded {len(recorded)} frames to {record_path}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main function for letter detection."""
    args = build_parser().parse_args(argv)

    # Load configuration
    try:
        config = load_inference_config(args.config)
    except Exception as e:
        Logger.from_config("letter_detection").error(f"Failed to load configuration: {e}")
        return 1

    # Override config with command line arguments
    if args.model_path:
        config['mediapipe']['model_path'] = args.model_path
    if args.camera_id is not None:
        config['camera']['device_id'] = args.camera_id
    if args.log_level:
        config['logging']['level'] = args.log_level
    if args.image:
        config['mediapipe']['running_mode'] = 'image'

    # Initialize logger
    logger = Logger.from_config("letter_detection", config['logging'])
    logger.log_config(OmegaConf.to_container(config, resolve=True))

    detector = LetterDetector(config=config, logger=logger)

    try:
        with detector:
            if args.landmarks:
                run_on_landmarks(detector, args.landmarks, logger)
            elif args.image:
                run_on_images(detector, args.image, logger)
            else:
                run_on_camera(detector, config, logger, args.max_frames, args.record)

        stats = detector.get_stats()
        logger.log_detection_stats(
            stats.frames_processed, stats.hand_frames, stats.letter_frames, stats.letter_counts
        )
        return 0

    except KeyboardInterrupt:
        logger.info("Detection interrupted by user")
        return 0
    except Exception as e:
        logger.error(f"Detection failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
