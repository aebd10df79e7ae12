"""
Logging utilities for the letter detection system.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Dict, Any
from datetime import datetime
import json


class Logger:
    """Logging wrapper with console, file and JSON-lines outputs."""

    def __init__(
        self,
        name: str = "asl_letter_detection",
        log_dir: str = "logs",
        level: str = "INFO",
        console_output: bool = True,
        file_output: bool = True,
        json_output: bool = False
    ):
        """
        Initialize the logger.

        Args:
            name: Logger name
            log_dir: Directory for log files
            level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            console_output: Enable console output
            file_output: Enable file output
            json_output: Enable JSON formatted output
        """
        self.name = name
        self.log_dir = Path(log_dir)
        if file_output or json_output:
            self.log_dir.mkdir(parents=True, exist_ok=True)

        # Create logger
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, level.upper()))

        # Clear existing handlers
        self.logger.handlers.clear()

        # Create formatters
        self.console_formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%H:%M:%S'
        )

        self.file_formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

        # Console handler
        if console_output:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setFormatter(self.console_formatter)
            self.logger.addHandler(console_handler)

        # File handler
        if file_output:
            log_file = self.log_dir / f"{name}_{timestamp}.log"
            file_handler = logging.FileHandler(log_file)
            file_handler.setFormatter(self.file_formatter)
            self.logger.addHandler(file_handler)

        # JSON handler for structured logging
        if json_output:
            json_file = self.log_dir / f"{name}_{timestamp}.json"
            self.json_handler = JsonFileHandler(json_file)
            self.logger.addHandler(self.json_handler)

    @classmethod
    def from_config(cls, name: str, config: Optional[Dict[str, Any]] = None) -> "Logger":
        """
        Create a logger from the ``logging`` section of a configuration.

        Args:
            name: Logger name
            config: Mapping with optional level, log_dir and output switches

        Returns:
            Logger instance
        """
        config = config or {}
        return cls(
            name=name,
            log_dir=config.get('log_dir', 'logs'),
            level=config.get('level', 'INFO'),
            console_output=config.get('console_output', True),
            file_output=config.get('file_output', False),
            json_output=config.get('json_output', False)
        )

    def set_level(self, level: str) -> None:
        self.logger.setLevel(getattr(logging, level.upper()))

    def debug(self, message: str, **kwargs) -> None:
        """Log debug message."""
        self.logger.debug(message, extra=kwargs)

    def info(self, message: str, **kwargs) -> None:
        """Log info message."""
        self.logger.info(message, extra=kwargs)

    def warning(self, message: str, **kwargs) -> None:
        """Log warning message."""
        self.logger.warning(message, extra=kwargs)

    def error(self, message: str, **kwargs) -> None:
        """Log error message."""
        self.logger.error(message, extra=kwargs)

    def critical(self, message: str, **kwargs) -> None:
        """Log critical message."""
        self.logger.critical(message, extra=kwargs)

    def log_metric(self, metric_name: str, value: float, step: Optional[int] = None) -> None:
        """Log a metric value."""
        metric_data = {
            "metric_name": metric_name,
            "value": value,
            "step": step,
            "timestamp": datetime.now().isoformat()
        }
        self.info(f"METRIC: {metric_name} = {value}", **metric_data)

    def log_config(self, config: Dict[str, Any]) -> None:
        """Log configuration parameters."""
        self.info("Configuration loaded", config=config)

    def log_detection(self, letter: str, handedness: str, frame_index: Optional[int] = None) -> None:
        """Log a detected letter."""
        location = f" (frame {frame_index})" if frame_index is not None else ""
        self.info(
            f"Letter detected: {letter} [{handedness} hand]{location}",
            letter=letter,
            handedness=handedness,
            frame_index=frame_index
        )

    def log_detection_stats(
        self,
        frames_processed: int,
        hand_frames: int,
        letter_frames: int,
        letter_counts: Dict[str, int]
    ) -> None:
        """Log detection statistics."""
        counts = ", ".join(f"{letter}={count}" for letter, count in sorted(letter_counts.items()))
        self.info(
            f"Detection stats: frames={frames_processed}, "
            f"hands={hand_frames}, "
            f"letters={letter_frames}"
            + (f" ({counts})" if counts else ""),
            frames_processed=frames_processed,
            hand_frames=hand_frames,
            letter_frames=letter_frames,
            letter_counts=letter_counts
        )


class JsonFileHandler(logging.Handler):
    """Custom handler for JSON formatted logs."""

    def __init__(self, filename: str):
        super().__init__()
        self.filename = filename

    def emit(self, record):
        """Emit a log record in JSON format."""
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno
        }

        # Add extra fields
        for key, value in record.__dict__.items():
            if key not in log_entry:
                log_entry[key] = value

        # Write to file
        with open(self.filename, 'a') as f:
            f.write(json.dumps(log_entry, default=str) + '\n')
