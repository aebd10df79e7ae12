"""
Utility modules for the letter detection system.
"""

from .config import ConfigManager
from .logger import Logger
from .monitoring import PerformanceMonitor

__all__ = [
    "ConfigManager",
    "Logger",
    "PerformanceMonitor",
]
