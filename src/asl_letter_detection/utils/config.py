"""
Configuration management utilities.
"""

import copy
import yaml
from pathlib import Path
from typing import Dict, Any
from omegaconf import OmegaConf


# Bundled configuration files
PACKAGE_CONFIG_DIR = Path(__file__).resolve().parent.parent / "config"

DEFAULT_CONFIGS: Dict[str, Dict[str, Any]] = {
    "inference": {
        "mediapipe": {
            "model_path": "models/hand_landmarker.task",
            "running_mode": "video",
            "num_hands": 2,
            "min_hand_detection_confidence": 0.5,
            "min_hand_presence_confidence": 0.5,
            "min_tracking_confidence": 0.5
        },
        "camera": {
            "device_id": 0,
            "width": 640,
            "height": 480,
            "fps": 30
        },
        "logging": {
            "level": "INFO",
            "log_dir": "logs",
            "console_output": True,
            "file_output": False,
            "json_output": False
        },
        "monitoring": {
            "window_size": 100,
            "report_interval": 300
        }
    }
}


class ConfigManager:
    """Manages configuration loading and validation."""

    def __init__(self, config_dir: str = str(PACKAGE_CONFIG_DIR)):
        """
        Initialize the configuration manager.

        Args:
            config_dir: Directory containing configuration files
        """
        self.config_dir = Path(config_dir)
        self._configs = {}

    def load_config(self, config_name: str) -> Dict[str, Any]:
        """
        Load a configuration file.

        Args:
            config_name: Name of the configuration file (without .yaml extension)

        Returns:
            Configuration dictionary

        Raises:
            FileNotFoundError: If configuration file doesn't exist
            yaml.YAMLError: If configuration file is invalid
        """
        return self.load_file(self.config_dir / f"{config_name}.yaml")

    def load_file(self, config_path: str) -> Dict[str, Any]:
        """
        Load a configuration from an explicit file path.

        The configuration is cached under the file stem.

        Args:
            config_path: Path to a .yaml/.yml file

        Returns:
            Configuration dictionary
        """
        config_path = Path(config_path)

        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        try:
            with open(config_path, 'r') as f:
                config = yaml.safe_load(f) or {}

            # Use OmegaConf for advanced configuration features
            config = OmegaConf.create(config)
            self._configs[config_path.stem] = config

            return config

        except yaml.YAMLError as e:
            raise yaml.YAMLError(f"Invalid YAML in {config_path}: {e}")

    def get_config(self, config_name: str) -> Dict[str, Any]:
        """
        Get a previously loaded configuration.

        Args:
            config_name: Name of the configuration

        Returns:
            Configuration dictionary

        Raises:
            KeyError: If configuration hasn't been loaded
        """
        if config_name not in self._configs:
            raise KeyError(f"Configuration '{config_name}' not loaded. Call load_config() first.")

        return self._configs[config_name]

    def save_config(self, config: Dict[str, Any], config_name: str) -> None:
        """
        Save a configuration to file.

        Args:
            config: Configuration dictionary
            config_name: Name for the configuration file
        """
        self.config_dir.mkdir(parents=True, exist_ok=True)
        config_path = self.config_dir / f"{config_name}.yaml"

        if OmegaConf.is_config(config):
            config = OmegaConf.to_container(config, resolve=True)

        with open(config_path, 'w') as f:
            yaml.dump(config, f, default_flow_style=False, indent=2)

    def merge_configs(self, base_config: str, override_config: str) -> Dict[str, Any]:
        """
        Merge two configurations with override taking precedence.

        Args:
            base_config: Base configuration name
            override_config: Override configuration name

        Returns:
            Merged configuration dictionary
        """
        base = self.get_config(base_config)
        override = self.get_config(override_config)

        # Use OmegaConf merge
        merged = OmegaConf.merge(base, override)
        return merged

    def validate_config(self, config: Dict[str, Any], schema: Dict[str, Any]) -> bool:
        """
        Validate configuration against a schema.

        Only key presence is checked, recursing into nested sections.

        Args:
            config: Configuration to validate
            schema: Schema definition

        Returns:
            True if valid, False otherwise
        """
        for key, value in schema.items():
            if key not in config:
                return False

            if isinstance(value, dict):
                section = config[key]
                if not (isinstance(section, dict) or OmegaConf.is_dict(section)):
                    return False
                if not self.validate_config(section, value):
                    return False

        return True

    def get_default_config(self, config_type: str) -> Dict[str, Any]:
        """
        Get default configuration for a specific type.

        Args:
            config_type: Type of configuration (inference)

        Returns:
            Default configuration wrapped in OmegaConf, empty if unknown
        """
        return OmegaConf.create(copy.deepcopy(DEFAULT_CONFIGS.get(config_type, {})))

    def load_with_defaults(self, config_name: str, config_type: str = "inference") -> Dict[str, Any]:
        """
        Load a configuration and fill missing keys from the defaults.

        Args:
            config_name: Name of the configuration file
            config_type: Default configuration to merge under it

        Returns:
            Merged configuration
        """
        loaded = self.load_config(config_name)
        merged = OmegaConf.merge(self.get_default_config(config_type), loaded)
        self._configs[config_name] = merged
        return merged
