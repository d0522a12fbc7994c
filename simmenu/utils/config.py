# simmenu/utils/config.py

"""
Configuration management for SimMenu
"""
import json
import yaml
from pathlib import Path
from typing import Dict, Any, Optional, Union
from dataclasses import dataclass, field, asdict
import logging

logger = logging.getLogger(__name__)


DEFAULT_DEVICE_ROOT = Path.home() / "Library" / "Developer" / "CoreSimulator" / "Devices"


@dataclass
class PathConfig:
    """Path configuration"""
    device_root: Path = DEFAULT_DEVICE_ROOT

    def __post_init__(self):
        # Convert strings to Path objects if needed
        if isinstance(self.device_root, str):
            self.device_root = Path(self.device_root).expanduser()


@dataclass
class WatchdogConfig:
    """Directory watching configuration"""
    debounce_time: float = 1.0  # seconds
    use_polling: bool = False
    poll_interval: float = 1.0  # seconds


@dataclass
class Config:
    """Main configuration class"""
    paths: PathConfig = field(default_factory=PathConfig)
    watchdog: WatchdogConfig = field(default_factory=WatchdogConfig)

    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = None
    log_format: str = "text"  # text, json, or color

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary"""
        def serialize(obj):
            if isinstance(obj, Path):
                return str(obj)
            elif isinstance(obj, dict):
                return {k: serialize(v) for k, v in obj.items()}
            return obj

        return serialize(asdict(self))

    def save(self, path: Union[str, Path]):
        """Save config to file"""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        if path.suffix.lower() in ['.yaml', '.yml']:
            with open(path, 'w', encoding='utf-8') as f:
                yaml.dump(self.to_dict(), f, default_flow_style=False)
        else:  # default to JSON
            with open(path, 'w', encoding='utf-8') as f:
                json.dump(self.to_dict(), f, indent=2, default=str)

        logger.info(f"Configuration saved to {path}")

    def update_from_dict(self, data: Dict[str, Any]):
        """
        Update config from dictionary

        Nested sections ("paths", "watchdog") may be given either as
        sub-dictionaries or as flat keys.
        """
        sections = {'paths': self.paths, 'watchdog': self.watchdog}

        for key, value in data.items():
            if key in sections and isinstance(value, dict):
                section = sections[key]
                for sub_key, sub_value in value.items():
                    if hasattr(section, sub_key):
                        setattr(section, sub_key, sub_value)
                    else:
                        logger.warning(f"Unknown config key: {key}.{sub_key}")
            elif hasattr(self, key) and key not in sections:
                setattr(self, key, value)
            elif hasattr(self.paths, key):
                setattr(self.paths, key, value)
            elif hasattr(self.watchdog, key):
                setattr(self.watchdog, key, value)
            else:
                logger.warning(f"Unknown config key: {key}")

        # Re-normalize path values
        self.paths.__post_init__()


def get_default_config_path() -> Path:
    """Get default configuration path"""
    return Path.home() / ".config" / "simmenu" / "config.yaml"


def load_config(path: Union[str, Path] = None) -> Config:
    """
    Load configuration from file or create default
    """
    config_paths = []

    if path:
        config_paths.append(Path(path))

    config_paths.extend([
        Path("config.yaml"),
        get_default_config_path(),
    ])

    for config_path in config_paths:
        if not config_path.exists():
            continue

        try:
            logger.info(f"Loading configuration from {config_path}")

            with open(config_path, 'r', encoding='utf-8') as f:
                if config_path.suffix.lower() in ['.yaml', '.yml']:
                    data = yaml.safe_load(f)
                else:  # JSON
                    data = json.load(f)

            config = Config()
            if data:
                config.update_from_dict(data)

            logger.info("Configuration loaded successfully")
            return config

        except (OSError, ValueError, yaml.YAMLError) as e:
            logger.error(f"Error loading configuration from {config_path}: {e}")

    logger.info("No configuration file found, using defaults")
    return Config()

