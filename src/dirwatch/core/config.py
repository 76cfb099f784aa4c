"""
Configuration management for dirwatch
"""

from pathlib import Path
from typing import Optional, Dict, Any
from dataclasses import dataclass

import tomli

from ..utils.logging_utils import LOG_LEVELS, get_logger

logger = get_logger('dirwatch.config')

DEFAULT_CONFIG_NAME = 'dirwatch.config.toml'


@dataclass
class Config:
    """Configuration class for dirwatch"""
    backend: str = 'auto'
    poll_interval: float = 2.0
    max_path_length: int = 0
    log_level: str = 'info'

    def __post_init__(self):
        if not self.poll_interval > 0:
            raise ValueError(f"poll_interval must be greater than 0, got {self.poll_interval}")
        if self.max_path_length < 0:
            raise ValueError(f"max_path_length must be 0 or more, got {self.max_path_length}")
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}, got {self.log_level!r}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Config':
        """Create Config instance from dictionary"""
        return cls(
            backend=str(data.get('backend', 'auto')).lower(),
            poll_interval=float(data.get('poll_interval', 2.0)),
            max_path_length=int(data.get('max_path_length', 0)),
            log_level=str(data.get('log_level', 'info')).lower()
        )


def load_config(config_path: str) -> Optional[Config]:
    """Load configuration from TOML file"""
    config_file = Path(config_path)
    if not config_file.exists():
        return None
    
    try:
        with open(config_file, 'rb') as f:
            data = tomli.load(f)
        
        # Handle both flat and nested config formats
        config_data = data.get('dirwatch', data)
        return Config.from_dict(config_data)
    
    except (OSError, tomli.TOMLDecodeError, TypeError, ValueError) as e:
        logger.error("Error loading config %s: %s", config_path, e)
        return None


def load_default_config() -> Config:
    """Load the default configuration from the package"""
    default_config_path = Path(__file__).parent.parent / 'default.config.toml'
    config = load_config(str(default_config_path))
    return config if config is not None else Config()
