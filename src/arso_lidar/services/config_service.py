import json
import logging
import os
from typing import Dict, Any, Optional

from arso_lidar.interfaces.tile_fetcher import IConfigLoader
from arso_lidar.models.download_config import DownloadConfig, MAX_CONCURRENT_REQUESTS
from arso_lidar.exceptions.lidar_downloader_exceptions import ConfigurationError, ValidationError

logger = logging.getLogger(__name__)

KNOWN_KEYS = {'output_dir', 'max_concurrent_requests', 'timeout', 'base_url', 'logging'}
LOG_LEVELS = {'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'}


class ConfigService(IConfigLoader):
    """Service for loading and validating configuration"""

    def load_config(self, config_path: Optional[str] = None) -> DownloadConfig:
        """Load configuration from JSON file, or defaults when no path is given"""
        if config_path is None:
            return DownloadConfig()

        if not os.path.exists(config_path):
            raise ConfigurationError(f"Config file {config_path} not found!")

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in {config_path}: {e}")
        except OSError as e:
            raise ConfigurationError(f"Error loading config: {e}")

        self.validate_config(config)
        logger.debug("Loaded configuration from %s", config_path)
        return self._process_config(config)

    def validate_config(self, config: Dict[str, Any]) -> bool:
        """Validate configuration structure"""
        if not isinstance(config, dict):
            raise ValidationError("Configuration must be a JSON object")

        unknown = sorted(set(config) - KNOWN_KEYS)
        if unknown:
            raise ValidationError(f"Unknown configuration keys: {', '.join(unknown)}")

        if 'max_concurrent_requests' in config:
            value = config['max_concurrent_requests']
            if isinstance(value, bool) or not isinstance(value, int) or not 1 <= value <= MAX_CONCURRENT_REQUESTS:
                raise ValidationError(
                    f"max_concurrent_requests must be an integer from 1 to {MAX_CONCURRENT_REQUESTS}")

        if 'timeout' in config and config['timeout'] is not None:
            value = config['timeout']
            if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
                raise ValidationError("timeout must be null or a positive number")

        for key in ('output_dir', 'base_url'):
            if key in config and (not isinstance(config[key], str) or not config[key]):
                raise ValidationError(f"{key} must be a non-empty string")

        if 'logging' in config:
            logging_config = config['logging']
            if not isinstance(logging_config, dict):
                raise ValidationError("logging must be an object")
            level = logging_config.get('level', 'WARNING')
            if level not in LOG_LEVELS:
                raise ValidationError(f"Unknown logging level: {level}")

        return True

    def _process_config(self, config: Dict[str, Any]) -> DownloadConfig:
        """Merge the file contents over the defaults"""
        defaults = DownloadConfig()
        return DownloadConfig(
            output_dir=config.get('output_dir', defaults.output_dir),
            max_concurrent_requests=config.get('max_concurrent_requests', defaults.max_concurrent_requests),
            timeout=config.get('timeout', defaults.timeout),
            base_url=config.get('base_url', defaults.base_url),
            logging={**defaults.logging, **config.get('logging', {})}
        )
