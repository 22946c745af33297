"""Logging configuration"""
import logging
import sys
from typing import Dict, Any

LOG_FORMAT = '%(asctime)s %(levelname)-8s %(name)s: %(message)s'
QUIET_LOGGERS = ('urllib3', 'requests')
VERBOSITY_LEVELS = {1: logging.INFO, 2: logging.DEBUG}


class LoggingManager:
    """Sets up log records for the downloader.

    Records always go to stderr: stdout is reserved for the list of tile URLs.
    """

    @staticmethod
    def resolve_level(config: Dict[str, Any], verbosity: int = 0) -> int:
        """Level from ``-v`` flags if given, otherwise from the config's logging section"""
        if verbosity > 0:
            return VERBOSITY_LEVELS[min(verbosity, max(VERBOSITY_LEVELS))]
        name = config.get('logging', {}).get('level', 'WARNING')
        return logging.getLevelName(name.upper())

    @staticmethod
    def setup_logging(config: Dict[str, Any], verbosity: int = 0) -> int:
        level = LoggingManager.resolve_level(config, verbosity)
        logging.basicConfig(
            level=level,
            format=config.get('logging', {}).get('format', LOG_FORMAT),
            stream=sys.stderr
        )

        # Connection pool chatter stays hidden unless debugging
        for name in QUIET_LOGGERS:
            logging.getLogger(name).setLevel(logging.DEBUG if level <= logging.DEBUG else logging.WARNING)
        return level
