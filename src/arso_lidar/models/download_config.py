from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from arso_lidar.utils.url_composer import DEFAULT_BASE_URL

# The ARSO server is never asked for more than two tiles at once
MAX_CONCURRENT_REQUESTS = 2


@dataclass
class DownloadConfig:
    """Data model for download configuration"""
    output_dir: str = 'output'
    max_concurrent_requests: int = MAX_CONCURRENT_REQUESTS
    timeout: Optional[float] = None  # seconds, None waits forever
    base_url: str = DEFAULT_BASE_URL
    logging: Dict[str, Any] = field(default_factory=lambda: {'level': 'WARNING'})

    def to_dict(self) -> Dict[str, Any]:
        return {
            'output_dir': self.output_dir,
            'max_concurrent_requests': self.max_concurrent_requests,
            'timeout': self.timeout,
            'base_url': self.base_url,
            'logging': dict(self.logging),
        }
