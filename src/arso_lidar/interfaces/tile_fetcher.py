from abc import ABC, abstractmethod
from typing import Dict, Any, Iterable

from arso_lidar.models.tile_identifier import TileLink


class ITileFetcher(ABC):
    """Interface for fetching one remote tile body"""

    @abstractmethod
    def fetch(self, url: str) -> bytes:
        """Return the full response body or raise DownloadError"""
        pass


class ITileDownloader(ABC):
    """Interface for tile downloader implementations"""

    @abstractmethod
    def download_tiles(self, links: Iterable[TileLink], output_dir: str) -> Dict[str, Any]:
        """Download multiple tiles"""
        pass


class IConfigLoader(ABC):
    """Interface for configuration loading"""

    @abstractmethod
    def load_config(self, config_path: str) -> Any:
        """Load configuration from file"""
        pass

    @abstractmethod
    def validate_config(self, config: Dict[str, Any]) -> bool:
        """Validate configuration"""
        pass
