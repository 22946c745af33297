import os

from arso_lidar.models.tile_identifier import TileIdentifier
from arso_lidar.utils.url_composer import UrlComposer
from arso_lidar.exceptions.lidar_downloader_exceptions import OutputError


class FileUtils:
    """Utility class for file operations"""

    @staticmethod
    def ensure_directory_exists(directory_path: str) -> None:
        """Create directory (and parents) if it doesn't exist"""
        try:
            os.makedirs(directory_path, exist_ok=True)
        except OSError as e:
            raise OutputError(f"Failed to create output directory {directory_path}: {e}")

    @staticmethod
    def get_tile_path(output_dir: str, tile: TileIdentifier) -> str:
        """Generate tile file path"""
        return os.path.join(output_dir, UrlComposer.get_output_filename(tile.point_format, tile.coordinate))

    @staticmethod
    def write_tile(file_path: str, content: bytes) -> None:
        """Create (truncating) the tile file and write the whole body"""
        try:
            with open(file_path, 'wb') as f:
                f.write(content)
        except OSError as e:
            raise OutputError(f"Failed to write {file_path}: {e}")
