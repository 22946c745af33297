from arso_lidar.models.tile_identifier import Coordinate, PointFormat, TileIdentifier

DEFAULT_BASE_URL = "http://gis.arso.gov.si/lidar"


class UrlComposer:
    """Builds remote tile URLs and local tile filenames"""

    def __init__(self, base_url: str = DEFAULT_BASE_URL):
        self.base_url = base_url.rstrip('/')

    def get_tile_url(self, tile: TileIdentifier) -> str:
        """Generate tile URL for given identifier"""
        stem = tile.coordinate.render(tile.coordinate_system, tile.point_format)
        return (
            f"{self.base_url}/{tile.point_format.token}/{tile.area_code.url_token}/"
            f"{tile.coordinate_system.token}/{stem}.{tile.file_format.token}"
        )

    @staticmethod
    def get_output_filename(point_format: PointFormat, coordinate: Coordinate) -> str:
        # Local extension is the point format token, not the container format
        return f"{coordinate.x}_{coordinate.y}.{point_format.token}"
