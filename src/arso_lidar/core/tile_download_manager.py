import argparse
import logging
import sys
from typing import Any, Callable, Dict, List, Optional

from arso_lidar.infrastructure.logging import LoggingManager
from arso_lidar.interfaces.tile_fetcher import ITileFetcher
from arso_lidar.models.download_config import DownloadConfig
from arso_lidar.models.tile_identifier import (
    AreaCode, Coordinate, CoordinateSystem, DownloadRequest, FileFormat, PointFormat, TileLink
)
from arso_lidar.services.config_service import ConfigService
from arso_lidar.services.http_tile_fetcher import HttpTileFetcher
from arso_lidar.services.tile_download_service import TileDownloadService
from arso_lidar.utils.file_utils import FileUtils
from arso_lidar.utils.grid_calculator import GridCalculator
from arso_lidar.utils.url_composer import UrlComposer
from arso_lidar.exceptions.lidar_downloader_exceptions import ParseError

__version__ = '0.1.0'

logger = logging.getLogger(__name__)


def _argument_type(parse: Callable[[str], Any], name: str) -> Callable[[str], Any]:
    """Adapt a model parser to argparse so its message reaches the usage error"""
    def convert(text: str) -> Any:
        try:
            return parse(text)
        except ParseError as e:
            raise argparse.ArgumentTypeError(str(e))
    convert.__name__ = name
    return convert


class TileDownloadManager:
    """Main manager class for LiDAR tile downloading operations"""

    def __init__(self, config: Optional[DownloadConfig] = None,
                 fetcher: Optional[ITileFetcher] = None):
        self.config_service = ConfigService()
        self.config = config
        self.fetcher = fetcher

    def build_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            prog='arso-lidar',
            description='Download LiDAR tiles from gis.arso.gov.si for a rectangle of grid cells.',
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog=(
                'Examples:\n\n'
                '1) One GKOT tile as ZLAS:\n'
                '   arso-lidar -p gkot -f zlas -a b14 -1 510_74 -2 510_74\n\n'
                '2) Two OTR tiles as LAZ in the D48GK grid:\n'
                '   arso-lidar -p otr -f laz -a c7 -s D48GK -1 100_200 -2 101_200\n\n'
                'Notes:\n'
                '- Corners are inclusive; the first corner must be lower-left of the second.\n'
                '- Tiles are saved as output/<x>_<y>.<point format> (gkot, otr or dmr1).'
            )
        )
        parser.add_argument('-p', '--point-format', required=True,
                            type=_argument_type(PointFormat.parse, 'point format'),
                            help='GKOT, OTR or DTM')
        parser.add_argument('-f', '--file-format', required=True,
                            type=_argument_type(FileFormat.parse, 'file format'),
                            help='ZLAS, LAZ or ASC')
        parser.add_argument('-a', '--area-code', required=True,
                            type=_argument_type(AreaCode.parse, 'area code'),
                            help='example: b14')
        parser.add_argument('-s', '--coordinate-system', default=CoordinateSystem.D96TM,
                            type=_argument_type(CoordinateSystem.parse, 'coordinate system'),
                            help='D96TM or D48GK (default: D96TM)')
        parser.add_argument('-1', '--first-coord', required=True, metavar='X_Y',
                            type=_argument_type(Coordinate.parse, 'coordinate'),
                            help='first (lower-left) coordinate x_y')
        parser.add_argument('-2', '--second-coord', required=True, metavar='X_Y',
                            type=_argument_type(Coordinate.parse, 'coordinate'),
                            help='second (upper-right) coordinate x_y')
        parser.add_argument('-c', '--config', help='Optional JSON configuration file')
        parser.add_argument('-v', '--verbose', action='count', default=0,
                            help='Log progress to stderr (-v info, -vv debug)')
        parser.add_argument('-V', '--version', action='version', version=f'%(prog)s {__version__}')
        return parser

    def parse_request(self, argv: Optional[List[str]] = None) -> argparse.Namespace:
        return self.build_parser().parse_args(argv)

    def build_links(self, request: DownloadRequest) -> List[TileLink]:
        """Enumerate the grid and print each tile URL as it is built"""
        composer = UrlComposer(self.config.base_url)
        links = []
        for tile in request.tiles():
            link = TileLink(tile=tile, url=composer.get_tile_url(tile))
            print(link.url)
            links.append(link)
        sys.stdout.flush()
        return links

    def download(self, request: DownloadRequest) -> Dict[str, Any]:
        """Download every tile of the request into the output directory"""
        if self.config is None:
            self.config = DownloadConfig()

        FileUtils.ensure_directory_exists(self.config.output_dir)

        if GridCalculator.is_empty_range(request.first, request.second):
            logger.warning("Corners %s and %s enclose no tiles; nothing to download",
                           request.first, request.second)
        else:
            logger.info("Area %s: %d tiles from %s to %s",
                        request.area_code, GridCalculator.calculate_tile_count(request.first, request.second),
                        request.first, request.second)

        links = self.build_links(request)

        if self.fetcher is not None:
            return self._download_links(self.fetcher, links)

        with HttpTileFetcher(pool_size=self.config.max_concurrent_requests,
                             timeout=self.config.timeout) as fetcher:
            return self._download_links(fetcher, links)

    def _download_links(self, fetcher: ITileFetcher, links: List[TileLink]) -> Dict[str, Any]:
        service = TileDownloadService(fetcher, max_workers=self.config.max_concurrent_requests)
        result = service.download_tiles(links, self.config.output_dir)
        logger.info("Downloaded %d of %d tiles (%d failed)",
                    result['downloaded'], result['total'], result['failed'])
        return result

    def run_from_command_line(self, argv: Optional[List[str]] = None) -> Dict[str, Any]:
        """Run tile download command-line interface"""
        args = self.parse_request(argv)

        if self.config is None:
            self.config = self.config_service.load_config(args.config)

        LoggingManager.setup_logging(self.config.to_dict(), args.verbose)

        request = DownloadRequest(
            point_format=args.point_format,
            file_format=args.file_format,
            area_code=args.area_code,
            coordinate_system=args.coordinate_system,
            first=args.first_coord,
            second=args.second_coord
        )
        return self.download(request)
