import logging
import sys
from typing import Dict, Any, Iterable
from concurrent.futures import ThreadPoolExecutor, as_completed

from arso_lidar.interfaces.tile_fetcher import ITileDownloader, ITileFetcher
from arso_lidar.models.download_config import MAX_CONCURRENT_REQUESTS
from arso_lidar.models.tile_identifier import TileLink
from arso_lidar.utils.file_utils import FileUtils
from arso_lidar.exceptions.lidar_downloader_exceptions import DownloadError

logger = logging.getLogger(__name__)


class TileDownloadService(ITileDownloader):
    """Service for downloading LiDAR tiles with a bounded number of requests in flight"""

    def __init__(self, fetcher: ITileFetcher, max_workers: int = MAX_CONCURRENT_REQUESTS):
        if not 1 <= max_workers <= MAX_CONCURRENT_REQUESTS:
            raise ValueError(f"max_workers must be between 1 and {MAX_CONCURRENT_REQUESTS}")
        self.fetcher = fetcher
        self.max_workers = max_workers

    def download_tiles(self, links: Iterable[TileLink], output_dir: str) -> Dict[str, Any]:
        """Fetch every link and write each body to its own tile file.

        Fetches run on at most ``max_workers`` threads; pending links wait in
        the executor's FIFO queue. Results are handled here, one at a time, in
        completion order. Each future is keyed to its link, so a body is
        always written to the file of the tile it was requested for.

        A failed fetch is reported on stderr and skipped. A failed write (or
        an interrupt) cancels the links not yet started and propagates at
        once, without waiting for requests still in flight.
        """
        links = list(links)
        results = {
            'total': len(links),
            'downloaded': 0,
            'failed': 0,
            'errors': []
        }

        if not links:
            return results

        logger.info("Downloading %d tiles with %d workers", len(links), self.max_workers)

        executor = ThreadPoolExecutor(max_workers=self.max_workers)
        try:
            futures = {executor.submit(self.fetcher.fetch, link.url): link for link in links}

            for future in as_completed(futures):
                link = futures[future]
                try:
                    content = future.result()
                except DownloadError as e:
                    print(f"Failed to download {link.url}: {e}", file=sys.stderr)
                    results['failed'] += 1
                    results['errors'].append(f"{link.url}: {e}")
                    continue

                tile_path = FileUtils.get_tile_path(output_dir, link.tile)
                FileUtils.write_tile(tile_path, content)
                results['downloaded'] += 1
                logger.debug("Wrote %d bytes to %s", len(content), tile_path)
        except BaseException:
            # Leave hung requests behind; the caller exits without joining them
            executor.shutdown(wait=False, cancel_futures=True)
            raise

        executor.shutdown(wait=True)

        return results
