import logging
import threading
from typing import Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from arso_lidar.interfaces.tile_fetcher import ITileFetcher
from arso_lidar.exceptions.lidar_downloader_exceptions import DownloadError

logger = logging.getLogger(__name__)

USER_AGENT = 'arso-lidar-downloader/0.1.0'


class HttpTileFetcher(ITileFetcher):
    """Fetches tile bodies over one shared HTTP session"""

    def __init__(self, pool_size: int = 2, timeout: Optional[float] = None):
        self.pool_size = pool_size
        self.timeout = timeout
        self._session: Optional[requests.Session] = None
        self._lock = threading.Lock()

    def create_session(self) -> requests.Session:
        """Create the session shared by every download"""
        session = requests.Session()

        # Failed tiles are reported, never retried
        retry_strategy = Retry(total=0, allowed_methods=["GET"])

        adapter = HTTPAdapter(
            max_retries=retry_strategy,
            pool_connections=self.pool_size,
            pool_maxsize=self.pool_size
        )

        session.mount("http://", adapter)
        session.mount("https://", adapter)
        session.headers['User-Agent'] = USER_AGENT

        return session

    @property
    def session(self) -> requests.Session:
        with self._lock:
            if self._session is None:
                self._session = self.create_session()
            return self._session

    def fetch(self, url: str) -> bytes:
        """Download a single tile body"""
        logger.debug("GET %s", url)
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
            return response.content
        except requests.RequestException as e:
            raise DownloadError(str(e)) from e

    def close(self) -> None:
        if self._session is not None:
            self._session.close()
            self._session = None

    def __enter__(self) -> 'HttpTileFetcher':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
