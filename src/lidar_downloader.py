#!/usr/bin/env python3
"""
ARSO LiDAR Downloader - Main Entry Point
Bulk download of LiDAR tiles from gis.arso.gov.si
"""

import sys
import os
import logging

# Add src directory to Python path
current_dir = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, current_dir)

from arso_lidar.core.tile_download_manager import TileDownloadManager
from arso_lidar.exceptions.lidar_downloader_exceptions import LidarDownloaderException, OutputError


def _abort(message):
    """Exit at once; fetch threads that are still blocked are not joined"""
    print(message, file=sys.stderr)
    sys.stdout.flush()
    sys.stderr.flush()
    os._exit(1)


def main(argv=None, manager=None):
    """Main entry point for the LiDAR downloader application"""
    logger = logging.getLogger(__name__)
    try:
        if manager is None:
            manager = TileDownloadManager()
        manager.run_from_command_line(argv)
        logger.info("Finished")

    except KeyboardInterrupt:
        _abort("\nDownload interrupted by user.")
    except OutputError as e:
        _abort(f"\nError: {e}")
    except LidarDownloaderException as e:
        print(f"\nError: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
