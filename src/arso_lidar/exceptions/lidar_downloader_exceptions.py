class LidarDownloaderException(Exception):
    """Base exception for the LiDAR downloader"""
    pass


class ParseError(LidarDownloaderException, ValueError):
    """Malformed command-line token (format, area code, coordinate)"""
    pass


class ConfigurationError(LidarDownloaderException):
    """Configuration related errors"""
    pass


class ValidationError(ConfigurationError):
    """Validation related errors"""
    pass


class DownloadError(LidarDownloaderException):
    """Download related errors for a single tile"""
    pass


class OutputError(LidarDownloaderException):
    """Output directory or tile file could not be written"""
    pass
