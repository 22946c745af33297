import json
import os
import sys
from pathlib import Path

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))
from arso_lidar.services.config_service import ConfigService
from arso_lidar.exceptions.lidar_downloader_exceptions import ConfigurationError, ValidationError


def write_config(tmp_path: Path, data) -> str:
    path = tmp_path / "config.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path.as_posix()


def test_defaults_without_path():
    config = ConfigService().load_config(None)
    assert config.output_dir == "output"
    assert config.max_concurrent_requests == 2
    assert config.timeout is None
    assert config.base_url == "http://gis.arso.gov.si/lidar"
    assert config.logging["level"] == "WARNING"


def test_file_overrides_defaults(tmp_path: Path):
    path = write_config(tmp_path, {
        "output_dir": "tiles",
        "timeout": 30,
        "logging": {"level": "DEBUG"},
    })

    config = ConfigService().load_config(path)

    assert config.output_dir == "tiles"
    assert config.timeout == 30
    assert config.max_concurrent_requests == 2
    assert config.logging == {"level": "DEBUG"}


def test_missing_file(tmp_path: Path):
    with pytest.raises(ConfigurationError, match="not found"):
        ConfigService().load_config((tmp_path / "nope.json").as_posix())


def test_invalid_json(tmp_path: Path):
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigurationError, match="Invalid JSON"):
        ConfigService().load_config(path.as_posix())


@pytest.mark.parametrize("data", [
    [],
    {"unknown_key": 1},
    {"max_concurrent_requests": 0},
    {"max_concurrent_requests": 3},
    {"max_concurrent_requests": True},
    {"timeout": -1},
    {"timeout": "10"},
    {"output_dir": ""},
    {"base_url": 5},
    {"logging": {"level": "LOUD"}},
    {"logging": "INFO"},
])
def test_validation_errors(tmp_path: Path, data):
    with pytest.raises(ValidationError):
        ConfigService().load_config(write_config(tmp_path, data))


def test_single_request_in_flight_is_allowed(tmp_path: Path):
    config = ConfigService().load_config(write_config(tmp_path, {"max_concurrent_requests": 1}))
    assert config.max_concurrent_requests == 1
