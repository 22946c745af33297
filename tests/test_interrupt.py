import os
import signal
import subprocess
import sys
import textwrap
import time
from pathlib import Path

import pytest

SRC_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'src'))

RUNNER = textwrap.dedent('''
    import os
    import sys
    import time
    sys.path.insert(0, {src!r})

    import lidar_downloader
    from arso_lidar.core.tile_download_manager import TileDownloadManager
    from arso_lidar.interfaces.tile_fetcher import ITileFetcher


    class HangingFetcher(ITileFetcher):
        """Answers the listed URLs, blocks on every other one"""

        def __init__(self, instant):
            self.instant = set(instant)

        def fetch(self, url):
            if url in self.instant:
                return b"B"
            open("fetch-started", "w").close()
            time.sleep(60)
            return b"late"


    instant = [u for u in sys.argv[1].split(",") if u]
    lidar_downloader.main(sys.argv[2:], manager=TileDownloadManager(fetcher=HangingFetcher(instant)))
''')

pytestmark = pytest.mark.skipif(sys.platform == "win32", reason="POSIX signals only")


def start_runner(workdir: Path, instant, argv) -> subprocess.Popen:
    script = workdir / "runner.py"
    script.write_text(RUNNER.format(src=SRC_DIR), encoding="utf-8")
    return subprocess.Popen(
        [sys.executable, script.as_posix(), ",".join(instant)] + argv,
        cwd=workdir.as_posix(),
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE
    )


def wait_for(path: Path, timeout: float = 10.0) -> None:
    deadline = time.monotonic() + timeout
    while not path.exists():
        if time.monotonic() > deadline:
            raise AssertionError(f"{path} never appeared")
        time.sleep(0.05)


def finish(proc: subprocess.Popen, timeout: float):
    try:
        return proc.communicate(timeout=timeout)
    except subprocess.TimeoutExpired:
        proc.kill()
        proc.communicate()
        raise AssertionError("process kept running while a fetch was blocked")


def test_ctrl_c_exits_while_fetch_is_blocked(tmp_path: Path):
    proc = start_runner(tmp_path, [], ["-p", "gkot", "-f", "zlas", "-a", "b14", "-1", "1_1", "-2", "1_3"])
    wait_for(tmp_path / "fetch-started")

    started = time.monotonic()
    proc.send_signal(signal.SIGINT)
    _, err = finish(proc, timeout=5)

    assert time.monotonic() - started < 5
    assert proc.returncode == 1
    assert b"interrupted" in err


def test_write_error_exits_while_other_fetch_is_blocked(tmp_path: Path):
    (tmp_path / "output" / "1_1.gkot").mkdir(parents=True)
    written = "http://gis.arso.gov.si/lidar/gkot/b_14/D96TM/TM_1_1.zlas"

    proc = start_runner(tmp_path, [written], ["-p", "gkot", "-f", "zlas", "-a", "b14", "-1", "1_1", "-2", "1_2"])
    out, err = finish(proc, timeout=10)

    assert proc.returncode == 1
    assert written.encode() in out
    assert b"Failed to write" in err
