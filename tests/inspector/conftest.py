import logging
import textwrap
import zipfile

import pytest

from report_helpers import REPORT_LOGGER


@pytest.fixture
def report_logger(caplog):
    """A propagating report logger whose records land in caplog."""
    caplog.set_level(logging.DEBUG)
    return logging.getLogger(REPORT_LOGGER)


@pytest.fixture
def write_module(tmp_path):
    """Write dedented Python source to a file under tmp_path and return its path."""
    def _write(relative_path: str, source: str = ""):
        path = tmp_path / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(source))
        return path
    return _write


@pytest.fixture
def write_archive(tmp_path):
    """Build a zip archive from a {member: source} mapping and return its path."""
    def _write(name: str, members: dict):
        path = tmp_path / name
        with zipfile.ZipFile(path, "w") as archive:
            for member, source in members.items():
                archive.writestr(member, textwrap.dedent(source))
        return path
    return _write


