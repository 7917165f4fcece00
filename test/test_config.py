import sys

import pytest
from loguru import logger

from webstore import config


@pytest.fixture
def restore_logger():
    yield
    logger.remove()
    logger.add(sys.stderr)


def test_setup_logging_adds_file_sink(tmp_path, monkeypatch, restore_logger):
    monkeypatch.setattr(config, "LOG_DIR", str(tmp_path))

    config.setup_logging("reports")
    logger.info("report run started")

    log_files = list((tmp_path / "reports").glob("*.log"))
    assert len(log_files) == 1
    assert "report run started" in log_files[0].read_text()


def test_setup_logging_without_log_dir(tmp_path, monkeypatch, restore_logger):
    monkeypatch.setattr(config, "LOG_DIR", "")

    config.setup_logging("reports")
    logger.info("stderr only")

    assert not (tmp_path / "reports").exists()


@pytest.mark.parametrize("raw, expected", [
    ("true", True),
    ("1", True),
    ("Yes", True),
    ("false", False),
    ("", False),
])
def test_get_bool(monkeypatch, raw, expected):
    monkeypatch.setenv("WEBSTORE_FLAG", raw)

    assert config._get_bool("WEBSTORE_FLAG") is expected
