import pytest
from structlog.testing import capture_logs

from bulkbridge.core.logging_config import logger, setup_logging


@pytest.fixture(autouse=True)
def _reset_level():
    yield
    setup_logging("INFO")


def test_level_filters_structlog_events():
    setup_logging("WARNING")
    with capture_logs() as logs:
        logger.info("part_uploaded")
        logger.bind(part_number=2).warning("part_upload_failed")

    assert [e["event"] for e in logs] == ["part_upload_failed"]
    assert logs[0]["log_level"] == "warning"
    assert logs[0]["part_number"] == 2
    assert logs[0]["service"] == "bulkbridge"


def test_debug_level_lets_everything_through():
    setup_logging("debug")
    with capture_logs() as logs:
        logger.debug("presign_started")
    assert [e["event"] for e in logs] == ["presign_started"]


def test_unknown_level_is_rejected():
    with pytest.raises(ValueError):
        setup_logging("LOUD")
