import logging
from unittest.mock import patch

from releasekit.utils.logger import get_log_level_from_str
from releasekit.utils.logger import setup_logger


class TestSetupLogger:
    """Tests for setup_logger()."""

    def test_does_not_propagate_by_default(self) -> None:
        with patch("releasekit.utils.logger.LOG_PROPAGATE", False):
            adapter = setup_logger("releasekit.tests.no_propagate")

        assert adapter.logger.propagate is False
        assert len(adapter.logger.handlers) == 1

    def test_propagates_when_configured(self) -> None:
        with patch("releasekit.utils.logger.LOG_PROPAGATE", True):
            adapter = setup_logger("releasekit.tests.propagate")

        assert adapter.logger.propagate is True

    def test_handler_added_once(self) -> None:
        first = setup_logger("releasekit.tests.repeat")
        second = setup_logger("releasekit.tests.repeat")

        assert first.logger is second.logger
        assert len(second.logger.handlers) == 1

    def test_namespace_prefix(self) -> None:
        adapter = setup_logger(
            "releasekit.tests.namespace", extra={"namespace": "my-app"}
        )
        msg, _ = adapter.process("checked", {})
        assert msg == "[my-app] checked"

    def test_log_level_from_str(self) -> None:
        assert get_log_level_from_str("debug") == logging.DEBUG
        assert get_log_level_from_str("unknown") == logging.INFO
