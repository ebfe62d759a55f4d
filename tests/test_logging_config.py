"""logging_config 单元测试"""

import logging
import sys

from taskdeck.logging_config import setup_logging


class TestSetupLogging:
    def test_handler_writes_to_stderr(self, monkeypatch):
        monkeypatch.delenv("TASKDECK_LOG_LEVEL", raising=False)
        setup_logging()
        (handler,) = logging.getLogger().handlers
        assert handler.stream is sys.stderr
        assert logging.getLogger().level == logging.WARNING

    def test_explicit_level_overrides_env(self, monkeypatch):
        monkeypatch.setenv("TASKDECK_LOG_LEVEL", "ERROR")
        setup_logging(level="debug")
        assert logging.getLogger().level == logging.DEBUG

    def test_noisy_libraries_capped_at_warning(self):
        setup_logging(level="DEBUG")
        assert logging.getLogger("httpx").level == logging.WARNING

    def test_unknown_level_falls_back_to_warning(self):
        setup_logging(level="chatty")
        assert logging.getLogger().level == logging.WARNING
