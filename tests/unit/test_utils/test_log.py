"""Unit tests for pptgirl.utils.log module."""

import logging

from pptgirl.utils.log import LOG_FORMAT, configure_logging


class TestConfigureLogging:
    def teardown_method(self):
        logger = logging.getLogger("pptgirl")
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()
        logger.setLevel(logging.NOTSET)

    def test_installs_single_stream_handler(self):
        logger = configure_logging("debug")
        configure_logging("debug")

        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0], logging.StreamHandler)
        assert logger.level == logging.DEBUG
        assert logger.handlers[0].formatter._fmt == LOG_FORMAT

    def test_writes_to_file(self, tmp_path):
        log_file = tmp_path / "pptgirl.log"
        configure_logging(logging.INFO, log_file=str(log_file))

        logging.getLogger("pptgirl.context.compaction").info("compacted %s", "sess-1")
        logging.getLogger("pptgirl").handlers[0].flush()

        assert "compacted sess-1" in log_file.read_text()
