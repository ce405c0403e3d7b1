"""
日志配置测试
"""

import logging
import shutil
import tempfile
from pathlib import Path

import pytest

from xliff_tools.core import TranslationDocument
from xliff_tools.core.reconciler import update_document
from xliff_tools.utils.logger import LOGGER_NAME, parse_level, setup_logger


class TestSetupLogger:

    def setup_method(self):
        self.temp_dir = Path(tempfile.mkdtemp())

    def teardown_method(self):
        for handler in list(logging.getLogger(LOGGER_NAME).handlers):
            handler.close()
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_library_records_reach_log_file(self):
        log_file = self.temp_dir / "xliff.log"
        log = setup_logger("WARNING", log_file=log_file)

        with log.timer("update"):
            update_document(TranslationDocument.new("de"), [], "Strings.resx")

        text = log_file.read_text(encoding="utf-8")
        assert "Starting: update" in text
        assert "xliff_tools.core.reconciler" in text
        assert "Strings.resx: 0 added, 0 updated, 0 removed" in text

    def test_handlers_replaced_on_reconfigure(self):
        setup_logger("INFO")
        setup_logger("DEBUG")
        assert len(logging.getLogger(LOGGER_NAME).handlers) == 1

    @pytest.mark.parametrize("value, expected", [
        ("debug", logging.DEBUG),
        ("INFO", logging.INFO),
        (logging.ERROR, logging.ERROR),
    ])
    def test_parse_level(self, value, expected):
        assert parse_level(value) == expected

    def test_parse_level_unknown(self):
        with pytest.raises(ValueError):
            parse_level("LOUD")
