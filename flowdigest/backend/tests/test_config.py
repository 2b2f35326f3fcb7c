"""
tests/test_config.py

Tests for config.py — Pydantic Settings validation and defaults.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from flowdigest.backend.config import Settings


class TestSettingsDefaults:

    def test_default_input_dir(self):
        s = Settings(_env_file=None)
        assert s.INPUT_DIR == "./syslog"

    def test_default_output_dir(self):
        s = Settings(_env_file=None)
        assert s.OUTPUT_DIR == "./output"

    def test_default_output_prefix(self):
        s = Settings(_env_file=None)
        assert s.OUTPUT_PREFIX == "FDB_DP_v11"

    def test_default_json_indent(self):
        s = Settings(_env_file=None)
        assert s.JSON_INDENT == 2

    def test_rejected_line_logging_off_by_default(self):
        s = Settings(_env_file=None)
        assert s.LOG_REJECTED_LINES is False

    def test_default_log_level(self):
        s = Settings(_env_file=None)
        assert s.LOG_LEVEL == "INFO"


class TestSettingsOverrides:

    def test_env_override(self, monkeypatch, tmp_path):
        monkeypatch.setenv("INPUT_DIR", str(tmp_path / "in"))
        monkeypatch.setenv("OUTPUT_DIR", str(tmp_path / "out"))
        monkeypatch.setenv("LOG_REJECTED_LINES", "true")
        s = Settings(_env_file=None)
        assert s.INPUT_DIR == str(tmp_path / "in")
        assert s.OUTPUT_DIR == str(tmp_path / "out")
        assert s.LOG_REJECTED_LINES is True

    def test_env_names_case_insensitive(self, monkeypatch):
        monkeypatch.setenv("output_prefix", "FLOWS")
        s = Settings(_env_file=None)
        assert s.OUTPUT_PREFIX == "FLOWS"

    def test_dotenv_file(self, tmp_path):
        env = tmp_path / ".env"
        env.write_text("INPUT_DIR=/data/fw\nJSON_INDENT=4\n")
        s = Settings(_env_file=str(env))
        assert s.INPUT_DIR == "/data/fw"
        assert s.JSON_INDENT == 4

    def test_log_level_normalised(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", " debug ")
        s = Settings(_env_file=None)
        assert s.LOG_LEVEL == "DEBUG"


class TestSettingsValidation:

    def test_unknown_log_level_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, LOG_LEVEL="LOUD")

    def test_negative_indent_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, JSON_INDENT=-1)
