"""Unit tests for the config module."""

import logging

import pytest

from fused_reader import config


class TestLogLevel:
    @pytest.mark.parametrize(
        "name, expected",
        [("debug", logging.DEBUG), ("INFO", logging.INFO), (" warning ", logging.WARNING)],
    )
    def test_known_names(self, name, expected):
        assert config.log_level(name) == expected

    def test_default_uses_configured_level(self, monkeypatch):
        monkeypatch.setattr(config, "LOG_LEVEL", "ERROR")
        assert config.log_level() == logging.ERROR

    def test_unknown_name(self):
        with pytest.raises(ValueError) as exc_info:
            config.log_level("chatty")
        assert "CHATTY" in str(exc_info.value)


def test_defaults_are_strings():
    assert isinstance(config.ENCODING, str)
    assert config.DEFAULT_DELIMITERS
