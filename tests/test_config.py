"""
Tests for configuration loading.
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from sessionfinder.config import AppConfig, BookingConfig, DataSourceConfig


def test_defaults():
    config = AppConfig()

    assert config.timezone == "Africa/Johannesburg"
    assert config.locale == "en"
    assert config.log_level == "WARNING"
    assert config.data_source.base_url == ""
    assert config.mock_data_file is None


def test_known_locale_is_accepted():
    assert AppConfig(locale="fr").locale == "fr"


def test_load_from_yaml(tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        "timezone: Europe/London\n"
        "log_level: debug\n"
        "data_source:\n"
        "  base_url: https://api.example.com\n"
        "  timeout_seconds: 10\n"
        "booking:\n"
        "  endpoint: https://api.example.com/bookings\n"
        "mock_data_file: offerings.json\n",
        encoding="utf-8",
    )

    config = AppConfig.load_from_yaml(config_path)

    assert config.timezone == "Europe/London"
    assert config.log_level == "DEBUG"
    assert config.data_source.timeout_seconds == 10
    assert config.booking.endpoint == "https://api.example.com/bookings"
    assert config.mock_data_file == tmp_path / "offerings.json"


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        AppConfig.load_from_yaml(tmp_path / "missing.yaml")


def test_invalid_yaml(tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("timezone: [unclosed\n", encoding="utf-8")

    with pytest.raises(ValueError, match="Invalid YAML"):
        AppConfig.load_from_yaml(config_path)


def test_non_mapping_root(tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ValueError, match="mapping"):
        AppConfig.load_from_yaml(config_path)


def test_empty_file_uses_defaults(tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("", encoding="utf-8")

    assert AppConfig.load_from_yaml(config_path) == AppConfig()


def test_validation_errors():
    with pytest.raises(ValidationError):
        AppConfig(timezone="Mars/Olympus_Mons")

    with pytest.raises(ValidationError):
        AppConfig(log_level="LOUD")

    with pytest.raises(ValidationError, match="Unknown locale"):
        AppConfig(locale="klingon")

    with pytest.raises(ValidationError):
        DataSourceConfig(base_url="ftp://example.com")

    with pytest.raises(ValidationError):
        BookingConfig(timeout_seconds=0)


def test_load_or_default_without_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("sessionfinder.config.get_default_config_path", lambda: Path(tmp_path / "config.yaml"))

    assert AppConfig.load_or_default(None) == AppConfig()
