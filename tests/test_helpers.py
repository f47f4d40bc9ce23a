import json
from datetime import date, datetime

import pytest

from utils import app_config
from utils.app_config import EngineSettings, load_engine_settings
from utils.currency import format_currency, format_share, format_signed, parse_amount
from utils.date_helpers import add_months, add_years, format_display_date, parse_timestamp


@pytest.mark.parametrize("value, expected", [
    ("1,250.50", 1250.5),
    (" -40 ", -40.0),
    (12, 12.0),
    ("0", 0.0),
    ("", None),
    (None, None),
    ("abc", None),
    ("nan", None),
    ("-inf", None),
    (True, None),
])
def test_parse_amount(value, expected):
    assert parse_amount(value) == expected


def test_currency_formatting():
    assert format_currency(1234.5) == "€1,234.50"
    assert format_currency(-50) == "-€50.00"
    assert format_signed(-50) == "-€50.00"
    assert format_signed(0) == "+€0.00"
    assert format_share(33.333) == "33.3%"


@pytest.mark.parametrize("value, expected", [
    ("2024-06-15", datetime(2024, 6, 15)),
    ("2024-06-15 08:30:00.125", datetime(2024, 6, 15, 8, 30, 0, 125000)),
    ("2024-06-15T08:30:00Z", datetime(2024, 6, 15, 8, 30)),
    ("2024-06-15T08:30:00-04:00", datetime(2024, 6, 15, 12, 30)),
    (date(2024, 6, 15), datetime(2024, 6, 15)),
    ("not a date", None),
    ("", None),
    (None, None),
])
def test_parse_timestamp(value, expected):
    assert parse_timestamp(value) == expected


def test_calendar_arithmetic():
    assert add_months(date(2023, 11, 30), 3) == date(2024, 2, 29)
    assert add_months(datetime(2024, 12, 31, 6), 1) == datetime(2025, 1, 31, 6)
    assert add_years(date(2024, 2, 29), 4) == date(2028, 2, 29)
    assert add_years(date(2024, 2, 29), 1) == date(2025, 2, 28)


def test_display_dates():
    assert format_display_date(datetime(2024, 6, 5)) == "Jun 5, 2024"
    assert format_display_date(datetime(2024, 6, 5), "YYYY-MM-DD") == "2024-06-05"
    assert format_display_date(None) == ""


def test_engine_settings_defaults():
    assert load_engine_settings({}) == EngineSettings(60, 6, 12)


def test_engine_settings_overrides_and_invalid_values():
    settings = load_engine_settings({
        "recurrence_max_steps": 120,
        "projection_upcoming_limit": 0,
        "ledger_display_limit": "20",
    })
    assert settings.recurrence_max_steps == 120
    assert settings.projection_upcoming_limit == 6
    assert settings.ledger_display_limit == 12


def test_config_file_round_trip(tmp_path, monkeypatch):
    monkeypatch.setattr(app_config, "CONFIG_DIR", tmp_path)
    monkeypatch.setattr(app_config, "CONFIG_FILE", tmp_path / "config.json")

    assert app_config.load_config() == {}
    assert app_config.get_user_id() == "local"

    app_config.save_config({"user_id": "abc", "recurrence_max_steps": 90})
    assert app_config.get_user_id() == "abc"
    assert app_config.load_engine_settings().recurrence_max_steps == 90


def test_corrupt_config_is_ignored(tmp_path, monkeypatch):
    config_file = tmp_path / "config.json"
    config_file.write_text("{not json", encoding="utf-8")
    monkeypatch.setattr(app_config, "CONFIG_FILE", config_file)
    assert app_config.load_config() == {}

    config_file.write_text(json.dumps(["a", "list"]), encoding="utf-8")
    assert app_config.load_config() == {}
