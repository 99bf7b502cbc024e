# tests/test_configuration.py
"""
Tests for loading and validating the wage/bonus configuration.
"""

import datetime
import json
from pathlib import Path

import pytest

from shiftpay.core.errors import (
    ConfigurationError,
    DegradedRuleWarning,
    InvalidPeriodConfiguration,
    InvalidTimeFormat,
)
from shiftpay.core.models import CustomPeriod, MonthPeriod
from shiftpay.core.storage import (
    StorageError,
    clear_configuration_cache,
    get_wage_configuration,
    load_wage_configuration,
    parse_wage_configuration,
    save_wage_configuration,
)

PROJECT_ROOT = Path(__file__).parent.parent


class TestParseWageConfiguration:
    def test_valid_configuration(self, wage_config):
        assert wage_config.base_rate_per_hour == 120.0
        assert wage_config.period == CustomPeriod(start_day=15, end_day=14)
        assert len(wage_config.general_bonuses) == 2
        assert wage_config.weekday_bonuses[0].weekdays == frozenset({6})

    def test_24_00_end(self, wage_config):
        rule = wage_config.general_bonuses[0]

        assert rule.end_time == datetime.time.max
        start, end = rule.interval_on(datetime.date(2026, 3, 2))
        assert start == datetime.datetime(2026, 3, 2, 18, 0)
        assert end == datetime.datetime(2026, 3, 3, 0, 0)

    def test_original_key_names(self):
        data = {
            "base_rate": 100.0,
            "period": "Month",
            "general_time_periods": [{"bonus_pr_hour": 10.0, "start": "18:00", "end": "24:00"}],
            "day_of_week_rates": [{"bonus_pr_hour": 5.0, "start": "00:00", "end": "24:00", "days": ["lørdag"]}],
        }

        config = parse_wage_configuration(data)

        assert config.base_rate_per_hour == 100.0
        assert config.period == MonthPeriod()
        assert config.general_bonuses[0].rate_per_hour == 10.0
        assert config.weekday_bonuses[0].weekdays == frozenset({5})

    def test_custom_period_without_kind(self, wage_config_data):
        wage_config_data["period"] = {"start_day": 21, "end_day": 20}

        config = parse_wage_configuration(wage_config_data)

        assert config.period == CustomPeriod(start_day=21, end_day=20)

    def test_unknown_period_string(self, wage_config_data):
        wage_config_data["period"] = "Week"

        with pytest.raises(InvalidPeriodConfiguration) as exc_info:
            parse_wage_configuration(wage_config_data)

        assert exc_info.value.field == "period"
        assert exc_info.value.value == "Week"

    def test_invalid_custom_period_days(self, wage_config_data):
        wage_config_data["period"] = {"kind": "custom", "start_day": 1, "end_day": 31}

        with pytest.raises(InvalidPeriodConfiguration) as exc_info:
            parse_wage_configuration(wage_config_data)

        assert exc_info.value.field == "period.start_day"

    def test_invalid_time_names_field_and_value(self, wage_config_data):
        wage_config_data["general_bonuses"][1]["start"] = "7 o'clock"

        with pytest.raises(InvalidTimeFormat) as exc_info:
            parse_wage_configuration(wage_config_data)

        assert exc_info.value.field == "general_bonuses.1.start"
        assert exc_info.value.value == "7 o'clock"
        assert "general_bonuses.1.start" in str(exc_info.value)

    def test_24_00_start_rejected(self, wage_config_data):
        wage_config_data["general_bonuses"][0]["start"] = "24:00"

        with pytest.raises(InvalidTimeFormat):
            parse_wage_configuration(wage_config_data)

    def test_window_wrapping_midnight_rejected(self, wage_config_data):
        wage_config_data["general_bonuses"][0] = {"rate_per_hour": 20.0, "start": "22:00", "end": "06:00"}

        with pytest.raises(InvalidTimeFormat) as exc_info:
            parse_wage_configuration(wage_config_data)

        assert exc_info.value.field == "general_bonuses.0.end"

    def test_general_bonus_with_days_rejected(self, wage_config_data):
        wage_config_data["general_bonuses"][0]["days"] = ["monday"]

        with pytest.raises(ConfigurationError) as exc_info:
            parse_wage_configuration(wage_config_data)

        assert exc_info.value.field == "general_bonuses[0].days"

    def test_weekday_bonus_without_days_rejected(self, wage_config_data):
        del wage_config_data["weekday_bonuses"][0]["days"]

        with pytest.raises(ConfigurationError) as exc_info:
            parse_wage_configuration(wage_config_data)

        assert exc_info.value.field == "weekday_bonuses[0].days"

    def test_missing_base_rate(self, wage_config_data):
        del wage_config_data["base_rate_per_hour"]

        with pytest.raises(ConfigurationError) as exc_info:
            parse_wage_configuration(wage_config_data)

        assert exc_info.value.field == "base_rate_per_hour"

    def test_not_an_object(self):
        with pytest.raises(ConfigurationError):
            parse_wage_configuration([1, 2, 3])

    def test_unknown_day_names_degrade_with_warning(self, wage_config_data):
        wage_config_data["weekday_bonuses"][0]["days"] = ["Sun", "someday"]

        with pytest.warns(DegradedRuleWarning, match="someday"):
            config = parse_wage_configuration(wage_config_data)

        rule = config.weekday_bonuses[0]
        assert rule.weekdays == frozenset({6})
        assert rule.rejected_days == ("someday",)
        assert config.degraded_rules() == [(0, rule)]


class TestConfigurationFiles:
    def test_shipped_configuration_loads(self):
        config = load_wage_configuration(PROJECT_ROOT / "data" / "wage_bonuses.json")

        assert config.base_rate_per_hour > 0
        assert config.degraded_rules() == []

    def test_missing_file(self, tmp_path):
        with pytest.raises(StorageError):
            load_wage_configuration(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(StorageError):
            load_wage_configuration(path)

    def test_save_and_load(self, tmp_path, wage_config):
        path = tmp_path / "nested" / "wage_bonuses.json"

        save_wage_configuration(wage_config, path)
        loaded = load_wage_configuration(path)

        assert loaded.model_dump() == wage_config.model_dump()
        assert json.loads(path.read_text(encoding="utf-8"))["period"]["kind"] == "custom"

    def test_cached_configuration_uses_env_path(self, wage_config_file):
        first = get_wage_configuration()

        assert first.base_rate_per_hour == 120.0
        assert get_wage_configuration() is first

        clear_configuration_cache()
        assert get_wage_configuration() is not first
