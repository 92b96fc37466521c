import json
from datetime import timedelta

import pytest

from breaktimer.breaks import Break
from breaktimer.config_schema import ConfigValidationError, validate_config
from breaktimer.settings import CONFIG_ENV_VAR, Config, ConfigError, SettingsManager, default_config_path


DEFAULT_FILE = {
    "max_idle_time_while_working": "10 minutes",
    "workday": "8 hours",
    "day_resets_after": "7 hours",
    "just_started": "6 minutes",
    "good_chunk_of_work": "30 minutes",
    "minimum_time_between_breaks": "5 minutes",
    "when_to_emphasize_break": "2 minutes",
    "when_to_lock_screen": "10 minutes",
    "tick_interval_seconds": 10,
    "breaks": [
        {"prompt": "Time for a 7-minute exercise", "after": "3 hours"},
        {"prompt": "Switch to standing desk", "after": "4:01"},
    ],
}


class TestDefaults:
    def test_default_values(self):
        config = Config()
        assert config.max_idle_time_while_working == timedelta(minutes=10)
        assert config.workday == timedelta(hours=8)
        assert config.day_resets_after == timedelta(hours=7)
        assert config.just_started == timedelta(minutes=6)
        assert config.good_chunk_of_work == timedelta(minutes=30)
        assert config.minimum_time_between_breaks == timedelta(minutes=5)
        assert config.when_to_emphasize_break == timedelta(minutes=2)
        assert config.when_to_lock_screen == timedelta(minutes=10)
        assert config.tick_interval == timedelta(seconds=10)
        assert config.breaks == (
            Break("Time for a 7-minute exercise", timedelta(hours=3)),
            Break("Switch to standing desk", timedelta(hours=4, minutes=1)),
        )

    def test_to_dict(self):
        assert Config().to_dict() == DEFAULT_FILE


class TestSettingsManager:
    def test_missing_file_writes_defaults(self, tmp_path):
        path = tmp_path / "nested" / "breaks.json"
        manager = SettingsManager(path=path)

        config = manager.load()

        assert config == Config()
        assert json.loads(path.read_text(encoding="utf-8")) == DEFAULT_FILE

    def test_round_trip_through_file(self, tmp_path):
        manager = SettingsManager(path=tmp_path / "breaks.json")
        original = Config(workday=timedelta(hours=6), breaks=(Break("Walk", timedelta(minutes=90)),))

        manager.save(original)

        assert manager.load() == original

    def test_partial_file_uses_defaults_for_missing_keys(self, tmp_path):
        path = tmp_path / "breaks.json"
        path.write_text(json.dumps({"workday": "7:30"}), encoding="utf-8")

        config = SettingsManager(path=path).load()

        assert config.workday == timedelta(hours=7, minutes=30)
        assert config.just_started == timedelta(minutes=6)
        assert len(config.breaks) == 2

    def test_empty_breaks_list_is_respected(self, tmp_path):
        path = tmp_path / "breaks.json"
        path.write_text(json.dumps({"breaks": []}), encoding="utf-8")

        assert SettingsManager(path=path).load().breaks == ()

    def test_invalid_json_names_path(self, tmp_path):
        path = tmp_path / "breaks.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(ConfigError) as excinfo:
            SettingsManager(path=path).load()

        assert excinfo.value.unreadable is False
        assert str(excinfo.value).startswith(f"Unable to parse {path}")
        assert path.read_text(encoding="utf-8") == "{not json"

    def test_bad_duration_names_field(self, tmp_path):
        path = tmp_path / "breaks.json"
        path.write_text(json.dumps({"workday": "all day"}), encoding="utf-8")

        with pytest.raises(ConfigError) as excinfo:
            SettingsManager(path=path).load()

        assert "workday" in str(excinfo.value)
        assert "all day" in str(excinfo.value)

    def test_oversized_duration_is_a_parse_error(self, tmp_path):
        path = tmp_path / "breaks.json"
        path.write_text(json.dumps({"workday": "1e12 hours"}), encoding="utf-8")

        with pytest.raises(ConfigError) as excinfo:
            SettingsManager(path=path).load()

        assert excinfo.value.unreadable is False
        assert str(excinfo.value).startswith(f"Unable to parse {path}: workday:")
        assert "too large" in str(excinfo.value)

    def test_unreadable_file_is_distinguished(self, tmp_path):
        path = tmp_path / "breaks.json"
        path.mkdir()

        with pytest.raises(ConfigError) as excinfo:
            SettingsManager(path=path).load()

        assert excinfo.value.unreadable is True
        assert str(excinfo.value).startswith(f"Unable to read {path}")

    def test_env_var_overrides_default_path(self, tmp_path, monkeypatch):
        target = tmp_path / "custom.json"
        monkeypatch.setenv(CONFIG_ENV_VAR, str(target))

        assert default_config_path() == target
        assert SettingsManager().path == target

    def test_default_path_is_in_dot_config(self, monkeypatch):
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
        path = default_config_path()
        assert path.parent.name == ".config"
        assert path.name == "breaks.json"


class TestValidateConfig:
    def test_root_must_be_object(self):
        with pytest.raises(ConfigValidationError):
            validate_config(["workday"])

    def test_duration_must_be_string(self):
        with pytest.raises(ConfigValidationError, match="workday"):
            validate_config({"workday": 8})

    def test_breaks_must_be_list(self):
        with pytest.raises(ConfigValidationError, match="breaks must be a list"):
            validate_config({"breaks": {"prompt": "x", "after": "1h"}})

    def test_break_requires_prompt(self):
        with pytest.raises(ConfigValidationError, match=r"breaks\[0\]\.prompt"):
            validate_config({"breaks": [{"prompt": "   ", "after": "1h"}]})

    def test_break_requires_after(self):
        with pytest.raises(ConfigValidationError, match=r"breaks\[1\]\.after is required"):
            validate_config(
                {"breaks": [{"prompt": "Walk", "after": "1h"}, {"prompt": "Water"}]}
            )

    @pytest.mark.parametrize("value", [0, -5, 301, "often", "10", 10.7, 10.0, None, True])
    def test_tick_interval_bounds(self, value):
        with pytest.raises(ConfigValidationError, match="tick_interval_seconds"):
            validate_config({"tick_interval_seconds": value})

    def test_unknown_keys_are_ignored(self):
        assert validate_config({"colour": "blue", "workday": "1h"}) == {
            "workday": timedelta(hours=1)
        }

    def test_break_prompt_is_trimmed(self):
        normalized = validate_config({"breaks": [{"prompt": "  Walk ", "after": "90m"}]})
        assert normalized["breaks"] == [Break("Walk", timedelta(minutes=90))]
