"""Tests for config.py — config file location, load/save, boolean parsing."""

import json
import os
import stat
import sys

import pytest

from todi_cli import config
from todi_cli.config import Config, parse_bool
from todi_cli.exceptions import ConfigError


class TestParseBool:
    @pytest.mark.parametrize("value", ["true", "YES", "1", "on", " t "])
    def test_true(self, value):
        assert parse_bool(value) is True

    @pytest.mark.parametrize("value", ["false", "No", "0", "off", "f"])
    def test_false(self, value):
        assert parse_bool(value) is False

    def test_invalid(self):
        with pytest.raises(ValueError) as exc_info:
            parse_bool("maybe")
        assert "invalid boolean: maybe" in str(exc_info.value)


@pytest.mark.skipif(sys.platform in ("win32", "darwin"), reason="XDG layout")
class TestConfigPath:
    def test_uses_xdg_config_home(self, tmp_path, monkeypatch):
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        assert config.default_config_path() == os.path.join(str(tmp_path), "todi", "config.json")

    def test_relative_xdg_ignored(self, tmp_path, monkeypatch):
        monkeypatch.setenv("XDG_CONFIG_HOME", "relative/dir")
        monkeypatch.setenv("HOME", str(tmp_path))
        assert config.default_config_path() == os.path.join(
            str(tmp_path), ".config", "todi", "config.json"
        )


class TestLoad:
    def test_missing_file_is_empty(self, tmp_path):
        cfg = Config.load(str(tmp_path / "nope.json"))
        assert cfg == Config()

    def test_reads_values(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"token": "abc", "label_cli": True, "extra": 1}))
        cfg = Config.load(str(path))
        assert cfg.token == "abc"
        assert cfg.label_cli is True

    def test_malformed_json(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{not json")
        with pytest.raises(ConfigError) as exc_info:
            Config.load(str(path))
        assert str(exc_info.value).startswith("parse config: ")

    def test_wrong_type(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"label_cli": "yes"}))
        with pytest.raises(ConfigError):
            Config.load(str(path))

    def test_not_an_object(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("[]")
        with pytest.raises(ConfigError):
            Config.load(str(path))


class TestSave:
    def test_round_trip_and_permissions(self, tmp_path):
        path = str(tmp_path / "nested" / "config.json")
        Config(token="abc", default_project="Inbox").save(path)
        with open(path, encoding="utf-8") as f:
            assert json.load(f) == {"token": "abc", "default_project": "Inbox"}
        assert Config.load(path).default_project == "Inbox"
        if sys.platform != "win32":
            assert stat.S_IMODE(os.stat(path).st_mode) == 0o600

    def test_empty_values_omitted(self, tmp_path):
        path = str(tmp_path / "config.json")
        Config().save(path)
        with open(path, encoding="utf-8") as f:
            assert json.load(f) == {}

    def test_no_temp_files_left(self, tmp_path):
        path = str(tmp_path / "config.json")
        Config(token="a").save(path)
        Config(token="b").save(path)
        assert os.listdir(tmp_path) == ["config.json"]

    def test_empty_path(self):
        with pytest.raises(ConfigError):
            Config().save("")


class TestGetValue:
    def test_label_cli_rendered(self):
        assert Config(label_cli=True).get_value("label_cli") == "true"
        assert Config().get_value("label_cli") == "false"

    def test_string_key(self):
        assert Config(default_labels="a,b").get_value("default_labels") == "a,b"
