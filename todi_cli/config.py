"""
todi-cli shared configuration, constants, and the on-disk config file.
Standalone module — no imports from other project files except exceptions.
"""

from __future__ import annotations

import json
import os
import sys
import tempfile
from dataclasses import dataclass, fields

from todi_cli.exceptions import ConfigError

VERSION = "0.4.0"

# ---------------------------------------------------------------------------
# API defaults
# ---------------------------------------------------------------------------

DEFAULT_API_BASE = "https://api.todoist.com"
API_PREFIX = "/api/v1"
TOKEN_ENV = "TODOIST_TOKEN"
API_BASE_ENV = "TODOIST_API_BASE"

HTTP_TIMEOUT_SECONDS = 30

PAGE_LIMIT = 200
ACTIVITY_PAGE_LIMIT = 100
DEFAULT_LIST_LIMIT = 50
DEFAULT_ACTIVITY_LIMIT = 30
PAGINATION_MAX_PAGES = 10_000

CLI_LABEL = "cli"

# ---------------------------------------------------------------------------
# Output modes
# ---------------------------------------------------------------------------

MODE_HUMAN = "human"
MODE_PLAIN = "plain"
MODE_JSON = "json"

VALID_VIEW_STYLES = {"list", "board"}
VALID_DURATION_UNITS = {"minute", "day"}

CONFIG_KEYS = ("token", "api_base", "default_project", "default_labels", "label_cli")

_TRUE_VALUES = {"true", "t", "1", "yes", "y", "on"}
_FALSE_VALUES = {"false", "f", "0", "no", "n", "off"}


def parse_bool(value):
    """Parse the boolean spellings accepted by `config set`."""
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ValueError(f"invalid boolean: {value}")


# ---------------------------------------------------------------------------
# Config file location
# ---------------------------------------------------------------------------


def user_config_dir():
    """Return the per-user configuration directory for this platform."""
    if sys.platform == "win32":
        appdata = os.environ.get("APPDATA")
        if not appdata:
            raise ConfigError("config dir: %APPDATA% is not defined")
        return appdata
    if sys.platform == "darwin":
        return os.path.join(os.path.expanduser("~"), "Library", "Application Support")
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg and os.path.isabs(xdg):
        return xdg
    home = os.path.expanduser("~")
    if not home or home == "~":
        raise ConfigError("config dir: neither $XDG_CONFIG_HOME nor $HOME are defined")
    return os.path.join(home, ".config")


def default_config_path():
    return os.path.join(user_config_dir(), "todi", "config.json")


# ---------------------------------------------------------------------------
# Config file
# ---------------------------------------------------------------------------


@dataclass
class Config:
    """Values persisted in config.json. Empty values are not written."""

    token: str = ""
    api_base: str = ""
    default_project: str = ""
    default_labels: str = ""
    label_cli: bool = False

    @classmethod
    def from_dict(cls, data):
        if not isinstance(data, dict):
            raise ConfigError(
                f"parse config: expected JSON object, got {type(data).__name__}"
            )
        cfg = cls()
        for f in fields(cls):
            if f.name not in data or data[f.name] is None:
                continue
            value = data[f.name]
            if f.name == "label_cli":
                if not isinstance(value, bool):
                    raise ConfigError("parse config: label_cli must be a boolean")
            elif not isinstance(value, str):
                raise ConfigError(f"parse config: {f.name} must be a string")
            setattr(cfg, f.name, value)
        return cfg

    def to_dict(self):
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name)}

    @classmethod
    def load(cls, path):
        """Read config from *path*. A missing file yields an empty config."""
        try:
            with open(path, encoding="utf-8") as f:
                raw = f.read()
        except FileNotFoundError:
            return cls()
        except OSError as e:
            raise ConfigError(f"read config: {e}") from e
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ConfigError(f"parse config: {e.msg} at position {e.pos}") from e
        return cls.from_dict(data)

    def save(self, path):
        """Write config to *path* (atomic write-then-rename, owner-only)."""
        if not path:
            raise ConfigError("config path empty")
        config_dir = os.path.dirname(path) or "."
        try:
            os.makedirs(config_dir, mode=0o700, exist_ok=True)
        except OSError as e:
            raise ConfigError(f"mkdir config dir: {e}") from e
        data = json.dumps(self.to_dict(), indent=2) + "\n"
        fd, tmp_path = tempfile.mkstemp(dir=config_dir, prefix=".config_tmp_")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(data)
            os.replace(tmp_path, path)
        except OSError as e:
            try:
                os.remove(tmp_path)
            except OSError:
                pass
            raise ConfigError(f"write config: {e}") from e
        # No-op on Windows.
        try:
            os.chmod(path, 0o600)
        except (OSError, NotImplementedError):
            pass

    def get_value(self, key):
        """Return *key* rendered the way `config get` prints it."""
        if key not in CONFIG_KEYS:
            raise KeyError(key)
        value = getattr(self, key)
        if key == "label_cli":
            return "true" if value else "false"
        return value
