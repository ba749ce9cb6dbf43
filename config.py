"""
Configuration for the profile artwork scripts.

Values come from three places, later ones winning:
  - built-in defaults
  - info.json next to the scripts (profile text, window sizes, marker style)
  - environment variables, including a local .env file (identity, credentials)
"""

import json
import os
from collections import namedtuple

from dotenv import load_dotenv

BASE_DIR = os.path.dirname(os.path.abspath(__file__))
DEFAULT_INFO_PATH = os.path.join(BASE_DIR, "info.json")

MARKER_STYLES = ("colon", "dash")

DEFAULTS = {
    "username": "SyedHassanUlHaq",
    "repo": None,
    "github_token": None,
    "wakatime_username": None,
    "wakatime_api_key": None,
    "window_weeks": 52,
    "top_languages": 6,
    "grid_levels": 5,
    "events_limit": 3,
    "marker_style": "colon",
    "readme_path": "README.md",
    "output_dir": ".",
    "greeting": "Hey there! 👋",
    "now_working": "Multiple AI & automation projects 🚀",
}

# Environment variable -> config key
ENV_KEYS = {
    "GITHUB_USERNAME": "username",
    "GITHUB_REPO": "repo",
    "ACCESS_TOKEN": "github_token",
    "GITHUB_TOKEN": "github_token",
    "WAKATIME_USERNAME": "wakatime_username",
    "WAKATIME_API_KEY": "wakatime_api_key",
}


class ConfigError(ValueError):
    """Raised when a configuration value is missing or out of range"""


class Config(namedtuple("Config", list(DEFAULTS))):
    """Validated, read-only settings shared by every script"""

    __slots__ = ()

    @property
    def has_github_token(self):
        return bool(self.github_token)

    @property
    def has_wakatime(self):
        return bool(self.wakatime_username and self.wakatime_api_key)

    @property
    def profile_repo(self):
        """The profile repository is usually named after the account"""
        return self.repo or self.username

    def output_path(self, filename):
        return os.path.join(self.output_dir, filename)


def read_info(path):
    """Read info.json; a missing file means no overrides"""
    try:
        with open(path, "r", encoding="utf-8") as f:
            info = json.load(f)
    except FileNotFoundError:
        return {}
    except json.JSONDecodeError as e:
        raise ConfigError(f"{path} is not valid JSON: {e}")

    if not isinstance(info, dict):
        raise ConfigError(f"{path} must contain a JSON object")
    unknown = sorted(set(info) - set(DEFAULTS))
    if unknown:
        raise ConfigError(f"Unknown option(s) in {path}: {', '.join(unknown)}")
    return info


def _positive_int(values, key, minimum):
    value = values[key]
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{key} must be an integer, got {value!r}")
    if value < minimum:
        raise ConfigError(f"{key} must be at least {minimum}, got {value}")


def validate(values):
    """Check every recognized option once, at the boundary"""
    if not values["username"]:
        raise ConfigError("username is required (set GITHUB_USERNAME or info.json)")
    _positive_int(values, "window_weeks", 2)
    _positive_int(values, "top_languages", 1)
    _positive_int(values, "grid_levels", 1)
    _positive_int(values, "events_limit", 0)
    if values["marker_style"] not in MARKER_STYLES:
        raise ConfigError(
            f"marker_style must be one of {', '.join(MARKER_STYLES)}, "
            f"got {values['marker_style']!r}"
        )
    return Config(**values)


def load_config(info_path=DEFAULT_INFO_PATH, environ=None, dotenv=True):
    """
    Build the Config for one run.

    Blank environment values are ignored so an unset secret in CI
    (an empty string) counts as absent.
    """
    if dotenv:
        load_dotenv()
    if environ is None:
        environ = os.environ

    values = dict(DEFAULTS)
    values.update(read_info(info_path))
    for env_name, key in ENV_KEYS.items():
        value = environ.get(env_name, "").strip()
        if value:
            values[key] = value
    return validate(values)
