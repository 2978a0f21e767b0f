"""Probe settings: defaults, environment, .env and optional YAML file"""
import os
from dataclasses import dataclass, field, fields, replace

import yaml
from dotenv import load_dotenv

from analyzers.exceptions import ConfigError
from config.thresholds import (
    AGE_ALERT_MINUTES,
    AGE_NO_ALERT_MINUTES,
    CRITICAL_THRESHOLD,
    WARNING_THRESHOLD,
)

DEFAULT_USER = "admin"
DEFAULT_CONNECT_TIMEOUT = 10  # Seconds
DEFAULT_SESSION_TIMEOUT = 30  # Seconds
DEFAULT_KEEPALIVE_INTERVAL = 5  # Seconds


@dataclass(frozen=True)
class Thresholds:
    """Utilization thresholds (percent) and alert window (minutes)"""

    warning: int = WARNING_THRESHOLD
    critical: int = CRITICAL_THRESHOLD
    age_alert: int = AGE_ALERT_MINUTES
    age_no_alert: int = AGE_NO_ALERT_MINUTES

    def validate(self):
        if self.warning >= self.critical:
            raise ConfigError(
                f"WARNING threshold ({self.warning}) must be lower than "
                f"CRITICAL threshold ({self.critical})"
            )
        if self.age_alert >= self.age_no_alert:
            raise ConfigError(
                f"age-alert ({self.age_alert}) must be lower than "
                f"age-no-alert ({self.age_no_alert})"
            )
        return self


@dataclass(frozen=True)
class ProbeSettings:
    host: str | None = None
    user: str = DEFAULT_USER
    password: str | None = None
    ssh_key: str | None = None
    connect_timeout: int = DEFAULT_CONNECT_TIMEOUT
    session_timeout: int = DEFAULT_SESSION_TIMEOUT
    keepalive_interval: int = DEFAULT_KEEPALIVE_INTERVAL
    thresholds: Thresholds = field(default_factory=Thresholds)


THRESHOLD_KEYS = {f.name for f in fields(Thresholds)}
SETTING_KEYS = {f.name for f in fields(ProbeSettings)} - {"thresholds", "host"}


def settings_from_env(environ=None):
    """Credentials from BIGIP_USER / BIGIP_PASS / BIGIP_SSH_KEY"""
    if environ is None:
        load_dotenv()
        environ = os.environ

    return ProbeSettings(
        user=environ.get("BIGIP_USER") or DEFAULT_USER,
        password=environ.get("BIGIP_PASS") or None,
        ssh_key=environ.get("BIGIP_SSH_KEY") or None,
    )


def apply_overrides(settings, **overrides):
    """
    Return a copy of settings with every non-None override applied

    Threshold keys (warning, critical, age_alert, age_no_alert) go to the
    nested Thresholds, everything else to ProbeSettings.
    """
    threshold_values = {}
    setting_values = {}

    for key, value in overrides.items():
        if value is None:
            continue
        if key in THRESHOLD_KEYS:
            threshold_values[key] = value
        elif key in SETTING_KEYS or key == "host":
            setting_values[key] = value
        else:
            raise ConfigError(f"Unknown setting: {key}")

    if threshold_values:
        setting_values["thresholds"] = replace(settings.thresholds, **threshold_values)

    return replace(settings, **setting_values)


def load_yaml_settings(path):
    """Read the optional YAML settings file into a dict of overrides"""
    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e.strerror}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")

    unknown = set(data) - THRESHOLD_KEYS - SETTING_KEYS
    if unknown:
        raise ConfigError(f"Unknown keys in {path}: {', '.join(sorted(unknown))}")

    for key in THRESHOLD_KEYS | {"connect_timeout", "session_timeout", "keepalive_interval"}:
        if key in data and (not isinstance(data[key], int) or isinstance(data[key], bool)):
            raise ConfigError(f"'{key}' in {path} must be an integer")

    return data


def load_settings(config_file=None, environ=None, **cli_overrides):
    """
    Build the settings for one run

    Precedence: command line > YAML file > environment/.env > defaults.
    Thresholds are not validated here, see Thresholds.validate().
    """
    settings = settings_from_env(environ)

    if config_file:
        settings = apply_overrides(settings, **load_yaml_settings(config_file))

    return apply_overrides(settings, **cli_overrides)
