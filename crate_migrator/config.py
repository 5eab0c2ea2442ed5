"""Run configuration resolved from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Mapping

from crate_migrator.exceptions import ConfigurationError
from crate_migrator.runner import DEFAULT_COMMAND_TIMEOUT
from crate_migrator.scanner import DEFAULT_CONCURRENCY

ENV_UNINSTALL_FILE = "UNINSTALL_SCRIPT_FILE"
ENV_INSTALL_FILE = "INSTALL_SCRIPT_FILE"
ENV_CONCURRENCY = "CRATE_MIGRATOR_CONCURRENCY"
ENV_COMMAND_TIMEOUT = "CRATE_MIGRATOR_COMMAND_TIMEOUT"
ENV_RUN_TIMEOUT = "CRATE_MIGRATOR_RUN_TIMEOUT"


@dataclass
class MigrationConfig:
    home_dir: str
    uninstall_script: str
    install_script: str
    concurrency: int = DEFAULT_CONCURRENCY
    command_timeout: float | None = DEFAULT_COMMAND_TIMEOUT
    run_timeout: float | None = None

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        **overrides: Any,
    ) -> MigrationConfig:
        """Build a config from *environ* (default ``os.environ``).

        Keyword overrides whose value is not None win over the environment.

        Reads:
            HOME                            — required
            UNINSTALL_SCRIPT_FILE           — default <home>/Downloads/uninstall_packages.sh
            INSTALL_SCRIPT_FILE             — default <home>/Downloads/install_packages.sh
            CRATE_MIGRATOR_CONCURRENCY      — worker pool size (default 8)
            CRATE_MIGRATOR_COMMAND_TIMEOUT  — seconds per command, 0 = none (default 60)
            CRATE_MIGRATOR_RUN_TIMEOUT      — seconds for the whole scan (default unbounded)
        """
        env = os.environ if environ is None else environ

        home = env.get("HOME")
        if not home:
            raise ConfigurationError("Unable to determine user's home directory (HOME is not set)")

        downloads = os.path.join(home, "Downloads")
        values: dict[str, Any] = {
            "home_dir": home,
            "uninstall_script": env.get(ENV_UNINSTALL_FILE)
            or os.path.join(downloads, "uninstall_packages.sh"),
            "install_script": env.get(ENV_INSTALL_FILE)
            or os.path.join(downloads, "install_packages.sh"),
            "concurrency": _int_env(env, ENV_CONCURRENCY, DEFAULT_CONCURRENCY),
            "command_timeout": _timeout_env(env, ENV_COMMAND_TIMEOUT, DEFAULT_COMMAND_TIMEOUT),
            "run_timeout": _timeout_env(env, ENV_RUN_TIMEOUT, None),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        for key in ("command_timeout", "run_timeout"):
            values[key] = _positive_or_none(values[key])

        if values["concurrency"] < 1:
            raise ConfigurationError("concurrency must be at least 1")
        return cls(**values)


def _int_env(env: Mapping[str, str], key: str, default: int) -> int:
    raw = env.get(key)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{key} must be an integer, got {raw!r}")


def _timeout_env(env: Mapping[str, str], key: str, default: float | None) -> float | None:
    raw = env.get(key)
    if raw is None or raw == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ConfigurationError(f"{key} must be a number of seconds, got {raw!r}")
    return _positive_or_none(value)


def _positive_or_none(seconds: float | None) -> float | None:
    """Zero or negative timeouts mean no timeout."""
    if seconds is None or seconds <= 0:
        return None
    return float(seconds)
