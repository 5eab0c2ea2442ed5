"""Shared pytest fixtures for crate-migrator tests."""

import pytest

from crate_migrator.testing import ScriptedRunner, brew_info_json


@pytest.fixture
def home(tmp_path, monkeypatch):
    """A fake HOME with no script path overrides."""
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.delenv("UNINSTALL_SCRIPT_FILE", raising=False)
    monkeypatch.delenv("INSTALL_SCRIPT_FILE", raising=False)
    monkeypatch.delenv("CRATE_MIGRATOR_CONCURRENCY", raising=False)
    monkeypatch.delenv("CRATE_MIGRATOR_COMMAND_TIMEOUT", raising=False)
    monkeypatch.delenv("CRATE_MIGRATOR_RUN_TIMEOUT", raising=False)
    return tmp_path


@pytest.fixture
def brew_runner():
    """Homebrew with ripgrep (Rust, 14.1.0) and curl (not Rust)."""
    return ScriptedRunner(
        {
            "brew list --formula": ["ripgrep", "curl"],
            "brew info ripgrep": [
                "==> ripgrep: stable 14.1.0 (bottled), HEAD",
                "==> Dependencies",
                "Build: asciidoctor, pkgconf, rust",
                "Required: pcre2",
            ],
            "brew info curl": [
                "==> curl: stable 8.7.1 (bottled), HEAD [keg-only]",
                "==> Dependencies",
                "Required: brotli, libidn2, openssl@3, zstd",
            ],
            "brew info --json=v1 ripgrep": brew_info_json("14.1.0"),
            "brew info --json=v1 curl": brew_info_json("8.7.1"),
        }
    )
