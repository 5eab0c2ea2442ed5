"""Test doubles for crate_migrator — use in unit and end-to-end tests.

Usage::

    from crate_migrator.testing import ScriptedRunner

    runner = ScriptedRunner({
        "brew list --formula": ["ripgrep", "curl"],
        "brew info ripgrep": ["==> Dependencies", "Build: rust"],
        "brew info curl": ["==> Dependencies", "Required: openssl@3"],
        "brew info --json=v1 ripgrep": ['[{"versions": {"stable": "14.1.0"}}]'],
    })
    provider = Homebrew(runner)
"""

from __future__ import annotations

import json
import threading
from typing import Mapping, Union

from crate_migrator.exceptions import ExternalToolError
from crate_migrator.providers.base import PackageManager, PackageManagerKind
from crate_migrator.runner import CommandRunner

Response = Union[list[str], Exception]


def brew_info_json(stable: str) -> list[str]:
    """Stdout lines of ``brew info --json=v1`` for a formula at *stable*."""
    return [json.dumps([{"name": "formula", "versions": {"stable": stable, "head": None}}])]


class ScriptedRunner(CommandRunner):
    """Drop-in CommandRunner answering from a table keyed by command line.

    Values are stdout lines, or an exception instance to raise. Commands
    missing from the table behave like a missing executable. Every call is
    recorded in ``calls`` (thread-safe, the scanner calls from workers).
    """

    def __init__(
        self,
        responses: Mapping[str, Response],
        available: set[str] | None = None,
    ) -> None:
        super().__init__(timeout=None)
        self.responses = dict(responses)
        self.available = available
        self.calls: list[str] = []
        self._lock = threading.Lock()

    def run(self, command: str, args: list[str]) -> list[str]:
        cmdline = " ".join([command, *args])
        with self._lock:
            self.calls.append(cmdline)
        response = self.responses.get(cmdline)
        if response is None:
            raise ExternalToolError(cmdline, f"executable '{command}' not found")
        if isinstance(response, Exception):
            raise response
        return list(response)

    def is_available(self, command: str) -> bool:
        if self.available is None:
            return True
        return command in self.available


class FakeProvider(PackageManager):
    """Provider whose answers are fixed up front.

    Parameters
    ----------
    packages:
        Returned by ``list_installed``.
    dependencies:
        Packages reported as depending on Rust.
    versions:
        Package -> version returned by ``resolve_version``.
    errors:
        Package -> exception raised by ``has_target_dependency``.
    """

    def __init__(
        self,
        packages: list[str],
        dependencies: set[str] | None = None,
        versions: dict[str, str] | None = None,
        errors: dict[str, Exception] | None = None,
    ) -> None:
        super().__init__(runner=ScriptedRunner({}))
        self.packages = packages
        self.dependencies = dependencies or set()
        self.versions = versions or {}
        self.errors = errors or {}
        self.resolved: list[str] = []
        self._lock = threading.Lock()

    @property
    def kind(self) -> PackageManagerKind:
        return PackageManagerKind.HOMEBREW

    @property
    def executable(self) -> str:
        return "fake"

    def list_installed(self) -> list[str]:
        return list(self.packages)

    def has_target_dependency(self, package: str) -> bool:
        if package in self.errors:
            raise self.errors[package]
        return package in self.dependencies

    def resolve_version(self, package: str) -> str | None:
        with self._lock:
            self.resolved.append(package)
        return self.versions.get(package)

    def format_uninstall_command(self, package: str) -> str:
        return f"fake uninstall {package}"
