"""Core types and abstract base class for package manager providers."""

from __future__ import annotations

import shlex
from abc import ABC, abstractmethod
from enum import Enum

from crate_migrator.runner import CommandRunner

TARGET_MANAGER = "cargo"


class PackageManagerKind(Enum):
    """Package managers a migration can be run against. One per run."""

    HOMEBREW = "homebrew"
    APT = "apt"
    WINGET = "winget"
    CARGO = "cargo"


class PackageManager(ABC):
    """
    Abstract base class for package manager providers.
    Each provider knows how to list its installed packages, detect a
    dependency on the Rust toolchain, and resolve the version it ships.
    All providers install through cargo; only the uninstall syntax varies.
    """

    dependency_marker = "rust"

    def __init__(self, runner: CommandRunner | None = None) -> None:
        self.runner = runner or CommandRunner()

    @property
    @abstractmethod
    def kind(self) -> PackageManagerKind:
        ...

    @property
    @abstractmethod
    def executable(self) -> str:
        """Binary invoked for every query, e.g. 'brew'."""
        ...

    @abstractmethod
    def list_installed(self) -> list[str]:
        """
        Names of installed packages as the manager reports them.

        Raises ExternalToolError if the manager cannot be queried.
        """
        ...

    @abstractmethod
    def has_target_dependency(self, package: str) -> bool:
        """Best-effort check that *package* depends on the Rust toolchain."""
        ...

    @abstractmethod
    def resolve_version(self, package: str) -> str | None:
        """
        Version of *package* according to this manager.

        Returns None when no version can be resolved, including when the
        manager's metadata is malformed.
        """
        ...

    @abstractmethod
    def format_uninstall_command(self, package: str) -> str:
        ...

    def format_install_command(self, package_with_version: str) -> str:
        return f"{TARGET_MANAGER} install {shlex.quote(package_with_version)}"

    def check_prerequisites(self) -> list[str]:
        """
        Check prerequisites.
        Returns list of missing items (empty = can run).
        """
        if self.runner.is_available(self.executable):
            return []
        return [f"'{self.executable}' not found on PATH"]

    @property
    def name(self) -> str:
        return self.kind.value
