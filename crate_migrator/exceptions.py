"""Custom exceptions for crate-migrator."""

from __future__ import annotations


class MigratorError(Exception):
    """Base exception for all migrator errors."""


class ExternalToolError(MigratorError):
    """Raised when a package manager binary is missing or exits abnormally."""

    def __init__(self, command: str, detail: str):
        self.command = command
        self.detail = detail
        super().__init__(f"'{command}' failed: {detail}")


class MetadataParseError(MigratorError):
    """Raised when structured metadata from a manager has an unexpected shape."""


class NotImplementedCapability(MigratorError):
    """Raised when a provider does not implement a required capability."""

    def __init__(self, manager: str, capability: str):
        self.manager = manager
        self.capability = capability
        super().__init__(f"{manager} does not implement {capability}")


class DestinationWriteError(MigratorError):
    """Raised when a script artifact cannot be created or appended to.

    ``uninstall_written`` and ``install_written`` hold the number of lines
    that reached each artifact before the failure.
    """

    def __init__(
        self,
        path: str,
        reason: str,
        uninstall_written: int = 0,
        install_written: int = 0,
    ):
        self.path = path
        self.uninstall_written = uninstall_written
        self.install_written = install_written
        super().__init__(
            f"Cannot write {path}: {reason} "
            f"(uninstall lines written: {uninstall_written}, "
            f"install lines written: {install_written})"
        )


class ConfigurationError(MigratorError):
    """Raised when required environment configuration is missing or invalid."""


class UnknownManagerError(MigratorError):
    """Raised when no provider is registered for a package manager kind."""
