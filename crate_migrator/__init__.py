"""crate-migrator: move Rust-built packages from system package managers to cargo."""

__version__ = "0.1.0"

from crate_migrator.config import MigrationConfig
from crate_migrator.emitter import ScriptEmitter
from crate_migrator.exceptions import (
    ConfigurationError,
    DestinationWriteError,
    ExternalToolError,
    MetadataParseError,
    MigratorError,
    NotImplementedCapability,
    UnknownManagerError,
)
from crate_migrator.models import MigrationPair, PackageOutcome, ScanResult
from crate_migrator.orchestrator import MigrationOrchestrator, MigrationSummary
from crate_migrator.providers import PackageManager, PackageManagerKind
from crate_migrator.scanner import DependencyScanner

__all__ = [
    "ConfigurationError",
    "DependencyScanner",
    "DestinationWriteError",
    "ExternalToolError",
    "MetadataParseError",
    "MigrationConfig",
    "MigrationOrchestrator",
    "MigrationPair",
    "MigrationSummary",
    "MigratorError",
    "NotImplementedCapability",
    "PackageManager",
    "PackageManagerKind",
    "PackageOutcome",
    "ScanResult",
    "ScriptEmitter",
    "UnknownManagerError",
]
