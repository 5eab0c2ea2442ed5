"""Data models for the migration pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class MigrationPair:
    """One uninstall command and the cargo install command replacing it."""

    uninstall_command: str
    install_command: str


@dataclass
class PackageOutcome:
    """What the scanner decided for a single installed package."""

    package: str
    flagged: bool = False
    version: str | None = None
    pair: MigrationPair | None = None
    error: str | None = None  # per-package tool/metadata failure


@dataclass
class ScanResult:
    """Result of scanning one provider's installed packages."""

    manager: str
    outcomes: list[PackageOutcome] = field(default_factory=list)

    @property
    def scanned(self) -> int:
        return len(self.outcomes)

    @property
    def pairs(self) -> list[MigrationPair]:
        return [o.pair for o in self.outcomes if o.pair is not None]

    @property
    def flagged(self) -> list[PackageOutcome]:
        return [o for o in self.outcomes if o.flagged]

    @property
    def unresolved(self) -> list[PackageOutcome]:
        """Flagged packages without a resolvable version."""
        return [o for o in self.outcomes if o.flagged and o.pair is None and o.error is None]

    @property
    def skipped(self) -> list[PackageOutcome]:
        return [o for o in self.outcomes if o.error is not None]
