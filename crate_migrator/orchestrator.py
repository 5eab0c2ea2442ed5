"""Migration orchestrator — provider selection, scan, and script emission."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field

from crate_migrator.config import MigrationConfig
from crate_migrator.emitter import ScriptEmitter
from crate_migrator.exceptions import ExternalToolError
from crate_migrator.models import MigrationPair, PackageOutcome
from crate_migrator.progress import PhaseProgress, ProgressTracker
from crate_migrator.providers.base import PackageManagerKind
from crate_migrator.providers.registry import ProviderRegistry, create_default_registry
from crate_migrator.runner import CommandRunner
from crate_migrator.scanner import DependencyScanner

logger = logging.getLogger(__name__)


@dataclass
class MigrationSummary:
    """Orchestrator return value, rendered by the CLI."""

    manager: str
    scanned: int
    flagged: int
    migrated: int
    uninstall_path: str
    install_path: str
    dry_run: bool = False
    pairs: list[MigrationPair] = field(default_factory=list)
    unresolved: list[str] = field(default_factory=list)
    skipped: list[PackageOutcome] = field(default_factory=list)


class MigrationOrchestrator:
    """
    Run one migration for a selected package manager.

    Phase prepare: create both script artifacts empty (skipped on dry run)
    Phase scan:    DependencyScanner over the provider's installed packages
    Phase emit:    append the pairs through the ScriptEmitter and close it
    """

    def __init__(
        self,
        config: MigrationConfig,
        registry: ProviderRegistry | None = None,
        runner: CommandRunner | None = None,
    ) -> None:
        self.config = config
        self.registry = registry or create_default_registry()
        self.runner = runner or CommandRunner(timeout=config.command_timeout)
        self.progress = ProgressTracker()

    def _new_progress(self) -> ProgressTracker:
        tracker = ProgressTracker()
        tracker.callbacks.append(self._log_phase)
        return tracker

    @staticmethod
    def _log_phase(phase: PhaseProgress) -> None:
        logger.debug(
            "Phase %s %s (duration=%s detail=%r error=%r)",
            phase.phase,
            phase.status,
            phase.duration,
            phase.detail,
            phase.error,
        )

    async def run(self, kind: PackageManagerKind, dry_run: bool = False) -> MigrationSummary:
        progress = self._new_progress()
        self.progress = progress  # expose last run's progress for callers

        provider = self.registry.create(kind, self.runner)
        emitter = ScriptEmitter(self.config.uninstall_script, self.config.install_script)

        if dry_run:
            progress.skip("prepare", "dry run")
        else:
            with progress.track("prepare") as p:
                emitter.open()
                p.detail = f"{emitter.uninstall_path}, {emitter.install_path}"

        try:
            with progress.track("scan") as p:
                scanner = DependencyScanner(
                    provider,
                    concurrency=self.config.concurrency,
                    run_timeout=self.config.run_timeout,
                )
                try:
                    result = await scanner.scan()
                except asyncio.TimeoutError:
                    raise ExternalToolError(
                        provider.executable,
                        f"scan did not finish within {self.config.run_timeout}s",
                    )
                p.detail = (
                    f"scanned={result.scanned}, flagged={len(result.flagged)}, "
                    f"pairs={len(result.pairs)}"
                )

            pairs = result.pairs
            if dry_run:
                progress.skip("emit", "dry run")
            else:
                with progress.track("emit") as p:
                    emitter.write_pairs(pairs)
                    emitter.close()
                    p.detail = f"{len(pairs)} pairs"
        finally:
            if not dry_run:
                emitter.close()

        summary = MigrationSummary(
            manager=provider.name,
            scanned=result.scanned,
            flagged=len(result.flagged),
            migrated=len(pairs),
            uninstall_path=str(emitter.uninstall_path),
            install_path=str(emitter.install_path),
            dry_run=dry_run,
            pairs=pairs,
            unresolved=[o.package for o in result.unresolved],
            skipped=result.skipped,
        )
        logger.info(
            "Migration from %s: scanned=%d flagged=%d migrated=%d skipped=%d dry_run=%s",
            summary.manager,
            summary.scanned,
            summary.flagged,
            summary.migrated,
            len(summary.skipped),
            dry_run,
        )
        return summary

    def run_sync(self, kind: PackageManagerKind, dry_run: bool = False) -> MigrationSummary:
        return asyncio.run(self.run(kind, dry_run=dry_run))
