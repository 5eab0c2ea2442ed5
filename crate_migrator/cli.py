"""CLI entry point: crate-migrator.

Subcommands:
    crate-migrator generate --manager homebrew     # write uninstall/install scripts
    crate-migrator generate -m apt --dry-run       # print the pairs, write nothing
    crate-migrator managers                        # list providers and availability
    crate-migrator completions zsh                 # print a shell completion script
"""

from __future__ import annotations

import asyncio
import sys

import click
from click.shell_completion import get_completion_class

from crate_migrator.config import MigrationConfig
from crate_migrator.core.logging import setup_logging
from crate_migrator.emitter import render
from crate_migrator.exceptions import MigratorError
from crate_migrator.providers.base import PackageManagerKind
from crate_migrator.providers.registry import create_default_registry
from crate_migrator.runner import CommandRunner

PROG_NAME = "crate-migrator"
COMPLETE_VAR = "_CRATE_MIGRATOR_COMPLETE"

_MANAGER_CHOICES = [k.value for k in PackageManagerKind]


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
@click.option(
    "--log-format",
    type=click.Choice(["console", "json"]),
    default=None,
    help="Log rendering (env: CRATE_MIGRATOR_LOG_FORMAT)",
)
def main(verbose: bool, log_format: str | None) -> None:
    """Move Rust-built packages from system package managers to cargo."""
    setup_logging(verbose, log_format)


@main.command("generate")
@click.option(
    "-m",
    "--manager",
    type=click.Choice(_MANAGER_CHOICES),
    default=PackageManagerKind.HOMEBREW.value,
    show_default=True,
    help="Package manager to migrate from",
)
@click.option("--uninstall-file", default=None, help="Uninstall script path (env: UNINSTALL_SCRIPT_FILE)")
@click.option("--install-file", default=None, help="Install script path (env: INSTALL_SCRIPT_FILE)")
@click.option("-j", "--concurrency", type=int, default=None, help="Packages evaluated in parallel")
@click.option("--timeout", type=float, default=None, help="Seconds allowed per package manager command")
@click.option("--dry-run", is_flag=True, help="Print the commands instead of writing scripts")
def generate(
    manager: str,
    uninstall_file: str | None,
    install_file: str | None,
    concurrency: int | None,
    timeout: float | None,
    dry_run: bool,
) -> None:
    """Generate the uninstall and cargo install scripts."""
    from crate_migrator.orchestrator import MigrationOrchestrator

    try:
        config = MigrationConfig.from_env(
            uninstall_script=uninstall_file,
            install_script=install_file,
            concurrency=concurrency,
            command_timeout=timeout,
        )
        orchestrator = MigrationOrchestrator(config)
        summary = asyncio.run(orchestrator.run(PackageManagerKind(manager), dry_run=dry_run))
    except MigratorError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if dry_run:
        uninstall_lines, install_lines = render(summary.pairs)
        for uninstall_line, install_line in zip(uninstall_lines, install_lines):
            click.echo(f"  - {uninstall_line}", nl=False)
            click.echo(f"  + {install_line}", nl=False)

    click.echo(f"\nMigration from {summary.manager} {'(dry run)' if dry_run else 'complete'}:")
    click.echo(f"  Scanned: {summary.scanned}")
    click.echo(f"  Depend on Rust: {summary.flagged}")
    click.echo(f"  Migrated: {summary.migrated}")
    if summary.unresolved:
        click.echo(f"  No version found: {', '.join(summary.unresolved)}")
    if summary.skipped:
        click.echo(f"  Skipped after errors: {len(summary.skipped)}")
        for outcome in summary.skipped:
            click.echo(f"    {outcome.package}: {outcome.error}")
    if not dry_run:
        click.echo(f"  Uninstall script: {summary.uninstall_path}")
        click.echo(f"  Install script: {summary.install_path}")

    progress = orchestrator.progress.get_summary()
    click.echo(f"\nPipeline summary (total: {progress['total_duration']}s):")
    for p in progress["phases"]:
        status_icon = {
            "completed": "+",
            "failed": "!",
            "skipped": "-",
            "running": "~",
        }.get(p["status"], "?")
        duration = f" ({p['duration']}s)" if p["duration"] else ""
        detail = f" - {p['detail']}" if p["detail"] else ""
        click.echo(f"  [{status_icon}] {p['phase']}{duration}{detail}")


@main.command("managers")
def managers() -> None:
    """List supported package managers and whether they can run here."""
    registry = create_default_registry()
    runner = CommandRunner()
    for desc in registry.list_all():
        missing = registry.create(desc.kind, runner).check_prerequisites()
        if not desc.supports_platform(sys.platform):
            status = "unsupported on " + sys.platform
        elif missing:
            status = "; ".join(missing)
        else:
            status = "ready"
        caps = ", ".join(sorted(c.value for c in desc.capabilities)) or "-"
        click.echo(f"  {desc.kind.value:10s}  {desc.executable:8s}  {caps}")
        click.echo(f"      {status}")


@main.command("completions")
@click.argument("shell", type=click.Choice(["bash", "zsh", "fish"]))
def completions(shell: str) -> None:
    """Print the completion script for SHELL."""
    comp_cls = get_completion_class(shell)
    if comp_cls is None:
        click.echo(f"Error: unsupported shell '{shell}'", err=True)
        sys.exit(1)
    comp = comp_cls(main, {}, PROG_NAME, COMPLETE_VAR)
    click.echo(comp.source())


if __name__ == "__main__":
    main()
