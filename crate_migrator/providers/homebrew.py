"""Homebrew provider."""

from __future__ import annotations

import json
import logging
import shlex

from crate_migrator.exceptions import MetadataParseError
from crate_migrator.providers.base import PackageManager, PackageManagerKind

logger = logging.getLogger(__name__)


def parse_stable_version(payload: str) -> str:
    """Extract ``versions.stable`` from ``brew info --json=v1`` output."""
    try:
        info = json.loads(payload)
    except json.JSONDecodeError as e:
        raise MetadataParseError(f"invalid JSON: {e}") from e

    if not isinstance(info, list) or not info or not isinstance(info[0], dict):
        raise MetadataParseError("expected a non-empty JSON array of formulae")
    versions = info[0].get("versions")
    if not isinstance(versions, dict):
        raise MetadataParseError("formula has no 'versions' object")
    stable = versions.get("stable")
    if not isinstance(stable, str) or not stable:
        raise MetadataParseError("formula has no stable version")
    return stable


class Homebrew(PackageManager):
    """Formulae installed through ``brew``. Casks are not considered."""

    @property
    def kind(self) -> PackageManagerKind:
        return PackageManagerKind.HOMEBREW

    @property
    def executable(self) -> str:
        return "brew"

    def list_installed(self) -> list[str]:
        lines = self.runner.run("brew", ["list", "--formula"])
        return [line.strip() for line in lines if line.strip()]

    def has_target_dependency(self, package: str) -> bool:
        return self.runner.run_contains("brew", ["info", package], self.dependency_marker)

    def resolve_version(self, package: str) -> str | None:
        output = self.runner.run("brew", ["info", "--json=v1", package])
        try:
            return parse_stable_version("\n".join(output))
        except MetadataParseError as e:
            logger.debug("No stable version for %s: %s", package, e)
            return None

    def format_uninstall_command(self, package: str) -> str:
        return f"brew uninstall {shlex.quote(package)}"
