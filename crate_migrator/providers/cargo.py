"""Cargo provider — the target manager itself."""

from __future__ import annotations

import re
import shlex

from crate_migrator.providers.base import PackageManager, PackageManagerKind

# ripgrep = "14.1.0"    # ripgrep is a line-oriented search tool ...
_SEARCH_LINE_RE = re.compile(r'^(?P<name>\S+)\s*=\s*"(?P<version>[^"]+)"')


class Cargo(PackageManager):
    """Never a migration source: ``list_installed`` is always empty."""

    @property
    def kind(self) -> PackageManagerKind:
        return PackageManagerKind.CARGO

    @property
    def executable(self) -> str:
        return "cargo"

    def list_installed(self) -> list[str]:
        return []

    def has_target_dependency(self, package: str) -> bool:
        return True

    def resolve_version(self, package: str) -> str | None:
        output = self.runner.run("cargo", ["search", "--limit", "1", package])
        if not output:
            return None
        m = _SEARCH_LINE_RE.match(output[0].strip())
        if not m or m.group("name") != package:
            return None
        return m.group("version")

    def format_uninstall_command(self, package: str) -> str:
        return f"cargo uninstall {shlex.quote(package)}"
