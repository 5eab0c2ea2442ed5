"""Winget provider (Windows)."""

from __future__ import annotations

import shlex

from crate_migrator.exceptions import NotImplementedCapability
from crate_migrator.providers.base import PackageManager, PackageManagerKind


def parse_list_table(lines: list[str]) -> list[str]:
    """Extract the ``Id`` column from ``winget list`` table output.

    Columns are fixed-width and aligned to the header; rows start after
    the dashed separator line.
    """
    header_idx = None
    for i, line in enumerate(lines):
        if line.strip() and set(line.strip()) == {"-"}:
            header_idx = i - 1
            break
    if header_idx is None or header_idx < 0:
        return []

    header = lines[header_idx]
    id_start = header.find("Id")
    if id_start < 0:
        return []
    version_start = header.find("Version", id_start)
    id_end = version_start if version_start > 0 else None

    ids = []
    for row in lines[header_idx + 2:]:
        if len(row) <= id_start:
            continue
        package_id = row[id_start:id_end].strip()
        if package_id:
            ids.append(package_id.split()[0])
    return ids


class Winget(PackageManager):
    """Packages from the ``winget`` source.

    Dependency detection has no reliable signal in winget metadata yet and
    fails loudly rather than reporting every package as unrelated.
    """

    @property
    def kind(self) -> PackageManagerKind:
        return PackageManagerKind.WINGET

    @property
    def executable(self) -> str:
        return "winget"

    def list_installed(self) -> list[str]:
        return parse_list_table(self.runner.run("winget", ["list", "--source", "winget"]))

    def has_target_dependency(self, package: str) -> bool:
        raise NotImplementedCapability("winget", "dependency detection")

    def resolve_version(self, package: str) -> str | None:
        return None

    def format_uninstall_command(self, package: str) -> str:
        return f"winget uninstall {shlex.quote(package)}"
