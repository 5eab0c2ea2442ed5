"""Apt provider (Debian/Ubuntu)."""

from __future__ import annotations

import logging
import re
import shlex

from crate_migrator.providers.base import PackageManager, PackageManagerKind

logger = logging.getLogger(__name__)

# Leading dotted numeric version, e.g. "13.0.0" in "13.0.0-4" or "0.10.3+dfsg-1"
_UPSTREAM_RE = re.compile(r"^\d+(\.\d+)*")


def upstream_version(debian_version: str) -> str | None:
    """Reduce a Debian version string to the upstream release.

    ``"1:13.0.0+ds-4ubuntu1"`` -> ``"13.0.0"``. Returns None when nothing
    resembling a release number remains.
    """
    version = debian_version.strip()
    if ":" in version:
        version = version.split(":", 1)[1]
    if "-" in version:
        version = version.rsplit("-", 1)[0]
    m = _UPSTREAM_RE.match(version)
    return m.group(0) if m else None


class Apt(PackageManager):

    @property
    def kind(self) -> PackageManagerKind:
        return PackageManagerKind.APT

    @property
    def executable(self) -> str:
        return "apt"

    def list_installed(self) -> list[str]:
        # "ripgrep/jammy,now 13.0.0-4 amd64 [installed]"; multiarch repeats a name per arch
        packages: dict[str, None] = {}
        for line in self.runner.run("apt", ["list", "--installed"]):
            line = line.strip()
            if not line or line.startswith("Listing") or "/" not in line:
                continue
            name = line.split("/", 1)[0].split(":", 1)[0]
            packages.setdefault(name, None)
        return list(packages)

    def has_target_dependency(self, package: str) -> bool:
        return self.runner.run_contains("apt", ["show", package], self.dependency_marker)

    def resolve_version(self, package: str) -> str | None:
        output = self.runner.run("dpkg-query", ["-W", "-f=${Version}", package])
        raw = "".join(output).strip()
        if not raw:
            return None
        version = upstream_version(raw)
        if version is None:
            logger.debug("Unusable Debian version for %s: %r", package, raw)
        return version

    def format_uninstall_command(self, package: str) -> str:
        return f"apt remove {shlex.quote(package)}"
