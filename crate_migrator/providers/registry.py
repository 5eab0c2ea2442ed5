"""Provider registry — selects the package manager implementation for a run."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from crate_migrator.exceptions import UnknownManagerError
from crate_migrator.providers.base import PackageManager, PackageManagerKind
from crate_migrator.runner import CommandRunner

logger = logging.getLogger(__name__)


class ProviderCapability(Enum):
    """Parts of the provider contract a variant actually implements."""

    LIST_INSTALLED = "list_installed"
    DETECT_DEPENDENCY = "detect_dependency"
    RESOLVE_VERSION = "resolve_version"


@dataclass
class ProviderDescriptor:
    """Provider capability declaration."""

    kind: PackageManagerKind
    executable: str
    platforms: set[str]
    capabilities: set[ProviderCapability]
    factory: Callable[[CommandRunner | None], PackageManager]

    def supports_platform(self, platform: str) -> bool:
        """*platform* is a ``sys.platform`` value, e.g. "darwin"."""
        return platform in self.platforms


class ProviderRegistry:
    """Provider registration center."""

    def __init__(self) -> None:
        self._providers: dict[PackageManagerKind, ProviderDescriptor] = {}

    def register(self, descriptor: ProviderDescriptor) -> None:
        self._providers[descriptor.kind] = descriptor
        logger.debug("Registered provider: %s", descriptor.kind.value)

    def get(self, kind: PackageManagerKind) -> ProviderDescriptor | None:
        return self._providers.get(kind)

    def list_all(self) -> list[ProviderDescriptor]:
        return list(self._providers.values())

    def create(
        self,
        kind: PackageManagerKind,
        runner: CommandRunner | None = None,
    ) -> PackageManager:
        desc = self._providers.get(kind)
        if desc is None:
            raise UnknownManagerError(f"No provider registered for '{kind.value}'")
        return desc.factory(runner)


def create_default_registry() -> ProviderRegistry:
    """Create registry with the Homebrew, Apt, Winget and Cargo providers."""
    from crate_migrator.providers.apt import Apt
    from crate_migrator.providers.cargo import Cargo
    from crate_migrator.providers.homebrew import Homebrew
    from crate_migrator.providers.winget import Winget

    all_caps = {
        ProviderCapability.LIST_INSTALLED,
        ProviderCapability.DETECT_DEPENDENCY,
        ProviderCapability.RESOLVE_VERSION,
    }

    registry = ProviderRegistry()
    registry.register(
        ProviderDescriptor(
            kind=PackageManagerKind.HOMEBREW,
            executable="brew",
            platforms={"darwin", "linux"},
            capabilities=all_caps,
            factory=Homebrew,
        )
    )
    registry.register(
        ProviderDescriptor(
            kind=PackageManagerKind.APT,
            executable="apt",
            platforms={"linux"},
            capabilities=all_caps,
            factory=Apt,
        )
    )
    registry.register(
        ProviderDescriptor(
            kind=PackageManagerKind.WINGET,
            executable="winget",
            platforms={"win32"},
            capabilities={ProviderCapability.LIST_INSTALLED},
            factory=Winget,
        )
    )
    registry.register(
        ProviderDescriptor(
            kind=PackageManagerKind.CARGO,
            executable="cargo",
            platforms={"darwin", "linux", "win32"},
            capabilities={
                ProviderCapability.DETECT_DEPENDENCY,
                ProviderCapability.RESOLVE_VERSION,
            },
            factory=Cargo,
        )
    )
    return registry
