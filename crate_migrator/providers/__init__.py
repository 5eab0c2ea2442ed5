"""Package manager providers."""

from crate_migrator.providers.apt import Apt
from crate_migrator.providers.base import TARGET_MANAGER, PackageManager, PackageManagerKind
from crate_migrator.providers.cargo import Cargo
from crate_migrator.providers.homebrew import Homebrew
from crate_migrator.providers.registry import (
    ProviderCapability,
    ProviderDescriptor,
    ProviderRegistry,
    create_default_registry,
)
from crate_migrator.providers.winget import Winget

__all__ = [
    "Apt",
    "Cargo",
    "Homebrew",
    "PackageManager",
    "PackageManagerKind",
    "ProviderCapability",
    "ProviderDescriptor",
    "ProviderRegistry",
    "TARGET_MANAGER",
    "Winget",
    "create_default_registry",
]
