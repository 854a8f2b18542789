"""Exception types raised by manifest resolution and settings loading."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .manifests.types import ManifestSpecifier


class ManifestResolutionError(Exception):
    """Base class for failures while resolving manifest directories."""


class SpecifiedManifestNotFoundError(ManifestResolutionError, FileNotFoundError):
    """An explicitly pinned manifest version is not present in any root."""

    def __init__(self, specifier: ManifestSpecifier):
        self.specifier = specifier
        super().__init__(f"Specified workload manifest was not found: {specifier}")


class SettingsError(ValueError):
    """Raised for a malformed settings file or pin string."""
