"""Data models for workload manifest resolution."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import BinaryIO

from ..feature_band import SdkFeatureBand

MANIFEST_FILE_NAME = "WorkloadManifest.json"


@dataclass(frozen=True)
class ManifestSpecifier:
    """An explicit (id, version, band) pin that bypasses directory discovery."""

    id: str
    version: str
    feature_band: SdkFeatureBand

    @classmethod
    def create(cls, id: str, version: str, feature_band: str) -> ManifestSpecifier:
        return cls(
            id=id, version=version, feature_band=SdkFeatureBand.parse(feature_band)
        )

    def __str__(self) -> str:
        return f"{self.id}: {self.version}/{self.feature_band}"


@dataclass(frozen=True)
class ReadableWorkloadManifest:
    """A resolved manifest whose files are opened only on demand.

    Neither opener is invoked during resolution; callers that skip a
    manifest never touch its files.
    """

    manifest_id: str
    manifest_directory: str
    manifest_path: str
    open_manifest_stream: Callable[[], BinaryIO] = field(repr=False, compare=False)
    open_localization_stream: Callable[[], BinaryIO | None] = field(
        repr=False, compare=False
    )
