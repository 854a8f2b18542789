"""SDK directory manifest provider — resolves one directory per manifest id.

Reconciles several sources into a single ordered result:
  1. Directory scan of ``<root>/<band>/`` across all manifest roots
     (higher-precedence roots win, outdated ids dropped).
  2. Explicit version pins, which always override the scan.
  3. Cross-band fallback for known ids still missing, searched only in the
     lowest-precedence root (normally the SDK's own sdk-manifests).
  4. Stable ordering: known ids in file order, then the rest alphabetically.

The provider holds only immutable configuration; every call re-reads disk.

Key class: SdkDirectoryManifestProvider.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterable, Iterator
from pathlib import Path

from ..errors import SpecifiedManifestNotFoundError
from ..feature_band import SdkFeatureBand
from ..install_state import is_user_local
from ..settings import (
    DEFAULT_LOCALE,
    IGNORE_DEFAULT_ROOTS_ENV,
    MANIFEST_ROOTS_ENV,
    EnvLookup,
    environment_lookup,
    split_manifest_roots,
)
from .reader import open_manifest, try_open_localization_catalog
from .types import MANIFEST_FILE_NAME, ManifestSpecifier, ReadableWorkloadManifest

logger = logging.getLogger(__name__)

MANIFESTS_DIR_NAME = "sdk-manifests"

# First file found wins
KNOWN_MANIFESTS_FILE_NAMES = (
    "KnownWorkloadManifests.txt",
    "IncludedWorkloadManifests.txt",
)

# Superseded manifest ids; hidden from directory scans but still pinnable
OUTDATED_MANIFEST_IDS = frozenset(
    {
        "microsoft.net.workload.android",
        "microsoft.net.workload.blazorwebassembly",
        "microsoft.net.workload.ios",
        "microsoft.net.workload.maccatalyst",
        "microsoft.net.workload.macos",
        "microsoft.net.workload.tvos",
        "microsoft.net.workload.mono.toolchain",
    }
)

_UNKNOWN_RANK = sys.maxsize


def _id_key(manifest_id: str) -> str:
    """Case-insensitive map key for a manifest id."""
    return manifest_id.lower()


def is_manifest_id_outdated(manifest_id: str) -> bool:
    return _id_key(manifest_id) in OUTDATED_MANIFEST_IDS


def load_known_manifest_ids(sdk_root: Path, sdk_version: str) -> tuple[str, ...] | None:
    """Read the known-manifest list shipped with an SDK version.

    Returns the non-blank lines in file order, or None if neither file exists.
    """
    sdk_dir = sdk_root / "sdk" / sdk_version
    for name in KNOWN_MANIFESTS_FILE_NAMES:
        path = sdk_dir / name
        if path.is_file():
            lines = path.read_text(encoding="utf-8-sig").splitlines()
            ids = tuple(line.strip() for line in lines if line.strip())
            logger.debug("Loaded %d known manifest id(s) from %s", len(ids), path)
            return ids
    return None


def _is_blank(value: str | Path | None) -> bool:
    # Path("") normalizes to "." and has no parts
    if isinstance(value, Path) and not value.parts:
        return True
    return value is None or not str(value).strip()


class SdkDirectoryManifestProvider:
    """Locate workload manifest directories for one SDK installation.

    Args:
        sdk_root: SDK installation root (contains ``sdk-manifests/``).
        sdk_version: Full SDK version; reduced to its feature band.
        user_profile_dir: Per-user dotnet directory, consulted only for
            user-local installs.
        requested_manifest_versions: Explicit pins; later entries replace
            earlier ones with the same id (case-insensitive).
        get_env: Environment lookup. Defaults to the process environment
            only; no .env file is read.
        locale: Culture used when opening localization catalogs.

    Raises:
        ValueError: if ``sdk_version`` or ``sdk_root`` is blank.
    """

    def __init__(
        self,
        sdk_root: str | Path,
        sdk_version: str,
        user_profile_dir: str | Path | None = None,
        requested_manifest_versions: Iterable[ManifestSpecifier] | None = None,
        get_env: EnvLookup | None = None,
        locale: str = DEFAULT_LOCALE,
    ) -> None:
        if _is_blank(sdk_version):
            raise ValueError("'sdk_version' cannot be None or whitespace")
        if _is_blank(sdk_root):
            raise ValueError("'sdk_root' cannot be None or whitespace")

        if get_env is None:
            get_env = environment_lookup()

        self._sdk_root = Path(sdk_root)
        self._band = SdkFeatureBand.parse(sdk_version)
        self._locale = locale

        self._known_ids = load_known_manifest_ids(self._sdk_root, sdk_version)
        self._known_ranks: dict[str, int] | None = None
        if self._known_ids is not None:
            self._known_ranks = {}
            for rank, manifest_id in enumerate(self._known_ids):
                self._known_ranks[_id_key(manifest_id)] = rank

        self._manifest_roots = tuple(
            self._build_manifest_roots(get_env, user_profile_dir)
        )
        logger.debug("Manifest roots for %s: %s", self._band, self._manifest_roots)

        self._pins: dict[str, ManifestSpecifier] = {}
        for specifier in requested_manifest_versions or ():
            self._pins[_id_key(specifier.id)] = specifier

    def _build_manifest_roots(
        self, get_env: EnvLookup, user_profile_dir: str | Path | None
    ) -> list[str]:
        roots: list[str] = []

        if get_env(IGNORE_DEFAULT_ROOTS_ENV) is None:
            sdk_manifests = self._sdk_root / MANIFESTS_DIR_NAME
            roots.append(str(sdk_manifests))
            if user_profile_dir is not None:
                user_manifests = Path(user_profile_dir) / MANIFESTS_DIR_NAME
                user_local = is_user_local(self._sdk_root, str(self._band))
                if user_local and user_manifests.is_dir():
                    roots.insert(0, str(user_manifests))

        # Env roots are band-agnostic so one setting can serve several SDKs
        return split_manifest_roots(get_env(MANIFEST_ROOTS_ENV)) + roots

    # --- Accessors ---

    @property
    def manifest_roots(self) -> tuple[str, ...]:
        """Manifest roots, highest precedence first."""
        return self._manifest_roots

    @property
    def sdk_feature_band(self) -> SdkFeatureBand:
        return self._band

    @property
    def known_manifest_ids(self) -> tuple[str, ...] | None:
        return self._known_ids

    def get_sdk_feature_band(self) -> str:
        return str(self._band)

    # --- Resolution ---

    def get_manifests(self) -> Iterator[ReadableWorkloadManifest]:
        """Yield each resolved manifest with deferred openers for its files."""
        for directory in self.get_manifest_directories():
            manifest_path = str(Path(directory) / MANIFEST_FILE_NAME)
            yield ReadableWorkloadManifest(
                manifest_id=Path(directory).name,
                manifest_directory=directory,
                manifest_path=manifest_path,
                open_manifest_stream=lambda p=manifest_path: open_manifest(p),
                open_localization_stream=lambda p=manifest_path: (
                    try_open_localization_catalog(p, self._locale)
                ),
            )

    def get_manifest_directories(self) -> list[str]:
        """Return one manifest directory per id, in stable order."""
        # id key -> (id as found, directory)
        found: dict[str, tuple[str, str]] = {}

        # Lowest precedence first so higher-precedence roots overwrite.
        # With a single root this is just a direct scan.
        band = str(self._band)
        for root in reversed(self._manifest_roots):
            band_dir = Path(root) / band
            if not band_dir.is_dir():
                continue
            for manifest_dir in sorted(p for p in band_dir.iterdir() if p.is_dir()):
                found[_id_key(manifest_dir.name)] = (
                    manifest_dir.name,
                    str(manifest_dir),
                )

        found = {
            key: entry
            for key, entry in found.items()
            if not is_manifest_id_outdated(entry[0])
        }

        for key, specifier in self._pins.items():
            found[key] = (specifier.id, self._directory_for_specifier(specifier))

        if self._known_ids is not None:
            for manifest_id in self._known_ids:
                if _id_key(manifest_id) in found:
                    continue
                fallback = self._fallback_for_missing_manifest(manifest_id)
                if fallback is None:
                    logger.debug("Known manifest %s is not installed", manifest_id)
                    continue
                found[_id_key(manifest_id)] = (manifest_id, fallback)

        known_ranks = self._known_ranks or {}

        # Ordinal ignore-case compares upper-cased code points
        def sort_key(item: tuple[str, tuple[str, str]]) -> tuple[int, str]:
            key, (manifest_id, _) = item
            return (known_ranks.get(key, _UNKNOWN_RANK), manifest_id.upper())

        return [directory for _, (_, directory) in sorted(found.items(), key=sort_key)]

    def _directory_for_specifier(self, specifier: ManifestSpecifier) -> str:
        for root in self._manifest_roots:
            band_dir = Path(root) / str(specifier.feature_band)
            candidate = band_dir / specifier.id / specifier.version
            if (candidate / MANIFEST_FILE_NAME).is_file():
                logger.info("Using pinned manifest %s from %s", specifier, candidate)
                return str(candidate)
        raise SpecifiedManifestNotFoundError(specifier)

    def _fallback_for_missing_manifest(self, manifest_id: str) -> str | None:
        """Find ``manifest_id`` in the newest older band of the last root."""
        if not self._manifest_roots:
            return None
        fallback_root = Path(self._manifest_roots[-1])
        if not fallback_root.is_dir():
            return None

        current_release = self._band.without_prerelease()
        candidates: list[SdkFeatureBand] = []
        for band_dir in fallback_root.iterdir():
            if not band_dir.is_dir():
                continue
            try:
                band = SdkFeatureBand.parse(band_dir.name)
            except ValueError:
                logger.debug("Ignoring non-band directory %s", band_dir)
                continue
            # A prerelease band may use its own released band's manifests
            if band < self._band or str(band) == current_release:
                if (fallback_root / str(band) / manifest_id).is_dir():
                    candidates.append(band)

        if not candidates:
            return None
        best = max(candidates)
        logger.debug("Falling back to band %s for manifest %s", best, manifest_id)
        return str(fallback_root / str(best) / manifest_id)
