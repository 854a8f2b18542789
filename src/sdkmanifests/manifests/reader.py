"""Lazy file access for resolved manifests.

Resolution never opens files; these helpers back the two thunks carried
by each ReadableWorkloadManifest.

Key functions: open_manifest(), localization_catalog_path(),
try_open_localization_catalog().
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import BinaryIO

logger = logging.getLogger(__name__)

LOCALIZATION_DIR_NAME = "localize"


def open_manifest(manifest_path: str | Path) -> BinaryIO:
    return open(manifest_path, "rb")


def _culture_chain(locale: str) -> Iterator[str]:
    """Yield a locale followed by its parents: zh-Hant-TW, zh-Hant, zh."""
    parts = locale.replace("_", "-").split("-")
    for end in range(len(parts), 0, -1):
        culture = "-".join(p for p in parts[:end] if p)
        if culture:
            yield culture


def localization_catalog_path(
    manifest_path: str | Path,
    locale: str,
    exists: Callable[[Path], bool] = Path.is_file,
) -> Path | None:
    """Return the most specific localization catalog for ``locale``.

    Catalogs live beside the manifest as
    ``localize/WorkloadManifest.<culture>.json``. Returns None when no
    culture in the chain has one.
    """
    localize_dir = Path(manifest_path).parent / LOCALIZATION_DIR_NAME
    for culture in _culture_chain(locale):
        candidate = localize_dir / f"WorkloadManifest.{culture}.json"
        if exists(candidate):
            return candidate
    return None


def try_open_localization_catalog(
    manifest_path: str | Path, locale: str
) -> BinaryIO | None:
    catalog = localization_catalog_path(manifest_path, locale)
    if catalog is None:
        return None
    logger.debug("Opening localization catalog %s", catalog)
    return open(catalog, "rb")
