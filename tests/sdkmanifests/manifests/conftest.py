"""Shared fixtures for building SDK manifest layouts on disk."""

from pathlib import Path

import pytest


@pytest.fixture
def env():
    """Return a factory for an environment lookup over a fixed dict."""

    def _make(**values: str):
        return values.get

    return _make


@pytest.fixture
def sdk_root(tmp_path: Path) -> Path:
    root = tmp_path / "dotnet"
    (root / "sdk-manifests").mkdir(parents=True)
    return root


@pytest.fixture
def add_manifest():
    """Create ``<root>/<band>/<id>[/<version>]/WorkloadManifest.json``.

    Returns the manifest directory.
    """

    def _add(
        root: Path,
        band: str,
        manifest_id: str,
        version: str | None = None,
        with_file: bool = True,
    ) -> Path:
        manifest_dir = root / band / manifest_id
        if version is not None:
            manifest_dir = manifest_dir / version
        manifest_dir.mkdir(parents=True, exist_ok=True)
        if with_file:
            (manifest_dir / "WorkloadManifest.json").write_text(
                f'{{"version": "{version or "1.0.0"}"}}'
            )
        return manifest_dir

    return _add


@pytest.fixture
def write_known_ids():
    """Write a KnownWorkloadManifests.txt (or alternate name) for an SDK."""

    def _write(
        sdk_root: Path,
        sdk_version: str,
        ids: list[str],
        file_name: str = "KnownWorkloadManifests.txt",
    ) -> Path:
        sdk_dir = sdk_root / "sdk" / sdk_version
        sdk_dir.mkdir(parents=True, exist_ok=True)
        path = sdk_dir / file_name
        path.write_text("\n".join(ids) + "\n")
        return path

    return _write
