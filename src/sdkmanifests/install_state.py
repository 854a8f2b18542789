"""Workload install-state markers kept under the SDK root."""

from __future__ import annotations

from pathlib import Path


def user_local_marker(sdk_root: str | Path, feature_band: str) -> Path:
    return Path(sdk_root) / "metadata" / "workloads" / feature_band / "userlocal"


def is_user_local(sdk_root: str | Path, feature_band: str) -> bool:
    """True when workloads for this band install into the user profile.

    The installer drops an empty ``userlocal`` marker file for the band when
    the SDK directory itself is not writable.
    """
    return user_local_marker(sdk_root, feature_band).is_file()
