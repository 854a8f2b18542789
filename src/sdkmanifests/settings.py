"""Resolver settings — environment lookup, .env support and settings.toml.

The resolver never reads ``os.environ`` directly. Instead it receives a
key -> value lookup built here from a snapshot of the process environment
layered over an optional ``.env`` file.

Key entities:
  - environment_lookup(): snapshot env + optional .env → callable lookup.
  - ResolverSettings: frozen dataclass with resolved settings for one SDK.
  - load_settings(): parse settings.toml → ResolverSettings.
  - parse_pin(): "id@version/band" → ManifestSpecifier.
"""

from __future__ import annotations

import logging
import os
import tomllib
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import dotenv_values

from .errors import SettingsError
from .manifests.types import ManifestSpecifier

logger = logging.getLogger(__name__)

# Additional manifest roots, os.pathsep-delimited, highest precedence
MANIFEST_ROOTS_ENV = "DOTNET_WORKLOAD_MANIFEST_ROOTS"
# Any value suppresses the SDK and user-profile default roots
IGNORE_DEFAULT_ROOTS_ENV = "DOTNET_WORKLOAD_MANIFEST_IGNORE_DEFAULT_ROOTS"

DEFAULT_LOCALE = "en-US"

EnvLookup = Callable[[str], str | None]


# ---------------------------------------------------------------------------
# Environment
# ---------------------------------------------------------------------------


def environment_lookup(
    env_file: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> EnvLookup:
    """Build a lookup over ``.env`` values overlaid by the process environment.

    Args:
        env_file: .env path to layer under the environment. None reads
            no file.
        environ: Environment mapping to snapshot. Defaults to ``os.environ``.

    Returns:
        A function mapping a variable name to its value, or None if unset.
        Later changes to the process environment are not observed.
    """
    values: dict[str, str] = {}

    if env_file is not None:
        if not env_file.is_file():
            raise FileNotFoundError(f"Environment file not found: {env_file}")
        # Keys declared without a value come back as None; treat them as unset
        values.update(
            (k, v) for k, v in dotenv_values(env_file).items() if v is not None
        )
        logger.debug("Loaded %d value(s) from %s", len(values), env_file)

    values.update(os.environ if environ is None else environ)
    return values.get


def local_env_file() -> Path | None:
    """Return ``./.env`` if it exists in the working directory."""
    local_env = Path(".env")
    return local_env if local_env.is_file() else None


def split_manifest_roots(value: str | None) -> list[str]:
    """Split a path-separator-delimited root list, dropping empty entries."""
    if not value:
        return []
    return [p for p in value.split(os.pathsep) if p]


# ---------------------------------------------------------------------------
# ResolverSettings
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ResolverSettings:
    """Static configuration for one SDK invocation."""

    sdk_root: Path
    sdk_version: str
    user_profile_dir: Path | None = None
    locale: str = DEFAULT_LOCALE
    pins: tuple[ManifestSpecifier, ...] = field(default_factory=tuple)


def parse_pin(text: str) -> ManifestSpecifier:
    """Parse ``id@version/band`` into a ManifestSpecifier.

    Raises:
        SettingsError: if any part is missing or the band is not a version.
    """
    manifest_id, sep, rest = text.strip().partition("@")
    version, sep2, band = rest.partition("/")
    if not (sep and sep2 and manifest_id and version and band):
        raise SettingsError(f"Invalid pin {text!r} (expected ID@VERSION/BAND)")
    try:
        return ManifestSpecifier.create(manifest_id, version, band)
    except ValueError as e:
        raise SettingsError(f"Invalid pin {text!r}: {e}") from e


def load_settings(path: Path) -> ResolverSettings:
    """Read a settings.toml and return ResolverSettings.

    Expected layout::

        [sdk]
        root = "/usr/share/dotnet"
        version = "6.0.200"
        user_profile_dir = "~/.dotnet"   # optional
        locale = "en-US"                 # optional

        [[pins]]
        id = "microsoft.net.sdk.android"
        version = "32.0.301"
        feature_band = "6.0.200"

    Raises:
        FileNotFoundError: if ``path`` does not exist.
        SettingsError: if required keys are missing or a pin is malformed.
    """
    if not path.is_file():
        raise FileNotFoundError(f"Settings file not found: {path}")

    with open(path, "rb") as f:
        try:
            raw = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise SettingsError(f"{path}: {e}") from e

    sdk = raw.get("sdk", {})
    root = sdk.get("root")
    version = sdk.get("version")
    if not root or not version:
        raise SettingsError(f"{path}: [sdk] must define 'root' and 'version'.")

    user_profile_dir = sdk.get("user_profile_dir")

    pins: list[ManifestSpecifier] = []
    for i, pin_raw in enumerate(raw.get("pins", [])):
        try:
            pins.append(
                ManifestSpecifier.create(
                    str(pin_raw["id"]),
                    str(pin_raw["version"]),
                    str(pin_raw["feature_band"]),
                )
            )
        except (KeyError, TypeError, ValueError) as e:
            raise SettingsError(f"{path}: pins[{i}] is invalid: {e}") from e

    return ResolverSettings(
        sdk_root=Path(root).expanduser(),
        sdk_version=str(version),
        user_profile_dir=(
            Path(user_profile_dir).expanduser() if user_profile_dir else None
        ),
        locale=str(sdk.get("locale", DEFAULT_LOCALE)),
        pins=tuple(pins),
    )
