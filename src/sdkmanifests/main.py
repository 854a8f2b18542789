"""Command-line entry point — inspect manifest resolution for an SDK.

Subcommands:
  directories — one resolved manifest directory per line.
  manifests   — ``id<TAB>manifest_path`` per resolved manifest.
  band        — the SDK feature band.
  roots       — manifest roots, highest precedence first.

SDK root/version come from ``--config`` (settings.toml) and may be
overridden on the command line.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from .errors import ManifestResolutionError, SettingsError
from .manifests.provider import SdkDirectoryManifestProvider
from .settings import (
    DEFAULT_LOCALE,
    ResolverSettings,
    environment_lookup,
    load_settings,
    local_env_file,
    parse_pin,
)

COMMANDS = ("directories", "manifests", "band", "roots")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sdk-manifests",
        description="Resolve SDK workload manifest directories.",
    )
    parser.add_argument("command", choices=COMMANDS)
    parser.add_argument("--config", type=Path, help="settings.toml to read")
    parser.add_argument(
        "--env-file", type=Path, help=".env file under the environment (default ./.env)"
    )
    parser.add_argument("--sdk-root", help="SDK installation root")
    parser.add_argument("--sdk-version", help="full SDK version, e.g. 6.0.201")
    parser.add_argument("--user-profile", type=Path, help="per-user dotnet directory")
    parser.add_argument(
        "--pin",
        action="append",
        default=[],
        metavar="ID@VERSION/BAND",
        help="pin a manifest version (repeatable)",
    )
    parser.add_argument(
        "--locale", help=f"localization culture (default {DEFAULT_LOCALE})"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def _resolve_settings(args: argparse.Namespace) -> ResolverSettings:
    """Merge --config file values with command-line overrides."""
    base: ResolverSettings | None = None
    if args.config is not None:
        base = load_settings(args.config)

    if args.sdk_root is not None and not args.sdk_root.strip():
        raise SettingsError("--sdk-root cannot be empty.")

    sdk_root = Path(args.sdk_root) if args.sdk_root else None
    if sdk_root is None and base is not None:
        sdk_root = base.sdk_root
    sdk_version = args.sdk_version or (base.sdk_version if base else None)
    if sdk_root is None or not sdk_version:
        raise SettingsError(
            "An SDK root and version are required "
            "(--sdk-root/--sdk-version or --config)."
        )

    pins = tuple(base.pins) if base else ()
    pins += tuple(parse_pin(p) for p in args.pin)

    return ResolverSettings(
        sdk_root=sdk_root,
        sdk_version=sdk_version,
        user_profile_dir=args.user_profile or (base.user_profile_dir if base else None),
        locale=args.locale or (base.locale if base else DEFAULT_LOCALE),
        pins=pins,
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=logging.WARNING,
    )
    if args.verbose:
        logging.getLogger("sdkmanifests").setLevel(logging.DEBUG)
    logger = logging.getLogger(__name__)

    try:
        settings = _resolve_settings(args)
        provider = SdkDirectoryManifestProvider(
            settings.sdk_root,
            settings.sdk_version,
            user_profile_dir=settings.user_profile_dir,
            requested_manifest_versions=settings.pins,
            get_env=environment_lookup(args.env_file or local_env_file()),
            locale=settings.locale,
        )
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    try:
        if args.command == "band":
            print(provider.get_sdk_feature_band())
        elif args.command == "roots":
            for root in provider.manifest_roots:
                print(root)
        elif args.command == "directories":
            for directory in provider.get_manifest_directories():
                print(directory)
        else:
            for manifest in provider.get_manifests():
                print(f"{manifest.manifest_id}\t{manifest.manifest_path}")
    except ManifestResolutionError as e:
        logger.debug("Resolution failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
