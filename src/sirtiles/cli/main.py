"""CLI entry point for SirTiles."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Iterable

import sirtiles
from sirtiles.catalog import RepositoryCatalog
from sirtiles.config import ServerConfig, load_config
from sirtiles.core.errors import (
    RepositoryNotFoundError,
    ScanFailure,
    ShardIOError,
    TileNotFoundError,
)
from sirtiles.core.models import ServerInfo
from sirtiles.logging import configure_logging, get_logger
from sirtiles.storage import TileStore

LOGGER = get_logger(__name__)

DEFAULT_CONFIG = Path("sirtiles.yaml")
SERVER_INFO = ServerInfo(name="SirTiles", version=sirtiles.__version__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="SirTiles sharded tile store")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to server configuration file (YAML or JSON)",
    )
    parser.add_argument(
        "--repo-root",
        "-r",
        type=Path,
        default=None,
        help="Root directory for tile repositories (overrides config)",
    )
    parser.add_argument("--log-json", action="store_true", help="Emit logs in JSON format")
    parser.add_argument("--log-level", default=None, help="Logging level (default: config or INFO)")
    subcommands = parser.add_subparsers(dest="command", required=True)

    subcommands.add_parser("list", help="List repositories with their descriptors")

    scan = subcommands.add_parser("scan", help="Rescan a repository and refresh repository.json")
    scan.add_argument("name", help="Repository directory name under the root")
    scan.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Abort the scan after this many seconds",
    )

    tile = subcommands.add_parser("tile", help="Extract a single tile")
    tile.add_argument("name", help="Repository directory name under the root")
    tile.add_argument("zoom", type=int, help="Tile zoom level")
    tile.add_argument("x", type=int, help="Tile column")
    tile.add_argument("y", type=int, help="Tile row")
    tile.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Destination file (default: write bytes to stdout)",
    )

    subcommands.add_parser("info", help="Print server metadata as JSON")
    subcommands.add_parser("version", help="Print the version number")
    return parser


def main(argv: Iterable[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    config = _resolve_config(args)
    configure_logging(level=args.log_level or config.log_level, json_logs=args.log_json or config.json_logs)

    if args.command == "version":
        print(f"{SERVER_INFO.name} version {SERVER_INFO.version}")
        return 0
    if args.command == "info":
        print(json.dumps(SERVER_INFO.to_dict(), indent=2))
        return 0
    try:
        if args.command == "list":
            return _handle_list(config)
        if args.command == "scan":
            return _handle_scan(args, config)
        if args.command == "tile":
            return _handle_tile(args, config)
    except RepositoryNotFoundError as exc:
        LOGGER.error("%s", exc)
        return 2
    except ShardIOError as exc:
        LOGGER.error("%s", exc)
        return 1
    parser.error("Unknown command")
    return 1


def _resolve_config(args: argparse.Namespace) -> ServerConfig:
    if args.config is not None:
        config_path = args.config.resolve()
        if not config_path.exists():
            raise SystemExit(f"Configuration file not found: {config_path}")
        config = load_config(config_path)
    elif DEFAULT_CONFIG.exists():
        config = load_config(DEFAULT_CONFIG.resolve())
    else:
        config = ServerConfig()
    if args.repo_root is not None:
        config.repository_root = args.repo_root.resolve()
    return config


def _build_catalog(config: ServerConfig) -> RepositoryCatalog:
    return RepositoryCatalog(
        config.repository_root,
        sidecar_name=config.sidecar_name,
        scan_timeout=config.scan_timeout_seconds,
    )


def _handle_list(config: ServerConfig) -> int:
    catalog = _build_catalog(config)
    repositories = catalog.list_repositories()
    print(json.dumps([repo.to_dict() for repo in repositories], indent=2))
    return 0


def _handle_scan(args: argparse.Namespace, config: ServerConfig) -> int:
    if args.timeout is not None:
        config.scan_timeout_seconds = args.timeout
    catalog = _build_catalog(config)
    try:
        descriptor = catalog.rescan(args.name)
    except (ScanFailure, ShardIOError) as exc:
        LOGGER.error("scan of %s failed: %s", args.name, exc)
        return 1
    print(json.dumps(descriptor.to_dict(), indent=2))
    return 0


def _handle_tile(args: argparse.Namespace, config: ServerConfig) -> int:
    store = TileStore.open(config.repository_root, args.name, create=config.create_missing)
    try:
        data = store.fetch(args.x, args.y, args.zoom)
    except TileNotFoundError as exc:
        LOGGER.warning("tile not found: %s", exc)
        return 1
    except ShardIOError as exc:
        LOGGER.error("%s", exc)
        return 1

    if args.output is None:
        sys.stdout.buffer.write(data)
        sys.stdout.buffer.flush()
    else:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_bytes(data)
        LOGGER.info("wrote %d bytes to %s", len(data), args.output)
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
