"""bomrepo CLI entry points.
This module exposes commands for storing, reading, and deleting BOMs.
It maps argparse commands onto SDK calls.
"""

from __future__ import annotations

import argparse
import json
from dataclasses import replace
from pathlib import Path
from typing import Any, Sequence

from core.config import BomRepoConfig
from core.constants import SUPPORTED_STORAGE_BACKENDS
from core.errors import BomAlreadyExistsError, BomRepoError
from core.logging_config import configure_logging
from core.types import BomDocument
from store.bom_payload import bom_to_payload
from store.repo_sdk import BomRepoClient

EXIT_OK = 0
EXIT_NOT_FOUND = 1
EXIT_REJECTED = 2


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="bomrepo", description="Versioned SBOM repository")
    parser.add_argument("--data-root", help="Override BOMREPO_DATA_ROOT for this command")
    parser.add_argument(
        "--backend",
        choices=SUPPORTED_STORAGE_BACKENDS,
        help="Override BOMREPO_STORAGE_BACKEND for this command",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_store_command(subparsers)
    _add_get_command(subparsers)
    _add_serial_command(subparsers, "latest", "Print the latest version of a BOM")
    _add_serial_command(subparsers, "versions", "List stored version numbers")
    _add_serial_command(subparsers, "all", "Print every version as a JSON array")
    _add_delete_command(subparsers)
    _add_serial_command(subparsers, "delete-all", "Delete every version of a BOM")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the bomrepo CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = _build_config(args.data_root, args.backend)
        configure_logging(config.log_level)
        client = BomRepoClient(config)
        return _dispatch(client, args)
    except BomAlreadyExistsError as error:
        print(f"conflict: {error}")
        return EXIT_REJECTED
    except BomRepoError as error:
        print(f"error: {error}")
        return EXIT_REJECTED


def _dispatch(client: BomRepoClient, args: argparse.Namespace) -> int:
    """Route parsed args to a command handler.

    Args:
        client: SDK client.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    if args.command == "store":
        stored = client.store_file(args.file, version=args.version)
        print(f"{stored.serial_number}\t{stored.version}")
        return EXIT_OK
    if args.command == "get":
        return _print_document(client.retrieve(args.serial_number, args.version))
    if args.command == "latest":
        return _print_document(client.retrieve_latest(args.serial_number))
    if args.command == "versions":
        for version in client.list_versions(args.serial_number):
            print(version)
        return EXIT_OK
    if args.command == "all":
        documents = client.retrieve_all(args.serial_number)
        print(json.dumps([bom_to_payload(document) for document in documents], indent=2))
        return EXIT_OK
    if args.command == "delete":
        client.delete(args.serial_number, args.version)
        return EXIT_OK
    if args.command == "delete-all":
        client.delete_all(args.serial_number)
        return EXIT_OK
    raise ValueError(f"Unsupported command: {args.command}")


def _build_config(data_root: str | None, backend: str | None) -> BomRepoConfig:
    """Build config with optional command-line overrides.

    Args:
        data_root: Optional data root override.
        backend: Optional storage backend override.

    Returns:
        Runtime configuration.
    """
    config = BomRepoConfig.from_env()
    if data_root:
        config = replace(config, data_root=Path(data_root).expanduser().resolve())
    if backend:
        config = replace(config, storage_backend=backend)
    return config


def _print_document(document: BomDocument | None) -> int:
    """Print a document as JSON, or report that it is missing.

    Args:
        document: Retrieved document, if any.

    Returns:
        Exit code.
    """
    if document is None:
        print("not found")
        return EXIT_NOT_FOUND
    print(json.dumps(bom_to_payload(document), indent=2, sort_keys=True))
    return EXIT_OK


def _add_store_command(subparsers: Any) -> None:
    """Register store subcommand."""
    parser = subparsers.add_parser("store", help="Store a CycloneDX JSON document")
    parser.add_argument("file", help="Path to a CycloneDX JSON file")
    parser.add_argument(
        "--version",
        type=int,
        help="Explicit version; the next version is assigned when omitted",
    )


def _add_get_command(subparsers: Any) -> None:
    """Register get subcommand."""
    parser = subparsers.add_parser("get", help="Print one version of a BOM")
    parser.add_argument("serial_number", help="BOM serial number (urn:uuid:...)")
    parser.add_argument("version", type=int, help="Version number")


def _add_delete_command(subparsers: Any) -> None:
    """Register delete subcommand."""
    parser = subparsers.add_parser("delete", help="Delete one version of a BOM")
    parser.add_argument("serial_number", help="BOM serial number (urn:uuid:...)")
    parser.add_argument("version", type=int, help="Version number")


def _add_serial_command(subparsers: Any, name: str, help_text: str) -> None:
    """Register a subcommand that takes only a serial number."""
    parser = subparsers.add_parser(name, help=help_text)
    parser.add_argument("serial_number", help="BOM serial number (urn:uuid:...)")
