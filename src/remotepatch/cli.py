"""Command line entry point: `remotepatch`."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from remotepatch.config import ENV_BUILD_PATH, ENV_BUILD_SERVER, RemoteBuildConfig
from remotepatch.errors import RemotePatchError, describe_error
from remotepatch.manager import RemotePatchManager
from remotepatch.manifest import read_manifest

LOGGER = logging.getLogger(__name__)

_LOG_LEVELS = (logging.WARNING, logging.INFO, logging.DEBUG)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="remotepatch",
        description=(
            "Copy workspaces referenced by local [patch] paths to a remote build "
            "server and upload a Cargo.toml rewritten for the remote layout."
        ),
    )
    parser.add_argument(
        "--build-server",
        help=f"rsync/ssh host of the build server (default: ${ENV_BUILD_SERVER})",
    )
    parser.add_argument(
        "--build-path",
        help=f"remote build directory (default: ${ENV_BUILD_PATH})",
    )
    parser.add_argument(
        "--manifest-path",
        type=Path,
        default=Path("Cargo.toml"),
        help="path to the local Cargo.toml (default: ./Cargo.toml)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="print the rewritten manifest and workspaces; transfer nothing",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="increase log output (-v info, -vv debug)",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    level = _LOG_LEVELS[min(args.verbose, len(_LOG_LEVELS) - 1)]
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    try:
        config = RemoteBuildConfig.from_env(
            build_server=args.build_server,
            build_path=args.build_path,
        )
        manager = RemotePatchManager(config)
        if args.dry_run:
            _dry_run(manager, args.manifest_path)
        else:
            result = manager.handle_patches(args.manifest_path)
            LOGGER.info("Done: %s %s", result.status, result.summary)
    except RemotePatchError as exc:
        print(f"remotepatch: {describe_error(exc)}", file=sys.stderr)
        return 1
    return 0


def _dry_run(manager: RemotePatchManager, manifest_path: Path) -> None:
    text = read_manifest(manifest_path)
    plan = manager.build_plan(text, base_dir=manifest_path.resolve().parent)
    if not plan.has_patches:
        print("No patches in manifest; nothing to transfer.")
        return
    for project in plan.workspaces:
        print(f"{project.local_path} -> {project.remote_path}")
    print(plan.manifest_text, end="")


if __name__ == "__main__":
    sys.exit(main())
