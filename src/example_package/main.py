"""Command-line entry point for the packaging walkthrough.

Sub-commands follow the tutorial in order:

- ``init``: write the project layout for a username.
- ``steps``: print the command transcript without running anything.
- ``build``: install the build frontend and build ``dist/``.
- ``artifacts``: list the archives found in ``dist/``.
- ``save-token`` / ``upload``: store the index API token, then upload.
- ``check-index``: confirm the upload is visible on the index.
- ``install``: install from the index with ``--no-deps`` and call
    ``add_one(2)``.

Every sub-command returns a process exit status; errors are logged rather
than surfaced as tracebacks.
"""
from __future__ import annotations

import argparse
import dataclasses
import getpass
import logging
import subprocess
import sys
from pathlib import Path
from typing import List, Optional

import requests

from example_package import commands, distribution
from example_package.config import (
    APP_NAME,
    DEFAULT_AUTHOR_EMAIL,
    DEFAULT_AUTHOR_NAME,
    DEFAULT_INDEX_URL,
    DEFAULT_LOG_LEVEL,
    DEFAULT_REPOSITORY,
    DEFAULT_USERNAME,
    DEFAULT_VERSION,
    get_api_token,
    save_api_token,
)
from example_package.index_service import IndexService
from example_package.scaffold import ProjectSettings, create_project

logger = logging.getLogger(APP_NAME)


def _add_name_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--username", "-u",
        help="Username suffix of the distribution name",
        default=DEFAULT_USERNAME,
    )
    parser.add_argument(
        "--name",
        help="Full distribution name (overrides --username)",
    )


def _add_dir_arg(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--dir", "-d",
        help="Project root directory",
        type=Path,
        default=Path("."),
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Scaffold, build, upload and install the tutorial example package",
    )
    parser.add_argument(
        "--log-level", "-l",
        help="Log level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=DEFAULT_LOG_LEVEL,
    )
    parser.add_argument(
        "--dry-run", "-n",
        help="Log the commands instead of running them",
        action="store_true",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("init", help="Create the project layout")
    _add_dir_arg(p)
    p.add_argument("--username", "-u", default=DEFAULT_USERNAME)
    p.add_argument("--author-name", default=DEFAULT_AUTHOR_NAME)
    p.add_argument("--author-email", default=DEFAULT_AUTHOR_EMAIL)
    p.add_argument("--version", default=DEFAULT_VERSION)
    p.add_argument("--force", action="store_true", help="Overwrite existing files")

    p = sub.add_parser("steps", help="Print the tutorial command transcript")
    _add_name_args(p)
    p.add_argument("--repository", default=DEFAULT_REPOSITORY)
    p.add_argument("--index-url", default=DEFAULT_INDEX_URL)

    p = sub.add_parser("build", help="Build the source and built archives")
    _add_dir_arg(p)
    p.add_argument("--no-upgrade", action="store_true", help="Skip upgrading the build frontend")

    p = sub.add_parser("artifacts", help="List archives in dist/")
    _add_dir_arg(p)

    p = sub.add_parser("save-token", help="Store the index API token")
    p.add_argument("--token", help="Token value (prompted for when omitted)")

    p = sub.add_parser("upload", help="Upload dist/ to the index")
    _add_dir_arg(p)
    p.add_argument("--repository", default=DEFAULT_REPOSITORY)
    p.add_argument("--no-upgrade", action="store_true", help="Skip upgrading the upload client")

    p = sub.add_parser("check-index", help="Show what the index serves for the project")
    _add_name_args(p)
    p.add_argument("--index-url", default=DEFAULT_INDEX_URL)
    p.add_argument("--release", help="Exit non-zero unless this version is served")

    p = sub.add_parser("install", help="Install from the index and call add_one(2)")
    _add_dir_arg(p)
    _add_name_args(p)
    p.add_argument("--index-url", default=DEFAULT_INDEX_URL)

    return parser


def _dist_name(args: argparse.Namespace) -> str:
    if args.name:
        return args.name
    return ProjectSettings(username=args.username).dist_name


def cmd_init(args: argparse.Namespace) -> int:
    settings = ProjectSettings(
        username=args.username,
        author_name=args.author_name,
        author_email=args.author_email,
        version=args.version,
    )
    for path in create_project(args.dir, settings, force=args.force):
        print(path)
    return 0


def cmd_steps(args: argparse.Namespace) -> int:
    steps = commands.tutorial_steps(_dist_name(args), args.repository, args.index_url)
    for step in steps:
        print(f"# {step.description}")
        print(commands.format_step(step))
    return 0


def _run_named(steps: List[commands.Step], names: List[str], cwd: Path, dry_run: bool) -> None:
    for name in names:
        commands.run_step(commands.get_step(steps, name), cwd, dry_run=dry_run)


def cmd_build(args: argparse.Namespace) -> int:
    steps = commands.tutorial_steps()
    names = ["build"] if args.no_upgrade else ["install-build", "build"]
    _run_named(steps, names, args.dir, args.dry_run)
    if not args.dry_run:
        for artifact in distribution.find_artifacts(args.dir / commands.DIST_DIR):
            logger.info("Built %s (%s)", artifact.filename, artifact.kind)
    return 0


def cmd_artifacts(args: argparse.Namespace) -> int:
    found = distribution.find_artifacts(args.dir / commands.DIST_DIR)
    if not found:
        logger.warning("No archives in %s", args.dir / commands.DIST_DIR)
        return 1
    for artifact in found:
        print(f"{artifact.kind:6} {artifact.filename}")
    return 0


def cmd_save_token(args: argparse.Namespace) -> int:
    token = args.token or getpass.getpass("API token (starts with 'pypi-'): ")
    path = save_api_token(token)
    print(path)
    return 0


def cmd_upload(args: argparse.Namespace) -> int:
    steps = commands.tutorial_steps(repository=args.repository)
    upload = commands.get_step(steps, "upload")
    # Token is resolved before any pip run.
    if not args.dry_run:
        upload = dataclasses.replace(upload, env=commands.upload_environment(get_api_token()))
    if not args.no_upgrade:
        _run_named(steps, ["install-twine"], args.dir, args.dry_run)
    commands.run_step(upload, args.dir, dry_run=args.dry_run)
    return 0


def cmd_check_index(args: argparse.Namespace) -> int:
    name = _dist_name(args)
    index = IndexService(args.index_url)
    files = index.list_files(name)
    for entry in files:
        print(entry["filename"])
    if args.release:
        if not index.has_release(name, args.release, files=files):
            logger.error("Version %s of %s is not on %s", args.release, name, index.index_url)
            return 1
        logger.info("Version %s of %s is available", args.release, name)
    return 0 if files or args.release else 1


def cmd_install(args: argparse.Namespace) -> int:
    steps = commands.tutorial_steps(_dist_name(args), index_url=args.index_url)
    _run_named(steps, ["install", "verify"], args.dir, args.dry_run)
    return 0


HANDLERS = {
    "init": cmd_init,
    "steps": cmd_steps,
    "build": cmd_build,
    "artifacts": cmd_artifacts,
    "save-token": cmd_save_token,
    "upload": cmd_upload,
    "check-index": cmd_check_index,
    "install": cmd_install,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Parse ``argv``, configure logging and dispatch to a sub-command."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    logger.debug(f"Running '{args.command}'")
    try:
        return HANDLERS[args.command](args)
    except subprocess.CalledProcessError as e:
        logger.error(f"Command failed with exit status {e.returncode}: {e.cmd}")
    except requests.RequestException as e:
        logger.error(f"Index request failed: {e}")
    except (ValueError, KeyError, OSError) as e:
        logger.error(str(e))
    return 1


if __name__ == "__main__":
    sys.exit(main())
