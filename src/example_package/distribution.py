"""Naming and discovery of the archives produced by the build step.

The build frontend writes two archives into ``dist/``:

- a source archive ``<name>-<version>.tar.gz``
- a built archive ``<name>-<version>-<tags>.whl``

``<name>`` inside filenames uses underscores, while the index and
``pip install`` use the dash-normalized form. ``<version>`` is the
normalized PEP 440 form the build backend writes (``1.0.0-beta`` becomes
``1.0.0b0``, ``01.2`` becomes ``1.2``). Both are derived here so the upload
and install steps agree on names.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import List

from packaging.utils import canonicalize_name, parse_sdist_filename, parse_wheel_filename
from packaging.version import Version

SDIST = "sdist"
WHEEL = "wheel"

SDIST_SUFFIX = ".tar.gz"
WHEEL_SUFFIX = ".whl"
DEFAULT_TAGS = "py3-none-any"


def normalize_name(name: str) -> str:
    """Return the index-facing project name (``Example_Pkg`` -> ``example-pkg``)."""
    return canonicalize_name(name)


def import_name(name: str) -> str:
    """Return the importable package name matching distribution ``name``."""
    return re.sub(r"[-.]", "_", name)


def filename_name(name: str) -> str:
    """Return the name as it appears in archive filenames."""
    return canonicalize_name(name).replace("-", "_")


def normalize_version(version: str) -> str:
    """Return ``version`` in normalized PEP 440 form.

    Raises ``ValueError`` (``packaging.version.InvalidVersion``) when the
    string is not a valid version.
    """
    return str(Version(version))


@dataclass(frozen=True)
class Artifact:
    filename: str
    kind: str
    name: str
    version: str
    tags: str = ""


def expected_artifacts(name: str, version: str, tags: str = DEFAULT_TAGS) -> List[Artifact]:
    """Return the source and built archives a build of ``name``/``version`` yields."""
    fname = filename_name(name)
    version = normalize_version(version)
    return [
        Artifact(f"{fname}-{version}{SDIST_SUFFIX}", SDIST, fname, version),
        Artifact(f"{fname}-{version}-{tags}{WHEEL_SUFFIX}", WHEEL, fname, version, tags),
    ]


def parse_artifact_filename(filename: str) -> Artifact:
    """Split an archive filename into name, version and tags.

    ``version`` is returned normalized. Raises ``ValueError`` for anything
    that is not a source archive or a well-formed built archive.
    """
    if filename.endswith(WHEEL_SUFFIX):
        _, version, _, _ = parse_wheel_filename(filename)
        # name-version[-build]-python-abi-platform
        parts = filename[: -len(WHEEL_SUFFIX)].split("-")
        return Artifact(filename, WHEEL, parts[0], str(version), "-".join(parts[-3:]))

    if filename.endswith(SDIST_SUFFIX):
        _, version = parse_sdist_filename(filename)
        name = filename[: -len(SDIST_SUFFIX)].rpartition("-")[0]
        return Artifact(filename, SDIST, name, str(version))

    raise ValueError(f"Not a distribution archive: {filename!r}")


def same_version(left: str, right: str) -> bool:
    """Compare two version strings by their parsed PEP 440 value."""
    return Version(left) == Version(right)


def find_artifacts(dist_dir: Path) -> List[Artifact]:
    """Return the archives found in ``dist_dir``, sorted by filename."""
    dist_dir = Path(dist_dir)
    if not dist_dir.is_dir():
        return []
    found: List[Artifact] = []
    for path in sorted(dist_dir.iterdir()):
        if not path.is_file():
            continue
        try:
            found.append(parse_artifact_filename(path.name))
        except ValueError:
            continue
    return found
