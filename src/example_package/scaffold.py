"""Create the tutorial's on-disk project layout.

The layout is fixed::

    <root>/
        LICENSE
        pyproject.toml
        README.md
        src/
            <import_name>/
                __init__.py
                example.py
        tests/

``tests/`` starts empty. The source subdirectory name matches the
distribution name so the build backend discovers the package without extra
configuration.
"""
from __future__ import annotations

import datetime as dt
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List

from example_package import distribution, templates
from example_package.config import (
    APP_NAME,
    DEFAULT_AUTHOR_EMAIL,
    DEFAULT_AUTHOR_NAME,
    DEFAULT_LICENSE,
    DEFAULT_REQUIRES_PYTHON,
    DEFAULT_USERNAME,
    DEFAULT_VERSION,
)

logger = logging.getLogger(APP_NAME)

_USERNAME_RE = re.compile(r"^[A-Za-z0-9._-]+$")

TESTS_DIR = "tests"


_TOML_ESCAPES = {"\\": "\\\\", "\"": "\\\"", "\n": "\\n", "\r": "\\r", "\t": "\\t"}


def _toml_escape(value: str) -> str:
    """Escape ``value`` for a TOML basic (double-quoted) string."""
    out = []
    for ch in value:
        if ch in _TOML_ESCAPES:
            out.append(_TOML_ESCAPES[ch])
        elif ord(ch) < 0x20 or ord(ch) == 0x7F:
            out.append(f"\\u{ord(ch):04X}")
        else:
            out.append(ch)
    return "".join(out)


@dataclass
class ProjectSettings:
    username: str = DEFAULT_USERNAME
    author_name: str = DEFAULT_AUTHOR_NAME
    author_email: str = DEFAULT_AUTHOR_EMAIL
    version: str = DEFAULT_VERSION
    description: str = "A small example package"
    requires_python: str = DEFAULT_REQUIRES_PYTHON
    license: str = DEFAULT_LICENSE
    homepage: str = "https://github.com/pypa/sampleproject"
    issues: str = "https://github.com/pypa/sampleproject/issues"
    year: int = field(default_factory=lambda: dt.date.today().year)

    def __post_init__(self):
        if not self.username or not _USERNAME_RE.match(self.username):
            raise ValueError(
                f"Invalid username {self.username!r}: use letters, digits, '_', '-' or '.' "
                "so the distribution name stays unique on the index."
            )
        try:
            distribution.normalize_version(self.version)
        except ValueError:
            raise ValueError(
                f"Invalid version {self.version!r}: use a PEP 440 version such as 0.0.1 or 1.0.0b1."
            ) from None

    @property
    def dist_name(self) -> str:
        return f"example_package_{self.username}"

    @property
    def import_name(self) -> str:
        return distribution.import_name(self.dist_name)


def render_files(settings: ProjectSettings) -> Dict[str, str]:
    """Return the layout as ``{relative posix path: file text}``.

    Only files are listed; the empty ``tests/`` directory is created by
    :func:`create_project`.
    """
    toml_values = {
        "dist_name": settings.dist_name,
        "version": settings.version,
        "author_name": settings.author_name,
        "author_email": settings.author_email,
        "description": settings.description,
        "requires_python": settings.requires_python,
        "license": settings.license,
        "homepage": settings.homepage,
        "issues": settings.issues,
    }
    pyproject = templates.PYPROJECT_TOML.substitute(
        {k: _toml_escape(v) for k, v in toml_values.items()}
    )
    package_dir = f"src/{settings.import_name}"
    return {
        "pyproject.toml": pyproject,
        "README.md": templates.README_MD.substitute(title="Example Package"),
        "LICENSE": templates.MIT_LICENSE.substitute(
            year=settings.year, author_name=settings.author_name
        ),
        f"{package_dir}/__init__.py": templates.PACKAGE_INIT,
        f"{package_dir}/example.py": templates.EXAMPLE_MODULE,
    }


def create_project(root: Path, settings: ProjectSettings, force: bool = False) -> List[Path]:
    """Write the tutorial layout under ``root`` and return the written files.

    Nothing is written when any target file already exists, unless
    ``force`` is set, in which case existing files are overwritten.
    """
    root = Path(root)
    files = render_files(settings)

    existing = [root / rel for rel in files if (root / rel).exists()]
    if existing and not force:
        raise FileExistsError(
            "Refusing to overwrite existing files: "
            + ", ".join(str(p) for p in existing)
            + ". Pass --force to replace them."
        )

    written: List[Path] = []
    for rel, text in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        logger.debug("Wrote %s", path)
        written.append(path)

    (root / TESTS_DIR).mkdir(parents=True, exist_ok=True)
    logger.info(f"Created {settings.dist_name} layout in {root} ({len(written)} files)")
    return written
