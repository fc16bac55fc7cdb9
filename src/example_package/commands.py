"""The tutorial's command transcript as data.

Each :class:`Step` is one human-driven invocation of an external tool: the
build frontend, the upload client, or pip. Steps are plain data so they can
be printed as a transcript, run one at a time, or dry-run.

The upload step is the only one that needs a secret. The token is injected
into the child process environment (see :func:`upload_environment`) and is
never rendered by :func:`format_step` or written to the log.
"""
from __future__ import annotations

import os
import shlex
import subprocess
import sys
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from example_package import distribution
from example_package.config import APP_NAME, DEFAULT_INDEX_URL, DEFAULT_REPOSITORY, TOKEN_USERNAME

logger = logging.getLogger(APP_NAME)

DIST_DIR = "dist"
DIST_GLOB = "dist/*"


@dataclass
class Step:
    name: str
    description: str
    argv: List[str]
    env: Dict[str, str] = field(default_factory=dict)


def _python() -> str:
    return sys.executable or "python3"


def tutorial_steps(
    dist_name: Optional[str] = None,
    repository: str = DEFAULT_REPOSITORY,
    index_url: str = DEFAULT_INDEX_URL,
) -> List[Step]:
    """Return the ordered steps from building to installing ``dist_name``.

    Without ``dist_name`` only the build and upload steps are returned; they
    run in the project directory and do not depend on the name.

    The install step uses ``--no-deps`` because the test index may not carry
    the project's dependencies (or may carry unrelated packages of the same
    name).
    """
    py = _python()
    steps = [
        Step(
            "install-build",
            "Install or upgrade the build frontend",
            [py, "-m", "pip", "install", "--upgrade", "build"],
        ),
        Step(
            "build",
            "Build the source archive and the built archive into dist/",
            [py, "-m", "build"],
        ),
        Step(
            "install-twine",
            "Install or upgrade the upload client",
            [py, "-m", "pip", "install", "--upgrade", "twine"],
        ),
        Step(
            "upload",
            f"Upload dist/ to the '{repository}' repository",
            [py, "-m", "twine", "upload", "--repository", repository, DIST_GLOB],
        ),
    ]
    if dist_name is None:
        return steps

    module = distribution.import_name(dist_name)
    steps += [
        Step(
            "install",
            "Install the uploaded package without its dependencies",
            [
                py, "-m", "pip", "install",
                "--index-url", index_url,
                "--no-deps", distribution.normalize_name(dist_name),
            ],
        ),
        Step(
            "verify",
            "Import the installed package and call add_one(2)",
            [py, "-c", f"from {module} import example; print(example.add_one(2))"],
        ),
    ]
    return steps


def get_step(steps: List[Step], name: str) -> Step:
    for step in steps:
        if step.name == name:
            return step
    raise KeyError(f"Unknown step {name!r}; choose from {', '.join(s.name for s in steps)}")


def upload_environment(token: str) -> Dict[str, str]:
    """Return the environment the upload client reads its credentials from."""
    return {
        "TWINE_USERNAME": TOKEN_USERNAME,
        "TWINE_PASSWORD": token,
        "TWINE_NON_INTERACTIVE": "1",
    }


def format_step(step: Step) -> str:
    """Render ``step`` as a shell transcript line, e.g. ``$ python3 -m build``."""
    argv = list(step.argv)
    if argv and argv[0] == _python():
        argv[0] = "python3"
    return "$ " + shlex.join(argv)


def _expand_dist_glob(argv: List[str], cwd: Path) -> List[str]:
    if DIST_GLOB not in argv:
        return list(argv)
    dist_dir = cwd / DIST_DIR
    paths = [str(dist_dir / a.filename) for a in distribution.find_artifacts(dist_dir)]
    if not paths:
        raise FileNotFoundError(
            f"No distribution archives in {dist_dir}. Run the build step first."
        )
    expanded: List[str] = []
    for arg in argv:
        if arg == DIST_GLOB:
            expanded.extend(paths)
        else:
            expanded.append(arg)
    return expanded


def run_step(step: Step, cwd: Path, dry_run: bool = False) -> Optional[subprocess.CompletedProcess]:
    """Run ``step`` in ``cwd``; return ``None`` on a dry run.

    A non-zero exit raises :class:`subprocess.CalledProcessError` after it
    is logged, so later steps are not attempted.
    """
    cwd = Path(cwd)
    logger.info("[%s] %s", step.name, step.description)
    logger.info("%s", format_step(step))
    if dry_run:
        logger.info("Dry run; not executing '%s'", step.name)
        return None

    argv = _expand_dist_glob(step.argv, cwd)
    env = os.environ.copy()
    env.update(step.env)
    logger.debug("Executing %s in %s", argv, cwd)
    try:
        return subprocess.run(argv, cwd=str(cwd), env=env, check=True)
    except subprocess.CalledProcessError as e:
        logger.exception("Step '%s' failed with exit status %s", step.name, e.returncode)
        raise
    except FileNotFoundError:
        logger.exception("Step '%s' could not start %s", step.name, argv[0])
        raise
