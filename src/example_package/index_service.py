"""Package index helpers.

This module reads a package index's *simple* page for one project, the same
HTML listing pip consults when installing by name:
- List the archives an index currently serves for a project.
- Check whether a given version has landed after an upload.

Design notes
- Read-only: uploading is delegated to the external upload client (see
    :mod:`example_package.commands`); nothing here writes to the index.
- A fresh upload can take a moment to appear on mirrors/CDN caches, so
    transient HTTP failures are retried with backoff rather than failing the
    check outright.
"""
from __future__ import annotations

import time
import logging
from typing import Dict, List, Optional
from urllib.parse import urldefrag, urljoin

import requests
from bs4 import BeautifulSoup

from example_package import distribution
from example_package.config import APP_NAME, DEFAULT_INDEX_URL


logger = logging.getLogger(APP_NAME)

REQUEST_TIMEOUT = 30


def retry(max_attempts: int = 3, base_delay: float = 0.5, factor: float = 2.0):
    """Return a decorator that retries on transient index failures.

    Connection errors, timeouts, 429 and 5xx responses are retried with
    exponential backoff. Auth failures (401, 403) and other client errors
    are raised immediately.
    """
    def decorator(func):
        def wrapper(*args, **kwargs):
            attempt = 0
            while True:
                try:
                    return func(*args, **kwargs)
                except (requests.ConnectionError, requests.Timeout, requests.HTTPError) as e:
                    status = None
                    response = getattr(e, "response", None)
                    if response is not None:
                        status = response.status_code

                    if status in (401, 403):
                        raise

                    should_retry = False
                    if status is None:
                        # No response at all; treat as transient
                        should_retry = True
                    elif status == 429 or 500 <= status < 600:
                        should_retry = True

                    attempt += 1
                    if not should_retry or attempt >= max_attempts:
                        raise

                    delay = base_delay * (factor ** (attempt - 1))
                    logger.warning(
                        "Index request failed (status=%s): retrying in %.1fs (attempt %d/%d)",
                        status,
                        delay,
                        attempt,
                        max_attempts,
                    )
                    time.sleep(delay)
        return wrapper
    return decorator


def parse_simple_page(html: str, page_url: str) -> List[Dict[str, str]]:
    """Extract archive links from a simple-index project page.

    Each entry has ``filename``, ``url`` (absolute, without fragment),
    ``sha256`` (from a ``#sha256=`` fragment, else empty) and
    ``requires_python`` (the ``data-requires-python`` attribute, else empty).
    """
    soup = BeautifulSoup(html, "html.parser")
    files: List[Dict[str, str]] = []
    for anchor in soup.find_all("a", href=True):
        url, fragment = urldefrag(urljoin(page_url, anchor["href"]))
        sha256 = ""
        if fragment.startswith("sha256="):
            sha256 = fragment[len("sha256="):]
        files.append({
            "filename": anchor.get_text(strip=True),
            "url": url,
            "sha256": sha256,
            "requires_python": anchor.get("data-requires-python", ""),
        })
    return files


class IndexService:
    def __init__(self, index_url: str = DEFAULT_INDEX_URL, session: Optional[requests.Session] = None):
        if not index_url:
            raise ValueError("Index URL not configured. Set PACKAGE_INDEX_URL or pass --index-url.")
        self.index_url = index_url.rstrip("/") + "/"
        self.session = session or requests.Session()

    def project_url(self, project: str) -> str:
        return f"{self.index_url}{distribution.normalize_name(project)}/"

    @retry()
    def list_files(self, project: str) -> List[Dict[str, str]]:
        """Return the archives the index serves for ``project``.

        A 404 means the project has never been uploaded and yields an empty
        list rather than an error.
        """
        url = self.project_url(project)
        logger.debug("Fetching simple page %s", url)
        resp = self.session.get(url, timeout=REQUEST_TIMEOUT)
        if resp.status_code == 404:
            logger.info("Project '%s' not found on %s", project, self.index_url)
            return []
        resp.raise_for_status()
        files = parse_simple_page(resp.text, url)
        logger.info("Found %d files for '%s' on %s", len(files), project, self.index_url)
        return files

    def has_release(self, project: str, version: str, files: Optional[List[Dict[str, str]]] = None) -> bool:
        """Return True when any served archive of ``project`` is ``version``.

        Versions compare by PEP 440 value, so ``1.0.0-beta`` matches a served
        ``1.0.0b0``. ``files`` may carry a listing already fetched with
        :meth:`list_files`.
        """
        distribution.normalize_version(version)
        if files is None:
            files = self.list_files(project)
        for entry in files:
            try:
                artifact = distribution.parse_artifact_filename(entry["filename"])
            except ValueError:
                logger.debug("Ignoring unrecognised file %s", entry["filename"])
                continue
            if distribution.same_version(artifact.version, version):
                return True
        return False
