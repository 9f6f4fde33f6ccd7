"""Download-once retrieval of the input spreadsheet."""

from __future__ import annotations

import logging
from pathlib import Path
from urllib.parse import urlparse

import httpx

from lwr_tlbx.errors import DataRetrievalError
from lwr_tlbx.utils.paths import get_cache_dir


logger = logging.getLogger(__name__)


def is_remote(source: str | Path) -> bool:
    """Return True when ``source`` is an http(s) URL rather than a local path."""
    return urlparse(str(source)).scheme in {"http", "https"}


def default_cache_path(source: str | Path) -> Path:
    """Cache location for ``source``: the URL's file name inside the cache directory."""
    name = Path(urlparse(str(source)).path).name or "dataset.xlsx"
    return get_cache_dir() / name


def fetch_dataset(
    source: str | Path,
    cache_path: str | Path | None = None,
    *,
    refresh: bool = False,
    client: httpx.Client | None = None,
    timeout: float | None = None,
) -> Path:
    """Ensure the spreadsheet behind ``source`` exists locally and return its path.

    A local ``source`` is returned unchanged. A URL is fetched with a single GET
    only when ``cache_path`` does not exist yet (or ``refresh`` is set). The
    cached file is trusted as-is on later runs; its content is never validated.

    Args:
        source: Local file path or http(s) URL of the spreadsheet.
        cache_path: Where the downloaded file is stored (defaults to the cache directory).
        refresh: Download again even if the cached file exists.
        client: Optional preconfigured ``httpx.Client`` (e.g. with a mock transport).
        timeout: Request timeout in seconds; ``None`` waits indefinitely.

    Returns:
        Path to the local copy of the spreadsheet.

    Raises:
        DataRetrievalError: If the download fails or the local file does not exist.
    """
    if not is_remote(source):
        path = Path(source)
        if not path.exists():
            raise DataRetrievalError(f"Input file not found: {path}")
        return path

    dest = Path(cache_path) if cache_path is not None else default_cache_path(source)
    if dest.exists() and not refresh:
        logger.info("Using cached input %s", dest)
        return dest

    logger.info("Downloading %s -> %s", source, dest)
    owns_client = client is None
    http = client or httpx.Client(follow_redirects=True, timeout=timeout)
    try:
        response = http.get(str(source))
        response.raise_for_status()
    except httpx.HTTPError as exc:
        raise DataRetrievalError(f"Could not retrieve {source}: {exc}") from exc
    finally:
        if owns_client:
            http.close()

    dest.parent.mkdir(parents=True, exist_ok=True)
    partial = dest.with_name(dest.name + ".part")
    with partial.open("wb") as fh:
        fh.write(response.content)
    partial.replace(dest)
    logger.info("Saved %d bytes to %s", len(response.content), dest)
    return dest


__all__ = ["default_cache_path", "fetch_dataset", "is_remote"]
