"""Reading symbol graph documents.

A graph document is JSON, stored locally or served over HTTP.
"""

import json
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import requests

from .logging_config import get_logger

logger = get_logger(__name__)


class GraphLoaderError(Exception):
    """Raised when a graph document cannot be read or parsed."""

    pass


def _fail(message: str) -> GraphLoaderError:
    logger.error(message)
    return GraphLoaderError(message)


def load_document_from_file(file_path: str | Path) -> tuple[str, Any]:
    """Parse a graph document stored on disk.

    Args:
        file_path: JSON file to read.

    Returns:
        ``(source, document)`` where source is the path as a string.

    Raises:
        GraphLoaderError: If the file is missing, unreadable or not JSON.
    """
    path = Path(file_path)
    logger.debug(f"Reading graph document {path}")

    if not path.exists():
        raise _fail(f"File not found: {path}")

    try:
        document = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise _fail(f"Invalid JSON in {path}: {e}") from e
    except OSError as e:
        raise _fail(f"Cannot read {path}: {e}") from e

    logger.info(f"Read graph document {path}")
    return str(path), document


def load_document_from_url(url: str, timeout: int = 30) -> tuple[str, Any]:
    """Download and parse a graph document.

    Args:
        url: Absolute http(s) URL.
        timeout: Seconds to wait for the server.

    Returns:
        ``(source, document)`` where source is the URL.

    Raises:
        GraphLoaderError: For malformed URLs, transport or HTTP failures and
            non-JSON bodies.
    """
    logger.debug(f"Fetching graph document {url}")

    parts = urlparse(url)
    if not (parts.scheme and parts.netloc):
        raise _fail(f"Invalid URL: {url}")

    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
        document = response.json()
    except requests.exceptions.Timeout as e:
        raise _fail(f"Request timeout after {timeout}s: {url}") from e
    except requests.exceptions.HTTPError as e:
        raise _fail(f"HTTP error {e.response.status_code} from {url}") from e
    except requests.exceptions.RequestException as e:
        raise _fail(f"Request error for {url}: {e}") from e
    except ValueError as e:
        # requests raises a ValueError subclass for undecodable JSON bodies
        raise _fail(f"Invalid JSON response from {url}: {e}") from e

    logger.info(f"Fetched graph document {url}")
    return url, document


def load_document(
    file_path: str | Path | None = None,
    url: str | None = None,
    timeout: int = 30,
) -> tuple[str, Any]:
    """Read a graph document from exactly one of a file or a URL.

    Raises:
        GraphLoaderError: If neither or both sources are given, or loading fails.
    """
    if file_path and url:
        raise GraphLoaderError("Cannot specify both file_path and url")
    if file_path:
        return load_document_from_file(file_path)
    if url:
        return load_document_from_url(url, timeout)
    raise GraphLoaderError("Either file_path or url must be provided")
