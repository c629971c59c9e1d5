"""Utility functions for loading input documents and writing generated code.

This module provides functions for loading JSON from files and URLs with
proper error handling, reading template text, and writing output files
atomically so a failed run never leaves a half-written file behind.
"""

import json
import os
import stat
import tempfile
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import requests

from .logging_config import get_logger

logger = get_logger(__name__)


class JSONLoaderError(Exception):
    """Custom exception for JSON loading errors."""

    pass


class OutputWriteError(Exception):
    """Raised when generated output cannot be written."""

    pass


def load_json_from_file(file_path: str | Path) -> tuple[str, Any]:
    """Load JSON data from a local file.

    Args:
        file_path: Path to the JSON file.

    Returns:
        Tuple of (source description, parsed JSON data).

    Raises:
        JSONLoaderError: If the file is missing, unreadable or not valid JSON.
    """
    file_path = Path(file_path)
    logger.debug(f"Attempting to load JSON from file: {file_path}")

    if not file_path.exists():
        logger.error(f"File not found: {file_path}")
        raise JSONLoaderError(f"File not found: {file_path}")

    if file_path.suffix.lower() != ".json":
        logger.warning(f"File does not have .json extension: {file_path}")

    try:
        with file_path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        logger.info(f"Loaded JSON from {file_path}")
        return str(file_path), data
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in file {file_path}: {e}")
        raise JSONLoaderError(f"Invalid JSON in file {file_path}: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Error reading file {file_path}: {e}")
        raise JSONLoaderError(f"Error reading file {file_path}: {e}") from e


def load_json_from_url(url: str, timeout: int = 30) -> tuple[str, Any]:
    """Load JSON data from a URL, e.g. an index's ``_mapping`` endpoint.

    Args:
        url: URL to fetch JSON from.
        timeout: Request timeout in seconds.

    Returns:
        Tuple of (source description, parsed JSON data).

    Raises:
        JSONLoaderError: If URL is invalid, request fails, or response isn't valid JSON.
    """
    logger.debug(f"Attempting to load JSON from URL: {url}")

    parsed_url = urlparse(url)
    if not all([parsed_url.scheme, parsed_url.netloc]):
        logger.error(f"Invalid URL format: {url}")
        raise JSONLoaderError(f"Invalid URL: {url}")

    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
        data = response.json()
        logger.info(f"Loaded JSON from {url}")
        return url, data

    except requests.exceptions.Timeout as e:
        logger.error(f"Request timeout for URL: {url}")
        raise JSONLoaderError(f"Request timeout for URL: {url}") from e
    except requests.exceptions.ConnectionError as e:
        logger.error(f"Connection error for URL {url}: {e}")
        raise JSONLoaderError(f"Connection error for URL: {url}") from e
    except requests.exceptions.HTTPError as e:
        logger.error(f"HTTP error {e.response.status_code} for URL: {url}")
        raise JSONLoaderError(
            f"HTTP error {e.response.status_code} for URL: {url}"
        ) from e
    except requests.exceptions.RequestException as e:
        logger.error(f"Request error for URL {url}: {e}")
        raise JSONLoaderError(f"Request error for URL {url}: {e}") from e
    except ValueError as e:
        logger.error(f"Invalid JSON response from URL {url}: {e}")
        raise JSONLoaderError(f"Invalid JSON response from URL {url}: {e}") from e


def load_json(
    file_path: str | Path | None = None,
    url: str | None = None,
    timeout: int = 30,
) -> tuple[str, Any]:
    """Load JSON data from either a file or URL.

    Args:
        file_path: Path to local JSON file (mutually exclusive with url).
        url: URL to fetch JSON from (mutually exclusive with file_path).
        timeout: Request timeout in seconds (only used for URLs).

    Returns:
        Tuple of (source description, parsed JSON data).

    Raises:
        JSONLoaderError: If neither or both parameters are provided, or loading fails.
    """
    if not file_path and not url:
        raise JSONLoaderError("Either file_path or url must be provided")

    if file_path and url:
        raise JSONLoaderError("Cannot specify both file_path and url")

    if file_path:
        return load_json_from_file(file_path)
    return load_json_from_url(url, timeout)


def read_text_file(file_path: str | Path) -> str:
    """Read a UTF-8 text file such as a custom template."""
    file_path = Path(file_path)
    try:
        return file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Error reading file {file_path}: {e}")
        raise JSONLoaderError(f"Error reading file {file_path}: {e}") from e


def _output_mode(path: Path) -> int:
    """Keep an existing file's mode; new files follow the umask."""
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def write_text_atomic(path: str | Path, content: str) -> Path:
    """Write text to ``path`` via a temporary sibling file and a rename.

    Either the complete content lands at ``path`` or the destination is left
    as it was. A new file gets the usual ``0o666 & ~umask`` mode and an
    existing file keeps its mode.

    Raises:
        OutputWriteError: If the directory or file cannot be written, or the
            content cannot be encoded as UTF-8.
    """
    path = Path(path)
    tmp_path = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            dir=path.parent,
            delete=False,
            prefix=f"{path.name}.",
            suffix=".tmp",
        ) as tmp:
            tmp_path = Path(tmp.name)
            tmp.write(content)
        os.chmod(tmp_path, _output_mode(path))
        tmp_path.replace(path)
    except (OSError, UnicodeError) as e:
        if tmp_path is not None:
            tmp_path.unlink(missing_ok=True)
        logger.error(f"Failed to write output file {path}: {e}")
        raise OutputWriteError(f"Failed to write output file {path}: {e}") from e

    logger.info(f"Wrote {len(content)} characters to {path}")
    return path
