"""Utility functions for loading type descriptor documents.

This module provides functions for loading descriptor JSON from files and
URLs with proper error handling, and for building a TypeCatalog from them.
"""

import json
from pathlib import Path
from typing import Any, Iterable, Tuple, Union
from urllib.parse import urlparse

import requests

from .codegen.core.catalog import DescriptorError, TypeCatalog
from .logging_config import get_logger

logger = get_logger(__name__)


class DescriptorLoadError(Exception):
    """Custom exception for descriptor loading errors."""

    pass


def is_url(source: str) -> bool:
    parsed = urlparse(str(source))
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def load_descriptors_from_file(file_path: Union[str, Path]) -> Tuple[str, Any]:
    """Load a descriptor document from a local file.

    Args:
        file_path: Path to the JSON file.

    Returns:
        Tuple of (source description, parsed JSON data).

    Raises:
        DescriptorLoadError: If the file is missing, unreadable or not valid JSON.
    """
    file_path = Path(file_path)
    logger.debug(f"Attempting to load descriptors from file: {file_path}")

    if not file_path.exists():
        logger.error(f"File not found: {file_path}")
        raise DescriptorLoadError(f"File not found: {file_path}")

    if file_path.suffix.lower() != ".json":
        logger.warning(f"File does not have .json extension: {file_path}")

    try:
        with file_path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        logger.info(f"Loaded descriptors from {file_path}")
        return str(file_path), data
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in file {file_path}: {e}")
        raise DescriptorLoadError(f"Invalid JSON in file {file_path}: {e}") from e
    except OSError as e:
        logger.error(f"Error reading file {file_path}: {e}")
        raise DescriptorLoadError(f"Error reading file {file_path}: {e}") from e


def load_descriptors_from_url(url: str, timeout: int = 30) -> Tuple[str, Any]:
    """Load a descriptor document from a URL.

    Args:
        url: URL to fetch JSON from.
        timeout: Request timeout in seconds.

    Returns:
        Tuple of (source description, parsed JSON data).

    Raises:
        DescriptorLoadError: If the URL is invalid, the request fails, or the
            response isn't valid JSON.
    """
    logger.debug(f"Attempting to load descriptors from URL: {url}")

    parsed_url = urlparse(url)
    if not all([parsed_url.scheme, parsed_url.netloc]):
        logger.error(f"Invalid URL format: {url}")
        raise DescriptorLoadError(f"Invalid URL: {url}")

    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()

        content_type = response.headers.get("content-type", "").lower()
        if "application/json" not in content_type and not url.endswith(".json"):
            logger.warning(f"URL {url} does not have JSON content type: {content_type}")

        data = response.json()
        logger.info(f"Loaded descriptors from {url}")
        return url, data

    except requests.exceptions.Timeout as e:
        logger.error(f"Request timeout for URL: {url}")
        raise DescriptorLoadError(f"Request timeout for URL: {url}") from e
    except requests.exceptions.ConnectionError as e:
        logger.error(f"Connection error for URL {url}: {e}")
        raise DescriptorLoadError(f"Connection error for URL: {url}") from e
    except requests.exceptions.HTTPError as e:
        logger.error(f"HTTP error {e.response.status_code} for URL: {url}")
        raise DescriptorLoadError(f"HTTP error {e.response.status_code} for URL: {url}") from e
    except requests.exceptions.JSONDecodeError as e:
        logger.error(f"Invalid JSON response from URL {url}: {e}")
        raise DescriptorLoadError(f"Invalid JSON response from URL {url}: {e}") from e
    except requests.exceptions.RequestException as e:
        logger.error(f"Request error for URL {url}: {e}")
        raise DescriptorLoadError(f"Request error for URL {url}: {e}") from e


def load_descriptors(source: Union[str, Path], timeout: int = 30) -> Tuple[str, Any]:
    """Load a descriptor document from a file path or an HTTP(S) URL."""
    if isinstance(source, str) and is_url(source):
        return load_descriptors_from_url(source, timeout)
    return load_descriptors_from_file(source)


def load_catalog(sources: Iterable[Union[str, Path]], timeout: int = 30) -> TypeCatalog:
    """
    Build a TypeCatalog from descriptor documents.

    Documents are loaded in order; a type described twice takes the later
    description.

    Raises:
        DescriptorLoadError: If a document cannot be loaded or is malformed
    """
    catalog = TypeCatalog()
    for source in sources:
        origin, document = load_descriptors(source, timeout)
        try:
            catalog.load(document)
        except DescriptorError as e:
            logger.error(f"Malformed descriptor document {origin}: {e}")
            raise DescriptorLoadError(f"Malformed descriptor document {origin}: {e}") from e
        logger.debug(f"Catalog holds {len(catalog)} types after {origin}")
    return catalog
