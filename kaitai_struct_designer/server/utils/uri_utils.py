#!/usr/bin/env python3

"""URI utility functions."""

from pathlib import Path
from urllib.parse import urlparse, unquote


def uri_to_path(uri: str) -> str:
    """Convert URI to file path."""
    parsed = urlparse(uri)
    return unquote(parsed.path)


def path_to_uri(path: str) -> str:
    """Convert an absolute file path to URI."""
    return Path(path).as_uri()
