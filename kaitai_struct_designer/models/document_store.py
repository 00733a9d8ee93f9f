# Copyright 2026 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Filesystem boundary: locating schema files and handing out parsed documents."""

import os
import logging
import threading
from collections import OrderedDict
from pathlib import Path
from typing import Dict, Optional, Tuple, Union

from ..config import designer_config
from .document import KsyDocument
from .parsing.yaml_parser import YamlParser, yaml_parser

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def normalize_key(path: PathLike) -> Optional[str]:
    """Absolute, case-normalized string form of ``path`` used for lookups."""
    try:
        return os.path.normcase(os.path.abspath(os.fspath(path)))
    except (TypeError, ValueError):
        return None


class DocumentStore:
    """Locates schema files and caches their parsed documents.

    Editor overlays (unsaved buffer contents) take priority over the files on
    disk. Cached documents are keyed by path and invalidated when the file's
    modification time or size changes, so lookups always reflect the latest
    content.
    """

    def __init__(self, parser: Optional[YamlParser] = None, cache_enabled: Optional[bool] = None,
                 max_cache_size: Optional[int] = None):
        self.parser = parser or yaml_parser
        self.cache_enabled = cache_enabled if cache_enabled is not None else designer_config.cache_enabled
        self.max_cache_size = max_cache_size if max_cache_size is not None else designer_config.max_cache_size
        self._overlays: Dict[str, KsyDocument] = {}
        self._cache: "OrderedDict[str, Tuple[Tuple[int, int], KsyDocument]]" = OrderedDict()
        self._lock = threading.Lock()

    def set_overlay(self, path: PathLike, content: str) -> KsyDocument:
        """Register the in-editor content of ``path`` and return its parsed document."""
        document = self.parser.parse(content, file_path=path)
        key = normalize_key(path)
        if key is not None:
            with self._lock:
                self._overlays[key] = document
        return document

    def remove_overlay(self, path: PathLike) -> None:
        key = normalize_key(path)
        with self._lock:
            self._overlays.pop(key, None)

    def has_overlay(self, path: PathLike) -> bool:
        return normalize_key(path) in self._overlays

    def find_file(self, path: PathLike) -> Optional[Path]:
        """Return ``path`` if a schema exists there (on disk or as an overlay), else None."""
        key = normalize_key(path)
        if key is None:
            return None
        if key in self._overlays:
            return Path(path)
        try:
            candidate = Path(path)
            if candidate.is_file():
                return candidate
        except (OSError, ValueError) as exc:
            logger.debug(f"Cannot look up {path!r}: {exc}")
        return None

    def get_document(self, path: PathLike) -> Optional[KsyDocument]:
        """Parsed document for ``path``, or None when it does not exist or cannot be read."""
        key = normalize_key(path)
        if key is None:
            return None

        with self._lock:
            overlay = self._overlays.get(key)
        if overlay is not None:
            return overlay

        try:
            stat = os.stat(key)
        except (OSError, ValueError):
            return None
        signature = (stat.st_mtime_ns, stat.st_size)

        if self.cache_enabled:
            with self._lock:
                cached = self._cache.get(key)
                if cached is not None and cached[0] == signature:
                    self._cache.move_to_end(key)
                    logger.debug(f"Loading schema from cache: {key}")
                    return cached[1]

        try:
            content = Path(key).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError, ValueError) as exc:
            logger.debug(f"Failed to read schema file {key}: {exc}")
            return None

        document = self.parser.parse(content, file_path=Path(key))

        if self.cache_enabled:
            with self._lock:
                self._cache[key] = (signature, document)
                self._cache.move_to_end(key)
                while len(self._cache) > self.max_cache_size:
                    self._cache.popitem(last=False)

        return document

    def invalidate(self, path: PathLike) -> None:
        key = normalize_key(path)
        with self._lock:
            self._cache.pop(key, None)

    def clear_cache(self):
        """Clear the parsed document cache (overlays are kept)."""
        with self._lock:
            self._cache.clear()
        logger.debug("Document cache cleared")


# Global store instance
document_store = DocumentStore()
