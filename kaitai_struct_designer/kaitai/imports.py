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

"""Import path resolution."""

from __future__ import annotations

import os
import logging
from dataclasses import dataclass
from pathlib import Path, PurePosixPath, PureWindowsPath
from typing import Optional

from ..models.document import KsyDocument, Node
from ..models.document_store import DocumentStore, document_store
from .file_utils import KAITAI_FILE_EXTENSION

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImportsContainer:
    """A resolved import declaration.

    Attributes:
        element: the scalar node naming the import
        document: the imported document, if it exists
        path: the absolute import path, whether or not it exists
    """

    element: Node
    document: Optional[KsyDocument]
    path: str


def with_kaitai_extension(path_text: str) -> str:
    if path_text.endswith(KAITAI_FILE_EXTENSION):
        return path_text
    return path_text + KAITAI_FILE_EXTENSION


def is_absolute_path(path: str) -> bool:
    """Absolute in either POSIX (``/a/b``) or Windows (``C:\\a``, ``\\\\server\\share``) form."""
    return PurePosixPath(path).is_absolute() or PureWindowsPath(path).is_absolute()


def compute_import_path(path_text: str, containing: KsyDocument) -> str:
    """Absolute, canonical path of an import written as ``path_text`` in ``containing``.

    Relative imports are resolved against the directory of the containing
    file (the working directory for buffers without a path). A Windows-style
    absolute path on a POSIX host keeps its Windows form.
    """
    path_string = with_kaitai_extension(path_text)

    if is_absolute_path(path_string):
        target = Path(path_string)
        if not target.is_absolute():
            return str(PureWindowsPath(path_string))
    else:
        base = containing.directory if containing.directory is not None else Path.cwd()
        target = base / path_string

    try:
        return str(target.resolve())
    except (OSError, ValueError, RuntimeError) as exc:
        logger.debug(f"Cannot canonicalize import path {path_string!r}: {exc}")
        return os.path.normpath(os.path.abspath(str(target)))


def resolve_import(element: Node, store: Optional[DocumentStore] = None) -> ImportsContainer:
    """Resolve an import declaration from the given scalar node.

    Args:
        element: the scalar holding the import path
        store: where to look documents up (the global store by default)

    Returns:
        An :class:`ImportsContainer`; ``document`` is None when the file does not exist.
    """
    store = store or document_store
    path = compute_import_path(element.text or "", element.document)

    document = None
    if store.find_file(path) is not None:
        document = store.get_document(path)
    if document is None:
        logger.debug(f"Import '{element.text}' in {element.document.name} does not resolve ({path})")

    return ImportsContainer(element, document, path)
