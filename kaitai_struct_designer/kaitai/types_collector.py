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

"""Collection of the custom types visible from a document."""

import os
import logging
from typing import Dict, List, Optional, Set

from ..models.document import KsyDocument, Node, NodeKind
from ..models.document_store import DocumentStore, document_store, normalize_key
from .file_utils import is_kaitai_file
from .imports import resolve_import
from .structure import is_import_value, is_types_block

logger = logging.getLogger(__name__)


def document_key(document: KsyDocument) -> str:
    if document.file_path is not None:
        try:
            key = normalize_key(os.path.realpath(document.file_path))
        except (OSError, ValueError):
            key = normalize_key(document.file_path)
        if key is not None:
            return key
    return f"<buffer:{id(document)}>"


class TypesCollector:
    """Depth-first walk collecting custom type definitions.

    Type definitions are the key-value children of ``types`` blocks. Imports
    are followed into the imported documents; each document is entered at
    most once per walk, which is what terminates cyclic imports.

    A collector keeps its state per instance and resets it on every
    :meth:`accept` call; do not share one instance between threads.
    """

    def __init__(self, store: Optional[DocumentStore] = None):
        self._store = store or document_store
        self._types: Dict[Node, None] = {}
        self._visited: Set[str] = set()

    def accept(self, document: KsyDocument) -> List[Node]:
        """Start traversing the document, collecting custom type definitions.

        Returns:
            the type definition key-value nodes, in discovery order
        """
        self._types = {}
        self._visited = set()
        self._visit_document(document)
        return list(self._types)

    def _visit_document(self, document: KsyDocument) -> None:
        self._visited.add(document_key(document))
        for root in document.roots:
            self._visit(root)

    def _visit(self, node: Node) -> None:
        kind = node.kind
        if kind is NodeKind.KEY_VALUE:
            if is_types_block(node):
                for definition in node.value.key_values():
                    self._types.setdefault(definition, None)
            self._visit_children(node)
        elif kind is NodeKind.SCALAR:
            if is_import_value(node):
                self._follow_import(node)
        elif kind is NodeKind.MAPPING or kind is NodeKind.SEQUENCE:
            self._visit_children(node)

    def _visit_children(self, node: Node) -> None:
        for child in node.children:
            self._visit(child)

    def _follow_import(self, node: Node) -> None:
        container = resolve_import(node, self._store)
        if container.document is None:
            return
        key = document_key(container.document)
        if key in self._visited:
            logger.debug(f"Skipping already visited import {container.path}")
            return
        self._visit_document(container.document)


def collect_types(document: KsyDocument, store: Optional[DocumentStore] = None) -> List[Node]:
    """Type definitions visible from ``document``: its own and those of its transitive imports."""
    if not is_kaitai_file(document):
        return []
    return TypesCollector(store).accept(document)
