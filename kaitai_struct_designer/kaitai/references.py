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

"""References from import entries and type names to their targets."""

from __future__ import annotations

from typing import Iterator, List, Optional, Union

from ..models.document import KsyDocument, Node, NodeKind, TextRange
from ..models.document_store import DocumentStore, document_store
from .file_utils import is_in_kaitai_file
from .imports import compute_import_path, resolve_import
from .standard_types import is_standard_type
from .structure import is_import_value, is_type_value
from .types_collector import collect_types

# Block sequence entries are written as "- value".
LIST_ITEM_MARKER = "- "


class ImportReference:
    """Reference from an import entry to the imported document."""

    def __init__(self, element: Node, store: Optional[DocumentStore] = None):
        self.element = element
        self._store = store or document_store

    @property
    def range(self) -> TextRange:
        """Absolute range of the reference in the containing document."""
        return self.element.text_range

    @property
    def range_in_element(self) -> TextRange:
        """Range of the reference relative to the element itself.

        The element's range inside its list item is measured from the item
        marker, so it is shifted left by the marker width.
        """
        element_range = self.element.text_range
        source = self.element.document.source
        marker_start = element_range.start - len(LIST_ITEM_MARKER)
        if marker_start >= 0 and source[marker_start:element_range.start] == LIST_ITEM_MARKER:
            return element_range.shift_left(marker_start).shift_left(len(LIST_ITEM_MARKER))
        return element_range.shift_left(element_range.start)

    @property
    def path(self) -> str:
        return compute_import_path(self.element.text or "", self.element.document)

    def resolve(self) -> Optional[KsyDocument]:
        return resolve_import(self.element, self._store).document

    def __repr__(self) -> str:
        return f"ImportReference({self.element.text!r})"


class TypeReference:
    """Reference from a ``type`` value to a custom type definition."""

    def __init__(self, element: Node, types: List[Node]):
        self.element = element
        self.types = types

    @property
    def range(self) -> TextRange:
        return self.element.text_range

    @property
    def range_in_element(self) -> TextRange:
        return TextRange.from_length(0, self.element.text_length)

    def resolve(self) -> Optional[Node]:
        """First visible definition named exactly like the reference."""
        for definition in self.types:
            if definition.key == self.element.text:
                return definition
        return None

    def __repr__(self) -> str:
        return f"TypeReference({self.element.text!r})"


Reference = Union[ImportReference, TypeReference]


def get_references(node: Node, store: Optional[DocumentStore] = None,
                   types: Optional[List[Node]] = None) -> List[Reference]:
    """References carried by ``node``.

    Args:
        node: any node of a parsed document
        store: where imports are looked up
        types: pre-collected type definitions of the node's document, to
            avoid collecting them again for every reference

    Returns:
        An import reference for import entries, a type reference for
        non-standard ``type`` values, nothing otherwise.
    """
    if node.kind is not NodeKind.SCALAR or not is_in_kaitai_file(node):
        return []

    references: List[Reference] = []
    if is_import_value(node):
        references.append(ImportReference(node, store))
    if is_type_value(node) and not is_standard_type(node.text or ""):
        if types is None:
            types = collect_types(node.document, store)
        references.append(TypeReference(node, types))
    return references


def iter_references(document: KsyDocument, store: Optional[DocumentStore] = None) -> Iterator[Reference]:
    """Every reference in ``document``, in document order."""
    types: Optional[List[Node]] = None
    for node in document.walk():
        if node.kind is not NodeKind.SCALAR:
            continue
        if types is None and is_type_value(node) and not is_standard_type(node.text or ""):
            types = collect_types(document, store)
        yield from get_references(node, store, types)


def find_reference_at(document: KsyDocument, offset: int,
                      store: Optional[DocumentStore] = None) -> Optional[Reference]:
    """The reference under the character ``offset``, if any."""
    node = document.node_at_offset(offset)
    if node is None:
        return None
    references = get_references(node, store)
    return references[0] if references else None
