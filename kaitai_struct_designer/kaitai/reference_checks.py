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

"""Diagnostics for references that point nowhere."""

import re
import logging
from typing import List, Optional

from ..models.document import KsyDocument, Node
from ..models.document_store import DocumentStore
from ..schema.ksy_schema import SchemaIssue, issue_for_node
from .file_utils import is_kaitai_file
from .references import ImportReference, TypeReference, iter_references
from .standard_types import is_standard_type
from .structure import TYPES_KEY

logger = logging.getLogger(__name__)

TYPE_PATH_SEPARATOR = "::"
_ENDIAN_BIT_TYPE = re.compile(r"b\d+(?:le|be)")
_TYPE_ARGUMENTS = re.compile(r"\(.*\)$", re.DOTALL)


def _nested_definition(definition: Node, name: str) -> Optional[Node]:
    body = definition.value
    if body is None:
        return None
    nested = body.get(TYPES_KEY)
    if nested is None:
        return None
    for candidate in nested.key_values():
        if candidate.key == name:
            return candidate
    return None


def is_known_type(type_text: str, types: List[Node]) -> bool:
    """Whether a ``type`` value names something the compiler would accept.

    Covers what exact-name resolution does not: endian-suffixed bit types
    (``b12le``), parametrised types (``entry(5)``) and ``::`` paths into
    nested type definitions.
    """
    text = type_text.strip()
    if _ENDIAN_BIT_TYPE.fullmatch(text):
        return True
    name = _TYPE_ARGUMENTS.sub("", text).strip()
    if is_standard_type(name):
        return True

    first, *rest = name.split(TYPE_PATH_SEPARATOR)
    for definition in types:
        if definition.key != first:
            continue
        current: Optional[Node] = definition
        for segment in rest:
            current = _nested_definition(current, segment)
            if current is None:
                break
        if current is not None:
            return True
    return False


def validate_references(document: KsyDocument, store: Optional[DocumentStore] = None) -> List[SchemaIssue]:
    """Warnings for imports that do not resolve and custom types that are not defined."""
    if not is_kaitai_file(document) or document.parse_error:
        return []

    issues: List[SchemaIssue] = []
    for reference in iter_references(document, store):
        if isinstance(reference, ImportReference):
            if reference.resolve() is None:
                issues.append(issue_for_node(
                    document,
                    reference.element,
                    f"Cannot resolve import '{reference.element.text}' ({reference.path})",
                    severity="warning",
                ))
        elif isinstance(reference, TypeReference):
            if reference.resolve() is None and not is_known_type(reference.element.text or "", reference.types):
                issues.append(issue_for_node(
                    document,
                    reference.element,
                    f"Unknown type '{reference.element.text}'",
                    severity="warning",
                ))

    logger.debug(f"Found {len(issues)} unresolved references in {document.name}")
    return issues
