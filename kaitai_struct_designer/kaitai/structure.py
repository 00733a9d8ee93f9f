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

"""Structural conventions of Kaitai Struct documents."""

from typing import Optional

from ..models.document import Node, NodeKind

IMPORTS_KEY = "imports"
TYPES_KEY = "types"
TYPE_KEY = "type"


def is_import_value(node: Node) -> bool:
    """A scalar anywhere below an ``imports`` key."""
    if node.kind is not NodeKind.SCALAR:
        return False
    return any(
        ancestor.kind is NodeKind.KEY_VALUE and ancestor.key == IMPORTS_KEY
        for ancestor in node.ancestors()
    )


def is_type_value(node: Node) -> bool:
    """A scalar that is directly the value of a ``type`` key."""
    if node.kind is not NodeKind.SCALAR:
        return False
    parent = node.parent
    return parent is not None and parent.kind is NodeKind.KEY_VALUE and parent.key == TYPE_KEY


def is_type_body(mapping: Optional[Node]) -> bool:
    """A mapping that declares a type: the document's top-level mapping or a type definition's value.

    Only these mappings may hold a ``types`` block; a field or instance that
    happens to carry a ``types`` key does not declare anything.
    """
    if mapping is None or mapping.kind is not NodeKind.MAPPING:
        return False
    owner = mapping.parent
    if owner is None:
        return True
    if owner.kind is not NodeKind.KEY_VALUE:
        return False
    container = owner.parent
    if container is None:
        return False
    return is_types_block(container.parent)


def is_types_block(node: Optional[Node]) -> bool:
    """A ``types`` key-value pair whose value is a mapping of type definitions."""
    if node is None or node.kind is not NodeKind.KEY_VALUE or node.key != TYPES_KEY:
        return False
    if node.value is None or node.value.kind is not NodeKind.MAPPING:
        return False
    return is_type_body(node.parent)
