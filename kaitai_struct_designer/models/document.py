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

"""Read-only document model for parsed schema files.

The tree mirrors the YAML structure with four node kinds (key-value pair,
mapping, sequence, scalar). Nodes are created by the YAML parser only; all
other modules read them. Parent links are answered by an index owned by the
document, so a node never owns its parent.
"""

from __future__ import annotations

import bisect
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple, Union


class NodeKind(Enum):
    KEY_VALUE = "key_value"
    MAPPING = "mapping"
    SEQUENCE = "sequence"
    SCALAR = "scalar"


@dataclass(frozen=True)
class TextRange:
    """Half-open character range ``[start, end)`` into a document source."""

    start: int
    end: int

    @classmethod
    def from_length(cls, start: int, length: int) -> "TextRange":
        return cls(start, start + length)

    @property
    def length(self) -> int:
        return self.end - self.start

    def shift_left(self, delta: int) -> "TextRange":
        return TextRange(self.start - delta, self.end - delta)

    def shift_right(self, delta: int) -> "TextRange":
        return TextRange(self.start + delta, self.end + delta)

    def contains(self, offset: int) -> bool:
        # Inclusive end so a cursor placed right after a word still hits it.
        return self.start <= offset <= self.end

    def substring(self, text: str) -> str:
        return text[self.start:self.end]


@dataclass(eq=False)
class Node:
    """A single element of the document tree.

    Identity is the node object itself; two nodes with the same text are
    different nodes.
    """

    kind: NodeKind
    text_range: TextRange
    document: "KsyDocument" = field(repr=False)
    start_line: int = 0
    start_column: int = 0
    text: Optional[str] = None
    key: Optional[str] = None
    key_range: Optional[TextRange] = None
    value: Optional["Node"] = None
    children: List["Node"] = field(default_factory=list, repr=False)

    @property
    def parent(self) -> Optional["Node"]:
        return self.document.parent_of(self)

    @property
    def text_length(self) -> int:
        return self.text_range.length

    def ancestors(self) -> Iterator["Node"]:
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    def key_values(self) -> List["Node"]:
        """Key-value children of a mapping (empty for other kinds)."""
        if self.kind is not NodeKind.MAPPING:
            return []
        return [child for child in self.children if child.kind is NodeKind.KEY_VALUE]

    def get(self, key: str) -> Optional["Node"]:
        """Value node of the first key-value pair named ``key`` in a mapping."""
        for pair in self.key_values():
            if pair.key == key:
                return pair.value
        return None


class KsyDocument:
    """A parsed schema file: its source, node tree and plain data."""

    def __init__(
        self,
        source: str,
        file_path: Optional[Union[str, Path]] = None,
        name: Optional[str] = None,
    ):
        self.source = source
        self.file_path: Optional[Path] = Path(file_path) if file_path is not None else None
        if name is None:
            name = self.file_path.name if self.file_path is not None else ""
        self.name = name
        self.roots: List[Node] = []
        self.data: List[Any] = []
        self.parse_error: Optional[str] = None
        self.parse_error_line: Optional[int] = None
        self.parse_error_column: Optional[int] = None
        self._parents: Dict[int, Node] = {}
        self._line_starts = self._compute_line_starts(source)

    def __repr__(self) -> str:
        return f"KsyDocument(name={self.name!r}, file_path={self.file_path!r})"

    @staticmethod
    def _compute_line_starts(source: str) -> List[int]:
        starts = [0]
        for index, char in enumerate(source):
            if char == "\n":
                starts.append(index + 1)
        return starts

    @property
    def directory(self) -> Optional[Path]:
        if self.file_path is None:
            return None
        return self.file_path.parent

    @property
    def lines(self) -> List[str]:
        return self.source.splitlines()

    @property
    def top_level_value(self) -> Optional[Node]:
        """The value of the single YAML document in the file, if there is exactly one."""
        if len(self.roots) != 1:
            return None
        return self.roots[0]

    def register_child(self, parent: Node, child: Node) -> None:
        self._parents[id(child)] = parent

    def parent_of(self, node: Node) -> Optional[Node]:
        return self._parents.get(id(node))

    def walk(self) -> Iterator[Node]:
        """Depth-first pre-order iteration over every node of every root."""
        stack = list(reversed(self.roots))
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def node_at_offset(self, offset: int) -> Optional[Node]:
        """Deepest node whose range contains ``offset``."""
        found: Optional[Node] = None
        candidates: Sequence[Node] = self.roots
        while True:
            match = None
            for node in candidates:
                if node.text_range.contains(offset):
                    match = node
                    # Prefer a scalar that starts exactly at the offset over one ending there.
                    if node.text_range.start == offset or node.text_range.end != offset:
                        break
            if match is None:
                return found
            found = match
            candidates = match.children

    def node_at_path(self, path: Sequence[Union[str, int]]) -> Optional[Node]:
        """Follow a JSON-pointer-like path of keys and indices from the top-level value.

        Returns the deepest node reached, so a path into a missing member
        yields the closest existing ancestor.
        """
        node = self.top_level_value
        if node is None:
            return None
        for token in path:
            next_node = None
            if node.kind is NodeKind.MAPPING:
                for pair in node.key_values():
                    if pair.key == str(token):
                        next_node = pair
                        break
            elif node.kind is NodeKind.SEQUENCE and isinstance(token, int):
                if 0 <= token < len(node.children):
                    next_node = node.children[token]
            if next_node is None:
                return node
            node = next_node
            if node.kind is NodeKind.KEY_VALUE:
                if node.value is None:
                    return node
                node = node.value
        return node

    def offset_to_position(self, offset: int) -> Tuple[int, int]:
        """Convert a character offset to a 0-based (line, character) pair."""
        offset = max(0, min(offset, len(self.source)))
        line = bisect.bisect_right(self._line_starts, offset) - 1
        return line, offset - self._line_starts[line]

    def position_to_offset(self, line: int, character: int) -> int:
        """Convert a 0-based (line, character) pair to a character offset."""
        if line < 0:
            return 0
        if line >= len(self._line_starts):
            return len(self.source)
        start = self._line_starts[line]
        if line + 1 < len(self._line_starts):
            line_end = self._line_starts[line + 1] - 1
        else:
            line_end = len(self.source)
        return min(start + max(0, character), line_end)
