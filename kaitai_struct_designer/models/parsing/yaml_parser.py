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

"""YAML parser building the read-only document model."""

import yaml
import logging
from pathlib import Path
from typing import Optional, Set, Union

from ..document import KsyDocument, Node, NodeKind, TextRange
from ...exceptions import DocumentLoadError

logger = logging.getLogger(__name__)


class YamlParser:
    """Parses YAML text into a :class:`KsyDocument`.

    Two passes are made over the content, as for the plain-data/source-map
    pair: ``yaml.compose_all`` gives the node tree with positions and
    ``yaml.safe_load_all`` gives the plain values used for schema validation.
    """

    def parse(self, content: str, file_path: Optional[Union[str, Path]] = None,
              name: Optional[str] = None) -> KsyDocument:
        """Parse YAML content. Never raises on malformed YAML.

        Args:
            content: YAML string content
            file_path: Path the content belongs to, if any
            name: Display name when there is no file path

        Returns:
            A document; on syntax errors it has no roots and ``parse_error`` set.
        """
        document = KsyDocument(content, file_path=file_path, name=name)

        try:
            composed = list(yaml.compose_all(content, Loader=yaml.SafeLoader))
            data = list(yaml.safe_load_all(content))
        except yaml.YAMLError as exc:
            mark = getattr(exc, "problem_mark", None) or getattr(exc, "context_mark", None)
            document.parse_error = str(exc)
            if mark is not None:
                document.parse_error_line = mark.line
                document.parse_error_column = mark.column
            logger.debug(f"Failed to parse YAML {document.name or '<buffer>'}: {exc}")
            return document
        except RecursionError:
            document.parse_error = "YAML nesting is too deep"
            return document

        for yaml_node in composed:
            if yaml_node is None:
                continue
            document.roots.append(self._build(yaml_node, document, set()))
        document.data = [item for item, yaml_node in zip(data, composed) if yaml_node is not None]

        return document

    def load_document(self, file_path: Union[str, Path]) -> KsyDocument:
        """Load and parse a schema file.

        Raises:
            DocumentLoadError: If the file cannot be read
        """
        path = Path(file_path)

        if not path.exists():
            raise DocumentLoadError(f"Schema file not found: {path}")

        if not path.is_file():
            raise DocumentLoadError(f"Path is not a file: {path}")

        try:
            logger.debug(f"Loading schema file: {path}")
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise DocumentLoadError(f"Failed to read schema file {path}: {exc}")

        return self.parse(content, file_path=path)

    def _build(self, yaml_node: yaml.Node, document: KsyDocument, active: Set[int]) -> Node:
        # Recursive aliases ("&a [*a]") would otherwise never terminate.
        if id(yaml_node) in active:
            return self._new_node(NodeKind.SCALAR, yaml_node, document, text="")

        active.add(id(yaml_node))
        try:
            if isinstance(yaml_node, yaml.MappingNode):
                mapping = self._new_node(NodeKind.MAPPING, yaml_node, document)
                for key_node, value_node in yaml_node.value:
                    mapping.children.append(self._build_pair(key_node, value_node, document, active))
                self._adopt(mapping, document)
                return mapping

            if isinstance(yaml_node, yaml.SequenceNode):
                sequence = self._new_node(NodeKind.SEQUENCE, yaml_node, document)
                for item_node in yaml_node.value:
                    sequence.children.append(self._build(item_node, document, active))
                self._adopt(sequence, document)
                return sequence

            return self._new_node(NodeKind.SCALAR, yaml_node, document, text=str(yaml_node.value))
        finally:
            active.discard(id(yaml_node))

    def _build_pair(self, key_node: yaml.Node, value_node: yaml.Node,
                    document: KsyDocument, active: Set[int]) -> Node:
        value = self._build(value_node, document, active)
        key_range = TextRange(key_node.start_mark.index, key_node.end_mark.index)
        # Complex (non-scalar) keys have no usable name.
        key = str(key_node.value) if isinstance(key_node, yaml.ScalarNode) else ""

        pair = Node(
            kind=NodeKind.KEY_VALUE,
            text_range=TextRange(key_range.start, max(key_range.end, value.text_range.end)),
            document=document,
            start_line=key_node.start_mark.line,
            start_column=key_node.start_mark.column,
            text=key,
            key=key,
            key_range=key_range,
            value=value,
            children=[value],
        )
        self._adopt(pair, document)
        return pair

    @staticmethod
    def _new_node(kind: NodeKind, yaml_node: yaml.Node, document: KsyDocument,
                  text: Optional[str] = None) -> Node:
        return Node(
            kind=kind,
            text_range=TextRange(yaml_node.start_mark.index, yaml_node.end_mark.index),
            document=document,
            start_line=yaml_node.start_mark.line,
            start_column=yaml_node.start_mark.column,
            text=text,
        )

    @staticmethod
    def _adopt(parent: Node, document: KsyDocument) -> None:
        for child in parent.children:
            document.register_child(parent, child)


# Global parser instance
yaml_parser = YamlParser()
