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

"""Include edges for project-wide dependency indexing."""

from dataclasses import dataclass
from typing import Dict, List

from ..models.document import KsyDocument, Node, TextRange
from .file_utils import is_kaitai_file
from .imports import compute_import_path
from .structure import is_import_value


@dataclass(frozen=True)
class FileIncludeInfo:
    """One include edge from a document to the path it imports.

    The target path need not exist.
    """

    path: str
    import_text: str
    text_range: TextRange


class ImportsVisitor:
    """Collects the import declarations of a document, keyed by their node."""

    def __init__(self):
        self._files: Dict[Node, FileIncludeInfo] = {}

    @property
    def files(self) -> Dict[Node, FileIncludeInfo]:
        return dict(self._files)

    def visit_document(self, document: KsyDocument) -> None:
        for node in document.walk():
            if is_import_value(node):
                text = node.text or ""
                self._files[node] = FileIncludeInfo(
                    path=compute_import_path(text, document),
                    import_text=text,
                    text_range=node.text_range,
                )


def get_include_infos(document: KsyDocument) -> List[FileIncludeInfo]:
    """Include edges of ``document``; empty for documents that are not Kaitai schemas."""
    if not is_kaitai_file(document):
        return []

    visitor = ImportsVisitor()
    visitor.visit_document(document)
    return list(visitor.files.values())
