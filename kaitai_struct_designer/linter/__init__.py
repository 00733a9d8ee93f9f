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

"""Linter package for Kaitai Struct schema files."""

from pathlib import Path
from typing import List, Optional

from ..exceptions import DocumentLoadError, SchemaLoadError
from ..models.document_store import DocumentStore
from .report import LintResult
from .linters import ReferenceLinter, StructureLinter, SyntaxLinter

__all__ = ['lint_files', 'LintResult']


def lint_files(file_paths: List[Path], check_references: bool = True,
               store: Optional[DocumentStore] = None) -> List[LintResult]:
    """Lint a list of Kaitai Struct files.

    Args:
        file_paths: List of file paths to lint
        check_references: Also report unresolved imports and types
        store: Document store to load files through

    Returns:
        List of LintResult objects, one per file
    """
    results = []

    store = store or DocumentStore()
    syntax_linter = SyntaxLinter()
    structure_linter = StructureLinter()
    reference_linter = ReferenceLinter(store)

    for file_path in file_paths:
        result = LintResult(file_path)

        try:
            document = store.parser.load_document(file_path)
        except DocumentLoadError as e:
            result.add_error(str(e))
            results.append(result)
            continue

        try:
            syntax_linter.lint(document, result)
            structure_linter.lint(document, result)
            if check_references:
                reference_linter.lint(document, result)
        except SchemaLoadError as e:
            result.add_error(f"Cannot validate: {e}")

        results.append(result)

    return results
