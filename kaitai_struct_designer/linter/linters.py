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

"""Schema and reference linters for Kaitai Struct files."""

from typing import List

from ..kaitai.reference_checks import validate_references
from ..models.document import KsyDocument
from ..models.document_store import DocumentStore
from ..schema.ksy_schema import SchemaIssue, validate_document
from .report import LintResult


def _report(issues: List[SchemaIssue], result: LintResult) -> None:
    for issue in issues:
        line = issue.line + 1 if issue.line is not None else None
        column = issue.column + 1 if issue.column is not None else None
        if issue.severity == "warning":
            result.add_warning(issue.message, line=line, column=column, yaml_path=issue.yaml_path)
        else:
            result.add_error(issue.message, line=line, column=column, yaml_path=issue.yaml_path)


class SyntaxLinter:
    """Reports YAML syntax errors and multi-document files."""

    def lint(self, document: KsyDocument, result: LintResult):
        if document.parse_error:
            line = document.parse_error_line + 1 if document.parse_error_line is not None else None
            column = document.parse_error_column + 1 if document.parse_error_column is not None else None
            result.add_error(f"YAML syntax error: {document.parse_error}", line=line, column=column)
        elif len(document.roots) > 1:
            result.add_warning(
                f"File contains {len(document.roots)} YAML documents; schema validation skipped"
            )
        elif not document.roots:
            result.add_error("Empty schema file")


class StructureLinter:
    """Checks the document against the Kaitai Struct grammar schema."""

    def lint(self, document: KsyDocument, result: LintResult):
        _report(validate_document(document), result)


class ReferenceLinter:
    """Reports imports and custom types that do not resolve."""

    def __init__(self, store: DocumentStore):
        self.store = store

    def lint(self, document: KsyDocument, result: LintResult):
        _report(validate_references(document, self.store), result)
