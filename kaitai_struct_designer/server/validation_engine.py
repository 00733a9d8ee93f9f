#!/usr/bin/env python3

import logging
from typing import List, Optional

from lsprotocol import types as lsp

from kaitai_struct_designer.exceptions import SchemaLoadError
from kaitai_struct_designer.kaitai.file_utils import is_kaitai_file
from kaitai_struct_designer.kaitai.reference_checks import validate_references
from kaitai_struct_designer.models.document import KsyDocument
from kaitai_struct_designer.models.document_store import DocumentStore
from kaitai_struct_designer.schema.ksy_schema import SchemaIssue, validate_document

from .utils.text_utils import line_range, to_lsp_range

logger = logging.getLogger(__name__)

DIAGNOSTIC_SOURCE = "ksy"


class ValidationEngine:
    """Turns syntax, schema and reference findings into LSP diagnostics."""

    def __init__(self, store: DocumentStore):
        self.store = store

    def validate_all(self, document: KsyDocument) -> List[lsp.Diagnostic]:
        """Validate all aspects of the document and return diagnostics."""
        if not is_kaitai_file(document):
            return []

        diagnostics = self.validate_yaml_format(document)
        if diagnostics:
            return diagnostics

        try:
            diagnostics.extend(self._convert(document, issue) for issue in validate_document(document))
        except SchemaLoadError as e:
            logger.error(f"Schema validation unavailable: {e}")

        diagnostics.extend(self._convert(document, issue) for issue in validate_references(document, self.store))

        return diagnostics

    def validate_yaml_format(self, document: KsyDocument) -> List[lsp.Diagnostic]:
        """Validate YAML format and syntax."""
        if not document.parse_error:
            return []

        line = document.parse_error_line if document.parse_error_line is not None else 0
        return [lsp.Diagnostic(
            range=line_range(document.lines, line),
            message=f"YAML syntax error: {document.parse_error}",
            severity=lsp.DiagnosticSeverity.Error,
            source=DIAGNOSTIC_SOURCE,
        )]

    def _convert(self, document: KsyDocument, issue: SchemaIssue) -> lsp.Diagnostic:
        if issue.text_range is not None:
            diagnostic_range = to_lsp_range(document, issue.text_range)
        else:
            diagnostic_range = line_range(document.lines, issue.line or 0)

        severity = lsp.DiagnosticSeverity.Warning if issue.severity == "warning" else lsp.DiagnosticSeverity.Error
        message = issue.message
        if issue.yaml_path:
            message = f"{message} (at {issue.yaml_path})"
        return lsp.Diagnostic(
            range=diagnostic_range,
            message=message,
            severity=severity,
            source=DIAGNOSTIC_SOURCE,
        )
