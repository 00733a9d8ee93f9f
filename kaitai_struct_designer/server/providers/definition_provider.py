#!/usr/bin/env python3

from typing import Optional

from lsprotocol import types as lsp

from kaitai_struct_designer.kaitai.references import ImportReference, TypeReference, find_reference_at
from kaitai_struct_designer.models.document_store import DocumentStore

from ..utils.text_utils import to_lsp_range
from ..utils.uri_utils import path_to_uri, uri_to_path


class DefinitionProvider:
    """Provides go-to-definition for import entries and custom type names."""

    def __init__(self, store: DocumentStore):
        self.store = store

    def get_definition(self, params: lsp.DefinitionParams, server=None) -> Optional[lsp.Location]:
        """Handle go-to-definition requests."""
        document = self.store.get_document(uri_to_path(params.text_document.uri))
        if document is None:
            return None

        offset = document.position_to_offset(params.position.line, params.position.character)
        reference = find_reference_at(document, offset, self.store)

        if isinstance(reference, ImportReference):
            target = reference.resolve()
            if target is None or target.file_path is None:
                return None
            return lsp.Location(
                uri=path_to_uri(str(target.file_path)),
                range=lsp.Range(
                    start=lsp.Position(line=0, character=0),
                    end=lsp.Position(line=0, character=0)
                )
            )

        if isinstance(reference, TypeReference):
            definition = reference.resolve()
            if definition is None:
                return None
            owner = definition.document
            if owner.file_path is None:
                return None
            return lsp.Location(
                uri=path_to_uri(str(owner.file_path)),
                range=to_lsp_range(owner, definition.key_range or definition.text_range)
            )

        return None
