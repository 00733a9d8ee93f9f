#!/usr/bin/env python3

from typing import List

from lsprotocol import types as lsp

from kaitai_struct_designer.kaitai.references import ImportReference, iter_references
from kaitai_struct_designer.models.document_store import DocumentStore

from ..utils.text_utils import to_lsp_range
from ..utils.uri_utils import path_to_uri, uri_to_path


class DocumentLinkProvider:
    """Turns resolvable import entries into clickable links."""

    def __init__(self, store: DocumentStore):
        self.store = store

    def get_document_links(self, params: lsp.DocumentLinkParams, server=None) -> List[lsp.DocumentLink]:
        document = self.store.get_document(uri_to_path(params.text_document.uri))
        if document is None:
            return []

        links = []
        for reference in iter_references(document, self.store):
            if not isinstance(reference, ImportReference):
                continue
            target = reference.resolve()
            if target is None or target.file_path is None:
                continue
            links.append(lsp.DocumentLink(
                range=to_lsp_range(document, reference.range),
                target=path_to_uri(str(target.file_path)),
                tooltip=reference.path,
            ))
        return links
