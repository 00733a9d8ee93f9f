#!/usr/bin/env python3

import logging

from pygls.server import LanguageServer

from kaitai_struct_designer.kaitai.file_utils import is_kaitai_file
from kaitai_struct_designer.models.document_store import DocumentStore

from .validation_engine import ValidationEngine
from .workspace_index import WorkspaceIndex
from .utils.uri_utils import uri_to_path

logger = logging.getLogger(__name__)


class DocumentProcessor:
    """Handles document processing and validation."""

    def __init__(self, store: DocumentStore, workspace_index: WorkspaceIndex):
        self.store = store
        self.workspace_index = workspace_index
        self.validation_engine = ValidationEngine(store)

    def process_document(self, uri: str, content: str, server: LanguageServer, update_index: bool = True):
        """Parse the buffer, refresh the index and publish diagnostics."""
        file_path = uri_to_path(uri)

        if not is_kaitai_file(file_path):
            return

        document = self.store.set_overlay(file_path, content)
        if update_index:
            self.workspace_index.update_document(document)

        try:
            diagnostics = self.validation_engine.validate_all(document)
        except Exception as e:
            logger.warning(f"Error during validation {uri}: {e}")
            diagnostics = []

        try:
            logger.info(f"Publishing {len(diagnostics)} diagnostics for {uri}")
            server.publish_diagnostics(uri, diagnostics)
        except Exception as e:
            logger.error(f"Failed to publish diagnostics {uri}: {e}")

    def close_document(self, uri: str, server: LanguageServer):
        """Drop the unsaved buffer; the file on disk is used from now on."""
        file_path = uri_to_path(uri)
        if not is_kaitai_file(file_path):
            return

        self.store.remove_overlay(file_path)
        document = self.store.get_document(file_path)
        if document is not None:
            self.workspace_index.update_document(document)
        else:
            self.workspace_index.unregister_file(file_path)
        server.publish_diagnostics(uri, [])
