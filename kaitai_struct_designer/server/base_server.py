#!/usr/bin/env python3

import logging
from typing import List, Optional

from pygls.server import LanguageServer
from lsprotocol import types as lsp

from kaitai_struct_designer import __version__
from kaitai_struct_designer.models.document_store import DocumentStore

from .workspace_index import WorkspaceIndex
from .document_processor import DocumentProcessor
from .providers.completion_provider import CompletionProvider
from .providers.definition_provider import DefinitionProvider
from .providers.document_link_provider import DocumentLinkProvider
from .utils.uri_utils import path_to_uri, uri_to_path

logger = logging.getLogger(__name__)


class KsyLanguageServer:
    """Main language server class for Kaitai Struct schema files."""

    def __init__(self, store: Optional[DocumentStore] = None):
        self.server = LanguageServer("ksy-language-server", __version__)
        self.store = store or DocumentStore()

        # Initialize components
        self.workspace_index = WorkspaceIndex(self.store)
        self.document_processor = DocumentProcessor(self.store, self.workspace_index)
        self.completion_provider = CompletionProvider()
        self.definition_provider = DefinitionProvider(self.store)
        self.document_link_provider = DocumentLinkProvider(self.store)

        # Register handlers
        self._register_handlers()

    def _register_handlers(self):
        """Register all LSP handlers."""

        @self.server.feature(lsp.INITIALIZE)
        def initialize(ls, params):
            self._on_initialize(ls, params)

        @self.server.feature(lsp.TEXT_DOCUMENT_DID_OPEN)
        def did_open(ls, params):
            self._on_text_document_did_open(ls, params)

        @self.server.feature(lsp.TEXT_DOCUMENT_DID_CHANGE)
        def did_change(ls, params):
            self._on_text_document_did_change(ls, params)

        @self.server.feature(lsp.TEXT_DOCUMENT_DID_SAVE)
        def did_save(ls, params):
            self._on_text_document_did_save(ls, params)

        @self.server.feature(lsp.TEXT_DOCUMENT_DID_CLOSE)
        def did_close(ls, params):
            self._on_text_document_did_close(ls, params)

        @self.server.feature(lsp.WORKSPACE_DID_CHANGE_WATCHED_FILES)
        def did_change_watched_files(ls, params):
            self._on_workspace_did_change_watched_files(ls, params)

        @self.server.feature(
            lsp.TEXT_DOCUMENT_COMPLETION,
            lsp.CompletionOptions(trigger_characters=['/', '-', ' '])
        )
        def completion(ls, params):
            return self._on_completion(ls, params)

        @self.server.feature(lsp.TEXT_DOCUMENT_DEFINITION)
        def definition(ls, params):
            return self._on_definition(ls, params)

        @self.server.feature(lsp.TEXT_DOCUMENT_DOCUMENT_LINK, lsp.DocumentLinkOptions())
        def document_link(ls, params):
            return self._on_document_link(ls, params)

    def start(self):
        """Start the language server."""
        self.server.start_io()

    def _on_initialize(self, ls, params: lsp.InitializeParams):
        """Index the workspace folders once the client connects."""
        logger.info("Initializing Kaitai Struct Language Server")

        if params.workspace_folders:
            for folder in params.workspace_folders:
                self.workspace_index.scan_workspace(folder.uri)
        elif params.root_uri:
            self.workspace_index.scan_workspace(params.root_uri)

    def _on_text_document_did_open(self, ls, params: lsp.DidOpenTextDocumentParams):
        """Handle document open event."""
        self.document_processor.process_document(params.text_document.uri, params.text_document.text, self.server)

    def _on_text_document_did_change(self, ls, params: lsp.DidChangeTextDocumentParams):
        """Handle document change event.

        Only the edited buffer is re-validated; files importing it are
        re-validated once the change is saved.
        """
        uri = params.text_document.uri
        # pygls has already applied the changes to its copy of the buffer.
        document = ls.workspace.get_text_document(uri)
        self.document_processor.process_document(uri, document.source, self.server)

    def _on_text_document_did_save(self, ls, params: lsp.DidSaveTextDocumentParams):
        """Handle document save event."""
        uri = params.text_document.uri
        self.store.invalidate(uri_to_path(uri))
        if params.text is not None:
            self.document_processor.process_document(uri, params.text, self.server)
        self._revalidate_dependents(uri)

    def _on_text_document_did_close(self, ls, params: lsp.DidCloseTextDocumentParams):
        """Handle document close event."""
        self.document_processor.close_document(params.text_document.uri, self.server)
        self._revalidate_dependents(params.text_document.uri)

    def _on_workspace_did_change_watched_files(self, ls, params: lsp.DidChangeWatchedFilesParams):
        """Handle watched file changes."""
        for change in params.changes:
            file_path = uri_to_path(change.uri)
            self.store.invalidate(file_path)

            if change.type == lsp.FileChangeType.Deleted:
                self.workspace_index.unregister_file(file_path)
            else:
                document = self.store.get_document(file_path)
                if document is not None:
                    self.workspace_index.update_document(document)

            self._revalidate_dependents(change.uri)

    def _revalidate_dependents(self, uri: str):
        """Re-validate the open documents that import ``uri``."""
        open_documents = self._open_documents()
        for dependent in self.workspace_index.get_dependents(uri_to_path(uri)):
            dependent_uri = path_to_uri(dependent)
            document = open_documents.get(dependent_uri)
            if document is None:
                continue
            try:
                self.document_processor.process_document(
                    dependent_uri, document.source, self.server, update_index=False
                )
            except Exception as e:
                logger.error(f"Failed to revalidate {dependent_uri}: {e}")

    def _open_documents(self):
        return dict(self.server.workspace.text_documents)

    def _on_completion(self, ls, params: lsp.CompletionParams) -> lsp.CompletionList:
        """Handle completion requests."""
        return self.completion_provider.get_completions(params, self.server)

    def _on_definition(self, ls, params: lsp.DefinitionParams) -> Optional[lsp.Location]:
        """Handle go-to-definition requests."""
        return self.definition_provider.get_definition(params, self.server)

    def _on_document_link(self, ls, params: lsp.DocumentLinkParams) -> List[lsp.DocumentLink]:
        """Handle document link requests."""
        return self.document_link_provider.get_document_links(params, self.server)
