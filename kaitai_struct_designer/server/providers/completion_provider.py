#!/usr/bin/env python3

from pathlib import Path

from lsprotocol import types as lsp

from kaitai_struct_designer.kaitai.completion import complete_import_path, import_completion_prefix
from kaitai_struct_designer.kaitai.file_utils import KAITAI_FILE_EXTENSION, is_kaitai_file

from ..utils.uri_utils import uri_to_path


class CompletionProvider:
    """Provides path completion inside ``imports`` entries."""

    def get_completions(self, params: lsp.CompletionParams, server) -> lsp.CompletionList:
        """Handle completion requests."""
        empty = lsp.CompletionList(is_incomplete=False, items=[])

        file_path = uri_to_path(params.text_document.uri)
        if not is_kaitai_file(file_path):
            return empty

        document = server.workspace.get_text_document(params.text_document.uri)
        if not document:
            return empty

        line = params.position.line
        character = params.position.character
        completion_text = import_completion_prefix(document.lines, line, character)
        if completion_text is None:
            return empty

        replace_range = lsp.Range(
            start=lsp.Position(line=line, character=character - len(completion_text)),
            end=lsp.Position(line=line, character=character)
        )

        items = []
        for candidate in complete_import_path(completion_text, Path(file_path).parent):
            items.append(lsp.CompletionItem(
                label=candidate.label,
                kind=lsp.CompletionItemKind.Folder if candidate.is_directory else lsp.CompletionItemKind.File,
                detail="Directory" if candidate.is_directory else f"Kaitai Struct schema ({candidate.label}{KAITAI_FILE_EXTENSION})",
                text_edit=lsp.TextEdit(range=replace_range, new_text=candidate.label),
            ))

        # Directory entries need another request once the user descends into them.
        return lsp.CompletionList(is_incomplete=True, items=items)
