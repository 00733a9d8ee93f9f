#!/usr/bin/env python3

"""Conversions between document offsets and LSP positions."""

from lsprotocol import types as lsp

from kaitai_struct_designer.models.document import KsyDocument, TextRange


def to_lsp_position(document: KsyDocument, offset: int) -> lsp.Position:
    line, character = document.offset_to_position(offset)
    return lsp.Position(line=line, character=character)


def to_lsp_range(document: KsyDocument, text_range: TextRange) -> lsp.Range:
    return lsp.Range(
        start=to_lsp_position(document, text_range.start),
        end=to_lsp_position(document, text_range.end),
    )


def line_range(document_lines, line: int) -> lsp.Range:
    """Range covering a whole line (or the first character when out of bounds)."""
    if 0 <= line < len(document_lines):
        length = len(document_lines[line].rstrip("\r\n"))
        return lsp.Range(
            start=lsp.Position(line=line, character=0),
            end=lsp.Position(line=line, character=max(length, 1))
        )
    return lsp.Range(
        start=lsp.Position(line=0, character=0),
        end=lsp.Position(line=0, character=1)
    )
