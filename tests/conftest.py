import textwrap
from pathlib import Path

import pytest

from kaitai_struct_designer.models.document_store import DocumentStore


@pytest.fixture
def store() -> DocumentStore:
    """A fresh document store so tests never share parsed documents."""
    return DocumentStore(cache_enabled=True, max_cache_size=32)


@pytest.fixture
def write_ksy(tmp_path: Path):
    """Write a dedented file below tmp_path and return its path."""

    def _write(relative: str, content: str) -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(content).lstrip("\n"), encoding="utf-8")
        return path

    return _write
