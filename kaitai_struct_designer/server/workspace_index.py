#!/usr/bin/env python3

import os
import logging
from pathlib import Path
from typing import Dict, List, Optional, Set

from kaitai_struct_designer.kaitai.file_utils import KAITAI_FILE_EXTENSION
from kaitai_struct_designer.kaitai.include_index import FileIncludeInfo, get_include_infos
from kaitai_struct_designer.models.document import KsyDocument
from kaitai_struct_designer.models.document_store import DocumentStore, normalize_key

from .utils.uri_utils import uri_to_path

logger = logging.getLogger(__name__)


def _index_key(path) -> Optional[str]:
    try:
        return normalize_key(os.path.realpath(os.fspath(path)))
    except (TypeError, ValueError):
        return None


class WorkspaceIndex:
    """Keeps the include edges of every schema file in the workspace."""

    def __init__(self, store: DocumentStore):
        self.store = store
        self.include_registry: Dict[str, List[FileIncludeInfo]] = {}

    def scan_workspace(self, workspace_uri: str):
        """Scan workspace for schema files and record their includes."""
        workspace_path = Path(uri_to_path(workspace_uri))

        for file_path in sorted(workspace_path.glob(f'**/*{KAITAI_FILE_EXTENSION}')):
            if not file_path.is_file():
                continue
            document = self.store.get_document(file_path)
            if document is None:
                logger.warning(f"Failed to load {file_path}")
                continue
            self.update_document(document)

        logger.info(f"Indexed {len(self.include_registry)} schema files in {workspace_path}")

    def update_document(self, document: KsyDocument):
        """Record the include edges of a document."""
        if document.file_path is None:
            return
        key = _index_key(document.file_path)
        if key is None:
            return
        self.include_registry[key] = get_include_infos(document)
        logger.debug(f"Indexed {len(self.include_registry[key])} includes of {document.file_path}")

    def unregister_file(self, file_path: str):
        """Forget a schema file."""
        key = _index_key(file_path)
        if key in self.include_registry:
            del self.include_registry[key]
            logger.info(f"Unregistered schema file: {file_path}")

    def get_includes(self, file_path: str) -> List[FileIncludeInfo]:
        return list(self.include_registry.get(_index_key(file_path), []))

    def get_dependents(self, file_path: str) -> List[str]:
        """Files importing ``file_path``, directly or through other imports."""
        target = _index_key(file_path)
        dependents: Set[str] = set()
        pending = [target]
        while pending:
            current = pending.pop()
            for source, includes in self.include_registry.items():
                if source in dependents or source == target:
                    continue
                if any(_index_key(info.path) == current for info in includes):
                    dependents.add(source)
                    pending.append(source)
        return sorted(dependents)
