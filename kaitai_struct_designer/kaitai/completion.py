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

"""Path completion for import entries."""

import re
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

from .file_utils import KAITAI_FILE_EXTENSION, is_kaitai_file
from .imports import is_absolute_path
from .structure import IMPORTS_KEY

logger = logging.getLogger(__name__)

_BLOCK_ITEM = re.compile(r"^(?P<indent>\s*)-\s+(?P<text>[^\s#]*)$")
_EMPTY_BLOCK_ITEM = re.compile(r"^\s*-\s*$")
_FLOW_ITEM = re.compile(r"\b" + IMPORTS_KEY + r":\s*\[(?:[^\]]*,)?\s*(?P<text>[^\s,\[\]]*)$")
_IMPORTS_KEY_LINE = re.compile(r"^\s*(?:-\s+)?" + IMPORTS_KEY + r":\s*(?:#.*)?$")
_SEQUENCE_LINE = re.compile(r"^\s*-(?:\s|$)")


@dataclass(frozen=True)
class ImportCandidate:
    label: str
    is_directory: bool


def import_completion_prefix(lines: Sequence[str], line: int, character: int) -> Optional[str]:
    """Partially typed import path at the cursor, or None outside an ``imports`` entry.

    Works on raw lines because the buffer is usually not valid YAML while
    the user is typing.
    """
    if line < 0 or line >= len(lines):
        return None
    before = lines[line][:character]

    flow = _FLOW_ITEM.search(before)
    if flow:
        return flow.group("text").strip()

    if _EMPTY_BLOCK_ITEM.match(before):
        text = ""
    else:
        block = _BLOCK_ITEM.match(before)
        if not block:
            return None
        text = block.group("text")

    # Walk up over the sibling entries to the key owning the sequence.
    for index in range(line - 1, -1, -1):
        candidate = lines[index]
        stripped = candidate.strip()
        if not stripped or stripped.startswith("#"):
            continue
        if _IMPORTS_KEY_LINE.match(candidate):
            return text.strip()
        if _SEQUENCE_LINE.match(candidate):
            continue
        return None
    return None


def complete_import_path(completion_text: str, containing_directory: Path) -> List[ImportCandidate]:
    """Directories and schema files an import path starting with ``completion_text`` can continue with.

    Files are offered without their extension, directories with a trailing
    slash; both keep the already typed directory part.
    """
    if completion_text:
        directory_text, separator, _ = completion_text.rpartition("/")
        prefix = directory_text + separator
        if is_absolute_path(completion_text):
            root = Path(prefix or completion_text)
        else:
            root = containing_directory / prefix
        try:
            if not root.exists():
                return []
            if not root.is_dir():
                root = root.parent
        except (OSError, ValueError):
            return []
    else:
        prefix = ""
        root = containing_directory

    return [ImportCandidate(prefix + name, is_directory) for name, is_directory in _children(root)]


def _children(root: Path) -> List[tuple]:
    try:
        entries = sorted(root.iterdir(), key=lambda entry: entry.name)
    except OSError as exc:
        logger.debug(f"Cannot list {root}: {exc}")
        return []

    children = []
    for entry in entries:
        if entry.is_dir():
            children.append((f"{entry.name}/", True))
        elif is_kaitai_file(entry):
            children.append((entry.name[:-len(KAITAI_FILE_EXTENSION)], False))
    return children
