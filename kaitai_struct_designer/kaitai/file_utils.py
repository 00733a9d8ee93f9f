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

"""Kaitai Struct file detection."""

import os
from pathlib import PurePath
from typing import Any, Optional

from ..models.document import KsyDocument, Node

KAITAI_FILE_EXTENSION = ".ksy"


def _file_name(file: Any) -> Optional[str]:
    # Every accepted form is reduced to its final path component so that a
    # path string, a pathlib path, an open file and a parsed document for
    # the same file always agree.
    if isinstance(file, KsyDocument):
        if file.file_path is not None:
            return file.file_path.name
        return PurePath(file.name).name if file.name else None
    if isinstance(file, (str, os.PathLike)):
        try:
            return PurePath(os.fspath(file)).name
        except TypeError:
            return None
    name = getattr(file, "name", None)
    if isinstance(name, str):
        return PurePath(name).name
    return None


def is_kaitai_file(file: Any) -> bool:
    """Whether ``file`` names a Kaitai Struct schema (exact, case-sensitive ``.ksy`` suffix).

    Accepts path strings, ``os.PathLike`` objects, file objects with a ``name``
    and parsed documents.
    """
    name = _file_name(file)
    return name is not None and name.endswith(KAITAI_FILE_EXTENSION)


def is_in_kaitai_file(node: Node) -> bool:
    return is_kaitai_file(node.document)
