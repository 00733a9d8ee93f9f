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

"""Kaitai Struct schema semantics on top of the YAML document model."""

from .file_utils import KAITAI_FILE_EXTENSION, is_kaitai_file, is_in_kaitai_file
from .standard_types import STANDARD_TYPES, is_standard_type
from .imports import ImportsContainer, resolve_import, compute_import_path, is_absolute_path
from .types_collector import TypesCollector, collect_types
from .references import ImportReference, TypeReference, get_references, find_reference_at, iter_references
from .include_index import FileIncludeInfo, get_include_infos

__all__ = [
    'KAITAI_FILE_EXTENSION',
    'is_kaitai_file',
    'is_in_kaitai_file',
    'STANDARD_TYPES',
    'is_standard_type',
    'ImportsContainer',
    'resolve_import',
    'compute_import_path',
    'is_absolute_path',
    'TypesCollector',
    'collect_types',
    'ImportReference',
    'TypeReference',
    'get_references',
    'find_reference_at',
    'iter_references',
    'FileIncludeInfo',
    'get_include_infos',
]
