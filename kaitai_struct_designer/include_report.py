#!/usr/bin/env python3
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

"""CLI printing the include edges and visible custom types of a schema file."""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import designer_config
from .exceptions import DocumentLoadError
from .kaitai.file_utils import is_kaitai_file
from .kaitai.include_index import get_include_infos
from .kaitai.types_collector import collect_types
from .models.document_store import DocumentStore


def build_report(file_path: Path, store: Optional[DocumentStore] = None) -> Dict[str, Any]:
    """Include edges and visible types of ``file_path``.

    Raises:
        DocumentLoadError: If the file cannot be read
    """
    store = store or DocumentStore()
    document = store.parser.load_document(file_path)

    includes = []
    for info in get_include_infos(document):
        line, column = document.offset_to_position(info.text_range.start)
        includes.append({
            'import': info.import_text,
            'path': info.path,
            'exists': store.find_file(info.path) is not None,
            'line': line + 1,
        })

    types = []
    for definition in collect_types(document, store):
        owner = definition.document
        line, _ = owner.offset_to_position(definition.text_range.start)
        types.append({
            'name': definition.key,
            'file': str(owner.file_path) if owner.file_path is not None else owner.name,
            'line': line + 1,
        })

    return {'file': str(file_path), 'includes': includes, 'types': types}


def format_report(report: Dict[str, Any]) -> str:
    lines: List[str] = [f"{report['file']}:"]
    lines.append("  includes:")
    if not report['includes']:
        lines.append("    (none)")
    for include in report['includes']:
        marker = "" if include['exists'] else " (missing)"
        lines.append(f"    {include['import']} -> {include['path']}{marker}")
    lines.append("  types:")
    if not report['types']:
        lines.append("    (none)")
    for type_info in report['types']:
        lines.append(f"    {type_info['name']} ({type_info['file']}:{type_info['line']})")
    return "\n".join(lines)


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the include report CLI."""
    parser = argparse.ArgumentParser(
        description='Show the imports and visible custom types of Kaitai Struct files',
    )
    parser.add_argument('files', nargs='+', help='Kaitai Struct files to inspect')
    parser.add_argument(
        '--format',
        choices=['human', 'json'],
        default='human',
        help='Output format (default: human)',
    )
    args = parser.parse_args(argv)
    designer_config.set_logging()

    store = DocumentStore()
    reports = []
    failed = False
    for file_name in args.files:
        path = Path(file_name)
        if not is_kaitai_file(path):
            print(f"Warning: Not a Kaitai Struct file: {path}", file=sys.stderr)
            continue
        try:
            reports.append(build_report(path, store))
        except DocumentLoadError as e:
            print(f"Error: {e}", file=sys.stderr)
            failed = True

    if args.format == 'json':
        print(json.dumps(reports, indent=2))
    else:
        print("\n".join(format_report(report) for report in reports))

    sys.exit(1 if failed else 0)


if __name__ == '__main__':
    main()
