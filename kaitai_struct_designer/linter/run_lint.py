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

"""CLI entry point for linting Kaitai Struct schema files."""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from ..config import designer_config
from ..kaitai.file_utils import KAITAI_FILE_EXTENSION, is_kaitai_file
from . import lint_files, LintResult


def find_ksy_files(paths: List[str]) -> List[Path]:
    """Find all Kaitai Struct files in given paths."""
    ksy_files = []

    for path_str in paths:
        path = Path(path_str)

        if not path.exists():
            print(f"Warning: Path does not exist: {path}", file=sys.stderr)
            continue

        if path.is_file():
            if is_kaitai_file(path):
                ksy_files.append(path)
            else:
                print(f"Warning: Not a Kaitai Struct file: {path}", file=sys.stderr)
        elif path.is_dir():
            ksy_files.extend(p for p in path.rglob(f'*{KAITAI_FILE_EXTENSION}') if p.is_file())
        else:
            print(f"Warning: Path is neither file nor directory: {path}", file=sys.stderr)

    return sorted(set(ksy_files))


def format_results(results: List[LintResult], output_format: str) -> str:
    if output_format == 'json':
        output = {
            'files': len(results),
            'errors': sum(len(r.errors) for r in results),
            'warnings': sum(len(r.warnings) for r in results),
            'results': [
                {
                    'file': str(r.file_path),
                    'errors': r.errors,
                    'warnings': r.warnings,
                }
                for r in results
            ]
        }
        return json.dumps(output, indent=2)

    lines = []
    if output_format == 'github-actions':
        for result in results:
            for error in result.errors:
                lines.append(f"::error file={result.file_path},line={error.get('line', 1)}::{error['message']}")
            for warning in result.warnings:
                lines.append(f"::warning file={result.file_path},line={warning.get('line', 1)}::{warning['message']}")
        return "\n".join(lines)

    for result in results:
        if result.errors or result.warnings:
            lines.append(f"\n{result.file_path}:")
            for error in result.errors:
                line_info = f":{error['line']}" if 'line' in error else ""
                lines.append(f"  ERROR{line_info}: {error['message']}")
            for warning in result.warnings:
                line_info = f":{warning['line']}" if 'line' in warning else ""
                lines.append(f"  WARNING{line_info}: {warning['message']}")
    return "\n".join(lines)


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the linter CLI."""
    parser = argparse.ArgumentParser(
        description='Lint Kaitai Struct (.ksy) schema files',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        'paths',
        nargs='*',
        default=None,
        help='File paths or directories to lint (default: current directory)',
    )
    parser.add_argument(
        '--format',
        choices=['human', 'json', 'github-actions'],
        default='human',
        help='Output format (default: human)',
    )
    parser.add_argument(
        '--no-references',
        action='store_true',
        help='Do not report unresolved imports and types',
    )

    args = parser.parse_args(argv)
    designer_config.set_logging()

    if not args.paths:
        args.paths = ['.']

    ksy_files = find_ksy_files(args.paths)

    if not ksy_files:
        print("No Kaitai Struct files found.", file=sys.stderr)
        sys.exit(1)

    results = lint_files(ksy_files, check_references=not args.no_references)

    output = format_results(results, args.format)
    if output:
        print(output)

    # Exit with error code if any errors found
    total_errors = sum(len(r.errors) for r in results)
    if total_errors > 0:
        sys.exit(1)
    if args.format == 'human':
        print("Lint succeeded with no errors.")
    sys.exit(0)


if __name__ == '__main__':
    main()
