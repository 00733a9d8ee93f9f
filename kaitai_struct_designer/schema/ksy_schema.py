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

"""Validation of Kaitai Struct documents against the bundled grammar schema."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, List, Optional

import jsonschema
from jsonschema.exceptions import SchemaError

from ..exceptions import SchemaLoadError
from ..kaitai.file_utils import is_kaitai_file
from ..models.document import KsyDocument, Node, TextRange
from ..models.json_schema_loader import load_ksy_schema

logger = logging.getLogger(__name__)

JsonPointer = str

_VALIDATOR: Optional[jsonschema.Draft7Validator] = None
_VALIDATOR_LOCK = threading.Lock()


@dataclass(frozen=True)
class SchemaIssue:
    message: str
    yaml_path: Optional[JsonPointer] = None
    text_range: Optional[TextRange] = None
    line: Optional[int] = None  # 0-based
    column: Optional[int] = None  # 0-based
    severity: str = "error"


def _jp_escape(token: str) -> str:
    return token.replace("~", "~0").replace("/", "~1")


def _to_pointer(path) -> JsonPointer:
    if not path:
        return ""
    return "/" + "/".join(_jp_escape(str(p)) for p in path)


def _json_key(key: Any) -> str:
    if isinstance(key, bool):
        return "true" if key else "false"
    return str(key)


def _json_compatible(value: Any) -> Any:
    # JSON object keys are strings; YAML keys (enum values, 0x1f...) may not be.
    if isinstance(value, dict):
        return {_json_key(k): _json_compatible(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_json_compatible(v) for v in value]
    return value


def get_ksy_validator() -> jsonschema.Draft7Validator:
    """Validator for the bundled schema, built on first use and shared afterwards."""
    global _VALIDATOR
    if _VALIDATOR is not None:
        return _VALIDATOR
    with _VALIDATOR_LOCK:
        if _VALIDATOR is None:
            schema = load_ksy_schema()
            try:
                jsonschema.Draft7Validator.check_schema(schema)
            except SchemaError as e:
                raise SchemaLoadError(f"Bundled schema is not a valid JSON Schema: {e.message}") from e
            _VALIDATOR = jsonschema.Draft7Validator(schema)
    return _VALIDATOR


def issue_for_node(document: KsyDocument, node: Optional[Node], message: str,
                   yaml_path: Optional[JsonPointer] = None, severity: str = "error") -> SchemaIssue:
    if node is None:
        return SchemaIssue(message=message, yaml_path=yaml_path, line=0, column=0, severity=severity)
    # Point at the key rather than the whole pair.
    text_range = node.key_range if node.key_range is not None else node.text_range
    line, column = document.offset_to_position(text_range.start)
    return SchemaIssue(
        message=message,
        yaml_path=yaml_path,
        text_range=text_range,
        line=line,
        column=column,
        severity=severity,
    )


def validate_document(document: KsyDocument) -> List[SchemaIssue]:
    """Check the document's top-level value against the Kaitai Struct grammar.

    Documents that are not Kaitai schemas, that failed to parse, or whose
    stream holds anything but exactly one YAML document are not validated.
    """
    if not is_kaitai_file(document):
        return []
    if document.parse_error:
        return []
    if len(document.roots) != 1 or len(document.data) != 1:
        logger.debug(f"Skipping schema validation of {document.name}: {len(document.roots)} documents")
        return []

    validator = get_ksy_validator()
    data = _json_compatible(document.data[0])

    issues: List[SchemaIssue] = []
    errors = sorted(validator.iter_errors(data), key=lambda e: [str(p) for p in e.absolute_path])
    for error in errors:
        path = list(error.absolute_path)
        node = document.node_at_path(path)
        issues.append(issue_for_node(document, node, error.message, yaml_path=_to_pointer(path)))
    return issues
