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

"""JSON Schema loader for Kaitai Struct schema validation."""

import json
import logging
import threading
from pathlib import Path
from typing import Dict

from ..exceptions import SchemaLoadError

logger = logging.getLogger(__name__)

KSY_SCHEMA_RESOURCE = "ksy.schema.json"

# Schemas are bundled and never change, so they are loaded once per process.
_SCHEMA_CACHE: Dict[str, dict] = {}
_SCHEMA_LOCK = threading.Lock()


def get_schema_path(resource_name: str = KSY_SCHEMA_RESOURCE) -> Path:
    """Get the path to a bundled JSON Schema file.

    Args:
        resource_name: File name inside the package's ``schema`` directory

    Returns:
        Path to the schema file
    """
    schema_dir = Path(__file__).parent.parent / "schema"
    return schema_dir / resource_name


def load_schema(resource_name: str = KSY_SCHEMA_RESOURCE) -> dict:
    """Load a bundled JSON Schema file, reading it only on first use.

    Raises:
        SchemaLoadError: If the schema file is missing or is not valid JSON
    """
    schema = _SCHEMA_CACHE.get(resource_name)
    if schema is not None:
        return schema

    with _SCHEMA_LOCK:
        schema = _SCHEMA_CACHE.get(resource_name)
        if schema is not None:
            return schema

        schema_path = get_schema_path(resource_name)
        if not schema_path.exists():
            raise SchemaLoadError(f"Schema file not found: {schema_path}")

        try:
            with open(schema_path, "r", encoding="utf-8") as f:
                schema = json.load(f)
        except json.JSONDecodeError as e:
            raise SchemaLoadError(f"Invalid JSON in schema file {schema_path}: {e.msg}") from e

        logger.debug(f"Loaded JSON Schema {schema_path}")
        _SCHEMA_CACHE[resource_name] = schema

    return schema


def load_ksy_schema() -> dict:
    """The Kaitai Struct grammar schema."""
    return load_schema(KSY_SCHEMA_RESOURCE)


def clear_cache() -> None:
    """Clear the schema cache. Useful for testing."""
    with _SCHEMA_LOCK:
        _SCHEMA_CACHE.clear()
