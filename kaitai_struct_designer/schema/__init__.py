"""Schema definitions and validation.

The bundled ``ksy.schema.json`` describes the Kaitai Struct grammar; it is
loaded once and shared by every validation.
"""

from .ksy_schema import (
    SchemaIssue,
    issue_for_node,
    validate_document,
)
