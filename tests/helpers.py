from typing import List, Optional

from kaitai_struct_designer.models.document import KsyDocument, Node, NodeKind


def find_scalar(document: KsyDocument, text: str, key: Optional[str] = None) -> Node:
    """First scalar with the given text, optionally only values of ``key``."""
    for node in document.walk():
        if node.kind is not NodeKind.SCALAR or node.text != text:
            continue
        if key is None:
            return node
        parent = node.parent
        if parent is not None and parent.kind is NodeKind.KEY_VALUE and parent.key == key:
            return node
    raise AssertionError(f"no scalar {text!r} under {key!r}")


def keys(nodes: List[Node]) -> List[str]:
    return [node.key for node in nodes]
