"""Resource limits for untrusted ActivityStreams documents.

Inbox payloads come from arbitrary servers, so documents are checked for
size and nesting before they reach the entity layer.  The same
``max_graph_depth`` setting bounds how deeply entities may embed one
another during (de)serialization.
"""

from __future__ import annotations
import json
from typing import Any, Optional, Union


DEFAULT_RESOURCE_LIMITS = {
    "max_graph_depth": 100,
    "max_document_size": 10 * 1024 * 1024,  # 10 MB
}


def resolve_limits(limits: Optional[dict[str, int]] = None) -> dict[str, int]:
    """Merge per-call overrides onto :data:`DEFAULT_RESOURCE_LIMITS`."""
    return {**DEFAULT_RESOURCE_LIMITS, **(limits or {})}


def enforce_resource_limits(
    document: Union[str, bytes, dict, list],
    limits: Optional[dict[str, int]] = None,
) -> None:
    """Check a raw or decoded document against resource limits.

    Size is measured in UTF-8 bytes of the JSON text; depth counts
    nested arrays and objects.

    Raises:
        TypeError: If *document* is not text, bytes, a dict or a list,
            or a decoded document holds non-JSON values.
        ValueError: If a limit is exceeded or text is not valid JSON.
    """
    if document is None:
        raise TypeError("Document must not be None")
    resolved = resolve_limits(limits)
    max_size = resolved["max_document_size"]

    if isinstance(document, (str, bytes)):
        raw = document.encode("utf-8") if isinstance(document, str) else document
        if len(raw) > max_size:
            raise ValueError(f"Document size {len(raw)} exceeds limit {max_size}")
        try:
            parsed = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise ValueError(f"Document is not valid JSON: {exc}") from exc
        except RecursionError as exc:
            raise ValueError("Document nesting is too deep to decode") from exc
    elif isinstance(document, (dict, list)):
        try:
            size = len(json.dumps(document, ensure_ascii=False).encode("utf-8"))
        except (TypeError, ValueError) as exc:
            raise TypeError(f"Document is not JSON-serializable: {exc}") from exc
        except RecursionError as exc:
            raise ValueError("Document nesting is too deep to encode") from exc
        if size > max_size:
            raise ValueError(f"Document size {size} exceeds limit {max_size}")
        parsed = document
    else:
        raise TypeError(
            f"Document must be a str, dict, or list, got: {type(document).__name__}"
        )

    max_depth = resolved["max_graph_depth"]
    if _exceeds_depth(parsed, max_depth):
        raise ValueError(f"Document depth exceeds limit {max_depth}")


def _exceeds_depth(obj: Any, max_depth: int) -> bool:
    # Iterative walk; stops at the first container deeper than the limit
    stack = [(obj, 0)]
    while stack:
        node, depth = stack.pop()
        if isinstance(node, dict):
            children = node.values()
        elif isinstance(node, list):
            children = node
        else:
            continue
        depth += 1
        if depth > max_depth:
            return True
        stack.extend((child, depth) for child in children)
    return False
