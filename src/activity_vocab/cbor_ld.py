"""
Compact binary encoding for ActivityStreams documents.

Encodes entities and documents as CBOR (RFC 8949), replacing well-known
``@context`` URLs with small integers so that federated payloads such as
signed activities do not repeat the same long context IRIs.  Only
``@context`` values are rewritten; everything else, including extension
keys, passes through unchanged.

Requires the ``cbor2`` package::

    pip install activity-vocab[cbor]
"""

from __future__ import annotations

import gzip
import json
from dataclasses import dataclass
from typing import Any, Callable, Optional, Union

try:
    import cbor2

    _HAS_CBOR2 = True
except ImportError:
    _HAS_CBOR2 = False

from activity_vocab import streams
from activity_vocab.entity import Entity

Document = Union[Entity, dict[str, Any]]


def _require_cbor2() -> None:
    if not _HAS_CBOR2:
        raise ImportError(
            "cbor2 is required for CBOR encoding. "
            "Install it with: pip install activity-vocab[cbor]"
        )


# Context URLs seen on nearly every ActivityPub payload
DEFAULT_CONTEXT_REGISTRY: dict[str, int] = {
    "https://www.w3.org/ns/activitystreams": 1,
    "https://w3id.org/security/v1": 2,
    "https://w3id.org/security/v2": 3,
    "https://www.w3.org/ns/did/v1": 4,
    "https://w3id.org/identity/v1": 5,
}


@dataclass(frozen=True)
class PayloadStats:
    """Encoded sizes of one document, in bytes."""

    json_bytes: int
    cbor_bytes: int
    gzip_json_bytes: int
    gzip_cbor_bytes: int

    def _ratio(self, size: int) -> float:
        return size / self.json_bytes if self.json_bytes else 0.0

    @property
    def cbor_ratio(self) -> float:
        """CBOR size relative to compact JSON (lower is better)."""
        return self._ratio(self.cbor_bytes)

    @property
    def gzip_cbor_ratio(self) -> float:
        return self._ratio(self.gzip_cbor_bytes)


def _as_document(doc: Document) -> dict[str, Any]:
    if isinstance(doc, Entity):
        return streams.to_dict(doc)
    if not isinstance(doc, dict):
        raise TypeError(f"Expected an Entity or dict, got: {type(doc).__name__}")
    return doc


def _reverse(registry: dict[str, int]) -> dict[int, str]:
    reverse = {ident: url for url, ident in registry.items()}
    if len(reverse) != len(registry):
        raise ValueError("Context registry maps several URLs to the same ID")
    return reverse


# ═══════════════════════════════════════════════════════════════════
# ENCODING
# ═══════════════════════════════════════════════════════════════════


def to_cbor(doc: Document, context_registry: Optional[dict[str, int]] = None) -> bytes:
    """Encode an entity or document as CBOR.

    Entities go through :func:`activity_vocab.streams.to_dict` first, so
    the output always names the ActivityStreams context.

    Args:
        doc: Entity or JSON-compatible document.
        context_registry: Context URL → integer ID. Defaults to
            :data:`DEFAULT_CONTEXT_REGISTRY`.

    Raises:
        ImportError: If ``cbor2`` is not installed.
        TypeError: If *doc* is neither an entity nor a dict.
    """
    _require_cbor2()
    registry = context_registry or DEFAULT_CONTEXT_REGISTRY

    def shorten(url: Any) -> Any:
        return registry.get(url, url) if isinstance(url, str) else url

    return cbor2.dumps(_rewrite_contexts(_as_document(doc), shorten))


def from_cbor(data: bytes, context_registry: Optional[dict[str, int]] = None) -> Any:
    """Decode CBOR bytes, restoring context URLs from their IDs.

    Raises:
        ImportError: If ``cbor2`` is not installed.
        ValueError: If the registry assigns one ID to several URLs.
    """
    _require_cbor2()
    reverse = _reverse(context_registry or DEFAULT_CONTEXT_REGISTRY)

    def restore(ident: Any) -> Any:
        if isinstance(ident, int) and not isinstance(ident, bool):
            return reverse.get(ident, ident)
        return ident

    return _rewrite_contexts(cbor2.loads(data), restore)


def entity_from_cbor(
    data: bytes,
    context_registry: Optional[dict[str, int]] = None,
    *,
    limits: Optional[dict[str, int]] = None,
) -> Entity:
    """Decode CBOR bytes straight into the entity the document's type names."""
    return streams.from_dict(from_cbor(data, context_registry), limits=limits)


def payload_stats(
    doc: Document, context_registry: Optional[dict[str, int]] = None
) -> PayloadStats:
    """Measure compact JSON against CBOR, plain and gzipped."""
    _require_cbor2()
    document = _as_document(doc)
    as_json = json.dumps(document, separators=(",", ":")).encode("utf-8")
    as_cbor = to_cbor(document, context_registry)
    return PayloadStats(
        json_bytes=len(as_json),
        cbor_bytes=len(as_cbor),
        gzip_json_bytes=len(gzip.compress(as_json)),
        gzip_cbor_bytes=len(gzip.compress(as_cbor)),
    )


def _rewrite_contexts(obj: Any, convert: Callable[[Any], Any]) -> Any:
    """Apply *convert* to every ``@context`` entry, at any nesting level.

    Array contexts are converted item by item; inline context objects
    are left untouched.
    """
    if isinstance(obj, list):
        return [_rewrite_contexts(item, convert) for item in obj]
    if not isinstance(obj, dict):
        return obj
    out = {}
    for key, value in obj.items():
        if key != "@context":
            out[key] = _rewrite_contexts(value, convert)
        elif isinstance(value, list):
            out[key] = [convert(item) for item in value]
        else:
            out[key] = convert(value)
    return out
