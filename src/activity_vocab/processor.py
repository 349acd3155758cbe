"""
JSON-LD processing for ActivityStreams documents.

Wraps PyLD with the bundled ActivityStreams context and resource limit
enforcement, and bridges between expanded JSON-LD and entities.
"""

from __future__ import annotations
from typing import Any, Callable, Optional, Union

from pyld import jsonld

from activity_vocab import streams
from activity_vocab.context import document_loader
from activity_vocab.entity import Entity
from activity_vocab.security import enforce_resource_limits, resolve_limits
from activity_vocab.vocabulary import AS_CONTEXT_URL

Document = Union[Entity, dict[str, Any]]


class ActivityProcessor:
    """JSON-LD processor for ActivityStreams documents.

    Args:
        resource_limits: Overrides for :data:`DEFAULT_RESOURCE_LIMITS`.
        loader: PyLD document loader; defaults to the offline loader
            serving the bundled ActivityStreams context.
    """

    def __init__(
        self,
        resource_limits: Optional[dict[str, int]] = None,
        loader: Optional[Callable[..., dict[str, Any]]] = None,
    ):
        self._limits = resolve_limits(resource_limits)
        self._loader = loader or document_loader

    def _prepare(self, doc: Document) -> dict[str, Any]:
        if isinstance(doc, Entity):
            return streams.to_dict(doc, limits=self._limits)
        enforce_resource_limits(doc, self._limits)
        if isinstance(doc, dict) and "@context" not in doc:
            return {"@context": AS_CONTEXT_URL, **doc}
        return doc

    def _options(self, kwargs: dict[str, Any]) -> dict[str, Any]:
        return {"documentLoader": self._loader, **kwargs}

    # ── Core Operations ──────────────────────────────────────────

    def expand(self, doc: Document, **kwargs: Any) -> list[dict[str, Any]]:
        """Expand an entity or ActivityStreams document."""
        return jsonld.expand(self._prepare(doc), self._options(kwargs))

    def compact(self, doc: Document, ctx: Any = AS_CONTEXT_URL, **kwargs: Any) -> dict[str, Any]:
        """Compact a document, by default against the ActivityStreams context."""
        return jsonld.compact(self._prepare(doc), ctx, self._options(kwargs))

    def to_rdf(self, doc: Document, **kwargs: Any) -> str:
        """Convert to N-Quads."""
        return jsonld.to_rdf(
            self._prepare(doc), self._options({**kwargs, "format": "application/n-quads"})
        )

    def from_expanded(self, expanded: Any) -> Entity:
        """Compact expanded JSON-LD and deserialize it into an entity.

        Raises:
            ValueError: If the input holds more than one top-level node
                or no registered type.
        """
        enforce_resource_limits(expanded, self._limits)
        compacted = jsonld.compact(expanded, AS_CONTEXT_URL, self._options({}))
        if "@graph" in compacted:
            raise ValueError(
                f"Expected a single node, got {len(compacted['@graph'])} in @graph"
            )
        return streams.from_dict(compacted, limits=self._limits)
