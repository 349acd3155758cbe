"""
Document-level entry points.

:func:`from_dict` picks the entity class for a top-level ActivityStreams
document from its ``type`` and deserializes it; :func:`to_dict` does the
reverse and adds the ``@context`` the entity layer never emits.
:class:`JSONResolver` dispatches decoded documents to per-type callbacks.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Optional

from activity_vocab import registry
from activity_vocab.entity import Entity
from activity_vocab.properties import type_names
from activity_vocab.security import enforce_resource_limits
from activity_vocab.vocabulary import AS_CONTEXT_URL

logger = logging.getLogger(__name__)


class UnhandledTypeError(LookupError):
    """No registered type matches the document's ``type``."""


class NoCallbackMatchError(LookupError):
    """The document's type is known but no callback accepts it."""


def resolve_class(document: dict[str, Any]) -> Optional[type[Entity]]:
    """Return the entity class for *document*, or None.

    Object types win over link types when ``type`` lists both; within a
    family the first listed name wins.
    """
    classes = [
        cls for cls in map(registry.lookup, type_names(document.get("type")))
        if cls is not None
    ]
    for family in ("object", "link"):
        for cls in classes:
            if cls.family == family:
                return cls
    return None


def from_dict(
    document: dict[str, Any], *, limits: Optional[dict[str, int]] = None
) -> Entity:
    """Deserialize a top-level document into the entity its ``type`` names.

    Raises:
        TypeError: If *document* is not a dict.
        ValueError: If no registered type matches, or nesting exceeds
            the depth limit.
    """
    if not isinstance(document, dict):
        raise TypeError(f"Document must be a dict, got: {type(document).__name__}")
    cls = resolve_class(document)
    if cls is None:
        raise ValueError(f"No registered type for document type {document.get('type')!r}")
    logger.debug("Deserializing document as %s", cls.__name__)
    return cls.from_dict(document, limits=limits)


def to_dict(entity: Entity, *, limits: Optional[dict[str, int]] = None) -> dict[str, Any]:
    """Serialize *entity* as a standalone document with ``@context``."""
    return {"@context": AS_CONTEXT_URL, **entity.serialize(limits=limits)}


def from_json(text: str, *, limits: Optional[dict[str, int]] = None) -> Entity:
    """Decode and deserialize a JSON document after enforcing resource limits."""
    enforce_resource_limits(text, limits)
    return from_dict(json.loads(text), limits=limits)


def to_json(entity: Entity, *, limits: Optional[dict[str, int]] = None, **kwargs: Any) -> str:
    """Serialize *entity* to a JSON document; extra kwargs go to :func:`json.dumps`."""
    return json.dumps(to_dict(entity, limits=limits), **kwargs)


# ═══════════════════════════════════════════════════════════════════
# RESOLVER
# ═══════════════════════════════════════════════════════════════════


class JSONResolver:
    """Dispatch decoded documents to callbacks keyed by entity class.

    A callback registered for a class also receives its subclasses;
    the most specific registration wins.

    Example::

        resolver = JSONResolver({Note: handle_note, Activity: handle_activity})
        resolver.resolve({"type": "Create", "object": {...}})
    """

    def __init__(
        self,
        callbacks: Optional[dict[type[Entity], Callable[[Entity], Any]]] = None,
        *,
        limits: Optional[dict[str, int]] = None,
    ):
        self._callbacks: dict[type[Entity], Callable[[Entity], Any]] = dict(callbacks or {})
        self._limits = limits

    def register(self, cls: type[Entity], callback: Callable[[Entity], Any]) -> None:
        self._callbacks[cls] = callback

    def resolve(self, document: dict[str, Any] | str) -> Any:
        """Deserialize *document* and return the matching callback's result.

        Raises:
            UnhandledTypeError: If the document's type is not registered.
            NoCallbackMatchError: If no callback covers the resolved class.
        """
        if isinstance(document, str):
            enforce_resource_limits(document, self._limits)
            document = json.loads(document)
        if not isinstance(document, dict):
            raise TypeError(f"Document must be a dict, got: {type(document).__name__}")
        cls = resolve_class(document)
        if cls is None:
            raise UnhandledTypeError(
                f"No registered type for document type {document.get('type')!r}"
            )
        for klass in cls.__mro__:
            callback = self._callbacks.get(klass)
            if callback is not None:
                return callback(cls.from_dict(document, limits=self._limits))
        raise NoCallbackMatchError(f"No callback registered for {cls.__name__}")
