"""
Polymorphic property cells.

A vocabulary property may accept several kinds of value: an embedded
object, an embedded link, a bare IRI reference, or one of the scalar
kinds from :mod:`activity_vocab.values`.  A :class:`Property` lists
those kinds as an ordered tuple of :class:`Alternative` entries, and a
:class:`PropertyCell` holds exactly one of them (or an opaque unknown
value) for one position of one property on one entity.

The alternative order is significant: when a raw JSON value could
satisfy more than one alternative, the first one in declared order
wins.
"""

from __future__ import annotations

import copy
import logging
import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Optional, Union

from activity_vocab import registry
from activity_vocab.values import AS, IRI, ValueType

if TYPE_CHECKING:
    from activity_vocab.entity import Entity

logger = logging.getLogger(__name__)

REFERENCE = "reference"
VALUE = "value"
IRI_REFERENCE = "iri"


# ── Unknown-value normalizers ──────────────────────────────────────


def unknown_value_deserialize(raw: Any) -> Any:
    """Return a detached copy of a JSON-decoded value for unknown storage."""
    return copy.deepcopy(raw)


def unknown_value_serialize(value: Any) -> Any:
    """Return a detached copy of an unknown value for emission."""
    return copy.deepcopy(value)


def _snake(name: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", name).lower()


# ═══════════════════════════════════════════════════════════════════
# ALTERNATIVES AND PROPERTIES
# ═══════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class Alternative:
    """One kind of value a property accepts.

    Attributes:
        name: Accessor suffix, e.g. ``"object"``, ``"lang_string"``,
            ``"iri"``.
        kind: ``"reference"`` for embedded vocabulary entities,
            ``"value"`` for scalars, ``"iri"`` for bare references.
        value_type: Codec for ``value`` and ``iri`` alternatives.
        target: Vocabulary type name for ``reference`` alternatives.
    """

    name: str
    kind: str
    value_type: Optional[ValueType] = None
    target: Optional[str] = None

    @property
    def is_reference(self) -> bool:
        return self.kind == REFERENCE


@dataclass(frozen=True)
class PropertyCell:
    """Exactly one populated alternative, or an unknown value.

    ``alternative`` is ``None`` when the cell holds an opaque value that
    matched no declared alternative.
    """

    alternative: Optional[Alternative]
    value: Any = None

    @property
    def is_unknown(self) -> bool:
        return self.alternative is None

    def holds(self, alternative: Alternative) -> bool:
        return self.alternative == alternative


RangeEntry = Union[str, ValueType]


@dataclass(frozen=True)
class Property:
    """A named vocabulary property and its ordered alternatives."""

    name: str
    alternatives: tuple[Alternative, ...]
    functional: bool = False
    natural_language_map: bool = False
    iri: str = ""
    notes: str = field(default="", compare=False)

    @property
    def map_key(self) -> str:
        """Wire key of the natural-language map sibling."""
        return self.name + "Map"

    @property
    def reference_alternatives(self) -> tuple[Alternative, ...]:
        return tuple(a for a in self.alternatives if a.kind == REFERENCE)

    @property
    def scalar_alternatives(self) -> tuple[Alternative, ...]:
        return tuple(a for a in self.alternatives if a.kind != REFERENCE)

    def suffix(self, alternative: Alternative) -> str:
        """Accessor suffix for *alternative* (empty for the sole non-IRI kind)."""
        modeled = [a for a in self.alternatives if a.kind != IRI_REFERENCE]
        if len(modeled) == 1 and alternative is modeled[0]:
            return ""
        return "_" + alternative.name

    # ── Cell conversion ────────────────────────────────────────────

    def deserialize_cell(self, raw: Any, *, depth: int, max_depth: int) -> PropertyCell:
        """Convert one JSON-decoded value into a cell.

        Maps carrying a ``type`` discriminator are matched against the
        reference alternatives, as are maps without one when the target
        type is ``untyped``; scalars against the value and IRI
        alternatives.  Anything that matches nothing is kept as an
        unknown value, so this never fails on well-formed JSON.  Errors
        from a nested entity (such as an exceeded depth limit) propagate.
        """
        if isinstance(raw, dict):
            if "type" in raw:
                names = type_names(raw["type"])
                for alt in self.reference_alternatives:
                    for name in names:
                        instance = _resolve(alt, name)
                        if instance is not None:
                            instance._load(raw, depth + 1, max_depth)
                            return PropertyCell(alt, instance)
            else:
                for alt in self.reference_alternatives:
                    instance = _resolve_untyped(alt)
                    if instance is not None:
                        instance._load(raw, depth + 1, max_depth)
                        return PropertyCell(alt, instance)
        elif raw is not None and not isinstance(raw, list):
            for alt in self.scalar_alternatives:
                try:
                    value = alt.value_type.deserialize(raw)
                except (TypeError, ValueError):
                    continue
                return PropertyCell(alt, value)
        logger.debug("Keeping unmatched value for %r as unknown", self.name)
        return PropertyCell(None, unknown_value_deserialize(raw))

    def serialize_cell(self, cell: PropertyCell, *, depth: int, max_depth: int) -> Any:
        """Convert a cell back into its JSON value."""
        alt = cell.alternative
        if alt is None:
            return unknown_value_serialize(cell.value)
        if alt.kind == REFERENCE:
            return cell.value._dump(depth + 1, max_depth)
        return alt.value_type.serialize(cell.value)

    def make_cell(self, alternative: Alternative, value: Any) -> PropertyCell:
        """Build a cell from a caller-supplied value, validating it."""
        if alternative.kind == REFERENCE:
            if not conforms(value, alternative.target):
                raise TypeError(
                    f"{self.name}: expected a {alternative.target} entity, "
                    f"got: {type(value).__name__}"
                )
            return PropertyCell(alternative, value)
        return PropertyCell(alternative, alternative.value_type.normalize(value))


def define_property(
    name: str,
    *range_: RangeEntry,
    functional: bool = False,
    natural_language_map: bool = False,
    notes: str = "",
) -> Property:
    """Build a :class:`Property` from its declared range.

    Each range entry is either a vocabulary type name (an embedded
    reference) or a :class:`ValueType`.  A bare-IRI alternative is
    appended unless the range already accepts ``xsd:anyURI``.
    """
    alternatives = []
    for entry in range_:
        if isinstance(entry, ValueType):
            alternatives.append(Alternative(entry.name, VALUE, value_type=entry))
        else:
            alternatives.append(Alternative(_snake(entry), REFERENCE, target=entry))
    if not any(a.name == "any_uri" for a in alternatives):
        alternatives.append(Alternative("iri", IRI_REFERENCE, value_type=IRI))
    return Property(
        name=name,
        alternatives=tuple(alternatives),
        functional=functional,
        natural_language_map=natural_language_map,
        iri=AS + name,
        notes=notes,
    )


# ═══════════════════════════════════════════════════════════════════
# REFERENCE RESOLUTION
# ═══════════════════════════════════════════════════════════════════


def type_names(raw: Any) -> list[str]:
    if isinstance(raw, str):
        return [raw]
    if isinstance(raw, list):
        return [t for t in raw if isinstance(t, str)]
    return []


def conforms(instance: Any, target: str) -> bool:
    """Whether *instance* carries every property of vocabulary type *target*.

    A type that drops any of the target's properties (as
    ``OrderedCollection`` drops ``items``) does not conform.
    """
    target_cls = registry.lookup(target)
    if target_cls is None or not hasattr(instance, "properties"):
        return False
    if getattr(instance, "family", None) != target_cls.family:
        return False
    required = target_cls.properties
    available = instance.properties
    return all(available.get(name) == prop for name, prop in required.items())


def _resolve(alternative: Alternative, name: str) -> Optional[Entity]:
    target_cls = registry.lookup(alternative.target)
    if target_cls is None:
        return None
    if target_cls.family == "link":
        instance = registry.resolve_link(name)
    else:
        instance = registry.resolve_object(name)
    if instance is None or not conforms(instance, alternative.target):
        return None
    return instance


def _resolve_untyped(alternative: Alternative) -> Optional[Entity]:
    target_cls = registry.lookup(alternative.target)
    if target_cls is None or not target_cls.untyped:
        return None
    return target_cls()
