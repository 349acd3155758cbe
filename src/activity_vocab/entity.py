"""
Owning entities: one vocabulary term instance and its property cells.

:class:`Entity` is the base of every vocabulary type.  A subclass lists
the properties it adds in ``declares`` and the inherited ones it drops
in ``without``; at class-creation time the full accessor family for each
property is generated onto the class, so ``Note().append_to_iri(...)``,
``Question().is_closed_date_time(0)`` and friends exist without being
written out by hand.

Accessor naming (``p`` is the snake_case property name, ``alt`` the
alternative; the suffix is dropped for a property's only non-IRI kind)::

    functional      is_p_alt()  get_p_alt()  set_p_alt(v)
                    has_p() instead of is_p() for single-kind properties
    multi-valued    p_len()  is_p_alt(i)  get_p_alt(i)
                    append_p_alt(v)  prepend_p_alt(v)  remove_p_alt(i)
    every property  clear_p()  has_unknown_p()  get_unknown_p()
                    set_unknown_p(v)
    language maps   p_map_languages()  get_p_map(lang)
                    set_p_map(lang, v)  clear_p_map()
"""

from __future__ import annotations

import functools
import logging
from typing import Any, Callable, ClassVar, Optional

from activity_vocab.properties import (
    Alternative,
    Property,
    PropertyCell,
    _snake,
    unknown_value_deserialize,
    unknown_value_serialize,
)
from activity_vocab.security import enforce_resource_limits, resolve_limits

logger = logging.getLogger(__name__)

_RESERVED_KEYS = frozenset({"type", "@context"})


def _max_depth(limits: Optional[dict[str, int]]) -> int:
    return resolve_limits(limits)["max_graph_depth"]


def _check_depth(depth: int, max_depth: int) -> None:
    if depth > max_depth:
        raise ValueError(f"Entity nesting depth {depth} exceeds limit {max_depth}")


def _check_document(cls: type, m: Any, limits: Optional[dict[str, int]]) -> None:
    # Bounds raw nesting before any opaque value is copied
    if not isinstance(m, dict):
        raise TypeError(f"{cls.__name__} expects a dict, got: {type(m).__name__}")
    enforce_resource_limits(m, limits)


def _is_language_map(raw: Any) -> bool:
    return isinstance(raw, dict) and all(
        isinstance(k, str) and isinstance(v, str) for k, v in raw.items()
    )


# ═══════════════════════════════════════════════════════════════════
# ACCESSOR GENERATION
# ═══════════════════════════════════════════════════════════════════


class _Removed:
    """Placeholder shadowing accessors of a property a subclass drops."""

    def __init__(self, prop_name: str):
        self.prop_name = prop_name

    def __get__(self, instance: Any, owner: type) -> Any:
        raise AttributeError(f"{owner.__name__} has no '{self.prop_name}' property")


def _describe(alt: Alternative) -> str:
    if alt.is_reference:
        return f"an embedded {alt.target}"
    if alt.name == "iri":
        return "a bare IRI"
    return f"a {alt.name} value"


def _accessor(prop: Property, name: str, doc: str, fn: Callable) -> Callable:
    fn.__name__ = name
    fn.__qualname__ = name
    fn.__doc__ = doc
    fn._property = prop
    return fn


def _functional_accessors(prop: Property) -> dict[str, Callable]:
    key = prop.name
    p = _snake(key)
    single = len(prop.alternatives) == 1
    methods: dict[str, Callable] = {}

    for alt in prop.alternatives:
        suffix = prop.suffix(alt)
        what = _describe(alt)

        def is_(self, _alt=alt):
            cell = self._cells[key]
            return cell is not None and cell.holds(_alt)

        def get(self, _alt=alt):
            cell = self._cells[key]
            if cell is None or not cell.holds(_alt):
                raise LookupError(f"{key} does not hold {_describe(_alt)}")
            return cell.value

        def set_(self, value, _alt=alt):
            self._cells[key] = prop.make_cell(_alt, value)

        check = f"has_{p}" if single else f"is_{p}{suffix}"
        methods[check] = _accessor(prop, check, f"Whether {key} holds {what}.", is_)
        methods[f"get_{p}{suffix}"] = _accessor(
            prop, f"get_{p}{suffix}",
            f"Return {key} as {what}. Raises LookupError if it holds anything else.",
            get,
        )
        methods[f"set_{p}{suffix}"] = _accessor(
            prop, f"set_{p}{suffix}", f"Replace {key} with {what}.", set_
        )

    def clear(self):
        self._cells[key] = None

    def has_unknown(self):
        cell = self._cells[key]
        return cell is not None and cell.is_unknown

    def get_unknown(self):
        cell = self._cells[key]
        return cell.value if cell is not None and cell.is_unknown else None

    def set_unknown(self, value):
        self._cells[key] = PropertyCell(None, value)

    methods[f"clear_{p}"] = _accessor(prop, f"clear_{p}", f"Remove any {key} value.", clear)
    methods[f"has_unknown_{p}"] = _accessor(
        prop, f"has_unknown_{p}", f"Whether {key} holds an unrecognized value.", has_unknown
    )
    methods[f"get_unknown_{p}"] = _accessor(
        prop, f"get_unknown_{p}", f"Return the unrecognized {key} value, or None.", get_unknown
    )
    methods[f"set_unknown_{p}"] = _accessor(
        prop, f"set_unknown_{p}", f"Replace {key} with an opaque JSON value.", set_unknown
    )
    return methods


def _sequence_accessors(prop: Property) -> dict[str, Callable]:
    key = prop.name
    p = _snake(key)
    methods: dict[str, Callable] = {}

    def length(self):
        return len(self._cells[key])

    methods[f"{p}_len"] = _accessor(
        prop, f"{p}_len", f"Number of {key} values.", length
    )

    for alt in prop.alternatives:
        suffix = prop.suffix(alt)
        what = _describe(alt)

        def is_(self, index, _alt=alt):
            return self._cell_at(key, index).holds(_alt)

        def get(self, index, _alt=alt):
            cell = self._cell_at(key, index)
            if not cell.holds(_alt):
                raise LookupError(f"{key}[{index}] does not hold {_describe(_alt)}")
            return cell.value

        def append(self, value, _alt=alt):
            self._cells[key].append(prop.make_cell(_alt, value))

        def prepend(self, value, _alt=alt):
            self._cells[key].insert(0, prop.make_cell(_alt, value))

        def remove(self, index):
            self._cell_at(key, index)
            del self._cells[key][index]

        methods[f"is_{p}{suffix}"] = _accessor(
            prop, f"is_{p}{suffix}", f"Whether the {key} value at *index* is {what}.", is_
        )
        methods[f"get_{p}{suffix}"] = _accessor(
            prop, f"get_{p}{suffix}",
            f"Return the {key} value at *index* as {what}. "
            "Raises LookupError if it holds anything else.",
            get,
        )
        methods[f"append_{p}{suffix}"] = _accessor(
            prop, f"append_{p}{suffix}", f"Add {what} to the end of {key}.", append
        )
        methods[f"prepend_{p}{suffix}"] = _accessor(
            prop, f"prepend_{p}{suffix}", f"Add {what} to the front of {key}.", prepend
        )
        methods[f"remove_{p}{suffix}"] = _accessor(
            prop, f"remove_{p}{suffix}", f"Delete the {key} value at *index*.", remove
        )

    def clear(self):
        self._cells[key] = []

    def has_unknown(self):
        cells = self._cells[key]
        return bool(cells) and cells[0].is_unknown

    def get_unknown(self):
        cells = self._cells[key]
        return cells[0].value if cells and cells[0].is_unknown else None

    def set_unknown(self, value):
        cells = self._cells[key]
        if cells and cells[0].is_unknown:
            cells[0] = PropertyCell(None, value)
        else:
            cells.insert(0, PropertyCell(None, value))

    methods[f"clear_{p}"] = _accessor(prop, f"clear_{p}", f"Remove every {key} value.", clear)
    methods[f"has_unknown_{p}"] = _accessor(
        prop, f"has_unknown_{p}",
        f"Whether the first {key} value is unrecognized.", has_unknown,
    )
    methods[f"get_unknown_{p}"] = _accessor(
        prop, f"get_unknown_{p}",
        f"Return the first {key} value if unrecognized, or None.", get_unknown,
    )
    methods[f"set_unknown_{p}"] = _accessor(
        prop, f"set_unknown_{p}",
        f"Put an opaque JSON value at the front of {key}, replacing an unrecognized one.",
        set_unknown,
    )
    return methods


def _language_map_accessors(prop: Property) -> dict[str, Callable]:
    key = prop.name
    p = _snake(key)

    def languages(self):
        return set(self._maps[key] or ())

    def get(self, lang):
        return (self._maps[key] or {}).get(lang, "")

    def set_(self, lang, value):
        if not isinstance(lang, str) or not isinstance(value, str):
            raise TypeError(f"{prop.map_key} entries must map str to str")
        if self._maps[key] is None:
            self._maps[key] = {}
        self._maps[key][lang] = value

    def clear(self):
        self._maps[key] = None

    return {
        f"{p}_map_languages": _accessor(
            prop, f"{p}_map_languages", f"Language tags present in {prop.map_key}.", languages
        ),
        f"get_{p}_map": _accessor(
            prop, f"get_{p}_map",
            f"Return the {key} text for *lang*, or an empty string.", get,
        ),
        f"set_{p}_map": _accessor(
            prop, f"set_{p}_map", f"Set the {key} text for *lang*.", set_
        ),
        f"clear_{p}_map": _accessor(
            prop, f"clear_{p}_map", f"Remove {prop.map_key} entirely.", clear
        ),
    }


@functools.lru_cache(maxsize=None)
def accessors_for(prop: Property) -> dict[str, Callable]:
    """Build the accessor family for *prop*, keyed by method name."""
    if prop.functional:
        methods = _functional_accessors(prop)
    else:
        methods = _sequence_accessors(prop)
    if prop.natural_language_map:
        methods.update(_language_map_accessors(prop))
    return methods


def _inherited_attr(cls: type, name: str) -> Any:
    for klass in cls.__mro__[1:]:
        if name in klass.__dict__:
            return klass.__dict__[name]
    return None


# ═══════════════════════════════════════════════════════════════════
# ENTITY
# ═══════════════════════════════════════════════════════════════════


class Entity:
    """Base class for vocabulary types.

    Subclasses set ``type_name`` (the canonical ``type`` value),
    ``family`` (``"object"`` or ``"link"``), and the ``declares`` /
    ``without`` property tuples.  The merged property table is exposed
    as ``properties`` (name → :class:`Property`).  An ``untyped`` class
    is matched by property alternatives even when the map carries no
    ``type``, and never adds its type name on output.
    """

    type_name: ClassVar[str] = ""
    family: ClassVar[str] = "object"
    untyped: ClassVar[bool] = False
    declares: ClassVar[tuple[Property, ...]] = ()
    without: ClassVar[tuple[Property, ...]] = ()
    properties: ClassVar[dict[str, Property]] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        dropped = cls.__dict__.get("without", ())
        inherited: list[Property] = []
        for base in cls.__bases__:
            for prop in getattr(base, "properties", {}).values():
                if prop not in inherited:
                    inherited.append(prop)

        merged: dict[str, Property] = {}
        for prop in inherited:
            if prop not in dropped:
                merged.setdefault(prop.name, prop)
        for prop in cls.__dict__.get("declares", ()):
            merged[prop.name] = prop
        cls.properties = merged

        live: dict[str, Callable] = {}
        for prop in merged.values():
            live.update(accessors_for(prop))
        for name, fn in live.items():
            current = _inherited_attr(cls, name)
            if getattr(current, "_property", None) != fn._property:
                setattr(cls, name, fn)
        for prop in inherited:
            if merged.get(prop.name) == prop:
                continue
            for name in accessors_for(prop):
                if name not in live:
                    setattr(cls, name, _Removed(prop.name))

    def __init__(self) -> None:
        self._types: list[Any] = []
        self._cells: dict[str, Any] = {
            name: None if prop.functional else []
            for name, prop in self.properties.items()
        }
        self._maps: dict[str, Optional[dict[str, str]]] = {
            name: None
            for name, prop in self.properties.items()
            if prop.natural_language_map
        }
        self._unknown: dict[str, Any] = {}

    # ── Type sequence ────────────────────────────────────────────

    def type_len(self) -> int:
        """Number of entries in the ``type`` sequence."""
        return len(self._types)

    def get_type(self, index: int) -> Any:
        return self._types[self._check_index("type", index, len(self._types))]

    def append_type(self, value: Any) -> None:
        self._types.append(value)

    def prepend_type(self, value: Any) -> None:
        self._types.insert(0, value)

    def remove_type(self, index: int) -> None:
        del self._types[self._check_index("type", index, len(self._types))]

    def _effective_types(self) -> list[Any]:
        types = list(self._types)
        if not self.untyped and self.type_name not in types:
            types.append(self.type_name)
        return types

    # ── Unknown bag ──────────────────────────────────────────────

    def add_unknown(self, key: str, value: Any) -> None:
        """Store an extension key to be emitted verbatim on serialization.

        Raises:
            ValueError: If *key* is ``type``, ``@context`` or a declared
                property of this type.
        """
        if key in _RESERVED_KEYS or key in self.properties or any(
            p.natural_language_map and key == p.map_key for p in self.properties.values()
        ):
            raise ValueError(f"'{key}' is not an extension key for {type(self).__name__}")
        self._unknown[key] = value

    def has_unknown(self, key: str) -> bool:
        return key in self._unknown

    def get_unknown(self, key: str) -> Any:
        """Return the extension value stored under *key* (KeyError if absent)."""
        return self._unknown[key]

    def remove_unknown(self, key: str) -> None:
        self._unknown.pop(key, None)

    # ── Serialization ────────────────────────────────────────────

    def serialize(self, *, limits: Optional[dict[str, int]] = None) -> dict[str, Any]:
        """Convert the entity into a JSON-compatible dict.

        The entity itself is not modified; its canonical type name is
        added to the emitted ``type`` when missing.

        Raises:
            ValueError: If nesting exceeds ``limits["max_graph_depth"]``.
        """
        return self._dump(0, _max_depth(limits))

    def deserialize(
        self, m: dict[str, Any], *, limits: Optional[dict[str, int]] = None
    ) -> None:
        """Replace this entity's state with the contents of *m*.

        On error the entity is left unchanged.

        Raises:
            TypeError: If *m* is not a dict.
            ValueError: If *m* exceeds a resource limit, or entity nesting
                exceeds ``limits["max_graph_depth"]``.
        """
        _check_document(type(self), m, limits)
        fresh = type(self)()
        fresh._load(m, 0, _max_depth(limits))
        self.__dict__.update(fresh.__dict__)

    @classmethod
    def from_dict(
        cls, m: dict[str, Any], *, limits: Optional[dict[str, int]] = None
    ) -> "Entity":
        """Build a new instance of this class from a JSON-compatible dict."""
        _check_document(cls, m, limits)
        entity = cls()
        entity._load(m, 0, _max_depth(limits))
        return entity

    def _load(self, m: Any, depth: int, max_depth: int) -> None:
        if not isinstance(m, dict):
            raise TypeError(f"{type(self).__name__} expects a dict, got: {type(m).__name__}")
        _check_depth(depth, max_depth)
        map_keys = {
            p.map_key: p for p in self.properties.values() if p.natural_language_map
        }
        for key, raw in m.items():
            prop = self.properties.get(key)
            if key == "type":
                raw = unknown_value_deserialize(raw)
                self._types = raw if isinstance(raw, list) else [raw]
            elif prop is not None:
                if prop.functional:
                    self._cells[key] = prop.deserialize_cell(
                        raw, depth=depth, max_depth=max_depth
                    )
                else:
                    items = raw if isinstance(raw, list) else [raw]
                    self._cells[key] = [
                        prop.deserialize_cell(item, depth=depth, max_depth=max_depth)
                        for item in items
                    ]
            elif key in map_keys and _is_language_map(raw):
                self._maps[map_keys[key].name] = dict(raw)
            elif key == "@context":
                logger.debug("Dropping @context from %s", type(self).__name__)
            else:
                self._unknown[key] = unknown_value_deserialize(raw)

    def _dump(self, depth: int, max_depth: int) -> dict[str, Any]:
        _check_depth(depth, max_depth)
        m = {k: unknown_value_serialize(v) for k, v in self._unknown.items()}
        types = unknown_value_serialize(self._effective_types())
        if types:
            m["type"] = types[0] if len(types) == 1 else types
        for name, prop in self.properties.items():
            if prop.functional:
                cell = self._cells[name]
                if cell is not None:
                    m[name] = prop.serialize_cell(cell, depth=depth, max_depth=max_depth)
            else:
                values = [
                    prop.serialize_cell(cell, depth=depth, max_depth=max_depth)
                    for cell in self._cells[name]
                ]
                # A lone array value stays wrapped so it reads back as one cell
                if len(values) == 1 and not isinstance(values[0], list):
                    m[name] = values[0]
                elif values:
                    m[name] = values
            if prop.natural_language_map and self._maps[name] is not None:
                m[prop.map_key] = dict(self._maps[name])
        return m

    # ── Helpers ──────────────────────────────────────────────────

    @staticmethod
    def _check_index(key: str, index: int, length: int) -> int:
        if not isinstance(index, int) or isinstance(index, bool):
            raise TypeError(f"{key} index must be an int, got: {type(index).__name__}")
        if not 0 <= index < length:
            raise IndexError(f"{key} index {index} out of range for length {length}")
        return index

    def _cell_at(self, key: str, index: int) -> PropertyCell:
        cells = self._cells[key]
        return cells[self._check_index(key, index, len(cells))]

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return (
            self._effective_types() == other._effective_types()
            and self._cells == other._cells
            and self._maps == other._maps
            and self._unknown == other._unknown
        )

    __hash__ = None

    def __repr__(self) -> str:
        ident = self._cells.get("id")
        if ident is not None and not ident.is_unknown:
            return f"<{type(self).__name__} {ident.value!r}>"
        return f"<{type(self).__name__}>"
