"""
Type registry: vocabulary type name → entity class.

Reference alternatives resolve the ``type`` names found in a JSON value
through this registry.  The built-in ActivityStreams classes are
registered when :mod:`activity_vocab.vocabulary` is imported; extension
vocabularies can add their own :class:`~activity_vocab.entity.Entity`
subclasses with :func:`register_type`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from activity_vocab.entity import Entity

_registry: dict[str, type[Entity]] = {}
_builtins: dict[str, type[Entity]] = {}


def register_type(cls: type[Entity], *, force: bool = False, builtin: bool = False) -> None:
    """Register an entity class under its ``type_name``.

    Args:
        cls: Entity subclass with a non-empty ``type_name``.
        force: Replace an existing registration of the same name.
        builtin: Mark the registration as part of the base vocabulary
            (restored by :func:`reset_type_registry`, never removable).

    Raises:
        TypeError: If *cls* has no ``type_name``.
        ValueError: If the name is taken and *force* is False.
    """
    name = getattr(cls, "type_name", "")
    if not isinstance(name, str) or not name:
        raise TypeError(f"{cls!r} does not declare a type_name")
    if not force and name in _registry:
        raise ValueError(
            f"Type '{name}' is already registered. "
            "Pass force=True to override."
        )
    _registry[name] = cls
    if builtin:
        _builtins[name] = cls


def unregister_type(name: str) -> None:
    """Remove a **custom** type from the registry.

    Raises:
        ValueError: If *name* is a built-in vocabulary type.
        KeyError: If *name* is not registered.
    """
    if name in _builtins:
        raise ValueError(f"Cannot unregister built-in type '{name}'")
    if name not in _registry:
        raise KeyError(f"Type '{name}' is not registered")
    del _registry[name]


def get_type_class(name: str) -> type[Entity]:
    """Return the class registered under *name*.

    Raises:
        KeyError: If *name* is not registered.
    """
    try:
        return _registry[name]
    except KeyError:
        raise KeyError(
            f"No type registered as '{name}'. "
            f"Available: {sorted(_registry)}"
        ) from None


def lookup(name: str) -> Optional[type[Entity]]:
    return _registry.get(name)


def list_types() -> list[str]:
    """Return a sorted snapshot of registered type names."""
    return sorted(_registry)


def resolve_object(name: str) -> Optional[Entity]:
    """Return a fresh empty object-like instance for *name*, or None."""
    cls = _registry.get(name)
    if cls is None or cls.family != "object":
        return None
    return cls()


def resolve_link(name: str) -> Optional[Entity]:
    """Return a fresh empty link-like instance for *name*, or None."""
    cls = _registry.get(name)
    if cls is None or cls.family != "link":
        return None
    return cls()


def reset_type_registry() -> None:
    """Restore the registry to the built-in vocabulary only.

    Primarily useful in tests to guarantee isolation.
    """
    _registry.clear()
    _registry.update(_builtins)
