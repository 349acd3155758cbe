"""
activity-vocab: ActivityStreams 2.0 / ActivityPub data model for Python

Typed entities for every vocabulary term, with polymorphic property
values that round-trip losslessly through JSON, including extension
keys and values the vocabulary does not model.
"""

__version__ = "0.1.0"

from activity_vocab.values import ValueType, VALUE_TYPES, parse_absolute_iri, parse_iri
from activity_vocab.properties import (
    Alternative,
    Property,
    PropertyCell,
    define_property,
    unknown_value_deserialize,
    unknown_value_serialize,
)
from activity_vocab.entity import Entity
from activity_vocab.registry import (
    register_type,
    unregister_type,
    get_type_class,
    list_types,
    resolve_object,
    resolve_link,
    reset_type_registry,
)
from activity_vocab.vocabulary import *  # noqa: F401,F403
from activity_vocab.vocabulary import __all__ as _vocabulary_all
from activity_vocab.streams import (
    JSONResolver,
    NoCallbackMatchError,
    UnhandledTypeError,
    from_dict,
    from_json,
    to_dict,
    to_json,
)
from activity_vocab.security import enforce_resource_limits, DEFAULT_RESOURCE_LIMITS
from activity_vocab.context import AS_CONTEXT_DOCUMENT, build_context, document_loader
from activity_vocab.processor import ActivityProcessor

__all__ = [
    # Values
    "ValueType",
    "VALUE_TYPES",
    "parse_absolute_iri",
    "parse_iri",
    # Properties
    "Alternative",
    "Property",
    "PropertyCell",
    "define_property",
    "unknown_value_deserialize",
    "unknown_value_serialize",
    # Entities
    "Entity",
    # Registry
    "register_type",
    "unregister_type",
    "get_type_class",
    "list_types",
    "resolve_object",
    "resolve_link",
    "reset_type_registry",
    # Documents
    "JSONResolver",
    "NoCallbackMatchError",
    "UnhandledTypeError",
    "from_dict",
    "from_json",
    "to_dict",
    "to_json",
    # Security
    "enforce_resource_limits",
    "DEFAULT_RESOURCE_LIMITS",
    # JSON-LD
    "AS_CONTEXT_DOCUMENT",
    "build_context",
    "document_loader",
    "ActivityProcessor",
    # Vocabulary
    *_vocabulary_all,
]
