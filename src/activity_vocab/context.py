"""
JSON-LD context for the ActivityStreams vocabulary.

Builds the ``@context`` document from the registered type and property
tables so that JSON-LD processors (see :mod:`activity_vocab.processor`)
can expand and compact documents without fetching the context over the
network.
"""

from __future__ import annotations

import copy
from typing import Any, Optional

from pyld import jsonld

from activity_vocab.properties import IRI_REFERENCE, REFERENCE, Property
from activity_vocab.values import (
    ANY_URI, BOOLEAN, DATE_TIME, DURATION, FLOAT, NON_NEGATIVE_INTEGER,
)
from activity_vocab.vocabulary import ALL_TYPES, AS_CONTEXT_URL, AS_NAMESPACE

# Datatype coercions; value types not listed are plain literals.
_DATATYPES = {
    DATE_TIME.name: "xsd:dateTime",
    BOOLEAN.name: "xsd:boolean",
    FLOAT.name: "xsd:float",
    DURATION.name: "xsd:duration",
    NON_NEGATIVE_INTEGER.name: "xsd:nonNegativeInteger",
    ANY_URI.name: "@id",
}

# Terms whose IRI differs from as:<name>
_TERM_IRIS = {
    "inbox": "ldp:inbox",
    "orderedItems": "as:items",
    "PublicKey": "sec:Key",
    "publicKey": "sec:publicKey",
    "owner": "sec:owner",
    "publicKeyPem": "sec:publicKeyPem",
}


def _term_definition(prop: Property) -> Any:
    iri = _TERM_IRIS.get(prop.name, "as:" + prop.name)
    kinds = {a.kind for a in prop.alternatives}
    if kinds <= {REFERENCE, IRI_REFERENCE}:
        definition = {"@id": iri, "@type": "@id"}
    else:
        first = next(a for a in prop.alternatives if a.kind not in (REFERENCE, IRI_REFERENCE))
        datatype = _DATATYPES.get(first.name)
        if datatype is None:
            return iri
        definition = {"@id": iri, "@type": datatype}
    if prop.name == "orderedItems":
        definition["@container"] = "@list"
    return definition


def build_context() -> dict[str, Any]:
    """Return the ActivityStreams context document as a dict.

    Covers every built-in type and property, the ``<name>Map`` language
    containers, and the ``id``/``type`` keyword aliases.
    """
    ctx: dict[str, Any] = {
        "@vocab": "_:",
        "xsd": "http://www.w3.org/2001/XMLSchema#",
        "as": AS_NAMESPACE,
        "ldp": "http://www.w3.org/ns/ldp#",
        "sec": "https://w3id.org/security#",
        "id": "@id",
        "type": "@type",
    }
    for cls in ALL_TYPES:
        ctx[cls.type_name] = _TERM_IRIS.get(cls.type_name, "as:" + cls.type_name)
    for cls in ALL_TYPES:
        for name, prop in cls.properties.items():
            if name in ctx:
                continue
            ctx[name] = _term_definition(prop)
            if prop.natural_language_map:
                ctx[prop.map_key] = {"@id": "as:" + name, "@container": "@language"}
    return {"@context": ctx}


AS_CONTEXT_DOCUMENT: dict[str, Any] = build_context()

_LOCAL_CONTEXTS = {
    AS_CONTEXT_URL: AS_CONTEXT_DOCUMENT,
}


def _normalize_url(url: str) -> str:
    url = url.split("#", 1)[0].rstrip("/")
    if url.startswith("http://"):
        url = "https://" + url[len("http://"):]
    if url.endswith(".jsonld"):
        url = url[: -len(".jsonld")]
    return url


def document_loader(url: str, options: Optional[dict[str, Any]] = None) -> dict[str, Any]:
    """pyld document loader serving bundled contexts only.

    Raises:
        jsonld.JsonLdError: For any URL without a bundled document.
    """
    document = _LOCAL_CONTEXTS.get(_normalize_url(url))
    if document is None:
        raise jsonld.JsonLdError(
            f"No bundled document for {url}",
            "jsonld.LoadDocumentError",
            {"url": url},
            code="loading document failed",
        )
    return {
        "contentType": "application/ld+json",
        "contextUrl": None,
        "documentUrl": url,
        "document": copy.deepcopy(document),
    }
