"""
ActivityStreams 2.0 and ActivityPub property definitions.

Every property is declared once here with its ordered range; the type
classes in :mod:`._types` pick the ones they carry.  Range order is the
disambiguation order used when a raw value fits several alternatives.
"""

from __future__ import annotations

from activity_vocab.properties import define_property
from activity_vocab.values import (
    ANY_URI,
    BCP47,
    BOOLEAN,
    DATE_TIME,
    DURATION as XSD_DURATION,
    FLOAT,
    LANG_STRING,
    LINK_RELATION,
    MIME_MEDIA_TYPE,
    NON_NEGATIVE_INTEGER,
    STRING,
    UNITS_VALUE,
)

# ── Identity ───────────────────────────────────────────────────────

ID = define_property(
    "id", ANY_URI, functional=True,
    notes="Provides the globally unique identifier for an Object or Link.",
)

# ── Object and Link references ─────────────────────────────────────

ACTOR = define_property(
    "actor", "Object", "Link",
    notes="Describes one or more entities that performed or are expected to perform the activity.",
)
ATTACHMENT = define_property(
    "attachment", "Object", "Link",
    notes="Identifies a resource attached or related to an object.",
)
ATTRIBUTED_TO = define_property(
    "attributedTo", "Object", "Link",
    notes="Identifies one or more entities to which this object is attributed.",
)
AUDIENCE = define_property(
    "audience", "Object", "Link",
    notes="Identifies the total population of entities for which the object is relevant.",
)
BCC = define_property(
    "bcc", "Object", "Link",
    notes="Identifies the private secondary audience of this Object.",
)
BTO = define_property(
    "bto", "Object", "Link",
    notes="Identifies the private primary audience of this Object.",
)
CC = define_property(
    "cc", "Object", "Link",
    notes="Identifies the public secondary audience of this Object.",
)
CONTEXT = define_property(
    "context", "Object", "Link",
    notes="Identifies the context within which the object exists or an activity was performed.",
)
GENERATOR = define_property("generator", "Object", "Link")
ICON = define_property(
    "icon", "Image", "Link",
    notes="An icon for this object, square and suitable for small sizes.",
)
IMAGE = define_property("image", "Image", "Link")
IN_REPLY_TO = define_property("inReplyTo", "Object", "Link")
INSTRUMENT = define_property("instrument", "Object", "Link")
LOCATION = define_property("location", "Object", "Link")
ITEMS = define_property("items", "Object", "Link")
ORDERED_ITEMS = define_property("orderedItems", "Object", "Link")
ONE_OF = define_property(
    "oneOf", "Object", "Link",
    notes="An exclusive option for a Question.",
)
ANY_OF = define_property(
    "anyOf", "Object", "Link",
    notes="An inclusive option for a Question.",
)
CLOSED = define_property(
    "closed", DATE_TIME, BOOLEAN, "Object", "Link",
    notes="Indicates that a question has been closed.",
)
ORIGIN = define_property("origin", "Object", "Link")
OBJECT = define_property(
    "object", "Object",
    notes="The direct object of an Activity, or the related individual of a Relationship.",
)
PREVIEW = define_property("preview", "Object", "Link")
RESULT = define_property("result", "Object", "Link")
TAG = define_property("tag", "Object", "Link")
TARGET = define_property("target", "Object", "Link")
TO = define_property(
    "to", "Object", "Link",
    notes="Identifies the public primary audience of this Object.",
)
URL = define_property(
    "url", ANY_URI, "Link",
    notes="Identifies one or more links to representations of the object.",
)
SUBJECT = define_property("subject", "Object", "Link", functional=True)
RELATIONSHIP = define_property("relationship", "Object", functional=True)
DESCRIBES = define_property("describes", "Object", functional=True)
FORMER_TYPE = define_property(
    "formerType", STRING, "Object",
    notes="On a Tombstone, the type of the object that was deleted.",
)

# ── Collection paging ──────────────────────────────────────────────
#
# Collection and OrderedCollection share wire names for paging links but
# differ in the page type they embed, so each gets its own definition.

REPLIES = define_property("replies", "Collection", functional=True)
CURRENT = define_property("current", "CollectionPage", "Link", functional=True)
CURRENT_ORDERED = define_property(
    "current", "OrderedCollectionPage", "Link", functional=True
)
FIRST = define_property("first", "CollectionPage", "Link", functional=True)
FIRST_ORDERED = define_property(
    "first", "OrderedCollectionPage", "Link", functional=True
)
LAST = define_property("last", "CollectionPage", "Link", functional=True)
LAST_ORDERED = define_property(
    "last", "OrderedCollectionPage", "Link", functional=True
)
NEXT = define_property("next", "CollectionPage", "Link", functional=True)
NEXT_ORDERED = define_property(
    "next", "OrderedCollectionPage", "Link", functional=True
)
PREV = define_property("prev", "CollectionPage", "Link", functional=True)
PREV_ORDERED = define_property(
    "prev", "OrderedCollectionPage", "Link", functional=True
)
PART_OF = define_property("partOf", "Link", "Collection", functional=True)
TOTAL_ITEMS = define_property("totalItems", NON_NEGATIVE_INTEGER, functional=True)
START_INDEX = define_property("startIndex", NON_NEGATIVE_INTEGER, functional=True)

# ── Natural language ───────────────────────────────────────────────

CONTENT = define_property(
    "content", STRING, LANG_STRING, natural_language_map=True,
    notes="The content or textual representation of the Object, HTML by default.",
)
NAME = define_property(
    "name", STRING, LANG_STRING, natural_language_map=True,
    notes="A simple, human-readable, plain-text name for the object.",
)
SUMMARY = define_property(
    "summary", STRING, LANG_STRING, natural_language_map=True,
    notes="A natural language summarization of the object encoded as HTML.",
)

# ── Scalars ────────────────────────────────────────────────────────

ACCURACY = define_property("accuracy", FLOAT, functional=True)
ALTITUDE = define_property("altitude", FLOAT, functional=True)
LATITUDE = define_property("latitude", FLOAT, functional=True)
LONGITUDE = define_property("longitude", FLOAT, functional=True)
RADIUS = define_property("radius", FLOAT, functional=True)
UNITS = define_property(
    "units", UNITS_VALUE, ANY_URI, functional=True,
    notes="Measurement units for radius and altitude; meters when absent.",
)
DURATION = define_property("duration", XSD_DURATION, functional=True)
HEIGHT = define_property("height", NON_NEGATIVE_INTEGER, functional=True)
WIDTH = define_property("width", NON_NEGATIVE_INTEGER, functional=True)
HREF = define_property("href", ANY_URI, functional=True)
HREFLANG = define_property("hreflang", BCP47, functional=True)
MEDIA_TYPE = define_property("mediaType", MIME_MEDIA_TYPE, functional=True)
REL = define_property("rel", LINK_RELATION)
END_TIME = define_property("endTime", DATE_TIME, functional=True)
PUBLISHED = define_property("published", DATE_TIME, functional=True)
START_TIME = define_property("startTime", DATE_TIME, functional=True)
UPDATED = define_property("updated", DATE_TIME, functional=True)
DELETED = define_property("deleted", DATE_TIME, functional=True)

# ── ActivityPub actor properties ───────────────────────────────────

SOURCE = define_property(
    "source", "Object", functional=True,
    notes="Markup the content was derived from, kept for provenance or editing.",
)
INBOX = define_property("inbox", "OrderedCollection", ANY_URI, functional=True)
OUTBOX = define_property("outbox", "OrderedCollection", ANY_URI, functional=True)
FOLLOWING = define_property(
    "following", "Collection", "OrderedCollection", ANY_URI, functional=True
)
FOLLOWERS = define_property(
    "followers", "Collection", "OrderedCollection", ANY_URI, functional=True
)
LIKED = define_property("liked", "Collection", "OrderedCollection", ANY_URI, functional=True)
LIKES = define_property("likes", "Collection", "OrderedCollection", ANY_URI, functional=True)
SHARES = define_property(
    "shares", "Collection", "OrderedCollection", ANY_URI, functional=True,
    notes="Announce activities that share this object.",
)
STREAMS = define_property("streams", ANY_URI)
PREFERRED_USERNAME = define_property(
    "preferredUsername", STRING, functional=True, natural_language_map=True,
    notes="A short username for the actor, with no uniqueness guarantees.",
)
ENDPOINTS = define_property("endpoints", "Object", functional=True)
PROXY_URL = define_property("proxyUrl", ANY_URI, functional=True)
OAUTH_AUTHORIZATION_ENDPOINT = define_property(
    "oauthAuthorizationEndpoint", ANY_URI, functional=True
)
OAUTH_TOKEN_ENDPOINT = define_property("oauthTokenEndpoint", ANY_URI, functional=True)
PROVIDE_CLIENT_KEY = define_property("provideClientKey", ANY_URI, functional=True)
SIGN_CLIENT_KEY = define_property("signClientKey", ANY_URI, functional=True)
SHARED_INBOX = define_property("sharedInbox", ANY_URI, functional=True)

# ── Security vocabulary (actor keys) ───────────────────────────────

PUBLIC_KEY = define_property(
    "publicKey", "PublicKey", functional=True,
    notes="The actor's public key, used to verify HTTP signatures.",
)
OWNER = define_property("owner", functional=True)
PUBLIC_KEY_PEM = define_property("publicKeyPem", STRING, functional=True)
