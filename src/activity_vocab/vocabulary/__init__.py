"""
The ActivityStreams 2.0 vocabulary with ActivityPub extensions.

Importing this package registers every built-in type with
:mod:`activity_vocab.registry`.
"""

from activity_vocab import registry
from activity_vocab.vocabulary._constants import (
    ACTIVITY_TYPES,
    ACTOR_TYPES,
    AS_CONTEXT_URL,
    AS_NAMESPACE,
    PUBLIC,
)
from activity_vocab.vocabulary._predicates import has_type, is_activity_type
from activity_vocab.vocabulary._types import (
    ALL_TYPES,
    Accept,
    Activity,
    Add,
    Announce,
    Application,
    Arrive,
    Article,
    Audio,
    Block,
    Collection,
    CollectionPage,
    Create,
    Delete,
    Dislike,
    Document,
    Event,
    Flag,
    Follow,
    Group,
    Ignore,
    Image,
    IntransitiveActivity,
    Invite,
    Join,
    Leave,
    Like,
    Link,
    Listen,
    Mention,
    Move,
    Note,
    Object,
    Offer,
    OrderedCollection,
    OrderedCollectionPage,
    Organization,
    Page,
    Person,
    Place,
    Profile,
    PublicKey,
    Question,
    Read,
    Reject,
    Relationship,
    Remove,
    Service,
    TentativeAccept,
    TentativeReject,
    Tombstone,
    Travel,
    Undo,
    Update,
    Video,
    View,
)

for _cls in ALL_TYPES:
    registry.register_type(_cls, force=True, builtin=True)
del _cls

__all__ = [
    "ACTIVITY_TYPES", "ACTOR_TYPES", "ALL_TYPES", "AS_CONTEXT_URL",
    "AS_NAMESPACE", "PUBLIC", "has_type", "is_activity_type",
    *(cls.__name__ for cls in ALL_TYPES),
]
