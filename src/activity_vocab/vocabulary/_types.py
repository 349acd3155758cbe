"""
ActivityStreams 2.0 vocabulary types.

One :class:`~activity_vocab.entity.Entity` subclass per vocabulary term.
Class bodies only declare the type name and the property delta against
their parents; accessors are generated by the base class.
"""

from __future__ import annotations

from activity_vocab.entity import Entity
from activity_vocab.vocabulary import _properties as P
from activity_vocab.vocabulary._constants import PUBLIC


# ═══════════════════════════════════════════════════════════════════
# CORE TYPES
# ═══════════════════════════════════════════════════════════════════


class Object(Entity):
    """Describes an object of any kind.

    The base type for most of the other kinds of objects defined in the
    Activity Vocabulary, including Activity, IntransitiveActivity,
    Collection and OrderedCollection.
    """

    type_name = "Object"
    declares = (
        P.ALTITUDE, P.ATTACHMENT, P.ATTRIBUTED_TO, P.AUDIENCE, P.CONTENT,
        P.CONTEXT, P.NAME, P.END_TIME, P.GENERATOR, P.ICON, P.ID, P.IMAGE,
        P.IN_REPLY_TO, P.LOCATION, P.PREVIEW, P.PUBLISHED, P.REPLIES,
        P.START_TIME, P.SUMMARY, P.TAG, P.UPDATED, P.URL, P.TO, P.BTO,
        P.CC, P.BCC, P.MEDIA_TYPE, P.DURATION,
        # ActivityPub
        P.SOURCE, P.INBOX, P.OUTBOX, P.FOLLOWING, P.FOLLOWERS, P.LIKED,
        P.LIKES, P.SHARES, P.STREAMS, P.PREFERRED_USERNAME, P.ENDPOINTS,
        P.PROXY_URL, P.OAUTH_AUTHORIZATION_ENDPOINT, P.OAUTH_TOKEN_ENDPOINT,
        P.PROVIDE_CLIENT_KEY, P.SIGN_CLIENT_KEY, P.SHARED_INBOX,
    )

    def is_public(self) -> bool:
        """Whether to, bto, cc or bcc address the special Public collection."""
        for key in ("to", "bto", "cc", "bcc"):
            for cell in self._cells[key]:
                if cell.alternative is not None and cell.alternative.kind == "iri":
                    if cell.value == PUBLIC:
                        return True
        return False


class Link(Entity):
    """An indirect, qualified reference to a resource identified by a URL.

    Properties of the Link describe the reference, not the linked
    resource.
    """

    type_name = "Link"
    family = "link"
    declares = (
        P.ATTRIBUTED_TO, P.HREF, P.ID, P.REL, P.MEDIA_TYPE, P.NAME,
        P.SUMMARY, P.HREFLANG, P.HEIGHT, P.WIDTH, P.PREVIEW,
    )


class Activity(Object):
    """An action that may happen, is happening, or has already happened."""

    type_name = "Activity"
    declares = (P.ACTOR, P.OBJECT, P.TARGET, P.RESULT, P.ORIGIN, P.INSTRUMENT)


class IntransitiveActivity(Activity):
    """An Activity without a direct object."""

    type_name = "IntransitiveActivity"
    without = (P.OBJECT,)


class Collection(Object):
    """An ordered or unordered set of Object or Link instances."""

    type_name = "Collection"
    declares = (P.TOTAL_ITEMS, P.CURRENT, P.FIRST, P.LAST, P.ITEMS)


class OrderedCollection(Collection):
    """A Collection whose members are strictly ordered."""

    type_name = "OrderedCollection"
    without = (P.ITEMS, P.CURRENT, P.FIRST, P.LAST)
    declares = (P.ORDERED_ITEMS, P.CURRENT_ORDERED, P.FIRST_ORDERED, P.LAST_ORDERED)


class CollectionPage(Collection):
    """A distinct subset of the items of a Collection."""

    type_name = "CollectionPage"
    declares = (P.PART_OF, P.NEXT, P.PREV)


class OrderedCollectionPage(OrderedCollection, CollectionPage):
    """An ordered subset of the items of an OrderedCollection."""

    type_name = "OrderedCollectionPage"
    without = (P.ITEMS, P.CURRENT, P.FIRST, P.LAST, P.NEXT, P.PREV)
    declares = (P.START_INDEX, P.NEXT_ORDERED, P.PREV_ORDERED)


# ═══════════════════════════════════════════════════════════════════
# ACTIVITIES
# ═══════════════════════════════════════════════════════════════════


class Accept(Activity):
    """The actor accepts the object."""

    type_name = "Accept"


class TentativeAccept(Accept):
    """A tentative Accept."""

    type_name = "TentativeAccept"


class Add(Activity):
    """The actor has added the object to the target."""

    type_name = "Add"


class Arrive(IntransitiveActivity):
    """The actor has arrived at the location."""

    type_name = "Arrive"


class Create(Activity):
    type_name = "Create"


class Delete(Activity):
    type_name = "Delete"


class Follow(Activity):
    """The actor is following the object, in the social-systems sense."""

    type_name = "Follow"


class Ignore(Activity):
    type_name = "Ignore"


class Join(Activity):
    type_name = "Join"


class Leave(Activity):
    type_name = "Leave"


class Like(Activity):
    """The actor likes, recommends or endorses the object."""

    type_name = "Like"


class Offer(Activity):
    """The actor is offering the object, optionally to the target."""

    type_name = "Offer"


class Invite(Offer):
    """An Offer extending an invitation for the object to the target."""

    type_name = "Invite"


class Reject(Activity):
    type_name = "Reject"


class TentativeReject(Reject):
    type_name = "TentativeReject"


class Remove(Activity):
    type_name = "Remove"


class Undo(Activity):
    """The actor is undoing the object, usually a previous Activity."""

    type_name = "Undo"


class Update(Activity):
    type_name = "Update"


class View(Activity):
    type_name = "View"


class Listen(Activity):
    type_name = "Listen"


class Read(Activity):
    type_name = "Read"


class Move(Activity):
    """The actor has moved object from origin to target."""

    type_name = "Move"


class Travel(IntransitiveActivity):
    """The actor is traveling to target from origin."""

    type_name = "Travel"


class Announce(Activity):
    """The actor is calling the target's attention to the object."""

    type_name = "Announce"


class Block(Ignore):
    """A stronger form of Ignore."""

    type_name = "Block"


class Flag(Activity):
    """The actor is reporting the object as inappropriate."""

    type_name = "Flag"


class Dislike(Activity):
    type_name = "Dislike"


class Question(IntransitiveActivity):
    """A question being asked.

    Either ``oneOf`` or ``anyOf`` lists the options, never both.
    """

    type_name = "Question"
    declares = (P.ONE_OF, P.ANY_OF, P.CLOSED)


# ═══════════════════════════════════════════════════════════════════
# ACTORS
# ═══════════════════════════════════════════════════════════════════


class Application(Object):
    """Describes a software application."""

    type_name = "Application"
    declares = (P.PUBLIC_KEY,)


class Group(Object):
    """A formal or informal collective of Actors."""

    type_name = "Group"
    declares = (P.PUBLIC_KEY,)


class Organization(Object):
    type_name = "Organization"
    declares = (P.PUBLIC_KEY,)


class Person(Object):
    """An individual person."""

    type_name = "Person"
    declares = (P.PUBLIC_KEY,)


class Service(Object):
    type_name = "Service"
    declares = (P.PUBLIC_KEY,)


class PublicKey(Entity):
    """A public key an actor signs its requests with.

    Servers embed keys without a ``type``, so a bare map is accepted
    wherever a PublicKey is expected and none is added on output.
    """

    type_name = "PublicKey"
    untyped = True
    declares = (P.ID, P.OWNER, P.PUBLIC_KEY_PEM)


# ═══════════════════════════════════════════════════════════════════
# OBJECTS AND LINKS
# ═══════════════════════════════════════════════════════════════════


class Relationship(Object):
    """A relationship between two individuals (subject and object)."""

    type_name = "Relationship"
    declares = (P.SUBJECT, P.OBJECT, P.RELATIONSHIP)


class Article(Object):
    """Any kind of multi-paragraph written work."""

    type_name = "Article"


class Document(Object):
    type_name = "Document"


class Audio(Document):
    type_name = "Audio"


class Image(Document):
    """An image document of any kind."""

    type_name = "Image"
    declares = (P.HEIGHT, P.WIDTH)


class Video(Document):
    type_name = "Video"


class Note(Object):
    """A short written work, typically less than a paragraph."""

    type_name = "Note"


class Page(Document):
    """A Web Page."""

    type_name = "Page"


class Event(Object):
    type_name = "Event"


class Place(Object):
    """A logical or physical location."""

    type_name = "Place"
    declares = (P.ACCURACY, P.ALTITUDE, P.LATITUDE, P.LONGITUDE, P.RADIUS, P.UNITS)


class Profile(Object):
    """Describes another Object, typically an actor."""

    type_name = "Profile"
    declares = (P.DESCRIBES,)


class Tombstone(Object):
    """Marks where a deleted object used to be."""

    type_name = "Tombstone"
    declares = (P.FORMER_TYPE, P.DELETED)


class Mention(Link):
    """A Link representing an @mention."""

    type_name = "Mention"


ALL_TYPES: tuple[type[Entity], ...] = (
    Object, Link, Activity, IntransitiveActivity, Collection,
    OrderedCollection, CollectionPage, OrderedCollectionPage,
    Accept, TentativeAccept, Add, Arrive, Create, Delete, Follow, Ignore,
    Join, Leave, Like, Offer, Invite, Reject, TentativeReject, Remove,
    Undo, Update, View, Listen, Read, Move, Travel, Announce, Block, Flag,
    Dislike, Question,
    Application, Group, Organization, Person, Service, PublicKey,
    Relationship, Article, Document, Audio, Image, Video, Note, Page,
    Event, Place, Profile, Tombstone, Mention,
)
