"""
Namespace constants for the ActivityStreams 2.0 vocabulary.
"""

from __future__ import annotations

from activity_vocab.values import AS

AS_NAMESPACE = AS
"""Base IRI of every ActivityStreams type and property."""

AS_CONTEXT_URL = "https://www.w3.org/ns/activitystreams"
"""The ``@context`` value identifying ActivityStreams documents."""

PUBLIC = AS + "Public"
"""Special collection addressing every actor (ActivityPub §5.6)."""

# ── Type families ──────────────────────────────────────────────────

ACTIVITY_TYPES: tuple[str, ...] = (
    "Accept", "Activity", "Add", "Announce", "Arrive", "Block", "Create",
    "Delete", "Dislike", "Flag", "Follow", "Ignore", "IntransitiveActivity",
    "Invite", "Join", "Leave", "Like", "Listen", "Move", "Offer", "Question",
    "Read", "Reject", "Remove", "TentativeAccept", "TentativeReject",
    "Travel", "Undo", "Update", "View",
)

ACTOR_TYPES: tuple[str, ...] = (
    "Application", "Group", "Organization", "Person", "Service",
)
