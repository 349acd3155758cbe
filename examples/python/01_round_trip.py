"""
Example 01: Lossless Round-Tripping
===================================

Demonstrates reading an ActivityPub activity, inspecting its polymorphic
properties, and writing it back without losing extension data the
vocabulary does not model.

Use case: a federated server relaying activities it only partly
understands.
"""

import json

from activity_vocab import Create, Note, PUBLIC, from_json, to_json

# ── 1. Read an incoming activity ─────────────────────────────────

print("=== 1. Incoming Activity ===\n")

incoming = json.dumps({
    "@context": "https://www.w3.org/ns/activitystreams",
    "type": "Create",
    "id": "https://social.example/activities/42",
    "actor": "https://social.example/users/alice",
    "to": ["https://www.w3.org/ns/activitystreams#Public"],
    "object": {
        "type": "Note",
        "content": "Hello, fediverse!",
        "contentMap": {"en": "Hello, fediverse!", "fr": "Bonjour, fédivers !"},
        "sensitive": False,
        "published": "2024-05-01T09:30:00Z",
    },
    "http://joinmastodon.org/ns#featured": {"id": "https://social.example/featured"},
})

create = from_json(incoming)
print(f"  Parsed as: {type(create).__name__}")
print(f"  Actor is an IRI: {create.is_actor_iri(0)} -> {create.get_actor_iri(0)}")
print(f"  Public: {create.is_public()}")

note = create.get_object(0)
print(f"  Object: {note!r}")
print(f"  Content: {note.get_content_string(0)}")
print(f"  Languages: {sorted(note.content_map_languages())}")
print(f"  Published: {note.get_published().isoformat()}")
print(f"  Unmodelled key kept: sensitive={note.get_unknown('sensitive')}")

# ── 2. Write it back ─────────────────────────────────────────────

print("\n=== 2. Outgoing Document ===\n")

print(to_json(create, indent=2, ensure_ascii=False))

# ── 3. Build an activity from scratch ────────────────────────────

print("\n=== 3. Building an Activity ===\n")

reply = Note()
reply.set_id("https://social.example/notes/43")
reply.append_content_string("Hi Alice!")
reply.append_in_reply_to_iri("https://social.example/notes/42")
reply.append_to_iri(PUBLIC)

activity = Create()
activity.append_actor_iri("https://social.example/users/bob")
activity.append_object(reply)

# The canonical type is added on output; the "type" sequence stays empty
print(f"  type_len before serialize: {activity.type_len()}")
print(json.dumps(activity.serialize(), indent=2))
print(f"  type_len after serialize: {activity.type_len()}")
