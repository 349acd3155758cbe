"""
Example 02: Resource Limits
===========================

Demonstrates resource limit enforcement for untrusted inbox payloads:
oversized documents and deeply nested activities are rejected before
or during deserialization.

Use case: an ActivityPub inbox endpoint accepting POSTs from any server.
"""

import json

from activity_vocab import DEFAULT_RESOURCE_LIMITS, enforce_resource_limits, from_dict, from_json

# ── 1. Default resource limits ───────────────────────────────────

print("=== 1. Default Resource Limits ===\n")

for key, value in DEFAULT_RESOURCE_LIMITS.items():
    unit = "bytes" if "size" in key else "levels"
    print(f"  {key}: {value:,} {unit}")

# ── 2. Document size limit ───────────────────────────────────────

print("\n=== 2. Document Size Limit ===\n")

small = json.dumps({"type": "Note", "content": "hi"})
large = json.dumps({"type": "Note", "content": "A" * 2000})

for label, text in (("Small", small), ("Large", large)):
    try:
        from_json(text, limits={"max_document_size": 1024})
        print(f"  {label} document ({len(text)} bytes): ✓ Accepted")
    except ValueError as e:
        print(f"  {label} document ({len(text)} bytes): ✗ Rejected")
        print(f"    Reason: {e}")

# ── 3. Nesting depth limit ───────────────────────────────────────

print("\n=== 3. Entity Nesting Limit ===\n")


def build_chain(depth: int) -> dict:
    doc = {"type": "Note", "content": "innermost"}
    for _ in range(depth):
        doc = {"type": "Announce", "object": doc}
    return doc


for depth in (5, 50):
    try:
        from_dict(build_chain(depth), limits={"max_graph_depth": 20})
        print(f"  Depth {depth}: ✓ Accepted (limit=20)")
    except ValueError as e:
        print(f"  Depth {depth}: ✗ Rejected (limit=20)")
        print(f"    Reason: {e}")

# ── 4. Checking raw payloads up front ────────────────────────────

print("\n=== 4. Pre-flight Check ===\n")

try:
    enforce_resource_limits("{not json")
except ValueError as e:
    print(f"  Malformed body: ✗ {e}")
