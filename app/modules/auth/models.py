# Sessions
# Sessions live in the memory store (app/database/memory_store.py).
# A login issues an opaque bearer token; the store keeps only its SHA-256.

"""
Session entry:
- key: sha256(token) hex digest
- kind: "user" | "admin"
- principal_id: users.id or admins.id
- expires_at: monotonic deadline (now + SESSION_TTL_SECONDS)

Only approved users receive a session. Pending, rejected and suspended users
get their status message back instead and stay signed out.
"""
