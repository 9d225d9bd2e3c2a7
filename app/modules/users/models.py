# Memory store rows: users, admins
# This file documents the row shapes held by app/database/memory_store.py

"""
users:
- id: str (uuid, or a fixed id for seeded demo accounts)
- email: str (unique, stored lower-case)
- full_name: str
- age: int (nullable)
- gender: str (nullable)
- department: str (nullable)
- education_level: str (nullable)
- github_url: str (nullable)
- linkedin_url: str (nullable)
- status: pending | approved | rejected | suspended
- role: Member | Ambassador | Moderator
- created_at: ISO timestamp (UTC)
- last_login: ISO timestamp (nullable)
- activity_score: int (nullable)

admins:
- id, email, full_name, role ("Admin"), last_login

Passwords are not part of either row. They sit in a separate
email -> PBKDF2 hash map inside the store.
"""
