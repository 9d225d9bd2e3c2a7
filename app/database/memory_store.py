"""
In-process data store standing in for the Builders Arc backend.

Users, admins and credentials live in plain dicts shaped like the rows the
hosted database would return. Every public coroutine waits for a fixed delay
before touching state so that callers see backend-like latency.
"""

import asyncio
import hashlib
import logging
import secrets
import time
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from passlib.context import CryptContext

from app.config.settings import settings

logger = logging.getLogger(__name__)

USER_STATUSES = ("pending", "approved", "rejected", "suspended")

STATUS_MESSAGES = {
    "pending": "Your account is pending approval",
    "rejected": "Your account has been rejected",
    "suspended": "Your account has been suspended",
}

PROFILE_FIELDS = (
    "full_name", "age", "gender", "department", "education_level",
    "github_url", "linkedin_url",
)

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


class StoreError(Exception):
    """Base class for errors raised by the data store."""


class InvalidCredentialsError(StoreError):
    pass


class DuplicateEmailError(StoreError):
    pass


class UserNotFoundError(StoreError):
    pass


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _normalize_email(email: str) -> str:
    return email.strip().lower()


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, stored: str) -> bool:
    try:
        return pwd_context.verify(password, stored)
    except ValueError:
        # unrecognised hash format
        return False


class MemoryStore:
    def __init__(self, delay: float = 0.0, session_ttl: int = 3600, session_max_count: int = 1000):
        self.delay = delay
        self.session_ttl = session_ttl
        self.session_max_count = session_max_count
        self._users: Dict[str, Dict[str, Any]] = {}
        self._admins: Dict[str, Dict[str, Any]] = {}
        # email -> password hash, kept apart from the user rows
        self._passwords: Dict[str, str] = {}
        self._admin_passwords: Dict[str, str] = {}
        # sha256(token) -> (kind, principal_id, expires_at)
        self._sessions: Dict[str, Tuple[str, str, float]] = {}

    async def _simulate_latency(self):
        if self.delay > 0:
            await asyncio.sleep(self.delay)

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def _find_user_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        email = _normalize_email(email)
        for user in self._users.values():
            if user["email"] == email:
                return user
        return None

    def _find_admin_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        email = _normalize_email(email)
        for admin in self._admins.values():
            if admin["email"] == email:
                return admin
        return None

    def _require_user(self, user_id: str) -> Dict[str, Any]:
        user = self._users.get(user_id)
        if user is None:
            raise UserNotFoundError("User not found")
        return user

    # ------------------------------------------------------------------
    # Seeding (synchronous, used at startup and in tests)
    # ------------------------------------------------------------------

    def add_user(self, email: str, password: str, full_name: str, status: str = "pending",
                 role: str = "Member", **profile) -> Dict[str, Any]:
        user = {
            "id": profile.pop("id", None) or str(uuid.uuid4()),
            "email": _normalize_email(email),
            "full_name": full_name,
            "age": None,
            "gender": None,
            "department": None,
            "education_level": None,
            "github_url": None,
            "linkedin_url": None,
            "status": status,
            "role": role,
            "created_at": profile.pop("created_at", None) or _now_iso(),
            "last_login": None,
            "activity_score": None,
        }
        user.update(profile)
        self._users[user["id"]] = user
        self._passwords[user["email"]] = hash_password(password)
        return dict(user)

    def add_admin(self, email: str, password: str, full_name: str, admin_id: Optional[str] = None) -> Dict[str, Any]:
        admin = {
            "id": admin_id or str(uuid.uuid4()),
            "email": _normalize_email(email),
            "full_name": full_name,
            "role": "Admin",
            "last_login": None,
        }
        self._admins[admin["id"]] = admin
        self._admin_passwords[admin["email"]] = hash_password(password)
        return dict(admin)

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------

    async def login_user(self, email: str, password: str) -> Tuple[Dict[str, Any], Optional[str]]:
        """Check credentials; return the user and a status message when not approved."""
        await self._simulate_latency()
        user = self._find_user_by_email(email)
        stored = self._passwords.get(_normalize_email(email))
        if user is None or stored is None or not verify_password(password, stored):
            raise InvalidCredentialsError("Invalid email or password")
        message = STATUS_MESSAGES.get(user["status"])
        if message is None:
            user["last_login"] = _now_iso()
        return dict(user), message

    async def login_admin(self, email: str, password: str) -> Dict[str, Any]:
        await self._simulate_latency()
        admin = self._find_admin_by_email(email)
        stored = self._admin_passwords.get(_normalize_email(email))
        if admin is None or stored is None or not verify_password(password, stored):
            raise InvalidCredentialsError("Invalid admin credentials")
        admin["last_login"] = _now_iso()
        return dict(admin)

    async def signup_user(self, data: Dict[str, Any]) -> Dict[str, Any]:
        await self._simulate_latency()
        if self._find_user_by_email(data["email"]) is not None:
            raise DuplicateEmailError("Email already registered")
        profile = {k: data.get(k) for k in PROFILE_FIELDS if k != "full_name"}
        user = self.add_user(
            email=data["email"],
            password=data["password"],
            full_name=data["full_name"],
            status="pending",
            role="Member",
            **profile,
        )
        logger.info("Signup request created for %s", user["email"])
        return user

    async def change_password(self, user_id: str, current_password: str, new_password: str):
        await self._simulate_latency()
        user = self._require_user(user_id)
        stored = self._passwords.get(user["email"])
        if stored is None or not verify_password(current_password, stored):
            raise InvalidCredentialsError("Current password is incorrect")
        self._passwords[user["email"]] = hash_password(new_password)

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    async def get_user(self, user_id: str) -> Dict[str, Any]:
        await self._simulate_latency()
        return dict(self._require_user(user_id))

    async def get_admin(self, admin_id: str) -> Optional[Dict[str, Any]]:
        await self._simulate_latency()
        admin = self._admins.get(admin_id)
        return dict(admin) if admin else None

    async def get_all_pending_users(self) -> List[Dict[str, Any]]:
        await self._simulate_latency()
        pending = [dict(u) for u in self._users.values() if u["status"] == "pending"]
        return sorted(pending, key=lambda u: u["created_at"])

    async def get_all_users(self, role: Optional[str] = None, status: Optional[str] = None,
                            search: Optional[str] = None) -> List[Dict[str, Any]]:
        await self._simulate_latency()
        users = list(self._users.values())
        if role:
            users = [u for u in users if u["role"] == role]
        if status:
            users = [u for u in users if u["status"] == status]
        if search:
            needle = search.strip().lower()
            users = [
                u for u in users
                if needle in u["email"] or needle in (u["full_name"] or "").lower()
            ]
        return [dict(u) for u in sorted(users, key=lambda u: u["created_at"], reverse=True)]

    async def approve_user(self, user_id: str) -> Dict[str, Any]:
        await self._simulate_latency()
        user = self._require_user(user_id)
        user["status"] = "approved"
        logger.info("User %s approved", user_id)
        return dict(user)

    async def reject_user(self, user_id: str) -> Dict[str, Any]:
        await self._simulate_latency()
        user = self._require_user(user_id)
        user["status"] = "rejected"
        logger.info("User %s rejected", user_id)
        return dict(user)

    async def update_profile(self, user_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        await self._simulate_latency()
        user = self._require_user(user_id)
        for key, value in fields.items():
            if key in PROFILE_FIELDS:
                user[key] = value
        return dict(user)

    async def set_user_role(self, user_id: str, role: str) -> Dict[str, Any]:
        await self._simulate_latency()
        user = self._require_user(user_id)
        user["role"] = role
        logger.info("User %s role changed to %s", user_id, role)
        return dict(user)

    async def toggle_suspension(self, user_id: str) -> Dict[str, Any]:
        await self._simulate_latency()
        user = self._require_user(user_id)
        user["status"] = "suspended" if user["status"] == "approved" else "approved"
        logger.info("User %s is now %s", user_id, user["status"])
        return dict(user)

    async def stats(self) -> Dict[str, int]:
        await self._simulate_latency()
        counts = {s: 0 for s in USER_STATUSES}
        for user in self._users.values():
            counts[user["status"]] = counts.get(user["status"], 0) + 1
        return {
            "total_users": len(self._users),
            "pending_users": counts["pending"],
            "approved_users": counts["approved"],
            "rejected_users": counts["rejected"],
            "suspended_users": counts["suspended"],
        }

    # ------------------------------------------------------------------
    # Sessions
    # ------------------------------------------------------------------

    @staticmethod
    def _session_key(token: str) -> str:
        return hashlib.sha256(token.encode()).hexdigest()

    def _evict_sessions(self, now: float):
        expired = [k for k, (_, _, expiry) in self._sessions.items() if expiry <= now]
        for key in expired:
            del self._sessions[key]
        while len(self._sessions) >= self.session_max_count:
            oldest = min(self._sessions, key=lambda k: self._sessions[k][2])
            del self._sessions[oldest]

    async def create_session(self, kind: str, principal_id: str) -> str:
        await self._simulate_latency()
        now = time.monotonic()
        if len(self._sessions) >= self.session_max_count:
            self._evict_sessions(now)
        token = secrets.token_urlsafe(32)
        self._sessions[self._session_key(token)] = (kind, principal_id, now + self.session_ttl)
        return token

    async def get_session(self, token: str) -> Optional[Tuple[str, str]]:
        await self._simulate_latency()
        key = self._session_key(token)
        entry = self._sessions.get(key)
        if entry is None:
            return None
        kind, principal_id, expiry = entry
        if time.monotonic() >= expiry:
            del self._sessions[key]
            return None
        return kind, principal_id

    async def delete_session(self, token: str) -> bool:
        await self._simulate_latency()
        return self._sessions.pop(self._session_key(token), None) is not None


def seed_demo_data(store: MemoryStore):
    """Load the demo accounts the front-end was built against."""
    store.add_user("user@example.com", "password", "Test User", status="approved", id="1")
    store.add_user(
        "johndoe@example.com", "password", "John Doe", status="approved",
        department="Engineering", activity_score=85,
    )
    store.add_user(
        "janedoe@example.com", "password", "Jane Doe", status="approved",
        role="Ambassador", department="Design", activity_score=92,
    )
    store.add_user("pending@example.com", "password", "Pending User", id="3")
    store.add_user(
        "pending1@example.com", "password", "Pending User 1",
        department="Marketing", education_level="Bachelor",
        github_url="https://github.com/pending1",
        linkedin_url="https://linkedin.com/in/pending1",
        age=28, gender="Female",
    )
    store.add_user(
        "pending2@example.com", "password", "Pending User 2",
        department="Engineering", education_level="Master",
        github_url="https://github.com/pending2",
        linkedin_url="https://linkedin.com/in/pending2",
        age=32, gender="Male",
    )


class StoreProvider:
    _store: MemoryStore = None

    @classmethod
    def get_store(cls) -> MemoryStore:
        if cls._store is None:
            cls._store = MemoryStore(
                delay=settings.mock_delay_seconds,
                session_ttl=settings.session_ttl_seconds,
                session_max_count=settings.session_max_count,
            )
            cls._store.add_admin(settings.admin_email, settings.admin_password, settings.admin_full_name, admin_id="admin1")
            if settings.seed_demo_data:
                seed_demo_data(cls._store)
                logger.info("Seeded demo accounts into memory store")
        return cls._store

    @classmethod
    def reset_store(cls):
        cls._store = None


def get_store() -> MemoryStore:
    return StoreProvider.get_store()
