"""
Community content (ideas, projects, talks) held in memory.

Rows are seeded from the demo data the browsing pages were built with.
Talk dates are placed relative to seeding time so the upcoming/past split
stays meaningful.
"""

import asyncio
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from app.config.settings import settings


class ContentNotFoundError(Exception):
    pass


_IDEAS = [
    {
        "id": 1,
        "title": "AI-Powered Code Review Assistant",
        "description": "A tool that uses machine learning to provide actionable code review comments and suggestions based on project-specific patterns.",
        "author": "Sarah Chen",
        "status": "Incubating",
        "tags": ["AI", "Developer Tools", "Productivity"],
        "upvotes": 24,
        "comments": 8,
        "days_ago": 2,
    },
    {
        "id": 2,
        "title": "Cross-platform Design System Builder",
        "description": "A tool to create, manage, and export design systems that work consistently across web, mobile, and desktop applications.",
        "author": "Miguel Rodriguez",
        "status": "Draft",
        "tags": ["Design", "UI/UX", "Tooling"],
        "upvotes": 16,
        "comments": 5,
        "days_ago": 4,
    },
    {
        "id": 3,
        "title": "Open Source Mentorship Platform",
        "description": "A platform connecting new developers with mentors in open source projects, with guided contribution paths and achievement tracking.",
        "author": "Jamie Taylor",
        "status": "Spun-Off",
        "tags": ["Open Source", "Community", "Education"],
        "upvotes": 42,
        "comments": 15,
        "days_ago": 7,
    },
    {
        "id": 4,
        "title": "Decentralized Package Registry",
        "description": "A peer-to-peer package registry for JavaScript libraries that ensures availability even if central services go down.",
        "author": "Akira Tanaka",
        "status": "Incubating",
        "tags": ["Decentralization", "JavaScript", "Infrastructure"],
        "upvotes": 31,
        "comments": 12,
        "days_ago": 14,
    },
    {
        "id": 5,
        "title": "Accessibility Testing Automation",
        "description": "An automated testing framework specifically designed to catch accessibility issues during development.",
        "author": "Elena Petrova",
        "status": "Draft",
        "tags": ["Accessibility", "Testing", "DevOps"],
        "upvotes": 27,
        "comments": 9,
        "days_ago": 21,
    },
]

_PROJECTS = [
    {
        "id": 1,
        "title": "AI Code Reviewer",
        "description": "Building an intelligent code review assistant that learns from feedback and provides actionable suggestions for code improvement.",
        "progress": 65,
        "status": "In Progress",
        "lead": {"id": "u1", "name": "Sarah Chen"},
        "team": [
            {"id": "u1", "name": "Sarah Chen"},
            {"id": "u2", "name": "Alex Johnson"},
            {"id": "u3", "name": "Maria Garcia"},
            {"id": "u4", "name": "David Kim"},
            {"id": "u5", "name": "Emma Wilson"},
        ],
        "domain": ["AI", "Developer Tools"],
        "activity": 12,
        "is_open": True,
        "created_at": "2025-03-15",
    },
    {
        "id": 2,
        "title": "Open Hardware Sensor Kit",
        "description": "A modular, low-cost sensor kit with open schematics and firmware for community environmental monitoring.",
        "progress": 30,
        "status": "Planning",
        "lead": {"id": "u6", "name": "James Lee"},
        "team": [
            {"id": "u6", "name": "James Lee"},
            {"id": "u2", "name": "Alex Johnson"},
        ],
        "domain": ["Hardware", "IoT"],
        "activity": 5,
        "is_open": True,
        "created_at": "2025-04-02",
    },
    {
        "id": 3,
        "title": "Community Forum Redesign",
        "description": "Redesigning the community forum with improved UX, better search capabilities, and integrated analytics to increase engagement.",
        "progress": 90,
        "status": "Review",
        "lead": {"id": "u3", "name": "Maria Garcia"},
        "team": [
            {"id": "u3", "name": "Maria Garcia"},
            {"id": "u7", "name": "Olivia Brown"},
            {"id": "u8", "name": "William Jones"},
        ],
        "domain": ["UX/UI", "Community"],
        "activity": 8,
        "is_open": False,
        "created_at": "2025-02-20",
    },
]

_TALKS = [
    {
        "id": "t1",
        "title": "Scaling Side Projects into Products",
        "speaker": {"name": "Sarah Chen"},
        "location": "Main Hall",
        "tags": ["Product", "Startups"],
        "description": "Lessons learned turning weekend hacks into maintained products.",
        "days_from_now": 5,
    },
    {
        "id": "t2",
        "title": "Practical Accessibility Testing",
        "speaker": {"name": "Elena Petrova"},
        "location": "Online",
        "tags": ["Accessibility", "Testing"],
        "description": "Catching accessibility regressions before they ship.",
        "days_from_now": 12,
    },
    {
        "id": "t3",
        "title": "Building with Open Source Mentors",
        "speaker": {"name": "Jamie Taylor"},
        "location": "Room B",
        "tags": ["Open Source", "Community"],
        "description": "How mentorship paths grew our contributor base.",
        "days_from_now": -10,
        "recording": "https://example.com/recordings/t3",
        "slides": "https://example.com/slides/t3",
    },
    {
        "id": "t4",
        "title": "Peer-to-peer Package Distribution",
        "speaker": {"name": "Akira Tanaka"},
        "location": "Online",
        "tags": ["Infrastructure", "JavaScript"],
        "description": "Designing a registry that keeps working when central services fail.",
        "days_from_now": -30,
        "recording": "https://example.com/recordings/t4",
    },
]


class ContentStore:
    def __init__(self, delay: float = 0.0, now: Optional[datetime] = None):
        self.delay = delay
        now = now or datetime.now(timezone.utc)
        self._ideas: Dict[int, Dict[str, Any]] = {}
        for idea in _IDEAS:
            row = {k: v for k, v in idea.items() if k != "days_ago"}
            row["created_at"] = (now - timedelta(days=idea["days_ago"])).isoformat()
            self._ideas[row["id"]] = row
        self._projects: Dict[int, Dict[str, Any]] = {p["id"]: dict(p) for p in _PROJECTS}
        self._talks: Dict[str, Dict[str, Any]] = {}
        for talk in _TALKS:
            row = {k: v for k, v in talk.items() if k != "days_from_now"}
            row["date"] = now + timedelta(days=talk["days_from_now"])
            row["attendees"] = set()
            self._talks[row["id"]] = row

    async def _simulate_latency(self):
        if self.delay > 0:
            await asyncio.sleep(self.delay)

    # Ideas

    async def list_ideas(self, search: Optional[str] = None, status: Optional[str] = None,
                         tag: Optional[str] = None) -> List[Dict[str, Any]]:
        await self._simulate_latency()
        ideas = list(self._ideas.values())
        if search:
            needle = search.lower()
            ideas = [i for i in ideas if needle in i["title"].lower() or needle in i["description"].lower()]
        if status:
            ideas = [i for i in ideas if i["status"].lower() == status.lower()]
        if tag:
            ideas = [i for i in ideas if tag.lower() in (t.lower() for t in i["tags"])]
        return [dict(i) for i in ideas]

    async def get_idea(self, idea_id: int) -> Dict[str, Any]:
        await self._simulate_latency()
        idea = self._ideas.get(idea_id)
        if idea is None:
            raise ContentNotFoundError("Idea not found")
        return dict(idea)

    async def upvote_idea(self, idea_id: int) -> Dict[str, Any]:
        await self._simulate_latency()
        idea = self._ideas.get(idea_id)
        if idea is None:
            raise ContentNotFoundError("Idea not found")
        idea["upvotes"] += 1
        return dict(idea)

    # Projects

    async def list_projects(self, search: Optional[str] = None, domain: Optional[str] = None,
                            open_only: bool = False) -> List[Dict[str, Any]]:
        await self._simulate_latency()
        projects = list(self._projects.values())
        if search:
            needle = search.lower()
            projects = [p for p in projects if needle in p["title"].lower() or needle in p["description"].lower()]
        if domain:
            projects = [p for p in projects if domain.lower() in (d.lower() for d in p["domain"])]
        if open_only:
            projects = [p for p in projects if p["is_open"]]
        return [dict(p) for p in projects]

    async def get_project(self, project_id: int) -> Dict[str, Any]:
        await self._simulate_latency()
        project = self._projects.get(project_id)
        if project is None:
            raise ContentNotFoundError("Project not found")
        return dict(project)

    # Talks

    async def list_talks(self, when: str = "all", now: Optional[datetime] = None) -> List[Dict[str, Any]]:
        await self._simulate_latency()
        now = now or datetime.now(timezone.utc)
        talks = sorted(self._talks.values(), key=lambda t: t["date"])
        if when == "upcoming":
            talks = [t for t in talks if t["date"] >= now]
        elif when == "past":
            talks = [t for t in reversed(talks) if t["date"] < now]
        return [dict(t) for t in talks]

    async def get_talk(self, talk_id: str) -> Dict[str, Any]:
        await self._simulate_latency()
        talk = self._talks.get(talk_id)
        if talk is None:
            raise ContentNotFoundError("Talk not found")
        return dict(talk)

    async def toggle_rsvp(self, talk_id: str, user_id: str) -> bool:
        """Flip attendance for user_id; returns the new attending state."""
        await self._simulate_latency()
        talk = self._talks.get(talk_id)
        if talk is None:
            raise ContentNotFoundError("Talk not found")
        if user_id in talk["attendees"]:
            talk["attendees"].discard(user_id)
            return False
        talk["attendees"].add(user_id)
        return True

    async def counts(self) -> Dict[str, int]:
        await self._simulate_latency()
        return {
            "ideas": len(self._ideas),
            "projects": len(self._projects),
            "talks": len(self._talks),
        }


class ContentStoreProvider:
    _store: ContentStore = None

    @classmethod
    def get_store(cls) -> ContentStore:
        if cls._store is None:
            cls._store = ContentStore(delay=settings.mock_delay_seconds)
        return cls._store

    @classmethod
    def reset_store(cls):
        cls._store = None


def get_content_store() -> ContentStore:
    return ContentStoreProvider.get_store()
