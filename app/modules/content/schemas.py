from pydantic import BaseModel
from typing import Optional, List
from datetime import datetime


class IdeaResponse(BaseModel):
    id: int
    title: str
    description: str
    author: str
    status: str  # Draft | Incubating | Spun-Off
    tags: List[str]
    upvotes: int
    comments: int
    created_at: datetime


class TeamMember(BaseModel):
    id: str
    name: str


class ProjectResponse(BaseModel):
    id: int
    title: str
    description: str
    progress: int
    status: str
    lead: TeamMember
    team: List[TeamMember]
    domain: List[str]
    activity: int
    is_open: bool
    created_at: str


class Speaker(BaseModel):
    name: str


class TalkResponse(BaseModel):
    id: str
    title: str
    date: datetime
    speaker: Speaker
    location: str
    tags: List[str]
    description: str
    recording: Optional[str] = None
    slides: Optional[str] = None
    attendee_count: int = 0


class RsvpResponse(BaseModel):
    talk_id: str
    attending: bool
    attendee_count: int
