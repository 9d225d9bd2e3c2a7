from fastapi import APIRouter, Depends
from app.database.content_store import ContentStore, get_content_store
from app.modules.content.schemas import IdeaResponse, ProjectResponse, TalkResponse, RsvpResponse
from app.modules.content.service import ContentService
from app.core.dependencies import get_current_user
from typing import List, Optional, Dict, Literal

router = APIRouter(tags=["content"])


def get_content_service(store: ContentStore = Depends(get_content_store)) -> ContentService:
    return ContentService(store)


# Ideas
@router.get("/ideas", response_model=List[IdeaResponse])
async def list_ideas(
    search: Optional[str] = None,
    status: Optional[str] = None,
    tag: Optional[str] = None,
    user_data: Dict = Depends(get_current_user),
    service: ContentService = Depends(get_content_service)
):
    return await service.list_ideas(search=search, status=status, tag=tag)


@router.get("/ideas/{idea_id}", response_model=IdeaResponse)
async def get_idea(
    idea_id: int,
    user_data: Dict = Depends(get_current_user),
    service: ContentService = Depends(get_content_service)
):
    return await service.get_idea(idea_id)


@router.post("/ideas/{idea_id}/upvote", response_model=IdeaResponse)
async def upvote_idea(
    idea_id: int,
    user_data: Dict = Depends(get_current_user),
    service: ContentService = Depends(get_content_service)
):
    return await service.upvote_idea(idea_id)


# Projects
@router.get("/projects", response_model=List[ProjectResponse])
async def list_projects(
    search: Optional[str] = None,
    domain: Optional[str] = None,
    open_only: bool = False,
    user_data: Dict = Depends(get_current_user),
    service: ContentService = Depends(get_content_service)
):
    return await service.list_projects(search=search, domain=domain, open_only=open_only)


@router.get("/projects/{project_id}", response_model=ProjectResponse)
async def get_project(
    project_id: int,
    user_data: Dict = Depends(get_current_user),
    service: ContentService = Depends(get_content_service)
):
    return await service.get_project(project_id)


# Talks
@router.get("/talks", response_model=List[TalkResponse])
async def list_talks(
    when: Literal["upcoming", "past", "all"] = "all",
    user_data: Dict = Depends(get_current_user),
    service: ContentService = Depends(get_content_service)
):
    """Upcoming talks soonest first; past talks most recent first"""
    return await service.list_talks(when=when)


@router.get("/talks/{talk_id}", response_model=TalkResponse)
async def get_talk(
    talk_id: str,
    user_data: Dict = Depends(get_current_user),
    service: ContentService = Depends(get_content_service)
):
    return await service.get_talk(talk_id)


@router.post("/talks/{talk_id}/rsvp", response_model=RsvpResponse)
async def toggle_rsvp(
    talk_id: str,
    user_data: Dict = Depends(get_current_user),
    service: ContentService = Depends(get_content_service)
):
    """Toggle the current user's RSVP"""
    return await service.toggle_rsvp(talk_id, user_data["id"])
