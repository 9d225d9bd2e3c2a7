from app.database.content_store import ContentStore, ContentNotFoundError
from app.modules.content.schemas import IdeaResponse, ProjectResponse, TalkResponse, RsvpResponse
from typing import List, Optional, Dict, Any
from fastapi import HTTPException


def _talk_response(row: Dict[str, Any]) -> TalkResponse:
    data = {k: v for k, v in row.items() if k != "attendees"}
    return TalkResponse(**data, attendee_count=len(row.get("attendees", ())))


class ContentService:
    def __init__(self, store: ContentStore):
        self.store = store

    async def list_ideas(self, search: Optional[str] = None, status: Optional[str] = None,
                         tag: Optional[str] = None) -> List[IdeaResponse]:
        ideas = await self.store.list_ideas(search=search, status=status, tag=tag)
        return [IdeaResponse(**idea) for idea in ideas]

    async def get_idea(self, idea_id: int) -> IdeaResponse:
        try:
            return IdeaResponse(**await self.store.get_idea(idea_id))
        except ContentNotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))

    async def upvote_idea(self, idea_id: int) -> IdeaResponse:
        try:
            return IdeaResponse(**await self.store.upvote_idea(idea_id))
        except ContentNotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))

    async def list_projects(self, search: Optional[str] = None, domain: Optional[str] = None,
                            open_only: bool = False) -> List[ProjectResponse]:
        projects = await self.store.list_projects(search=search, domain=domain, open_only=open_only)
        return [ProjectResponse(**project) for project in projects]

    async def get_project(self, project_id: int) -> ProjectResponse:
        try:
            return ProjectResponse(**await self.store.get_project(project_id))
        except ContentNotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))

    async def list_talks(self, when: str = "all") -> List[TalkResponse]:
        talks = await self.store.list_talks(when=when)
        return [_talk_response(talk) for talk in talks]

    async def get_talk(self, talk_id: str) -> TalkResponse:
        try:
            return _talk_response(await self.store.get_talk(talk_id))
        except ContentNotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))

    async def toggle_rsvp(self, talk_id: str, user_id: str) -> RsvpResponse:
        try:
            attending = await self.store.toggle_rsvp(talk_id, user_id)
            talk = await self.store.get_talk(talk_id)
        except ContentNotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))
        return RsvpResponse(
            talk_id=talk_id,
            attending=attending,
            attendee_count=len(talk["attendees"]),
        )
