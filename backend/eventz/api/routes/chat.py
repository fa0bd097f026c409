"""
Coordinator chat endpoints.
"""

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from eventz.db.session import get_db
from eventz.schemas.chat import ChatMessageCreate, ChatMessageResponse
from eventz.services import chat_service

router = APIRouter(prefix="/chat", tags=["Chat"])


@router.get("/{coordinator_id}", response_model=list[ChatMessageResponse])
async def get_messages(coordinator_id: int = Path(..., gt=0), db: AsyncSession = Depends(get_db)):
    return await chat_service.list_messages(db, coordinator_id)


@router.post(
    "/{coordinator_id}",
    response_model=list[ChatMessageResponse],
    status_code=status.HTTP_201_CREATED,
)
async def post_message(
    data: ChatMessageCreate,
    coordinator_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
):
    """Post a message; the response carries it plus the coordinator's auto-reply."""
    return await chat_service.post_message(db, coordinator_id, data.sender, data.message)
