"""
Event endpoints.
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from eventz.db.session import get_db
from eventz.schemas.event import EventCreate, EventIdResponse, EventResponse
from eventz.services.event_service import create_event, find_event_id, get_event, list_events
from eventz.core.security import Principal, get_current_principal

router = APIRouter(prefix="/events", tags=["Events"])


@router.post("/", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
async def create_event_endpoint(
    event_data: EventCreate,
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_db),
):
    """Create a new event. Requires authentication."""
    return await create_event(db, event_data, created_by=principal.username)


@router.get("/", response_model=list[EventResponse])
async def list_events_endpoint(
    upcoming_only: bool = Query(False),
    db: AsyncSession = Depends(get_db),
):
    return await list_events(db, upcoming_only=upcoming_only)


@router.get("/lookup/{name}", response_model=EventIdResponse)
async def lookup_event_id(name: str, db: AsyncSession = Depends(get_db)):
    """Resolve an event ID from its name (case-insensitive)."""
    event_id = await find_event_id(db, name)
    return EventIdResponse(event_id=event_id)


@router.get("/{event_id}", response_model=EventResponse)
async def get_event_endpoint(event_id: int, db: AsyncSession = Depends(get_db)):
    return await get_event(db, event_id)
