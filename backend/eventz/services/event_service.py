"""
Event service handling CRUD operations.
"""

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from eventz.models.event import Event
from eventz.schemas.event import EventCreate
from eventz.core.clock import today
from eventz.core.exceptions import NotFoundError, ValidationError
from eventz.core.logging import get_logger

logger = get_logger(__name__)


async def create_event(db: AsyncSession, event_data: EventCreate, created_by: str) -> Event:
    """Create a new event. The date may be today but not in the past."""
    if event_data.event_date < today():
        raise ValidationError("Event date cannot be in the past")

    event = Event(
        name=event_data.name,
        description=event_data.description,
        event_date=event_data.event_date,
        city=event_data.city,
        venue=event_data.venue,
        created_by=event_data.created_by or created_by,
    )
    db.add(event)
    await db.commit()
    await db.refresh(event)

    logger.info("event_created", event_id=event.id, name=event.name, city=event.city)
    return event


async def get_event(db: AsyncSession, event_id: int) -> Event:
    """Get a single event by ID."""
    result = await db.execute(select(Event).where(Event.id == event_id))
    event = result.scalar_one_or_none()

    if not event:
        raise NotFoundError(f"Event {event_id} not found")
    return event


async def find_event_id(db: AsyncSession, name: str) -> int:
    """Resolve an event ID from its name, ignoring case."""
    result = await db.execute(
        select(Event.id)
        .where(func.lower(Event.name) == name.lower())
        .order_by(Event.id)
        .limit(1)
    )
    event_id = result.scalar_one_or_none()

    if event_id is None:
        raise NotFoundError(f"Event '{name}' not found")
    return event_id


async def list_events(db: AsyncSession, upcoming_only: bool = False) -> list[Event]:
    query = select(Event)
    if upcoming_only:
        query = query.where(Event.event_date >= today())

    result = await db.execute(query.order_by(Event.event_date.asc(), Event.id.asc()))
    return list(result.scalars().all())


async def delete_event(db: AsyncSession, event_id: int) -> None:
    result = await db.execute(delete(Event).where(Event.id == event_id))
    if result.rowcount == 0:
        raise NotFoundError(f"Event {event_id} not found")
    await db.commit()
    logger.info("event_deleted", event_id=event_id)
