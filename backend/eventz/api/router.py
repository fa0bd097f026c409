"""
Central API router that aggregates all route modules.
"""

from fastapi import APIRouter
from eventz.api.routes import admin, auth, bookings, chat, events, feedback

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(auth.router)
api_router.include_router(events.router)
api_router.include_router(bookings.router)
api_router.include_router(chat.router)
api_router.include_router(feedback.router)
api_router.include_router(admin.router)
