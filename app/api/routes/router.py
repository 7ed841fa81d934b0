# app/api/routes/router.py
from fastapi import APIRouter
from app.api.routes import auth, events

api_router = APIRouter()

api_router.include_router(auth.router,   prefix="/authorization", tags=["authorization"])
api_router.include_router(events.router, prefix="/event",         tags=["event"])
