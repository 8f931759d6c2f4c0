# backend/app/api/v1/router.py
from fastapi import APIRouter
from .endpoints import idoc_filter, health

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(idoc_filter.router, prefix="/filter", tags=["filter"])
