"""API v1 router combining all endpoint routers."""

from fastapi import APIRouter

from desk.api.v1 import requests

api_router = APIRouter()

api_router.include_router(requests.router, prefix="/requests", tags=["requests"])
