"""Call history routes."""

from fastapi import APIRouter

router = APIRouter(tags=["Calls"])
