"""Chat folder routes."""

from fastapi import APIRouter

router = APIRouter(tags=["Folders"])
