"""File attachment routes."""

from fastapi import APIRouter

router = APIRouter(tags=["Files"])
