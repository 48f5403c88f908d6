"""Authentication routes (login, registration, sessions)."""

from fastapi import APIRouter

router = APIRouter(tags=["Authentication"])
