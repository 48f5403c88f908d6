"""Group chat routes."""

from fastapi import APIRouter

router = APIRouter(tags=["Groups"])
