"""Contact list routes."""

from fastapi import APIRouter

router = APIRouter(tags=["Contacts"])
