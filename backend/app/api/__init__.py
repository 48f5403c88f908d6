"""API route groups and the prefixes they are mounted under."""

from typing import Mapping

from fastapi import APIRouter, FastAPI

from app.api import auth, contacts, groups, messages, calls, files, folders

ROUTE_GROUPS = {
    "/api/auth": auth.router,
    "/api/contacts": contacts.router,
    "/api/groups": groups.router,
    "/api/messages": messages.router,
    "/api/calls": calls.router,
    "/api/files": files.router,
    "/api/folders": folders.router,
}


def _overlaps(a: str, b: str) -> bool:
    return a == b or a.startswith(b + "/") or b.startswith(a + "/")


def mount_route_groups(app: FastAPI, route_groups: Mapping[str, APIRouter]) -> None:
    """
    Include each router under its prefix.

    Raises ValueError if two prefixes are equal or one is nested inside
    another, since requests could then match more than one group.
    """
    prefixes = [prefix.rstrip("/") for prefix in route_groups]
    for i, prefix in enumerate(prefixes):
        if not prefix.startswith("/"):
            raise ValueError(f"Route prefix must start with '/': {prefix!r}")
        for other in prefixes[i + 1:]:
            if _overlaps(prefix, other):
                raise ValueError(f"Route prefixes collide: {prefix!r} and {other!r}")

    for prefix, router in zip(prefixes, route_groups.values()):
        app.include_router(router, prefix=prefix)


__all__ = [
    "ROUTE_GROUPS",
    "mount_route_groups",
]
