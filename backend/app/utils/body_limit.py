"""ASGI middleware rejecting request bodies above a size ceiling."""

from starlette.datastructures import Headers
from fastapi import HTTPException
from starlette.responses import JSONResponse

TOO_LARGE_DETAIL = "Request body too large"


class BodySizeLimitMiddleware:
    """
    Reject bodies larger than `max_body_size` bytes with 413.

    A declared Content-Length is checked before the app runs. Bodies of
    unknown length are counted as they are received; the route fails with
    413 on the first chunk past the limit.
    """

    def __init__(self, app, max_body_size: int):
        self.app = app
        self.max_body_size = max_body_size

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        content_length = Headers(scope=scope).get("content-length")
        if content_length and content_length.isdigit() and int(content_length) > self.max_body_size:
            response = JSONResponse({"detail": TOO_LARGE_DETAIL}, status_code=413)
            await response(scope, receive, send)
            return

        received = 0

        async def limited_receive():
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self.max_body_size:
                    raise HTTPException(status_code=413, detail=TOO_LARGE_DETAIL)
            return message

        await self.app(scope, limited_receive, send)
