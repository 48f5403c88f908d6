import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Mapping, Optional

import socketio
from fastapi import APIRouter, FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.encoders import jsonable_encoder

from app.config import Settings, get_settings
from app.api import ROUTE_GROUPS, mount_route_groups
from app.api.realtime import RealtimeGateway, create_socket_server
from app.services.keep_alive import KeepAlive
from app.utils import BodySizeLimitMiddleware

logger = logging.getLogger(__name__)


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with milliseconds and a Z suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Start the production keep-alive on startup and cancel it on shutdown."""
    settings = app.state.settings
    logger.info(f"Backend server starting on http://{settings.HOST}:{settings.PORT}")
    logger.info("Socket.IO ready for connections")
    if settings.is_production:
        keep_alive = KeepAlive(
            settings.keep_alive_url,
            interval=settings.KEEP_ALIVE_INTERVAL_SECONDS,
        )
        keep_alive.start()
        app.state.keep_alive = keep_alive
        logger.info("Keep-alive mechanism activated for production")
    try:
        yield
    finally:
        if app.state.keep_alive is not None:
            await app.state.keep_alive.stop()
            app.state.keep_alive = None
        logger.info("Backend server stopped")


def create_app(
    settings: Optional[Settings] = None,
    gateway: Optional[RealtimeGateway] = None,
    route_groups: Optional[Mapping[str, APIRouter]] = None,
) -> FastAPI:
    """
    Build the HTTP application.

    The realtime gateway and keep-alive are stored on `app.state` so route
    groups and tests can reach them without module globals.
    """
    settings = settings or get_settings()
    if gateway is None:
        gateway = RealtimeGateway(create_socket_server(settings))
        gateway.register()

    app = FastAPI(
        title=settings.APP_NAME,
        description="Chat backend with real-time room membership",
        version="1.0.0",
        lifespan=lifespan
    )
    app.state.settings = settings
    app.state.gateway = gateway
    app.state.keep_alive = None

    # Last added runs first: CORS, then the body limit, then routing
    app.add_middleware(BodySizeLimitMiddleware, max_body_size=settings.MAX_BODY_SIZE)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.FRONTEND_URL],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = jsonable_encoder(exc.errors())
        logger.warning(f"Rejected {request.method} {request.url.path}: {errors}")
        return JSONResponse(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, content={"detail": errors})

    mount_route_groups(app, ROUTE_GROUPS if route_groups is None else route_groups)

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "ok", "timestamp": utc_timestamp()}

    return app


def create_asgi_app(settings: Optional[Settings] = None) -> socketio.ASGIApp:
    """HTTP app with the Socket.IO server mounted at /socket.io."""
    settings = settings or get_settings()
    fastapi_app = create_app(settings)
    return socketio.ASGIApp(
        fastapi_app.state.gateway.sio,
        other_asgi_app=fastapi_app,
        socketio_path="/socket.io",
    )


def run() -> None:
    """Serve the app with uvicorn. A failed bind exits the process."""
    import uvicorn

    settings = get_settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(
        "app.main:create_asgi_app",
        factory=True,
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG
    )


if __name__ == "__main__":
    run()
