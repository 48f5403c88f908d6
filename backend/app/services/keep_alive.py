"""Periodic self-ping that keeps an idle hosted instance awake."""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Optional

import httpx

logger = logging.getLogger(__name__)


class KeepAlive:
    """
    Ping a health URL every `interval` seconds until stopped.

    Any failure is logged and never raised; the next tick is the only retry.
    """

    def __init__(
        self,
        url: str,
        interval: float,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 30.0,
    ):
        self.url = url
        self.interval = interval
        self._client = client
        self._owns_client = client is None
        self._timeout = timeout
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def ping(self) -> Optional[int]:
        """Send one ping. Returns the status code, or None on failure."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        try:
            response = await self._client.get(self.url)
        except Exception as e:
            logger.warning(f"Keep-alive ping failed: {e!r}")
            return None
        logger.info(
            f"Keep-alive ping: {response.status_code} at "
            f"{datetime.now(timezone.utc).isoformat()}"
        )
        return response.status_code

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            await self.ping()

    def start(self) -> asyncio.Task:
        """Schedule the loop on the running event loop."""
        if not self.running:
            self._task = asyncio.get_running_loop().create_task(self._run())
            logger.info(f"Keep-alive activated: {self.url} every {self.interval:g}s")
        return self._task

    async def stop(self) -> None:
        """Cancel the loop and close the HTTP client if we created it."""
        if self._task is not None:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            except Exception:
                logger.exception("Keep-alive loop had stopped with an error")
            self._task = None
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None
