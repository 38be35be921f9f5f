# dump_it/crawler/fetcher.py
"""
Fetcher module: the fetch gate bounding in-flight HTTP requests and the
GET helper every network call goes through.
"""
from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from aiohttp import ClientError, ClientSession, ClientTimeout

from dump_it.config import ScraperConfig
from dump_it.crawler.models import FetchResponse
from dump_it.errors import GateClosed, NetworkFailure

__all__ = ("FetchGate", "Fetcher", "open_session")


class FetchGate:
    """Counting admission control: at most ``capacity`` requests in flight."""

    def __init__(self, capacity: int) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be > 0")
        self.capacity = capacity
        self._semaphore = asyncio.Semaphore(capacity)
        self._in_flight = 0
        self._closed = False

    @property
    def in_flight(self) -> int:
        return self._in_flight

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """New acquisitions fail with GateClosed; slots already held are unaffected."""
        self._closed = True

    @asynccontextmanager
    async def slot(self, url: str = "") -> AsyncIterator[None]:
        if self._closed:
            raise GateClosed(url)
        async with self._semaphore:
            if self._closed:
                raise GateClosed(url)
            self._in_flight += 1
            try:
                yield
            finally:
                self._in_flight -= 1


def open_session(config: ScraperConfig) -> ClientSession:
    """ClientSession with the configured timeout and User-Agent."""
    return ClientSession(
        timeout=ClientTimeout(total=config.timeout),
        headers={"User-Agent": config.user_agent},
        raise_for_status=False,
    )


class Fetcher:
    """Issues GET requests through a shared FetchGate."""

    def __init__(self, session: ClientSession, gate: FetchGate) -> None:
        self.session = session
        self.gate = gate
        self.logger = logging.getLogger("DumpIt")

    async def fetch(self, url: str) -> FetchResponse:
        """
        GET the URL while holding one gate slot.

        Returns the response whatever its status; raises NetworkFailure on
        timeout, connection error or a closed gate.
        """
        async with self.gate.slot(url):
            try:
                async with self.session.get(url) as resp:
                    body = await resp.read()
                    return FetchResponse(
                        url=str(resp.url),
                        status=resp.status,
                        headers=resp.headers.copy(),
                        body=body,
                    )
            except asyncio.TimeoutError as exc:
                raise NetworkFailure(url, "timeout") from exc
            except ClientError as exc:
                raise NetworkFailure(url, exc) from exc

    async def fetch_ok(self, url: str) -> FetchResponse:
        """Like fetch(), but a non-2xx status is also a NetworkFailure."""
        response = await self.fetch(url)
        if not response.ok:
            raise NetworkFailure(url, f"HTTP {response.status}")
        return response
