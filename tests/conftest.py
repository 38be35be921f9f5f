# File: tests/conftest.py
from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable

import pytest
import pytest_asyncio
from aiohttp import ClientSession, ClientTimeout, web

from dump_it.config import ScraperConfig
from dump_it.crawler.fetcher import FetchGate, Fetcher

ServeFn = Callable[[web.Application], Awaitable[str]]


@pytest_asyncio.fixture
async def serve(unused_tcp_port_factory) -> AsyncIterator[ServeFn]:
    """
    Фабрика тестовых серверов: ``base = await serve(app)``.
    Все запущенные приложения останавливаются после теста.
    """
    runners: list[web.AppRunner] = []

    async def _serve(app: web.Application) -> str:
        port = unused_tcp_port_factory()
        runner = web.AppRunner(app)
        await runner.setup()
        site = web.TCPSite(runner, "127.0.0.1", port)
        await site.start()
        runners.append(runner)
        return f"http://127.0.0.1:{port}"

    try:
        yield _serve
    finally:
        for runner in runners:
            await runner.cleanup()


@pytest_asyncio.fixture
async def session() -> AsyncIterator[ClientSession]:
    async with ClientSession(timeout=ClientTimeout(total=5)) as s:
        yield s


@pytest.fixture()
def gate() -> FetchGate:
    return FetchGate(4)


@pytest.fixture()
def fetcher(session: ClientSession, gate: FetchGate) -> Fetcher:
    return Fetcher(session, gate)


@pytest.fixture()
def basic_config(tmp_path) -> ScraperConfig:
    """
    Return a basic valid ScraperConfig writing into tmp_path.
    """
    return ScraperConfig(
        url="http://example.com",
        concurrency=4,
        timeout=2.0,
        output=tmp_path / "out" / "scraped.json",
        max_depth=1,
        max_pages=10,
        user_agent="TestAgent/1.0",
    )
