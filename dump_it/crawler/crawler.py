# === FILE: dump_it/crawler/crawler.py ===
from __future__ import annotations

import logging
import time
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, List, Set, Tuple

from dump_it.crawler.fetcher import Fetcher
from dump_it.crawler.link_extractor import host_of, same_host_links
from dump_it.errors import NetworkFailure

__all__ = ("CrawlState", "Crawler")

#: как часто сообщать о прогрессе обхода
PROGRESS_EVERY = 10


@dataclass(slots=True)
class CrawlState:
    """Состояние обхода в ширину: посещённые URL, очередь и найденные страницы."""
    visited: Set[str] = field(default_factory=set)
    frontier: Deque[Tuple[str, int]] = field(default_factory=deque)
    discovered: List[str] = field(default_factory=list)

    def mark_visited(self, url: str) -> bool:
        """Атомарно добавляет URL; False, если он уже был."""
        if url in self.visited:
            return False
        self.visited.add(url)
        return True

    def enqueue(self, url: str, depth: int) -> bool:
        """Ставит URL в очередь, только если он ещё не посещён."""
        if not self.mark_visited(url):
            return False
        self.frontier.append((url, depth))
        return True


class Crawler:
    """
    Последовательный BFS-обход ссылок того же хоста.
    Используется, когда sitemap не найден.
    """

    def __init__(self, fetcher: Fetcher, max_depth: int, max_pages: int) -> None:
        if max_depth < 0:
            raise ValueError("max_depth must be >= 0")
        if max_pages < 1:
            raise ValueError("max_pages must be >= 1")
        self.fetcher = fetcher
        self.max_depth = max_depth
        self.max_pages = max_pages
        self.logger = logging.getLogger("DumpIt")

    async def crawl(self, seed: str) -> List[str]:
        host = host_of(seed)
        if not host:
            return [seed]

        self.logger.info("Crawling website (max depth: %d, max pages: %d)...", self.max_depth, self.max_pages)
        start = time.monotonic()
        state = CrawlState()
        state.enqueue(seed, 0)

        while state.frontier:
            url, depth = state.frontier.popleft()
            state.discovered.append(url)

            if len(state.discovered) >= self.max_pages:
                self.logger.warning("Reached max pages limit (%d)", self.max_pages)
                break

            if depth < self.max_depth:
                await self._expand(state, url, depth, host)

            if len(state.discovered) % PROGRESS_EVERY == 0:
                self.logger.info("Discovered %d pages so far...", len(state.discovered))

        duration = time.monotonic() - start
        self.logger.info("Crawl complete: found %d unique URLs in %.2f s", len(state.discovered), duration)
        return state.discovered

    async def _expand(self, state: CrawlState, url: str, depth: int, host: str) -> None:
        try:
            page = await self.fetcher.fetch_ok(url)
        except NetworkFailure as e:
            self.logger.debug("No links from %s: %s", url, e)
            return
        for link in same_host_links(page.text, url, host):
            state.enqueue(link, depth + 1)
