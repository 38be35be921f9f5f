# === FILE: dump_it/scraper.py ===
"""
Выгрузка одной страницы и параллельный прогон по списку URL.
"""
from __future__ import annotations

import asyncio
import logging
import time
from typing import Iterable, List, Optional

from dump_it.crawler.fetcher import Fetcher
from dump_it.errors import NetworkFailure, ParseFailure
from dump_it.models import FormBlock, ImageBlock, PageRecord, count_words
from dump_it.parser.content import ContentExtractor
from dump_it.parser.html_parser import extract_meta, parse_html

__all__ = ["PageScraper", "scrape_all"]


class PageScraper:
    """fetch → parse → title/meta → блоки контента → число слов."""

    def __init__(self, fetcher: Fetcher, extractor: ContentExtractor) -> None:
        self.fetcher = fetcher
        self.extractor = extractor
        self.logger = logging.getLogger("DumpIt")

    async def scrape(self, url: str) -> Optional[PageRecord]:
        """PageRecord или None, если страницу не удалось загрузить или разобрать."""
        try:
            response = await self.fetcher.fetch_ok(url)
            soup = parse_html(response.body)
        except (NetworkFailure, ParseFailure) as e:
            self.logger.warning("Failed to fetch %s: %s", url, e)
            return None

        meta = extract_meta(soup)
        blocks = tuple(await self.extractor.extract(soup, url))
        record = PageRecord(
            url=url,
            title=meta.title,
            meta_title=meta.meta_title,
            meta_description=meta.meta_description,
            content_blocks=blocks,
            total_words=count_words(blocks),
        )
        self.logger.info("Scraped: %s (%s)", url, _stats(record))
        return record


def _stats(record: PageRecord) -> str:
    images = sum(isinstance(b, ImageBlock) for b in record.content_blocks)
    forms = sum(isinstance(b, FormBlock) for b in record.content_blocks)
    stats = f"{len(record.content_blocks)} blocks, {record.total_words} words, {images} images"
    if forms:
        stats += f", {forms} forms"
    return stats


async def scrape_all(urls: Iterable[str], scraper: PageScraper, concurrency: int) -> List[PageRecord]:
    """
    Прогоняет PageScraper по всем URL силами ``concurrency`` воркеров.

    Записи собираются в порядке завершения, не в порядке входа.
    Неудачные страницы просто отсутствуют в результате.
    """
    logger = logging.getLogger("DumpIt")
    start = time.monotonic()
    queue: asyncio.Queue[str] = asyncio.Queue()
    for url in urls:
        queue.put_nowait(url)
    total = queue.qsize()
    results: List[PageRecord] = []

    async def _worker() -> None:
        while True:
            url = await queue.get()
            try:
                record = await scraper.scrape(url)
                if record is not None:
                    results.append(record)
            except Exception:
                logger.exception("Unexpected error while scraping %s", url)
            finally:
                queue.task_done()

    workers = [asyncio.create_task(_worker()) for _ in range(max(1, min(concurrency, total)))]
    try:
        await queue.join()
    finally:
        for w in workers:
            w.cancel()
        await asyncio.gather(*workers, return_exceptions=True)

    duration = time.monotonic() - start
    logger.info("Scraped %d/%d pages in %.2f s", len(results), total, duration)
    return results
