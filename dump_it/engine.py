# File: dump_it/engine.py
"""dump_it.engine: Оркестрация: поиск URL (sitemap или обход), выгрузка страниц, агрегация."""

from __future__ import annotations

from pathlib import Path
from typing import List
from urllib.parse import urlparse, urlunparse

from dump_it.aggregator import ScrapeResult, aggregate_results
from dump_it.config import ScraperConfig
from dump_it.crawler.crawler import Crawler
from dump_it.crawler.fetcher import FetchGate, Fetcher, open_session
from dump_it.errors import ResolveFailed
from dump_it.images import ImagePipeline
from dump_it.logger import logger
from dump_it.parser.content import ContentExtractor
from dump_it.parser.sitemap_parser import SitemapResolver
from dump_it.scraper import PageScraper, scrape_all

__all__ = ["Engine", "start_scrape", "root_sitemap_url", "is_sitemap_url"]


def is_sitemap_url(url: str) -> bool:
    """URL, который пользователь явно указал как sitemap."""
    return "sitemap" in url or url.endswith(".xml")


def root_sitemap_url(url: str) -> str:
    parsed = urlparse(url)
    return urlunparse((parsed.scheme, parsed.netloc, "/sitemap.xml", "", "", ""))


class Engine:
    """Фасад для CLI и тестов: один запуск выгрузки по конфигурации."""

    def __init__(self, config: ScraperConfig, fetcher: Fetcher) -> None:
        self.config = config
        self.fetcher = fetcher

    async def discover_urls(self) -> List[str]:
        """
        Список URL для выгрузки.

        Явный sitemap раскрывается как есть. Иначе пробуем /sitemap.xml
        и принимаем его, только если в нём больше одного URL; во всех
        остальных случаях обходим сайт по ссылкам.
        """
        url = self.config.seed_url
        resolver = SitemapResolver(self.fetcher)

        if is_sitemap_url(url):
            logger.info("Parsing sitemap %s", url)
            try:
                return await resolver.resolve(url)
            except ResolveFailed as exc:
                logger.warning("Sitemap unavailable (%s), starting crawler...", exc)
                return await self.crawl()

        sitemap_url = root_sitemap_url(url)
        logger.info("Looking for sitemap at: %s", sitemap_url)
        try:
            urls = await resolver.resolve(sitemap_url)
        except ResolveFailed as exc:
            logger.debug("No sitemap: %s", exc)
            urls = []
        if len(urls) > 1:
            logger.info("Found sitemap with %d URLs", len(urls))
            return urls

        logger.info("No sitemap found, starting crawler...")
        return await self.crawl()

    async def crawl(self) -> List[str]:
        crawler = Crawler(self.fetcher, self.config.max_depth, self.config.max_pages)
        return await crawler.crawl(self.config.seed_url)

    async def scrape(self, urls: List[str], images_dir: Path) -> ScrapeResult:
        images = ImagePipeline(self.fetcher, images_dir)
        scraper = PageScraper(self.fetcher, ContentExtractor(images))
        pages = await scrape_all(urls, scraper, self.config.concurrency)
        return aggregate_results(pages)

    async def run(self) -> ScrapeResult:
        urls = await self.discover_urls()
        logger.info("Found %d URLs to scrape", len(urls))
        images_dir = prepare_output(self.config)
        return await self.scrape(urls, images_dir)


def prepare_output(config: ScraperConfig) -> Path:
    """Создаёт каталог отчёта и подкаталог для картинок."""
    config.output.parent.mkdir(parents=True, exist_ok=True)
    config.images_dir.mkdir(parents=True, exist_ok=True)
    return config.images_dir


async def start_scrape(config: ScraperConfig) -> ScrapeResult:
    """Открывает HTTP-сессию, выполняет полный прогон и возвращает результат."""
    logger.info("Starting scraper: %s (concurrency %d)", config.seed_url, config.concurrency)
    gate = FetchGate(config.concurrency)
    async with open_session(config) as session:
        try:
            return await Engine(config, Fetcher(session, gate)).run()
        finally:
            gate.close()
