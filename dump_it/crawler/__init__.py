"""dump_it.crawler: загрузка страниц через fetch gate и обход ссылок."""

from dump_it.crawler.crawler import CrawlState, Crawler
from dump_it.crawler.fetcher import FetchGate, Fetcher, open_session
from dump_it.crawler.models import FetchResponse

__all__ = ["CrawlState", "Crawler", "FetchGate", "Fetcher", "FetchResponse", "open_session"]
