# File: dump_it/parser/sitemap_parser.py
"""dump_it.parser.sitemap_parser: Разбор sitemap.xml и рекурсивное раскрытие sitemap-индексов."""

from __future__ import annotations

import logging
from typing import Iterator, List, Optional, Set, Union

from lxml import etree

from dump_it.crawler.fetcher import Fetcher
from dump_it.errors import NetworkFailure, ParseFailure, ResolveFailed

__all__ = ["looks_like_sitemap", "parse_sitemap", "SitemapResolver"]

_SITEMAP_MARKERS = ("<urlset", "<sitemapindex")


def looks_like_sitemap(body: str) -> bool:
    """Эвристика по подстроке, без проверки схемы."""
    return any(marker in body for marker in _SITEMAP_MARKERS)


def parse_sitemap(xml_content: Union[str, bytes]) -> List[str]:
    """Значения всех <loc> (urlset и sitemapindex) в порядке документа, без пробелов по краям.

    Байты передаются lxml как есть, чтобы действовала кодировка из XML-декларации.

    Raises:
        ParseFailure: если даже recover-парсер не построил дерево.
    """
    parser = etree.XMLParser(ns_clean=True, recover=True, resolve_entities=False)
    try:
        raw = xml_content if isinstance(xml_content, bytes) else xml_content.encode("utf-8")
        root = etree.fromstring(raw, parser=parser)
    except etree.XMLSyntaxError as exc:
        raise ParseFailure(str(exc)) from exc
    if root is None:
        raise ParseFailure("empty or unparseable sitemap")
    locs = root.findall(".//{*}loc")
    return [loc.text.strip() for loc in locs if loc.text and loc.text.strip()]


class SitemapResolver:
    """
    Превращает sitemap (или sitemap-индекс) в плоский список URL страниц.

    Вложенные sitemap раскрываются через явный стек, а не рекурсией;
    каждый sitemap URL загружается не больше одного раза за вызов,
    так что самоссылающиеся индексы не зацикливаются.
    """

    def __init__(self, fetcher: Fetcher) -> None:
        self.fetcher = fetcher
        self.logger = logging.getLogger("DumpIt")

    async def resolve(self, url: str) -> List[str]:
        """
        Возвращает URL страниц из sitemap по адресу *url*.

        Если тело не похоже на sitemap, возвращает ``[url]``.
        Ошибка загрузки или разбора корневого sitemap -> ResolveFailed.
        """
        try:
            locations = await self._read(url)
        except (NetworkFailure, ParseFailure) as exc:
            raise ResolveFailed(f"{url}: {exc}") from exc
        if locations is None:
            return [url]

        urls: List[str] = []
        seen: Set[str] = {url}
        stack: List[Iterator[str]] = [iter(locations)]
        while stack:
            loc = next(stack[-1], None)
            if loc is None:
                stack.pop()
                continue
            if not loc.endswith(".xml"):
                urls.append(loc)
                continue
            if loc in seen:
                self.logger.debug("Sitemap %s already resolved, skipping", loc)
                continue
            seen.add(loc)
            try:
                sub = await self._read(loc)
            except (NetworkFailure, ParseFailure) as exc:
                self.logger.warning("Skipping sub-sitemap %s: %s", loc, exc)
                continue
            if sub is None:
                urls.append(loc)
            else:
                stack.append(iter(sub))
        return urls

    async def _read(self, url: str) -> Optional[List[str]]:
        """<loc> из sitemap или None, если документ не sitemap."""
        response = await self.fetcher.fetch_ok(url)
        if not looks_like_sitemap(response.text):
            return None
        return parse_sitemap(response.body)
