# === FILE: dump_it/parser/html_parser.py ===
"""HTML parsing utilities for DumpIt.

Two small helpers used by the page scraper:

* :func:`parse_html`: bytes or text → :class:`~bs4.BeautifulSoup` tree
  (lxml backend, which always synthesises ``<html>``/``<body>``).
* :func:`extract_meta`: document title plus the Open Graph / standard
  ``<meta>`` title and description.

Content blocks are extracted separately, see :mod:`dump_it.parser.content`.
"""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Union

from bs4 import BeautifulSoup
from bs4.element import Tag

from dump_it.errors import ParseFailure

__all__: Sequence[str] = ("PageMeta", "parse_html", "extract_meta", "NO_TITLE")

NO_TITLE = "No title"


@dataclass(slots=True, frozen=True)
class PageMeta:
    """Title and meta information of an HTML page."""

    title: str
    meta_title: str
    meta_description: str


def parse_html(markup: Union[str, bytes]) -> BeautifulSoup:
    """Parse raw HTML; lxml is lenient, so failures here are rare."""
    try:
        return BeautifulSoup(markup, "lxml")
    except Exception as exc:  # pragma: no cover - parser-specific errors
        raise ParseFailure(str(exc)) from exc


def _content(tag: Tag) -> str:
    value = tag.get("content")
    return value.strip() if isinstance(value, str) else ""


def extract_meta(soup: BeautifulSoup) -> PageMeta:
    """Read ``<title>`` and ``<meta>`` tags.

    The first non-empty value wins per field, Open Graph (``property``)
    before standard (``name``) tags. ``meta_title`` falls back to the title.
    """
    title_tag = soup.find("title")
    title = title_tag.get_text().strip() if isinstance(title_tag, Tag) else NO_TITLE

    og_title = og_description = name_title = name_description = ""
    for meta in soup.find_all("meta"):
        if not isinstance(meta, Tag):
            continue
        prop = meta.get("property")
        name = meta.get("name")
        if prop == "og:title" and not og_title:
            og_title = _content(meta)
        elif prop == "og:description" and not og_description:
            og_description = _content(meta)
        if name == "title" and not name_title:
            name_title = _content(meta)
        elif name == "description" and not name_description:
            name_description = _content(meta)

    return PageMeta(
        title=title,
        meta_title=og_title or name_title or title,
        meta_description=og_description or name_description,
    )
