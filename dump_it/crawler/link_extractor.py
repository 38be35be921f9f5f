# dump_it/crawler/link_extractor.py
"""
Link extraction utilities for the DumpIt crawler.
"""
from __future__ import annotations

from typing import List, Optional
from urllib.parse import urldefrag, urljoin, urlparse

from bs4 import BeautifulSoup
from bs4.element import Tag


def extract_links(html: str, base_url: str) -> List[str]:
    """
    Extract absolute HTTP(S) links from <a href> tags.

    Relative targets are resolved against *base_url*, fragments are stripped.
    mailto:, tel:, javascript: and other schemes are dropped. Order follows
    the document; duplicates are kept.
    """
    soup = BeautifulSoup(html, "html.parser")
    links: List[str] = []
    for tag in soup.find_all("a", href=True):
        if not isinstance(tag, Tag):
            continue
        href_val = tag.get("href")
        if not isinstance(href_val, str):
            continue
        try:
            absolute = urljoin(base_url, href_val.strip())
        except ValueError:
            continue
        if urlparse(absolute).scheme not in ("http", "https"):
            continue
        clean = urldefrag(absolute).url
        if clean:
            links.append(clean)
    return links


def host_of(url: str) -> Optional[str]:
    """Hostname without port, lower-cased; None for unparseable URLs."""
    try:
        return urlparse(url).hostname
    except ValueError:
        return None


def same_host_links(html: str, base_url: str, host: str) -> List[str]:
    """Only the links whose host equals *host* exactly."""
    return [link for link in extract_links(html, base_url) if host_of(link) == host]
