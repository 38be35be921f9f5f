# dump_it/crawler/models.py
"""
Data models for the DumpIt fetch layer.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

_DEFAULT_CHARSET = "utf-8"


@dataclass(slots=True, frozen=True)
class FetchResponse:
    """Holds the final URL, status, headers and raw body of one GET request."""

    url: str
    status: int
    headers: Mapping[str, str] = field(default_factory=dict)
    body: bytes = b""

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    @property
    def charset(self) -> str:
        ctype = self.headers.get("Content-Type", "")
        for part in ctype.split(";")[1:]:
            key, _, value = part.strip().partition("=")
            if key.lower() == "charset" and value:
                return value.strip("\"'")
        return _DEFAULT_CHARSET

    @property
    def text(self) -> str:
        try:
            return self.body.decode(self.charset, errors="replace")
        except LookupError:
            return self.body.decode(_DEFAULT_CHARSET, errors="replace")
