# File: dump_it/aggregator.py
"""dump_it.aggregator: Итоговый результат выгрузки сайта."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List

from dump_it.models import PageRecord


@dataclass(slots=True)
class ScrapeResult:
    """Все успешно выгруженные страницы; total_pages всегда равен len(pages)."""

    pages: List[PageRecord] = field(default_factory=list)

    @property
    def total_pages(self) -> int:
        return len(self.pages)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_pages": self.total_pages,
            "pages": [page.to_dict() for page in self.pages],
        }

    def json(self, *, pretty: bool = False) -> str:
        """Возвращает JSON-представление результата."""
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=2 if pretty else None)


def aggregate_results(pages: Iterable[PageRecord]) -> ScrapeResult:
    """Собирает записи страниц в ScrapeResult."""
    return ScrapeResult(pages=list(pages))
