# File: dump_it/errors.py
"""dump_it.errors: Исключения, которыми обмениваются слои загрузки и разбора.

Все они поглощаются на уровне отдельной страницы или картинки; наружу
(в CLI) доходят только ошибки конфигурации и записи отчёта.
"""

from __future__ import annotations

__all__ = [
    "DumpItError",
    "NetworkFailure",
    "GateClosed",
    "ParseFailure",
    "ResolveFailed",
    "FilesystemFailure",
]


class DumpItError(Exception):
    """Базовый класс для ошибок DumpIt."""


class NetworkFailure(DumpItError):
    """Таймаут, ошибка соединения или неуспешный HTTP-статус."""

    def __init__(self, url: str, reason: object) -> None:
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason


class GateClosed(NetworkFailure):
    """Fetch gate закрыт, запрос не может получить слот."""

    def __init__(self, url: str = "") -> None:
        super().__init__(url, "fetch gate is closed")


class ParseFailure(DumpItError):
    """Документ не удалось разобрать даже в режиме recover."""


class ResolveFailed(DumpItError):
    """Sitemap не удалось загрузить или разобрать."""


class FilesystemFailure(DumpItError):
    """Не удалось записать файл изображения."""
