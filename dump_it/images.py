# File: dump_it/images.py
"""dump_it.images: Скачивание картинок страницы с дедупликацией по хешу URL.

Имя файла зависит только от URL (первые 16 hex-символов SHA-256 плюс
расширение из пути), поэтому повторный запуск в тот же каталог не
скачивает уже сохранённые картинки заново.
"""

from __future__ import annotations

import hashlib
import logging
from pathlib import Path
from typing import Iterable, List, Optional, Set, Union
from urllib.parse import urljoin, urlparse

from dump_it.crawler.fetcher import Fetcher
from dump_it.errors import FilesystemFailure, NetworkFailure
from dump_it.models import ImageBlock
from dump_it.parser.content import ImageCandidate

__all__ = ["ImagePipeline", "image_filename", "is_tracking_url", "TRACKING_MARKERS", "MIN_IMAGE_BYTES"]

TRACKING_MARKERS = (
    "googletagmanager",
    "google-analytics",
    "facebook.com/tr",
    "doubleclick",
    "analytics",
    "tracking",
    "pixel",
    "beacon",
)
PLACEHOLDER_MARKERS = ("1x1", "placeholder")

#: всё, что меньше, считаем трекинг-пикселем
MIN_IMAGE_BYTES = 1024
DEFAULT_EXTENSION = "jpg"
MAX_EXTENSION_LEN = 10
HASH_PREFIX_LEN = 16


def is_tracking_url(url: str) -> bool:
    lower = url.lower()
    return any(marker in lower for marker in TRACKING_MARKERS)


def _extension(url: str) -> str:
    name = urlparse(url).path.rsplit("/", 1)[-1]
    if "." not in name:
        return DEFAULT_EXTENSION
    ext = name.rsplit(".", 1)[-1]
    if not ext.isalnum() or len(ext) > MAX_EXTENSION_LEN:
        return DEFAULT_EXTENSION
    return ext


def image_filename(url: str) -> str:
    """``<sha256(url)[:16]>.<ext>``; одинаковый URL всегда даёт одно имя."""
    digest = hashlib.sha256(url.encode("utf-8")).hexdigest()
    return f"{digest[:HASH_PREFIX_LEN]}.{_extension(url)}"


class ImagePipeline:
    """Превращает кандидатов <img> в блоки ImageBlock с локальными файлами."""

    def __init__(self, fetcher: Fetcher, output_dir: Union[str, Path]) -> None:
        self.fetcher = fetcher
        self.output_dir = Path(output_dir)
        self.logger = logging.getLogger("DumpIt")

    async def process(self, candidates: Iterable[ImageCandidate], page_url: str) -> List[ImageBlock]:
        """Блоки для всех картинок страницы, в порядке обнаружения."""
        seen: Set[str] = set()
        blocks: List[ImageBlock] = []
        for candidate in candidates:
            block = await self._process_one(candidate, page_url, seen)
            if block is not None:
                blocks.append(block)
        return blocks

    async def _process_one(self, candidate: ImageCandidate, page_url: str, seen: Set[str]) -> Optional[ImageBlock]:
        for src in candidate.sources:
            try:
                img_url = urljoin(page_url, src)
            except ValueError:
                continue
            if img_url.startswith("data:") or any(m in img_url for m in PLACEHOLDER_MARKERS) or img_url in seen:
                continue
            seen.add(img_url)

            if is_tracking_url(img_url):
                self.logger.debug("Skipping tracking image %s", img_url)
                return None

            local_path = await self.download(img_url)
            if local_path is not None:
                return ImageBlock(original_url=img_url, local_path=str(local_path), alt_text=candidate.alt)
        return None

    async def download(self, img_url: str) -> Optional[Path]:
        """
        Путь к локальной копии картинки или None.

        Уже существующий файл используется без запроса. Ответы меньше
        MIN_IMAGE_BYTES отбрасываются без записи.
        """
        path = self.output_dir / image_filename(img_url)
        try:
            if self._cached(path):
                return path
        except FilesystemFailure as e:
            self.logger.warning("%s", e)
            return None

        try:
            response = await self.fetcher.fetch_ok(img_url)
        except NetworkFailure as e:
            self.logger.debug("Image %s not fetched: %s", img_url, e)
            return None
        if len(response.body) < MIN_IMAGE_BYTES:
            self.logger.debug("Image %s too small (%d bytes)", img_url, len(response.body))
            return None

        try:
            self._write(path, response.body)
        except FilesystemFailure as e:
            self.logger.warning("%s", e)
            return None
        return path

    @staticmethod
    def _cached(path: Path) -> bool:
        try:
            return path.is_file()
        except OSError as exc:
            raise FilesystemFailure(f"Cannot check image {path}: {exc}") from exc

    @staticmethod
    def _write(path: Path, data: bytes) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as exc:
            raise FilesystemFailure(f"Cannot write image {path}: {exc}") from exc
