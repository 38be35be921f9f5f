"""
Параметры запуска DumpIt: схема на Pydantic и чтение из YAML/JSON.

Источники по возрастанию приоритета: значения по умолчанию модели,
файл конфигурации, явные переопределения (опции CLI).
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Callable, Dict, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, HttpUrl

DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; DumpIt/0.1)"


class ScraperConfig(BaseModel):
    """Конфигурация для одного запуска выгрузки сайта."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    url: HttpUrl = Field(..., description="URL сайта или sitemap.xml.")
    concurrency: int = Field(10, gt=0, description="Максимум одновременных HTTP-запросов.")
    timeout: float = Field(30.0, gt=0, description="Таймаут на один запрос (секунд).")
    output: Path = Field(Path("output/scraped.json"), description="Путь к итоговому JSON.")
    max_depth: int = Field(3, ge=0, description="Глубина обхода ссылок, если sitemap не найден.")
    max_pages: int = Field(1000, ge=1, description="Предел числа URL, собираемых обходом.")
    user_agent: str = Field(DEFAULT_USER_AGENT, min_length=1, description="Заголовок User-Agent.")

    @property
    def seed_url(self) -> str:
        return str(self.url)

    @property
    def images_dir(self) -> Path:
        """Картинки складываются рядом с отчётом, в подкаталог images."""
        return self.output.parent / "images"


_DEFAULT_CFG = Path("configs/default.yaml")

_PARSERS: Dict[str, tuple[str, Callable[[str], Any], type[Exception]]] = {
    ".yaml": ("YAML", yaml.safe_load, yaml.YAMLError),
    ".yml": ("YAML", yaml.safe_load, yaml.YAMLError),
    ".json": ("JSON", json.loads, json.JSONDecodeError),
}


def _parse(path: Path) -> Dict[str, Any]:
    suffix = path.suffix.lower()
    if suffix not in _PARSERS:
        raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")
    kind, parse, error = _PARSERS[suffix]
    try:
        data = parse(path.read_text(encoding="utf-8")) or {}
    except error as exc:
        raise ValueError(f"Неправильный {kind} в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень {kind} должен быть mapping, получено {type(data).__name__}")
    return data


def read_config_file(path: Union[str, Path, None]) -> Dict[str, Any]:
    """
    Читает YAML или JSON в словарь без валидации.
    Без явного пути пробует configs/default.yaml, а при его отсутствии
    возвращает пустой словарь.
    """
    if path is None:
        return _parse(_DEFAULT_CFG) if _DEFAULT_CFG.is_file() else {}

    path_obj = Path(path).expanduser().resolve()
    if not path_obj.is_file():
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))
    return _parse(path_obj)


def load_config(path: Union[str, Path, None] = None, **overrides: Any) -> ScraperConfig:
    """
    Читает YAML или JSON, накладывает переопределения (значения None
    игнорируются) и возвращает проверенный объект ScraperConfig.
    """
    data = read_config_file(path)
    data.update({k: v for k, v in overrides.items() if v is not None})
    return ScraperConfig(**data)
