# File: dump_it/models.py
"""dump_it.models: Структурированное представление содержимого страницы.

Блоки контента образуют закрытый набор вариантов; каждый сериализуется
в словарь с дискриминатором ``type``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Tuple, Union

__all__ = [
    "FormField",
    "HeadingBlock",
    "ParagraphBlock",
    "ListBlock",
    "ImageBlock",
    "FormBlock",
    "ContentBlock",
    "PageRecord",
    "count_words",
]


@dataclass(slots=True, frozen=True)
class FormField:
    """Поле формы: input, textarea или select."""

    field_type: str
    name: str = ""
    label: str = ""
    placeholder: str = ""
    required: bool = False
    options: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "field_type": self.field_type,
            "name": self.name,
            "label": self.label,
            "placeholder": self.placeholder,
            "required": self.required,
            "options": list(self.options),
        }


@dataclass(slots=True, frozen=True)
class HeadingBlock:
    type: ClassVar[str] = "heading"

    level: int
    text: str

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "level": self.level, "text": self.text}


@dataclass(slots=True, frozen=True)
class ParagraphBlock:
    type: ClassVar[str] = "paragraph"

    text: str

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "text": self.text}


@dataclass(slots=True, frozen=True)
class ListBlock:
    type: ClassVar[str] = "list"

    items: Tuple[str, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "items": list(self.items)}


@dataclass(slots=True, frozen=True)
class ImageBlock:
    """Картинка, сохранённая локально под именем из хеша URL."""

    type: ClassVar[str] = "image"

    original_url: str
    local_path: str
    alt_text: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "original_url": self.original_url,
            "local_path": self.local_path,
            "alt_text": self.alt_text,
        }


@dataclass(slots=True, frozen=True)
class FormBlock:
    type: ClassVar[str] = "form"

    action: str
    method: str
    fields: Tuple[FormField, ...] = ()
    submit_text: str = "Submit"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "action": self.action,
            "method": self.method,
            "fields": [f.to_dict() for f in self.fields],
            "submit_text": self.submit_text,
        }


ContentBlock = Union[HeadingBlock, ParagraphBlock, ListBlock, ImageBlock, FormBlock]


def count_words(blocks: Tuple[ContentBlock, ...]) -> int:
    """Число слов в заголовках, абзацах и пунктах списков; картинки и формы не считаются."""
    total = 0
    for block in blocks:
        if isinstance(block, (HeadingBlock, ParagraphBlock)):
            total += len(block.text.split())
        elif isinstance(block, ListBlock):
            total += sum(len(item.split()) for item in block.items)
    return total


@dataclass(slots=True, frozen=True)
class PageRecord:
    """Результат выгрузки одной страницы."""

    url: str
    title: str
    meta_title: str
    meta_description: str
    content_blocks: Tuple[ContentBlock, ...] = field(default_factory=tuple)
    total_words: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "url": self.url,
            "title": self.title,
            "meta_title": self.meta_title,
            "meta_description": self.meta_description,
            "content_blocks": [b.to_dict() for b in self.content_blocks],
            "total_words": self.total_words,
        }
