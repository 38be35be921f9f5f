# File: dump_it/parser/content.py
"""dump_it.parser.content: Разбор DOM страницы в упорядоченные блоки контента.

Обход идёт по корню контента (``main``, ``article``, ``[role=main]`` или
``body``) в порядке документа. Элементы внутри навигации, шапки, подвала и
скриптов пропускаются. Картинки не превращаются в блоки сразу: их
кандидаты собираются и обрабатываются после обхода, поэтому блоки
изображений всегда идут после текстовых блоков.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional, Set, Tuple

from bs4 import BeautifulSoup
from bs4.element import Tag

from dump_it.models import (
    ContentBlock,
    FormBlock,
    FormField,
    HeadingBlock,
    ListBlock,
    ParagraphBlock,
)

if TYPE_CHECKING:
    from dump_it.images import ImagePipeline

__all__ = [
    "ImageCandidate",
    "ContentExtractor",
    "extract_blocks",
    "select_root",
    "excluded_elements",
    "extract_form",
]

ROOT_SELECTORS = ["main", "article", "[role=main]"]
EXCLUDED_TAGS = ["nav", "header", "footer", "script", "style", "noscript"]
HEADING_TAGS = ["h1", "h2", "h3", "h4", "h5", "h6"]
FIELD_TAGS = ["input", "textarea", "select"]
SKIPPED_FIELD_TYPES = frozenset({"hidden", "submit", "button"})
SUBMIT_SELECTOR = "button[type=submit], input[type=submit], button:not([type])"
DEFAULT_SUBMIT_TEXT = "Submit"

#: абзацы не длиннее этого числа символов считаются шумом
MIN_PARAGRAPH_LENGTH = 20

_WS_RE = re.compile(r"\s+")


@dataclass(slots=True, frozen=True)
class ImageCandidate:
    """Источники одного <img> в порядке приоритета и его alt."""

    sources: Tuple[str, ...]
    alt: str = ""


def _joined_text(tag: Tag) -> str:
    """Текстовые узлы через пробел, с обрезкой краёв."""
    return " ".join(tag.strings).strip()


def _normalized_text(tag: Tag) -> str:
    """Текст со схлопнутыми пробельными последовательностями."""
    return _WS_RE.sub(" ", " ".join(tag.strings)).strip()


def _attr(tag: Tag, name: str) -> Optional[str]:
    value = tag.get(name)
    if value is None:
        return None
    # bs4 отдаёт multi-valued атрибуты (class, rel) списком
    if isinstance(value, list):
        return " ".join(value)
    return value


def select_root(soup: BeautifulSoup) -> Tag:
    """Первый из main, article, [role=main]; иначе body; иначе весь документ."""
    for selector in ROOT_SELECTORS:
        found = soup.select_one(selector)
        if found is not None:
            return found
    return soup.body if soup.body is not None else soup


def excluded_elements(soup: BeautifulSoup) -> Set[int]:
    """id() всех элементов, у которых есть предок из EXCLUDED_TAGS.

    Считается одним проходом по документу вместо обхода предков для
    каждого элемента.
    """
    excluded: Set[int] = set()
    for container in soup.find_all(EXCLUDED_TAGS):
        if id(container) in excluded:
            continue
        for node in container.descendants:
            if isinstance(node, Tag):
                excluded.add(id(node))
    return excluded


def _label_for(field: Tag, soup: BeautifulSoup) -> str:
    field_id = _attr(field, "id")
    label = ""
    if field_id:
        for_label = soup.find("label", attrs={"for": field_id})
        if isinstance(for_label, Tag):
            label = _joined_text(for_label)
    if not label:
        wrapping = field.find_parent("label")
        if wrapping is not None:
            label = _joined_text(wrapping)
    return label


def _select_options(field: Tag) -> Tuple[str, ...]:
    options = (_joined_text(option) for option in field.find_all("option"))
    return tuple(text for text in options if text)


def _submit_text(form: Tag) -> str:
    button = form.select_one(SUBMIT_SELECTOR)
    if button is None:
        return DEFAULT_SUBMIT_TEXT
    if button.name == "input":
        text = (_attr(button, "value") or "").strip()
    else:
        text = _joined_text(button)
    return text or DEFAULT_SUBMIT_TEXT


def _default_type(control: Tag) -> str:
    # <input> без type по HTML считается текстовым полем
    return "text" if control.name == "input" else control.name


def extract_form(form: Tag, soup: BeautifulSoup) -> FormBlock:
    """Поля формы с подписями и текст кнопки отправки.

    Скрытые поля и кнопки в список полей не попадают.
    """
    fields: List[FormField] = []
    for control in form.find_all(FIELD_TAGS):
        field_type = _attr(control, "type") or _default_type(control)
        if field_type in SKIPPED_FIELD_TYPES:
            continue
        fields.append(
            FormField(
                field_type=field_type,
                name=_attr(control, "name") or "",
                label=_label_for(control, soup),
                placeholder=_attr(control, "placeholder") or "",
                required=control.has_attr("required"),
                options=_select_options(control) if control.name == "select" else (),
            )
        )
    return FormBlock(
        action=_attr(form, "action") or "",
        method=(_attr(form, "method") or "get").upper(),
        fields=tuple(fields),
        submit_text=_submit_text(form),
    )


def _image_candidate(img: Tag) -> Optional[ImageCandidate]:
    sources: List[str] = []
    for name in ("src", "data-src"):
        value = (_attr(img, name) or "").strip()
        if value:
            sources.append(value)
    srcset = _attr(img, "srcset")
    if srcset:
        first = srcset.split(",", 1)[0].split()
        if first:
            sources.append(first[0])
    if not sources:
        return None
    return ImageCandidate(sources=tuple(sources), alt=_attr(img, "alt") or "")


def extract_blocks(soup: BeautifulSoup) -> Tuple[List[ContentBlock], List[ImageCandidate]]:
    """Синхронный обход DOM: текстовые и структурные блоки плюс кандидаты картинок."""
    root = select_root(soup)
    excluded = excluded_elements(soup)

    blocks: List[ContentBlock] = []
    images: List[ImageCandidate] = []
    seen_forms: Set[int] = set()

    for element in root.descendants:
        if not isinstance(element, Tag) or id(element) in excluded:
            continue
        tag = element.name

        if tag in HEADING_TAGS:
            text = _joined_text(element)
            if text:
                blocks.append(HeadingBlock(level=int(tag[1]), text=text))
        elif tag == "p":
            text = _normalized_text(element)
            if len(text) > MIN_PARAGRAPH_LENGTH:
                blocks.append(ParagraphBlock(text=text))
        elif tag in ("ul", "ol"):
            items = tuple(item for item in (_normalized_text(li) for li in element.find_all("li")) if item)
            if items:
                blocks.append(ListBlock(items=items))
        elif tag == "img":
            candidate = _image_candidate(element)
            if candidate is not None:
                images.append(candidate)
        elif tag == "form":
            if id(element) in seen_forms:
                continue
            seen_forms.add(id(element))
            blocks.append(extract_form(element, soup))

    return blocks, images


class ContentExtractor:
    """Блоки контента страницы, включая скачанные картинки."""

    def __init__(self, images: "ImagePipeline") -> None:
        self.images = images

    async def extract(self, soup: BeautifulSoup, page_url: str) -> List[ContentBlock]:
        blocks, candidates = extract_blocks(soup)
        blocks.extend(await self.images.process(candidates, page_url))
        return blocks
