# File: tests/test_content.py
"""Тесты синхронного разбора DOM в блоки контента (без сети)."""
from __future__ import annotations

import pytest

from dump_it.models import FormBlock, FormField, HeadingBlock, ListBlock, ParagraphBlock
from dump_it.parser.content import extract_blocks, select_root
from dump_it.parser.html_parser import parse_html


def blocks_of(html: str):
    return extract_blocks(parse_html(html))[0]


def images_of(html: str):
    return extract_blocks(parse_html(html))[1]


def test_headings_and_paragraphs_in_document_order():
    html = """
    <html><body>
      <h1>Hello</h1>
      <p>This   is a paragraph
         longer than twenty chars.</p>
      <h3>  Section  </h3>
    </body></html>
    """
    assert blocks_of(html) == [
        HeadingBlock(level=1, text="Hello"),
        ParagraphBlock(text="This is a paragraph longer than twenty chars."),
        HeadingBlock(level=3, text="Section"),
    ]


@pytest.mark.parametrize(
    "length,kept",
    [(19, False), (20, False), (21, True)],
)
def test_paragraph_length_boundary(length, kept):
    text = "x" * length
    blocks = blocks_of(f"<body><p>{text}</p></body>")
    assert (blocks == [ParagraphBlock(text=text)]) is kept


def test_empty_heading_dropped():
    assert blocks_of("<body><h2>   </h2><h4><span></span></h4></body>") == []


def test_boilerplate_is_excluded():
    html = """
    <body>
      <header><h1>Site name</h1></header>
      <nav><ul><li>Home</li><li>About</li></ul></nav>
      <h2>Real content</h2>
      <footer><p>Copyright footer text that is long enough</p></footer>
      <noscript><p>Please enable JavaScript in your browser</p></noscript>
    </body>
    """
    assert blocks_of(html) == [HeadingBlock(level=2, text="Real content")]


def test_exclusion_checks_ancestors_outside_root():
    html = "<body><header><main><h1>Inside header</h1></main></header><h2>Other</h2></body>"
    assert blocks_of(html) == []


@pytest.mark.parametrize(
    "html,expected",
    [
        (
            "<body><p>outside paragraph, long enough</p>"
            "<article><h1>Article</h1></article><main><h1>Main</h1></main></body>",
            "Main",
        ),
        (
            "<body><h1>Body</h1><div role='main'><h1>Landmark</h1></div>"
            "<article><h1>Article</h1></article></body>",
            "Article",
        ),
        ("<body><h1>Body</h1><div role='main'><h1>Landmark</h1></div></body>", "Landmark"),
        ("<body><h1>Body</h1></body>", "Body"),
    ],
)
def test_root_selection_priority(html, expected):
    assert blocks_of(html) == [HeadingBlock(level=1, text=expected)]
    assert select_root(parse_html(html)) is not None


def test_lists_normalized_and_empty_items_dropped():
    html = """
    <body>
      <ul><li>  one
             two </li><li></li><li>three</li></ul>
      <ol><li>   </li></ol>
    </body>
    """
    assert blocks_of(html) == [ListBlock(items=("one two", "three"))]


def test_form_label_for_and_required():
    html = """
    <body>
      <form action="/subscribe" method="post">
        <label for="e">Email</label>
        <input id="e" required>
        <input type="hidden" name="csrf" value="x">
        <input type="submit" value="Send">
      </form>
    </body>
    """
    assert blocks_of(html) == [
        FormBlock(
            action="/subscribe",
            method="POST",
            fields=(
                FormField(field_type="text", name="", label="Email", placeholder="", required=True, options=()),
            ),
            submit_text="Send",
        )
    ]


def test_form_wrapped_label_select_and_textarea():
    html = """
    <body>
      <form>
        <label>Name <input type="text" name="name" placeholder="Your name"></label>
        <select name="color">
          <option value="">  </option>
          <option>Red</option>
          <option>Blue</option>
        </select>
        <textarea name="msg"></textarea>
        <button type="button">Reset</button>
      </form>
    </body>
    """
    [form] = blocks_of(html)
    assert isinstance(form, FormBlock)
    assert form.action == ""
    assert form.method == "GET"
    assert form.submit_text == "Submit"
    name, color, msg = form.fields
    assert name == FormField(field_type="text", name="name", label="Name", placeholder="Your name")
    assert color.field_type == "select"
    assert color.options == ("Red", "Blue")
    assert color.label == ""
    assert msg.field_type == "textarea"
    assert msg.options == ()


def test_label_for_wins_over_wrapping_label():
    html = """
    <body>
      <label for="q">Search the site</label>
      <form><label>Wrapper <input id="q" name="q"></label></form>
    </body>
    """
    [form] = blocks_of(html)
    assert form.fields[0].label == "Search the site"


@pytest.mark.parametrize(
    "controls,expected",
    [
        ("<button>Go now</button>", "Go now"),
        ('<button type="submit"> Order </button>', "Order"),
        ('<input type="submit" value="">', "Submit"),
        ('<button type="reset">Clear</button>', "Submit"),
        ("", "Submit"),
    ],
)
def test_submit_text(controls, expected):
    [form] = blocks_of(f"<body><form><input name='a'>{controls}</form></body>")
    assert form.submit_text == expected


def test_button_fields_are_not_listed():
    html = "<body><form><input type='button' value='x'><input type='email' name='e'></form></body>"
    [form] = blocks_of(html)
    assert [f.field_type for f in form.fields] == ["email"]


def test_form_in_nav_skipped_and_each_form_emitted_once():
    html = """
    <body>
      <nav><form><input name="q"></form></nav>
      <form id="one"><input name="a"></form>
      <form id="two"><input name="b"></form>
    </body>
    """
    forms = blocks_of(html)
    assert [f.fields[0].name for f in forms] == ["a", "b"]


def test_image_candidates_collected_not_emitted():
    html = """
    <body>
      <img src="/a.png" data-src="/b.png" srcset="/c.png 1x, /d.png 2x" alt="Alt">
      <h1>After image</h1>
      <nav><img src="/logo.png"></nav>
      <img alt="no source">
      <img data-src="/lazy.jpg">
    </body>
    """
    blocks, images = extract_blocks(parse_html(html))
    assert blocks == [HeadingBlock(level=1, text="After image")]
    assert [i.sources for i in images] == [("/a.png", "/b.png", "/c.png"), ("/lazy.jpg",)]
    assert images[0].alt == "Alt"
    assert images[1].alt == ""
