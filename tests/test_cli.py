"""Тесты для CLI (`dump_it.cli`) с использованием click.testing.CliRunner.
Проверяют команды `scrape`, `config`, `--version`, а также обработку ошибок.
"""
import importlib
import json

import pytest
from click.testing import CliRunner

from dump_it.aggregator import ScrapeResult
from dump_it.cli import cli
from dump_it.logger import init_logging
from dump_it.models import HeadingBlock, PageRecord

# `dump_it.cli` as an attribute is the re-exported click Group; fetch the module itself.
cli_module = importlib.import_module("dump_it.cli")


@pytest.fixture(autouse=True)
def reset_logging():
    """CliRunner подменяет stdout; после теста возвращаем обработчики на настоящий поток."""
    yield
    init_logging(level="WARNING")


@pytest.fixture(autouse=True)
def patch_start_scrape(monkeypatch):
    """Патчим start_scrape для возвращения фиктивных страниц без сети."""
    page = PageRecord(
        url="http://example.com/",
        title="Example",
        meta_title="Example",
        meta_description="",
        content_blocks=(HeadingBlock(level=1, text="Hello"),),
        total_words=1,
    )
    seen = []

    async def fake_scrape(cfg):
        seen.append(cfg)
        return ScrapeResult(pages=[page])

    monkeypatch.setattr(cli_module, "start_scrape", fake_scrape)
    return seen


def test_version_option():
    runner = CliRunner()
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "DumpIt" in result.output


def test_show_config(tmp_path, monkeypatch):
    cfg_file = tmp_path / "default.yaml"
    cfg_file.write_text("url: https://example.com\nmax_depth: 1\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    runner = CliRunner()
    result = runner.invoke(cli, ["--log-level", "WARNING", "--config", str(cfg_file), "config"])
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["url"] == "https://example.com/"
    assert data["max_depth"] == 1
    assert data["concurrency"] == 10


def test_scrape_writes_json(tmp_path, monkeypatch, patch_start_scrape):
    monkeypatch.chdir(tmp_path)
    out = tmp_path / "out" / "site.json"

    runner = CliRunner()
    result = runner.invoke(
        cli,
        ["--log-level", "WARNING", "scrape", "-u", "https://example.com", "-n", "3", "-d", "0", "-o", str(out)],
    )

    assert result.exit_code == 0, result.output
    assert "Done! Scraped 1 pages" in result.output
    assert f"Output saved to: {out}" in result.output
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["total_pages"] == 1
    assert data["pages"][0]["content_blocks"][0] == {"type": "heading", "level": 1, "text": "Hello"}

    [cfg] = patch_start_scrape
    assert cfg.concurrency == 3
    assert cfg.max_depth == 0
    assert cfg.output == out


def test_scrape_with_zero_pages_succeeds(tmp_path, monkeypatch):
    async def empty(cfg):
        return ScrapeResult(pages=[])

    monkeypatch.setattr(cli_module, "start_scrape", empty)
    out = tmp_path / "empty.json"

    runner = CliRunner()
    result = runner.invoke(cli, ["scrape", "--url", "https://example.com", "--output", str(out)])

    assert result.exit_code == 0
    assert "Done! Scraped 0 pages" in result.output
    assert json.loads(out.read_text(encoding="utf-8")) == {"total_pages": 0, "pages": []}


def test_scrape_config_file_with_override(tmp_path, patch_start_scrape):
    cfg_file = tmp_path / "config.json"
    cfg_file.write_text(json.dumps({"url": "https://example.com", "max_pages": 5}), encoding="utf-8")
    out = tmp_path / "r.json"

    runner = CliRunner()
    result = runner.invoke(cli, ["-c", str(cfg_file), "scrape", "-m", "7", "-o", str(out)])

    assert result.exit_code == 0
    assert patch_start_scrape[0].max_pages == 7


@pytest.mark.parametrize(
    "args",
    [
        ["scrape", "--url", "not a url"],
        ["scrape", "--url", "https://example.com", "--concurrency", "0"],
        ["scrape", "--url", "https://example.com", "--max-depth", "-1"],
    ],
)
def test_scrape_invalid_config(tmp_path, monkeypatch, args):
    monkeypatch.chdir(tmp_path)
    runner = CliRunner()
    result = runner.invoke(cli, args)
    assert result.exit_code == 1


def test_missing_url(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    runner = CliRunner()
    result = runner.invoke(cli, ["scrape"])
    assert result.exit_code == 1


def test_broken_config_file(tmp_path):
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text("- just\n- a list\n", encoding="utf-8")

    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(cfg_file), "config"])
    assert result.exit_code == 1
