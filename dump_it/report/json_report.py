# dump_it/report/json_report.py

"""
Запись итогового JSON-отчёта DumpIt.
"""
from pathlib import Path

from dump_it.aggregator import ScrapeResult


def render_json(result: ScrapeResult, output_path: Path | str) -> Path:
    """
    Сохраняет result в UTF-8 с отступом 2; недостающие каталоги создаются.

    :return: Path записанного файла
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(result.json(pretty=True) + "\n", encoding="utf-8")
    return output
