# File: dump_it/report/__init__.py
"""dump_it.report: Запись итогового отчёта, используется CLI и тестами."""

from __future__ import annotations

from dump_it.report.json_report import render_json

__all__ = ["render_json"]
