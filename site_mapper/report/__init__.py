"""site_mapper.report: генерация отчётов (текстовое дерево, JSON и HTML) для CLI и тестов."""

from __future__ import annotations

from site_mapper.report.html_report import render_html
from site_mapper.report.json_report import render_json
from site_mapper.report.text_report import render_tree

__all__ = ["render_tree", "render_json", "render_html"]
