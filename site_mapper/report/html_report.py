"""site_mapper.report.html_report: Генерация HTML-отчёта с помощью Jinja2."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional, Union

from jinja2 import Environment, FileSystemLoader, select_autoescape

from site_mapper.crawler.models import CrawlResult

#: шаблоны, поставляемые вместе с пакетом
DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"
TEMPLATE_NAME = "sitemap.html.j2"


def render_html(
    result: CrawlResult,
    output_path: Union[Path, str],
    template_dir: Optional[Union[Path, str]] = None,
) -> Path:
    """Рендерит HTML-карту сайта из шаблона и сохраняет её по указанному пути.

    Args:
        result: объект CrawlResult.
        output_path: путь к итоговому HTML-файлу.
        template_dir: директория с Jinja2-шаблонами (по умолчанию встроенная).

    Returns:
        Path до сохранённого HTML-файла.
    """
    template_dir = Path(template_dir) if template_dir else DEFAULT_TEMPLATE_DIR
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    env = Environment(
        loader=FileSystemLoader(str(template_dir)),
        autoescape=select_autoescape(["html", "xml", "j2"]),
    )
    template = env.get_template(TEMPLATE_NAME)

    context: dict[str, Any] = {
        "root": result.root,
        # плоский список (глубина, страница) в порядке обхода
        "pages": list(result.root.walk()),
        "claimed": result.claimed,
        "elapsed": result.elapsed,
    }

    html_content = template.render(**context)
    output_path.write_text(html_content, encoding="utf-8")

    return output_path
