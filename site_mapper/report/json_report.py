# site_mapper/report/json_report.py

"""
Генерация JSON-отчёта для проекта SiteMapper.

Сериализация объекта CrawlResult в файл.
"""
import json
from pathlib import Path

from site_mapper.crawler.models import CrawlResult


def render_json(result: CrawlResult, output_path: Path | str, pretty: bool = True) -> Path:
    """
    Сохраняет результат обхода в формате JSON по указанному пути.

    :param result: объект CrawlResult с деревом страниц
    :param output_path: путь к JSON-файлу
    :param pretty: отступ 2 пробела вместо компактной записи
    :return: Path сохранённого файла

    Каждый уровень дерева даёт два вложенных контейнера, а модуль json
    ограничивает вложенность лимитом рекурсии: для цепочек глубже ~400
    страниц используйте текстовый или HTML-отчёт.

    Пример:
    ```python
    from site_mapper.report.json_report import render_json
    report_path = render_json(result, 'reports/sitemap.json')
    print(f"JSON report saved to: {report_path}")
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    with output.open('w', encoding='utf-8') as f:
        json.dump(result.to_dict(), f, ensure_ascii=False, indent=2 if pretty else None)

    return output
