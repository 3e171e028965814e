# site_mirror/report/json_report.py

"""
Генерация JSON-манифеста для проекта SiteMirror.

Сериализация списка CrawlSummary в файл.
"""
import json
from pathlib import Path
from typing import Any, Dict, Iterable

from site_mirror.crawler.models import CrawlSummary


def summary_to_dict(summary: CrawlSummary) -> Dict[str, Any]:
    """Преобразует CrawlSummary в словарь, пригодный для json.dump."""
    return {
        'homepage': summary.homepage,
        'stored': {url: str(path) for url, path in summary.stored.items()},
        'skipped': list(summary.skipped),
        'failed': list(summary.failed),
        'links': {url: list(links) for url, links in summary.pages.items()},
    }


def render_json(summaries: Iterable[CrawlSummary], output_path: Path | str) -> Path:
    """
    Сохраняет манифест обхода в формате JSON по указанному пути.

    :param summaries: результаты обходов (по одному на домашнюю страницу)
    :param output_path: путь к JSON-файлу
    :return: Path сохранённого файла
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    data = {'crawls': [summary_to_dict(s) for s in summaries]}

    with output.open('w', encoding='utf-8') as f:
        json.dump(data, f, ensure_ascii=False, indent=2)

    return output
