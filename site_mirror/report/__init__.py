"""site_mirror.report: JSON-манифест результатов зеркалирования."""

from site_mirror.report.json_report import render_json, summary_to_dict

__all__ = ["render_json", "summary_to_dict"]
