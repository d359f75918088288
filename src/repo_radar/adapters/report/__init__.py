"""Report generators."""

from repo_radar.adapters.report.markdown_report import MarkdownReportGenerator

__all__ = ["MarkdownReportGenerator"]
