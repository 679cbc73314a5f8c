"""Renders computed audit reports as Markdown or JSON."""

from __future__ import annotations

import json
from pathlib import Path
from typing import List

from jinja2 import Environment, FileSystemLoader

from .models import TemplateReport

_DEFAULT_TEMPLATES_DIR = Path(__file__).with_name("templates")


class ReportRenderer:
    """Formats a finished report without recomputing any of it."""

    def __init__(self, templates_dir: Path | None = None) -> None:
        self.templates_dir = templates_dir
        self._env = self._create_env(templates_dir)

    def render(self, report: TemplateReport, output_format: str = "markdown") -> str:
        if output_format == "json":
            return self.render_json(report)
        if output_format == "markdown":
            return self.render_markdown(report)
        raise ValueError(f"Unsupported output format: {output_format}")

    def render_markdown(self, report: TemplateReport) -> str:
        template = self._env.get_template("report.md.j2")
        payload = report.to_dict()
        return template.render(report=payload).rstrip() + "\n"

    @staticmethod
    def render_json(report: TemplateReport) -> str:
        return json.dumps(report.to_dict(), indent=2) + "\n"

    @staticmethod
    def _create_env(templates_dir: Path | None) -> Environment:
        directories: List[str] = []
        if templates_dir:
            directories.append(str(templates_dir))
        directories.append(str(_DEFAULT_TEMPLATES_DIR))
        loader = FileSystemLoader(directories)
        return Environment(loader=loader, autoescape=False, trim_blocks=True, lstrip_blocks=True)


__all__ = ["ReportRenderer"]
