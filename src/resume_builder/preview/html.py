"""Render the preview tree to themed HTML (used for the live preview and for export)."""

from __future__ import annotations

from pathlib import Path

from jinja2 import Environment, FileSystemLoader
from markupsafe import Markup

from resume_builder.preview.builder import ResumePreview

TEMPLATES_DIR = Path(__file__).parent / "templates"
CSS_THEMES_DIR = Path(__file__).parent / "css_themes"

AVAILABLE_THEMES = ("professional", "modern", "minimal")


def _format_margin(margin_in: float) -> str:
    return f"{margin_in:g}in"


def render_html(
    preview: ResumePreview,
    theme: str = "professional",
    title: str = "Resume",
    *,
    page_size: str = "letter",
    orientation: str = "portrait",
    margin_in: float = 1.0,
) -> str:
    """Render a preview tree into a standalone HTML page."""
    if theme not in AVAILABLE_THEMES:
        theme = "professional"
    css_path = CSS_THEMES_DIR / f"{theme}.css"
    css = css_path.read_text(encoding="utf-8") if css_path.exists() else ""
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=True,
    )
    template = env.get_template("resume.html")
    return template.render(
        title=title,
        css=Markup(css),
        preview=preview,
        page_size=page_size,
        orientation=orientation,
        margin=_format_margin(margin_in),
    )
