"""Preview rendering for resume documents."""
from resume_builder.preview.builder import (
    ResumePreview,
    build_preview,
    format_date_range,
    format_month,
)
from resume_builder.preview.html import AVAILABLE_THEMES, render_html

__all__ = [
    "AVAILABLE_THEMES",
    "ResumePreview",
    "build_preview",
    "format_date_range",
    "format_month",
    "render_html",
]
