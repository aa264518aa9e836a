"""PDF export module for resume-builder."""
from resume_builder.export.exporter import (
    ExportResult,
    ExportStatus,
    export_filename,
    export_resume,
)
from resume_builder.export.pdf_renderer import ExportOptions, render_pdf

__all__ = [
    "ExportOptions",
    "ExportResult",
    "ExportStatus",
    "export_filename",
    "export_resume",
    "render_pdf",
]
