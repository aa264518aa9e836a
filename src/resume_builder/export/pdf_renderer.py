from __future__ import annotations

import logging
from dataclasses import dataclass

from resume_builder.config import ExportConfig

logger = logging.getLogger(__name__)

CSS_PX_PER_INCH = 96


@dataclass(frozen=True)
class ExportOptions:
    """Page and image parameters for PDF export."""

    page_format: str = "letter"
    orientation: str = "portrait"
    margin_in: float = 1.0
    image_quality: float = 0.98
    scale: int = 2

    @classmethod
    def from_config(cls, config: ExportConfig) -> ExportOptions:
        return cls(
            page_format=config.page_format,
            orientation=config.orientation,
            margin_in=config.margin_in,
            image_quality=config.image_quality,
            scale=config.scale,
        )

    @property
    def dpi(self) -> int:
        return CSS_PX_PER_INCH * self.scale

    @property
    def jpeg_quality(self) -> int:
        return round(self.image_quality * 100)


def render_pdf(html: str, options: ExportOptions | None = None) -> bytes:
    """Convert a rendered preview page to PDF bytes."""
    return _html_to_pdf(html, options or ExportOptions())


def _html_to_pdf(html: str, options: ExportOptions) -> bytes:
    """Convert HTML string to PDF bytes using WeasyPrint, with fpdf2 fallback."""
    try:
        from weasyprint import HTML
        return HTML(string=html).write_pdf(
            dpi=options.dpi,
            jpeg_quality=options.jpeg_quality,
        )
    except (ImportError, OSError):
        logger.warning("WeasyPrint not available, using fpdf2 fallback")
        from resume_builder.export.pdf_fallback import html_to_pdf_fpdf2
        return html_to_pdf_fpdf2(
            html,
            page_format=options.page_format,
            orientation=options.orientation,
            margin_in=options.margin_in,
        )
