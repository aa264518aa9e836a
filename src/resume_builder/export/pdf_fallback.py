"""Fallback PDF renderer using fpdf2 (pure Python, no system deps)."""

from __future__ import annotations

import html
import logging
import re
from pathlib import Path

from fpdf import FPDF
from fpdf.enums import XPos, YPos

logger = logging.getLogger(__name__)

MM_PER_INCH = 25.4

# Unicode-capable font search paths (macOS, Linux, Windows)
_UNICODE_FONT_PATHS = [
    # macOS
    "/System/Library/Fonts/Supplemental/Arial Unicode.ttf",
    "/Library/Fonts/Arial Unicode.ttf",
    # Linux (apt install fonts-dejavu-core)
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/TTF/DejaVuSans.ttf",
    # Linux (apt install fonts-liberation)
    "/usr/share/fonts/truetype/liberation/LiberationSans-Regular.ttf",
    # Windows
    "C:/Windows/Fonts/arial.ttf",
]


def _find_unicode_font() -> str | None:
    """Search for a Unicode-capable TTF font on the system."""
    for path in _UNICODE_FONT_PATHS:
        if Path(path).exists() and path.endswith(".ttf"):
            return path
    return None


def html_to_pdf_fpdf2(
    html_content: str,
    page_format: str = "letter",
    orientation: str = "portrait",
    margin_in: float = 1.0,
) -> bytes:
    """Fallback PDF generation using fpdf2 when WeasyPrint is unavailable."""
    body_match = re.search(r"<body>(.*?)</body>", html_content, re.DOTALL)
    body = body_match.group(1) if body_match else html_content

    margin = margin_in * MM_PER_INCH
    pdf = FPDF(orientation=orientation, unit="mm", format=page_format)
    pdf.set_margins(margin, margin, margin)
    pdf.set_auto_page_break(auto=True, margin=margin)
    pdf.add_page()

    font_name = "Helvetica"
    unicode_font = _find_unicode_font()
    if unicode_font:
        try:
            pdf.add_font("UnicodeFont", "", unicode_font)
            font_name = "UnicodeFont"
        except Exception:
            logger.debug("Failed to load font %s", unicode_font)

    pdf.set_font(font_name, size=10)

    def _cell(height: float, text: str) -> None:
        pdf.multi_cell(0, height, text, new_x=XPos.LMARGIN, new_y=YPos.NEXT)

    lines = _parse_html_to_lines(body)
    for line_type, text in lines:
        safe_text = _safe_text(text, pdf)
        try:
            if line_type == "h1":
                pdf.set_font_size(18)
                _cell(10, safe_text)
                pdf.set_font_size(10)
            elif line_type == "h2":
                pdf.ln(3)
                pdf.set_font_size(13)
                _cell(8, safe_text)
                pdf.line(pdf.l_margin, pdf.get_y(), pdf.w - pdf.r_margin, pdf.get_y())
                pdf.ln(2)
                pdf.set_font_size(10)
            elif line_type == "h3":
                pdf.ln(2)
                pdf.set_font_size(11)
                _cell(7, safe_text)
                pdf.set_font_size(10)
            elif line_type == "bullet":
                _cell(6, f"  - {safe_text}")
            elif line_type == "text" and safe_text.strip():
                _cell(6, safe_text)
            elif line_type == "break":
                pdf.ln(2)
        except Exception:
            logger.debug("Failed to render line: %s %s", line_type, safe_text[:30])

    return bytes(pdf.output())


def _safe_text(text: str, pdf: FPDF) -> str:
    """Ensure text is encodable by the current font. Replace if needed."""
    if pdf.is_ttf_font:
        return text
    # Built-in fonts (Helvetica etc.) only cover latin-1
    try:
        text.encode("latin-1")
        return text
    except UnicodeEncodeError:
        return text.encode("latin-1", errors="replace").decode("latin-1")


def _parse_html_to_lines(body_html: str) -> list[tuple[str, str]]:
    """Parse simple HTML into (type, text) pairs."""
    lines: list[tuple[str, str]] = []
    parts = re.split(r"(</?(?:h[1-3]|p|li|ul|ol|br\s*/?)>)", body_html)
    current_tag = "text"
    for part in parts:
        part = part.strip()
        if not part:
            continue
        tag_match = re.match(r"<(/?)(h[1-3]|p|li|ul|ol|br\s*/?)>", part)
        if tag_match:
            closing = tag_match.group(1) == "/"
            tag = tag_match.group(2).rstrip("/").strip()
            if closing:
                if tag in ("ul", "ol"):
                    lines.append(("break", ""))
                current_tag = "text"
            else:
                if tag in ("h1", "h2", "h3"):
                    current_tag = tag
                elif tag == "li":
                    current_tag = "bullet"
                elif tag in ("br", "br /"):
                    lines.append(("break", ""))
                elif tag == "p":
                    current_tag = "text"
        else:
            text = _strip_html(part)
            if text:
                lines.append((current_tag, text))
    return lines


def _strip_html(text: str) -> str:
    """Remove HTML tags and decode entities."""
    text = re.sub(r"<[^>]+>", "", text)
    return html.unescape(text).strip()
