"""Asynchronous PDF export with in-progress / success / failure reporting."""

from __future__ import annotations

import asyncio
import enum
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

from resume_builder.export.pdf_renderer import ExportOptions, render_pdf

logger = logging.getLogger(__name__)

LOADING_MESSAGE = "Generating PDF..."
SUCCESS_MESSAGE = "Resume exported successfully!"
FAILURE_MESSAGE = "Failed to export resume"
MISSING_TARGET_MESSAGE = "Preview element not found"


class ExportStatus(str, enum.Enum):
    IN_PROGRESS = "in_progress"
    SUCCESS = "success"
    FAILURE = "failure"


@dataclass
class ExportResult:
    status: ExportStatus
    message: str
    filename: str | None = None
    data: bytes | None = None

    @property
    def ok(self) -> bool:
        return self.status is ExportStatus.SUCCESS


StatusCallback = Callable[[ExportStatus, str], None]


def export_filename(now: float | None = None) -> str:
    """``resume-<epoch milliseconds>.pdf``."""
    if now is None:
        now = time.time()
    return f"resume-{int(now * 1000)}.pdf"


async def export_resume(
    html: str | None,
    on_status: StatusCallback | None = None,
    options: ExportOptions | None = None,
) -> ExportResult:
    """Render the preview page to a PDF file payload.

    Never raises: every outcome is reported through ``on_status`` and the
    returned ``ExportResult``.
    """

    def _report(status: ExportStatus, message: str) -> None:
        if on_status is None:
            return
        try:
            on_status(status, message)
        except Exception:
            logger.exception("Export status callback failed")

    if not html or not html.strip():
        _report(ExportStatus.FAILURE, MISSING_TARGET_MESSAGE)
        return ExportResult(status=ExportStatus.FAILURE, message=MISSING_TARGET_MESSAGE)

    filename = export_filename()
    _report(ExportStatus.IN_PROGRESS, LOADING_MESSAGE)
    try:
        data = await asyncio.to_thread(render_pdf, html, options)
    except Exception:
        logger.exception("PDF export failed")
        _report(ExportStatus.FAILURE, FAILURE_MESSAGE)
        return ExportResult(status=ExportStatus.FAILURE, message=FAILURE_MESSAGE)

    _report(ExportStatus.SUCCESS, SUCCESS_MESSAGE)
    return ExportResult(
        status=ExportStatus.SUCCESS,
        message=SUCCESS_MESSAGE,
        filename=filename,
        data=data,
    )
