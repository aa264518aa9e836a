"""Stored resume record."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from resume_builder.models.resume import ResumeDocument


class ResumeRecord(BaseModel):
    id: str
    user_id: str
    title: str
    created_at: datetime
    updated_at: datetime | None = None
    document: ResumeDocument = Field(default_factory=ResumeDocument)
