"""Tests for the resume document models."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from resume_builder.models.resume import (
    SOFT_SKILLS,
    TECHNICAL_SKILLS,
    ExperienceEntry,
    LanguageEntry,
    ResumeDocument,
)


class TestResumeDocument:
    def test_empty_document_defaults(self):
        doc = ResumeDocument()
        assert doc.personal_info.name == ""
        assert doc.experience == []
        assert doc.education == []
        assert doc.certifications == []
        assert doc.languages == []
        assert [g.category for g in doc.skills] == [TECHNICAL_SKILLS, SOFT_SKILLS]
        assert all(g.items == [] for g in doc.skills)

    def test_default_skill_groups_not_shared(self):
        a = ResumeDocument()
        b = ResumeDocument()
        assert a.skills is not b.skills

    def test_to_json_uses_camel_case(self, sample_document):
        data = json.loads(sample_document.to_json())
        assert "personalInfo" in data
        assert data["experience"][0]["startDate"] == "2021-03-01"
        assert data["education"][0]["graduationDate"] == "2020-05-15"

    def test_from_json_restores_document(self, sample_document):
        restored = ResumeDocument.from_json(sample_document.to_json())
        assert restored == sample_document

    def test_accepts_snake_case_input(self):
        entry = ExperienceEntry(start_date="2020-01-01", end_date="")
        assert entry.start_date == "2020-01-01"

    def test_accepts_camel_case_input(self):
        entry = ExperienceEntry.model_validate({"startDate": "2020-01-01"})
        assert entry.start_date == "2020-01-01"


class TestLanguageEntry:
    def test_unset_proficiency(self):
        assert LanguageEntry(language="French").proficiency == ""

    def test_valid_proficiency(self):
        assert LanguageEntry(language="French", proficiency="Native").proficiency == "Native"

    def test_invalid_proficiency_rejected(self):
        with pytest.raises(ValidationError):
            LanguageEntry(language="French", proficiency="Expert")
