"""Pydantic models for the resume document being edited."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Proficiency = Literal["Native", "Fluent", "Advanced", "Intermediate", "Basic", ""]

PROFICIENCY_LEVELS: tuple[str, ...] = ("Native", "Fluent", "Advanced", "Intermediate", "Basic")

TECHNICAL_SKILLS = "Technical Skills"
SOFT_SKILLS = "Soft Skills"


class _DocumentModel(BaseModel):
    # camelCase on the wire, snake_case in Python
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PersonalInfo(_DocumentModel):
    name: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    summary: str = ""


class ExperienceEntry(_DocumentModel):
    company: str = ""
    position: str = ""
    start_date: str = ""  # ISO date or ""
    end_date: str = ""  # "" renders as "Present"
    description: str = ""
    achievements: list[str] = Field(default_factory=list)


class EducationEntry(_DocumentModel):
    school: str = ""
    degree: str = ""
    field: str = ""
    graduation_date: str = ""
    gpa: str = ""
    achievements: list[str] = Field(default_factory=list)


class SkillGroup(_DocumentModel):
    category: str
    items: list[str] = Field(default_factory=list)


class CertificationEntry(_DocumentModel):
    name: str = ""
    issuer: str = ""
    date: str = ""
    url: str = ""


class LanguageEntry(_DocumentModel):
    language: str = ""
    proficiency: Proficiency = ""


def _default_skill_groups() -> list[SkillGroup]:
    return [SkillGroup(category=TECHNICAL_SKILLS), SkillGroup(category=SOFT_SKILLS)]


class ResumeDocument(_DocumentModel):
    """One user's resume content.

    Every field is always present; an empty string or empty list means
    "unset".
    """

    personal_info: PersonalInfo = Field(default_factory=PersonalInfo)
    experience: list[ExperienceEntry] = Field(default_factory=list)
    education: list[EducationEntry] = Field(default_factory=list)
    skills: list[SkillGroup] = Field(default_factory=_default_skill_groups)
    certifications: list[CertificationEntry] = Field(default_factory=list)
    languages: list[LanguageEntry] = Field(default_factory=list)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)

    @classmethod
    def from_json(cls, data: str | bytes) -> ResumeDocument:
        return cls.model_validate_json(data)
