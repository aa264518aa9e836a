"""Data models for the resume builder."""

from resume_builder.models.auth import Session, User
from resume_builder.models.record import ResumeRecord
from resume_builder.models.resume import (
    PROFICIENCY_LEVELS,
    SOFT_SKILLS,
    TECHNICAL_SKILLS,
    CertificationEntry,
    EducationEntry,
    ExperienceEntry,
    LanguageEntry,
    PersonalInfo,
    Proficiency,
    ResumeDocument,
    SkillGroup,
)

__all__ = [
    "PROFICIENCY_LEVELS",
    "SOFT_SKILLS",
    "TECHNICAL_SKILLS",
    "CertificationEntry",
    "EducationEntry",
    "ExperienceEntry",
    "LanguageEntry",
    "PersonalInfo",
    "Proficiency",
    "ResumeDocument",
    "ResumeRecord",
    "Session",
    "SkillGroup",
    "User",
]
