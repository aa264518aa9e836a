"""Shared test fixtures."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from resume_builder.clients.llm_client import LLMClient, LLMResponse
from resume_builder.generation.content_generator import ContentGenerator
from resume_builder.models.resume import (
    SOFT_SKILLS,
    TECHNICAL_SKILLS,
    CertificationEntry,
    EducationEntry,
    ExperienceEntry,
    LanguageEntry,
    PersonalInfo,
    ResumeDocument,
    SkillGroup,
)


@pytest.fixture
def empty_document() -> ResumeDocument:
    return ResumeDocument()


@pytest.fixture
def sample_document() -> ResumeDocument:
    return ResumeDocument(
        personal_info=PersonalInfo(
            name="Jordan Lee",
            email="jordan@example.com",
            phone="555-0100",
            location="Austin, TX",
            summary="",
        ),
        experience=[
            ExperienceEntry(
                company="Acme",
                position="Engineer",
                start_date="2021-03-01",
                end_date="",
                description="Built APIs",
                achievements=["Cut latency 40%"],
            ),
            ExperienceEntry(
                company="Globex",
                position="Intern",
                start_date="2019-06-01",
                end_date="2019-09-01",
                description="Wrote internal tools",
            ),
        ],
        education=[
            EducationEntry(
                school="State University",
                degree="BS",
                field="Computer Science",
                graduation_date="2020-05-15",
                gpa="3.8",
            ),
        ],
        skills=[
            SkillGroup(category=TECHNICAL_SKILLS, items=["Python"]),
            SkillGroup(category=SOFT_SKILLS, items=["Teamwork"]),
        ],
        certifications=[
            CertificationEntry(
                name="AWS Solutions Architect",
                issuer="Amazon",
                date="2022-01-10",
                url="https://example.com/cert",
            ),
        ],
        languages=[LanguageEntry(language="Spanish", proficiency="Fluent")],
    )


@pytest.fixture
def mock_llm_client() -> LLMClient:
    """Create a mock LLM client."""
    client = AsyncMock(spec=LLMClient)
    client.generate = AsyncMock(
        return_value=LLMResponse(text="Generated text", input_tokens=100, output_tokens=50)
    )
    return client


@pytest.fixture
def generator(mock_llm_client) -> ContentGenerator:
    return ContentGenerator(mock_llm_client)


@pytest.fixture
def strong_password() -> str:
    return "Tr0ub4dor&3-Horse-Battery!"
