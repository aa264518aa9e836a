"""Tests for ContentGenerator: validation, prompts, parsing, error hiding."""

from __future__ import annotations

import pytest

from resume_builder.clients.llm_client import LLMResponse
from resume_builder.generation.content_generator import (
    GENERIC_FAILURE,
    ContentGenerator,
    GenerationError,
    GenerationValidationError,
    parse_achievement_lines,
    parse_skill_list,
)


def _respond(client, text: str) -> None:
    client.generate.return_value = LLMResponse(text=text, input_tokens=100, output_tokens=50)


class TestParsing:
    def test_skill_list(self):
        assert parse_skill_list("Python, REST APIs, , Teamwork") == ["Python", "REST APIs", "Teamwork"]

    def test_skill_list_empty(self):
        assert parse_skill_list("") == []

    def test_achievement_lines(self):
        text = "• Reduced costs 20%\n\n- Led a team of 5\n* Shipped v2\nPlain line"
        assert parse_achievement_lines(text) == [
            "Reduced costs 20%",
            "Led a team of 5",
            "Shipped v2",
            "Plain line",
        ]

    def test_achievement_strips_single_marker(self):
        assert parse_achievement_lines("- -5% churn") == ["-5% churn"]

    def test_achievement_whitespace_only(self):
        assert parse_achievement_lines("  \n\t\n") == []


class TestValidation:
    async def test_summary_needs_experience_or_skills(self, generator, mock_llm_client):
        with pytest.raises(GenerationValidationError, match="Please add some experience or skills first"):
            await generator.generate_summary("", [])
        mock_llm_client.generate.assert_not_called()

    async def test_description_required(self, generator, mock_llm_client):
        with pytest.raises(GenerationValidationError, match="Please provide a description to improve"):
            await generator.improve_description("")
        mock_llm_client.generate.assert_not_called()

    async def test_skills_need_experience(self, generator, mock_llm_client):
        with pytest.raises(GenerationValidationError, match="Please add some experience first"):
            await generator.suggest_skills("")
        mock_llm_client.generate.assert_not_called()

    async def test_achievements_need_description(self, generator, mock_llm_client):
        with pytest.raises(GenerationValidationError, match="Please provide a job description first"):
            await generator.generate_achievements("")
        mock_llm_client.generate.assert_not_called()


class TestGeneration:
    async def test_summary_with_skills_only(self, generator, mock_llm_client):
        _respond(mock_llm_client, "  A strong engineer.  ")
        result = await generator.generate_summary("", ["Python", "Teamwork"])
        assert result == "A strong engineer."
        prompt = mock_llm_client.generate.call_args.kwargs["prompt"]
        assert "No experience provided" in prompt
        assert "Python, Teamwork" in prompt

    async def test_summary_with_experience_only(self, generator, mock_llm_client):
        await generator.generate_summary("Engineer at Acme: Built APIs", [])
        prompt = mock_llm_client.generate.call_args.kwargs["prompt"]
        assert "Engineer at Acme: Built APIs" in prompt
        assert "No skills provided" in prompt

    async def test_improve_description(self, generator, mock_llm_client):
        _respond(mock_llm_client, "Designed and shipped REST APIs.\n")
        result = await generator.improve_description("Built APIs")
        assert result == "Designed and shipped REST APIs."
        assert "Built APIs" in mock_llm_client.generate.call_args.kwargs["prompt"]

    async def test_suggest_skills(self, generator, mock_llm_client):
        _respond(mock_llm_client, "Python, REST APIs, , Teamwork")
        assert await generator.suggest_skills("Engineer at Acme: Built APIs") == [
            "Python",
            "REST APIs",
            "Teamwork",
        ]

    async def test_generate_achievements(self, generator, mock_llm_client):
        _respond(mock_llm_client, "• One\n• Two\n• Three")
        assert await generator.generate_achievements("Built APIs") == ["One", "Two", "Three"]

    async def test_model_settings_passed(self, mock_llm_client):
        gen = ContentGenerator(mock_llm_client, model="m", temperature=0.2, max_tokens=99)
        await gen.improve_description("x")
        kwargs = mock_llm_client.generate.call_args.kwargs
        assert kwargs["model"] == "m"
        assert kwargs["temperature"] == 0.2
        assert kwargs["max_tokens"] == 99

    async def test_transport_error_wrapped(self, generator, mock_llm_client):
        mock_llm_client.generate.side_effect = ConnectionError("socket closed")
        with pytest.raises(GenerationError) as exc_info:
            await generator.improve_description("Built APIs")
        assert str(exc_info.value) == GENERIC_FAILURE
        assert not isinstance(exc_info.value, GenerationValidationError)
