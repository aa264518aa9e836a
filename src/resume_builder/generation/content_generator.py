"""Content generation for resume fragments (summary, descriptions, skills, achievements)."""

from __future__ import annotations

import logging
import re

from resume_builder.clients.llm_client import DEFAULT_MODEL, LLMClient

logger = logging.getLogger(__name__)

GENERIC_FAILURE = "Failed to generate content. Please try again."

_BULLET_RE = re.compile(r"^[•\-*]\s*")


class GenerationError(Exception):
    """Raised when content generation fails. The message is safe to show to users."""


class GenerationValidationError(GenerationError):
    """Raised before any network call when the required input is missing."""


SUMMARY_PROMPT = """\
Create a professional summary for a resume based on the following experience and skills:

Experience:
{experience}

Skills:
{skills}

Write a concise, powerful professional summary that highlights key achievements and skills. \
Keep it under 3 sentences. Focus on strengths and potential."""

DESCRIPTION_PROMPT = """\
Improve the following job description to be more impactful and professional:

{description}

Guidelines:
1. Use strong action verbs
2. Include specific, quantifiable achievements
3. Highlight key responsibilities
4. Keep it concise and professional
5. Focus on results and impact"""

SKILLS_PROMPT = """\
Based on the following professional experience, suggest relevant technical and soft skills:

{experience}

Guidelines:
1. Include both technical and soft skills
2. Be specific and relevant to the industry
3. Focus on in-demand skills
4. Include both hard and soft skills
5. Return only a comma-separated list of skills, no other text"""

ACHIEVEMENTS_PROMPT = """\
Based on the following job description, generate 3 specific, quantifiable achievements:

{description}

Guidelines:
1. Start each achievement with a strong action verb
2. Include specific numbers and metrics where possible
3. Focus on results and impact
4. Make them measurable and concrete
5. Format as bullet points"""


def parse_skill_list(text: str) -> list[str]:
    """Split a comma-separated response into trimmed, non-empty skills."""
    return [skill.strip() for skill in text.split(",") if skill.strip()]


def parse_achievement_lines(text: str) -> list[str]:
    """Split a bulleted response into achievement lines.

    Lines are trimmed, blank lines dropped, and one leading bullet marker
    (``•``, ``-`` or ``*``) removed. Order is preserved.
    """
    lines = []
    for line in text.split("\n"):
        line = line.strip()
        if not line:
            continue
        line = _BULLET_RE.sub("", line, count=1)
        if line:
            lines.append(line)
    return lines


class ContentGenerator:
    """Builds prompts from document fragments and normalizes model output."""

    def __init__(
        self,
        llm: LLMClient,
        model: str = DEFAULT_MODEL,
        *,
        temperature: float = 0.7,
        max_tokens: int = 1024,
    ):
        self.llm = llm
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens

    async def generate_summary(self, experience_text: str, skills: list[str]) -> str:
        if not experience_text and not skills:
            raise GenerationValidationError("Please add some experience or skills first")
        prompt = SUMMARY_PROMPT.format(
            experience=experience_text or "No experience provided",
            skills=", ".join(skills) if skills else "No skills provided",
        )
        return await self._generate("summary", prompt)

    async def improve_description(self, text: str) -> str:
        if not text:
            raise GenerationValidationError("Please provide a description to improve")
        return await self._generate("description", DESCRIPTION_PROMPT.format(description=text))

    async def suggest_skills(self, experience_text: str) -> list[str]:
        if not experience_text:
            raise GenerationValidationError("Please add some experience first")
        result = await self._generate("skills", SKILLS_PROMPT.format(experience=experience_text))
        return parse_skill_list(result)

    async def generate_achievements(self, description_text: str) -> list[str]:
        if not description_text:
            raise GenerationValidationError("Please provide a job description first")
        result = await self._generate(
            "achievements", ACHIEVEMENTS_PROMPT.format(description=description_text)
        )
        return parse_achievement_lines(result)

    async def _generate(self, operation: str, prompt: str) -> str:
        """Call the model, hiding transport detail behind GenerationError."""
        try:
            response = await self.llm.generate(
                prompt=prompt,
                model=self.model,
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        except Exception as e:
            logger.exception("Content generation failed: operation=%s", operation)
            raise GenerationError(GENERIC_FAILURE) from e
        return response.text.strip()
