"""Pure document operations.

Every function takes the current ``ResumeDocument`` and returns the next one.
The input document is never modified. When an operation has nothing to do
(stale index, unknown skill category) the same document object is returned,
so callers can detect a no-op with ``is``.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Literal

from pydantic import BaseModel

from resume_builder.models.resume import (
    TECHNICAL_SKILLS,
    CertificationEntry,
    EducationEntry,
    ExperienceEntry,
    LanguageEntry,
    PersonalInfo,
    ResumeDocument,
    SkillGroup,
)

Section = Literal["experience", "education", "certifications", "languages"]
AchievementSection = Literal["experience", "education"]

SECTION_MODELS: dict[str, type[BaseModel]] = {
    "experience": ExperienceEntry,
    "education": EducationEntry,
    "certifications": CertificationEntry,
    "languages": LanguageEntry,
}


def _section_model(section: str) -> type[BaseModel]:
    try:
        return SECTION_MODELS[section]
    except KeyError:
        raise ValueError(f"Unknown section: {section!r}") from None


def _field_name(model: type[BaseModel], field: str) -> str:
    """Resolve a field given either its Python name or its camelCase alias."""
    if field in model.model_fields:
        return field
    for name, info in model.model_fields.items():
        if info.alias == field:
            return name
    raise ValueError(f"Unknown field for {model.__name__}: {field!r}")


def _in_range(items: list, index: int) -> bool:
    return 0 <= index < len(items)


# --- repeating sections ---


def add_entry(doc: ResumeDocument, section: Section) -> ResumeDocument:
    model = _section_model(section)
    entries = getattr(doc, section)
    return doc.model_copy(update={section: [*entries, model()]})


def update_entry(
    doc: ResumeDocument,
    section: Section,
    index: int,
    field: str,
    value: str | list[str],
) -> ResumeDocument:
    model = _section_model(section)
    name = _field_name(model, field)
    entries = getattr(doc, section)
    if not _in_range(entries, index):
        return doc
    updated = model.model_validate({**entries[index].model_dump(), name: value})
    new_entries = list(entries)
    new_entries[index] = updated
    return doc.model_copy(update={section: new_entries})


def remove_entry(doc: ResumeDocument, section: Section, index: int) -> ResumeDocument:
    _section_model(section)
    entries = getattr(doc, section)
    if not _in_range(entries, index):
        return doc
    return doc.model_copy(update={section: [e for i, e in enumerate(entries) if i != index]})


# --- achievements inside experience / education entries ---


def _update_achievements(doc, section, index, fn) -> ResumeDocument:
    if section not in ("experience", "education"):
        raise ValueError(f"Section has no achievements: {section!r}")
    entries = getattr(doc, section)
    if not _in_range(entries, index):
        return doc
    current = entries[index].achievements
    new_items = fn(current)
    if new_items is None:
        return doc
    return update_entry(doc, section, index, "achievements", new_items)


def add_achievement(doc: ResumeDocument, section: AchievementSection, index: int) -> ResumeDocument:
    return _update_achievements(doc, section, index, lambda items: [*items, ""])


def update_achievement(
    doc: ResumeDocument,
    section: AchievementSection,
    index: int,
    position: int,
    value: str,
) -> ResumeDocument:
    def _set(items):
        if not _in_range(items, position):
            return None
        return [value if i == position else item for i, item in enumerate(items)]

    return _update_achievements(doc, section, index, _set)


def remove_achievement(
    doc: ResumeDocument,
    section: AchievementSection,
    index: int,
    position: int,
) -> ResumeDocument:
    def _drop(items):
        if not _in_range(items, position):
            return None
        return [item for i, item in enumerate(items) if i != position]

    return _update_achievements(doc, section, index, _drop)


def replace_achievements(doc: ResumeDocument, index: int, items: Iterable[str]) -> ResumeDocument:
    """Replace an experience entry's achievement list wholesale."""
    return update_entry(doc, "experience", index, "achievements", list(items))


# --- skills, addressed by category ---


def _map_group(doc: ResumeDocument, category: str, fn) -> ResumeDocument:
    changed = False
    groups: list[SkillGroup] = []
    for group in doc.skills:
        if group.category == category:
            new_items = fn(group.items)
            if new_items is not None:
                group = group.model_copy(update={"items": new_items})
                changed = True
        groups.append(group)
    if not changed:
        return doc
    return doc.model_copy(update={"skills": groups})


def add_skill(doc: ResumeDocument, category: str) -> ResumeDocument:
    return _map_group(doc, category, lambda items: [*items, ""])


def update_skill(doc: ResumeDocument, category: str, index: int, value: str) -> ResumeDocument:
    def _set(items):
        if not _in_range(items, index):
            return None
        return [value if i == index else item for i, item in enumerate(items)]

    return _map_group(doc, category, _set)


def remove_skill(doc: ResumeDocument, category: str, index: int) -> ResumeDocument:
    def _drop(items):
        if not _in_range(items, index):
            return None
        return [item for i, item in enumerate(items) if i != index]

    return _map_group(doc, category, _drop)


def merge_skills(
    doc: ResumeDocument,
    suggested: Iterable[str],
    category: str = TECHNICAL_SKILLS,
) -> ResumeDocument:
    """Union suggested skills into a group, keeping order and dropping exact duplicates."""
    suggested = list(suggested)

    def _union(items):
        merged = list(dict.fromkeys([*items, *suggested]))
        return None if merged == items else merged

    return _map_group(doc, category, _union)


# --- personal info ---


def set_personal_field(doc: ResumeDocument, field: str, value: str) -> ResumeDocument:
    name = _field_name(PersonalInfo, field)
    if getattr(doc.personal_info, name) == value:
        return doc
    info = doc.personal_info.model_copy(update={name: value})
    return doc.model_copy(update={"personal_info": info})


# --- fragments for content generation ---


def experience_fragment(doc: ResumeDocument) -> str:
    """One ``"<position> at <company>: <description>"`` line per experience entry."""
    return "\n".join(
        f"{exp.position} at {exp.company}: {exp.description}" for exp in doc.experience
    )


def all_skill_items(doc: ResumeDocument) -> list[str]:
    return [item for group in doc.skills for item in group.items]
