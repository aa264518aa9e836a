"""Derive the visual preview tree from a resume document."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from resume_builder.models.resume import ResumeDocument

MONTH_ABBR = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

PLACEHOLDER_NAME = "Your Name"
PRESENT = "Present"


@dataclass
class PreviewLink:
    label: str
    href: str


@dataclass
class PreviewEntry:
    title: str = ""
    subtitle: str = ""
    dates: str = ""
    text: str = ""
    details: list[str] = field(default_factory=list)
    bullets: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    link: PreviewLink | None = None


@dataclass
class PreviewSection:
    key: str
    heading: str
    entries: list[PreviewEntry] = field(default_factory=list)


@dataclass
class PreviewHeader:
    name: str
    contacts: list[str] = field(default_factory=list)
    summary: str = ""


@dataclass
class ResumePreview:
    header: PreviewHeader
    sections: list[PreviewSection] = field(default_factory=list)

    @property
    def section_keys(self) -> list[str]:
        return [s.key for s in self.sections]

    def section(self, key: str) -> PreviewSection | None:
        for s in self.sections:
            if s.key == key:
                return s
        return None


def format_month(value: str) -> str:
    """Format an ISO date (``YYYY-MM-DD`` or ``YYYY-MM``) as ``"Mar 2024"``.

    Empty input gives an empty string. Anything that is not a real calendar
    date in one of those two shapes (``"Summer 2020"``, ``"2024-02-30"``) is
    returned unchanged.
    """
    value = (value or "").strip()
    if not value:
        return ""
    if len(value) == 7:
        candidate = value + "-01"
    elif len(value) == 10:
        candidate = value
    else:
        return value
    try:
        parsed = date.fromisoformat(candidate)
    except ValueError:
        return value
    return f"{MONTH_ABBR[parsed.month - 1]} {parsed.year}"


def format_date_range(start: str, end: str) -> str:
    """``"Mar 2024 - Present"`` style range; empty when there is no start date."""
    if not start:
        return ""
    return f"{format_month(start)} - {format_month(end) if end else PRESENT}"


def _header(doc: ResumeDocument) -> PreviewHeader:
    info = doc.personal_info
    contacts = [v for v in (info.email, info.phone, info.location) if v]
    return PreviewHeader(name=info.name or PLACEHOLDER_NAME, contacts=contacts, summary=info.summary)


def _experience(doc: ResumeDocument) -> PreviewSection:
    return PreviewSection(
        key="experience",
        heading="Professional Experience",
        entries=[
            PreviewEntry(
                title=exp.position,
                subtitle=exp.company,
                dates=format_date_range(exp.start_date, exp.end_date),
                text=exp.description,
                bullets=list(exp.achievements),
            )
            for exp in doc.experience
        ],
    )


def _education(doc: ResumeDocument) -> PreviewSection:
    entries = []
    for edu in doc.education:
        subtitle = edu.degree + (f" in {edu.field}" if edu.field else "")
        entries.append(
            PreviewEntry(
                title=edu.school,
                subtitle=subtitle,
                dates=format_month(edu.graduation_date),
                details=[f"GPA: {edu.gpa}"] if edu.gpa else [],
                bullets=list(edu.achievements),
            )
        )
    return PreviewSection(key="education", heading="Education", entries=entries)


def _skills(doc: ResumeDocument) -> PreviewSection:
    return PreviewSection(
        key="skills",
        heading="Skills",
        entries=[
            PreviewEntry(title=group.category, tags=list(group.items))
            for group in doc.skills
            if group.items
        ],
    )


def _certifications(doc: ResumeDocument) -> PreviewSection:
    return PreviewSection(
        key="certifications",
        heading="Certifications",
        entries=[
            PreviewEntry(
                title=cert.name,
                subtitle=cert.issuer,
                dates=format_month(cert.date),
                link=PreviewLink("View Certificate", cert.url) if cert.url else None,
            )
            for cert in doc.certifications
        ],
    )


def _languages(doc: ResumeDocument) -> PreviewSection:
    return PreviewSection(
        key="languages",
        heading="Languages",
        entries=[
            PreviewEntry(title=f"{lang.language} - {lang.proficiency}")
            for lang in doc.languages
        ],
    )


def build_preview(doc: ResumeDocument) -> ResumePreview:
    """Build the preview tree. Pure and total: every document renders.

    A section is included when it has at least one entry, even an entry
    with all fields empty. Skills are included when any group has an item,
    and only non-empty groups are listed.
    """
    sections = []
    if doc.experience:
        sections.append(_experience(doc))
    if doc.education:
        sections.append(_education(doc))
    if any(group.items for group in doc.skills):
        sections.append(_skills(doc))
    if doc.certifications:
        sections.append(_certifications(doc))
    if doc.languages:
        sections.append(_languages(doc))
    return ResumePreview(header=_header(doc), sections=sections)
