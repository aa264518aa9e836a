"""Editor state container: owns one resume document for one editing session."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Literal

from resume_builder.editor import operations as ops
from resume_builder.generation.content_generator import (
    ContentGenerator,
    GenerationError,
    GenerationValidationError,
)
from resume_builder.models.resume import ExperienceEntry, ResumeDocument

logger = logging.getLogger(__name__)

DocumentListener = Callable[[ResumeDocument], None]
# Returns None when the entry the result belongs to is gone
Transform = Callable[[ResumeDocument], "ResumeDocument | None"]

ENTRY_GONE_MESSAGE = "The entry changed before the result arrived. Please try again."


def _on_entry(
    entry: ExperienceEntry,
    write: Callable[[ResumeDocument, int], ResumeDocument],
) -> Transform:
    """Write back to ``entry`` wherever it sits now, matched by identity.

    Edits never replace untouched entries, so an entry that is no longer
    present was removed or rewritten while the call was in flight.
    """

    def transform(doc: ResumeDocument) -> ResumeDocument | None:
        for pos, current in enumerate(doc.experience):
            if current is entry:
                return write(doc, pos)
        return None

    return transform


@dataclass(frozen=True)
class Notification:
    """A transient user-facing message."""

    level: Literal["success", "error", "info"]
    message: str


NotificationListener = Callable[[Notification], None]


class ResumeEditor:
    """Holds the in-memory document and publishes a change event after every mutation.

    Structural edits are synchronous and delegate to ``editor.operations``.
    The four AI-assisted edits are coroutines; they run one at a time per
    editor (an ``asyncio.Lock``), read their input fragment once they hold the
    lock and write the result into the document as it is when the call
    returns. Per-entry results follow their entry by identity; if it was
    removed meanwhile the result is dropped. A failed call leaves the
    document untouched and emits an error notification.
    """

    def __init__(
        self,
        generator: ContentGenerator | None = None,
        document: ResumeDocument | None = None,
    ):
        self.generator = generator
        self._document = document if document is not None else ResumeDocument()
        self._listeners: list[DocumentListener] = []
        self._notification_listeners: list[NotificationListener] = []
        self._lock = asyncio.Lock()
        self._pending = 0
        self._closed = False

    # -- observation ------------------------------------------------------

    @property
    def document(self) -> ResumeDocument:
        return self._document

    @property
    def is_loading(self) -> bool:
        """True while an AI operation is running or waiting for its turn."""
        return self._pending > 0

    @property
    def closed(self) -> bool:
        return self._closed

    def subscribe(self, listener: DocumentListener) -> Callable[[], None]:
        """Register a document-changed listener. Returns an unsubscribe callable."""
        self._listeners.append(listener)
        return lambda: self._remove(self._listeners, listener)

    def subscribe_notifications(self, listener: NotificationListener) -> Callable[[], None]:
        self._notification_listeners.append(listener)
        return lambda: self._remove(self._notification_listeners, listener)

    @staticmethod
    def _remove(listeners: list, listener) -> None:
        if listener in listeners:
            listeners.remove(listener)

    def _apply(self, new_doc: ResumeDocument) -> bool:
        if new_doc is self._document:
            return False
        self._document = new_doc
        for listener in list(self._listeners):
            try:
                listener(new_doc)
            except Exception:
                logger.exception("Document listener failed")
        return True

    def _notify(self, level: str, message: str) -> None:
        if self._closed:
            return
        note = Notification(level=level, message=message)
        for listener in list(self._notification_listeners):
            try:
                listener(note)
            except Exception:
                logger.exception("Notification listener failed")

    # -- structural edits -------------------------------------------------

    def load(self, document: ResumeDocument) -> bool:
        return self._apply(document)

    def set_personal_field(self, field: str, value: str) -> bool:
        return self._apply(ops.set_personal_field(self._document, field, value))

    def add_entry(self, section: ops.Section) -> bool:
        return self._apply(ops.add_entry(self._document, section))

    def update_entry(self, section: ops.Section, index: int, field: str, value) -> bool:
        return self._apply(ops.update_entry(self._document, section, index, field, value))

    def remove_entry(self, section: ops.Section, index: int) -> bool:
        return self._apply(ops.remove_entry(self._document, section, index))

    def add_achievement(self, section: ops.AchievementSection, index: int) -> bool:
        return self._apply(ops.add_achievement(self._document, section, index))

    def update_achievement(
        self, section: ops.AchievementSection, index: int, position: int, value: str
    ) -> bool:
        return self._apply(
            ops.update_achievement(self._document, section, index, position, value)
        )

    def remove_achievement(self, section: ops.AchievementSection, index: int, position: int) -> bool:
        return self._apply(ops.remove_achievement(self._document, section, index, position))

    def add_skill(self, category: str) -> bool:
        return self._apply(ops.add_skill(self._document, category))

    def update_skill(self, category: str, index: int, value: str) -> bool:
        return self._apply(ops.update_skill(self._document, category, index, value))

    def remove_skill(self, category: str, index: int) -> bool:
        return self._apply(ops.remove_skill(self._document, category, index))

    # -- AI-assisted edits ------------------------------------------------

    async def generate_summary(self) -> bool:
        async def step() -> Transform:
            doc = self._document
            summary = await self.generator.generate_summary(
                ops.experience_fragment(doc), ops.all_skill_items(doc)
            )
            return lambda d: ops.set_personal_field(d, "summary", summary)

        return await self._run("Summary generated successfully!", "Failed to generate summary", step)

    async def improve_description(self, index: int) -> bool:
        async def step() -> Transform:
            entry = self._experience_at(index)
            improved = await self.generator.improve_description(entry.description)
            return _on_entry(
                entry, lambda d, pos: ops.update_entry(d, "experience", pos, "description", improved)
            )

        return await self._run(
            "Description improved successfully!", "Failed to improve description", step
        )

    async def suggest_skills(self) -> bool:
        async def step() -> Transform:
            suggested = await self.generator.suggest_skills(ops.experience_fragment(self._document))
            return lambda d: ops.merge_skills(d, suggested)

        return await self._run("Skills suggested successfully!", "Failed to suggest skills", step)

    async def generate_achievements(self, index: int) -> bool:
        async def step() -> Transform:
            entry = self._experience_at(index)
            achievements = await self.generator.generate_achievements(entry.description)
            return _on_entry(entry, lambda d, pos: ops.replace_achievements(d, pos, achievements))

        return await self._run(
            "Achievements generated successfully!", "Failed to generate achievements", step
        )

    def _experience_at(self, index: int) -> ExperienceEntry:
        entries = self._document.experience
        if not 0 <= index < len(entries):
            raise GenerationValidationError(f"No experience entry at position {index + 1}")
        return entries[index]

    async def _run(
        self,
        success_message: str,
        failure_message: str,
        step: Callable[[], Awaitable[Transform]],
    ) -> bool:
        if self._closed:
            logger.debug("AI operation requested on a closed editor")
            return False
        if self.generator is None:
            self._notify("error", "Content generation is not configured")
            return False

        self._pending += 1
        try:
            async with self._lock:
                try:
                    transform = await step()
                except GenerationError as e:
                    self._notify("error", str(e) or failure_message)
                    return False
                except Exception:
                    logger.exception(failure_message)
                    self._notify("error", failure_message)
                    return False

                if self._closed:
                    logger.info("Editor closed while generating; discarding result")
                    return False
                new_doc = transform(self._document)
                if new_doc is None:
                    logger.info("Target entry changed while generating; discarding result")
                    self._notify("info", ENTRY_GONE_MESSAGE)
                    return False
                self._apply(new_doc)
        finally:
            self._pending -= 1
        self._notify("success", success_message)
        return True

    def close(self) -> None:
        """End the editing session. Results that arrive afterwards are discarded."""
        self._closed = True
