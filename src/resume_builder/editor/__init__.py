"""Resume document editing: pure operations and the editor state container."""

from resume_builder.editor.editor import Notification, ResumeEditor

__all__ = ["Notification", "ResumeEditor"]
