"""Tests for ResumeStore."""

from __future__ import annotations

import time

import pytest

from resume_builder.editor import operations as ops
from resume_builder.store.resume_store import DEFAULT_TITLE, ResumeStore, StoreError


@pytest.fixture
def store(tmp_path) -> ResumeStore:
    return ResumeStore(tmp_path / "resumes.db")


class TestResumeStore:
    def test_create_defaults(self, store):
        record = store.create_resume("user-1")
        assert record.title == DEFAULT_TITLE
        assert record.user_id == "user-1"
        assert record.updated_at is None
        assert record.document.experience == []

    def test_blank_title_uses_default(self, store):
        assert store.create_resume("user-1", title="   ").title == DEFAULT_TITLE

    def test_create_with_document(self, store, sample_document):
        record = store.create_resume("user-1", title="Backend", document=sample_document)
        fetched = store.get_resume(record.id, "user-1")
        assert fetched.title == "Backend"
        assert fetched.document == sample_document

    def test_list_newest_first(self, store):
        first = store.create_resume("user-1", title="First")
        time.sleep(0.01)
        second = store.create_resume("user-1", title="Second")
        assert [r.id for r in store.list_resumes("user-1")] == [second.id, first.id]

    def test_list_scoped_to_user(self, store):
        store.create_resume("user-1")
        store.create_resume("user-2")
        assert len(store.list_resumes("user-1")) == 1
        assert store.list_resumes("user-3") == []

    def test_get_other_users_resume(self, store):
        record = store.create_resume("user-1")
        assert store.get_resume(record.id, "user-2") is None

    def test_save_overwrites_document(self, store, sample_document):
        record = store.create_resume("user-1")
        saved = store.save_resume(record.id, "user-1", sample_document, title="Updated")
        assert saved.title == "Updated"
        assert saved.updated_at is not None
        fetched = store.get_resume(record.id, "user-1")
        assert fetched.document == sample_document
        assert fetched.title == "Updated"

    def test_save_keeps_title_when_omitted(self, store, sample_document):
        record = store.create_resume("user-1", title="Keep me")
        doc = ops.set_personal_field(sample_document, "name", "Sam")
        saved = store.save_resume(record.id, "user-1", doc)
        assert saved.title == "Keep me"
        assert store.get_resume(record.id, "user-1").document.personal_info.name == "Sam"

    def test_save_missing(self, store, sample_document):
        with pytest.raises(StoreError, match="Resume not found"):
            store.save_resume("missing", "user-1", sample_document)

    def test_save_other_users_resume(self, store, sample_document):
        record = store.create_resume("user-1")
        with pytest.raises(StoreError):
            store.save_resume(record.id, "user-2", sample_document)

    def test_delete(self, store):
        record = store.create_resume("user-1")
        assert store.delete_resume(record.id, "user-2") is False
        assert store.delete_resume(record.id, "user-1") is True
        assert store.list_resumes("user-1") == []

    def test_creates_parent_directory(self, tmp_path):
        ResumeStore(tmp_path / "nested" / "dir" / "resumes.db")
        assert (tmp_path / "nested" / "dir").is_dir()
