"""Streamlit Web UI for resume-builder.

Pages:
  Login / Register  : account access (password policy + strength meter on sign-up)
  Dashboard         : the signed-in user's resumes, newest first
  Builder           : section form + AI assists on the left, live preview + PDF export on the right
"""

from __future__ import annotations

import asyncio
import logging
import os

logger = logging.getLogger(__name__)

import nest_asyncio
import streamlit as st
import streamlit.components.v1 as components
from dotenv import load_dotenv

load_dotenv()
nest_asyncio.apply()

# Streamlit Cloud: sync st.secrets → os.environ so backend clients can read them
for key in ("ANTHROPIC_API_KEY", "RESUME_BUILDER_SECRET"):
    if key not in os.environ:
        try:
            os.environ[key] = st.secrets[key]
        except Exception:
            pass

from resume_builder.auth.identity import AuthError, IdentityProvider
from resume_builder.auth.password_policy import evaluate_password
from resume_builder.auth.session import SessionContext
from resume_builder.clients.llm_client import LLMClient
from resume_builder.config import load_config
from resume_builder.editor.editor import Notification, ResumeEditor
from resume_builder.export.exporter import ExportStatus, export_resume
from resume_builder.export.pdf_renderer import ExportOptions
from resume_builder.generation.content_generator import ContentGenerator
from resume_builder.models.resume import PROFICIENCY_LEVELS
from resume_builder.preview.builder import build_preview
from resume_builder.preview.html import render_html
from resume_builder.store.resume_store import ResumeStore, StoreError

# ---------------------------------------------------------------------------
# Page config
# ---------------------------------------------------------------------------

st.set_page_config(
    page_title="Resume Builder",
    page_icon=":page_facing_up:",
    layout="wide",
)

STRENGTH_COLORS = ("red", "orange", "yellow", "lime", "green")

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _get_config():
    return load_config()


def _get_auth() -> SessionContext:
    if "auth" not in st.session_state:
        config = _get_config()
        provider = IdentityProvider(
            db_path=config.store.resolved_db_path,
            secret_key=config.auth.resolved_secret_key,
            token_ttl_minutes=config.auth.token_ttl_minutes,
            min_password_length=config.auth.min_password_length,
            min_strength_score=config.auth.min_strength_score,
        )
        context = SessionContext(provider)
        # Any sign-in / sign-out drops the open editor
        context.subscribe(lambda event, session: _close_editor())
        st.session_state.auth = context
    return st.session_state.auth


def _get_store() -> ResumeStore:
    return ResumeStore(_get_config().store.resolved_db_path)


def _get_generator() -> ContentGenerator | None:
    config = _get_config()
    try:
        llm = LLMClient(timeout=config.llm.timeout, max_attempts=config.llm.max_retries + 1)
    except Exception:
        logger.exception("LLM client initialization failed")
        return None
    return ContentGenerator(
        llm,
        model=config.llm.model,
        temperature=config.llm.temperature,
        max_tokens=config.llm.max_tokens,
    )


def _close_editor() -> None:
    editor = st.session_state.pop("editor", None)
    if editor is not None:
        editor.close()
    st.session_state.pop("resume_id", None)
    st.session_state.pop("notifications", None)
    st.session_state.pop("export_result", None)


def _open_editor(record=None) -> None:
    _close_editor()
    editor = ResumeEditor(_get_generator(), record.document if record else None)
    st.session_state.notifications = []
    editor.subscribe_notifications(lambda note: st.session_state.notifications.append(note))
    st.session_state.editor = editor
    st.session_state.resume_id = record.id if record else None
    st.session_state.resume_title = record.title if record else "Untitled Resume"
    st.session_state.page = "builder"


def _show_notifications() -> None:
    notes: list[Notification] = st.session_state.get("notifications", [])
    for note in notes:
        if note.level == "success":
            st.toast(note.message)
        elif note.level == "info":
            st.info(note.message)
        else:
            st.error(note.message)
    notes.clear()


def _text(label: str, value: str, key: str, **kwargs) -> str:
    return st.text_input(label, value=value, key=key, **kwargs)


# ---------------------------------------------------------------------------
# Login / Register
# ---------------------------------------------------------------------------


def _page_login(auth: SessionContext) -> None:
    st.header("Sign in")
    email = st.text_input("Email address")
    password = st.text_input("Password", type="password")
    if st.button("Sign in", type="primary"):
        try:
            auth.sign_in(email, password)
        except AuthError as e:
            st.error(str(e))
            return
        st.session_state.page = "dashboard"
        st.rerun()
    if st.button("Create an account"):
        st.session_state.page = "register"
        st.rerun()


def _page_register(auth: SessionContext) -> None:
    config = _get_config()
    st.header("Create your account")
    email = st.text_input("Email address")
    password = st.text_input("Password", type="password")

    report = evaluate_password(
        password,
        min_length=config.auth.min_password_length,
        min_score=config.auth.min_strength_score,
    )
    st.progress((report.score + 1) * 20, text=f"Strength: :{STRENGTH_COLORS[report.score]}[{report.score}/4]")
    for req in report.requirements:
        st.markdown(f"{':white_check_mark:' if req.met else ':x:'} {req.text}")

    if st.button("Sign up", type="primary", disabled=not report.can_submit):
        try:
            auth.sign_up(email, password)
        except AuthError as e:
            st.error(str(e))
            return
        st.success("Registration successful! You can now log in.")
        st.session_state.page = "login"
        st.rerun()
    if st.button("Back to sign in"):
        st.session_state.page = "login"
        st.rerun()


# ---------------------------------------------------------------------------
# Dashboard
# ---------------------------------------------------------------------------


def _page_dashboard(auth: SessionContext) -> None:
    user = auth.user
    st.header("My Resumes")
    st.caption("Create and manage your professional resumes")

    if st.button("New Resume", type="primary"):
        _open_editor()
        st.rerun()

    try:
        records = _get_store().list_resumes(user.id)
    except Exception:
        logger.exception("Failed to list resumes")
        st.error("Could not load your resumes. Please try again.")
        return

    if not records:
        st.info("No resumes. Get started by creating a new resume.")
        return

    cols = st.columns(3)
    for i, record in enumerate(records):
        with cols[i % 3], st.container(border=True):
            st.subheader(record.title)
            st.caption(f"Created {record.created_at.strftime('%Y-%m-%d')}")
            if st.button("Open", key=f"open_{record.id}"):
                _open_editor(record)
                st.rerun()


# ---------------------------------------------------------------------------
# Builder
# ---------------------------------------------------------------------------


def _run(coro) -> None:
    try:
        asyncio.run(coro)
    except Exception:
        logger.exception("AI operation failed")
        st.error("Something went wrong. Please try again.")


def _section_personal(editor: ResumeEditor) -> None:
    info = editor.document.personal_info
    for field, label in (("name", "Full Name"), ("email", "Email"), ("phone", "Phone"), ("location", "Location")):
        value = _text(label, getattr(info, field), key=f"personal_{field}")
        if value != getattr(info, field):
            editor.set_personal_field(field, value)
    if st.button("Generate with AI", key="ai_summary", disabled=editor.is_loading):
        with st.spinner("Generating summary..."):
            _run(editor.generate_summary())
    summary = st.text_area("Professional Summary", value=editor.document.personal_info.summary, key="personal_summary_area")
    if summary != editor.document.personal_info.summary:
        editor.set_personal_field("summary", summary)


def _achievements(editor: ResumeEditor, section: str, index: int, items: list[str]) -> None:
    st.markdown("**Achievements**")
    for pos, item in enumerate(items):
        c1, c2 = st.columns([6, 1])
        with c1:
            value = _text("Achievement", item, key=f"{section}_{index}_ach_{pos}", label_visibility="collapsed")
            if value != item:
                editor.update_achievement(section, index, pos, value)
        with c2:
            if st.button("Remove", key=f"{section}_{index}_ach_rm_{pos}"):
                editor.remove_achievement(section, index, pos)
                st.rerun()
    if st.button("Add Achievement", key=f"{section}_{index}_ach_add"):
        editor.add_achievement(section, index)
        st.rerun()


def _entry_fields(editor: ResumeEditor, section: str, index: int, entry, fields) -> None:
    for field, label in fields:
        current = getattr(entry, field)
        value = _text(label, current, key=f"{section}_{index}_{field}")
        if value != current:
            editor.update_entry(section, index, field, value)


def _section_experience(editor: ResumeEditor) -> None:
    for index, exp in enumerate(editor.document.experience):
        with st.container(border=True):
            _entry_fields(editor, "experience", index, exp, (
                ("company", "Company"),
                ("position", "Position"),
                ("start_date", "Start Date (YYYY-MM-DD)"),
                ("end_date", "End Date (empty = Present)"),
            ))
            if st.button("Improve with AI", key=f"ai_desc_{index}", disabled=editor.is_loading):
                with st.spinner("Improving description..."):
                    _run(editor.improve_description(index))
            description = st.text_area("Description", value=editor.document.experience[index].description, key=f"experience_{index}_description")
            if description != editor.document.experience[index].description:
                editor.update_entry("experience", index, "description", description)
            if st.button("Generate Achievements", key=f"ai_ach_{index}", disabled=editor.is_loading):
                with st.spinner("Generating achievements..."):
                    _run(editor.generate_achievements(index))
            _achievements(editor, "experience", index, editor.document.experience[index].achievements)
            if st.button("Remove Experience", key=f"experience_rm_{index}"):
                editor.remove_entry("experience", index)
                st.rerun()
    if st.button("Add Experience"):
        editor.add_entry("experience")
        st.rerun()


def _section_education(editor: ResumeEditor) -> None:
    for index, edu in enumerate(editor.document.education):
        with st.container(border=True):
            _entry_fields(editor, "education", index, edu, (
                ("school", "School"),
                ("degree", "Degree"),
                ("field", "Field of Study"),
                ("graduation_date", "Graduation Date (YYYY-MM-DD)"),
                ("gpa", "GPA"),
            ))
            _achievements(editor, "education", index, editor.document.education[index].achievements)
            if st.button("Remove Education", key=f"education_rm_{index}"):
                editor.remove_entry("education", index)
                st.rerun()
    if st.button("Add Education"):
        editor.add_entry("education")
        st.rerun()


def _section_skills(editor: ResumeEditor) -> None:
    if st.button("Suggest Skills", key="ai_skills", disabled=editor.is_loading):
        with st.spinner("Suggesting skills..."):
            _run(editor.suggest_skills())
    for group in editor.document.skills:
        st.markdown(f"**{group.category}**")
        for i, item in enumerate(group.items):
            c1, c2 = st.columns([6, 1])
            with c1:
                value = _text("Skill", item, key=f"skill_{group.category}_{i}", label_visibility="collapsed")
                if value != item:
                    editor.update_skill(group.category, i, value)
            with c2:
                if st.button("Remove", key=f"skill_rm_{group.category}_{i}"):
                    editor.remove_skill(group.category, i)
                    st.rerun()
        if st.button(f"Add {group.category}", key=f"skill_add_{group.category}"):
            editor.add_skill(group.category)
            st.rerun()


def _section_certifications(editor: ResumeEditor) -> None:
    for index, cert in enumerate(editor.document.certifications):
        with st.container(border=True):
            _entry_fields(editor, "certifications", index, cert, (
                ("name", "Certification Name"),
                ("issuer", "Issuing Organization"),
                ("date", "Date (YYYY-MM-DD)"),
                ("url", "Certificate URL"),
            ))
            if st.button("Remove Certification", key=f"certifications_rm_{index}"):
                editor.remove_entry("certifications", index)
                st.rerun()
    if st.button("Add Certification"):
        editor.add_entry("certifications")
        st.rerun()


def _section_languages(editor: ResumeEditor) -> None:
    options = ["", *PROFICIENCY_LEVELS]
    for index, lang in enumerate(editor.document.languages):
        with st.container(border=True):
            _entry_fields(editor, "languages", index, lang, (("language", "Language"),))
            level = st.selectbox(
                "Proficiency",
                options,
                index=options.index(lang.proficiency),
                format_func=lambda v: v or "Select Proficiency",
                key=f"languages_{index}_proficiency",
            )
            if level != lang.proficiency:
                editor.update_entry("languages", index, "proficiency", level)
            if st.button("Remove Language", key=f"languages_rm_{index}"):
                editor.remove_entry("languages", index)
                st.rerun()
    if st.button("Add Language"):
        editor.add_entry("languages")
        st.rerun()


def _save(editor: ResumeEditor, user_id: str, title: str) -> None:
    store = _get_store()
    try:
        if st.session_state.get("resume_id"):
            store.save_resume(st.session_state.resume_id, user_id, editor.document, title=title)
        else:
            record = store.create_resume(user_id, title=title, document=editor.document)
            st.session_state.resume_id = record.id
    except StoreError as e:
        st.error(str(e))
        return
    except Exception:
        logger.exception("Failed to save resume")
        st.error("Failed to save resume")
        return
    st.toast("Resume saved")


def _page_builder(auth: SessionContext) -> None:
    user = auth.user
    editor: ResumeEditor | None = st.session_state.get("editor")
    if editor is None:
        _open_editor()
        editor = st.session_state.editor

    config = _get_config()
    export_options = ExportOptions.from_config(config.export)

    st.header("Resume Builder")
    title = st.text_input("Resume title", key="resume_title")

    left, right = st.columns(2)
    with left:
        sections = (
            ("Personal Information", _section_personal),
            ("Professional Experience", _section_experience),
            ("Education", _section_education),
            ("Skills", _section_skills),
            ("Certifications", _section_certifications),
            ("Languages", _section_languages),
        )
        for label, render_section in sections:
            with st.expander(label, expanded=label == "Personal Information"):
                render_section(editor)
        _show_notifications()

    page = render_html(
        build_preview(editor.document),
        theme=config.export.theme,
        title=title,
        page_size=export_options.page_format,
        orientation=export_options.orientation,
        margin_in=export_options.margin_in,
    )
    with right:
        st.subheader("Preview")
        components.html(page, height=900, scrolling=True)

        c1, c2 = st.columns(2)
        with c1:
            if st.button("Save", type="secondary"):
                _save(editor, user.id, title)
        with c2:
            if st.button("Export PDF", type="primary", disabled=editor.is_loading):
                status_box = st.empty()

                def on_status(status: ExportStatus, message: str) -> None:
                    if status is ExportStatus.FAILURE:
                        status_box.error(message)
                    elif status is ExportStatus.SUCCESS:
                        status_box.success(message)
                    else:
                        status_box.info(message)

                result = asyncio.run(export_resume(page, on_status=on_status, options=export_options))
                if result.ok:
                    st.session_state.export_result = result
        result = st.session_state.get("export_result")
        if result is not None:
            st.download_button(
                label="Download PDF",
                data=result.data,
                file_name=result.filename,
                mime="application/pdf",
            )


# ---------------------------------------------------------------------------
# Routing
# ---------------------------------------------------------------------------

auth = _get_auth()
session = auth.get_current_session()
page = st.session_state.get("page", "login")

with st.sidebar:
    st.title("Resume Builder")
    st.caption("AI-Powered Resume Builder")
    if session:
        st.write(session.user.email)
        if st.button("Dashboard"):
            st.session_state.page = "dashboard"
            st.rerun()
        if st.button("Sign out"):
            auth.sign_out()
            st.session_state.page = "login"
            st.rerun()

if session is None:
    if page == "register":
        _page_register(auth)
    else:
        _page_login(auth)
elif page == "builder":
    _page_builder(auth)
else:
    _page_dashboard(auth)
