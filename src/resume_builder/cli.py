"""CLI interface using typer + rich."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

import typer
from rich.console import Console
from rich.table import Table

from resume_builder.auth.identity import AuthError, IdentityProvider
from resume_builder.auth.password_policy import evaluate_password
from resume_builder.auth.session import SessionContext
from resume_builder.clients.llm_client import LLMClient
from resume_builder.config import AppConfig, load_config
from resume_builder.editor.editor import Notification, ResumeEditor
from resume_builder.export.exporter import ExportStatus, export_resume
from resume_builder.export.pdf_renderer import ExportOptions
from resume_builder.generation.content_generator import ContentGenerator
from resume_builder.log import configure_logging
from resume_builder.models.resume import ResumeDocument
from resume_builder.preview.builder import build_preview
from resume_builder.preview.html import AVAILABLE_THEMES, render_html
from resume_builder.store.resume_store import ResumeStore

app = typer.Typer(
    name="resume-builder",
    help="AI-assisted resume builder",
    no_args_is_help=True,
)
console = Console()

OPERATIONS = ("summary", "description", "skills", "achievements")


def _load_document(path: Path) -> ResumeDocument:
    if not path.exists():
        console.print(f"[red]Resume file not found: {path}[/red]")
        raise typer.Exit(1)
    try:
        return ResumeDocument.from_json(path.read_text(encoding="utf-8"))
    except ValueError as e:
        console.print(f"[red]Invalid resume document: {e}[/red]")
        raise typer.Exit(1)


def _identity(config: AppConfig) -> IdentityProvider:
    return IdentityProvider(
        db_path=config.store.resolved_db_path,
        secret_key=config.auth.resolved_secret_key,
        token_ttl_minutes=config.auth.token_ttl_minutes,
        min_password_length=config.auth.min_password_length,
        min_strength_score=config.auth.min_strength_score,
    )


def _sign_in(config: AppConfig, email: str, password: str) -> SessionContext:
    context = SessionContext(_identity(config))
    try:
        context.sign_in(email, password)
    except AuthError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    return context


def _print_password_report(password: str, config: AppConfig) -> bool:
    report = evaluate_password(
        password,
        min_length=config.auth.min_password_length,
        min_score=config.auth.min_strength_score,
    )
    for req in report.requirements:
        mark = "[green]✓[/green]" if req.met else "[red]✗[/red]"
        console.print(f"  {mark} {req.text}")
    color = "green" if report.score >= report.min_score else "yellow"
    console.print(f"  Strength: [{color}]{report.score}/4[/{color}] (minimum {report.min_score})")
    return report.can_submit


@app.command()
def render(
    document: Path = typer.Argument(help="Resume document (JSON)"),
    output: Path = typer.Option(None, "--output", "-o", help="Output PDF path"),
    theme: str = typer.Option(None, "--theme", "-t", help=f"Theme: {', '.join(AVAILABLE_THEMES)}"),
    html: bool = typer.Option(False, "--html", help="Also write the HTML preview"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
) -> None:
    """Render a resume document to PDF."""
    configure_logging(verbose)
    config = load_config()
    doc = _load_document(document)
    export_options = ExportOptions.from_config(config.export)
    page = render_html(
        build_preview(doc),
        theme=theme or config.export.theme,
        title=doc.personal_info.name or "Resume",
        page_size=export_options.page_format,
        orientation=export_options.orientation,
        margin_in=export_options.margin_in,
    )

    with console.status("Generating PDF..."):
        result = asyncio.run(export_resume(page, options=export_options))

    if result.status is not ExportStatus.SUCCESS:
        console.print(f"[red]{result.message}[/red]")
        raise typer.Exit(1)

    if output is None:
        output = Path("./output") / result.filename
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(result.data)
    console.print(f"[green]{result.message} {output}[/green]")

    if html:
        html_path = output.with_suffix(".html")
        html_path.write_text(page, encoding="utf-8")
        console.print(f"[green]HTML saved: {html_path}[/green]")


@app.command()
def generate(
    operation: str = typer.Argument(help=f"One of: {', '.join(OPERATIONS)}"),
    document: Path = typer.Argument(help="Resume document (JSON)"),
    index: int = typer.Option(0, "--index", "-i", help="Experience entry (0-based) for description/achievements"),
    output: Path = typer.Option(None, "--output", "-o", help="Where to write the updated document (default: in place)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
) -> None:
    """Run one AI-assisted edit on a resume document."""
    if operation not in OPERATIONS:
        console.print(f"[red]Unknown operation: {operation}. Choose from {', '.join(OPERATIONS)}[/red]")
        raise typer.Exit(1)
    configure_logging(verbose)
    config = load_config()
    doc = _load_document(document)

    llm = LLMClient(timeout=config.llm.timeout, max_attempts=config.llm.max_retries + 1)
    generator = ContentGenerator(
        llm,
        model=config.llm.model,
        temperature=config.llm.temperature,
        max_tokens=config.llm.max_tokens,
    )
    editor = ResumeEditor(generator, doc)

    def on_notification(note: Notification) -> None:
        color = {"success": "green", "info": "yellow"}.get(note.level, "red")
        console.print(f"[{color}]{note.message}[/{color}]")

    editor.subscribe_notifications(on_notification)

    runs = {
        "summary": editor.generate_summary,
        "description": lambda: editor.improve_description(index),
        "skills": editor.suggest_skills,
        "achievements": lambda: editor.generate_achievements(index),
    }
    with console.status("Generating..."):
        ok = asyncio.run(runs[operation]())
    if not ok:
        raise typer.Exit(1)

    target = output or document
    target.write_text(
        json.dumps(editor.document.model_dump(by_alias=True), indent=2, ensure_ascii=False),
        encoding="utf-8",
    )
    console.print(f"[green]Saved: {target}[/green]")


@app.command()
def register(
    email: str = typer.Option(..., "--email", help="Account email"),
    password: str = typer.Option(..., prompt=True, hide_input=True, confirmation_prompt=True),
) -> None:
    """Create an account."""
    config = load_config()
    if not _print_password_report(password, config):
        console.print("[red]Password does not meet the requirements[/red]")
        raise typer.Exit(1)
    try:
        SessionContext(_identity(config)).sign_up(email, password)
    except AuthError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    console.print("[green]Registration successful! You can now log in.[/green]")


@app.command("check-password")
def check_password(
    password: str = typer.Option(..., prompt=True, hide_input=True),
) -> None:
    """Show how a password scores against the registration policy."""
    ok = _print_password_report(password, load_config())
    if not ok:
        raise typer.Exit(1)


@app.command("list")
def list_resumes(
    email: str = typer.Option(..., "--email", help="Account email"),
    password: str = typer.Option(..., prompt=True, hide_input=True),
) -> None:
    """List your resumes, newest first."""
    config = load_config()
    context = _sign_in(config, email, password)
    store = ResumeStore(config.store.resolved_db_path)
    records = store.list_resumes(context.user.id)
    if not records:
        console.print("[yellow]No resumes. Create one with `resume-builder new`.[/yellow]")
        return
    table = Table(title="My Resumes")
    table.add_column("ID")
    table.add_column("Title")
    table.add_column("Created")
    for record in records:
        table.add_row(record.id, record.title, record.created_at.strftime("%Y-%m-%d"))
    console.print(table)


@app.command()
def new(
    title: str = typer.Argument("Untitled Resume", help="Resume title"),
    email: str = typer.Option(..., "--email", help="Account email"),
    password: str = typer.Option(..., prompt=True, hide_input=True),
    source: Path = typer.Option(None, "--from", help="Initial document (JSON)"),
) -> None:
    """Create a resume record, optionally from an existing document."""
    config = load_config()
    context = _sign_in(config, email, password)
    doc = _load_document(source) if source else None
    record = ResumeStore(config.store.resolved_db_path).create_resume(
        context.user.id, title=title, document=doc
    )
    console.print(f"[green]Created resume {record.id} ({record.title})[/green]")


if __name__ == "__main__":
    app()
