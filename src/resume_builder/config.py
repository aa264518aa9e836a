"""Application configuration loaded from config.yaml."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml


@dataclass(frozen=True)
class LLMConfig:
    model: str = "claude-haiku-4-5-20251001"
    max_tokens: int = 1024
    temperature: float = 0.7
    max_retries: int = 0
    timeout: int = 60

    def __post_init__(self) -> None:
        if not 1 <= self.timeout <= 600:
            raise ValueError(f"llm.timeout must be between 1 and 600, got {self.timeout}")
        if not 0 <= self.max_retries <= 10:
            raise ValueError(f"llm.max_retries must be between 0 and 10, got {self.max_retries}")
        if not 0.0 <= self.temperature <= 1.0:
            raise ValueError(f"llm.temperature must be between 0 and 1, got {self.temperature}")
        if self.max_tokens < 1:
            raise ValueError(f"llm.max_tokens must be positive, got {self.max_tokens}")


@dataclass(frozen=True)
class ExportConfig:
    page_format: str = "letter"
    orientation: str = "portrait"
    margin_in: float = 1.0
    image_quality: float = 0.98
    scale: int = 2
    theme: str = "professional"

    def __post_init__(self) -> None:
        if self.orientation not in ("portrait", "landscape"):
            raise ValueError(f"export.orientation must be portrait or landscape, got {self.orientation!r}")
        if not 0.0 < self.image_quality <= 1.0:
            raise ValueError(f"export.image_quality must be in (0, 1], got {self.image_quality}")
        if not 1 <= self.scale <= 4:
            raise ValueError(f"export.scale must be between 1 and 4, got {self.scale}")
        if self.margin_in < 0:
            raise ValueError(f"export.margin_in must not be negative, got {self.margin_in}")


@dataclass(frozen=True)
class StoreConfig:
    db_path: str = "~/.resume-builder/resumes.db"

    @property
    def resolved_db_path(self) -> Path:
        return Path(self.db_path).expanduser()


@dataclass(frozen=True)
class AuthConfig:
    min_password_length: int = 8
    min_strength_score: int = 3
    token_ttl_minutes: int = 60
    secret_key: str = "change-me-in-production"

    def __post_init__(self) -> None:
        if not 0 <= self.min_strength_score <= 4:
            raise ValueError(
                f"auth.min_strength_score must be between 0 and 4, got {self.min_strength_score}"
            )
        if self.min_password_length < 1:
            raise ValueError(
                f"auth.min_password_length must be positive, got {self.min_password_length}"
            )
        if self.token_ttl_minutes < 1:
            raise ValueError(
                f"auth.token_ttl_minutes must be positive, got {self.token_ttl_minutes}"
            )

    @property
    def resolved_secret_key(self) -> str:
        return os.environ.get("RESUME_BUILDER_SECRET", self.secret_key)


@dataclass(frozen=True)
class AppConfig:
    llm: LLMConfig = field(default_factory=LLMConfig)
    export: ExportConfig = field(default_factory=ExportConfig)
    store: StoreConfig = field(default_factory=StoreConfig)
    auth: AuthConfig = field(default_factory=AuthConfig)


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load config from YAML file, falling back to defaults."""
    if path is None:
        # Look for config.yaml relative to the project root
        candidates = [
            Path.cwd() / "config.yaml",
            Path(__file__).resolve().parent.parent.parent / "config.yaml",
        ]
        for c in candidates:
            if c.exists():
                path = c
                break

    raw: dict = {}
    if path is not None:
        p = Path(path)
        if p.exists():
            raw = yaml.safe_load(p.read_text()) or {}

    return AppConfig(
        llm=LLMConfig(**raw.get("llm", {})),
        export=ExportConfig(**raw.get("export", {})),
        store=StoreConfig(**raw.get("store", {})),
        auth=AuthConfig(**raw.get("auth", {})),
    )
