"""Identity and session models."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel


class User(BaseModel):
    id: str
    email: str
    created_at: datetime


class Session(BaseModel):
    user: User
    access_token: str
    expires_at: datetime

    @property
    def user_id(self) -> str:
        return self.user.id

    @property
    def expired(self) -> bool:
        return datetime.now(timezone.utc) >= self.expires_at
