"""Local identity provider: SQLite account store with JWT access tokens."""

from __future__ import annotations

import hashlib
import hmac
import logging
import re
import secrets
import sqlite3
import uuid
from datetime import datetime, timedelta, timezone
from pathlib import Path

import jwt

from resume_builder.auth.password_policy import MIN_LENGTH, MIN_STRENGTH_SCORE, evaluate_password
from resume_builder.models.auth import Session, User

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = Path.home() / ".resume-builder" / "resumes.db"
ALGORITHM = "HS256"

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

# scrypt work factors
_SCRYPT_N = 2**14
_SCRYPT_R = 8
_SCRYPT_P = 1


class AuthError(Exception):
    """Sign-up, sign-in or session failure. The message is safe to show to users."""


def hash_password(password: str, salt: bytes | None = None) -> str:
    salt = salt or secrets.token_bytes(16)
    digest = hashlib.scrypt(password.encode("utf-8"), salt=salt, n=_SCRYPT_N, r=_SCRYPT_R, p=_SCRYPT_P)
    return f"{salt.hex()}${digest.hex()}"


def verify_password(password: str, stored: str) -> bool:
    salt_hex, _, digest_hex = stored.partition("$")
    try:
        salt = bytes.fromhex(salt_hex)
    except ValueError:
        return False
    expected = hash_password(password, salt).partition("$")[2]
    return hmac.compare_digest(expected, digest_hex)


class IdentityProvider:
    """Stores accounts and issues signed, expiring access tokens."""

    def __init__(
        self,
        db_path: str | Path = DEFAULT_DB_PATH,
        secret_key: str = "change-me-in-production",
        token_ttl_minutes: int = 60,
        min_password_length: int = MIN_LENGTH,
        min_strength_score: int = MIN_STRENGTH_SCORE,
    ):
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self.secret_key = secret_key
        self.token_ttl = timedelta(minutes=token_ttl_minutes)
        self.min_password_length = min_password_length
        self.min_strength_score = min_strength_score
        self._init_db()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self.db_path))
        conn.execute("PRAGMA journal_mode=WAL")
        return conn

    def _init_db(self) -> None:
        with self._connect() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS users (
                    id TEXT PRIMARY KEY,
                    email TEXT NOT NULL UNIQUE,
                    password_hash TEXT NOT NULL,
                    created_at TEXT NOT NULL
                )
            """)

    def sign_up(self, email: str, password: str) -> User:
        """Register a new account. Raises AuthError when the request is rejected."""
        email = email.strip().lower()
        if not _EMAIL_RE.match(email):
            raise AuthError("Unable to validate email address: invalid format")
        report = evaluate_password(password, self.min_password_length, self.min_strength_score)
        if not report.can_submit:
            raise AuthError("Password does not meet the requirements")

        user = User(id=str(uuid.uuid4()), email=email, created_at=datetime.now(timezone.utc))
        try:
            with self._connect() as conn:
                conn.execute(
                    "INSERT INTO users (id, email, password_hash, created_at) VALUES (?, ?, ?, ?)",
                    (user.id, user.email, hash_password(password), user.created_at.isoformat()),
                )
        except sqlite3.IntegrityError:
            raise AuthError("User already registered") from None
        logger.info("Registered user %s", user.id)
        return user

    def sign_in(self, email: str, password: str) -> Session:
        email = email.strip().lower()
        with self._connect() as conn:
            row = conn.execute(
                "SELECT id, email, password_hash, created_at FROM users WHERE email = ?",
                (email,),
            ).fetchone()
        if row is None or not verify_password(password, row[2]):
            raise AuthError("Invalid login credentials")
        user = User(id=row[0], email=row[1], created_at=datetime.fromisoformat(row[3]))
        return self._issue(user)

    def _issue(self, user: User) -> Session:
        now = datetime.now(timezone.utc)
        expires_at = now + self.token_ttl
        token = jwt.encode(
            {"sub": user.id, "email": user.email, "iat": now, "exp": expires_at},
            self.secret_key,
            algorithm=ALGORITHM,
        )
        return Session(user=user, access_token=token, expires_at=expires_at)

    def get_user(self, user_id: str) -> User | None:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT id, email, created_at FROM users WHERE id = ?", (user_id,)
            ).fetchone()
        if row is None:
            return None
        return User(id=row[0], email=row[1], created_at=datetime.fromisoformat(row[2]))

    def verify(self, token: str) -> Session | None:
        """Return the session for a valid token, or None if it is invalid or expired."""
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[ALGORITHM])
        except jwt.ExpiredSignatureError:
            return None
        except jwt.InvalidTokenError:
            return None
        user = self.get_user(payload.get("sub", ""))
        if user is None:
            return None
        expires_at = datetime.fromtimestamp(payload["exp"], tz=timezone.utc)
        return Session(user=user, access_token=token, expires_at=expires_at)
