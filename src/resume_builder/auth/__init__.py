"""Identity, sessions and the registration password policy."""
from resume_builder.auth.identity import AuthError, IdentityProvider
from resume_builder.auth.password_policy import PasswordReport, evaluate_password
from resume_builder.auth.session import AuthEvent, SessionContext, require_session

__all__ = [
    "AuthError",
    "AuthEvent",
    "IdentityProvider",
    "PasswordReport",
    "SessionContext",
    "evaluate_password",
    "require_session",
]
