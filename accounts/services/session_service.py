"""Session helpers (issue tokens, cookies, principal lookup)."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Request, Response

from accounts.core.config import get_settings
from accounts.repositories.sql_repository import SQLRepository

SESSION_COOKIE_NAME = "session"


@dataclass(frozen=True)
class Principal:
    """Authenticated caller: the account id and its canonical email."""

    account_id: Optional[str]
    email: str


def issue_session(account_id: str) -> str:
    """Create a new session token and persist it in the SQL store."""
    settings = get_settings()
    ttl = settings.session_ttl_seconds
    expires_at = datetime.now(timezone.utc) + timedelta(seconds=ttl)
    return SQLRepository().create_session(account_id, expires_at)


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns.
    return value.astimezone(timezone.utc) if value.tzinfo else value.replace(tzinfo=timezone.utc)


def current_principal(request: Request) -> Principal | None:
    """Return the principal bound to the current session cookie, if any."""
    token = request.cookies.get(SESSION_COOKIE_NAME)
    if not token:
        return None

    repo = SQLRepository()
    entity = repo.get_session_entity(token)
    if not entity:
        return None
    if entity.expires_at and _as_utc(entity.expires_at) < datetime.now(timezone.utc):
        repo.delete_session(token)
        return None
    account = repo.get_account(entity.account_id)
    if not account:
        return None
    return Principal(account_id=account.id, email=account.email)


def set_session_cookie(response: Response, token: str) -> None:
    settings = get_settings()
    secure_cookie = settings.app_env == "prod"
    response.set_cookie(
        SESSION_COOKIE_NAME,
        token,
        httponly=True,
        secure=secure_cookie,
        samesite="strict",
        max_age=settings.session_ttl_seconds,
        path="/",
    )



def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(SESSION_COOKIE_NAME, path="/")
