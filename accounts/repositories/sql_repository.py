"""High-level data access helpers backed by SQLAlchemy."""
from __future__ import annotations

import logging
import secrets
import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import select, update, delete
from sqlalchemy.exc import IntegrityError

from accounts.db.models import Account, UserSession
from accounts.db.session import get_session

logger = logging.getLogger(__name__)


class EmailTakenError(Exception):
    """Raised when the unique index on accounts.email rejects a write."""

    def __init__(self, email: str):
        super().__init__(f"email already in use: {email}")
        self.email = email


class SQLRepository:
    """CRUD helpers wrapping the SQLAlchemy session."""

    # -------------------------- accounts --------------------------
    def find_by_email(self, email: str) -> Optional[Account]:
        """Exact match on the stored (canonical) email; callers normalize first."""
        with get_session() as session:
            stmt = select(Account).where(Account.email == email)
            return session.execute(stmt).scalar_one_or_none()

    def get_account(self, account_id: str) -> Optional[Account]:
        with get_session() as session:
            return session.get(Account, account_id)

    def list_accounts(self) -> list[Account]:
        with get_session() as session:
            return session.execute(select(Account).order_by(Account.created_at)).scalars().all()

    def create_account(
        self,
        email: str,
        username: str,
        password_hash: str,
        first_name: str,
        last_name: str,
    ) -> Account:
        now = datetime.now(timezone.utc)
        entity = Account(
            id=uuid.uuid4().hex,
            email=email,
            username=username,
            first_name=first_name,
            last_name=last_name,
            password_hash=password_hash,
            created_at=now,
            updated_at=now,
        )
        with get_session() as session:
            session.add(entity)
            try:
                session.commit()
            except IntegrityError as exc:
                session.rollback()
                logger.warning("Unique email violation on create: %s", email)
                raise EmailTakenError(email) from exc
            session.refresh(entity)
            return entity

    def update_profile(
        self,
        account_id: str,
        *,
        username: str,
        first_name: str,
        last_name: str,
        email: str | None = None,
    ) -> Optional[Account]:
        """
        Apply a profile update in one transaction.

        `email=None` keeps the stored email. Returns None when the account no
        longer exists; raises EmailTakenError (after rolling back) when the new
        email collides with another row.
        """
        with get_session() as session:
            account = session.get(Account, account_id)
            if not account:
                return None
            account.username = username
            account.first_name = first_name
            account.last_name = last_name
            if email is not None:
                account.email = email
            account.updated_at = datetime.now(timezone.utc)
            try:
                session.commit()
            except IntegrityError as exc:
                session.rollback()
                logger.warning("Unique email violation on update of account %s", account_id)
                raise EmailTakenError(email or "") from exc
            session.refresh(account)
            return account

    def update_password(self, account_id: str, password_hash: str) -> None:
        with get_session() as session:
            stmt = (
                update(Account)
                .where(Account.id == account_id)
                .values(password_hash=password_hash, updated_at=datetime.now(timezone.utc))
            )
            session.execute(stmt)
            session.commit()

    # -------------------------- sessions --------------------------
    def create_session(self, account_id: str, expires_at: datetime) -> str:
        token = secrets.token_urlsafe(32)
        entity = UserSession(token=token, account_id=account_id, expires_at=expires_at)
        with get_session() as session:
            session.add(entity)
            session.commit()
        return token

    def get_session_entity(self, token: str) -> Optional[UserSession]:
        with get_session() as session:
            return session.get(UserSession, token)

    def delete_session(self, token: str) -> None:
        with get_session() as session:
            session.execute(delete(UserSession).where(UserSession.token == token))
            session.commit()
