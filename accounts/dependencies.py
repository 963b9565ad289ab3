"""FastAPI dependencies shared by the account routers."""
from __future__ import annotations

from fastapi import HTTPException, Request

from accounts.services.account_service import AccountService
from accounts.services.session_service import Principal, current_principal


def get_principal(request: Request) -> Principal:
    """Require an authenticated caller; tests override this dependency."""
    principal = current_principal(request)
    if principal is None:
        raise HTTPException(401, "Login required.")
    return principal


def get_account_service() -> AccountService:
    return AccountService()
