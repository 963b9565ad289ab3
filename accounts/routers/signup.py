from __future__ import annotations

from fastapi import APIRouter, Depends, Form
from fastapi.responses import HTMLResponse, RedirectResponse

from accounts.dependencies import get_account_service
from accounts.routers import views
from accounts.services.account_service import AccountService, SignupForm
from accounts.services.session_service import issue_session, set_session_cookie

router = APIRouter(prefix="", tags=["signup"])


@router.get("/signup", response_class=HTMLResponse)
def signup_form():
    return HTMLResponse(views.signup_page({}))


@router.post("/signup")
def signup_submit(
    username: str = Form(""),
    email: str = Form(""),
    password: str = Form(""),
    confirm_password: str = Form(""),
    first_name: str = Form(""),
    last_name: str = Form(""),
    service: AccountService = Depends(get_account_service),
):
    form = SignupForm(
        username=username,
        email=email,
        password=password,
        confirm_password=confirm_password,
        first_name=first_name,
        last_name=last_name,
    )
    result = service.signup(form)
    if not result.ok:
        values = {"username": username, "email": email, "first_name": first_name, "last_name": last_name}
        return HTMLResponse(views.signup_page(values, result))
    response = RedirectResponse("/account", status_code=303)
    set_session_cookie(response, issue_session(result.account.id))
    return response
