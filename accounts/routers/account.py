from __future__ import annotations

from fastapi import APIRouter, Depends, Form
from fastapi.responses import HTMLResponse, RedirectResponse

from accounts.dependencies import get_account_service, get_principal
from accounts.domain import NotFoundError
from accounts.routers import views
from accounts.services.account_service import AccountService, PasswordForm, ProfileForm
from accounts.services.session_service import Principal, clear_session_cookie

router = APIRouter(prefix="", tags=["account"])


def _profile_values(account) -> dict:
    return {
        "username": account.username,
        "email": account.email,
        "first_name": account.first_name,
        "last_name": account.last_name,
    }


def _general_error():
    # the session points at an account that no longer resolves
    response = HTMLResponse(views.error_page())
    clear_session_cookie(response)
    return response


@router.get("/account", response_class=HTMLResponse)
def account_info(
    principal: Principal = Depends(get_principal),
    service: AccountService = Depends(get_account_service),
):
    account = service.get_account(principal)
    if isinstance(account, NotFoundError):
        return _general_error()
    return HTMLResponse(views.account_info_page(account))


@router.get("/account/update", response_class=HTMLResponse)
def profile_form(
    principal: Principal = Depends(get_principal),
    service: AccountService = Depends(get_account_service),
):
    account = service.get_account(principal)
    if isinstance(account, NotFoundError):
        return _general_error()
    return HTMLResponse(views.profile_page(_profile_values(account), form_modified=False))


@router.api_route("/account/update", methods=["POST", "PUT"])
def profile_submit(
    username: str = Form(""),
    email: str = Form(""),
    first_name: str = Form(""),
    last_name: str = Form(""),
    principal: Principal = Depends(get_principal),
    service: AccountService = Depends(get_account_service),
):
    form = ProfileForm(username=username, email=email, first_name=first_name, last_name=last_name)
    result = service.update_profile(principal, form)
    if result.not_found:
        return _general_error()
    if not result.ok:
        values = {"username": username, "email": email, "first_name": first_name, "last_name": last_name}
        return HTMLResponse(views.profile_page(values, result, form_modified=True))
    return RedirectResponse("/account", status_code=303)


@router.get("/account/password", response_class=HTMLResponse)
def password_form(
    principal: Principal = Depends(get_principal),
    service: AccountService = Depends(get_account_service),
):
    account = service.get_account(principal)
    if isinstance(account, NotFoundError):
        return _general_error()
    return HTMLResponse(views.password_page(form_modified=False))


@router.api_route("/account/password", methods=["POST", "PUT"])
def password_submit(
    old_password: str = Form(""),
    new_password: str = Form(""),
    confirm_new_password: str = Form(""),
    principal: Principal = Depends(get_principal),
    service: AccountService = Depends(get_account_service),
):
    form = PasswordForm(old_password=old_password, new_password=new_password, confirm_new_password=confirm_new_password)
    result = service.update_password(principal, form)
    if result.not_found:
        return _general_error()
    if not result.ok:
        return HTMLResponse(views.password_page(result, form_modified=True))
    return RedirectResponse("/account", status_code=303)


@router.get("/error-general", response_class=HTMLResponse)
def error_general():
    return HTMLResponse(views.error_page())
