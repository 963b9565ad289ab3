"""Server-rendered pages for the account area."""
from __future__ import annotations

import html
from typing import Mapping, Optional

from accounts.db.models import Account
from accounts.services.account_service import AccountResult


def _e(value: object) -> str:
    return html.escape(str(value or ""), quote=True)


def _page(view: str, title: str, body: str, *, form_modified: Optional[bool] = None) -> str:
    modified = "" if form_modified is None else f" data-form-modified='{str(form_modified).lower()}'"
    return f"""
    <!doctype html><html lang='en'><head>
      <meta charset='utf-8'><meta name='viewport' content='width=device-width,initial-scale=1'>
      <title>{_e(title)}</title>
    </head><body>
      <main class='wrap' data-view='{_e(view)}'{modified}>
        <h1>{_e(title)}</h1>
        {body}
      </main>
    </body></html>
    """


def _errors(result: Optional[AccountResult], field: str) -> str:
    if not result:
        return ""
    return "".join(
        f"<p class='banner bad' data-error-field='{_e(field)}'>{_e(err.message)}</p>"
        for err in result.errors_for(field)
    )


def _input(name: str, label: str, value: str = "", *, kind: str = "text", result: Optional[AccountResult] = None) -> str:
    value_attr = "" if kind == "password" else f" value='{_e(value)}'"
    return (
        f"<label for='{name}'>{_e(label)}</label>"
        f"<input id='{name}' name='{name}' type='{kind}'{value_attr}>"
        f"{_errors(result, name)}"
    )


def signup_page(values: Mapping[str, str], result: Optional[AccountResult] = None) -> str:
    body = f"""
    <form method='post' action='/signup' class='grid'>
      {_input("username", "Username", values.get("username", ""), result=result)}
      {_input("email", "Email", values.get("email", ""), kind="email", result=result)}
      {_input("first_name", "First name", values.get("first_name", ""), result=result)}
      {_input("last_name", "Last name", values.get("last_name", ""), result=result)}
      {_input("password", "Password", kind="password", result=result)}
      {_input("confirm_password", "Confirm password", kind="password", result=result)}
      <button class='btn'>Sign up</button>
    </form>
    """
    return _page("account/signup", "Sign up", body)


def account_info_page(account: Account) -> str:
    body = f"""
    <dl class='acc-info'>
      <dt>Username</dt><dd>{_e(account.username)}</dd>
      <dt>Email</dt><dd>{_e(account.email)}</dd>
      <dt>First name</dt><dd>{_e(account.first_name)}</dd>
      <dt>Last name</dt><dd>{_e(account.last_name)}</dd>
    </dl>
    <p><a class='btn' href='/account/update'>Edit profile</a>
       <a class='btn' href='/account/password'>Change password</a></p>
    """
    return _page("account/acc-info", "Account", body)


def profile_page(values: Mapping[str, str], result: Optional[AccountResult] = None, *, form_modified: bool) -> str:
    body = f"""
    <form method='post' action='/account/update' class='grid'>
      {_input("username", "Username", values.get("username", ""), result=result)}
      {_input("email", "Email", values.get("email", ""), kind="email", result=result)}
      {_input("first_name", "First name", values.get("first_name", ""), result=result)}
      {_input("last_name", "Last name", values.get("last_name", ""), result=result)}
      <button class='btn'>Save</button>
    </form>
    """
    return _page("account/prof-update", "Update profile", body, form_modified=form_modified)


def password_page(result: Optional[AccountResult] = None, *, form_modified: bool) -> str:
    body = f"""
    <form method='post' action='/account/password' class='grid'>
      {_input("old_password", "Current password", kind="password", result=result)}
      {_input("new_password", "New password", kind="password", result=result)}
      {_input("confirm_new_password", "Confirm new password", kind="password", result=result)}
      <button class='btn'>Update password</button>
    </form>
    """
    return _page("account/pass-update", "Change password", body, form_modified=form_modified)


def error_page() -> str:
    body = "<p>Something went wrong. Please try again later.</p><p><a class='muted' href='/account'>Back</a></p>"
    return _page("/error-general", "Error", body)
