#!/usr/bin/env python3
"""
Create an account directly in the database, applying the signup rules.

Usage:
  python scripts/add_account.py --email user@example.com --username user --password 's3cret-pass' \
      [--first-name Ann] [--last-name Lee]
"""
from __future__ import annotations

import argparse
import sys

from accounts.services.account_service import AccountService, SignupForm


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Create an account")
    ap.add_argument("--email", required=True, help="Account email (stored lower-cased)")
    ap.add_argument("--username", required=True, help="Display username")
    ap.add_argument("--password", required=True, help="Plaintext password (hashed before storing)")
    ap.add_argument("--first-name", default="", help="First name (defaults to the username)")
    ap.add_argument("--last-name", default="", help="Last name (defaults to the username)")
    args = ap.parse_args(argv)

    form = SignupForm(
        username=args.username,
        email=args.email,
        password=args.password,
        confirm_password=args.password,
        first_name=args.first_name or args.username,
        last_name=args.last_name or args.username,
    )
    result = AccountService().signup(form)
    if not result.ok:
        for err in result.errors:
            sys.stderr.write(f"Error ({err.field}): {err.message}\n")
        return 1

    print("OK: account created")
    print(f"  ID: {result.account.id}")
    print(f"  Email: {result.account.email}")
    return 0


if __name__ == "__main__":
    try:
        raise SystemExit(main())
    except Exception as exc:  # pragma: no cover - CLI usage
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
