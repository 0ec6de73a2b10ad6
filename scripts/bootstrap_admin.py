#!/usr/bin/env python3
"""Emit deterministic SQL that grants a careers-builder role in Supabase app metadata."""

from __future__ import annotations

import argparse


def _quote_sql(value: str) -> str:
    escaped = value.replace("'", "''")
    return f"'{escaped}'"


def render_sql(*, role: str, user_id: str | None, email: str | None) -> str:
    role_value = _quote_sql(role)

    if user_id:
        target_where = f"id = {_quote_sql(user_id)}::uuid"
    else:
        assert email is not None
        target_where = f"email = {_quote_sql(email)}"

    return f"""-- Supabase role bootstrap SQL
-- Run this in the Supabase SQL editor (or equivalent privileged Postgres session).
-- app_metadata is not user-writable, so this is the only way to grant admin.

update auth.users
set raw_app_meta_data = coalesce(raw_app_meta_data, '{{}}'::jsonb) || jsonb_build_object('role', {role_value})
where {target_where};
"""


def main() -> None:
    parser = argparse.ArgumentParser(description="Emit SQL to grant a careers-builder role in Supabase.")
    parser.add_argument(
        "--role",
        choices=["admin", "recruiter", "candidate"],
        default="admin",
        help="Role to assign in auth.users.raw_app_meta_data.role",
    )
    identity_group = parser.add_mutually_exclusive_group(required=True)
    identity_group.add_argument("--user-id", help="Supabase auth.users id (UUID)")
    identity_group.add_argument("--email", help="Supabase auth.users email")
    args = parser.parse_args()

    print(render_sql(role=args.role, user_id=args.user_id, email=args.email))


if __name__ == "__main__":
    main()
