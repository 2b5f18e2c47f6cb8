from __future__ import annotations

import argparse
import asyncio
from datetime import datetime, timezone

from millionaire.db.session import SessionLocal
from millionaire.services.user_profiles import UserEmailTakenError, register_user


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create a player and print its API token.")
    parser.add_argument("--name", required=True)
    parser.add_argument("--email", required=True)
    return parser.parse_args(argv)


async def _run(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    try:
        async with SessionLocal.begin() as session:
            user, token = await register_user(
                session,
                name=args.name,
                email=args.email,
                now_utc=datetime.now(timezone.utc),
            )
    except UserEmailTakenError:
        print(f"user_create failed: email already registered: {args.email}")  # noqa: T201
        return 1

    print(f"user_create user_id={user.id} api_token={token}")  # noqa: T201
    return 0


def main() -> int:
    return asyncio.run(_run())


if __name__ == "__main__":
    raise SystemExit(main())
