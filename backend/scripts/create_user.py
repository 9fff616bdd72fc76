#!/usr/bin/env python
"""Create a user account for signing in to the directory."""

import argparse
import asyncio

from directory_api.database import async_session_maker, engine
from directory_api.exceptions import UserAlreadyExistsError, WeakPasswordError
from directory_api.services.auth_service import AuthService


async def create_user(email: str, password: str, name: str) -> bool:
    """Create a user account."""
    async with async_session_maker() as session:
        service = AuthService(session)
        try:
            result = await service.register(name=name, email=email, password=password)
        except WeakPasswordError as e:
            print(f"Password validation failed: {e.errors}")
            return False
        except UserAlreadyExistsError:
            print(f"User {email} already exists")
            return False

        await session.commit()
        print(f"User created: {result.user.email}")
        return True


async def main(args: argparse.Namespace) -> int:
    try:
        created = await create_user(args.email, args.password, args.name)
    finally:
        await engine.dispose()
    return 0 if created else 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create a user account")
    parser.add_argument("--email", required=True, help="Email address")
    parser.add_argument("--password", required=True, help="Password")
    parser.add_argument("--name", required=True, help="Display name")
    raise SystemExit(asyncio.run(main(parser.parse_args())))
