#!/usr/bin/env python3
"""Seed a local account for manual testing."""
import argparse
import asyncio

from sqlalchemy import select

from app.core.security import get_password_hash
from app.database import async_session_factory, init_db
from app.models.user import User


async def create_test_user(email: str, password: str, name: str) -> None:
    """Create the account unless the email is already registered."""
    await init_db()

    async with async_session_factory() as db:
        result = await db.execute(select(User).where(User.email == email.lower()))
        existing_user = result.scalar_one_or_none()

        if existing_user:
            print(f"User already exists: {existing_user.email} ({existing_user.id})")
            return

        user = User(
            email=email.lower(),
            name=name,
            password_hash=get_password_hash(password),
        )
        db.add(user)
        await db.commit()
        await db.refresh(user)

        print("Test user created successfully!")
        print(f"  Email: {user.email}")
        print(f"  Password: {password}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Create a ClipVox test user")
    parser.add_argument("--email", default="test@example.com")
    parser.add_argument("--password", default="password123")
    parser.add_argument("--name", default="Test Narrator")
    args = parser.parse_args()

    asyncio.run(create_test_user(args.email, args.password, args.name))


if __name__ == "__main__":
    main()
