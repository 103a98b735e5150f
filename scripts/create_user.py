"""Create an identity that can create and be assigned tasks.

Usage:
    python -m scripts.create_user <company_id> <screen_name> [first_name] [last_name]
Prints the new user id. Uses DATABASE_URL from the environment or .env.
"""

import asyncio
import sys

from tasks_management.infrastructure.persistence import database
from tasks_management.infrastructure.persistence.repositories import UserRepository


async def main() -> None:
    """Create the user in its own transaction."""
    if len(sys.argv) < 3:
        print(
            "Usage: python -m scripts.create_user <company_id> <screen_name> [first_name] [last_name]",
            file=sys.stderr,
        )
        sys.exit(1)
    company_id = int(sys.argv[1])
    screen_name = sys.argv[2]
    first_name = sys.argv[3] if len(sys.argv) > 3 else ""
    last_name = sys.argv[4] if len(sys.argv) > 4 else ""

    database.ensure_engine()
    assert database.AsyncSessionLocal is not None
    try:
        async with database.AsyncSessionLocal() as session:
            async with session.begin():
                user = await UserRepository(session).create_user(
                    company_id=company_id,
                    screen_name=screen_name,
                    first_name=first_name,
                    last_name=last_name,
                )
        print(f"Created user: {user.user_id} ({user.screen_name}) in company {company_id}")
    finally:
        await database.dispose_engine()


if __name__ == "__main__":
    asyncio.run(main())
