"""Create the database schema and seed a demo account with sample fragrances."""

from __future__ import annotations

import argparse
import asyncio

from fragshelf.db.session import get_session_factory, init_db
from fragshelf.monitoring.logging import configure_logging
from fragshelf.services import AccountService, CollectionService, UsernameTakenError
from fragshelf.services.seed import seed_collection


async def seed(username: str, password: str) -> int:
    await init_db()
    accounts = AccountService()
    async with get_session_factory()() as session:
        try:
            user = await accounts.signup(session, username=username, password=password)
        except UsernameTakenError:
            user = await accounts.login(session, username=username, password=password)
        fragrances = await seed_collection(session, CollectionService(), owner=user)
    return len(fragrances)


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--username", default="demo")
    parser.add_argument("--password", default="demo123")
    args = parser.parse_args()

    configure_logging()
    count = asyncio.run(seed(args.username, args.password))
    print(f"{args.username}: {count} fragrances in collection")


if __name__ == "__main__":
    main()
