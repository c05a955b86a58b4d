"""
Seed a user record for local development.

Usage: python init_user.py <user_id> [--email EMAIL] [--name NAME] [--admin] [--balance AMOUNT]
"""
import argparse
import asyncio

from topup_server.core.security import create_access_token
from topup_server.infrastructure.database.session import dispose_engine, init_db, session_scope
from topup_server.modules.ledger import BalanceAction, BalanceLedger
from topup_server.modules.users import UserAlreadyExistsError, UserCreateInput, UserService


async def create_user(args: argparse.Namespace) -> None:
    await init_db()

    async with session_scope() as db:
        service = UserService.with_session(db)
        try:
            user = await service.create_user(
                UserCreateInput(
                    id=args.user_id,
                    email=args.email,
                    display_name=args.name,
                    role="admin" if args.admin else "user",
                )
            )
        except UserAlreadyExistsError:
            print(f"User already exists: {args.user_id}")
            return

        if args.balance:
            ledger = BalanceLedger.with_session(db)
            await ledger.apply(user.id, args.balance, BalanceAction.SET, reason="Initial balance")

        print(f"User created: {user.id} ({user.role})")
        print(f"Bearer token: {create_access_token(user.id, user.role)}")


async def run(args: argparse.Namespace) -> None:
    try:
        await create_user(args)
    finally:
        await dispose_engine()


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed a top-up server user")
    parser.add_argument("user_id")
    parser.add_argument("--email")
    parser.add_argument("--name")
    parser.add_argument("--admin", action="store_true")
    parser.add_argument("--balance", type=int, default=0)
    asyncio.run(run(parser.parse_args()))


if __name__ == "__main__":
    main()
