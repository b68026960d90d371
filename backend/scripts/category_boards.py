from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Optional, Sequence

from sqlalchemy.orm import sessionmaker

from backend.app.config import database_url
from backend.app.services.store_errors import CategoryBoardStoreError

logger = logging.getLogger("category_boards")


def _load_database_url(cli_url: Optional[str]) -> str:
    url = cli_url or database_url()
    if not url:
        raise RuntimeError("No --url or DATABASE_URL configured.")
    return url


def _category_arg(value: str) -> str:
    if not value.strip():
        raise argparse.ArgumentTypeError("must not be blank; use '0' for uncategorized")
    return value


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Inspect and edit per-user board categories.")
    parser.add_argument("--url", help="Override the database URL.")
    parser.add_argument(
        "--create-tables",
        action="store_true",
        help="Create missing tables before running (sqlite convenience).",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_list = sub.add_parser("list", help="Print a user's categories and their boards.")
    p_list.add_argument("--user", required=True)
    p_list.add_argument("--team", required=True)

    p_assign = sub.add_parser("assign", help="Move a board into a category ('0' = uncategorized).")
    p_assign.add_argument("--user", required=True)
    p_assign.add_argument("--board", required=True)
    p_assign.add_argument("--category", required=True, type=_category_arg)

    p_remove = sub.add_parser("remove", help="Take a board out of its category.")
    p_remove.add_argument("--user", required=True)
    p_remove.add_argument("--board", required=True)

    return parser


def _run(db, args: argparse.Namespace) -> None:
    from backend.app.services import category_board_service

    if args.command == "list":
        for entry in category_board_service.list_user_category_boards(db, args.user, args.team):
            boards = ", ".join(sorted(entry.board_ids)) or "-"
            print(f"{entry.category.name} [{entry.category.id}]: {boards}")
        return

    if args.command == "assign":
        category_id = category_board_service.parse_category_ref(args.category)
        category_board_service.assign_board_to_category(db, args.user, category_id, args.board)
    elif args.command == "remove":
        category_board_service.remove_board_from_category(db, args.user, args.board)
    db.commit()
    print("OK")


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _build_parser().parse_args(argv)

    url = _load_database_url(args.url)
    # backend.app.db builds its engine from DATABASE_URL at import time
    os.environ.setdefault("DATABASE_URL", url)
    from backend.app.db import Base, build_engine
    from backend.app import models  # noqa: F401

    engine = build_engine(url)
    if args.create_tables:
        Base.metadata.create_all(bind=engine)

    Session = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
    session = Session()
    try:
        _run(session, args)
    except CategoryBoardStoreError as exc:
        session.rollback()
        logger.error("%s failed: %s", exc.operation, exc)
        return 1
    finally:
        session.close()
        engine.dispose()
    return 0


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s [%(name)s] %(message)s")
    sys.exit(main())
