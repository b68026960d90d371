from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from sqlalchemy import and_, insert, select, update
from sqlalchemy.exc import SQLAlchemyError

from backend.app.db import Executor
from backend.app.domain.contracts import CategoryBoardsContract
from backend.app.models import CategoryBoard, get_millis, new_id
from backend.app.services import category_service
from backend.app.services.store_errors import DuplicateMappingError, ExecutionError, RowScanError

logger = logging.getLogger(__name__)

category_boards_table = CategoryBoard.__table__

# Legacy wire value for "no category". Only translated at the boundary.
LEGACY_UNCATEGORIZED = "0"


def parse_category_ref(raw: Optional[str]) -> Optional[str]:
    """Map an incoming category reference to a category id, or None for "uncategorized"."""
    if raw is None:
        return None
    value = raw.strip()
    if not value:
        raise ValueError("category reference must not be blank")
    if value == LEGACY_UNCATEGORIZED:
        return None
    return value


def list_user_category_boards(db: Executor, user_id: str, team_id: str) -> List[CategoryBoardsContract]:
    categories = category_service.list_for_user_and_team(db, user_id, team_id)

    out: List[CategoryBoardsContract] = []
    for category in categories:
        board_ids = get_category_board_ids(db, category.id)
        out.append(CategoryBoardsContract(category=category, board_ids=board_ids))
    return out


def get_category_board_ids(db: Executor, category_id: str) -> List[str]:
    query = select(category_boards_table.c.board_id).where(
        and_(
            category_boards_table.c.category_id == category_id,
            category_boards_table.c.delete_at == 0,
        )
    )
    try:
        rows = db.execute(query).all()
    except SQLAlchemyError as exc:
        raise ExecutionError("get_category_board_ids", exc, category_id=category_id) from exc

    return _board_ids_from_rows(rows, category_id)


def _board_ids_from_rows(rows: Iterable, category_id: str) -> List[str]:
    board_ids: List[str] = []
    for row in rows:
        board_id = row[0] if row else None
        if not isinstance(board_id, str) or not board_id:
            raise RowScanError("get_category_board_ids", category_id=category_id, row=tuple(row or ()))
        board_ids.append(board_id)
    return board_ids


def assign_board_to_category(
    db: Executor,
    user_id: str,
    category_id: Optional[str],
    board_id: str,
) -> None:
    """
    Move a board into one of the user's categories. category_id=None means
    "uncategorized" and soft-deletes the mapping instead.

    Reuses the existing row for (user, board) when there is one, including a
    soft-deleted row, so create_at survives re-categorization.
    """
    if category_id is None:
        remove_board_from_category(db, user_id, board_id)
        return

    rows_affected = _update_user_category_board(db, user_id, board_id, category_id)

    if rows_affected > 1:
        raise DuplicateMappingError(
            "assign_board_to_category",
            rows_affected,
            user_id=user_id,
            board_id=board_id,
            category_id=category_id,
        )

    if rows_affected == 0:
        # first categorization of this board by this user
        _add_user_category_board(db, user_id, category_id, board_id)


def _update_user_category_board(db: Executor, user_id: str, board_id: str, category_id: str) -> int:
    stmt = (
        update(category_boards_table)
        .where(
            and_(
                category_boards_table.c.user_id == user_id,
                category_boards_table.c.board_id == board_id,
            )
        )
        .values(category_id=category_id, delete_at=0, update_at=get_millis())
    )
    try:
        res = db.execute(stmt)
    except SQLAlchemyError as exc:
        raise ExecutionError(
            "assign_board_to_category",
            exc,
            user_id=user_id,
            board_id=board_id,
            category_id=category_id,
        ) from exc

    rows_affected = int(getattr(res, "rowcount", 0) or 0)
    if rows_affected == 1:
        logger.debug(
            "[category_boards] moved board=%s user=%s category=%s",
            board_id,
            user_id,
            category_id,
        )
    return rows_affected


def _add_user_category_board(db: Executor, user_id: str, category_id: str, board_id: str) -> None:
    now = get_millis()
    stmt = insert(category_boards_table).values(
        id=new_id(),
        user_id=user_id,
        category_id=category_id,
        board_id=board_id,
        create_at=now,
        update_at=now,
        delete_at=0,
    )
    try:
        db.execute(stmt)
    except SQLAlchemyError as exc:
        raise ExecutionError(
            "assign_board_to_category",
            exc,
            user_id=user_id,
            board_id=board_id,
            category_id=category_id,
        ) from exc

    logger.debug(
        "[category_boards] created mapping board=%s user=%s category=%s",
        board_id,
        user_id,
        category_id,
    )


def remove_board_from_category(db: Executor, user_id: str, board_id: str) -> None:
    """Soft-delete the active mapping, if any. Safe to call repeatedly."""
    now = get_millis()
    stmt = (
        update(category_boards_table)
        .where(
            and_(
                category_boards_table.c.user_id == user_id,
                category_boards_table.c.board_id == board_id,
                category_boards_table.c.delete_at == 0,
            )
        )
        .values(delete_at=now, update_at=now)
    )
    try:
        db.execute(stmt)
    except SQLAlchemyError as exc:
        raise ExecutionError(
            "remove_board_from_category",
            exc,
            user_id=user_id,
            board_id=board_id,
        ) from exc
