from __future__ import annotations

from typing import List

from sqlalchemy import and_, select
from sqlalchemy.exc import SQLAlchemyError

from backend.app.db import Executor
from backend.app.domain.contracts import CategoryContract
from backend.app.models import Category
from backend.app.services.store_errors import ExecutionError

categories_table = Category.__table__


def list_for_user_and_team(db: Executor, user_id: str, team_id: str) -> List[CategoryContract]:
    """Active categories of a user within a team, oldest first."""
    query = (
        select(categories_table)
        .where(
            and_(
                categories_table.c.user_id == user_id,
                categories_table.c.team_id == team_id,
                categories_table.c.delete_at == 0,
            )
        )
        .order_by(categories_table.c.create_at.asc(), categories_table.c.id.asc())
    )
    try:
        rows = db.execute(query).mappings().all()
    except SQLAlchemyError as exc:
        raise ExecutionError("list_for_user_and_team", exc, user_id=user_id, team_id=team_id) from exc

    return [CategoryContract.model_validate(dict(row)) for row in rows]
