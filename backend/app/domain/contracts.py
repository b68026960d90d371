from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict


class CategoryContract(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    user_id: str
    team_id: str
    type: str = "custom"
    collapsed: bool = False
    create_at: int
    update_at: int
    delete_at: int = 0


class CategoryBoardsContract(BaseModel):
    """A category together with the boards currently filed under it for one user."""

    category: CategoryContract
    board_ids: List[str]
