from __future__ import annotations

import base64
import time
import uuid

from sqlalchemy import BigInteger, Boolean, Index, String, text
from sqlalchemy.orm import Mapped, mapped_column

from backend.app.config import prefixed
from backend.app.db import Base


# -------------------------
# Helpers
# -------------------------

# Type prefix for rows that are not blocks, boards, users, etc.
ID_TYPE_NONE = "7"

_B32_STANDARD = "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567"
_B32_LOWER = "ybndrfg8ejkmcpqxot1uwisza345h769"
_B32_TRANSLATION = str.maketrans(_B32_STANDARD, _B32_LOWER)


def new_id(id_type: str = ID_TYPE_NONE) -> str:
    """
    27 character opaque id: one type character followed by a random UUID in
    unpadded lowercase base32 (26 characters).
    """
    encoded = base64.b32encode(uuid.uuid4().bytes).decode("ascii").rstrip("=")
    return id_type + encoded.translate(_B32_TRANSLATION)


def get_millis() -> int:
    return time.time_ns() // 1_000_000


# -------------------------
# Categories
# -------------------------

class Category(Base):
    """
    User-scoped grouping label for boards within a team.
    Owned by the category store; the membership store only reads it.
    """
    __tablename__ = prefixed("categories")
    __table_args__ = (
        Index(f"ix_{prefixed('categories')}_user_team", "user_id", "team_id"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    user_id: Mapped[str] = mapped_column(String(36), nullable=False)
    team_id: Mapped[str] = mapped_column(String(36), nullable=False)

    # custom | system
    type: Mapped[str] = mapped_column(String(10), nullable=False, default="custom")
    collapsed: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        server_default=text("false"),
        default=False,
    )

    create_at: Mapped[int] = mapped_column(BigInteger, nullable=False, default=get_millis)
    update_at: Mapped[int] = mapped_column(BigInteger, nullable=False, default=get_millis)
    delete_at: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)


class CategoryBoard(Base):
    """
    Per user mapping: board_id -> category_id.

    Rows are soft-deleted (delete_at != 0) and re-activated in place, so there
    is at most one row per (user_id, board_id). The (user_id, board_id) index
    is intentionally NOT unique: a duplicate must stay detectable.
    """
    __tablename__ = prefixed("category_boards")
    __table_args__ = (
        Index(f"ix_{prefixed('category_boards')}_user_board", "user_id", "board_id"),
        Index(f"ix_{prefixed('category_boards')}_category_delete", "category_id", "delete_at"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(String(36), nullable=False)
    category_id: Mapped[str] = mapped_column(String(36), nullable=False)
    board_id: Mapped[str] = mapped_column(String(36), nullable=False)

    create_at: Mapped[int] = mapped_column(BigInteger, nullable=False, default=get_millis)
    update_at: Mapped[int] = mapped_column(BigInteger, nullable=False, default=get_millis)
    delete_at: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
