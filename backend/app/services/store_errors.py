from __future__ import annotations

from typing import Any, Dict, Optional


class CategoryBoardStoreError(Exception):
    """
    Base error for the category stores.

    Carries the failing operation and the ids it was called with so the caller
    can log the failure once with full context.
    """

    default_message = "category board store error"

    def __init__(
        self,
        operation: str,
        message: Optional[str] = None,
        **context: Any,
    ) -> None:
        self.operation = operation
        self.context: Dict[str, Any] = context
        self.message = message or self.default_message
        super().__init__(self.message)

    def __str__(self) -> str:
        if not self.context:
            return f"{self.operation}: {self.message}"
        ids = " ".join(f"{key}={value}" for key, value in self.context.items())
        return f"{self.operation}: {self.message} ({ids})"


class ExecutionError(CategoryBoardStoreError):
    """The backend rejected or failed a statement. The driver error is kept as `orig`."""

    default_message = "statement execution failed"

    def __init__(self, operation: str, orig: BaseException, **context: Any) -> None:
        self.orig = orig
        super().__init__(operation, f"{self.default_message}: {orig}", **context)


class DuplicateMappingError(CategoryBoardStoreError):
    default_message = "duplicate entries found for user-board-category mapping"

    def __init__(self, operation: str, rows_affected: int, **context: Any) -> None:
        self.rows_affected = rows_affected
        super().__init__(operation, rows_affected=rows_affected, **context)


class RowScanError(CategoryBoardStoreError):
    default_message = "could not decode board id from result row"
