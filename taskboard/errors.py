"""
Task board exceptions.

Every failure in the board engine raises one of these and leaves the
board in its last valid state.
"""
from typing import Dict, Optional


class BoardError(Exception):
    """Base class for task board errors."""
    pass


class ConfigError(BoardError):
    """Raised when configuration is invalid or incomplete."""
    pass


class ValidationError(BoardError):
    """Raised when a task payload fails validation."""

    def __init__(self, errors: Dict[str, str]):
        self.errors = dict(errors)
        super().__init__("; ".join(self.errors.values()))


class NotFoundError(BoardError):
    """Raised when an operation references a task id absent from the board."""

    def __init__(self, task_id: str):
        self.task_id = task_id
        super().__init__(f"Task {task_id} not found")


class InvalidMoveError(BoardError):
    """Raised when a move uses stale or out-of-range lane positions."""
    pass


class IdentityError(BoardError):
    """Raised when the id generator cannot produce an unused id."""

    def __init__(self, message: str, task_id: Optional[str] = None):
        self.task_id = task_id
        super().__init__(message)
