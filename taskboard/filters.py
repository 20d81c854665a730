"""
Filter pipeline applied to each lane before render.

Pure functions: they never reorder or mutate, and always return a fresh
tuple.
"""
from typing import Iterable, Tuple, Dict, Any

from .schema import BoardSnapshot, Category, FilterCategory, FilterCriteria, Task


def matches(task: Task, criteria: FilterCriteria) -> bool:
    """True when the task passes every active criterion."""
    if criteria.category != FilterCategory.ALL:
        if task.category.value.lower() != criteria.category.value:
            return False

    # Exact string match on the ISO date, not a range
    if criteria.due_date and task.due_date != criteria.due_date:
        return False

    if criteria.search_query:
        needle = criteria.search_query.lower()
        return needle in task.title.lower() or needle in task.description.lower()

    return True


def filter_tasks(lane: Iterable[Task], criteria: FilterCriteria) -> Tuple[Task, ...]:
    return tuple(task for task in lane if matches(task, criteria))


def filter_board(board: BoardSnapshot, criteria: FilterCriteria) -> BoardSnapshot:
    """Filter each lane independently."""
    return BoardSnapshot(
        todo=filter_tasks(board.todo, criteria),
        in_progress=filter_tasks(board.in_progress, criteria),
        completed=filter_tasks(board.completed, criteria),
    )


def board_stats(board: BoardSnapshot) -> Dict[str, Any]:
    """Counts by lane and category, plus checked tasks."""
    stats: Dict[str, Any] = {
        "total": len(board),
        "by_lane": {lane.value: len(tasks) for lane, tasks in board.lanes()},
        "by_category": {category.value: 0 for category in Category},
        "checked": 0,
    }
    for task in board.all_tasks():
        stats["by_category"][task.category.value] += 1
        if task.is_checked:
            stats["checked"] += 1
    return stats
