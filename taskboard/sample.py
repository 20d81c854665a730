"""Demo board shown on first launch when seed_sample_tasks is enabled."""
from typing import List

from .schema import Task

SAMPLE_TASKS = [
    {"id": "1", "title": "Interview with Design Team", "dueDate": "2025-01-09", "status": "TO-DO", "category": "WORK"},
    {"id": "2", "title": "Team Meeting", "dueDate": "2024-12-30", "status": "TO-DO", "category": "PERSONAL"},
    {"id": "3", "title": "Design a Dashboard page along with wireframes", "dueDate": "2024-12-31", "status": "TO-DO", "category": "WORK"},
    {"id": "4", "title": "Morning Workout", "dueDate": "2024-12-30", "status": "IN-PROGRESS", "category": "WORK"},
    {"id": "5", "title": "Code Review", "dueDate": "2024-12-30", "status": "IN-PROGRESS", "category": "PERSONAL"},
    {"id": "6", "title": "Update Task Tracker", "dueDate": "2024-12-25", "status": "IN-PROGRESS", "category": "WORK"},
    {"id": "7", "title": "Submit Project Proposal", "dueDate": "2024-12-30", "status": "COMPLETED", "category": "WORK", "isChecked": True},
    {"id": "8", "title": "Birthday Gift Shopping", "dueDate": "2024-12-30", "status": "COMPLETED", "category": "PERSONAL", "isChecked": True},
    {"id": "9", "title": "Client Presentation", "dueDate": "2024-12-25", "status": "COMPLETED", "category": "WORK", "isChecked": True},
]


def sample_tasks() -> List[Task]:
    return [Task.from_dict(data) for data in SAMPLE_TASKS]
