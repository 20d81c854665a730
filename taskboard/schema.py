"""
Task board schema.

A board holds three ordered lanes:
  todo → inProgress → completed

Each lane maps to exactly one task status, and a task's status always
names the lane that holds it. Lane order is display order only.
"""
from enum import Enum
from dataclasses import dataclass, field, replace
from typing import Optional, Tuple, Dict, Any, Iterator, Mapping


class Status(Enum):
    """Task status. Each status is tied to one lane."""
    TODO = "TO-DO"
    IN_PROGRESS = "IN-PROGRESS"
    COMPLETED = "COMPLETED"

    @classmethod
    def from_str(cls, value: str) -> "Status":
        """Accept either the wire value ("IN-PROGRESS") or the member name."""
        if isinstance(value, cls):
            return value
        text = str(value).strip().upper()
        for member in cls:
            if text in (member.value, member.name):
                return member
        raise ValueError(f"Invalid status: {value}")

    @property
    def lane(self) -> "Lane":
        return _STATUS_LANES[self]


class Lane(Enum):
    """Board lanes, keyed the way the UI names its droppable areas."""
    TODO = "todo"
    IN_PROGRESS = "inProgress"
    COMPLETED = "completed"

    @classmethod
    def from_str(cls, value: str) -> "Lane":
        if isinstance(value, cls):
            return value
        for member in cls:
            if value in (member.value, member.name):
                return member
        raise ValueError(f"Invalid lane: {value}")

    @property
    def status(self) -> Status:
        """Canonical status of tasks held in this lane."""
        return _LANE_STATUSES[self]


_LANE_STATUSES = {
    Lane.TODO: Status.TODO,
    Lane.IN_PROGRESS: Status.IN_PROGRESS,
    Lane.COMPLETED: Status.COMPLETED,
}
_STATUS_LANES = {status: lane for lane, status in _LANE_STATUSES.items()}


class Category(Enum):
    """Task category."""
    WORK = "WORK"
    PERSONAL = "PERSONAL"

    @classmethod
    def from_str(cls, value: Optional[str]) -> "Category":
        """Case-insensitive lookup; blank means WORK."""
        if isinstance(value, cls):
            return value
        if not value:
            return cls.WORK
        try:
            return cls[str(value).strip().upper()]
        except KeyError:
            raise ValueError(f"Invalid category: {value}")


class FilterCategory(Enum):
    """Category choice in the filter bar."""
    ALL = "all"
    WORK = "work"
    PERSONAL = "personal"

    @classmethod
    def from_str(cls, value: Optional[str]) -> "FilterCategory":
        if not value:
            return cls.ALL
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.ALL


@dataclass(frozen=True)
class Task:
    """One task on the board. Frozen: the store swaps in updated copies."""

    id: str
    title: str
    due_date: str                   # ISO YYYY-MM-DD
    description: str = ""
    category: Category = Category.WORK
    status: Status = Status.TODO
    is_checked: bool = False
    attachments: Tuple[str, ...] = field(default_factory=tuple)

    def with_changes(self, **changes: Any) -> "Task":
        if "attachments" in changes:
            changes["attachments"] = tuple(changes["attachments"])
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with the UI's camelCase keys."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "category": self.category.value,
            "dueDate": self.due_date,
            "status": self.status.value,
            "isChecked": self.is_checked,
            "attachments": list(self.attachments),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Task":
        """Deserialize from dict. Accepts "date" as an alias for dueDate."""
        return cls(
            id=str(data["id"]),
            title=data.get("title", ""),
            description=data.get("description") or "",
            category=Category.from_str(data.get("category")),
            due_date=data.get("dueDate") or data.get("date") or "",
            status=Status.from_str(data.get("status", Status.TODO.value)),
            is_checked=bool(data.get("isChecked", False)),
            attachments=tuple(data.get("attachments") or ()),
        )


@dataclass(frozen=True)
class FilterCriteria:
    """Transient filter bar state, recomputed on every render."""

    category: FilterCategory = FilterCategory.ALL
    due_date: str = ""
    search_query: str = ""

    @property
    def is_empty(self) -> bool:
        return (
            self.category == FilterCategory.ALL
            and not self.due_date
            and not self.search_query
        )

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> "FilterCriteria":
        """Build criteria from query args or a filter bar payload."""
        return cls(
            category=FilterCategory.from_str(params.get("category")),
            due_date=(params.get("dueDate") or "").strip(),
            search_query=params.get("searchQuery") or params.get("q") or "",
        )


@dataclass(frozen=True)
class BoardSnapshot:
    """Immutable view of the three lanes at one point in time."""

    todo: Tuple[Task, ...] = ()
    in_progress: Tuple[Task, ...] = ()
    completed: Tuple[Task, ...] = ()

    def lane(self, lane: Lane) -> Tuple[Task, ...]:
        if lane == Lane.TODO:
            return self.todo
        if lane == Lane.IN_PROGRESS:
            return self.in_progress
        return self.completed

    def lanes(self) -> Iterator[Tuple[Lane, Tuple[Task, ...]]]:
        for lane in Lane:
            yield lane, self.lane(lane)

    def all_tasks(self) -> Tuple[Task, ...]:
        return self.todo + self.in_progress + self.completed

    def __len__(self) -> int:
        return len(self.todo) + len(self.in_progress) + len(self.completed)

    def to_dict(self) -> Dict[str, Any]:
        return {lane.value: [t.to_dict() for t in tasks] for lane, tasks in self.lanes()}
