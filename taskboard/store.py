"""
In-memory task board store.

TaskBoard owns the three lane lists and is the only code that mutates
them. Every mutation either applies completely or raises and leaves the
lanes as they were. Readers get immutable BoardSnapshots, never the
lists themselves.
"""
import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from .errors import IdentityError, InvalidMoveError, NotFoundError, ValidationError
from .events import BoardEvents
from .filters import filter_board
from .ids import IdGenerator, RandomIds, SequentialIds, make_id_generator
from .moves import LanePosition, MoveRequest, apply_move, resolve_drop
from .sample import sample_tasks
from .schema import BoardSnapshot, Category, FilterCriteria, Lane, Status, Task
from .validation import FormValidator, ValidationResult, canonical_fields

logger = logging.getLogger(__name__)


def _form_fields(task: Task) -> Dict[str, Any]:
    return {
        "title": task.title,
        "description": task.description,
        "category": task.category.value.lower(),
        "dueDate": task.due_date,
        "status": task.status.value,
        "attachments": list(task.attachments),
    }


class TaskBoard:
    """Lane-partitioned, ordered task collection."""

    MAX_ID_DRAWS = 8

    def __init__(
        self,
        id_generator: Optional[IdGenerator] = None,
        validator: Optional[FormValidator] = None,
        events: Optional[BoardEvents] = None,
    ):
        self._lanes: Dict[Lane, List[Task]] = {lane: [] for lane in Lane}
        self.new_id = id_generator or RandomIds()
        self.validator = validator or FormValidator()
        self.events = events or BoardEvents()

    @classmethod
    def from_config(cls, config) -> "TaskBoard":
        """Build a board from BoardConfig, seeding the demo tasks if asked."""
        board = cls(
            id_generator=make_id_generator(config.id_scheme, config.id_prefix),
            validator=FormValidator(Category.from_str(config.default_category)),
        )
        if config.seed_sample_tasks:
            board.load(sample_tasks())
            if config.id_scheme == "sequential":
                board.new_id = SequentialIds.after(
                    (t.id for t in board.get_board().all_tasks()), config.id_prefix
                )
        return board

    def load(self, tasks: Iterable[Task]) -> None:
        """
        Replace the board contents. Each task lands in the lane its status names.

        Tasks pass through the form validator first, so a loaded task is
        always editable; "Today" due dates are stored as the current date.
        """
        lanes: Dict[Lane, List[Task]] = {lane: [] for lane in Lane}
        seen = set()
        for task in tasks:
            if task.id in seen:
                raise IdentityError(f"Duplicate task id: {task.id}", task.id)
            seen.add(task.id)
            result = self.validator.validate(_form_fields(task))
            data = self._checked(result, f"load of {task.id}")
            task = task.with_changes(
                title=data["title"],
                description=data["description"],
                category=data["category"],
                due_date=data["dueDate"],
                attachments=data["attachments"],
            )
            lanes[task.status.lane].append(task)
        self._lanes = lanes
        logger.info(f"Board loaded with {len(seen)} tasks")

    # ──────────────────────────────────────────
    # Queries
    # ──────────────────────────────────────────

    def get_board(self) -> BoardSnapshot:
        return BoardSnapshot(
            todo=tuple(self._lanes[Lane.TODO]),
            in_progress=tuple(self._lanes[Lane.IN_PROGRESS]),
            completed=tuple(self._lanes[Lane.COMPLETED]),
        )

    def get_filtered_board(self, criteria: FilterCriteria) -> BoardSnapshot:
        return filter_board(self.get_board(), criteria)

    def find(self, task_id: str) -> Tuple[Lane, int]:
        """Return (lane, index) of a task."""
        for lane, tasks in self._lanes.items():
            for index, task in enumerate(tasks):
                if task.id == task_id:
                    return lane, index
        raise NotFoundError(task_id)

    def get(self, task_id: str) -> Task:
        lane, index = self.find(task_id)
        return self._lanes[lane][index]

    def form_data(self, task_id: str) -> Dict[str, Any]:
        """Editable fields of a task, shaped like an edit form payload."""
        return _form_fields(self.get(task_id))

    def validate(self, payload: Mapping[str, Any]) -> ValidationResult:
        return self.validator.validate(payload)

    def __len__(self) -> int:
        return sum(len(tasks) for tasks in self._lanes.values())

    def __contains__(self, task_id: str) -> bool:
        return any(task.id == task_id for tasks in self._lanes.values() for task in tasks)

    # ──────────────────────────────────────────
    # Mutations
    # ──────────────────────────────────────────

    def create(self, payload: Mapping[str, Any]) -> Task:
        """Validate a new task payload and append it to the tail of todo."""
        data = self._checked(self.validator.validate(payload), "create")
        task = Task(
            id=self._fresh_id(),
            title=data["title"],
            description=data["description"],
            category=data["category"],
            due_date=data["dueDate"],
            status=Status.TODO,
            is_checked=False,
            attachments=data["attachments"],
        )
        self._lanes[Lane.TODO].append(task)
        logger.info(f"Task created: {task.id} ({task.title!r})")
        self.events.emit("task_created", task=task)
        return task

    def quick_add(self, title: str) -> Task:
        """Create a WORK task due today from just a title."""
        return self.create({
            "title": title,
            "dueDate": "today",
            "category": Category.WORK.value,
        })

    def edit(self, task_id: str, patch: Mapping[str, Any]) -> Task:
        """
        Merge a patch into a task.

        A status change moves the task to the tail of the new lane; any
        other edit keeps its position. id and isChecked are never edited
        here.
        """
        lane, index = self.find(task_id)
        current = self._lanes[lane][index]
        merged = {**self.form_data(task_id), **canonical_fields(patch)}
        data = self._checked(self.validator.validate(merged), "edit")

        updated = current.with_changes(
            title=data["title"],
            description=data["description"],
            category=data["category"],
            due_date=data["dueDate"],
            status=data.get("status", current.status),
            attachments=data["attachments"],
        )
        if updated.status == current.status:
            self._lanes[lane][index] = updated
        else:
            del self._lanes[lane][index]
            self._lanes[updated.status.lane].append(updated)
            logger.info(
                f"Task {task_id} moved {current.status.value} → {updated.status.value} by edit"
            )
        logger.info(f"Task edited: {task_id}")
        self.events.emit("task_updated", task=updated)
        return updated

    def toggle_checked(self, task_id: str) -> Task:
        lane, index = self.find(task_id)
        task = self._lanes[lane][index]
        updated = task.with_changes(is_checked=not task.is_checked)
        self._lanes[lane][index] = updated
        logger.info(f"Task {task_id} checked={updated.is_checked}")
        self.events.emit("task_updated", task=updated)
        return updated

    def delete(self, task_id: str) -> Task:
        """Remove a task from whichever lane holds it; returns the removed task."""
        try:
            lane, index = self.find(task_id)
        except NotFoundError:
            logger.warning(f"Delete of unknown task {task_id}")
            raise
        task = self._lanes[lane].pop(index)
        logger.info(f"Task deleted: {task_id}")
        self.events.emit("task_deleted", task=task)
        return task

    def move(
        self,
        task_id: Optional[str],
        source: LanePosition,
        destination: Optional[LanePosition],
    ) -> Optional[Task]:
        """
        Drag-and-drop primitive.

        Returns the moved task, or None for a drop outside every lane.
        Raises InvalidMoveError (board unchanged) for stale or
        out-of-range positions.
        """
        request = MoveRequest(source=source, destination=destination, task_id=task_id)
        if request.is_noop:
            return None
        try:
            new_lanes, moved = apply_move(self._lanes, request)
        except InvalidMoveError as e:
            logger.warning(f"Move rejected: {e}")
            raise
        self._lanes = new_lanes
        logger.info(
            f"Task {moved.id} moved {source.lane.value}[{source.index}] → "
            f"{destination.lane.value}[{destination.index}]"
        )
        self.events.emit("task_moved", task=moved, source=source, destination=destination)
        return moved

    def apply_drop(self, result: Mapping[str, Any]) -> Optional[Task]:
        """Apply a drag-end result as delivered by the UI's drag library."""
        request = resolve_drop(result)
        return self.move(request.task_id, request.source, request.destination)

    # ──────────────────────────────────────────
    # Internals
    # ──────────────────────────────────────────

    def _checked(self, result: ValidationResult, action: str) -> Dict[str, Any]:
        if not result.ok:
            logger.warning(f"Rejected {action}: {result.errors}")
            raise ValidationError(result.errors)
        return result.payload

    def _fresh_id(self) -> str:
        """Draw ids until one is unused on this board."""
        for _ in range(self.MAX_ID_DRAWS):
            candidate = self.new_id()
            if candidate not in self:
                return candidate
            logger.warning(f"Id generator returned an id already in use: {candidate}")
        raise IdentityError(f"No unused id after {self.MAX_ID_DRAWS} draws")
