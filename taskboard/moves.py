"""
Move resolver: turns a drag-and-drop result into a lane splice.

A move removes the task at source.index from the source lane (later
tasks shift up), inserts it at destination.index in the destination
lane (later tasks shift down), and relabels its status with the
destination lane's status. Same-lane reorders follow the same path.
Any lane may move to any lane.

Nothing here touches the store: apply_move works on copies and returns
new lane lists, so a rejected move leaves the caller's lanes untouched.
"""
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from .errors import InvalidMoveError
from .schema import Lane, Task

Lanes = Mapping[Lane, Sequence[Task]]


@dataclass(frozen=True)
class LanePosition:
    """Index of a slot within one lane."""

    lane: Lane
    index: int

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LanePosition":
        """Parse a drag library location: {"droppableId": "todo", "index": 2}."""
        if not isinstance(data, Mapping):
            raise InvalidMoveError(f"Invalid lane position: {data!r}")
        raw_lane = data.get("droppableId", data.get("lane"))
        try:
            lane = Lane.from_str(raw_lane)
        except ValueError:
            raise InvalidMoveError(f"Unknown lane: {raw_lane}") from None
        index = data.get("index")
        if isinstance(index, bool) or not isinstance(index, int):
            raise InvalidMoveError(f"Invalid index: {index!r}")
        return cls(lane, index)

    def to_dict(self) -> Dict[str, Any]:
        return {"droppableId": self.lane.value, "index": self.index}


@dataclass(frozen=True)
class MoveRequest:
    """A resolved drop. destination is None when dropped outside any lane."""

    source: LanePosition
    destination: Optional[LanePosition]
    task_id: Optional[str] = None

    @property
    def is_noop(self) -> bool:
        return self.destination is None


def resolve_drop(result: Mapping[str, Any]) -> MoveRequest:
    """Build a MoveRequest from a drag-end result."""
    if "source" not in result:
        raise InvalidMoveError("Drop result has no source")
    destination = result.get("destination")
    task_id = result.get("draggableId")
    return MoveRequest(
        source=LanePosition.from_dict(result["source"]),
        destination=LanePosition.from_dict(destination) if destination is not None else None,
        task_id=str(task_id) if task_id is not None else None,
    )


def apply_move(lanes: Lanes, request: MoveRequest) -> Tuple[Dict[Lane, List[Task]], Optional[Task]]:
    """
    Compute the lanes after a move.

    Returns (new_lanes, moved_task). A no-op drop returns copies of the
    input lanes and None.

    Raises:
        InvalidMoveError when an index is out of range or the task at the
        source index is not request.task_id (indices computed against an
        older board).
    """
    new_lanes = {lane: list(lanes.get(lane, ())) for lane in Lane}
    if request.is_noop:
        return new_lanes, None

    source, destination = request.source, request.destination
    source_lane = new_lanes[source.lane]
    if not 0 <= source.index < len(source_lane):
        raise InvalidMoveError(
            f"No task at {source.lane.value}[{source.index}] "
            f"(lane has {len(source_lane)})"
        )
    if request.task_id is not None and source_lane[source.index].id != request.task_id:
        raise InvalidMoveError(
            f"Stale move: {source.lane.value}[{source.index}] is "
            f"{source_lane[source.index].id}, not {request.task_id}"
        )

    # Bound the destination against the lane as it will be after removal
    dest_size = len(new_lanes[destination.lane])
    if destination.lane == source.lane:
        dest_size -= 1
    if not 0 <= destination.index <= dest_size:
        raise InvalidMoveError(
            f"Destination {destination.lane.value}[{destination.index}] "
            f"out of range (0..{dest_size})"
        )

    task = source_lane.pop(source.index)
    moved = task.with_changes(status=destination.lane.status)
    new_lanes[destination.lane].insert(destination.index, moved)
    return new_lanes, moved
