"""
Board change notifications.

The store emits one event after each successful mutation so the
presentation layer can re-apply filters and re-render:

    task_created   task=Task
    task_updated   task=Task           (edit, toggle)
    task_moved     task=Task, source=LanePosition, destination=LanePosition
    task_deleted   task=Task
"""
import logging
from typing import Callable, Dict, List

logger = logging.getLogger(__name__)

EVENT_TYPES = ("task_created", "task_updated", "task_moved", "task_deleted")


class BoardEvents:
    """Routes board mutations to subscriber callbacks."""

    def __init__(self):
        self.subscribers: Dict[str, List[Callable]] = {}  # event_type -> list of callbacks

    def subscribe(self, event_type: str, callback: Callable) -> None:
        """Register a callback for an event type."""
        if event_type not in EVENT_TYPES:
            raise ValueError(f"Unknown event type: {event_type}")
        self.subscribers.setdefault(event_type, []).append(callback)

    def unsubscribe(self, event_type: str, callback: Callable) -> None:
        callbacks = self.subscribers.get(event_type, [])
        if callback in callbacks:
            callbacks.remove(callback)

    def emit(self, event_type: str, **kwargs) -> None:
        """Emit an event to all subscribers. A failing subscriber does not stop the rest."""
        for callback in list(self.subscribers.get(event_type, [])):
            try:
                callback(**kwargs)
            except Exception:
                logger.exception(f"Error in {event_type} callback")
