"""
Infrastructure layer: in-memory behavior store.
"""
from collections import defaultdict
from typing import Dict, Iterable, List, Set
import threading

from app.domain.models import BehaviorEvent


class InMemoryBehaviorStore:
    """
    Behavior events and stated goals kept in process memory.

    Events are only ever appended. A user is known to the store once they
    have an event or stated goals.
    """

    def __init__(self):
        self._events: Dict[str, List[BehaviorEvent]] = defaultdict(list)
        self._goals: Dict[str, Set[str]] = {}
        self._lock = threading.Lock()

    def append(self, event: BehaviorEvent) -> None:
        with self._lock:
            self._events[event.user_id].append(event)

    def events_for(self, user_id: str) -> List[BehaviorEvent]:
        with self._lock:
            return list(self._events.get(user_id, []))

    def user_ids(self) -> Iterable[str]:
        with self._lock:
            return sorted(set(self._events) | set(self._goals))

    def set_goals(self, user_id: str, goals: Set[str]) -> None:
        with self._lock:
            self._goals[user_id] = set(goals)

    def goals_for(self, user_id: str) -> Set[str]:
        with self._lock:
            return set(self._goals.get(user_id, set()))
