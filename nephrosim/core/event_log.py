from collections import deque
from typing import List

from .constants import LOG_CAPACITY
from .enums import EventType
from .state import GameEvent


class EventLog:
    """
    Bounded, newest-first record of game events.

    New entries go to the front; once `capacity` is exceeded the oldest
    entry falls off the back.
    """
    def __init__(self, capacity: int = LOG_CAPACITY):
        if capacity < 1:
            raise ValueError("EventLog capacity must be at least 1")
        self.capacity = capacity
        self._events = deque(maxlen=capacity)

    def add(self, time: int, message: str, event_type: EventType) -> GameEvent:
        event = GameEvent(time=time, message=message, type=event_type)
        self._events.appendleft(event)
        return event

    def entries(self) -> List[GameEvent]:
        """Events, newest first."""
        return list(self._events)

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self):
        return iter(self._events)
