from enum import Enum


class GameStatus(Enum):
    """Session lifecycle states."""
    WELCOME = "welcome"
    PLAYING = "playing"
    WON = "won"
    LOST_TIME = "lost_time"
    LOST_BUDGET = "lost_budget"
    LOST_DEATH = "lost_death"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATUSES


class EventType(Enum):
    """Categories of entries in the in-game event log."""
    INTERVENTION = "intervention"
    CHANGE = "change"
    SYSTEM = "system"
    CRITICAL = "critical"


TERMINAL_STATUSES = frozenset({
    GameStatus.WON,
    GameStatus.LOST_TIME,
    GameStatus.LOST_BUDGET,
    GameStatus.LOST_DEATH,
})
