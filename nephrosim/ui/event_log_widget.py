from typing import Iterable

from PySide6.QtGui import QBrush, QColor, QFont
from PySide6.QtWidgets import QGroupBox, QListWidget, QListWidgetItem, QVBoxLayout

from nephrosim.core.enums import EventType
from nephrosim.core.state import GameEvent
from nephrosim.core.utils import format_clock
from .styles import COLORS, EVENT_COLORS, get_groupbox_style, get_list_style


class EventLogWidget(QGroupBox):
    """Newest-first list of game events, colored by event type."""
    def __init__(self):
        super().__init__("Event Log")
        self.setStyleSheet(get_groupbox_style(COLORS['info']))
        layout = QVBoxLayout(self)
        self.list = QListWidget()
        self.list.setStyleSheet(get_list_style())
        layout.addWidget(self.list)
        self._shown = ()

    def update_events(self, events: Iterable[GameEvent]):
        events = tuple(events)
        if events == self._shown:
            return
        self._shown = events
        self.list.clear()
        for event in events:
            item = QListWidgetItem(f"[{format_clock(event.time)}] {event.message}")
            item.setForeground(QBrush(QColor(EVENT_COLORS.get(event.type.value, COLORS['text']))))
            if event.type in (EventType.INTERVENTION, EventType.CRITICAL):
                font = QFont(item.font())
                font.setBold(True)
                item.setFont(font)
            self.list.addItem(item)

    def messages(self):
        return [self.list.item(i).text() for i in range(self.list.count())]
