from typing import List, Optional

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (QDialog, QDialogButtonBox, QFrame, QHBoxLayout,
                               QLabel, QListWidget, QListWidgetItem, QVBoxLayout)

from nephrosim.core.state import Scenario
from nephrosim.core.utils import format_clock, format_number
from .styles import COLORS, get_dialog_style, get_frame_style, get_list_style


class ScenarioSelectDialog(QDialog):
    """Welcome dialog: pick the clinical scenario to play."""
    def __init__(self, scenarios: List[Scenario], parent=None):
        super().__init__(parent)
        self.setWindowTitle("NephroSim - Select Scenario")
        self.setModal(True)
        self.scenarios = list(scenarios)
        self.result_data: Optional[Scenario] = None
        self.setMinimumWidth(640)

        self.setStyleSheet(get_dialog_style())

        self.init_ui()

    def init_ui(self):
        layout = QVBoxLayout(self)
        layout.setSpacing(12)
        layout.setContentsMargins(16, 12, 16, 16)

        # Header
        header = QFrame()
        header.setStyleSheet(get_frame_style(bg_color=COLORS['card'], border_color=COLORS['border']))
        header_layout = QHBoxLayout(header)
        header_layout.setContentsMargins(12, 8, 12, 8)

        lbl_title = QLabel("Welcome to NephroSim")
        lbl_title.setStyleSheet(f"font-size: 18px; font-weight: 700; color: {COLORS['primary']};")
        header_layout.addWidget(lbl_title)

        lbl_subtitle = QLabel("Select a clinical scenario to begin.")
        lbl_subtitle.setStyleSheet(f"font-size: 12px; color: {COLORS['text_secondary']};")
        header_layout.addWidget(lbl_subtitle)
        header_layout.addStretch()

        layout.addWidget(header)

        self.list_scenarios = QListWidget()
        self.list_scenarios.setStyleSheet(get_list_style())
        for scenario in self.scenarios:
            item = QListWidgetItem(
                f"{scenario.title}\n{scenario.description}\n"
                f"Budget ${format_number(scenario.initial_budget)}  •  "
                f"Time {format_clock(scenario.time_limit)}"
            )
            item.setData(Qt.UserRole, scenario.id)
            self.list_scenarios.addItem(item)
        self.list_scenarios.itemDoubleClicked.connect(lambda _item: self.accept())
        layout.addWidget(self.list_scenarios)

        buttons = QDialogButtonBox(QDialogButtonBox.Ok | QDialogButtonBox.Cancel)
        buttons.button(QDialogButtonBox.Ok).setText("Start Scenario")
        buttons.accepted.connect(self.accept)
        buttons.rejected.connect(self.reject)
        layout.addWidget(buttons)

        if self.scenarios:
            self.list_scenarios.setCurrentRow(0)

    def accept(self):
        row = self.list_scenarios.currentRow()
        if row < 0:
            return
        self.result_data = self.scenarios[row]
        super().accept()
