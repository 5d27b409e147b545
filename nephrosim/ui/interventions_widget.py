from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QColor
from PySide6.QtWidgets import QComboBox, QGroupBox, QLabel, QPushButton, QVBoxLayout

from nephrosim.core.state import Scenario
from nephrosim.core.utils import format_number
from .styles import COLORS, get_button_style, get_groupbox_style


class InterventionPanelWidget(QGroupBox):
    """
    Intervention picker: a selector listing every scenario intervention with
    its cost, and an Apply button that emits `intervention_requested`.

    Entries the budget cannot cover are greyed out but stay selectable; the
    engine decides what happens when they are applied.
    """
    intervention_requested = Signal(str)

    def __init__(self, scenario: Scenario):
        super().__init__("Interventions")
        self.scenario = scenario
        self.setStyleSheet(get_groupbox_style(COLORS['primary']))

        layout = QVBoxLayout(self)
        layout.setSpacing(8)

        self.cb_intervention = QComboBox()
        self.cb_intervention.addItem("Select an intervention...", None)
        for intervention in scenario.available_interventions:
            self.cb_intervention.addItem(
                f"{intervention.name}  (${format_number(intervention.cost)})", intervention.id
            )
            index = self.cb_intervention.count() - 1
            self.cb_intervention.setItemData(index, intervention.description, Qt.ToolTipRole)
        self.cb_intervention.currentIndexChanged.connect(self._on_selection_changed)
        layout.addWidget(self.cb_intervention)

        self.lbl_description = QLabel("")
        self.lbl_description.setWordWrap(True)
        self.lbl_description.setStyleSheet(f"color: {COLORS['text_dim']};")
        layout.addWidget(self.lbl_description)

        self.btn_apply = QPushButton("Apply Intervention")
        self.btn_apply.setStyleSheet(get_button_style(variant="primary"))
        self.btn_apply.setEnabled(False)
        self.btn_apply.clicked.connect(self.apply_selected)
        layout.addWidget(self.btn_apply)

    def selected_id(self):
        return self.cb_intervention.currentData()

    def select(self, intervention_id: str) -> bool:
        index = self.cb_intervention.findData(intervention_id)
        if index < 0:
            return False
        self.cb_intervention.setCurrentIndex(index)
        return True

    def _on_selection_changed(self, _index):
        intervention_id = self.selected_id()
        self.btn_apply.setEnabled(intervention_id is not None)
        intervention = self.scenario.find_intervention(intervention_id) if intervention_id else None
        self.lbl_description.setText(intervention.description if intervention else "")

    def apply_selected(self):
        intervention_id = self.selected_id()
        if intervention_id:
            self.intervention_requested.emit(intervention_id)

    def update_budget(self, budget: float):
        """Grey out entries the budget cannot cover."""
        for index, intervention in enumerate(self.scenario.available_interventions, start=1):
            color = COLORS['text'] if intervention.cost <= budget else COLORS['text_dim']
            self.cb_intervention.setItemData(index, QColor(color), Qt.ForegroundRole)

    def set_active(self, active: bool):
        self.cb_intervention.setEnabled(active)
        self.btn_apply.setEnabled(active and self.selected_id() is not None)
