import sys
from typing import List, Optional

from PySide6.QtCore import QTimer
from PySide6.QtWidgets import (QApplication, QDoubleSpinBox, QFrame, QHBoxLayout,
                               QLabel, QMainWindow, QMessageBox, QPushButton,
                               QVBoxLayout, QWidget)

from nephrosim.core.constants import OUTCOMES
from nephrosim.core.engine import GameEngine
from nephrosim.core.enums import GameStatus
from nephrosim.core.state import EngineConfig, Scenario, SessionSnapshot
from nephrosim.scenarios import default_scenarios
from nephrosim.ui.dashboard_widget import PatientDashboardWidget
from nephrosim.ui.event_log_widget import EventLogWidget
from nephrosim.ui.interventions_widget import InterventionPanelWidget
from nephrosim.ui.scenario_dialog import ScenarioSelectDialog
from nephrosim.ui.styles import (
    COLORS,
    FONTS,
    OUTCOME_COLORS,
    get_bar_style,
    get_base_widget_style,
    get_button_style,
)


class MainWindow(QMainWindow):
    """Main application window: dashboard, interventions, event log and the game clock."""
    def __init__(
        self,
        scenarios: Optional[List[Scenario]] = None,
        scenario: Optional[Scenario] = None,
        config: Optional[EngineConfig] = None,
        show_dialogs: bool = True,
    ):
        super().__init__()
        self.setWindowTitle("NephroSim - Clinical Decision Simulator")
        self.resize(1400, 860)
        self.setStyleSheet(get_base_widget_style())

        self.scenarios = scenarios or default_scenarios()
        self.config = config or EngineConfig()
        self.show_dialogs = show_dialogs
        self.record_dir = "recordings"
        self.status = GameStatus.WELCOME
        self.engine: Optional[GameEngine] = None

        # Game clock: one engine tick per timeout.
        self.timer = QTimer()
        self.timer.timeout.connect(self.game_loop)

        if scenario is None:
            scenario = self.show_scenario_dialog()
            if scenario is None:
                sys.exit(0)

        self.start_session(scenario)

    def show_scenario_dialog(self) -> Optional[Scenario]:
        dlg = ScenarioSelectDialog(self.scenarios, self)
        if dlg.exec():
            return dlg.result_data
        return None

    def start_session(self, scenario: Scenario):
        """Create a fresh engine for `scenario` and rebuild the UI around it."""
        self.timer.stop()
        self.engine = GameEngine(scenario, self.config, on_game_over=self.handle_game_over)
        self.engine.subscribe(self.refresh)
        self.status = GameStatus.PLAYING
        self.setup_ui()
        self.refresh(self.engine.get_snapshot())
        self.set_running(True)

    def setup_ui(self):
        central = QWidget()
        self.setCentralWidget(central)

        base_layout = QVBoxLayout(central)
        base_layout.setContentsMargins(0, 0, 0, 0)
        base_layout.setSpacing(0)

        main_layout = QHBoxLayout()
        main_layout.setContentsMargins(0, 0, 0, 0)
        main_layout.setSpacing(0)
        base_layout.addLayout(main_layout, stretch=1)

        # Left Side: Dashboard
        self.dashboard = PatientDashboardWidget(self.engine.scenario)
        main_layout.addWidget(self.dashboard, stretch=7)

        # Right Side: Interventions + Event Log
        side = QWidget()
        side_layout = QVBoxLayout(side)
        side_layout.setContentsMargins(8, 8, 8, 8)
        side_layout.setSpacing(8)
        self.interventions = InterventionPanelWidget(self.engine.scenario)
        self.interventions.intervention_requested.connect(self.on_intervention_requested)
        side_layout.addWidget(self.interventions)
        self.event_log = EventLogWidget()
        side_layout.addWidget(self.event_log, stretch=1)
        main_layout.addWidget(side, stretch=3)

        # Bottom Control Bar
        ctrl_bar = QFrame()
        ctrl_bar.setStyleSheet(get_bar_style("top"))
        ctrl_bar.setFixedHeight(56)
        ctrl_layout = QHBoxLayout(ctrl_bar)
        ctrl_layout.setContentsMargins(16, 8, 16, 8)
        ctrl_layout.setSpacing(16)

        self.btn_start = QPushButton("Pause")
        self.btn_start.clicked.connect(self.toggle_clock)
        ctrl_layout.addWidget(self.btn_start)

        self.btn_record = QPushButton("Record")
        self.btn_record.setCheckable(True)
        self.btn_record.setStyleSheet(get_button_style(variant="neutral"))
        self.btn_record.toggled.connect(self.toggle_recording)
        ctrl_layout.addWidget(self.btn_record)

        lbl_speed = QLabel("Speed:")
        lbl_speed.setStyleSheet(f"color: {COLORS['text_dim']}; font-size: {FONTS['size_small']};")
        ctrl_layout.addWidget(lbl_speed)

        self.sb_speed = QDoubleSpinBox()
        self.sb_speed.setRange(0.25, 20.0)
        self.sb_speed.setValue(self.config.simulation_speed)
        self.sb_speed.setSingleStep(0.25)
        self.sb_speed.setSuffix("x")
        self.sb_speed.valueChanged.connect(self._apply_speed)
        ctrl_layout.addWidget(self.sb_speed)

        self.lbl_status = QLabel("")
        ctrl_layout.addWidget(self.lbl_status)
        ctrl_layout.addStretch()

        base_layout.addWidget(ctrl_bar)
        self._apply_speed()

    def _set_status(self, text, color):
        self.lbl_status.setText(text)
        self.lbl_status.setStyleSheet(
            f"color: {color}; font-size: {FONTS['size_small']}; font-weight: 600;"
        )

    def _apply_speed(self, *_args):
        speed = max(0.01, self.sb_speed.value())
        self.timer.setInterval(max(1, int(self.config.tick_interval_ms / speed)))

    def set_running(self, running: bool):
        if running and self.engine and not self.engine.is_over:
            self.timer.start()
            self.btn_start.setText("Pause")
            self.btn_start.setStyleSheet(get_button_style(variant="warning", min_width=110))
            self._set_status("RUNNING", COLORS['success'])
            return
        self.timer.stop()
        self.btn_start.setText("Resume")
        self.btn_start.setStyleSheet(get_button_style(variant="primary", outlined=True, min_width=110))
        if self.engine and self.engine.is_over:
            self.btn_start.setEnabled(False)
            self._set_status(self.engine.status.value.upper(), OUTCOME_COLORS.get(self.engine.status.value))
        else:
            self._set_status("PAUSED", COLORS['warning'])

    def toggle_clock(self):
        self.set_running(not self.timer.isActive())

    def toggle_recording(self, checked: bool):
        if checked and not self.engine.is_over:
            self.engine.start_recording(output_dir=self.record_dir)
            self.btn_record.setText("Recording")
        else:
            self.engine.stop_recording()
            self.btn_record.setText("Record")

    def game_loop(self):
        self.engine.tick()

    def on_intervention_requested(self, intervention_id: str):
        self.engine.apply_intervention(intervention_id)

    def refresh(self, snapshot: SessionSnapshot):
        self.dashboard.update_snapshot(snapshot)
        self.dashboard.update_trend(self.engine.history)
        self.interventions.update_budget(snapshot.budget)
        self.event_log.update_events(snapshot.log)
        if self.engine.is_over and self.btn_record.isEnabled():
            # Terminal row is already written; close the trace.
            self.btn_record.setChecked(False)
            self.btn_record.setEnabled(False)

    def handle_game_over(self, status: GameStatus):
        """Engine callback, fired once when the session ends."""
        self.status = status
        self.set_running(False)
        self.interventions.set_active(False)
        if self.show_dialogs:
            # Leave the engine call before opening a modal dialog.
            QTimer.singleShot(0, lambda: self.show_game_over(status))

    def show_game_over(self, status: GameStatus):
        outcome = OUTCOMES[status.value]
        metrics = self.engine.get_metrics()

        msg = QMessageBox(self)
        msg.setIcon(QMessageBox.Information if status is GameStatus.WON else QMessageBox.Warning)
        msg.setWindowTitle(outcome["title"])
        msg.setText(
            f"{outcome['description']}\n\n"
            f"Spent: ${metrics['Spent']:,.0f}  •  Interventions: {metrics['Interventions']}\n"
            f"Mean time in range: {metrics['MeanTimeInRange'] * 100:.0f}%"
        )
        msg.setStandardButtons(QMessageBox.Retry | QMessageBox.Close)
        msg.button(QMessageBox.Retry).setText("Play Another Case")
        msg.button(QMessageBox.Close).setText("Keep Viewing State")

        if msg.exec() == QMessageBox.Retry:
            scenario = self.show_scenario_dialog()
            if scenario is not None:
                self.start_session(scenario)


def main():
    app = QApplication(sys.argv)
    window = MainWindow()
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
