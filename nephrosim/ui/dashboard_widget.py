from typing import Dict, Iterable, Optional

import numpy as np
import pyqtgraph as pg
from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QFont
from PySide6.QtWidgets import (QFrame, QGridLayout, QGroupBox, QHBoxLayout,
                               QLabel, QVBoxLayout, QWidget)

from nephrosim.core.state import Parameter, Scenario, SessionSnapshot
from nephrosim.core.utils import format_clock, format_number
from .styles import (
    COLORS,
    FONTS,
    get_bar_style,
    get_base_widget_style,
    get_groupbox_style,
    get_rgba,
)


class ParameterDisplay(QFrame):
    """
    Tile for a single patient parameter: value, unit and normal range.
    Turns red (low) or amber (high) while out of range. Click to select.
    """
    clicked = Signal(str)

    def __init__(self, name: str, param: Parameter, color=COLORS['text']):
        super().__init__()
        self.name = name
        self.base_color = color
        self.current_alarm_state = None  # None, 'low', 'high'
        self.setCursor(Qt.PointingHandCursor)

        self.layout = QVBoxLayout(self)
        self.layout.setContentsMargins(10, 6, 10, 8)
        self.layout.setSpacing(0)

        self.lbl_title = QLabel(name)
        self.layout.addWidget(self.lbl_title, alignment=Qt.AlignLeft)

        row = QHBoxLayout()
        self.lbl_val = QLabel(format_number(param.value))
        self.lbl_val.setStyleSheet(
            f"color: {COLORS['text']}; font-size: {FONTS['size_numeric']}; font-weight: 700;"
        )
        row.addWidget(self.lbl_val)
        self.lbl_unit = QLabel(param.unit)
        self.lbl_unit.setStyleSheet(f"color: {COLORS['text_dim']}; font-size: {FONTS['size_small']};")
        row.addWidget(self.lbl_unit, alignment=Qt.AlignBottom)
        row.addStretch()
        self.layout.addLayout(row)

        self.lbl_range = QLabel(f"({format_number(param.low)} - {format_number(param.high)})")
        self.lbl_range.setStyleSheet(f"color: {COLORS['text_dim']}; font-size: {FONTS['size_small']};")
        self.layout.addWidget(self.lbl_range)

        self._apply_base_style()

    def _apply_base_style(self):
        self.setStyleSheet(f"""
            QFrame {{
                background-color: {get_rgba(self.base_color, 0.05)};
                border: 1px solid {get_rgba(COLORS['border'], 0.5)};
                border-radius: 6px;
            }}
        """)
        self.lbl_title.setText(self.name)
        self.lbl_title.setStyleSheet(
            f"color: {self.base_color}; font-size: {FONTS['size_normal']}; font-weight: 600; border: none;"
        )

    def _apply_alarm_style(self, is_low):
        color = COLORS['danger'] if is_low else COLORS['warning']
        indicator = "LOW" if is_low else "HIGH"

        self.setStyleSheet(f"""
            QFrame {{
                background-color: {get_rgba(color, 0.15)};
                border: 2px solid {color};
                border-radius: 6px;
            }}
        """)
        self.lbl_title.setText(f"{self.name} {indicator}")
        self.lbl_title.setStyleSheet(
            f"color: {color}; font-size: {FONTS['size_normal']}; font-weight: 700; border: none;"
        )

    def set_value(self, value: float):
        self.lbl_val.setText(format_number(value))

    def set_alarm(self, active: bool, is_low: bool = False):
        new_state = ('low' if is_low else 'high') if active else None
        if self.current_alarm_state != new_state:
            self.current_alarm_state = new_state
            if active:
                self._apply_alarm_style(is_low)
            else:
                self._apply_base_style()

    def mousePressEvent(self, event):
        self.clicked.emit(self.name)
        super().mousePressEvent(event)


class PatientDashboardWidget(QWidget):
    """Header (budget, clock), patient details, parameter tiles and a trend plot."""
    def __init__(self, scenario: Scenario):
        super().__init__()
        self.scenario = scenario
        self.setStyleSheet(get_base_widget_style())
        self.tiles: Dict[str, ParameterDisplay] = {}
        self.selected_parameter: Optional[str] = None

        self.layout = QVBoxLayout(self)
        self.layout.setContentsMargins(0, 0, 0, 0)
        self.layout.setSpacing(0)

        self.setup_ui()

    def setup_ui(self):
        # --- Top Status Bar ---
        header = QFrame()
        header.setStyleSheet(get_bar_style("bottom"))
        header.setFixedHeight(48)
        header_layout = QHBoxLayout(header)
        header_layout.setContentsMargins(16, 0, 16, 0)

        lbl_title = QLabel(self.scenario.title)
        lbl_title.setStyleSheet(f"font-size: {FONTS['size_title']}; font-weight: 700;")
        header_layout.addWidget(lbl_title)
        header_layout.addStretch()

        self.lbl_budget = QLabel("")
        self.lbl_budget.setStyleSheet(
            f"color: {COLORS['primary']}; font-size: {FONTS['size_display']}; font-weight: 700;"
        )
        header_layout.addWidget(self.lbl_budget)
        header_layout.addSpacing(24)

        self.lbl_time = QLabel("")
        self.lbl_time.setStyleSheet(
            f"color: {COLORS['danger']}; font-size: {FONTS['size_display']}; font-weight: 700;"
        )
        header_layout.addWidget(self.lbl_time)
        self.layout.addWidget(header)

        # --- Main Content ---
        content = QWidget()
        content_layout = QVBoxLayout(content)
        content_layout.setContentsMargins(8, 8, 8, 8)
        content_layout.setSpacing(8)
        self.layout.addWidget(content, stretch=1)

        patient = self.scenario.patient
        self.lbl_patient = QLabel(
            f"<b>{patient.name}</b>  •  {patient.age} ({patient.sex})<br>{patient.history}"
        )
        self.lbl_patient.setWordWrap(True)
        self.lbl_patient.setStyleSheet(f"color: {COLORS['text_secondary']};")
        content_layout.addWidget(self.lbl_patient)

        groups = QHBoxLayout()
        groups.setSpacing(8)
        # Lab keys win on collision, so a shared name shows up under labs only.
        clinical = {k: p for k, p in self.scenario.initial_clinical_params.items()
                    if k not in self.scenario.initial_lab_params}
        groups.addWidget(self._create_group("Clinical Parameters", clinical, COLORS['clinical']))
        groups.addWidget(self._create_group("Laboratory Results", self.scenario.initial_lab_params, COLORS['lab']))
        content_layout.addLayout(groups, stretch=1)

        self.trend_plot, self.trend_curve = self.create_plot(COLORS['trend'])
        self.range_low = pg.InfiniteLine(angle=0, pen=pg.mkPen(COLORS['success'], style=Qt.DashLine))
        self.range_high = pg.InfiniteLine(angle=0, pen=pg.mkPen(COLORS['success'], style=Qt.DashLine))
        self.trend_plot.addItem(self.range_low)
        self.trend_plot.addItem(self.range_high)
        content_layout.addWidget(self.trend_plot)

        first = next(iter(self.tiles), None)
        if first:
            self.select_parameter(first)

    def _create_group(self, title: str, params: Dict[str, Parameter], color: str) -> QGroupBox:
        box = QGroupBox(title)
        box.setStyleSheet(get_groupbox_style(color))
        grid = QGridLayout(box)
        grid.setSpacing(6)
        for i, (name, param) in enumerate(params.items()):
            tile = ParameterDisplay(name, param, color)
            tile.clicked.connect(self.select_parameter)
            self.tiles[name] = tile
            grid.addWidget(tile, i // 2, i % 2)
        return box

    def create_plot(self, color):
        plot = pg.PlotWidget()
        plot.setBackground(COLORS['background_alt'])
        plot.showGrid(x=False, y=True, alpha=0.2)
        plot.setMouseEnabled(x=False, y=False)
        plot.setLabel('bottom', 'Elapsed (s)')
        plot.setMinimumHeight(140)

        self.trend_title = pg.TextItem(text="", color=color, anchor=(0, 0))
        self.trend_title.setFont(QFont('Arial', 9, QFont.Weight.Medium))
        self.trend_title.setParentItem(plot.getPlotItem().vb)

        pen = pg.mkPen(color=color, width=2.0)
        curve = plot.plot(pen=pen)
        return plot, curve

    def select_parameter(self, name: str):
        """Show the trend of one parameter."""
        if name not in self.tiles:
            return
        self.selected_parameter = name
        param = self.scenario.initial_parameters()[name]
        self.range_low.setValue(param.low)
        self.range_high.setValue(param.high)
        self.trend_title.setText(f"{name} ({param.unit})")

    def update_snapshot(self, snapshot: SessionSnapshot):
        self.lbl_budget.setText(f"${snapshot.budget:,.0f}")
        self.lbl_time.setText(format_clock(snapshot.time_left))
        for name, param in snapshot.parameters.items():
            tile = self.tiles.get(name)
            if tile is None:
                continue
            tile.set_value(param.value)
            flags = snapshot.alarms.get(name)
            tile.set_alarm(bool(flags), is_low=bool(flags and flags.get('low')))

    def update_trend(self, history: Iterable[SessionSnapshot]):
        name = self.selected_parameter
        if not name:
            return
        points = [(s.elapsed, s.value_of(name)) for s in history if name in s.parameters]
        if not points:
            return
        data = np.array(points, dtype=float)
        self.trend_curve.setData(data[:, 0], data[:, 1])
