import logging
from collections import deque
from types import MappingProxyType
from typing import Callable, Dict, List, Optional

from .constants import (
    HR_ARREST_HIGH,
    HR_ARREST_LOW,
    K_ARREST_HIGH,
    MSG_ARREST,
    MSG_STABLE,
    MSG_TIME_UP,
    PARAM_HEART_RATE,
    PARAM_POTASSIUM,
    PARAM_SYSTOLIC_BP,
    SBP_ARREST_LOW,
)
from .enums import EventType, GameStatus
from .event_log import EventLog
from .metrics import compute_session_metrics
from .recorder import DataRecorder
from .state import EngineConfig, GameEvent, Intervention, Parameter, Scenario, SessionSnapshot
from .utils import format_number, round_value
from nephrosim.monitors.alarms import AlarmSystem

logger = logging.getLogger(__name__)

SnapshotCallback = Callable[[SessionSnapshot], None]
GameOverCallback = Callable[[GameStatus], None]


class GameEngine:
    """
    Session orchestrator for one playthrough of a Scenario.

    Owns all mutable game state (clock, budget, parameters, event log) and
    the tick / intervention / termination logic. Hosts drive it by calling
    `tick()` once per simulated second and `apply_intervention()` on user
    input; both are synchronous and never overlap.

    State management:
    - `self.parameters` is the live parameter set, owned by the engine.
    - `get_snapshot()` returns an immutable copy for UI/tests; observers
      registered with `subscribe()` receive one after every mutating call.
    - Once a terminal status is reached every operation is a no-op.
    """
    def __init__(
        self,
        scenario: Scenario,
        config: Optional[EngineConfig] = None,
        on_game_over: Optional[GameOverCallback] = None,
    ):
        if not isinstance(scenario, Scenario):
            raise TypeError(f"GameEngine needs a Scenario, got {type(scenario).__name__}")
        self.scenario = scenario
        self.config = config or EngineConfig()
        self.on_game_over = on_game_over

        # Session state.
        self.status = GameStatus.PLAYING
        self.time_left = int(scenario.time_limit)
        self.budget = float(scenario.initial_budget)
        self.parameters: Dict[str, Parameter] = scenario.initial_parameters()
        self.event_log = EventLog(self.config.log_capacity)
        self.elapsed = 0
        self.outcome_reason = ""

        # Bookkeeping for debrief.
        self.total_spent = 0.0
        self.interventions_applied: List[str] = []

        # Alarms & observers.
        self.alarms = AlarmSystem()
        self.alarms.update(self.parameters)
        self._observers: List[SnapshotCallback] = []

        # Output buffer (ring buffer for trend plots / metrics).
        self.history = deque(maxlen=self.config.history_length)
        self.history.append(self.get_snapshot())

        self.recorder: Optional[DataRecorder] = None

        logger.info(
            "Session started: %s (budget %s, %ss, %d parameters)",
            scenario.id, format_number(self.budget), self.time_left, len(self.parameters),
        )

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def log(self) -> List[GameEvent]:
        """Event log, newest first."""
        return self.event_log.entries()

    @property
    def is_over(self) -> bool:
        return self.status.is_terminal

    def get_snapshot(self) -> SessionSnapshot:
        """Return an immutable copy of the current session state."""
        return SessionSnapshot(
            status=self.status,
            time_left=self.time_left,
            budget=self.budget,
            parameters=MappingProxyType({name: param.copy() for name, param in self.parameters.items()}),
            log=tuple(self.event_log),
            elapsed=self.elapsed,
            alarms={name: dict(flags) for name, flags in self.alarms.active_alarms.items()},
        )

    def find_intervention(self, intervention_id: str) -> Optional[Intervention]:
        return self.scenario.find_intervention(intervention_id)

    def affordable_interventions(self) -> List[Intervention]:
        """Interventions whose cost fits the remaining budget."""
        return [i for i in self.scenario.available_interventions if i.cost <= self.budget]

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------

    def subscribe(self, callback: SnapshotCallback):
        if callback not in self._observers:
            self._observers.append(callback)

    def unsubscribe(self, callback: SnapshotCallback):
        if callback in self._observers:
            self._observers.remove(callback)

    def _notify(self, snapshot: SessionSnapshot):
        for callback in list(self._observers):
            callback(snapshot)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def tick(self):
        """
        Advance the session by one simulated second.

        Decrements the clock, applies each parameter's drift, then checks
        the termination conditions against the post-tick state.
        """
        if self.status is not GameStatus.PLAYING:
            return

        self.time_left -= 1
        self.elapsed += 1

        places = self.config.rounding_places
        for param in self.parameters.values():
            param.value = round_value(param.value + param.deterioration_rate, places)

        self.alarms.update(self.parameters)
        self.evaluate_termination()

        snapshot = self.get_snapshot()
        self.history.append(snapshot)
        if self.recorder:
            self.recorder.log(snapshot, force=self.is_over)
        logger.debug("Tick %d: %ss left", self.elapsed, self.time_left)
        self._notify(snapshot)

    def advance(self, seconds: int) -> GameStatus:
        """Run up to `seconds` ticks, stopping early at a terminal status."""
        for _ in range(max(0, int(seconds))):
            if self.status is not GameStatus.PLAYING:
                break
            self.tick()
        return self.status

    def apply_intervention(self, intervention_id: str):
        """
        Apply a scenario intervention by id.

        Unknown ids and unaffordable interventions are reported through the
        event log only; an unaffordable attempt with no budget left ends the
        session as LOST_BUDGET.
        """
        if self.status is not GameStatus.PLAYING:
            return

        intervention = self.scenario.find_intervention(intervention_id)
        if intervention is None:
            logger.warning("Unknown intervention id %r", intervention_id)
            self._log(f"Error: Intervention {intervention_id} not found.", EventType.SYSTEM)
        elif self.budget < intervention.cost:
            self._log(f"Insufficient budget for {intervention.name}.", EventType.CRITICAL)
            if self.budget <= 0:
                self._finish(GameStatus.LOST_BUDGET, "Budget depleted")
        else:
            self._apply_effects(intervention)

        self.evaluate_termination()

        snapshot = self.get_snapshot()
        if self.is_over:
            # Keep the closing state for the debrief.
            self.history.append(snapshot)
            if self.recorder:
                self.recorder.log(snapshot, force=True)
        self._notify(snapshot)

    def _apply_effects(self, intervention: Intervention):
        self.budget -= intervention.cost
        self.total_spent += intervention.cost
        self.interventions_applied.append(intervention.id)
        self._log(
            f"Applied: {intervention.name}. Cost: ${format_number(intervention.cost)}",
            EventType.INTERVENTION,
        )
        logger.debug("Applied %s, budget now %s", intervention.id, format_number(self.budget))

        places = self.config.rounding_places
        for name, delta in intervention.effects.items():
            param = self.parameters.get(name)
            if param is None:
                continue
            param.value = round_value(param.value + delta, places)
            shown = format_number(param.value)
            if delta > 0:
                text = f"{name} increased to {shown}."
            elif delta < 0:
                text = f"{name} decreased to {shown}."
            else:
                text = f"{name} unchanged at {shown}."
            self._log(text, EventType.CHANGE)

        self.alarms.update(self.parameters, new_sample=False)

    # ------------------------------------------------------------------
    # Termination
    # ------------------------------------------------------------------

    def evaluate_termination(self) -> GameStatus:
        """
        Check end conditions in precedence order: time, arrest, stability.
        Only acts while playing; returns the (possibly new) status.
        """
        if self.status is not GameStatus.PLAYING:
            return self.status

        if self.time_left <= 0:
            self._log(MSG_TIME_UP, EventType.CRITICAL)
            self._finish(GameStatus.LOST_TIME, "Time expired")
            return self.status

        reason = self._arrest_reason()
        if reason:
            self._log(MSG_ARREST, EventType.CRITICAL)
            self._finish(GameStatus.LOST_DEATH, reason)
            return self.status

        if all(param.is_normal() for param in self.parameters.values()):
            self._log(MSG_STABLE, EventType.SYSTEM)
            self._finish(GameStatus.WON, "All parameters within normal range")

        return self.status

    def _arrest_reason(self) -> Optional[str]:
        """Describe the first arrest criterion met, or None. Absent parameters are skipped."""
        if not self.config.enable_arrest_detection:
            return None

        sbp = self._value(PARAM_SYSTOLIC_BP)
        hr = self._value(PARAM_HEART_RATE)
        k = self._value(PARAM_POTASSIUM)

        if sbp is not None and sbp < SBP_ARREST_LOW:
            return f"Profound hypotension (SBP {format_number(sbp)} < {format_number(SBP_ARREST_LOW)} mmHg)"
        if hr is not None and hr > HR_ARREST_HIGH:
            return f"Extreme tachycardia (HR {format_number(hr)} > {format_number(HR_ARREST_HIGH)} bpm)"
        if hr is not None and hr < HR_ARREST_LOW:
            return f"Extreme bradycardia (HR {format_number(hr)} < {format_number(HR_ARREST_LOW)} bpm)"
        if k is not None and k > K_ARREST_HIGH:
            return f"Severe hyperkalemia (K+ {format_number(k)} > {format_number(K_ARREST_HIGH)} mEq/L)"
        return None

    def _value(self, name: str) -> Optional[float]:
        param = self.parameters.get(name)
        return param.value if param is not None else None

    def _finish(self, status: GameStatus, reason: str):
        """Enter a terminal status. Runs at most once per session."""
        if self.status is not GameStatus.PLAYING:
            return
        self.status = status
        self.outcome_reason = reason
        logger.info("Session %s ended: %s (%s)", self.scenario.id, status.value, reason)
        if self.on_game_over:
            self.on_game_over(status)

    def _log(self, message: str, event_type: EventType) -> GameEvent:
        return self.event_log.add(self.time_left, message, event_type)

    # ------------------------------------------------------------------
    # Recording
    # ------------------------------------------------------------------

    def start_recording(self, output_dir: str = "recordings", sample_interval_sec: float = 1.0):
        """Start a CSV trace of the session."""
        self.stop_recording()
        self.recorder = DataRecorder(
            output_dir=output_dir,
            sample_interval_sec=sample_interval_sec,
            scenario_id=self.scenario.id,
        )
        self.recorder.start(list(self.parameters))
        if self.recorder.is_recording:
            self.recorder.log(self.get_snapshot())

    def stop_recording(self):
        if self.recorder:
            self.recorder.stop()
            self.recorder = None

    def get_metrics(self) -> dict:
        """Debrief metrics over the recorded snapshot history."""
        return compute_session_metrics(
            list(self.history), self.scenario.initial_budget, self.interventions_applied
        )
