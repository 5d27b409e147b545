from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, Tuple

from .constants import (
    HISTORY_LENGTH,
    LOG_CAPACITY,
    ROUNDING_PLACES,
    TICK_INTERVAL_MS,
)
from .enums import EventType, GameStatus


@dataclass
class EngineConfig:
    """Configuration for the game engine and its host clock."""
    tick_interval_ms: int = TICK_INTERVAL_MS  # Real-time period of one tick
    log_capacity: int = LOG_CAPACITY
    rounding_places: int = ROUNDING_PLACES
    enable_arrest_detection: bool = True
    history_length: int = HISTORY_LENGTH

    # Runtime settings.
    simulation_speed: float = 1.0  # Real-time multiplier (UI only)


@dataclass
class Parameter:
    """
    One measured clinical quantity (vital sign or lab value).

    `deterioration_rate` is the additive drift applied every tick.
    """
    value: float
    unit: str
    normal_range: Tuple[float, float]
    deterioration_rate: float = 0.0

    @property
    def low(self) -> float:
        return self.normal_range[0]

    @property
    def high(self) -> float:
        return self.normal_range[1]

    def is_normal(self) -> bool:
        """True when value lies inside normal_range (inclusive)."""
        return self.low <= self.value <= self.high

    def copy(self) -> "Parameter":
        return Parameter(self.value, self.unit, tuple(self.normal_range), self.deterioration_rate)

    def to_dict(self) -> dict:
        return {
            "value": self.value,
            "unit": self.unit,
            "normalRange": [self.low, self.high],
            "deteriorationRate": self.deterioration_rate,
        }


@dataclass(frozen=True)
class Intervention:
    """
    A priced action with additive effects on named parameters.

    Effects keep their declared order; the engine applies and logs
    them in that order.
    """
    id: str
    name: str
    cost: float
    description: str = ""
    effects: Dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "cost": self.cost,
            "description": self.description,
            "effects": dict(self.effects),
        }


@dataclass(frozen=True)
class PatientInfo:
    """Descriptive patient metadata (not used by the engine)."""
    name: str
    age: int
    sex: str
    history: str = ""

    def to_dict(self) -> dict:
        return {"name": self.name, "age": self.age, "sex": self.sex, "history": self.history}


@dataclass(frozen=True)
class Scenario:
    """
    Immutable case definition supplied to the engine.

    The engine never mutates a Scenario: `initial_parameters()` hands out
    deep copies.
    """
    id: str
    title: str
    description: str
    patient: PatientInfo
    initial_budget: float
    time_limit: int
    initial_clinical_params: Dict[str, Parameter]
    initial_lab_params: Dict[str, Parameter]
    available_interventions: Tuple[Intervention, ...] = ()

    def initial_parameters(self) -> Dict[str, Parameter]:
        """Union of clinical and lab parameters; lab wins on a shared key."""
        merged = {**self.initial_clinical_params, **self.initial_lab_params}
        return {name: param.copy() for name, param in merged.items()}

    def find_intervention(self, intervention_id: str) -> Optional[Intervention]:
        for intervention in self.available_interventions:
            if intervention.id == intervention_id:
                return intervention
        return None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "patient": self.patient.to_dict(),
            "initialBudget": self.initial_budget,
            "timeLimit": self.time_limit,
            "initialClinicalParams": {k: p.to_dict() for k, p in self.initial_clinical_params.items()},
            "initialLabParams": {k: p.to_dict() for k, p in self.initial_lab_params.items()},
            "availableInterventions": [i.to_dict() for i in self.available_interventions],
        }


@dataclass(frozen=True)
class GameEvent:
    """One entry of the in-game event log."""
    time: int  # Seconds remaining when logged
    message: str
    type: EventType

    def to_dict(self) -> dict:
        return {"time": self.time, "message": self.message, "type": self.type.value}


@dataclass(frozen=True, slots=True)
class SessionSnapshot:
    """
    Read-only snapshot of a session at one moment.

    `parameters` is a read-only mapping of copies; editing a Parameter in it
    never reaches the engine.
    """
    status: GameStatus
    time_left: int
    budget: float
    parameters: Mapping[str, Parameter]
    log: Tuple[GameEvent, ...] = ()
    elapsed: int = 0

    # Alarms.
    alarms: Dict[str, Dict[str, bool]] = field(default_factory=dict)

    def value_of(self, name: str) -> Optional[float]:
        param = self.parameters.get(name)
        return param.value if param is not None else None
