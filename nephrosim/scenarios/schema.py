"""
Validation schema for scenario documents.

Scenario files use the camelCase keys of the editor's JSON export. The
models below coerce numeric strings, drop blank intervention effects and
reject documents that would leave the engine without a required field.
"""

from typing import Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from nephrosim.core.state import Intervention, Parameter, PatientInfo, Scenario


class ScenarioValidationError(ValueError):
    """A scenario document failed validation."""
    def __init__(self, message: str, errors: Optional[list] = None):
        super().__init__(message)
        self.errors = errors or []


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ParameterSchema(_CamelModel):
    value: float
    unit: str = Field(min_length=1)
    normal_range: Tuple[float, float]
    deterioration_rate: float

    def to_parameter(self) -> Parameter:
        return Parameter(self.value, self.unit, tuple(self.normal_range), self.deterioration_rate)


class InterventionSchema(_CamelModel):
    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    cost: float = Field(ge=0)
    description: str = ""
    effects: Dict[str, float] = Field(default_factory=dict)

    @field_validator("effects", mode="before")
    @classmethod
    def _drop_blank_effects(cls, value):
        # Editor forms submit untouched effect fields as "" or null.
        if not isinstance(value, dict):
            return value
        return {
            name: delta for name, delta in value.items()
            if delta is not None and not (isinstance(delta, str) and not delta.strip())
        }

    def to_intervention(self) -> Intervention:
        return Intervention(self.id, self.name, self.cost, self.description, dict(self.effects))


class PatientSchema(_CamelModel):
    name: str = Field(min_length=1)
    age: int = Field(ge=0, le=120)
    sex: Literal["Male", "Female"]
    history: str = Field(min_length=1)


class ScenarioSchema(_CamelModel):
    id: str = ""
    title: str = Field(min_length=3)
    description: str = Field(min_length=10)
    patient: PatientSchema
    initial_budget: float = Field(ge=0)
    time_limit: int = Field(ge=1)
    initial_clinical_params: Dict[str, ParameterSchema]
    initial_lab_params: Dict[str, ParameterSchema]
    available_interventions: List[InterventionSchema]

    def to_scenario(self) -> Scenario:
        return Scenario(
            id=self.id,
            title=self.title,
            description=self.description,
            patient=PatientInfo(**self.patient.model_dump()),
            initial_budget=self.initial_budget,
            time_limit=self.time_limit,
            initial_clinical_params={k: p.to_parameter() for k, p in self.initial_clinical_params.items()},
            initial_lab_params={k: p.to_parameter() for k, p in self.initial_lab_params.items()},
            available_interventions=tuple(i.to_intervention() for i in self.available_interventions),
        )


def validate_scenario(data: dict) -> Scenario:
    """
    Validate a scenario document and build the engine-facing Scenario.

    Raises:
        ScenarioValidationError: if the document is rejected
    """
    try:
        document = ScenarioSchema.model_validate(data)
    except ValidationError as e:
        title = data.get("title", "<untitled>") if isinstance(data, dict) else "<invalid>"
        raise ScenarioValidationError(
            f"Invalid scenario {title!r}: {e.error_count()} error(s)", e.errors()
        ) from e
    return document.to_scenario()
