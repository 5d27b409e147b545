import pytest

from nephrosim.core.engine import GameEngine
from nephrosim.core.enums import GameStatus
from nephrosim.scenarios import SCENARIO_BUILDERS, default_scenarios
from nephrosim.scenarios.schema import ScenarioValidationError, validate_scenario


def test_builtin_registry():
    assert list(SCENARIO_BUILDERS) == ["aki-sepsis", "hyperkalemia-esrd"]
    assert [s.id for s in default_scenarios()] == ["aki-sepsis", "hyperkalemia-esrd"]


@pytest.mark.parametrize("scenario", default_scenarios(), ids=lambda s: s.id)
def test_builtins_pass_validation(scenario):
    assert validate_scenario(scenario.to_dict()) == scenario


@pytest.mark.parametrize("scenario", default_scenarios(), ids=lambda s: s.id)
def test_builtins_are_playable(scenario):
    engine = GameEngine(scenario)
    engine.advance(10)
    assert engine.status is GameStatus.PLAYING


def test_aki_sepsis_contents():
    scenario = SCENARIO_BUILDERS["aki-sepsis"]()
    assert scenario.initial_budget == 5000
    assert scenario.time_limit == 300
    assert scenario.patient.age == 68
    assert [i.id for i in scenario.available_interventions] == [
        "ivf-bolus", "vasopressor", "antibiotics", "insulin-drip", "bicarb-amp", "dialysis",
    ]
    insulin = scenario.find_intervention("insulin-drip")
    assert insulin.cost == 300
    assert insulin.effects == {"Potassium (K+)": -0.5}
    assert scenario.find_intervention("nope") is None


def test_hyperkalemia_esrd_contents():
    scenario = SCENARIO_BUILDERS["hyperkalemia-esrd"]()
    assert scenario.initial_budget == 3000
    assert scenario.initial_lab_params["Potassium (K+)"].value == 7.8
    assert len(scenario.available_interventions) == 5


def test_document_round_trip_keeps_effect_order(aki_scenario):
    scenario = validate_scenario(aki_scenario.to_dict())
    dialysis = scenario.find_intervention("dialysis")
    assert list(dialysis.effects) == ["Creatinine", "Potassium (K+)", "Bicarbonate (HCO3)", "Lactate"]
    assert scenario == aki_scenario


class TestValidation:
    def doc(self, aki_scenario, **changes):
        data = aki_scenario.to_dict()
        data.update(changes)
        return data

    def test_coerces_numeric_strings(self, aki_scenario):
        scenario = validate_scenario(self.doc(aki_scenario, initialBudget="1200", timeLimit="60"))
        assert scenario.initial_budget == 1200
        assert scenario.time_limit == 60

    def test_blank_effects_dropped(self, aki_scenario):
        data = self.doc(aki_scenario)
        data["availableInterventions"][0]["effects"] = {"Heart Rate": "", "Urine Output": None, "Lactate": "-1"}
        scenario = validate_scenario(data)
        assert scenario.available_interventions[0].effects == {"Lactate": -1.0}

    @pytest.mark.parametrize("changes", [
        dict(title="AB"),
        dict(description="short"),
        dict(initialBudget=-1),
        dict(timeLimit=0),
    ])
    def test_rejects_invalid_fields(self, aki_scenario, changes):
        with pytest.raises(ScenarioValidationError) as excinfo:
            validate_scenario(self.doc(aki_scenario, **changes))
        assert excinfo.value.errors

    def test_rejects_bad_patient(self, aki_scenario):
        data = self.doc(aki_scenario)
        data["patient"]["sex"] = "Unknown"
        with pytest.raises(ScenarioValidationError):
            validate_scenario(data)

    def test_rejects_negative_cost(self, aki_scenario):
        data = self.doc(aki_scenario)
        data["availableInterventions"][0]["cost"] = -5
        with pytest.raises(ScenarioValidationError):
            validate_scenario(data)

    def test_rejects_missing_fields(self):
        with pytest.raises(ScenarioValidationError):
            validate_scenario({"title": "Only a title"})

    def test_validation_error_is_value_error(self):
        assert issubclass(ScenarioValidationError, ValueError)
