import pytest

from nephrosim.core.engine import GameEngine
from nephrosim.core.enums import GameStatus
from nephrosim.core.state import EngineConfig, Parameter


def test_initial_state_mirrors_scenario(engine, aki_scenario):
    assert engine.status is GameStatus.PLAYING
    assert engine.time_left == 300
    assert engine.budget == 5000
    assert engine.elapsed == 0
    assert engine.log == []
    assert len(engine.parameters) == 10
    assert engine.parameters["Heart Rate"].value == 120
    assert engine.parameters["Potassium (K+)"].value == 5.2


def test_parameters_are_copies(engine, aki_scenario):
    engine.parameters["Heart Rate"].value = 999
    assert aki_scenario.initial_clinical_params["Heart Rate"].value == 120

    engine.tick()
    assert aki_scenario.initial_lab_params["Potassium (K+)"].value == 5.2


def test_lab_value_wins_on_shared_key(make_scenario):
    scenario = make_scenario(
        clinical={"Shared": Parameter(1, "u", (0, 10), 0)},
        labs={"Shared": Parameter(2, "u", (0, 10), 0)},
    )
    engine = GameEngine(scenario)
    assert list(engine.parameters) == ["Shared"]
    assert engine.parameters["Shared"].value == 2


def test_rejects_non_scenario():
    with pytest.raises(TypeError):
        GameEngine({"id": "aki-sepsis"})


def test_history_seeded_with_initial_snapshot(engine):
    assert len(engine.history) == 1
    assert engine.history[0].time_left == 300
    assert engine.history[0].status is GameStatus.PLAYING


def test_snapshot_is_detached(engine):
    snap = engine.get_snapshot()
    engine.tick()
    assert snap.time_left == 300
    assert snap.parameters["Heart Rate"].value == 120
    assert engine.parameters["Heart Rate"].value == 120.1


def test_initial_alarms(engine):
    snap = engine.get_snapshot()
    assert snap.alarms["Heart Rate"] == {"low": False, "high": True}
    assert snap.alarms["Urine Output"] == {"low": True, "high": False}
    assert "Sodium (Na+)" not in snap.alarms


def test_affordable_interventions(engine):
    engine.budget = 400
    ids = [i.id for i in engine.affordable_interventions()]
    assert ids == ["ivf-bolus", "insulin-drip", "bicarb-amp"]


def test_config_log_capacity(aki_scenario):
    engine = GameEngine(aki_scenario, EngineConfig(log_capacity=3))
    assert engine.event_log.capacity == 3


def test_snapshot_parameters_are_read_only(engine):
    snap = engine.get_snapshot()
    with pytest.raises(TypeError):
        snap.parameters["Heart Rate"] = Parameter(1, "bpm", (60, 100), 0)

    snap.parameters["Heart Rate"].value = 999
    assert engine.parameters["Heart Rate"].value == 120
