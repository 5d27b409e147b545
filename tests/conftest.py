from pathlib import Path
import os
import sys

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

# Qt widgets in tests render without a display.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

from nephrosim.core.engine import GameEngine
from nephrosim.core.state import Intervention, Parameter, PatientInfo, Scenario
from nephrosim.scenarios import create_aki_sepsis


TEST_PATIENT = PatientInfo(name="Test Patient", age=50, sex="Female", history="None relevant.")


def build_scenario(clinical=None, labs=None, interventions=(), budget=1000, time_limit=100):
    """Minimal scenario for targeted engine tests."""
    return Scenario(
        id="test-case",
        title="Test Case",
        description="Scenario used by the test suite.",
        patient=TEST_PATIENT,
        initial_budget=budget,
        time_limit=time_limit,
        initial_clinical_params=dict(clinical or {}),
        initial_lab_params=dict(labs or {}),
        available_interventions=tuple(interventions),
    )


@pytest.fixture
def make_scenario():
    """Factory for custom scenarios (see build_scenario)."""
    return build_scenario


@pytest.fixture
def aki_scenario():
    return create_aki_sepsis()


@pytest.fixture
def engine(aki_scenario):
    """Fresh engine on the AKI / sepsis case."""
    return GameEngine(aki_scenario)


@pytest.fixture
def abnormal_param():
    """Out-of-range parameter that never drifts (keeps a session going)."""
    return Parameter(10, "u", (20, 30), 0)


@pytest.fixture
def free_action():
    """Zero-cost intervention without effects."""
    return Intervention(id="observe", name="Observe", cost=0, description="Watch and wait.")


@pytest.fixture
def advance_time():
    """Helper to advance an engine by whole ticks."""
    def _advance(engine, seconds):
        for _ in range(int(seconds)):
            engine.tick()

    return _advance
