# Scenarios package
from typing import List

from nephrosim.core.state import Scenario
from .aki_sepsis import create_aki_sepsis
from .hyperkalemia_esrd import create_hyperkalemia_esrd

__all__ = [
    'create_aki_sepsis',
    'create_hyperkalemia_esrd',
    'default_scenarios',
    'SCENARIO_BUILDERS',
]

SCENARIO_BUILDERS = {
    "aki-sepsis": create_aki_sepsis,
    "hyperkalemia-esrd": create_hyperkalemia_esrd,
}


def default_scenarios() -> List[Scenario]:
    """Fresh instances of every built-in scenario, in display order."""
    return [build() for build in SCENARIO_BUILDERS.values()]
