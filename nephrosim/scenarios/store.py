"""
JSON-file scenario catalogue.

Holds the list of playable scenarios (built-ins plus user-authored cases)
in a single JSON array of camelCase scenario documents. A missing or
unreadable file is re-seeded with the built-in defaults.
"""

import json
import logging
import time
from pathlib import Path
from typing import List, Optional, Union

from nephrosim.core.state import Scenario
from . import default_scenarios
from .schema import ScenarioValidationError, validate_scenario

logger = logging.getLogger(__name__)

DEFAULT_STORE_PATH = Path("~/.nephrosim/scenarios.json")

__all__ = [
    "DEFAULT_STORE_PATH",
    "ScenarioStore",
    "ScenarioValidationError",
    "new_scenario_document",
]


def new_scenario_document() -> dict:
    """Blank scenario document with a fresh `custom-<ms>` id."""
    return {
        "id": f"custom-{int(time.time() * 1000)}",
        "title": "New Custom Scenario",
        "description": "",
        "patient": {"name": "", "age": 0, "sex": "Male", "history": ""},
        "initialBudget": 5000,
        "timeLimit": 300,
        "initialClinicalParams": {},
        "initialLabParams": {},
        "availableInterventions": [],
    }


class ScenarioStore:
    """
    Load/save the scenario list from a JSON file.

    The list is loaded lazily on first access and written back after every
    change (upsert/delete/reset).
    """
    def __init__(self, path: Union[str, Path] = DEFAULT_STORE_PATH):
        self.path = Path(path).expanduser()
        self._scenarios: Optional[List[Scenario]] = None

    def load(self) -> List[Scenario]:
        """(Re)read the file; fall back to the built-in defaults on any problem."""
        if not self.path.exists():
            logger.info("No scenario file at %s, seeding defaults", self.path)
            return self.reset()

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = json.load(f)
            if not isinstance(raw, list):
                raise ScenarioValidationError(f"Expected a JSON list, got {type(raw).__name__}")
            self._scenarios = [validate_scenario(doc) for doc in raw]
        except (OSError, UnicodeDecodeError, json.JSONDecodeError, ScenarioValidationError) as e:
            logger.warning("Failed to load scenarios from %s (%s); restoring defaults", self.path, e)
            return self.reset()

        return list(self._scenarios)

    def save(self):
        scenarios = self._scenarios if self._scenarios is not None else default_scenarios()
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump([s.to_dict() for s in scenarios], f, indent=2, ensure_ascii=False)

    def reset(self) -> List[Scenario]:
        """Replace the catalogue with the built-in defaults."""
        self._scenarios = default_scenarios()
        self.save()
        return list(self._scenarios)

    def list(self) -> List[Scenario]:
        if self._scenarios is None:
            self.load()
        return list(self._scenarios)

    def get(self, scenario_id: str) -> Scenario:
        for scenario in self.list():
            if scenario.id == scenario_id:
                return scenario
        raise KeyError(f"Unknown scenario: {scenario_id}")

    def upsert(self, scenario: Union[Scenario, dict]) -> Scenario:
        """
        Insert or replace (by id) a scenario and persist the catalogue.

        Dict documents are validated first; a blank id gets a generated one.
        """
        if isinstance(scenario, dict):
            document = dict(scenario)
            if not document.get("id"):
                document["id"] = new_scenario_document()["id"]
            scenario = validate_scenario(document)

        scenarios = self.list()
        for i, existing in enumerate(scenarios):
            if existing.id == scenario.id:
                scenarios[i] = scenario
                break
        else:
            scenarios.append(scenario)

        self._scenarios = scenarios
        self.save()
        return scenario

    def delete(self, scenario_id: str) -> bool:
        """Remove a scenario by id. Returns False if it was not present."""
        scenarios = self.list()
        remaining = [s for s in scenarios if s.id != scenario_id]
        if len(remaining) == len(scenarios):
            return False
        self._scenarios = remaining
        self.save()
        return True
