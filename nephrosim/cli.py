import argparse
import json
import logging
import sys
import time
from dataclasses import fields
from typing import Dict, List, Optional, Tuple

from nephrosim.core.constants import OUTCOMES
from nephrosim.core.engine import GameEngine
from nephrosim.core.state import EngineConfig, Scenario
from nephrosim.core.utils import format_clock, format_number
from nephrosim.scenarios import default_scenarios
from nephrosim.scenarios.store import ScenarioStore

logger = logging.getLogger(__name__)

DEFAULT_SCENARIO = "aki-sepsis"


def load_config(path: str) -> Tuple[EngineConfig, Dict[int, List[str]]]:
    """
    Read a JSON run configuration.

    Format::

        {"engine": {"log_capacity": 50, ...},
         "script": [{"at": 5, "intervention": "ivf-bolus"}, ...]}

    Returns the engine config and a schedule {elapsed_second: [ids]}.
    """
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)

    known = {f.name for f in fields(EngineConfig)}
    engine_data = {k: v for k, v in data.get('engine', {}).items() if k in known}
    config = EngineConfig(**engine_data)

    schedule: Dict[int, List[str]] = {}
    for entry in data.get('script', []):
        schedule.setdefault(int(entry.get('at', 0)), []).append(entry['intervention'])
    return config, schedule


def load_scenarios(scenarios_file: Optional[str]) -> List[Scenario]:
    if scenarios_file:
        return ScenarioStore(scenarios_file).list()
    return default_scenarios()


def find_scenario(scenarios: List[Scenario], scenario_id: str) -> Optional[Scenario]:
    for scenario in scenarios:
        if scenario.id == scenario_id:
            return scenario
    return None


def print_status(engine: GameEngine):
    snap = engine.get_snapshot()
    abnormal = sum(1 for p in snap.parameters.values() if not p.is_normal())
    print(
        f"Time left: {format_clock(snap.time_left)} | Budget: ${format_number(snap.budget)} | "
        f"Out of range: {abnormal}/{len(snap.parameters)}"
    )


def print_debrief(engine: GameEngine):
    outcome = OUTCOMES.get(engine.status.value, {"title": engine.status.value, "description": ""})
    metrics = engine.get_metrics()
    print(f"{outcome['title']} {outcome['description']}")
    if engine.outcome_reason:
        print(f"Reason: {engine.outcome_reason}")
    print(
        f"Elapsed: {metrics['Elapsed']}s | Spent: ${format_number(metrics['Spent'])} | "
        f"Interventions: {metrics['Interventions']} | "
        f"Mean time in range: {metrics['MeanTimeInRange'] * 100:.0f}%"
    )
    for event in reversed(engine.log[:10]):
        print(f"  [{format_clock(event.time)}] {event.type.value:<12} {event.message}")


def run_headless(args) -> int:
    """Play a scripted session without UI. Returns a process exit code."""
    config = EngineConfig()
    schedule: Dict[int, List[str]] = {}
    if args.config:
        try:
            config, schedule = load_config(args.config)
        except (OSError, ValueError, KeyError, TypeError) as e:
            print(f"Error loading config: {e}")
            return 1

    scenario = find_scenario(load_scenarios(args.scenarios_file), args.scenario)
    if scenario is None:
        print(f"Unknown scenario: {args.scenario}")
        return 1

    duration = args.duration if args.duration is not None else scenario.time_limit
    print(f"Starting Headless Session: {scenario.title} (Duration: {duration}s)...")

    engine = GameEngine(scenario, config)
    if args.record:
        engine.start_recording(output_dir=args.record_dir, sample_interval_sec=args.record_interval)

    start_real = time.time()
    for _ in range(int(duration)):
        for intervention_id in schedule.get(engine.elapsed, []):
            logger.debug("Scripted intervention %s at %ss", intervention_id, engine.elapsed)
            engine.apply_intervention(intervention_id)
        if engine.is_over:
            break
        engine.tick()
        if engine.elapsed % 10 == 0:
            print_status(engine)
        if engine.is_over:
            break

    engine.stop_recording()
    end_real = time.time()
    print(f"Session finished in {end_real - start_real:.2f}s real time.")
    print_debrief(engine)
    return 0


def run_ui(args) -> int:
    """Run the game with the PySide6 UI."""
    from PySide6.QtWidgets import QApplication
    from nephrosim.ui.main_window import MainWindow

    app = QApplication.instance()
    if not app:
        app = QApplication(sys.argv)

    window = MainWindow(scenarios=load_scenarios(args.scenarios_file))
    window.show()
    return app.exec()


def list_scenarios(args) -> int:
    for scenario in load_scenarios(args.scenarios_file):
        print(f"{scenario.id:<24} {scenario.title} "
              f"(${format_number(scenario.initial_budget)}, {format_clock(scenario.time_limit)})")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="NephroSim - Clinical Decision Simulator")
    parser.add_argument("--mode", choices=["ui", "headless"], default="ui", help="Run mode (default: ui)")
    parser.add_argument("--scenario", type=str, default=DEFAULT_SCENARIO, help="Scenario id for headless mode")
    parser.add_argument("--scenarios-file", type=str, help="JSON scenario catalogue (default: built-in cases)")
    parser.add_argument("--list", action="store_true", help="List available scenarios and exit")
    parser.add_argument("--duration", type=int, help="Seconds to simulate in headless mode (default: time limit)")
    parser.add_argument("--config", type=str, help="Path to JSON configuration file")
    parser.add_argument("--record", action="store_true", help="Enable CSV recording (headless only)")
    parser.add_argument("--record-dir", type=str, default="recordings", help="Output directory for recordings")
    parser.add_argument("--record-interval", type=float, default=1.0, help="Sample interval in seconds for CSV")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Python logging level")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.list:
        return list_scenarios(args)
    if args.mode == "headless":
        return run_headless(args)
    return run_ui(args)


if __name__ == "__main__":
    sys.exit(main())
