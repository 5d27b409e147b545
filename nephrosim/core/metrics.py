from typing import Dict, Optional, Sequence

import numpy as np

from .state import SessionSnapshot


def compute_range_deviation(values: np.ndarray, low: float, high: float) -> np.ndarray:
    """
    Distance outside [low, high] for each value (0 inside the range).
    """
    values = np.asarray(values, dtype=float)
    below = np.clip(low - values, 0.0, None)
    above = np.clip(values - high, 0.0, None)
    return below + above


def compute_time_in_range(values: np.ndarray, low: float, high: float) -> float:
    """Fraction of samples inside [low, high] (inclusive)."""
    values = np.asarray(values, dtype=float)
    if values.size == 0:
        return 0.0
    mask = (values >= low) & (values <= high)
    return float(np.mean(mask))


def compute_parameter_metrics(history: Sequence[SessionSnapshot]) -> Dict[str, dict]:
    """
    Per-parameter debrief over a snapshot history.

    Returns:
        dict: {name: {TimeInRange, Min, Max, Final, FinalDeviation}}
    """
    if not history:
        return {}

    final = history[-1]
    metrics = {}
    for name, param in final.parameters.items():
        series = np.array(
            [s.value_of(name) for s in history if name in s.parameters],
            dtype=float,
        )
        deviation = compute_range_deviation(series, param.low, param.high)
        metrics[name] = {
            "TimeInRange": compute_time_in_range(series, param.low, param.high),
            "Min": float(np.min(series)),
            "Max": float(np.max(series)),
            "Final": float(series[-1]),
            "FinalDeviation": float(deviation[-1]),
        }
    return metrics


def compute_session_metrics(
    history: Sequence[SessionSnapshot],
    initial_budget: float,
    interventions_applied: Optional[Sequence[str]] = None,
) -> dict:
    """
    Summarize a finished (or running) session for the debrief screen.

    Args:
        history: Snapshots in chronological order (first = session start)
        initial_budget: Scenario starting budget
        interventions_applied: Ids of successfully applied interventions

    Returns:
        dict: {Status, Elapsed, Spent, BudgetUsed, Interventions,
               MeanTimeInRange, Parameters}
    """
    if not history:
        return {
            "Status": None, "Elapsed": 0, "Spent": 0.0, "BudgetUsed": 0.0,
            "Interventions": 0, "MeanTimeInRange": 0.0, "Parameters": {},
        }

    final = history[-1]
    spent = float(initial_budget) - float(final.budget)
    per_param = compute_parameter_metrics(history)
    tir = np.array([m["TimeInRange"] for m in per_param.values()], dtype=float)

    return {
        "Status": final.status.value,
        "Elapsed": final.elapsed,
        "Spent": spent,
        "BudgetUsed": spent / initial_budget if initial_budget > 0 else 0.0,
        "Interventions": len(interventions_applied or ()),
        "MeanTimeInRange": float(np.mean(tir)) if tir.size else 0.0,
        "Parameters": per_param,
    }
