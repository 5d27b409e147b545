"""
Gameplay constants for NephroSim.

This module centralizes magic numbers used by the engine and its hosts.

NOTE: Only add constants here that are ACTIVELY IMPORTED elsewhere.
"""

# Parameter names the arrest check looks up (scenario keys).
PARAM_SYSTOLIC_BP = "Blood Pressure Systolic"
PARAM_HEART_RATE = "Heart Rate"
PARAM_POTASSIUM = "Potassium (K+)"

# Arrest thresholds (strict inequalities).
SBP_ARREST_LOW = 60.0     # mmHg
HR_ARREST_HIGH = 180.0    # bpm
HR_ARREST_LOW = 40.0      # bpm
K_ARREST_HIGH = 8.5       # mEq/L

# Event log.
LOG_CAPACITY = 50

# Clock.
TICK_INTERVAL_MS = 1000
ROUNDING_PLACES = 2

# Snapshot history kept for trend plots and debrief metrics.
HISTORY_LENGTH = 1000

# Log messages.
MSG_TIME_UP = "Time is up!"
MSG_ARREST = "Patient has arrested!"
MSG_STABLE = "Patient is stable! Case won."

# Game-over dialog copy, keyed by GameStatus value.
OUTCOMES = {
    "won": {
        "title": "Case Won!",
        "description": "Congratulations! You've successfully stabilized the patient.",
    },
    "lost_time": {
        "title": "Out of Time",
        "description": "You ran out of time to treat the patient.",
    },
    "lost_budget": {
        "title": "Budget Depleted",
        "description": "You ran out of funds before the patient could be stabilized.",
    },
    "lost_death": {
        "title": "Patient Lost",
        "description": "The patient's condition deteriorated beyond recovery.",
    },
}
