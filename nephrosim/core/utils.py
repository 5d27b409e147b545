"""
Shared utility functions for NephroSim.
"""

from decimal import Decimal, ROUND_HALF_UP


def round_value(value: float, places: int = 2) -> float:
    """
    Round to `places` decimals, ties away from zero.

    Works on the shortest decimal representation of the float, so
    0.125 -> 0.13 and 5.2 - 0.5 -> 4.7 regardless of binary noise.
    """
    quantum = Decimal(1).scaleb(-places)
    rounded = Decimal(repr(float(value))).quantize(quantum, rounding=ROUND_HALF_UP)
    result = float(rounded)
    # Normalise -0.0 so log text never shows "-0".
    return result if result != 0 else 0.0


def format_number(value: float) -> str:
    """
    Render a number for log text: 120.0 -> "120", 4.7 -> "4.7".
    """
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def format_clock(seconds: int) -> str:
    """Seconds -> "mm:ss" (negative values clamp to 00:00)."""
    seconds = max(0, int(seconds))
    return f"{seconds // 60:02d}:{seconds % 60:02d}"
