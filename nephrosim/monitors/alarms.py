from collections import deque
from typing import Dict, Mapping

from nephrosim.core.state import Parameter


class AlarmSystem:
    """
    Out-of-range alarms for patient parameters.

    Limits come from each parameter's own normal range. A parameter only
    alarms once it has been out of range for its whole delay window
    (delay in ticks, default 0 = immediate).
    """
    def __init__(self, delays: dict = None, default_delay: int = 0):
        self.delays = dict(delays or {})
        self.default_delay = max(0, int(default_delay))

        # Buffers for delay logic (recent values)
        self.buffers: Dict[str, deque] = {}

        self.active_alarms: Dict[str, Dict[str, bool]] = {}

    def _window_len(self, name: str) -> int:
        """Window length in ticks for a given parameter."""
        return max(1, int(self.delays.get(name, self.default_delay)) + 1)

    def update(self, parameters: Mapping[str, Parameter], new_sample: bool = True) -> Dict[str, Dict[str, bool]]:
        """
        Feed the current parameter set.

        Call with new_sample=True once per tick. Between ticks (e.g. after
        an intervention) pass new_sample=False: the newest buffered value is
        overwritten instead of advancing the delay window.

        Returns {name: {'low': bool, 'high': bool}} for alarming parameters.
        """
        current_alarms = {}

        for name, param in parameters.items():
            window_len = self._window_len(name)
            buf = self.buffers.get(name)
            if buf is None or buf.maxlen != window_len:
                buf = self.buffers[name] = deque(maxlen=window_len)
            if new_sample or not buf:
                buf.append(param.value)
            else:
                buf[-1] = param.value

            is_low = False
            is_high = False

            # Condition must hold for the ENTIRE window.
            if len(buf) >= window_len:
                is_high = all(v > param.high for v in buf)
                is_low = all(v < param.low for v in buf)

            if is_low or is_high:
                current_alarms[name] = {'low': is_low, 'high': is_high}

        self.active_alarms = current_alarms
        return self.active_alarms

    def reset(self):
        self.buffers.clear()
        self.active_alarms = {}
