import csv
import logging
import os
import time
from typing import List, Optional

from .state import SessionSnapshot

logger = logging.getLogger(__name__)


class DataRecorder:
    """
    Records session snapshots to CSV (one row per sample).
    """
    def __init__(self, output_dir: str = ".", sample_interval_sec: float = 1.0, scenario_id: str = "session"):
        self.output_dir = output_dir
        self.filename = f"nephrosim_{scenario_id}_{int(time.time())}.csv"
        self.file_path = os.path.join(output_dir, self.filename)
        self.file = None
        self.writer = None
        self.is_recording = False
        self.sample_interval_sec = max(0.0, sample_interval_sec)
        self._last_sample_time: Optional[int] = None
        self.parameter_names: List[str] = []

    def start(self, parameter_names: List[str]):
        try:
            os.makedirs(self.output_dir, exist_ok=True)
            self.file = open(self.file_path, 'w', newline='', encoding='utf-8')
            self.writer = csv.writer(self.file)
            self.is_recording = True
            self.parameter_names = list(parameter_names)
            header = ["elapsed", "time_left", "status", "budget"] + self.parameter_names
            self.writer.writerow(header)
        except OSError as e:
            logger.error("Failed to start recording to %s: %s", self.file_path, e)
            self.is_recording = False

    def log(self, snapshot: SessionSnapshot, force: bool = False):
        if not self.is_recording or not self.writer:
            return

        if self.sample_interval_sec > 0.0 and not force:
            now = snapshot.elapsed
            if self._last_sample_time is not None and (now - self._last_sample_time) < self.sample_interval_sec:
                return
            self._last_sample_time = now

        row = [snapshot.elapsed, snapshot.time_left, snapshot.status.value, snapshot.budget]
        row += [snapshot.value_of(name) for name in self.parameter_names]
        self.writer.writerow(row)

    def stop(self):
        if self.file:
            self.file.close()
            self.file = None
        self.writer = None
        self.is_recording = False
