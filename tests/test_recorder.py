import csv

from nephrosim.core.engine import GameEngine
from nephrosim.core.enums import GameStatus
from nephrosim.core.recorder import DataRecorder
from nephrosim.core.state import Parameter


def read_rows(path):
    with open(path, newline='', encoding='utf-8') as f:
        return list(csv.reader(f))


def test_engine_recording(engine, advance_time, tmp_path):
    engine.start_recording(output_dir=str(tmp_path))
    recorder = engine.recorder
    advance_time(engine, 3)
    engine.stop_recording()

    assert engine.recorder is None
    rows = read_rows(recorder.file_path)
    assert rows[0][:4] == ["elapsed", "time_left", "status", "budget"]
    assert rows[0][4:] == list(engine.parameters)
    assert [r[0] for r in rows[1:]] == ["0", "1", "2", "3"]
    assert rows[-1][1] == "297"
    assert rows[-1][2] == "playing"


def test_sample_interval(engine, advance_time, tmp_path):
    engine.start_recording(output_dir=str(tmp_path), sample_interval_sec=5)
    recorder = engine.recorder
    advance_time(engine, 12)
    engine.stop_recording()

    elapsed = [r[0] for r in read_rows(recorder.file_path)[1:]]
    assert elapsed == ["0", "5", "10"]


def test_terminal_row_always_written(make_scenario, tmp_path):
    scenario = make_scenario(clinical={"X": Parameter(10, "u", (20, 30), 0)}, time_limit=3)
    engine = GameEngine(scenario)
    engine.start_recording(output_dir=str(tmp_path), sample_interval_sec=10)
    recorder = engine.recorder
    engine.advance(5)
    engine.stop_recording()

    rows = read_rows(recorder.file_path)
    assert rows[-1][0] == "3"
    assert rows[-1][2] == GameStatus.LOST_TIME.value


def test_start_failure_leaves_recorder_inactive(tmp_path):
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("x")
    recorder = DataRecorder(output_dir=str(blocker / "sub"))
    recorder.start(["X"])
    assert not recorder.is_recording
    recorder.stop()


def test_filename_contains_scenario_id(tmp_path):
    recorder = DataRecorder(output_dir=str(tmp_path), scenario_id="aki-sepsis")
    assert recorder.filename.startswith("nephrosim_aki-sepsis_")
    assert recorder.filename.endswith(".csv")
