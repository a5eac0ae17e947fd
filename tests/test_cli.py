from pathlib import Path

import pytest

from schedsim.cli import main


@pytest.fixture(autouse=True)
def wide_console(monkeypatch):
    # Keep rich from wrapping table cells in the captured output.
    monkeypatch.setenv("COLUMNS", "200")


def test_run_sample_workload(capsys):
    assert main(["run", "-a", "fcfs"]) == 0
    out = capsys.readouterr().out
    assert "FCFS" in out
    assert "Avg waiting" in out
    assert "2.33" in out
    assert "Gantt Chart:" in out
    assert "|==========|" in out


def test_run_round_robin_with_workload(tmp_path: Path, capsys):
    p = tmp_path / "w.json"
    p.write_text('[{"pid":"P1","arrival_time":0,"burst_time":5},'
                 '{"pid":"P2","arrival_time":0,"burst_time":3}]')
    assert main(["run", "-a", "rr", "-q", "2", "-w", str(p)]) == 0
    out = capsys.readouterr().out
    assert "Round Robin" in out
    assert "Quantum: 2" in out


def test_run_step_mode(capsys):
    assert main(["run", "-a", "srtf", "--step", "--step-delay", "0"]) == 0
    out = capsys.readouterr().out
    assert "t= 0: P1" in out
    assert "P1=Running P2=Waiting P3=Waiting" in out
    assert "System metrics" in out


def test_compare_lists_every_algorithm(capsys):
    assert main(["compare"]) == 0
    out = capsys.readouterr().out
    for name in ["FCFS", "SJF", "SRTF", "Round Robin", "Priority"]:
        assert name in out


def test_invalid_workload_reports_error(tmp_path: Path, capsys):
    p = tmp_path / "w.csv"
    p.write_text("pid,arrival_time,burst_time\nA,0,0\n")
    assert main(["run", "-a", "fcfs", "-w", str(p)]) == 1
    assert "Error" in capsys.readouterr().out


def test_unknown_algorithm_reports_error(capsys):
    assert main(["run", "-a", "lottery"]) == 1
    assert "unknown algorithm" in capsys.readouterr().out


def test_bad_quantum_reports_error(capsys):
    assert main(["run", "-a", "rr", "-q", "0"]) == 1
    assert "quantum" in capsys.readouterr().out


def test_non_utf8_workload_reports_error(tmp_path: Path, capsys):
    p = tmp_path / "w.csv"
    p.write_bytes(b"pid,arrival_time,burst_time\n\xff,0,1\n")
    assert main(["run", "-a", "fcfs", "-w", str(p)]) == 1
    assert "not UTF-8" in capsys.readouterr().out
