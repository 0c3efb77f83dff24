import io
import json

from rich.console import Console

from conftest import build_overwrite_machine
from simulator.machine import Machine
from simulator.state import Action
from simulator.tape import Tape
from tools.machine_inspect import build_transition_table, print_machine, read_symbols, tape_window
from tools.run_machine import run_machine


def quiet_console():
    return Console(file=io.StringIO(), width=120)


def count_lines(path):
    with open(path, "r", encoding="utf-8") as f:
        return sum(1 for _ in f)


# === run_machine ===
def test_run_until_halt(run_config, tmp_path):
    m = build_overwrite_machine()
    result = run_machine(m, run_config, console=quiet_console())
    assert result == {
        "steps_taken": 6,
        "halted": True,
        "state": "3",
        "action": "H",
        "tape": "b a a [c] c a",
    }

    log_dir = tmp_path / "logs"
    halting = list(log_dir.glob("halting_*.jsonl"))
    assert len(halting) == 1
    assert count_lines(halting[0]) == 1
    assert not list(log_dir.glob("non_halting_*.jsonl"))

    # log_frequency=2 over 6 steps
    traces = list(log_dir.glob("machine_run_2*.jsonl"))
    assert len(traces) == 1
    with open(traces[0], "r", encoding="utf-8") as f:
        steps = [json.loads(line)["run_step"] for line in f]
    assert steps == [2, 4, 6]


def test_run_out_of_budget(run_config, tmp_path):
    run_config["max_steps"] = 5
    m = Machine("[a]", "0", Action.MOVE_RIGHT)
    console = quiet_console()
    result = run_machine(m, run_config, console=console)
    assert result["steps_taken"] == 5
    assert result["halted"] is False
    assert result["tape"] == "a # # # # [#]"
    assert len(list((tmp_path / "logs").glob("non_halting_*.jsonl"))) == 1
    assert "No halt within 5 steps." in console.file.getvalue()


def test_run_without_logging(run_config, tmp_path):
    run_config["enable_logging"] = False
    m = build_overwrite_machine()
    result = run_machine(m, run_config, console=quiet_console())
    assert result["halted"] is True
    assert not (tmp_path / "logs").exists()


def test_run_with_progress_bar(run_config):
    run_config["show_progress"] = True
    m = build_overwrite_machine()
    result = run_machine(m, run_config, console=quiet_console())
    assert result["steps_taken"] == 6


# === machine_inspect ===
def test_read_symbols_in_first_seen_order():
    assert read_symbols(build_overwrite_machine()) == ["a", "#", "b"]


def test_transition_table_shape():
    table = build_transition_table(build_overwrite_machine())
    assert table.row_count == 4
    assert len(table.columns) == 5


def test_tape_window_marks_head():
    assert tape_window(Tape("[a] b c"), 2) == "# # a b c\n    ^"


def test_tape_window_aligns_wide_symbols():
    window = tape_window(Tape("one [two] x"), 1)
    assert window == "one two x\n    ^"


def test_print_machine_shows_status():
    m = build_overwrite_machine()
    m.step_forward(6)
    console = quiet_console()
    print_machine(m, console=console, window=3)
    out = console.file.getvalue()
    assert "State: 3, Step: 6, Halted" in out
    assert "c/3" in out


def test_print_machine_with_bracketed_state_id():
    m = Machine("[a]", "[/q]", Action.HALT)
    console = quiet_console()
    print_machine(m, console=console, window=1)
    out = console.file.getvalue()
    assert "State: [/q], Step: 0, Halted" in out


def test_run_prints_configured_tape_window(run_config):
    run_config["enable_logging"] = False
    outputs = []
    for window in (0, 2):
        run_config["tape_window"] = window
        console = quiet_console()
        run_machine(build_overwrite_machine(), run_config, console=console)
        outputs.append(console.file.getvalue())
    narrow, wide = outputs
    assert "c\n^" in narrow
    assert "a a c c a\n    ^" in wide
    assert "a a c c a" not in narrow


def test_run_from_config_file(run_config, tmp_path):
    run_config["tape_window"] = 1
    path = tmp_path / "runtime_config.json"
    path.write_text(json.dumps(run_config), encoding="utf-8")
    console = quiet_console()
    result = run_machine(build_overwrite_machine(), str(path), console=console)
    assert result["halted"] is True
    assert "a c c\n  ^" in console.file.getvalue()
    assert list((tmp_path / "logs").glob("halting_*.jsonl"))
