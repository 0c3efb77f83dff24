import pytest

from config.config_loader import DEFAULT_CONFIG
from simulator.machine import Machine
from simulator.state import Action, State


def build_overwrite_machine():
    """Overwrites the first occurrence of "ab" with "cc" and halts."""
    m = Machine("[b] a a a b a", "0", Action.MOVE_RIGHT)
    s0 = m.get_state("0")
    s1 = State("1", Action.MOVE_RIGHT)
    s2 = State("2", Action.MOVE_LEFT)
    s3 = State("3", Action.HALT)

    s0.add_transition("a", "a", s1).add_transition("#", "#", s3)
    s1.add_transition("b", "c", s2).add_transition("#", "#", s3)
    s2.add_transition("a", "c", s3)

    m.add_all_states(s1, s2, s3)
    return m


def snapshot(machine):
    return str(machine.tape), machine.current_state_id, machine.step_number


@pytest.fixture
def overwrite_machine():
    return build_overwrite_machine()


@pytest.fixture
def run_config(tmp_path):
    config = DEFAULT_CONFIG.copy()
    config.update({
        "output_directory": str(tmp_path / "logs"),
        "log_frequency": 2,
        "max_steps": 50,
    })
    return config
