from collections import deque, namedtuple
from itertools import chain
from types import MappingProxyType

from simulator.errors import (
    DuplicateStateIDError,
    InitialStateRemovalError,
    InvalidArgumentError,
    UnknownStateError,
)
from simulator.state import Action, State
from simulator.tape import Tape

# Everything needed to reverse a single step: a step writes at most one cell
# (the one under the head) and changes the current state.
Step = namedtuple("Step", ["head_position", "state_id", "read_symbol"])


class InitialConfiguration:
    """Frozen copy of the input tape and the initial state, used by reset()."""

    def __init__(self, tape, state):
        self.tape = Tape.from_tape(tape)
        self.state = state


class Machine:
    """
    A single-tape Turing machine with undo/redo.

    The machine owns its tape, the registry of states keyed by id and the
    history stacks. Each forward step pushes a Step delta onto the undo
    stack, so history costs O(steps) memory regardless of the tape size.
    Redo recomputes the step rather than replaying a stored result, which is
    valid because the transition function is deterministic.
    """

    def __init__(self, tape, initial_state, action=None):
        if isinstance(tape, str):
            tape = Tape(tape)
        if not isinstance(initial_state, State):
            initial_state = State(initial_state, action)
        elif action is not None:
            raise TypeError("action only applies when the initial state is given by id.")

        self.tape = Tape.from_tape(tape)
        self.current_state = initial_state
        self._states = {initial_state.id: initial_state}
        self.init = InitialConfiguration(tape, initial_state)
        self.step_number = 0
        self.undo_stack = deque()
        self.redo_stack = deque()
        self.current_step = self._snapshot()

    @classmethod
    def from_text(cls, tape_text, state_id, action):
        return cls(Tape(tape_text), State(state_id, action))

    # === State registry ===
    @property
    def states(self):
        return MappingProxyType(self._states)

    @property
    def initial_state(self):
        return self.init.state

    @property
    def current_state_id(self):
        return self.current_state.id

    def get_state(self, state_id):
        return self._states.get(state_id)

    def add_state(self, state, action=None):
        if not isinstance(state, State):
            state = State(state, action)
        if state.id in self._states:
            raise DuplicateStateIDError(state.id)
        self._states[state.id] = state
        return self

    def add_all_states(self, *states):
        seen = set()
        for state in states:
            if state.id in self._states or state.id in seen:
                raise DuplicateStateIDError(state.id)
            seen.add(state.id)
        for state in states:
            self._states[state.id] = state
        return self

    def remove_state(self, state_id):
        """
        Unregister a state and delete every transition touching it.

        Transitions leaving the removed state are severed, and so are the
        transitions of other registered states that lead into it. If the
        state is current or appears in the step history, the machine is
        reset since that history can no longer be replayed.
        """
        if state_id == self.init.state.id:
            raise InitialStateRemovalError(state_id)
        state = self._states.get(state_id)
        if state is None:
            return False

        for transition in list(state.transitions.values()):
            state.remove_transition(transition)
        for other in self._states.values():
            for transition in list(other.transitions.values()):
                if transition.to_state is state:
                    other.remove_transition(transition)
        del self._states[state_id]

        if self.current_state is state or self._in_history(state_id):
            self.reset()
        return True

    def set_state_id(self, state, new_id):
        if self._states.get(state.id) is not state:
            raise UnknownStateError(state.id)
        if new_id == state.id:
            return
        if new_id in self._states:
            raise DuplicateStateIDError(new_id)

        old_id = state.id
        del self._states[old_id]
        self._states[new_id] = state
        state.id = new_id

        def rename(step):
            return step._replace(state_id=new_id) if step.state_id == old_id else step

        self.undo_stack = deque(rename(step) for step in self.undo_stack)
        self.redo_stack = deque(rename(step) for step in self.redo_stack)
        self.current_step = rename(self.current_step)

    def _in_history(self, state_id):
        steps = chain(self.undo_stack, self.redo_stack, (self.current_step,))
        return any(step.state_id == state_id for step in steps)

    def _resolve(self, state):
        if state is None or self._states.get(state.id) is not state:
            raise UnknownStateError(state.id if state is not None else None)
        return state

    # === Simulation ===
    def is_halted(self):
        return self.current_state.action.is_halting

    def can_undo(self):
        return bool(self.undo_stack)

    def can_redo(self):
        return bool(self.redo_stack)

    def _snapshot(self):
        return Step(self.tape.head_position, self.current_state.id, self.tape.read_symbol())

    def _transition(self):
        transition = self.current_state.get_transition(self.tape.read_symbol())
        # Resolve first so an unknown destination leaves the machine untouched.
        next_state = self._resolve(transition.to_state) if transition is not None else None

        self.step_number += 1
        if transition is not None:
            self.tape.write_symbol(transition.write_symbol)
            self.current_state = next_state

        action = self.current_state.action
        if action is Action.MOVE_LEFT:
            self.tape.shift_left()
        elif action is Action.MOVE_RIGHT:
            self.tape.shift_right()

    def step_forward(self, times=1):
        if times < 0:
            raise InvalidArgumentError(
                f"Expected a non-negative number of steps. Got {times}"
            )
        for _ in range(times):
            if self.is_halted():
                return
            if self.redo_stack:
                self.redo_step()
                continue
            self._transition()
            self.undo_stack.append(self.current_step)
            self.current_step = self._snapshot()

    def undo_step(self):
        if not self.undo_stack:
            return
        step = self.undo_stack[-1]
        state = self._states.get(step.state_id)
        if state is None:
            raise UnknownStateError(step.state_id)

        self.step_number -= 1
        self.redo_stack.append(self.current_step)
        self.current_step = self.undo_stack.pop()
        self.tape.move_to(step.head_position)
        self.tape.write_symbol(step.read_symbol)
        self.current_state = state

    def redo_step(self):
        if not self.redo_stack:
            return
        self._transition()
        self.undo_stack.append(self.current_step)
        self.redo_stack.pop()
        # Recorded and recomputed configurations match unless the machine was
        # edited in between; the live one is what the next undo must reverse.
        self.current_step = self._snapshot()

    def reset(self):
        self.step_number = 0
        self.undo_stack.clear()
        self.redo_stack.clear()
        self.tape = Tape.from_tape(self.init.tape)
        self.current_state = self.init.state
        self.current_step = self._snapshot()

    def run(self, max_steps=10000):
        """Step until halted or max_steps is spent; returns steps taken."""
        steps = 0
        while not self.is_halted() and steps < max_steps:
            self.step_forward()
            steps += 1
        return steps

    def __repr__(self):
        return (
            f"Machine(state={self.current_state.id!r}, step={self.step_number}, "
            f"tape={str(self.tape)!r})"
        )
