from enum import Enum
from types import MappingProxyType

from simulator.errors import DuplicateTransitionSymbolError
from simulator.transition import Transition


class Action(Enum):
    """What a state does to the tape when it becomes the current state."""
    MOVE_LEFT = "L"
    MOVE_RIGHT = "R"
    HALT = "H"
    ACCEPT = "Y"
    REJECT = "N"

    @property
    def is_halting(self):
        return self in (Action.HALT, Action.ACCEPT, Action.REJECT)

    def __str__(self):
        return self.value


class State:
    """
    A named machine state with a tape action and its outgoing transitions.

    Outgoing transitions are keyed by the symbol they read, so a state holds
    at most one transition per symbol.
    """

    def __init__(self, state_id, action):
        self.id = state_id
        self.action = action
        self._transitions = {}

    @property
    def action(self):
        return self._action

    @action.setter
    def action(self, action):
        self._action = Action(action)

    @property
    def transitions(self):
        return MappingProxyType(self._transitions)

    def is_halting(self):
        return self.action.is_halting

    def add_transition(self, read_symbol, write_symbol, to_state):
        if read_symbol in self._transitions:
            raise DuplicateTransitionSymbolError(self.id, read_symbol)
        self._transitions[read_symbol] = Transition(self, read_symbol, write_symbol, to_state)
        return self

    def get_transition(self, read_symbol):
        return self._transitions.get(read_symbol)

    def has_transition(self, read_symbol):
        return read_symbol in self._transitions

    def remove_transition(self, transition):
        if transition is None or transition.from_state is not self:
            return False
        if self._transitions.get(transition.read_symbol) is not transition:
            return False
        del self._transitions[transition.read_symbol]
        transition.delete_link()
        return True

    def _rekey(self, transition, read_symbol):
        del self._transitions[transition.read_symbol]
        self._transitions[read_symbol] = transition
        transition.read_symbol = read_symbol

    def __str__(self):
        return f"{self.id} {self.action}"

    def __repr__(self):
        return f"State({self.id!r}, {self.action.value!r})"
