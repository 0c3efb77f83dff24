from simulator.errors import DetachedTransitionError, DuplicateTransitionSymbolError


class Transition:
    """
    A directed edge between two states, keyed on its owner by the symbol it reads.

    The source state owns the transition. The destination is only a reference:
    it may be the source itself, and the machine resolves it through its state
    registry before following it. Transitions are created with
    State.add_transition rather than directly.
    """

    def __init__(self, from_state, read_symbol, write_symbol, to_state):
        self.from_state = from_state
        self.read_symbol = read_symbol
        self.write_symbol = write_symbol
        self.to_state = to_state

    @property
    def is_linked(self):
        return self.from_state is not None

    def set_read_symbol(self, read_symbol):
        owner = self.from_state
        if owner is None:
            raise DetachedTransitionError("Cannot rekey a transition that has been removed.")
        if read_symbol == self.read_symbol:
            return
        if owner.has_transition(read_symbol):
            raise DuplicateTransitionSymbolError(owner.id, read_symbol)
        owner._rekey(self, read_symbol)

    def set_write_symbol(self, write_symbol):
        self.write_symbol = write_symbol

    def link_to(self, to_state):
        self.to_state = to_state

    def delete_link(self):
        """Detach both endpoints so the transition can no longer be followed."""
        self.from_state = None
        self.to_state = None

    def __str__(self):
        from_id = self.from_state.id if self.from_state is not None else "-"
        to_id = self.to_state.id if self.to_state is not None else "-"
        return f"{from_id} {to_id} {self.read_symbol} {self.write_symbol}"

    def __repr__(self):
        return f"Transition({str(self)!r})"
