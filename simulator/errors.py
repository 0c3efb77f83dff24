class MachineError(Exception):
    """Base class for every error raised by the simulator model."""


class DuplicateStateIDError(MachineError, ValueError):
    def __init__(self, state_id):
        super().__init__(f"A state with id '{state_id}' already exists.")
        self.state_id = state_id


class InitialStateRemovalError(MachineError, ValueError):
    def __init__(self, state_id):
        super().__init__(f"The initial state '{state_id}' cannot be removed.")
        self.state_id = state_id


class DuplicateTransitionSymbolError(MachineError, ValueError):
    def __init__(self, state_id, read_symbol):
        super().__init__(
            f"State '{state_id}' already has a transition reading '{read_symbol}'."
        )
        self.state_id = state_id
        self.read_symbol = read_symbol


class InvalidArgumentError(MachineError, ValueError):
    pass


class UnknownStateError(MachineError, KeyError):
    def __init__(self, state_id):
        super().__init__(state_id)
        self.state_id = state_id

    def __str__(self):
        return f"State '{self.state_id}' is not registered in this machine."


class DetachedTransitionError(MachineError, RuntimeError):
    pass
