from simulator.errors import InvalidArgumentError

BLANK_SYMBOL = "#"


def _is_head_marker(token):
    return len(token) > 2 and token.startswith("[") and token.endswith("]")


class Tape:
    """
    Two-way infinite tape with a read/write head.

    Cells are stored sparsely by signed position, like a number line with the
    origin at 0. Only the "seen" region [left_bound, right_bound] is
    materialized: the input cells plus every cell the head has visited.
    Anything outside that region reads as BLANK_SYMBOL.

    Text encoding: whitespace separated symbols, with the initial head cell
    wrapped in brackets, e.g. "[1] 0 1 1 + 1 0 1". Without brackets the head
    starts on the first symbol; with several, the last bracketed one wins.
    The head cell always becomes position 0.
    """

    def __init__(self, text=""):
        tokens = text.split()
        origin = 0
        for i, token in enumerate(tokens):
            if _is_head_marker(token):
                origin = i
                tokens[i] = token[1:-1]
        if not tokens:
            tokens = [BLANK_SYMBOL]

        self.cells = {i - origin: symbol for i, symbol in enumerate(tokens)}
        self.left_bound = -origin
        self.right_bound = len(tokens) - origin - 1
        self.head = 0

    @classmethod
    def from_tape(cls, other):
        """Deep copy of another tape; the two never share state afterwards."""
        tape = cls.__new__(cls)
        tape.cells = dict(other.cells)
        tape.left_bound = other.left_bound
        tape.right_bound = other.right_bound
        tape.head = other.head
        return tape

    def copy(self):
        return Tape.from_tape(self)

    @property
    def head_position(self):
        return self.head

    def size(self):
        return self.right_bound - self.left_bound + 1

    def __len__(self):
        return self.size()

    def read_symbol(self):
        return self.cells[self.head]

    def write_symbol(self, symbol):
        self.cells[self.head] = symbol

    def get_symbol_at(self, position):
        if position < self.left_bound or position > self.right_bound:
            return BLANK_SYMBOL
        return self.cells[position]

    def symbols(self):
        return [self.cells[pos] for pos in range(self.left_bound, self.right_bound + 1)]

    # === Head movement ===
    def _shift(self, offset):
        self.head += offset
        if self.head < self.left_bound:
            self.left_bound = self.head
            self.cells[self.head] = BLANK_SYMBOL
        elif self.head > self.right_bound:
            self.right_bound = self.head
            self.cells[self.head] = BLANK_SYMBOL

    def shift_left(self, times=1):
        if times < 0:
            raise InvalidArgumentError(
                f"Expected a non-negative number of times to shift left. Got {times}"
            )
        for _ in range(times):
            self._shift(-1)

    def shift_right(self, times=1):
        if times < 0:
            raise InvalidArgumentError(
                f"Expected a non-negative number of times to shift right. Got {times}"
            )
        for _ in range(times):
            self._shift(1)

    def move_to(self, position):
        """Walk the head to an absolute position, growing the bounds on the way."""
        while self.head < position:
            self._shift(1)
        while self.head > position:
            self._shift(-1)

    def __eq__(self, other):
        if not isinstance(other, Tape):
            return NotImplemented
        return (
            self.head == other.head
            and self.left_bound == other.left_bound
            and self.symbols() == other.symbols()
        )

    def __str__(self):
        out = []
        for pos in range(self.left_bound, self.right_bound + 1):
            symbol = self.cells[pos]
            out.append(f"[{symbol}]" if pos == self.head else symbol)
        return " ".join(out)

    def __repr__(self):
        return f"Tape({str(self)!r})"
