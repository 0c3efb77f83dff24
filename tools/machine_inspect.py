# tools/machine_inspect.py

from rich.console import Console
from rich.markup import escape
from rich.table import Table

MISSING = "-"

def read_symbols(machine):
    """All symbols read by some transition, in first-seen order."""
    symbols = []
    for state in machine.states.values():
        for symbol in state.transitions:
            if symbol not in symbols:
                symbols.append(symbol)
    return symbols

def build_transition_table(machine):
    """Transition table as a state x read-symbol grid of write/next cells."""
    symbols = read_symbols(machine)

    table = Table(title=f"Step {machine.step_number}", show_header=True, header_style="bold magenta")
    table.add_column("State", justify="left")
    table.add_column("Action", justify="center")
    for symbol in symbols:
        table.add_column(escape(symbol), justify="center")

    for state_id, state in machine.states.items():
        label = escape(state_id)
        if state is machine.current_state:
            label = f"[bold cyan]{label} *[/bold cyan]"
        row = [label, str(state.action)]
        for symbol in symbols:
            transition = state.get_transition(symbol)
            if transition is None:
                row.append(MISSING)
            else:
                row.append(escape(f"{transition.write_symbol}/{transition.to_state.id}"))
        table.add_row(*row)

    return table

def tape_window(tape, window=10):
    """Two lines: the cells around the head and a caret under the head cell."""
    head = tape.head_position
    tape_cells = []
    head_cells = []
    for pos in range(head - window, head + window + 1):
        symbol = tape.get_symbol_at(pos)
        tape_cells.append(symbol)
        marker = "^" if pos == head else " "
        head_cells.append(marker.ljust(len(symbol)))
    return " ".join(tape_cells).rstrip() + "\n" + " ".join(head_cells).rstrip()

def print_machine(machine, console=None, window=10):
    console = console or Console()
    console.print(build_transition_table(machine))
    console.print(tape_window(machine.tape, window), markup=False, highlight=False)
    status = "[red]Halted[/red]" if machine.is_halted() else "[green]Running[/green]"
    console.print(f"State: {escape(machine.current_state_id)}, Step: {machine.step_number}, {status}")
