# tools/run_machine.py

from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, BarColumn, TextColumn, TimeElapsedColumn

from config.config_loader import DEFAULT_CONFIG, load_config, validate_config
from logger.logger import JSONLogger, machine_entry
from tools.machine_inspect import tape_window

def console_message(console, msg):
    console.print(msg, highlight=False)

def make_logger(config):
    if not config["enable_logging"]:
        return None
    return JSONLogger(config["output_directory"], config["log_file_prefix"])

# === Bounded run ===
def run_machine(machine, config=None, logger=None, console=None):
    """
    Step a machine until it halts or the configured step budget is spent.

    `config` is a settings dict or a path to a JSON config file. A trace
    entry is logged every `log_frequency` steps, and a summary entry at the
    end, filed under halting or non-halting runs. The final tape is printed
    as a window of `tape_window` cells either side of the head.
    """
    if config is None:
        config = DEFAULT_CONFIG
    elif isinstance(config, str):
        config = load_config(config, show_summary=False)
    validate_config(config)
    console = console or Console()
    if logger is None:
        logger = make_logger(config)

    max_steps = config["max_steps"]
    log_frequency = config["log_frequency"]
    steps = 0

    with Progress(
            SpinnerColumn(),
            BarColumn(),
            "[progress.percentage]{task.percentage:>3.0f}%",
            TextColumn("{task.completed}/{task.total} Steps"),
            TimeElapsedColumn(),
            console=console,
            disable=not config["show_progress"]
    ) as progress:

        task = progress.add_task("[cyan]Running...", total=max_steps)

        while steps < max_steps and not machine.is_halted():
            machine.step_forward()
            steps += 1

            if logger is not None and steps % log_frequency == 0:
                logger.log_trace(machine, run_step=steps)

            progress.update(task, advance=1)

    halted = machine.is_halted()
    result = {
        "steps_taken": steps,
        "halted": halted,
        "state": machine.current_state_id,
        "action": str(machine.current_state.action),
        "tape": str(machine.tape)
    }

    if logger is not None:
        entry = machine_entry(machine, steps_taken=steps)
        logger.log_summary([entry])
        logger.log_outcome([entry])

    console.print(tape_window(machine.tape, config["tape_window"]), markup=False, highlight=False)
    if halted:
        console_message(console, f"[green]Halted in state {escape(machine.current_state_id)} after {steps:,} steps.[/green]")
    else:
        console_message(console, f"[yellow]No halt within {max_steps:,} steps.[/yellow]")

    return result
