import json
import os
from datetime import datetime, timezone

def machine_entry(machine, **extra):
    """Flatten the live configuration of a machine into a JSON-able dict."""
    entry = {
        "step": machine.step_number,
        "state": machine.current_state_id,
        "action": str(machine.current_state.action),
        "head": machine.tape.head_position,
        "tape": str(machine.tape),
        "halted": machine.is_halted(),
        "timestamp": datetime.now(timezone.utc).isoformat()
    }
    entry.update(extra)
    return entry

class JSONLogger:
    """
    Appends JSON lines to dated files under `output_directory`.

    The main run log holds trace points. End-of-run entries go to a summary
    file and, depending on their "halted" flag, to halting_/non_halting_ files.
    """

    def __init__(self, output_directory="logs/", log_file_prefix="machine_run_"):
        self.output_directory = output_directory
        self.log_file_prefix = log_file_prefix
        os.makedirs(self.output_directory, exist_ok=True)
        self.rotate()

    def _dated_path(self, stem):
        return os.path.join(self.output_directory, f"{stem}{self.today}.jsonl")

    def _append(self, path, entries):
        with open(path, "a", encoding="utf-8") as f:
            f.writelines(json.dumps(entry) + "\n" for entry in entries)

    def rotate(self):
        """Start a new main log file if the UTC date has changed."""
        self.today = datetime.now(timezone.utc).strftime("%Y-%m-%d")
        self.current_log = self._dated_path(self.log_file_prefix)

    def log(self, entry: dict):
        self._append(self.current_log, [entry])

    def log_trace(self, machine, **extra):
        """Log the machine's current configuration as a trace point."""
        self.log(machine_entry(machine, **extra))

    def log_summary(self, entries: list):
        self._append(self._dated_path(f"{self.log_file_prefix}summary_"), entries)

    def log_outcome(self, entries: list):
        """File final configurations under halting_ or non_halting_ by their "halted" flag."""
        halting = [entry for entry in entries if entry["halted"]]
        running = [entry for entry in entries if not entry["halted"]]
        if halting:
            self._append(self._dated_path("halting_"), halting)
        if running:
            self._append(self._dated_path("non_halting_"), running)
