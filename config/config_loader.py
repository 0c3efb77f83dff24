import json
import os
from datetime import datetime

DEFAULT_CONFIG = {
    "max_steps": 10_000,
    "log_frequency": 100,
    "enable_logging": True,
    "output_directory": "logs/",
    "log_file_prefix": "machine_run_",
    "tape_window": 10,
    "show_progress": False
}

# Expected types for validation
CONFIG_SCHEMA = {
    "max_steps": int,
    "log_frequency": int,
    "enable_logging": bool,
    "output_directory": str,
    "log_file_prefix": str,
    "tape_window": int,
    "show_progress": bool
}

def validate_config(config):
    for key, expected_type in CONFIG_SCHEMA.items():
        if key not in config:
            raise ValueError(f"Missing required configuration key: {key}")
        # bool is a subclass of int, don't let True pass as a step count
        if not isinstance(config[key], expected_type) or \
                (expected_type is int and isinstance(config[key], bool)):
            raise TypeError(f"Config key '{key}' expected {expected_type}, got {type(config[key])}.")

    if config["max_steps"] < 0:
        raise ValueError("max_steps must be non-negative.")
    if config["log_frequency"] < 1:
        raise ValueError("log_frequency must be at least 1.")
    if config["tape_window"] < 0:
        raise ValueError("tape_window must be non-negative.")

def load_config(path="config/runtime_config.json", show_summary=True):
    if not os.path.exists(path):
        raise FileNotFoundError(f"Configuration file not found at: {path}")

    with open(path, "r", encoding="utf-8") as f:
        user_config = json.load(f)

    # Merge defaults with overrides
    config = DEFAULT_CONFIG.copy()
    config.update(user_config)

    validate_config(config)

    if config["enable_logging"]:
        os.makedirs(config["output_directory"], exist_ok=True)

    if show_summary:
        print(f"[{datetime.now()}] Loaded config:")
        for key, value in config.items():
            print(f"  {key}: {value}")

    return config
