import json
import os
from datetime import datetime

CONFIG_PATH = "config/runtime_config.json"

DEFAULT_CONFIG = {
    "tape_size": 1024,
    "max_steps": 1_000_000,
    "verbose": False,
    "log_results": True,
    "batch_size": 256,
    "output_directory": "logs/",
    "log_file_prefix": "tmvm_"
}

# Expected types for validation
CONFIG_SCHEMA = {
    "tape_size": int,
    "max_steps": int,
    "verbose": bool,
    "log_results": bool,
    "batch_size": int,
    "output_directory": str,
    "log_file_prefix": str
}

POSITIVE_KEYS = ["tape_size", "max_steps", "batch_size"]

def validate_config(config):
    for key, expected_type in CONFIG_SCHEMA.items():
        if key not in config:
            raise ValueError(f"Missing required configuration key: {key}")
        # bool is a subclass of int, so it has to be ruled out explicitly
        if not isinstance(config[key], expected_type) or (expected_type is int and isinstance(config[key], bool)):
            raise TypeError(f"Config key '{key}' expected {expected_type}, got {type(config[key])}.")

    for key in POSITIVE_KEYS:
        if config[key] <= 0:
            raise ValueError(f"Config key '{key}' must be positive, got {config[key]}.")

def load_config(path=CONFIG_PATH, show_summary=False):
    if not os.path.exists(path):
        raise FileNotFoundError(f"Configuration file not found at: {path}")

    with open(path, "r", encoding="utf-8") as f:
        user_config = json.load(f)

    # Merge defaults with overrides
    config = DEFAULT_CONFIG.copy()
    config.update(user_config)

    # Validate schema
    validate_config(config)

    # Validate output directory
    os.makedirs(config["output_directory"], exist_ok=True)

    if show_summary:
        print(f"[{datetime.now()}] Loaded config:")
        for key, value in config.items():
            print(f"  {key}: {value}")

    return config
