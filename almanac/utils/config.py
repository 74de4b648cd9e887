# Config flags and runtime settings

import os

from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def load_config() -> dict:
    """Build settings from the environment (and .env, loaded above)."""
    return {
        "debug_mode": _env_flag("ALMANAC_DEBUG", False),

        # Shell prompt written before each command
        "prompt": os.getenv("ALMANAC_PROMPT", "> "),

        # Calendar file used when save/load is given a blank path
        "storage": {
            "default_file": os.getenv("ALMANAC_FILE", "calendar.txt"),
            "encoding": "utf-8",
            "atomic_save": _env_flag("ALMANAC_ATOMIC_SAVE", False),   # temp file + os.replace
        },

        "display": {
            "separator": "=" * 26,
        },
    }


CONFIG = load_config()
