# Debug output, only when CONFIG["debug_mode"] is on.

import sys

from almanac.utils.config import CONFIG


def debug_log(msg: str) -> None:
    if CONFIG.get("debug_mode", False):
        print(f"[debug] {msg}", file=sys.stderr)
