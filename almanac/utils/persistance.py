# Plain-text write helpers (truncate-and-write, or temp file + rename)

from __future__ import annotations
from pathlib import Path
import os
import tempfile

from almanac.utils.config import CONFIG


def write_text(path: str | Path, text: str, atomic: bool = False) -> None:
    p = Path(path)
    encoding = CONFIG["storage"]["encoding"]
    if not atomic:
        with p.open("w", encoding=encoding, newline="") as f:
            f.write(text)
        return

    # Unique temp name beside the target so os.replace stays on one filesystem
    tmp = None
    try:
        with tempfile.NamedTemporaryFile("w", encoding=encoding, newline="", dir=p.parent,
                                         prefix=p.name + ".", suffix=".tmp", delete=False) as f:
            tmp = Path(f.name)
            f.write(text)
        os.replace(tmp, p)
    finally:
        if tmp is not None and tmp.exists():
            tmp.unlink()


def read_text(path: str | Path) -> str:
    p = Path(path)
    with p.open("r", encoding=CONFIG["storage"]["encoding"], newline="") as f:
        return f.read()
