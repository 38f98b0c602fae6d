"""Console logging tagged with the caller's file, line and function."""

from __future__ import annotations

import sys
from typing import Any


def get_filename(filepath: str | None) -> str | None:
    """Return the part of a path after its last forward or back slash."""
    if filepath is None:
        log("filepath is None")
        return None
    cut = max(filepath.rfind("/"), filepath.rfind("\\"))
    return filepath[cut + 1:]


def log(*args: Any) -> None:
    """Print the arguments on one line, prefixed with the caller's location."""
    frame = sys._getframe(1)
    code = frame.f_code
    function = getattr(code, "co_qualname", code.co_name)
    prefix = f"{get_filename(code.co_filename)}({frame.f_lineno}) `{function}`: "
    print(prefix + "".join(str(arg) for arg in args), flush=True)