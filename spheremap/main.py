"""Command entry point: open the window and run it until closed."""

from __future__ import annotations

import sys

from spheremap.logger import log
from spheremap.window import Window, WindowError

WIDTH = 1280
HEIGHT = 720
TITLE = "sphere-map"


def main(argv: list[str] | None = None) -> int:
    """Run the application; the arguments are accepted and ignored."""
    try:
        window = Window(WIDTH, HEIGHT, TITLE)
    except WindowError:
        log("Window initialisation failed.")
        return -1
    with window:
        window.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())