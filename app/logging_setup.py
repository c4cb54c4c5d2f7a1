import logging
import sys


def setup_logging(level: str | int = "INFO") -> None:
    """Configure the root logger with a single stderr handler.

    Safe to call more than once: existing handlers are replaced, so reloading
    the app under a test runner or reloader does not duplicate log lines.
    """
    root = logging.getLogger()
    root.setLevel(level)

    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(fmt)
    root.addHandler(handler)

    logging.captureWarnings(True)
    # the Firebase SDK talks over requests/urllib3, which is chatty at DEBUG
    logging.getLogger("urllib3").setLevel(logging.WARNING)
