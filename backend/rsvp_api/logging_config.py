"""Root logger setup, applied once at application startup."""
import logging


def setup_logging(level: str = "INFO") -> None:
    """Attach a console handler to the root logger unless one already exists.

    Repeated calls (tests spinning up the app many times) are no-ops.
    """
    root = logging.getLogger()
    if root.handlers:
        return

    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root.addHandler(handler)
