import logging
import sys

LOG_FORMAT = "[%(name)s] %(levelname)s %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """
    Attach a single stdout handler to the ``app`` logger tree.

    Safe to call more than once (uvicorn reloads, test clients): the handler is
    only added the first time.
    """
    root = logging.getLogger("app")
    root.setLevel(getattr(logging, str(level).upper(), logging.INFO))
    if not root.handlers:
        h = logging.StreamHandler(sys.stdout)
        h.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(h)
