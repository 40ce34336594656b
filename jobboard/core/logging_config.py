"""
Logging setup.

One call at startup configures the root logger; modules use
logging.getLogger(__name__).
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_configured = False


def setup_logging(debug: bool = False) -> None:
    """Configure root logging once. DEBUG level when debug is set."""
    global _configured
    level = logging.DEBUG if debug else logging.INFO

    if _configured:
        logging.getLogger().setLevel(level)
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root = logging.getLogger()
    root.addHandler(handler)
    root.setLevel(level)

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    _configured = True
