import logging
import os

LOG_LEVEL = os.getenv("CSVSNIFF_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_configured = False

def get_logger(name: str) -> logging.Logger:
    """
    Returns a module logger. The 'csvsniff' root handler is configured once,
    using CSVSNIFF_LOG_LEVEL (default INFO).
    """
    global _configured
    if not _configured:
        root = logging.getLogger("csvsniff")
        if not root.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter(LOG_FORMAT))
            root.addHandler(handler)
        root.setLevel(LOG_LEVEL)
        _configured = True

    if not name.startswith("csvsniff"):
        name = f"csvsniff.{name}"
    return logging.getLogger(name)
