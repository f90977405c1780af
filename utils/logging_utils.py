import logging


def get_logger(name: str = "mesh_topology") -> logging.Logger:
    """Return a package logger, attaching a stream handler the first time."""
    logger = logging.getLogger(name)
    root = logging.getLogger("mesh_topology")
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        root.addHandler(handler)
        root.setLevel(logging.INFO)
    return logger
