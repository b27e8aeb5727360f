import logging

LOG_FMT = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"


def setup_logger(name: str = "ta_fc", level: int | str = logging.INFO) -> logging.Logger:
    """Configure root logging once (entry points only) and return `name`'s logger."""
    logging.basicConfig(level=level, format=LOG_FMT, datefmt="%H:%M:%S")
    return logging.getLogger(name)
