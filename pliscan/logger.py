import logging

from rdkit import RDLogger

logger = logging.getLogger("pliscan")
stream_handler = logging.StreamHandler()
stream_handler.setFormatter(
    logging.Formatter("%(levelname)-8s [%(asctime)s] %(message)s", datefmt="%H:%M:%S")
)
logger.addHandler(stream_handler)
logger.setLevel(logging.INFO)

_RDKIT_LEVELS = {
    "CRITICAL": RDLogger.CRITICAL,
    "ERROR": RDLogger.ERROR,
    "WARNING": RDLogger.WARNING,
    "INFO": RDLogger.INFO,
    "DEBUG": RDLogger.DEBUG,
}


def set_log_level(level: str) -> None:
    """Sets the level of both the package and the RDKit loggers"""
    level = level.upper()
    RDLogger.logger().setLevel(_RDKIT_LEVELS[level])
    logger.setLevel(level)
    stream_handler.setLevel(level)
