import re
import sys

from loguru import logger


def strip_code_fences(text: str) -> str:
    """
    Remove markdown fence lines (``` or ```text) that models sometimes wrap
    their answer in. Everything between the fences is kept as-is.
    """
    return re.sub(r"^[ \t]*```[\w-]*[ \t]*$\n?", "", text, flags=re.MULTILINE)


def configure_logging(level: str = "INFO") -> None:
    """Send loguru output to stderr at the given level, replacing any earlier sinks."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=level.upper(),
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {name}:{function} - {message}",
    )
