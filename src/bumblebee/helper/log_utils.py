import logging
import sys

LOGGER_NAME = "bumblebee"


def to_logging_level(level: str | int) -> int:
    """
    Converts a level name such as "debug" or "WARNING" to its logging level.

    Args:
        level (str | int): A case-insensitive level name, or an int level which is
            returned unchanged.

    Returns:
        int: The corresponding logging level. Unknown names map to INFO.
    """
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(dest: list[str], level: str | int = logging.INFO) -> logging.Logger:
    """
    Configures and returns the package logger. Every module logger of the package
    is a child of it, so this controls all bumblebee log output. Existing handlers
    are cleared before the new configuration is applied.

    Args:
        dest (list[str]): Destinations for the log output. Supported destinations:
            - "stdout": Output logs to the standard output.
            - "stderr": Output logs to the standard error.
            - "file:<path>": Output logs to a file at the specified path.
        level (str | int, optional): The logging level. Defaults to `logging.INFO`.

    Returns:
        logging.Logger: The configured logger instance.

    Raises:
        ValueError: If a destination is not recognized.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(to_logging_level(level))
    logger.propagate = False
    logger.handlers.clear()

    for d in dest:
        handler: logging.Handler
        if d == "stdout":
            handler = logging.StreamHandler(sys.stdout)
        elif d == "stderr":
            handler = logging.StreamHandler(sys.stderr)
        elif d.startswith("file:"):
            path = d[len("file:"):]
            handler = logging.FileHandler(path)
        else:
            raise ValueError(f"Unknown log destination: {d}")

        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        logger.addHandler(handler)

    return logger
