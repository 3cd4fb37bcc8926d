"""
Console logging for monitoring sessions.

Completed risk checks log at INFO, which is left uncoloured so that fallbacks
and delivery failures (WARNING and above) stand out.
"""

import logging
from typing import TextIO

# httpx logs every request at INFO and botocore is chatty at DEBUG; a check
# every few minutes would otherwise drown the alert lines.
NOISY_LOGGERS = ("httpx", "httpcore", "botocore", "aiobotocore")


class ColoredFormatter(logging.Formatter):
    """
    Formatter that colours each record by severity.

    INFO (completed checks) stays uncoloured.
    """

    LEVEL_COLORS = {
        logging.DEBUG: "\033[0;96m",  # cyan
        logging.WARNING: "\033[33m",  # yellow
        logging.ERROR: "\033[31m",  # red
        logging.CRITICAL: "\033[1;31m",  # bold red
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        color = self.LEVEL_COLORS.get(record.levelno)
        if not color:
            return message
        return f"{color}{message}{self.RESET}"


def config_logger(debug: bool = False, stream: TextIO | None = None) -> None:
    """
    Route all package logging to one coloured console handler.

    Calling it again replaces the handler rather than adding a second one.

    Args:
        debug (bool, optional): Include resolved locations and request URLs. Defaults to False.
        stream (TextIO, optional): Where to write. Defaults to stderr.
    """
    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    handler = logging.StreamHandler(stream)
    handler.setFormatter(ColoredFormatter("[%(asctime)s] %(levelname)s %(name)s: %(message)s"))
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if debug else logging.INFO)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
