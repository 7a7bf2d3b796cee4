"""
Diagnostic output for spotify-notify.

Every message goes to stderr as a single line `<prog>: <TAG>: <message>`.
Only warnings and above are shown unless verbose mode is on.
"""

import logging
import sys
from typing import Optional, TextIO

PROG_NAME = "spotify-notify"


class DiagnosticFormatter(logging.Formatter):
    """
    Formatter producing `<prog>: <TAG>: <message>` lines.

    Tags follow the usual shell-script convention rather than the logging
    level names.
    """

    TAGS = {
        logging.DEBUG: "DEBUG",
        logging.INFO: "INFO",
        logging.WARNING: "WARN",
        logging.ERROR: "ERROR",
        logging.CRITICAL: "FATAL",
    }

    def __init__(self, prog: str = PROG_NAME):
        """
        Initialize the formatter.

        Args:
            prog: Program name printed at the start of every line
        """
        super().__init__()
        self.prog = prog

    def format(self, record: logging.LogRecord) -> str:
        tag = self.TAGS.get(record.levelno, record.levelname)
        message = record.getMessage()
        if record.exc_info and logging.getLogger().isEnabledFor(logging.DEBUG):
            message = f"{message}\n{self.formatException(record.exc_info)}"
        return f"{self.prog}: {tag}: {message}"


def setup_logging(
    verbose: bool = False,
    stream: Optional[TextIO] = None,
    prog: str = PROG_NAME,
) -> logging.Handler:
    """
    Configure the root logger.

    Args:
        verbose: Show step tracing and raw API error bodies
        stream: Output stream (stderr by default)
        prog: Program name used as the line prefix

    Returns:
        The installed handler
    """
    root = logging.getLogger()
    for existing in list(root.handlers):
        if isinstance(existing.formatter, DiagnosticFormatter):
            root.removeHandler(existing)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(DiagnosticFormatter(prog))
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)

    # urllib3 connection chatter is not useful even in verbose mode
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    return handler
