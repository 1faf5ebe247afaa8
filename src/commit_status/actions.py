"""GitHub Actions runtime helpers.

- get_input: read an action input from its INPUT_<NAME> variable
- WorkflowCommandFormatter: render log records as workflow commands so
  errors and warnings show up as annotations on the run
- mask_value: register a secret with the runner so it is redacted
- configure_logging: route the root logger to stdout through the formatter

See https://docs.github.com/en/actions/using-workflows/workflow-commands-for-github-actions
"""

import logging
import os
import sys
from typing import Mapping, Optional, TextIO

# Log levels that map onto annotation commands; INFO is printed as-is
_LEVEL_COMMANDS = {
    logging.DEBUG: "debug",
    logging.WARNING: "warning",
    logging.ERROR: "error",
    logging.CRITICAL: "error",
}


def input_env_name(name: str) -> str:
    """Environment variable the runner uses for an action input."""
    return "INPUT_" + name.replace(" ", "_").upper()


def get_input(name: str, environ: Optional[Mapping[str, str]] = None) -> str:
    """Return the value of an action input, or "" when it is not set.

    Surrounding whitespace is stripped, as the runner's own toolkit does.
    """
    env = os.environ if environ is None else environ
    return env.get(input_env_name(name), "").strip()


def escape_data(value: str) -> str:
    """Escape a workflow command message."""
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def issue_command(command: str, message: str = "", stream: Optional[TextIO] = None) -> None:
    out = stream if stream is not None else sys.stdout
    out.write(f"::{command}::{escape_data(message)}\n")
    out.flush()


def mask_value(value: str, stream: Optional[TextIO] = None) -> None:
    """Ask the runner to redact a value from all later log output."""
    if value:
        issue_command("add-mask", value, stream=stream)


class WorkflowCommandFormatter(logging.Formatter):
    """Format records as workflow commands.

    ERROR and CRITICAL become ::error::, WARNING ::warning::, DEBUG
    ::debug::. INFO records are left as plain lines.
    """

    def __init__(self, fmt: str = "%(message)s"):
        super().__init__(fmt)

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        command = _LEVEL_COMMANDS.get(record.levelno)
        if command is None:
            return message
        return f"::{command}::{escape_data(message)}"


def configure_logging(level: str = "INFO", stream: Optional[TextIO] = None) -> None:
    """Send all log records to stdout as workflow commands.

    Replaces existing root handlers so repeated calls do not duplicate
    output.
    """
    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    handler.setFormatter(WorkflowCommandFormatter())

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level)

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
