"""
Battery status polling and parsing.

Runs the external status command (``acpi`` by default) and turns its first
output line into a :class:`BatteryReading`. Nothing in here touches GTK, so
it can be tested on its own.

Expected output looks like::

    Battery 0: Discharging, 55%, 01:30:00 remaining
"""

import enum
import logging
import re
import shlex
import subprocess
from typing import List, NamedTuple, Optional

import config

logger = logging.getLogger(__name__)

# Optional minus sign, ASCII digits only
_PERCENTAGE_RE = re.compile(r"-?[0-9]+")


class BatteryState(enum.Enum):
    """Charging state reported by the status command."""

    CHARGING = "Charging"
    DISCHARGING = "Discharging"
    FULL = "Full"
    UNKNOWN = "Unknown"

    @property
    def label(self) -> str:
        return self.value


class BatteryReading(NamedTuple):
    """One parsed poll of the status command."""

    state: BatteryState
    percentage: int  # always within 0-100
    detail: str = ""


EMPTY_READING = BatteryReading(BatteryState.UNKNOWN, 0, "")


class BatteryStatusError(Exception):
    """Base class for every recoverable polling or parsing failure."""


class CommandSpawnFailure(BatteryStatusError):
    """The status command could not be launched."""

    def __init__(self, command: str, reason: str) -> None:
        super().__init__(f"unable to run '{command}': {reason}")
        self.command = command


class CommandFailed(BatteryStatusError):
    """The status command ran but timed out or exited with an error."""

    def __init__(self, command: str, reason: str, returncode: Optional[int] = None) -> None:
        super().__init__(f"'{command}' failed: {reason}")
        self.command = command
        self.returncode = returncode


class MalformedOutput(BatteryStatusError):
    """The output has no ``label:`` prefix."""


class InsufficientFields(BatteryStatusError):
    """Fewer than two comma-separated values after the colon."""


class InvalidPercentage(BatteryStatusError):
    """The percentage field is not a base-10 integer."""


def run_status_command(command: str = config.DEFAULT_COMMAND,
                       timeout: float = config.COMMAND_TIMEOUT) -> str:
    """
    Run the status command synchronously and return its standard output.

    Args:
        command: Full command line, split with shell rules.
        timeout: Seconds to wait before giving up.

    Returns:
        The captured standard output as text.

    Raises:
        CommandSpawnFailure: The command could not be started.
        CommandFailed: The command timed out or exited non-zero.
    """
    try:
        argv = shlex.split(command)
    except ValueError as e:
        raise CommandSpawnFailure(command, str(e)) from e
    if not argv:
        raise CommandSpawnFailure(command, "empty command line")

    try:
        result = subprocess.run(argv, capture_output=True, text=True,
                                errors="replace", timeout=timeout)
    except subprocess.TimeoutExpired as e:
        raise CommandFailed(command, f"timed out after {timeout:g}s") from e
    except OSError as e:
        raise CommandSpawnFailure(command, e.strerror or str(e)) from e

    if result.returncode != 0:
        stderr = (result.stderr or "").strip()
        reason = f"exit status {result.returncode}"
        if stderr:
            reason = f"{reason} ({stderr})"
        raise CommandFailed(command, reason, result.returncode)

    logger.debug("'%s' output: %r", command, result.stdout)
    return result.stdout


def _split_fields(text: str) -> List[str]:
    fields = []
    for field in text.split(","):
        if field.startswith(" "):
            field = field[1:]
        fields.append(field.rstrip("\r\n"))
    return fields


def _parse_state(word: str) -> BatteryState:
    # Anything that is not exactly Charging/Discharging counts as full
    if word == BatteryState.CHARGING.value:
        return BatteryState.CHARGING
    if word == BatteryState.DISCHARGING.value:
        return BatteryState.DISCHARGING
    return BatteryState.FULL


def _parse_percentage(field: str) -> int:
    value = field.strip()
    if value.endswith("%"):
        value = value[:-1]
    if not _PERCENTAGE_RE.fullmatch(value):
        raise InvalidPercentage(f"invalid percentage {field!r}")
    percentage = int(value)
    return max(0, min(100, percentage))


def parse_acpi_output(output: str) -> BatteryReading:
    """
    Parse the output of the status command.

    Empty output is not an error: it yields an UNKNOWN reading at 0%.

    Args:
        output: Raw standard output text.

    Returns:
        The parsed reading, with the percentage clamped to 0-100.

    Raises:
        MalformedOutput: No colon in the first line.
        InsufficientFields: Fewer than two fields after the colon.
        InvalidPercentage: The second field is not an integer.
    """
    if not output.strip():
        return EMPTY_READING

    line = output.strip().splitlines()[0]
    label, sep, rest = line.partition(":")
    if not sep:
        raise MalformedOutput(f"no ':' separator in {line!r}")

    fields = _split_fields(rest)
    if len(fields) < 2:
        raise InsufficientFields(f"expected at least 2 fields, got {len(fields)} in {line!r}")

    state = _parse_state(fields[0])
    percentage = _parse_percentage(fields[1])
    detail = fields[2] if len(fields) > 2 else ""
    return BatteryReading(state, percentage, detail)


def poll(command: str = config.DEFAULT_COMMAND,
         timeout: float = config.COMMAND_TIMEOUT) -> BatteryReading:
    """Run the status command and parse its output."""
    return parse_acpi_output(run_status_command(command, timeout))
