"""Tests for running and parsing the battery status command."""

import shlex
import subprocess
import sys
from unittest.mock import patch

import pytest

from battery_status import (
    EMPTY_READING,
    BatteryReading,
    BatteryState,
    CommandFailed,
    CommandSpawnFailure,
    InsufficientFields,
    InvalidPercentage,
    MalformedOutput,
    parse_acpi_output,
    poll,
    run_status_command,
)


class TestParseAcpiOutput:
    def test_charging_with_detail(self):
        reading = parse_acpi_output("X: Charging, 55%, remaining time 1:30")
        assert reading == BatteryReading(BatteryState.CHARGING, 55, "remaining time 1:30")

    def test_real_acpi_line(self):
        reading = parse_acpi_output("Battery 0: Discharging, 87%, 03:12:45 remaining\n")
        assert reading.state is BatteryState.DISCHARGING
        assert reading.percentage == 87
        assert reading.detail == "03:12:45 remaining"

    def test_detail_is_optional(self):
        reading = parse_acpi_output("Battery 0: Full, 100%\n")
        assert reading == BatteryReading(BatteryState.FULL, 100, "")

    def test_empty_output_gives_fallback(self):
        assert parse_acpi_output("") == EMPTY_READING
        assert parse_acpi_output("\n") == EMPTY_READING
        assert EMPTY_READING.state is BatteryState.UNKNOWN
        assert EMPTY_READING.percentage == 0
        assert EMPTY_READING.detail == ""

    def test_no_colon_is_malformed(self):
        with pytest.raises(MalformedOutput):
            parse_acpi_output("Battery 0 Discharging, 55%")

    def test_non_numeric_percentage(self):
        with pytest.raises(InvalidPercentage):
            parse_acpi_output("X: Discharging, notanumber, foo")

    def test_single_field_is_insufficient(self):
        with pytest.raises(InsufficientFields):
            parse_acpi_output("Battery 0: Charging")

    def test_empty_percentage_field(self):
        with pytest.raises(InvalidPercentage):
            parse_acpi_output("Battery 0: Charging,")

    @pytest.mark.parametrize("word", ["Full", "Unknown", "Not charging", "charging", ""])
    def test_other_state_words_map_to_full(self, word):
        reading = parse_acpi_output(f"Battery 0: {word}, 50%")
        assert reading.state is BatteryState.FULL

    @pytest.mark.parametrize("field", ["5_5%", "+5%", "5 5%", "\u0665\u0665%", "0x10%", "%"])
    def test_percentage_must_be_plain_digits(self, field):
        with pytest.raises(InvalidPercentage):
            parse_acpi_output(f"X: Discharging, {field}, foo")

    @pytest.mark.parametrize("field, expected", [
        ("150%", 100),
        ("-3%", 0),
        ("0%", 0),
        ("100%", 100),
        ("42", 42),
    ])
    def test_percentage_is_clamped(self, field, expected):
        assert parse_acpi_output(f"Battery 0: Discharging, {field}").percentage == expected

    def test_only_first_line_is_read(self):
        output = (
            "Battery 0: Discharging, 30%, 00:40:00 remaining\n"
            "Battery 1: Charging, 90%, 00:10:00 until charged\n"
        )
        reading = parse_acpi_output(output)
        assert reading == BatteryReading(BatteryState.DISCHARGING, 30, "00:40:00 remaining")

    def test_extra_fields_are_ignored(self):
        reading = parse_acpi_output("Battery 0: Discharging, 30%, rate unknown, extra")
        assert reading.detail == "rate unknown"

    def test_colon_inside_detail_is_kept(self):
        reading = parse_acpi_output("Battery 0: Charging, 12%, 01:02:03 until charged")
        assert reading.detail == "01:02:03 until charged"


class TestRunStatusCommand:
    def test_returns_stdout(self):
        completed = subprocess.CompletedProcess(
            ["acpi"], 0, stdout="Battery 0: Full, 100%\n", stderr="")
        with patch("battery_status.subprocess.run", return_value=completed) as run:
            assert run_status_command("acpi -b") == "Battery 0: Full, 100%\n"
        assert run.call_args[0][0] == ["acpi", "-b"]

    def test_missing_command_is_spawn_failure(self):
        with patch("battery_status.subprocess.run", side_effect=FileNotFoundError(2, "No such file")):
            with pytest.raises(CommandSpawnFailure) as exc_info:
                run_status_command("acpi")
        assert "unable to run 'acpi'" in str(exc_info.value)

    def test_empty_command_is_spawn_failure(self):
        with pytest.raises(CommandSpawnFailure):
            run_status_command("   ")

    def test_nonzero_exit_is_command_failed(self):
        completed = subprocess.CompletedProcess(["acpi"], 1, stdout="", stderr="boom\n")
        with patch("battery_status.subprocess.run", return_value=completed):
            with pytest.raises(CommandFailed) as exc_info:
                run_status_command("acpi")
        assert exc_info.value.returncode == 1
        assert "boom" in str(exc_info.value)

    def test_timeout_is_command_failed(self):
        with patch("battery_status.subprocess.run",
                   side_effect=subprocess.TimeoutExpired("acpi", 2)):
            with pytest.raises(CommandFailed):
                run_status_command("acpi", timeout=2)

    def test_poll_runs_and_parses(self):
        completed = subprocess.CompletedProcess(
            ["acpi"], 0, stdout="Battery 0: Charging, 64%, 00:30:00 until charged\n", stderr="")
        with patch("battery_status.subprocess.run", return_value=completed):
            reading = poll("acpi")
        assert reading == BatteryReading(BatteryState.CHARGING, 64, "00:30:00 until charged")

    def test_undecodable_output_is_replaced(self):
        script = "import sys; sys.stdout.buffer.write(b'Battery 0: Charging, 5\\xff%')"
        command = " ".join(shlex.quote(part) for part in [sys.executable, "-c", script])

        output = run_status_command(command)
        assert output == "Battery 0: Charging, 5\ufffd%"
        with pytest.raises(InvalidPercentage):
            parse_acpi_output(output)
