"""Tests for CLI display functions."""

from diceline.cli.display import (
    CRIT_FAIL_STYLE,
    CRIT_STYLE,
    console,
    display_error,
    display_result,
    result_style,
)
from diceline.dice.types import DieRollOutcome, RollResult


def _result(kept, is_crit=False, is_crit_fail=False):
    return RollResult(
        outcomes=(DieRollOutcome(kept=kept),),
        modifiers=(),
        total=sum(kept),
        is_crit=is_crit,
        is_crit_fail=is_crit_fail,
    )


class TestResultStyle:
    """Tests for result_style function."""

    def test_crit_is_green(self):
        """Verify crits use the crit style."""
        assert result_style(_result((6, 6), is_crit=True)) == CRIT_STYLE
        assert "green" in CRIT_STYLE

    def test_crit_fail_is_red(self):
        """Verify crit-fails use the crit-fail style."""
        assert result_style(_result((1, 1), is_crit_fail=True)) == CRIT_FAIL_STYLE
        assert "red" in CRIT_FAIL_STYLE

    def test_ordinary_roll_unstyled(self):
        """Verify ordinary rolls have no style."""
        assert result_style(_result((2, 5))) == ""


class TestDisplayResult:
    """Tests for display_result function."""

    def test_prints_formatted_line(self):
        """Verify the formatted result is printed."""
        with console.capture() as capture:
            display_result(_result((3, 4)))
        assert capture.get() == "Result: 7 [3+4]+0\n"

    def test_long_lines_are_not_wrapped(self):
        """Verify many dice stay on one line."""
        with console.capture() as capture:
            display_result(_result(tuple([6] * 60)))
        assert capture.get().count("\n") == 1

    def test_brackets_are_not_markup(self):
        """Verify bracketed dice are printed literally."""
        with console.capture() as capture:
            display_result(_result((2,)))
        assert "[2]" in capture.get()


class TestDisplayError:
    """Tests for display_error function."""

    def test_prints_message_literally(self):
        """Verify tokens in brackets survive Rich markup."""
        with console.capture() as capture:
            display_error("Instruction [dq] was not formatted correctly")
        output = capture.get()
        assert "Error:" in output
        assert "[dq]" in output
