"""
Tests for the bundled example interpreters.
"""

import io
from fractions import Fraction

import allure
import pytest
from hypothesis import given, settings, strategies as st

from linecmd.config import AppConfig
from linecmd.examples import EXAMPLES, Calculator, PhoneBook


class ScriptedReader:
    """Line source that replays a list of lines, then signals end of input."""

    def __init__(self, lines):
        self.lines = list(lines)

    def next_line(self, prompt):
        return self.lines.pop(0) if self.lines else None

    def set_completion_callback(self, callback):
        pass


def run_script(cls, *lines):
    """Run lines through a fresh session; returns output without the final 'Terminating'."""
    session = cls(io.StringIO(), io.StringIO(), config=AppConfig(), line_reader=ScriptedReader(lines))
    session.cmdloop()
    output = session.stdout.getvalue()
    assert output.endswith("Terminating\n")
    return output[:-len("Terminating\n")], session


@allure.feature("Examples")
@allure.story("Example lookup table")
@allure.severity(allure.severity_level.MINOR)
def test_examples_table():
    assert EXAMPLES == {"calc": Calculator, "phonebook": PhoneBook}


@allure.feature("Calculator")
@allure.story("Prompt shows the stack")
@allure.severity(allure.severity_level.NORMAL)
def test_calculator_prompt():
    _, session = run_script(Calculator)
    assert session.prompt == "Calculator(empty)> "

    _, session = run_script(Calculator, "1 2", "push 1/2")
    assert session.stack == [1, 2, Fraction(1, 2)]
    assert session.prompt == "Calculator[1, 2, 1/2]> "


@allure.feature("Calculator")
@allure.story("Arithmetic through operator shortcuts")
@allure.severity(allure.severity_level.CRITICAL)
@pytest.mark.parametrize("lines,expected", [
    (["1 2", "+", "."], "=> 3\n"),
    (["5 3", "-", "."], "=> 2\n"),
    (["6 3", "/", "."], "=> 2\n"),
    (["1 2", "/", "."], "=> 1/2\n"),
    (["4 -3", "*", "."], "=> -12\n"),
    (["push 1/2 3", "multiply", "pop"], "=> 3/2\n"),
    (["1 2", "x", "-", "."], "=> 1\n"),
    (["7", "dup", "add", "pop"], "=> 14\n"),
])
def test_calculator_arithmetic(lines, expected):
    output, _ = run_script(Calculator, *lines)
    assert output == expected


@allure.feature("Calculator")
@allure.story("Pushed values pop back in reverse order")
@allure.severity(allure.severity_level.NORMAL)
@settings(max_examples=100)
@given(values=st.lists(st.integers(min_value=-1000, max_value=1000), min_size=1, max_size=8))
def test_calculator_push_pop(values: list[int]):
    pops = ["."] * len(values)
    output, session = run_script(Calculator, " ".join(str(v) for v in values), *pops)

    assert output == "".join(f"=> {v}\n" for v in reversed(values))
    assert session.stack == []


@allure.feature("Calculator")
@allure.story("Error bindings")
@allure.severity(allure.severity_level.CRITICAL)
@pytest.mark.parametrize("lines,expected", [
    (["."], "Stack underflow\n"),
    (["1", "+"], "Stack underflow\n"),
    (["1 0", "/"], "Division by zero\n"),
    (["push 1 x"], "Bad value 'x'\n"),
    (["3 four"], "Bad value 'four'\n"),
    (["frobnicate"], "No such command 'frobnicate'\n"),
    (["d"], "No such command 'd'\n"),
])
def test_calculator_errors(lines, expected):
    output, _ = run_script(Calculator, *lines)
    assert output == expected


@allure.feature("Calculator")
@allure.story("Errors leave the session running")
@allure.severity(allure.severity_level.NORMAL)
def test_calculator_recovers_after_error():
    output, session = run_script(Calculator, "/", "2 3", "clear", "9", ".")
    assert output == "Stack underflow\n=> 9\n"
    assert session.stack == []


@allure.feature("Calculator")
@allure.story("Help lists operator aliases")
@allure.severity(allure.severity_level.MINOR)
def test_calculator_help():
    output, _ = run_script(Calculator, "help add", "? .")
    assert output == (
        "add      -- Pops 2 items, adds them, and pushes the result (aliases: +)\n"
        "pop      -- Removes the top item from the stack and displays its value (aliases: .)\n"
    )


@allure.feature("PhoneBook")
@allure.story("Adding and finding entries")
@allure.severity(allure.severity_level.CRITICAL)
def test_phonebook_add_and_find():
    output, session = run_script(
        PhoneBook,
        "add Sam, 312-555-1212",
        "+ Ann,   555-0000",
        "find Sam",
        "Ann",
        "find Bob",
    )

    assert session.numbers == {"Sam": "312-555-1212", "Ann": "555-0000"}
    assert output == (
        "Sam                       312-555-1212\n"
        "Ann                       555-0000\n"
        "Bob isn't in the phone book\n"
    )


@allure.feature("PhoneBook")
@allure.story("Listing and deleting entries")
@allure.severity(allure.severity_level.NORMAL)
def test_phonebook_list_and_delete():
    output, session = run_script(
        PhoneBook,
        "add Zed, 2",
        "add Amy, 1",
        "list",
        "delete Zed",
        "delete Zed",
    )

    assert output == (
        "Amy                       1\n"
        "Zed                       2\n"
        "No entry for 'Zed'\n"
    )
    assert session.numbers == {"Amy": "1"}


@allure.feature("PhoneBook")
@allure.story("Malformed entries")
@allure.severity(allure.severity_level.MINOR)
@pytest.mark.parametrize("line", ["add", "add Sam", "add , 555"])
def test_phonebook_add_usage(line):
    output, session = run_script(PhoneBook, line)
    assert output == "Usage: add <name>, <number>\n"
    assert session.numbers == {}


@allure.feature("PhoneBook")
@allure.story("Completing names for find")
@allure.severity(allure.severity_level.NORMAL)
def test_phonebook_find_completion():
    _, session = run_script(PhoneBook, "add Sam, 1", "add Sally, 2", "add Bob, 3")

    assert session.complete_find("Sa") == ["Sally", "Sam"]
    assert session.complete_find("") == ["Bob", "Sally", "Sam"]
    assert session.complete("fi") == ["find"]
    assert session.completion_callback("B") == ["Bob"]
