"""
Reverse Polish calculator built on linecmd.

Numbers typed at the prompt are pushed onto a stack of exact fractions;
operators pop their operands and push the result:

    Calculator(empty)> 1 2
    Calculator[1, 2]> /
    Calculator[1/2]> .
    => 1/2
"""
import re
from fractions import Fraction
from typing import Any, List, Optional

from ..command_system import Method
from ..interpreter import Cmd

VALUE = re.compile(r"^-?\d+(/\d+)?$")


class StackUnderflowError(Exception):
    """An operation needed more values than the stack holds."""


class BadValueError(ValueError):
    """A pushed value is not an integer or fraction."""

    def __init__(self, value: str) -> None:
        super().__init__(value)
        self.value = value


class Calculator(Cmd):
    """RPN stack calculator."""

    @classmethod
    def declare(cls, actions):
        actions.action("clear", doc="Clears the contents of the stack")
        actions.action("dup", doc="Pushes the value of the stack's top item")
        actions.action("pop", doc="Removes the top item from the stack and displays its value",
                       shortcuts=["."])
        actions.action("push", takes_args=True, doc="Pushes the values passed onto the stack")
        actions.action("swap", doc="Swaps the order of the stack's top 2 items", shortcuts=["x"])

        actions.action("add", doc="Pops 2 items, adds them, and pushes the result",
                       shortcuts=["+"])
        actions.action("multiply", doc="Pops 2 items, multiplies them, and pushes the result",
                       shortcuts=["*"])
        actions.action("subtract", doc="Pops 2 items, subtracts the topmost, and pushes the result",
                       shortcuts=["-"])
        actions.action("divide", doc="Pops 2 items, divides by the topmost, and pushes the result",
                       shortcuts=["/"])

        actions.handle(StackUnderflowError, "Stack underflow")
        actions.handle(ZeroDivisionError, "Division by zero")
        actions.handle(BadValueError, Method("report_bad_value"))
        actions.prompt(lambda session: session.prompt_command())

    def setup(self) -> None:
        self.stack: List[Fraction] = []

    def do_clear(self) -> None:
        self.setup()

    def do_dup(self) -> None:
        self.push(self.peek())

    def do_pop(self) -> None:
        self.print_value(self.pop())

    def do_push(self, values: List[Fraction]) -> None:
        self.push(*values)

    def do_swap(self) -> None:
        self.swap()

    def do_add(self) -> None:
        self.push(self.pop() + self.pop())

    def do_multiply(self) -> None:
        self.push(self.pop() * self.pop())

    def do_subtract(self) -> None:
        self.swap()
        self.push(self.pop() - self.pop())

    def do_divide(self) -> None:
        self.swap()
        self.push(self.pop() / self.pop())

    def peek(self) -> Fraction:
        if not self.stack:
            raise StackUnderflowError()
        return self.stack[-1]

    def pop(self) -> Fraction:
        if not self.stack:
            raise StackUnderflowError()
        return self.stack.pop()

    def push(self, *values: Fraction) -> None:
        self.stack.extend(values)

    def swap(self) -> None:
        top = self.pop()
        self.push(top, self.pop())

    def print_value(self, value: Fraction) -> None:
        self.write(f"=> {value}")

    def report_bad_value(self, error: BadValueError) -> None:
        self.write(f"Bad value '{error.value}'")

    def contents(self) -> str:
        if not self.stack:
            return "(empty)"
        return "[" + ", ".join(str(v) for v in self.stack) + "]"

    def prompt_command(self) -> str:
        return f"{type(self).__name__}{self.contents()}> "

    def command_missing(self, command: str, values: Any) -> Any:
        if not VALUE.match(command):
            return super().command_missing(command, values)
        self.push(Fraction(command), *values)

    def tokenize_args(self, args: Optional[str]) -> Any:
        command = self.current_command or ""
        if not (VALUE.match(command) or command == "push"):
            return args
        values = []
        for token in (args or "").split():
            if not VALUE.match(token):
                raise BadValueError(token)
            values.append(Fraction(token))
        return values
