"""
In-memory phone book built on linecmd.
"""
import re
from typing import Dict, List, Optional

from ..command_system import completion_grep
from ..interpreter import Cmd

ENTRY_SEPARATOR = re.compile(r", +")


class PhoneBook(Cmd):
    """
    Stores names and numbers for the life of the session.

    Typing a name that is not a command looks it up.
    """

    @classmethod
    def declare(cls, actions):
        actions.action("add", takes_args=True, doc="Add an entry (ex: add Sam, 312-555-1212)",
                       shortcuts=["+"])
        actions.action("find", takes_args=True, doc="Look up an entry (ex: find Sam)",
                       completer="complete_find")
        actions.action("list", doc="List all entries")
        actions.action("delete", takes_args=True, doc="Remove an entry")

    def setup(self) -> None:
        self.numbers: Dict[str, str] = {}

    def do_add(self, args: Optional[str]) -> None:
        parts = ENTRY_SEPARATOR.split(args or "", maxsplit=1)
        name = parts[0].strip()
        if not name or len(parts) < 2:
            self.write("Usage: add <name>, <number>")
            return
        self.numbers[name] = parts[1].strip()

    def do_find(self, name: Optional[str]) -> None:
        name = (name or "").strip()
        if name in self.numbers:
            self.print_name_and_number(name, self.numbers[name])
        else:
            self.write(f"{name} isn't in the phone book")

    def do_list(self) -> None:
        for name, number in sorted(self.numbers.items()):
            self.print_name_and_number(name, number)

    def do_delete(self, name: Optional[str]) -> None:
        name = (name or "").strip()
        if self.numbers.pop(name, None) is None:
            self.write(f"No entry for '{name}'")

    def complete_find(self, text: str) -> List[str]:
        return completion_grep(sorted(self.numbers), text)

    def print_name_and_number(self, name: str, number: str) -> None:
        self.write("%-25s %s" % (name, number))

    def command_missing(self, command: str, args: Optional[str]) -> None:
        self.do_find(" ".join(part for part in (command, args) if part))
