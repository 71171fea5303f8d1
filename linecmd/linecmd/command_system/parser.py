"""
Line parser for linecmd.
Splits an input line into the command being called and its argument string.
"""
from typing import List, Optional

from ..constants import SUBCOMMAND_SEPARATOR
from .base import ParsedLine
from .resolver import NameResolver, find_subcommand_in_args


class LineParser:
    """
    Parser for interpreter input lines.

    Tokens are separated by whitespace; there is no quoting. The command is
    returned as typed (alias or abbreviation included); translation to a
    canonical action name happens at dispatch.
    """

    def __init__(self, resolver: NameResolver) -> None:
        self._resolver = resolver

    def parse(self, line: str) -> ParsedLine:
        """
        Parse an input line.

        Args:
            line: Raw input line

        Returns:
            ParsedLine with command and args; both None for a blank line,
            args None when nothing follows the command
        """
        tokens = line.split()
        if not tokens:
            return ParsedLine(None, None)

        command = tokens[0]
        args = self._join(tokens[1:])

        if args is not None and self._resolver.has_subcommands(command):
            subcommand = find_subcommand_in_args(self._resolver.subcommands(command), tokens)
            if subcommand is not None:
                return ParsedLine(subcommand, self._subcommand_args(subcommand, tokens))

        return ParsedLine(command, args)

    @staticmethod
    def _join(tokens: List[str]) -> Optional[str]:
        return " ".join(tokens) if tokens else None

    @staticmethod
    def _subcommand_args(subcommand: str, tokens: List[str]) -> Optional[str]:
        """
        Arguments following a subcommand.

        The tokens are joined with "_", the subcommand prefix is cut off and
        every remaining "_" becomes a space, so underscores typed inside the
        arguments come back as spaces.
        """
        joined = SUBCOMMAND_SEPARATOR.join(tokens)
        rest = joined[len(subcommand):].replace(SUBCOMMAND_SEPARATOR, " ").strip()
        return rest or None
