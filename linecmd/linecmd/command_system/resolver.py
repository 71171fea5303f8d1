"""
Name resolution for linecmd.
Maps shortcuts, exact names and unambiguous abbreviations to action names,
and groups underscored actions under their parent commands.
"""
import logging
from collections import Counter
from functools import cached_property
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from ..constants import SUBCOMMAND_SEPARATOR
from .registry import ActionRegistry

logger = logging.getLogger(__name__)


def abbreviations(words: Iterable[str]) -> Dict[str, str]:
    """
    Build the table of unambiguous prefixes for a set of words.

    A prefix shared by two or more words is left out. Every word maps to
    itself, even when it is also a prefix of a longer word.

    Args:
        words: Candidate words

    Returns:
        Mapping of prefix to the single word it abbreviates
    """
    words = [w for w in dict.fromkeys(words) if w]
    seen: Counter = Counter()
    for word in words:
        for length in range(1, len(word) + 1):
            seen[word[:length]] += 1

    table = {}
    for word in words:
        for length in range(1, len(word) + 1):
            prefix = word[:length]
            if seen[prefix] == 1:
                table[prefix] = word
    for word in words:
        table[word] = word
    return table


def completion_grep(collection: Iterable[str], pattern: str) -> List[str]:
    """Items of the collection starting with pattern, in collection order."""
    return [item for item in collection if item.startswith(pattern)]


def find_subcommand_in_args(candidates: Iterable[str], tokens: Sequence[str]) -> Optional[str]:
    """
    Find the subcommand spelled out by the leading tokens of a line.

    Every join of the first 1..N tokens with "_" is compared against the
    candidates. When several match, the lexicographically greatest wins,
    which is usually but not always the longest.

    Args:
        candidates: Subcommand names of the parent command
        tokens: Whitespace-split tokens of the whole line

    Returns:
        The matching subcommand name, or None
    """
    joins = {
        SUBCOMMAND_SEPARATOR.join(tokens[:count])
        for count in range(1, len(tokens) + 1)
    }
    matches = [name for name in candidates if name in joins]
    return max(matches) if matches else None


class NameResolver:
    """
    Resolves input tokens against one registry.

    The derived tables are computed on first use and kept for the life of
    the resolver; the registry they come from never changes.
    """

    def __init__(self, registry: ActionRegistry) -> None:
        self._registry = registry

    @property
    def registry(self) -> ActionRegistry:
        return self._registry

    @cached_property
    def subcommand_list(self) -> List[str]:
        """Underscored actions whose leading segment is itself an action."""
        with_sep = [a for a in self._registry.actions if SUBCOMMAND_SEPARATOR in a]
        without_sep = {a for a in self._registry.actions if SUBCOMMAND_SEPARATOR not in a}
        return sorted(
            name for name in with_sep
            if name.split(SUBCOMMAND_SEPARATOR, 1)[0] in without_sep
        )

    @cached_property
    def command_list(self) -> List[str]:
        """Top-level actions: everything that is not a subcommand."""
        return sorted(self._registry.actions - set(self.subcommand_list))

    @cached_property
    def abbreviation_table(self) -> Mapping[str, str]:
        return abbreviations(self.command_list)

    def resolve(self, token: Optional[str]) -> Optional[str]:
        """
        Resolve a token to an action name.

        Shortcuts are checked first, then exact names, then unambiguous
        abbreviations of top-level actions.

        Returns:
            The action name, or None when the token is unknown or ambiguous
        """
        if token is None:
            return None
        shortcut = self._registry.shortcut_table.get(token)
        if shortcut is not None:
            return shortcut
        if token in self._registry:
            return token
        resolved = self.abbreviation_table.get(token)
        if resolved is None:
            logger.debug(f"{token!r} is unknown or ambiguous")
        return resolved

    def translate(self, token: Optional[str]) -> Optional[str]:
        """Resolve a token, or hand it back unchanged when it does not resolve."""
        resolved = self.resolve(token)
        return resolved if resolved is not None else token

    def subcommands(self, command: Optional[str]) -> List[str]:
        """Subcommands of a command given by name, shortcut or abbreviation."""
        if command is None:
            return []
        parent = self.translate(command)
        return completion_grep(self.subcommand_list, parent + SUBCOMMAND_SEPARATOR)

    def has_subcommands(self, command: Optional[str]) -> bool:
        return bool(self.subcommands(command))

    def subcommand_suffixes(self, command: str) -> List[str]:
        """Subcommand names with the parent prefix removed ("shell_type" -> "type")."""
        prefix = self.translate(command) + SUBCOMMAND_SEPARATOR
        return [name[len(prefix):] for name in self.subcommands(command)]
