"""Command system for linecmd."""
from .base import (
    Action,
    DynamicPrompt,
    Message,
    Method,
    ParsedLine,
    StaticPrompt,
)
from .dispatcher import Dispatcher
from .parser import LineParser
from .registry import ActionRegistry, RegistryBuilder
from .resolver import NameResolver, abbreviations, completion_grep, find_subcommand_in_args

__all__ = [
    'Action', 'Message', 'Method', 'ParsedLine',
    'StaticPrompt', 'DynamicPrompt',
    'ActionRegistry', 'RegistryBuilder',
    'NameResolver', 'abbreviations', 'completion_grep', 'find_subcommand_in_args',
    'LineParser',
    'Dispatcher',
]
