"""Terminal UI components for linecmd."""
from .renderer import RichRenderer
from .prompt_input import (
    CallbackCompleter,
    PromptInput,
    SanitizedFileHistory,
    SanitizedHistory,
)

__all__ = [
    'RichRenderer',
    'PromptInput', 'CallbackCompleter',
    'SanitizedHistory', 'SanitizedFileHistory',
]
