"""
Interactive line reader using prompt_toolkit for linecmd.
Provides Tab completion driven by the interpreter and a de-duplicated history.
"""
import logging
from typing import Callable, Iterable, List, Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document
from prompt_toolkit.history import FileHistory, History, InMemoryHistory
from prompt_toolkit.styles import Style

logger = logging.getLogger(__name__)

CompletionCallback = Callable[[str], List[str]]


PROMPT_STYLE = Style.from_dict({
    'completion-menu.completion': 'bg:#262626 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000 bold',
})


class CallbackCompleter(Completer):
    """
    Completer that defers to whatever callback the interpreter installed last.

    The callback receives the word before the cursor and returns candidate
    strings; the interpreter swaps callbacks as the command becomes known.
    """

    def __init__(self, callback: Optional[CompletionCallback] = None) -> None:
        self.callback = callback

    def get_completions(self, document: Document, complete_event) -> Iterable[Completion]:
        """Get completions for the word being typed."""
        if self.callback is None:
            return
        word = document.get_word_before_cursor(WORD=True)
        try:
            candidates = self.callback(word)
        except Exception as e:
            logger.debug(f"Completion callback failed for {word!r}: {e}")
            return
        for candidate in candidates:
            yield Completion(candidate, start_position=-len(word))


class SanitizedHistoryMixin:
    """History that skips blank lines and immediate repeats."""

    def append_string(self, string: str) -> None:
        if not string.strip():
            return
        previous = self.get_strings()
        if previous and previous[-1] == string:
            return
        super().append_string(string)


class SanitizedHistory(SanitizedHistoryMixin, InMemoryHistory):
    """In-memory sanitized history."""


class SanitizedFileHistory(SanitizedHistoryMixin, FileHistory):
    """File-backed sanitized history."""


class PromptInput:
    """
    Line source backed by a prompt_toolkit session.

    next_line() returns None at end of input (Ctrl-D); Ctrl-C propagates as
    KeyboardInterrupt so the interpreter can run its interrupt hook.
    """

    def __init__(self, history_file: Optional[str] = None, history: Optional[History] = None) -> None:
        """
        Initialize the PromptInput.

        Args:
            history_file: Optional path for persistent history
            history: Explicit history object (overrides history_file)
        """
        self._completer = CallbackCompleter()
        if history is not None:
            self._history = history
        elif history_file:
            self._history = SanitizedFileHistory(history_file)
        else:
            self._history = SanitizedHistory()
        self._session: Optional[PromptSession] = None

    @property
    def completer(self) -> CallbackCompleter:
        return self._completer

    @property
    def history(self) -> History:
        return self._history

    def set_completion_callback(self, callback: CompletionCallback) -> None:
        """Install the function used for Tab completion."""
        self._completer.callback = callback

    def _create_session(self) -> PromptSession:
        """Create a new prompt session."""
        return PromptSession(
            completer=self._completer,
            complete_while_typing=False,
            history=self._history,
            style=PROMPT_STYLE,
            mouse_support=False,
        )

    def next_line(self, prompt: str) -> Optional[str]:
        """
        Read one line.

        Args:
            prompt: Prompt text to display

        Returns:
            The line as typed, or None at end of input
        """
        if self._session is None:
            self._session = self._create_session()

        try:
            return self._session.prompt(prompt)
        except EOFError:
            return None
