"""
Base types for the command system in linecmd.
"""
from dataclasses import dataclass
from typing import Any, Callable, NamedTuple, Optional, Union

# A handler is either the name of a method looked up on the session at call
# time, or a callable that receives the session as its first argument.
HandlerRef = Union[str, Callable[..., Any]]


@dataclass(frozen=True)
class Action:
    """A named, invocable unit of interpreter functionality."""
    name: str
    handler: HandlerRef
    takes_args: bool = False


@dataclass(frozen=True)
class Message:
    """Exception binding that writes a fixed message."""
    text: str


@dataclass(frozen=True)
class Method:
    """Exception binding that calls a session method with the exception."""
    name: str


ExceptionHandler = Union[Message, Method]


@dataclass(frozen=True)
class StaticPrompt:
    """A prompt that never changes."""
    text: str

    def render(self, session: Any) -> str:
        return self.text


@dataclass(frozen=True)
class DynamicPrompt:
    """A prompt computed from the session each time it is displayed."""
    source: Callable[[Any], Any]

    def render(self, session: Any) -> str:
        return str(self.source(session))


PromptSource = Union[StaticPrompt, DynamicPrompt]


class ParsedLine(NamedTuple):
    """Result of splitting an input line into a command and its arguments."""
    command: Optional[str]
    args: Optional[str]


def bind(session: Any, ref: HandlerRef) -> Callable[..., Any]:
    """
    Turn a handler reference into a callable bound to the session.

    Args:
        session: Interpreter instance the handler runs against
        ref: Method name or callable taking the session first

    Returns:
        Callable that takes only the handler's own arguments
    """
    if isinstance(ref, str):
        return getattr(session, ref)

    def bound(*args: Any) -> Any:
        return ref(session, *args)

    return bound
