"""
Action registry for linecmd.
Handles action registration and read-only lookup of docs, shortcuts,
completers and exception bindings.
"""
import logging
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Optional, Tuple, Type

from ..constants import HANDLER_PREFIX
from ..errors import RegistryError
from .base import (
    Action,
    DynamicPrompt,
    ExceptionHandler,
    HandlerRef,
    Message,
    Method,
    PromptSource,
    StaticPrompt,
)

logger = logging.getLogger(__name__)


def _check_ref(kind: str, name: str, ref: Any) -> HandlerRef:
    if isinstance(ref, str) or callable(ref):
        return ref
    raise RegistryError(f"{kind} for '{name}' must be a method name or callable, got {ref!r}")


class ActionRegistry:
    """
    Immutable set of actions declared by one interpreter type.

    Instances are produced by RegistryBuilder.build() and shared by every
    session of that type.
    """

    def __init__(
        self,
        actions: Mapping[str, Action],
        docs: Mapping[str, str],
        shortcuts: Mapping[str, Tuple[str, ...]],
        exception_handlers: Mapping[type, ExceptionHandler],
        completers: Mapping[str, HandlerRef],
        prompt_source: Optional[PromptSource],
    ) -> None:
        self._actions = MappingProxyType(dict(actions))
        self._docs = MappingProxyType(dict(docs))
        self._shortcuts = MappingProxyType(dict(shortcuts))
        self._shortcut_table = MappingProxyType({
            alias: name
            for name, aliases in shortcuts.items()
            for alias in aliases
        })
        self._exception_handlers = MappingProxyType(dict(exception_handlers))
        self._completers = MappingProxyType(dict(completers))
        self._prompt_source = prompt_source

    @property
    def actions(self) -> FrozenSet[str]:
        """Names of every declared action, subcommands included."""
        return frozenset(self._actions)

    def get(self, name: str) -> Optional[Action]:
        return self._actions.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._actions

    @property
    def docs(self) -> Mapping[str, str]:
        return self._docs

    def documented_actions(self) -> List[str]:
        """Documented names, sorted."""
        return sorted(self._docs)

    def undocumented_actions(self) -> List[str]:
        """Declared actions without a docstring, sorted."""
        return sorted(set(self._actions) - set(self._docs))

    @property
    def shortcuts(self) -> Mapping[str, Tuple[str, ...]]:
        return self._shortcuts

    @property
    def shortcut_table(self) -> Mapping[str, str]:
        """Alias to action name."""
        return self._shortcut_table

    def shortcuts_for(self, name: str) -> Tuple[str, ...]:
        return self._shortcuts.get(name, ())

    def has_shortcuts(self, name: str) -> bool:
        return bool(self._shortcuts.get(name))

    @property
    def exception_handlers(self) -> Mapping[type, ExceptionHandler]:
        return self._exception_handlers

    def handler_for(self, exception_type: type) -> Optional[ExceptionHandler]:
        """
        Get the binding for an exception type.

        Only the exact type is matched; a binding for a base class does not
        cover its subclasses.
        """
        return self._exception_handlers.get(exception_type)

    @property
    def completers(self) -> Mapping[str, HandlerRef]:
        return self._completers

    def completer_for(self, name: str) -> Optional[HandlerRef]:
        return self._completers.get(name)

    @property
    def prompt_source(self) -> Optional[PromptSource]:
        return self._prompt_source

    def resolve_prompt(self, session: Any) -> str:
        """Evaluate the prompt source against a session."""
        if self._prompt_source is None:
            return ""
        return self._prompt_source.render(session)

    def __repr__(self) -> str:
        return f"<ActionRegistry {sorted(self._actions)}>"


class RegistryBuilder:
    """
    Collects declarations for an interpreter type.

    All registration is additive. A builder seeded with a parent registry
    starts from a copy of the parent's declarations, so a subclass extends
    its parent without touching it.

        actions = RegistryBuilder()
        actions.action("add", takes_args=True, doc="Add an entry", shortcuts=["+"])
        actions.handle(KeyError, "No such entry")
        registry = actions.build()
    """

    def __init__(self, base: Optional[ActionRegistry] = None) -> None:
        self._actions: Dict[str, Action] = {}
        self._docs: Dict[str, str] = {}
        self._shortcuts: Dict[str, List[str]] = {}
        self._exception_handlers: Dict[type, ExceptionHandler] = {}
        self._completers: Dict[str, HandlerRef] = {}
        self._prompt_source: Optional[PromptSource] = None

        if base is not None:
            self._actions.update(base._actions)
            self._docs.update(base.docs)
            self._shortcuts.update({k: list(v) for k, v in base.shortcuts.items()})
            self._exception_handlers.update(base.exception_handlers)
            self._completers.update(base.completers)
            self._prompt_source = base.prompt_source

    def action(
        self,
        name: str,
        handler: Optional[HandlerRef] = None,
        *,
        doc: Optional[str] = None,
        takes_args: bool = False,
        shortcuts: Iterable[str] = (),
        completer: Optional[HandlerRef] = None,
    ) -> "RegistryBuilder":
        """
        Register an action.

        Args:
            name: Action name; underscores mark subcommands
            handler: Method name or callable; defaults to "do_<name>"
            doc: One-line description shown by help
            takes_args: Whether the handler receives the argument string
            shortcuts: Aliases resolving to this action
            completer: Completion function reference for this action

        Returns:
            The builder, for chaining
        """
        if not name or any(c.isspace() for c in name):
            raise RegistryError(f"Invalid action name: {name!r}")
        ref = _check_ref("Handler", name, handler if handler is not None else HANDLER_PREFIX + name)
        self._actions[name] = Action(name=name, handler=ref, takes_args=takes_args)
        if doc is not None:
            self.doc(name, doc)
        for alias in shortcuts:
            self.shortcut(alias, name)
        if completer is not None:
            self.completer(name, completer)
        return self

    def doc(self, name: str, text: str) -> "RegistryBuilder":
        """Set the documentation line for a command."""
        self._docs[name] = text
        return self

    def shortcut(self, alias: str, target: str) -> "RegistryBuilder":
        """Create a command shortcut. The target is not checked until lookup."""
        for name, aliases in self._shortcuts.items():
            if alias in aliases and name != target:
                aliases.remove(alias)
        aliases = self._shortcuts.setdefault(target, [])
        if alias not in aliases:
            aliases.append(alias)
        return self

    def handle(self, exception_type: Type[BaseException], handler: Any) -> "RegistryBuilder":
        """
        Set what to do when the given exception type is raised.

        A plain string or Message is written out; a Method names a session
        method called with the exception.
        """
        if not (isinstance(exception_type, type) and issubclass(exception_type, BaseException)):
            raise RegistryError(f"Not an exception type: {exception_type!r}")
        if isinstance(handler, str):
            handler = Message(handler)
        if not isinstance(handler, (Message, Method)):
            raise RegistryError(
                f"Handler for {exception_type.__name__} must be a string, Message or Method"
            )
        self._exception_handlers[exception_type] = handler
        return self

    def prompt(self, source: Any) -> "RegistryBuilder":
        """Set the prompt. Accepts a string, a callable taking the session, or a prompt source."""
        if isinstance(source, (StaticPrompt, DynamicPrompt)):
            self._prompt_source = source
        elif isinstance(source, str):
            self._prompt_source = StaticPrompt(source)
        elif callable(source):
            self._prompt_source = DynamicPrompt(source)
        else:
            raise RegistryError(f"Unsupported prompt source: {source!r}")
        return self

    def completer(self, name: str, ref: HandlerRef) -> "RegistryBuilder":
        """Register a completion function for a command."""
        self._completers[name] = _check_ref("Completer", name, ref)
        return self

    def build(self) -> ActionRegistry:
        logger.debug(f"Building registry with {len(self._actions)} actions")
        return ActionRegistry(
            actions=self._actions,
            docs=self._docs,
            shortcuts={k: tuple(v) for k, v in self._shortcuts.items() if v},
            exception_handlers=self._exception_handlers,
            completers=self._completers,
            prompt_source=self._prompt_source,
        )
