"""
Command dispatch for linecmd.
Invokes the handler bound to a resolved command name.
"""
import logging
from typing import Any, Optional

from .base import bind
from .registry import ActionRegistry

logger = logging.getLogger(__name__)


class Dispatcher:
    """
    Routes a resolved command to its handler.

    The session supplies the hooks the dispatcher calls back into:
    ``current_command`` (set before the call), ``tokenize_args(args)`` and
    ``command_missing(command, args)``.
    """

    def __init__(self, registry: ActionRegistry) -> None:
        self._registry = registry

    def dispatch(self, session: Any, command: str, args: Optional[str]) -> Any:
        """
        Run a command against a session.

        Args:
            session: Interpreter instance
            command: Canonical command name, or the raw token when it did not resolve
            args: Argument string, or None

        Returns:
            Whatever the handler (or command_missing) returned
        """
        session.current_command = command
        action = self._registry.get(command)

        if action is None:
            logger.debug(f"No action for {command!r}")
            return session.command_missing(command, session.tokenize_args(args))

        handler = bind(session, action.handler)
        if not action.takes_args:
            logger.debug(f"Dispatching {command!r}")
            return handler()

        logger.debug(f"Dispatching {command!r} with args {args!r}")
        return handler(session.tokenize_args(args))
