"""
Command loop for linecmd.
Reads lines, resolves them to actions, dispatches, and recovers from errors.
"""
import logging
import sys
from functools import partial
from typing import Any, Callable, Iterable, List, Optional, Sequence, TextIO, Union

from .command_system import (
    ActionRegistry,
    Dispatcher,
    LineParser,
    Message,
    Method,
    NameResolver,
    ParsedLine,
    RegistryBuilder,
    completion_grep,
)
from .command_system import find_subcommand_in_args as _find_subcommand_in_args
from .command_system.base import bind
from .config import AppConfig, get_config
from .constants import (
    HELP_SHORTCUT,
    SHELL_SHORTCUT,
    UNDOCUMENTED_HEADER,
    UNDOCUMENTED_RULE,
    UNDOCUMENTED_SEPARATOR,
)
from .errors import RegistryError
from .io_handlers import ShellRunner
from .rich_ui import PromptInput, RichRenderer

logger = logging.getLogger(__name__)

CompletionCallback = Callable[[str], List[str]]


class Cmd:
    """
    A line-oriented command interpreter.

    Cmd is meant to be subclassed. A subclass declares its actions in a
    ``declare`` classmethod, which receives a RegistryBuilder already holding
    everything its parent declared:

        class Greeter(Cmd):
            @classmethod
            def declare(cls, actions):
                actions.action("hello", takes_args=True, doc="Say hello")
                actions.prompt("greet> ")

            def do_hello(self, name):
                self.write(f"Hello, {name or 'world'}")

        Greeter.run()

    The registry is built once, when the class is created, and shared by
    every instance.
    """

    registry: ActionRegistry
    resolver: NameResolver

    # None defers to the help.hide_undocumented_commands config option.
    hide_undocumented_commands: Optional[bool] = None

    @classmethod
    def declare(cls, actions: RegistryBuilder) -> None:
        actions.action(
            "help",
            takes_args=True,
            doc="This help message.",
            shortcuts=[HELP_SHORTCUT],
            completer="complete_help",
        )
        actions.action("exit", doc="Terminate the program.")
        actions.action(
            "shell",
            takes_args=True,
            doc="Executes a shell.",
            shortcuts=[SHELL_SHORTCUT],
        )
        actions.prompt(lambda session: session.default_prompt())

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls._install_registry()

    @classmethod
    def _install_registry(cls) -> None:
        cls.registry = cls.build_registry()
        cls.resolver = NameResolver(cls.registry)

    @classmethod
    def build_registry(cls) -> ActionRegistry:
        """
        Build the registry for this class.

        Starts from the parent's registry and applies this class's own
        ``declare``; a subclass without one inherits its parent's actions.

        Raises:
            RegistryError: If a handler, completer or exception method names
                something the class does not define
        """
        builder = RegistryBuilder(getattr(cls, "registry", None))
        if "declare" in cls.__dict__:
            cls.declare(builder)
        registry = builder.build()
        cls._check_bindings(registry)
        logger.debug(f"Built registry for {cls.__name__}: {sorted(registry.actions)}")
        return registry

    @classmethod
    def _check_bindings(cls, registry: ActionRegistry) -> None:
        names = [(f"action '{a}'", registry.get(a).handler) for a in registry.actions]
        names += [(f"completer for '{n}'", ref) for n, ref in registry.completers.items()]
        names += [
            (f"handler for {t.__name__}", h.name)
            for t, h in registry.exception_handlers.items()
            if isinstance(h, Method)
        ]
        for label, ref in names:
            if isinstance(ref, str) and not hasattr(cls, ref):
                raise RegistryError(f"{cls.__name__} has no method '{ref}' for {label}")

    @classmethod
    def run(cls, intro: Optional[str] = None, argv: Optional[Sequence[str]] = None, **kwargs: Any) -> "Cmd":
        """Create an interpreter and run its loop. Returns the finished session."""
        session = cls(argv=argv, **kwargs)
        session.cmdloop(intro)
        return session

    def __init__(
        self,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
        *,
        argv: Optional[Sequence[str]] = None,
        config: Optional[AppConfig] = None,
        line_reader: Optional[Any] = None,
    ) -> None:
        """
        Initialize the interpreter.

        Args:
            stdin: Input stream (defaults to sys.stdin)
            stdout: Output stream (defaults to sys.stdout)
            argv: One-shot invocation words; when non-empty they are run as a
                single line and the loop stops
            config: Configuration (defaults to the process-wide config)
            line_reader: Line source with next_line(prompt) and
                set_completion_callback(fn); overrides the built-in choice
        """
        self._config = config if config is not None else get_config().config
        self._stdin = stdin if stdin is not None else sys.stdin
        self._stdout = stdout if stdout is not None else sys.stdout
        self._renderer = RichRenderer(self._stdout)
        self._argv: List[str] = list(argv or [])
        self._stop = False
        self._current_command: Optional[str] = None
        self._line_reader = line_reader
        self._line_editor = line_reader is not None or self._line_editor_available()
        self._completion_callback: CompletionCallback = self.complete
        self._parser = LineParser(self.resolver)
        self._dispatcher = Dispatcher(self.registry)
        self.setup()

    # -- streams and settings ------------------------------------------------

    @property
    def stdin(self) -> TextIO:
        return self._stdin

    @stdin.setter
    def stdin(self, stream: TextIO) -> None:
        self._stdin = stream

    @property
    def stdout(self) -> TextIO:
        return self._stdout

    @stdout.setter
    def stdout(self, stream: TextIO) -> None:
        self._stdout = stream
        self._renderer = RichRenderer(stream)

    @property
    def config(self) -> AppConfig:
        return self._config

    @property
    def current_command(self) -> Optional[str]:
        """The command being (or last) run, with shortcuts translated."""
        return self.translate_shortcut(self._current_command)

    @current_command.setter
    def current_command(self, command: Optional[str]) -> None:
        self._current_command = command

    @property
    def prompt(self) -> str:
        return self.registry.resolve_prompt(self)

    @property
    def stopped(self) -> bool:
        return self._stop

    def default_prompt(self) -> str:
        return f"{type(self).__name__}> "

    def _line_editor_available(self) -> bool:
        if not self._config.input.use_line_editor:
            return False
        if self._stdin is not sys.stdin:
            return False
        try:
            return sys.stdin.isatty()
        except (AttributeError, OSError, ValueError):
            return False

    def _reader(self) -> Any:
        if self._line_reader is None:
            self._line_reader = PromptInput(history_file=self._config.input.history_file)
            self._line_reader.set_completion_callback(self._completion_callback)
        return self._line_reader

    def turn_off_line_editor(self) -> "Cmd":
        """Read from the input stream even when a line editor is available."""
        self._line_editor = False
        return self

    # -- the loop ------------------------------------------------------------

    def cmdloop(self, intro: Optional[str] = None) -> None:
        """
        Run the command loop until stopped.

        At least one line is always processed, even if stoploop() was called
        before the loop started.
        """
        self.preloop()
        if intro:
            self.write(intro)
        while True:
            self.set_completion_callback(self.complete)
            try:
                self.execute_command()
            except KeyboardInterrupt:
                self.user_interrupt()
            except Exception as e:
                self.handle_all_remaining_exceptions(e)
            if self._stop:
                break
        self.postloop()

    def execute_command(self) -> Any:
        """Acquire one line (or the one-shot invocation) and run it."""
        if self._argv:
            line = " ".join(self._argv)
            self._argv = []
            self.stoploop()
            logger.debug(f"One-shot invocation: {line!r}")
            return self.execute_line(line)
        return self.execute_line(self.display_prompt(self.prompt))

    def execute_line(self, line: Optional[str]) -> Any:
        return self.postcmd(self.run_command(self.precmd(line)))

    def display_prompt(self, prompt: str) -> Optional[str]:
        """
        Show the prompt and read a line.

        Returns:
            The stripped line, or None at end of input
        """
        if self._line_editor:
            line = self._reader().next_line(prompt)
        else:
            self.print(prompt)
            self._stdout.flush()
            line = self._stdin.readline()
            if not line:
                return None
        return line.strip() if line is not None else None

    def run_command(self, line: Optional[str]) -> Any:
        """Parse a line and dispatch it to its action."""
        command, args = self.parse_line(line)
        if line is None:
            return None
        if command is None:
            return self.empty_line()

        command = self.translate_shortcut(command)
        completer = self.registry.completer_for(command)
        if completer is not None:
            self.set_completion_callback(bind(self, completer))
        return self._dispatcher.dispatch(self, command, args)

    def parse_line(self, line: Optional[str]) -> ParsedLine:
        """
        Split a line into (command, args).

        A None line means end of input: the interrupt hook runs and nothing
        is dispatched.
        """
        if line is None:
            self.user_interrupt()
            return ParsedLine(None, None)
        return self._parser.parse(line)

    def stoploop(self) -> None:
        """Stop the loop once the current iteration finishes."""
        self._stop = True

    # -- exception recovery --------------------------------------------------

    def handle_all_remaining_exceptions(self, exception: Exception) -> Any:
        if self.registry.handler_for(type(exception)) is not None:
            return self.run_custom_exception_handling(exception)
        return self.handle_exception(exception)

    def run_custom_exception_handling(self, exception: Exception) -> Any:
        handler = self.registry.handler_for(type(exception))
        logger.debug(f"Recovering from {type(exception).__name__} with {handler}")
        if isinstance(handler, Message):
            return self.write(handler.text)
        return getattr(self, handler.name)(exception)

    def handle_exception(self, exception: Exception) -> Any:
        """Called for exceptions with no registered handler. Re-raises by default."""
        raise exception

    # -- hooks ---------------------------------------------------------------

    def setup(self) -> None:
        """Called at the end of construction."""

    def preloop(self) -> None:
        """Called before the first line is read."""

    def postloop(self) -> None:
        """Called after the loop stops."""

    def precmd(self, line: Optional[str]) -> Optional[str]:
        return line

    def postcmd(self, result: Any) -> Any:
        return result

    def empty_line(self) -> Any:
        """Called when a blank line is entered."""

    def command_missing(self, command: str, args: Any) -> Any:
        self.write(f"No such command '{command}'")

    def tokenize_args(self, args: Optional[str]) -> Any:
        """Transform the argument string before it reaches a handler."""
        return args

    def user_interrupt(self) -> None:
        """Called on Ctrl-C or end of input. Stops the loop by default."""
        self.write("Terminating")
        self.stoploop()

    # -- built-in actions ----------------------------------------------------

    def do_help(self, command: Optional[str] = None) -> None:
        if command:
            command = self.translate_shortcut(command)
            if command in self.registry.docs:
                self.print_help(command)
            else:
                self.no_help(command)
            return

        for name in self.documented_commands():
            self.print_help(name)
        if self.undocumented_commands():
            self.print_undocumented_commands()

    def do_exit(self) -> None:
        self.stoploop()

    def do_shell(self, line: Optional[str] = None) -> None:
        runner = ShellRunner(self._config.shell.shell, self._config.shell.timeout)
        if not line:
            runner.run_interactive()
            return
        result = runner.run(line)
        if result.success or result.stdout:
            self.write(result.stdout)
        else:
            self.print_error(result.stderr)

    # -- help ----------------------------------------------------------------

    def print_help(self, command: str) -> None:
        offset = max((len(name) for name in self.registry.docs), default=0)
        line = f"{command.ljust(offset)} -- {self.registry.docs[command]}"
        if self.has_shortcuts(command):
            line += f" {self.display_shortcuts(command)}"
        self.write(line)

    def display_shortcuts(self, command: str) -> str:
        return f"(aliases: {', '.join(self.registry.shortcuts_for(command))})"

    def no_help(self, command: str) -> None:
        """Called when help is asked for a command with no documentation."""
        self.write(f"No help for command '{command}'")

    def undocumented_commands_hidden(self) -> bool:
        if self.hide_undocumented_commands is not None:
            return self.hide_undocumented_commands
        return self._config.help.hide_undocumented_commands

    def print_undocumented_commands(self) -> None:
        if self.undocumented_commands_hidden():
            return
        self.write(" ", UNDOCUMENTED_HEADER, UNDOCUMENTED_RULE)
        self.write(UNDOCUMENTED_SEPARATOR.join(self.undocumented_commands()))

    def documented_commands(self) -> List[str]:
        return self.registry.documented_actions()

    def undocumented_commands(self) -> List[str]:
        documented = set(self.registry.docs)
        return [name for name in self.command_list() if name not in documented]

    def command_list(self) -> List[str]:
        """Top-level commands, sorted."""
        return list(self.resolver.command_list)

    def subcommand_list(self) -> List[str]:
        return list(self.resolver.subcommand_list)

    def subcommands(self, command: Optional[str]) -> List[str]:
        return self.resolver.subcommands(command)

    def has_subcommands(self, command: Optional[str]) -> bool:
        return self.resolver.has_subcommands(command)

    def find_subcommand_in_args(self, subcommands: Iterable[str], args: Sequence[str]) -> Optional[str]:
        return _find_subcommand_in_args(subcommands, args)

    def translate_shortcut(self, command: Optional[str]) -> Optional[str]:
        """Map a shortcut or abbreviation to its command; anything else is returned as is."""
        return self.resolver.translate(command)

    def has_shortcuts(self, command: str) -> bool:
        return self.registry.has_shortcuts(command)

    def command_shortcuts(self, command: str) -> Optional[List[str]]:
        """Aliases of a command, or None when it has none."""
        aliases = self.registry.shortcuts_for(command)
        return list(aliases) if aliases else None

    # -- completion ----------------------------------------------------------

    @property
    def completion_callback(self) -> CompletionCallback:
        return self._completion_callback

    def set_completion_callback(self, callback: Union[str, CompletionCallback]) -> None:
        """
        Install the function used for Tab completion.

        Args:
            callback: Completion function, or the name of a method on this session
        """
        if isinstance(callback, str):
            callback = getattr(self, callback)
        self._completion_callback = callback
        if self._line_editor and self._line_reader is not None:
            self._line_reader.set_completion_callback(self._completion_callback)

    def complete(self, text: str) -> List[str]:
        """
        Default completer: top-level commands starting with text.

        Once text narrows to a single command, completion switches to that
        command's completer, or to its subcommands when it has no completer.
        """
        commands = completion_grep(self.command_list(), text)
        if len(commands) == 1:
            command = commands[0]
            completer = self.registry.completer_for(command)
            if completer is not None:
                self.set_completion_callback(bind(self, completer))
            elif self.has_subcommands(command):
                self.set_completion_callback(partial(self.complete_subcommands, command))
        return commands

    def complete_subcommands(self, command: str, text: str) -> List[str]:
        return completion_grep(self.resolver.subcommand_suffixes(command), text)

    def complete_help(self, text: str) -> List[str]:
        return completion_grep(self.documented_commands(), text)

    # -- output --------------------------------------------------------------

    def write(self, *lines: Any) -> None:
        """Write each item followed by a newline."""
        self._renderer.write(*lines)

    def print(self, *texts: Any) -> None:
        """Write each item without a trailing newline."""
        self._renderer.print(*texts)

    def print_error(self, message: str) -> None:
        self._renderer.print_error(message)


Cmd._install_registry()
