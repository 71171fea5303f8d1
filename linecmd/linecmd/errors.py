"""
Exception types raised by linecmd itself.

Errors raised by action handlers are not wrapped: they reach the session
loop unchanged and are matched against the interpreter's exception table.
"""


class LinecmdError(Exception):
    """Base class for framework errors."""


class RegistryError(LinecmdError):
    """An interpreter declared an action, completer or handler that cannot be bound."""


class ConfigError(LinecmdError):
    """A configuration value has the wrong type or an unknown key."""
