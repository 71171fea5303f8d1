"""
linecmd - A framework for writing line-oriented command interpreters.
"""
from .constants import APP_NAME, APP_VERSION, APP_DESCRIPTION
from .command_system import Message, Method, RegistryBuilder
from .errors import ConfigError, LinecmdError, RegistryError
from .interpreter import Cmd

__version__ = APP_VERSION
__all__ = [
    'APP_NAME', 'APP_VERSION', 'APP_DESCRIPTION',
    'Cmd', 'RegistryBuilder', 'Message', 'Method',
    'LinecmdError', 'RegistryError', 'ConfigError',
]
