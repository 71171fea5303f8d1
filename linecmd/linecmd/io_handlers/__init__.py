"""I/O handlers for linecmd."""
from .shell_runner import ShellResult, ShellRunner

__all__ = ['ShellResult', 'ShellRunner']
