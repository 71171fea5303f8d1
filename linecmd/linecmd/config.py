"""
Configuration management for linecmd.
Handles loading, saving, and accessing configuration from JSON files and environment variables.
"""
import json
import logging
import os
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any, Optional

from .constants import (
    CONFIG_FILE,
    DEFAULT_LOG_LEVEL,
    ENV_HIDE_UNDOCUMENTED,
    ENV_HISTORY_FILE,
    ENV_LOG_LEVEL,
    ENV_NO_LINE_EDITOR,
    TRUTHY_VALUES,
)
from .errors import ConfigError

logger = logging.getLogger(__name__)


@dataclass
class HelpConfig:
    """Help output configuration."""
    hide_undocumented_commands: bool = False


@dataclass
class InputConfig:
    """Line acquisition configuration."""
    use_line_editor: bool = True
    history_file: Optional[str] = None


@dataclass
class ShellConfig:
    """Configuration for the built-in shell escape."""
    shell: Optional[str] = None
    timeout: Optional[int] = None


@dataclass
class AppConfig:
    """Main application configuration."""
    help: HelpConfig = field(default_factory=HelpConfig)
    input: InputConfig = field(default_factory=InputConfig)
    shell: ShellConfig = field(default_factory=ShellConfig)
    log_level: str = DEFAULT_LOG_LEVEL


def _env_flag(name: str) -> Optional[bool]:
    value = os.environ.get(name)
    if value is None:
        return None
    return value.strip().lower() in TRUTHY_VALUES


class ConfigManager:
    """
    Manages interpreter configuration with support for JSON files and environment variables.

    Environment variables take precedence over config file values. Nothing is
    written to disk unless save() is called.
    """

    def __init__(self, config_file: Optional[Path] = None) -> None:
        self._config_file = Path(config_file) if config_file else CONFIG_FILE
        self._config: AppConfig = AppConfig()
        self._load_config()
        self._load_env_vars()

    def _load_config(self) -> None:
        """Load configuration from JSON file."""
        if not self._config_file.exists():
            return

        try:
            with open(self._config_file, 'r', encoding='utf-8') as f:
                data = json.load(f)

            if 'help' in data:
                self._config.help = HelpConfig(**data['help'])
            if 'input' in data:
                self._config.input = InputConfig(**data['input'])
            if 'shell' in data:
                self._config.shell = ShellConfig(**data['shell'])
            if 'log_level' in data:
                self._config.log_level = str(data['log_level'])
        except (json.JSONDecodeError, UnicodeDecodeError, OSError, TypeError) as e:
            logger.warning(f"Failed to load config file {self._config_file}: {e}")
            self._config = AppConfig()

    def _load_env_vars(self) -> None:
        """Apply overrides from environment variables."""
        hide = _env_flag(ENV_HIDE_UNDOCUMENTED)
        if hide is not None:
            self._config.help.hide_undocumented_commands = hide

        no_editor = _env_flag(ENV_NO_LINE_EDITOR)
        if no_editor:
            self._config.input.use_line_editor = False

        history_file = os.environ.get(ENV_HISTORY_FILE)
        if history_file:
            self._config.input.history_file = history_file

        log_level = os.environ.get(ENV_LOG_LEVEL)
        if log_level:
            self._config.log_level = log_level.upper()

        if not self._config.shell.shell and os.environ.get('SHELL'):
            self._config.shell.shell = os.environ['SHELL']

    def _save_config(self) -> None:
        """Save current configuration to JSON file."""
        data = {
            'help': asdict(self._config.help),
            'input': asdict(self._config.input),
            'shell': asdict(self._config.shell),
            'log_level': self._config.log_level,
        }

        self._config_file.parent.mkdir(parents=True, exist_ok=True)
        with open(self._config_file, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2)

    @staticmethod
    def _update_section(section: Any, values: dict) -> None:
        for key, value in values.items():
            if not hasattr(section, key):
                raise ConfigError(f"Unknown {type(section).__name__} option: {key}")
            setattr(section, key, value)

    @property
    def config(self) -> AppConfig:
        """Get the current configuration."""
        return self._config

    @property
    def help(self) -> HelpConfig:
        """Get help configuration."""
        return self._config.help

    @property
    def input(self) -> InputConfig:
        """Get input configuration."""
        return self._config.input

    @property
    def shell(self) -> ShellConfig:
        """Get shell configuration."""
        return self._config.shell

    @property
    def config_file(self) -> Path:
        return self._config_file

    def update_help(self, **kwargs: Any) -> None:
        """Update help configuration."""
        self._update_section(self._config.help, kwargs)

    def update_input(self, **kwargs: Any) -> None:
        """Update input configuration."""
        self._update_section(self._config.input, kwargs)

    def update_shell(self, **kwargs: Any) -> None:
        """Update shell configuration."""
        self._update_section(self._config.shell, kwargs)

    def save(self) -> None:
        """Explicitly save configuration."""
        self._save_config()

    def reload(self) -> None:
        """Reload configuration from file."""
        self._config = AppConfig()
        self._load_config()
        self._load_env_vars()

    def reset(self) -> None:
        """Reset configuration to defaults."""
        self._config = AppConfig()


_manager: Optional[ConfigManager] = None


def get_config() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _manager
    if _manager is None:
        _manager = ConfigManager()
    return _manager
