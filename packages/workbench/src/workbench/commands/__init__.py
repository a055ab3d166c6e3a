"""Command templates and resolution."""

from workbench.commands.languages import SUFFIX_LANGUAGES, language_for_path
from workbench.commands.resolver import (
    LOCAL_EXECUTION_COMMANDS,
    PATH_PLACEHOLDER,
    CommandResolver,
    ShellCommand,
    sanitize_path,
)

__all__ = [
    "LOCAL_EXECUTION_COMMANDS",
    "PATH_PLACEHOLDER",
    "SUFFIX_LANGUAGES",
    "CommandResolver",
    "ShellCommand",
    "language_for_path",
    "sanitize_path",
]
