"""Map a language identifier to the ordered commands that build and run a file.

Templates are plain command lines containing at most one ``{url}`` token.
Substitution is textual: the path is escaped for spaces only, so paths with
other shell metacharacters are not safe in the string form. ``resolve_argv``
returns a structured form that ``SubprocessTerminalBridge.execute_argv`` runs
without a shell.
"""

from __future__ import annotations

import shlex
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import PurePath
from types import MappingProxyType

from workbench.errors import UnsupportedLanguageError

PATH_PLACEHOLDER = "{url}"

LOCAL_EXECUTION_COMMANDS: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        "py": ("python3 -u {url}",),
        "js": ("node {url}",),
        "c": ("clang {url}", "wasm a.out"),
        "cpp": ("clang {url}", "wasm a.out"),
        "php": ("php {url}",),
    }
)


def sanitize_path(path: str | PurePath) -> str:
    """Escape spaces with a backslash; every other character is left as is."""
    return str(path).replace(" ", "\\ ")


def substitute(template: str, value: str) -> str:
    """Replace the first path placeholder in a template."""
    return template.replace(PATH_PLACEHOLDER, value, 1)


@dataclass(frozen=True)
class ShellCommand:
    """A command as program plus arguments."""

    program: str
    args: tuple[str, ...] = ()

    @property
    def argv(self) -> list[str]:
        return [self.program, *self.args]

    def display(self) -> str:
        """Return a shell-quoted command line for display."""
        return shlex.join(self.argv)


class CommandResolver:
    """Resolve languages to command sequences from a read-only table."""

    def __init__(self, table: Mapping[str, Sequence[str]] = LOCAL_EXECUTION_COMMANDS) -> None:
        frozen: dict[str, tuple[str, ...]] = {}
        for language_id, templates in table.items():
            if isinstance(templates, str):
                templates = (templates,)
            if not templates:
                msg = f"Command table entry for {language_id!r} must not be empty"
                raise ValueError(msg)
            frozen[language_id] = tuple(templates)
        self._table: Mapping[str, tuple[str, ...]] = MappingProxyType(frozen)

    @property
    def table(self) -> Mapping[str, tuple[str, ...]]:
        return self._table

    def supports(self, language_id: str) -> bool:
        return language_id in self._table

    def languages(self) -> tuple[str, ...]:
        return tuple(self._table)

    def templates(self, language_id: str) -> tuple[str, ...]:
        """Return the raw templates for a language."""
        try:
            return self._table[language_id]
        except KeyError:
            raise UnsupportedLanguageError(language_id) from None

    def resolve(self, language_id: str, path: str | PurePath) -> list[str]:
        """Return the command lines for a file, in execution order."""
        templates = self.templates(language_id)
        sanitized = sanitize_path(path)
        return [substitute(template, sanitized) for template in templates]

    def resolve_argv(self, language_id: str, path: str | PurePath) -> list[ShellCommand]:
        """Return structured commands with the raw path as a single argument."""
        commands: list[ShellCommand] = []
        for template in self.templates(language_id):
            words = [
                str(path) if word == PATH_PLACEHOLDER else word for word in template.split()
            ]
            commands.append(ShellCommand(program=words[0], args=tuple(words[1:])))
        return commands
