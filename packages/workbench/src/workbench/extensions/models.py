"""Contribution models registered by extensions."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import PurePath
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from workbench.host import HostSnapshot

VisibilityPredicate = Callable[["HostSnapshot"], bool]
ActivationCallback = Callable[[], "Awaitable[Any] | Any"]

DEFAULT_ITEM_ID = "default"


def always_visible(_snapshot: HostSnapshot) -> bool:
    """Visibility predicate for items that are always shown."""
    return True


class Modifier(str, Enum):
    """Keyboard modifier keys."""

    COMMAND = "command"
    SHIFT = "shift"
    CONTROL = "control"
    OPTION = "option"


@dataclass(frozen=True)
class Shortcut:
    """Keyboard shortcut: one character plus a set of modifiers."""

    key: str
    modifiers: frozenset[Modifier] = frozenset()

    def __post_init__(self) -> None:
        if len(self.key) != 1:
            msg = f"Shortcut key must be a single character, got {self.key!r}"
            raise ValueError(msg)
        object.__setattr__(self, "key", self.key.lower())
        object.__setattr__(self, "modifiers", frozenset(Modifier(m) for m in self.modifiers))

    def label(self) -> str:
        """Render the shortcut as ``command+shift+r``."""
        ordered = [m.value for m in Modifier if m in self.modifiers]
        return "+".join([*ordered, self.key])


@dataclass(frozen=True)
class ToolbarItem:
    """Toolbar action contributed by an extension."""

    extension_id: str
    icon: str
    on_activate: ActivationCallback
    item_id: str = DEFAULT_ITEM_ID
    shortcut: Shortcut | None = None
    focus_panel: str | None = None
    is_visible: VisibilityPredicate = field(default=always_visible, compare=False)

    @property
    def key(self) -> tuple[str, str]:
        return (self.extension_id, self.item_id)


@dataclass(frozen=True)
class PanelBinding:
    """Panel target contributed by an extension."""

    extension_id: str
    panel_id: str
    title: str
    is_visible: VisibilityPredicate = field(default=always_visible, compare=False)

    @property
    def key(self) -> tuple[str, str]:
        return (self.extension_id, self.panel_id)


def _normalize_suffixes(suffixes: tuple[str, ...] | list[str] | str) -> tuple[str, ...]:
    if isinstance(suffixes, str):
        suffixes = (suffixes,)
    normalized: list[str] = []
    for suffix in suffixes:
        value = suffix.strip().lower()
        if not value:
            continue
        if not value.startswith("."):
            value = f".{value}"
        if value not in normalized:
            normalized.append(value)
    return tuple(normalized)


@dataclass(frozen=True)
class EditorProvider:
    """Editor surface an extension offers for files with given suffixes."""

    extension_id: str
    provider_id: str
    suffixes: tuple[str, ...] = ()
    is_visible: VisibilityPredicate = field(default=always_visible, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "suffixes", _normalize_suffixes(self.suffixes))

    @property
    def key(self) -> tuple[str, str]:
        return (self.extension_id, self.provider_id)

    def handles(self, path: str | PurePath) -> bool:
        """Return True when the provider is registered for the path's suffix."""
        return PurePath(path).suffix.lower() in self.suffixes


@dataclass(frozen=True)
class ExtensionError:
    """Captured failure of an activation callback."""

    extension_id: str
    item_id: str
    message: str
