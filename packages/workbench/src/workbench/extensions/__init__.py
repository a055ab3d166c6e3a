"""Extension contribution surface."""

from workbench.extensions.api import Contribution
from workbench.extensions.base import Extension
from workbench.extensions.models import (
    EditorProvider,
    ExtensionError,
    Modifier,
    PanelBinding,
    Shortcut,
    ToolbarItem,
)
from workbench.extensions.registry import ContributionRegistries, ContributionRegistry
from workbench.extensions.runtime import ExtensionManager

__all__ = [
    "Contribution",
    "ContributionRegistries",
    "ContributionRegistry",
    "EditorProvider",
    "Extension",
    "ExtensionError",
    "ExtensionManager",
    "Modifier",
    "PanelBinding",
    "Shortcut",
    "ToolbarItem",
]
