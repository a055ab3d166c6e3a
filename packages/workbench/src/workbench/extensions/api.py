"""Contribution surface handed to extensions for registration."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from workbench.extensions.models import EditorProvider, PanelBinding, ToolbarItem
    from workbench.extensions.registry import ContributionRegistries


class Contribution:
    """Registration API scoped to a single extension identity."""

    def __init__(self, extension_id: str, registries: ContributionRegistries) -> None:
        self._extension_id = extension_id
        self._registries = registries

    @property
    def extension_id(self) -> str:
        return self._extension_id

    def register_toolbar_item(self, item: ToolbarItem) -> None:
        """Register a toolbar action owned by this extension."""
        self._check_owner(item.extension_id)
        self._registries.register_toolbar_item(item)

    def register_panel_binding(self, binding: PanelBinding) -> None:
        """Register a panel target owned by this extension."""
        self._check_owner(binding.extension_id)
        self._registries.register_panel_binding(binding)

    def register_editor_provider(self, provider: EditorProvider) -> None:
        """Register an editor provider owned by this extension."""
        self._check_owner(provider.extension_id)
        self._registries.register_editor_provider(provider)

    def _check_owner(self, extension_id: str) -> None:
        if extension_id != self._extension_id:
            msg = (
                f"Extension {self._extension_id} cannot register contributions "
                f"owned by {extension_id}"
            )
            raise ValueError(msg)
