"""Extension manager: registration, one-shot initialization, and activation."""

from __future__ import annotations

import inspect
import logging
from typing import TYPE_CHECKING

from workbench.errors import (
    AlreadyInitializedError,
    DuplicateExtensionError,
    ExtensionInitializationError,
)
from workbench.extensions.api import Contribution
from workbench.extensions.models import DEFAULT_ITEM_ID, ExtensionError
from workbench.extensions.registry import ContributionRegistries, ContributionRegistry

if TYPE_CHECKING:
    from workbench.extensions.base import Extension
    from workbench.extensions.models import (
        EditorProvider,
        PanelBinding,
        Shortcut,
        ToolbarItem,
    )
    from workbench.host import Host, HostSnapshot

logger = logging.getLogger(__name__)


class ExtensionManager:
    """Owns registered extensions and the registries they contribute to.

    Construct one per host and call ``initialize_all`` exactly once.
    """

    def __init__(self) -> None:
        self._extensions: dict[str, Extension] = {}
        self._registries = ContributionRegistries()
        self._initialized = False
        self.errors: list[ExtensionError] = []

    @property
    def registries(self) -> ContributionRegistries:
        return self._registries

    @property
    def toolbar(self) -> ContributionRegistry[ToolbarItem]:
        return self._registries.toolbar

    @property
    def panels(self) -> ContributionRegistry[PanelBinding]:
        return self._registries.panel

    @property
    def editor_providers(self) -> ContributionRegistry[EditorProvider]:
        return self._registries.editor_provider

    @property
    def extensions(self) -> list[str]:
        """Return registered extension ids in registration order."""
        return list(self._extensions)

    @property
    def initialized(self) -> bool:
        return self._initialized

    def register(self, extension: Extension) -> None:
        """Register an extension; duplicate identities are rejected."""
        if self._initialized:
            msg = f"Cannot register {extension.extension_id} after initialization"
            raise AlreadyInitializedError(msg)
        if extension.extension_id in self._extensions:
            raise DuplicateExtensionError(extension.extension_id)
        self._extensions[extension.extension_id] = extension

    def initialize_all(self, host: Host) -> None:
        """Invoke every extension's initialize hook once, in registration order."""
        if self._initialized:
            msg = "Extensions have already been initialized"
            raise AlreadyInitializedError(msg)
        self._initialized = True
        for extension_id, extension in self._extensions.items():
            contribution = Contribution(extension_id, self._registries)
            try:
                extension.initialize(host, contribution)
            except Exception as exc:
                raise ExtensionInitializationError(extension_id, exc) from exc
            logger.debug("Initialized extension %s", extension_id)
        logger.info("Initialized %d extensions", len(self._extensions))

    async def activate(self, extension_id: str, item_id: str = DEFAULT_ITEM_ID) -> None:
        """Run a toolbar item's activation callback with error isolation."""
        item = self.toolbar.get(extension_id, item_id)
        if item is None:
            msg = f"No toolbar item {extension_id}/{item_id}"
            raise KeyError(msg)
        try:
            result = item.on_activate()
            if inspect.isawaitable(result):
                await result
        except Exception as exc:  # noqa: BLE001 - callbacks must not break the host
            logger.exception("Toolbar item %s/%s failed", extension_id, item_id)
            self.errors.append(
                ExtensionError(extension_id=extension_id, item_id=item_id, message=str(exc))
            )

    def find_by_shortcut(self, shortcut: Shortcut, snapshot: HostSnapshot) -> ToolbarItem | None:
        """Return the first visible toolbar item bound to the shortcut."""
        for item in self.toolbar.visible_items(snapshot):
            if item.shortcut == shortcut:
                return item
        return None
