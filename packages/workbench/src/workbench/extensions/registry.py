"""Contribution registries keyed by owning extension."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import TYPE_CHECKING, Generic, Protocol, TypeVar

from workbench.extensions.models import (
    EditorProvider,
    PanelBinding,
    ToolbarItem,
    VisibilityPredicate,
)

if TYPE_CHECKING:
    from workbench.host import HostSnapshot

logger = logging.getLogger(__name__)


class Contributed(Protocol):
    """Shape shared by every contribution type."""

    is_visible: VisibilityPredicate

    @property
    def key(self) -> tuple[str, str]: ...


T = TypeVar("T", bound=Contributed)


class VisibleItems(Generic[T]):
    """Lazy view of the items visible for a snapshot.

    Every iteration re-evaluates the predicates, so the view can be iterated
    repeatedly and always reflects the registry's current contents.
    """

    def __init__(self, registry: ContributionRegistry[T], snapshot: HostSnapshot) -> None:
        self._registry = registry
        self._snapshot = snapshot

    def __iter__(self) -> Iterator[T]:
        for item in self._registry.items():
            if self._registry.evaluate(item, self._snapshot):
                yield item


class ContributionRegistry(Generic[T]):
    """Insert-or-replace store of contributions in registration order."""

    def __init__(self, category: str) -> None:
        self.category = category
        self._items: dict[tuple[str, str], T] = {}

    def register(self, item: T) -> None:
        """Register an item, replacing any prior item with the same key."""
        if item.key in self._items:
            logger.debug("Replacing %s contribution %s/%s", self.category, *item.key)
        self._items[item.key] = item

    def get(self, extension_id: str, item_id: str) -> T | None:
        """Return the item registered under the key, if any."""
        return self._items.get((extension_id, item_id))

    def items(self) -> list[T]:
        """Return a snapshot of all items in registration order."""
        return list(self._items.values())

    def visible_items(self, snapshot: HostSnapshot) -> VisibleItems[T]:
        """Return a restartable iterable over items visible for the snapshot."""
        return VisibleItems(self, snapshot)

    def evaluate(self, item: T, snapshot: HostSnapshot) -> bool:
        """Evaluate an item's visibility predicate; failures count as hidden."""
        try:
            return bool(item.is_visible(snapshot))
        except Exception:  # noqa: BLE001 - a broken predicate hides only its own item
            logger.debug("Visibility predicate failed for %s/%s", *item.key, exc_info=True)
            return False

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, key: object) -> bool:
        return key in self._items


class ContributionRegistries:
    """One registry per host-defined affordance category."""

    def __init__(self) -> None:
        self.toolbar: ContributionRegistry[ToolbarItem] = ContributionRegistry("toolbar")
        self.panel: ContributionRegistry[PanelBinding] = ContributionRegistry("panel")
        self.editor_provider: ContributionRegistry[EditorProvider] = ContributionRegistry(
            "editor_provider"
        )

    def register_toolbar_item(self, item: ToolbarItem) -> None:
        self.toolbar.register(item)

    def register_panel_binding(self, binding: PanelBinding) -> None:
        self.panel.register(binding)

    def register_editor_provider(self, provider: EditorProvider) -> None:
        self.editor_provider.register(provider)
