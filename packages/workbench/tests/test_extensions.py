from __future__ import annotations

from typing import Any

import pytest
from workbench.errors import (
    AlreadyInitializedError,
    DuplicateExtensionError,
    ExtensionInitializationError,
)
from workbench.extensions import (
    Contribution,
    Extension,
    ExtensionManager,
    Modifier,
    PanelBinding,
    Shortcut,
    ToolbarItem,
)
from workbench.host import HostSnapshot


class ToolbarExtension(Extension):
    """Registers one toolbar item and counts initialize calls."""

    def __init__(self, extension_id: str, icon: str = "play", item_id: str = "default") -> None:
        self.extension_id = extension_id
        self.icon = icon
        self.item_id = item_id
        self.calls: list[tuple[Any, Contribution]] = []
        self.activations = 0

    def initialize(self, host: Any, contribution: Contribution) -> None:
        self.calls.append((host, contribution))
        contribution.register_toolbar_item(
            ToolbarItem(
                extension_id=self.extension_id,
                item_id=self.item_id,
                icon=self.icon,
                on_activate=self.activate,
                shortcut=Shortcut("k", frozenset({Modifier.COMMAND})),
            )
        )

    def activate(self) -> None:
        self.activations += 1


class OrderRecorder(Extension):
    def __init__(self, extension_id: str, order: list[str]) -> None:
        self.extension_id = extension_id
        self._order = order

    def initialize(self, host: Any, contribution: Contribution) -> None:
        self._order.append(self.extension_id)


class FailingExtension(Extension):
    extension_id = "failing"

    def initialize(self, host: Any, contribution: Contribution) -> None:
        raise RuntimeError("broken wiring")


def test_initialize_all_calls_each_extension_once_in_order() -> None:
    order: list[str] = []
    manager = ExtensionManager()
    manager.register(OrderRecorder("b", order))
    manager.register(OrderRecorder("a", order))

    manager.initialize_all(host=object())

    assert order == ["b", "a"]
    assert manager.extensions == ["b", "a"]
    assert manager.initialized


def test_contribution_is_scoped_to_extension() -> None:
    host = object()
    extension = ToolbarExtension("ext")
    manager = ExtensionManager()
    manager.register(extension)

    manager.initialize_all(host)

    assert len(extension.calls) == 1
    received_host, contribution = extension.calls[0]
    assert received_host is host
    assert contribution.extension_id == "ext"
    with pytest.raises(ValueError, match="cannot register"):
        contribution.register_panel_binding(
            PanelBinding(extension_id="other", panel_id="p", title="P")
        )


def test_duplicate_extension_is_rejected() -> None:
    manager = ExtensionManager()
    manager.register(ToolbarExtension("ext"))

    with pytest.raises(DuplicateExtensionError):
        manager.register(ToolbarExtension("ext"))


def test_initialize_twice_is_an_error() -> None:
    manager = ExtensionManager()
    extension = ToolbarExtension("ext")
    manager.register(extension)
    manager.initialize_all(host=None)

    with pytest.raises(AlreadyInitializedError):
        manager.initialize_all(host=None)
    assert len(extension.calls) == 1


def test_register_after_initialize_is_an_error() -> None:
    manager = ExtensionManager()
    manager.initialize_all(host=None)

    with pytest.raises(AlreadyInitializedError):
        manager.register(ToolbarExtension("late"))


def test_initialize_failure_aborts_startup() -> None:
    order: list[str] = []
    manager = ExtensionManager()
    manager.register(FailingExtension())
    manager.register(OrderRecorder("after", order))

    with pytest.raises(ExtensionInitializationError) as excinfo:
        manager.initialize_all(host=None)

    assert excinfo.value.extension_id == "failing"
    assert order == []


def test_same_extension_and_item_key_keeps_last_registration() -> None:
    manager = ExtensionManager()
    manager.register(ToolbarExtension("first"))
    manager.initialize_all(host=None)
    contribution = Contribution("first", manager.registries)

    contribution.register_toolbar_item(
        ToolbarItem(extension_id="first", icon="stop", on_activate=lambda: None)
    )

    items = manager.toolbar.items()
    assert len(items) == 1
    assert items[0].icon == "stop"


def test_lazy_registration_after_initialize() -> None:
    manager = ExtensionManager()
    manager.initialize_all(host=None)
    contribution = Contribution("lazy", manager.registries)

    contribution.register_panel_binding(
        PanelBinding(extension_id="lazy", panel_id="OUTPUT", title="Output")
    )

    assert manager.panels.get("lazy", "OUTPUT") is not None


@pytest.mark.asyncio
async def test_activate_runs_sync_and_async_callbacks() -> None:
    calls: list[str] = []

    async def async_callback() -> None:
        calls.append("async")

    manager = ExtensionManager()
    extension = ToolbarExtension("sync")
    manager.register(extension)
    manager.initialize_all(host=None)
    Contribution("async", manager.registries).register_toolbar_item(
        ToolbarItem(extension_id="async", icon="bolt", on_activate=async_callback)
    )

    await manager.activate("sync")
    await manager.activate("async")

    assert extension.activations == 1
    assert calls == ["async"]


@pytest.mark.asyncio
async def test_activation_errors_are_captured() -> None:
    def broken() -> None:
        raise RuntimeError("boom")

    manager = ExtensionManager()
    manager.initialize_all(host=None)
    Contribution("ext", manager.registries).register_toolbar_item(
        ToolbarItem(extension_id="ext", icon="x", on_activate=broken)
    )

    await manager.activate("ext")

    assert manager.errors
    assert manager.errors[0].extension_id == "ext"
    assert manager.errors[0].message == "boom"


@pytest.mark.asyncio
async def test_activate_unknown_item_raises_key_error() -> None:
    manager = ExtensionManager()
    manager.initialize_all(host=None)

    with pytest.raises(KeyError):
        await manager.activate("missing")


def test_find_by_shortcut_returns_visible_item() -> None:
    manager = ExtensionManager()
    manager.register(ToolbarExtension("ext"))
    manager.initialize_all(host=None)

    found = manager.find_by_shortcut(
        Shortcut("k", frozenset({Modifier.COMMAND})), HostSnapshot()
    )
    missing = manager.find_by_shortcut(Shortcut("k"), HostSnapshot())

    assert found is not None
    assert found.extension_id == "ext"
    assert missing is None
