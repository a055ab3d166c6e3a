"""Workbench construction helpers."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from workbench.config import Settings, load_settings
from workbench.execution.bridge import SubprocessTerminalBridge
from workbench.execution.executor import Executor
from workbench.extensions.runtime import ExtensionManager
from workbench.host import WorkbenchHost
from workbench.local_execution import LocalExecutionExtension

if TYPE_CHECKING:
    from workbench.execution.bridge import TerminalBridge
    from workbench.extensions.base import Extension


@dataclass
class Workbench:
    """A host wired to its executor and initialized extensions."""

    settings: Settings
    host: WorkbenchHost
    manager: ExtensionManager

    @property
    def executor(self) -> Executor:
        return self.host.executor


def default_extensions() -> list[Extension]:
    return [LocalExecutionExtension()]


def build_workbench(
    *,
    settings: Settings | None = None,
    bridge: TerminalBridge | None = None,
    extensions: Iterable[Extension] | None = None,
) -> Workbench:
    """Build a host, register extensions, and run their initialization once."""
    resolved_settings = settings or load_settings()
    resolved_bridge = bridge or SubprocessTerminalBridge(
        cwd=resolved_settings.working_dir,
        timeout=resolved_settings.command_timeout,
    )
    host = WorkbenchHost(settings=resolved_settings, executor=Executor(resolved_bridge))

    manager = ExtensionManager()
    for extension in extensions if extensions is not None else default_extensions():
        manager.register(extension)
    manager.initialize_all(host)
    return Workbench(settings=resolved_settings, host=host, manager=manager)
