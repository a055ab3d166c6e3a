"""Run the active file with the local toolchain for its language."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from workbench.commands.resolver import CommandResolver
from workbench.errors import ExecutorBusyError, SaveError
from workbench.execution.bridge import EchoScript
from workbench.execution.executor import ExecutorState
from workbench.extensions.base import Extension
from workbench.extensions.models import Modifier, Shortcut, ToolbarItem

if TYPE_CHECKING:
    import asyncio

    from workbench.extensions.api import Contribution
    from workbench.host import Host, HostSnapshot

logger = logging.getLogger(__name__)

EXTENSION_ID = "LOCAL_EXECUTION"
TERMINAL_PANEL = "TERMINAL"
RUN_SHORTCUT = Shortcut("r", frozenset({Modifier.COMMAND}))


def echo_line(commands: list[str], language_id: str, *, show_path: bool) -> str:
    """Text echoed before the commands run."""
    if show_path:
        return " && ".join(commands)
    if commands and commands[0]:
        return commands[0].split(" ")[0]
    return language_id


class LocalExecutionExtension(Extension):
    """Contributes a toolbar action that runs the active file locally."""

    extension_id = EXTENSION_ID

    def __init__(self, resolver: CommandResolver | None = None) -> None:
        self.resolver = resolver or CommandResolver()
        self._host: Host | None = None
        self._submitting = False

    def initialize(self, host: Host, contribution: Contribution) -> None:
        self._host = host
        contribution.register_toolbar_item(
            ToolbarItem(
                extension_id=EXTENSION_ID,
                icon="play",
                on_activate=self.run_code_locally,
                shortcut=RUN_SHORTCUT,
                focus_panel=TERMINAL_PANEL,
                is_visible=self.should_display,
            )
        )

    def should_display(self, snapshot: HostSnapshot) -> bool:
        active = snapshot.active_file
        if active is None:
            return False
        return active.is_local and self.resolver.supports(active.language_id)

    async def run_code_locally(self) -> asyncio.Task[None] | None:
        """Save the active file and submit its commands to the executor.

        Returns the executor task, or None when the run was declined.
        """
        host = self._host
        if host is None:
            msg = "LocalExecutionExtension used before initialization"
            raise RuntimeError(msg)

        executor = host.executor
        if self._submitting or executor.state is not ExecutorState.IDLE:
            logger.debug("Executor busy, ignoring run request")
            return None

        # Held from the idle check until the executor owns the run.
        self._submitting = True
        try:
            return await self._submit(host)
        finally:
            self._submitting = False

    async def _submit(self, host: Host) -> asyncio.Task[None] | None:
        executor = host.executor
        active = host.active_file
        if active is None:
            logger.debug("No active file, ignoring run request")
            return None

        if not self.resolver.supports(active.language_id):
            logger.debug("No commands for language %s", active.language_id)
            return None

        try:
            await host.save_active_file()
        except SaveError as exc:
            host.notify(str(exc), level="error")
            return None

        commands = self.resolver.resolve(active.language_id, active.path)
        script = EchoScript(
            echo_line(commands, active.language_id, show_path=host.settings.compiler_show_path)
        )
        await host.bridge.execute_script(script)

        try:
            return executor.run(commands)
        except ExecutorBusyError:
            logger.debug("Executor became busy before submission")
            return None
