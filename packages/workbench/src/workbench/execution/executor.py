"""Executor state machine guarding the shared terminal channel.

The executor is either IDLE or RUNNING. ``run`` checks and transitions in one
step, so a second request while a sequence is in flight is rejected with
ExecutorBusyError instead of racing. Commands are forwarded to the bridge one
at a time; a non-zero exit code ends the sequence early. Completion, failure
and cancellation all return the executor to IDLE.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from workbench.errors import ExecutorBusyError
from workbench.telemetry import command_span, record_outcome
from workbench.utils import utc_timestamp

if TYPE_CHECKING:
    from workbench.execution.bridge import TerminalBridge

logger = logging.getLogger(__name__)

StateListener = Callable[["ExecutorState"], None]


class ExecutorState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"


class RunStatus(str, Enum):
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class RunOutcome:
    """Result of one command sequence."""

    commands: tuple[str, ...]
    status: RunStatus
    exit_codes: tuple[int, ...]
    started_at: str
    finished_at: str

    @property
    def exit_code(self) -> int | None:
        """Exit code of the last command that ran."""
        return self.exit_codes[-1] if self.exit_codes else None


class Executor:
    """Serializes command sequences through a single terminal bridge."""

    def __init__(self, bridge: TerminalBridge) -> None:
        self._bridge = bridge
        self._state = ExecutorState.IDLE
        self._task: asyncio.Task[None] | None = None
        self._commands: tuple[str, ...] = ()
        self._cancelling = False
        self._listeners: list[StateListener] = []
        self.last_outcome: RunOutcome | None = None

    @property
    def bridge(self) -> TerminalBridge:
        return self._bridge

    @property
    def state(self) -> ExecutorState:
        return self._state

    def current_state(self) -> ExecutorState:
        return self._state

    def add_listener(self, listener: StateListener) -> None:
        """Call ``listener`` with the new state on every transition."""
        self._listeners.append(listener)

    def run(self, commands: Sequence[str]) -> asyncio.Task[None]:
        """Start executing commands in order and return the driving task.

        Raises:
            ExecutorBusyError: another sequence is in flight; nothing changes.
            ValueError: the sequence is empty.
        """
        ordered = tuple(commands)
        if not ordered:
            msg = "Cannot run an empty command sequence"
            raise ValueError(msg)
        if self._state is not ExecutorState.IDLE:
            msg = "Executor is busy"
            raise ExecutorBusyError(msg)
        loop = asyncio.get_running_loop()
        self._set_state(ExecutorState.RUNNING)
        self._cancelling = False
        self._commands = ordered
        self._task = loop.create_task(self._drive(ordered))
        return self._task

    async def cancel(self) -> None:
        """Abort the in-flight sequence and terminate the running command."""
        task = self._task
        if self._state is ExecutorState.IDLE or task is None:
            return
        self._cancelling = True
        task.cancel()
        await self._bridge.terminate()
        await asyncio.wait({task})
        if self._state is ExecutorState.RUNNING:
            # The task was cancelled before its first step, so _drive never ran.
            self._finish(self._commands, RunStatus.CANCELLED, [], utc_timestamp())

    async def wait(self) -> RunOutcome | None:
        """Wait for the in-flight sequence, if any, and return the last outcome."""
        task = self._task
        if task is not None:
            await asyncio.wait({task})
        return self.last_outcome

    async def _drive(self, commands: tuple[str, ...]) -> None:
        started_at = utc_timestamp()
        exit_codes: list[int] = []
        status = RunStatus.COMPLETED
        with command_span(commands) as span:
            try:
                for command in commands:
                    exit_code = await self._bridge.execute_command(command)
                    exit_codes.append(exit_code)
                    if exit_code != 0:
                        logger.info("Command exited with %d: %s", exit_code, command)
                        status = RunStatus.FAILED
                        break
                if self._cancelling:
                    status = RunStatus.CANCELLED
            except asyncio.CancelledError:
                status = RunStatus.CANCELLED
                raise
            except Exception:
                logger.exception("Terminal bridge failed while running %s", commands[0])
                status = RunStatus.FAILED
            finally:
                record_outcome(span, status.value, exit_codes)
                self._finish(commands, status, exit_codes, started_at)

    def _finish(
        self,
        commands: tuple[str, ...],
        status: RunStatus,
        exit_codes: list[int],
        started_at: str,
    ) -> None:
        self.last_outcome = RunOutcome(
            commands=commands,
            status=status,
            exit_codes=tuple(exit_codes),
            started_at=started_at,
            finished_at=utc_timestamp(),
        )
        self._task = None
        self._commands = ()
        self._set_state(ExecutorState.IDLE)
        logger.debug("Command sequence %s: %s", status.value, " && ".join(commands))

    def _set_state(self, state: ExecutorState) -> None:
        self._state = state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:  # noqa: BLE001 - listeners must not break transitions
                logger.exception("Executor state listener failed")
