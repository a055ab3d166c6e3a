"""Terminal bridge interface and a local subprocess implementation.

The bridge is the single channel commands are executed through. It accepts
two kinds of input:
- scripts: an echo line optionally followed by a blocking read, used to pace
  output so the echoed command is visible before the command output streams
- commands: literal command lines, executed one at a time

The subprocess bridge can also run a structured ``ShellCommand`` directly,
without a shell, so paths need no escaping.
"""

from __future__ import annotations

import asyncio
import logging
import os
import sys
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from pathlib import Path

from workbench.commands.resolver import ShellCommand

logger = logging.getLogger(__name__)

OutputSink = Callable[[str], None]
InputReader = Callable[[], Awaitable[str]]


@dataclass(frozen=True)
class EchoScript:
    """Echo one line of display text, then block until an input line is read."""

    echo: str
    wait_for_input: bool = True

    def render(self) -> list[tuple[str, str]]:
        """Return the ordered bridge instructions for this script."""
        instructions = [("echo", self.echo)]
        if self.wait_for_input:
            instructions.append(("read_line", ""))
        return instructions


class TerminalBridge(ABC):
    """Channel that displays scripts and executes command lines in order."""

    @abstractmethod
    async def execute_script(self, script: EchoScript) -> None:
        """Display the script's echo line and honor its blocking read."""

    @abstractmethod
    async def execute_command(self, command: str) -> int:
        """Execute one command line to completion and return its exit code."""

    @abstractmethod
    async def terminate(self) -> None:
        """Stop the in-flight command, if any."""


def _write_stdout(text: str) -> None:
    sys.stdout.write(text)
    sys.stdout.flush()


async def _no_input() -> str:
    return ""


class SubprocessTerminalBridge(TerminalBridge):
    """Run command lines with the local shell via asyncio subprocesses."""

    def __init__(
        self,
        cwd: str | Path | None = None,
        output: OutputSink | None = None,
        input_reader: InputReader | None = None,
        timeout: float | None = None,
        env: dict[str, str] | None = None,
    ) -> None:
        self._cwd = str(cwd) if cwd is not None else None
        self._output = output or _write_stdout
        self._input_reader = input_reader or _no_input
        self._timeout = timeout
        self._env = env
        self._process: asyncio.subprocess.Process | None = None

    async def execute_script(self, script: EchoScript) -> None:
        for instruction, text in script.render():
            if instruction == "echo":
                self._output(f"{text}\n")
            elif instruction == "read_line":
                await self._input_reader()

    async def execute_command(self, command: str) -> int:
        logger.debug("RUN %s", command)
        process = await asyncio.create_subprocess_shell(
            command,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.STDOUT,
            cwd=self._cwd,
            env=self._merged_env(),
        )
        return await self._run(process)

    async def execute_argv(self, command: ShellCommand) -> int:
        """Execute a structured command without a shell and return its exit code."""
        logger.debug("RUN %s", command.display())
        process = await asyncio.create_subprocess_exec(
            *command.argv,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.STDOUT,
            cwd=self._cwd,
            env=self._merged_env(),
        )
        return await self._run(process)

    async def _run(self, process: asyncio.subprocess.Process) -> int:
        self._process = process
        try:
            if self._timeout:
                await asyncio.wait_for(self._communicate(process), timeout=self._timeout)
            else:
                await self._communicate(process)
        except asyncio.TimeoutError:
            self._kill(process)
            await process.wait()
            raise
        except asyncio.CancelledError:
            self._kill(process)
            raise
        finally:
            self._process = None
        return process.returncode if process.returncode is not None else -1

    async def terminate(self) -> None:
        process = self._process
        if process is None:
            return
        self._kill(process)
        await process.wait()

    def _merged_env(self) -> dict[str, str] | None:
        if self._env is None:
            return None
        merged = dict(os.environ)
        merged.update(self._env)
        return merged

    async def _communicate(self, process: asyncio.subprocess.Process) -> None:
        await self._stream(process)
        await process.wait()

    async def _stream(self, process: asyncio.subprocess.Process) -> None:
        if process.stdout is None:
            return
        while True:
            chunk = await process.stdout.read(4096)
            if not chunk:
                break
            self._output(chunk.decode("utf-8", errors="replace"))

    @staticmethod
    def _kill(process: asyncio.subprocess.Process) -> None:
        if process.returncode is None:
            try:
                process.kill()
            except ProcessLookupError:
                pass
