"""Command execution channel."""

from workbench.execution.bridge import EchoScript, SubprocessTerminalBridge, TerminalBridge
from workbench.execution.executor import Executor, ExecutorState, RunOutcome, RunStatus

__all__ = [
    "EchoScript",
    "Executor",
    "ExecutorState",
    "RunOutcome",
    "RunStatus",
    "SubprocessTerminalBridge",
    "TerminalBridge",
]
