from workbench.commands import (
    LOCAL_EXECUTION_COMMANDS,
    CommandResolver,
    ShellCommand,
    language_for_path,
    sanitize_path,
)
from workbench.config import Settings, load_settings
from workbench.errors import (
    AlreadyInitializedError,
    DuplicateExtensionError,
    ExecutorBusyError,
    ExtensionInitializationError,
    NoActiveTargetError,
    SaveError,
    UnsupportedLanguageError,
    WorkbenchError,
)
from workbench.execution import (
    EchoScript,
    Executor,
    ExecutorState,
    RunOutcome,
    RunStatus,
    SubprocessTerminalBridge,
    TerminalBridge,
)
from workbench.extensions import (
    Contribution,
    ContributionRegistry,
    EditorProvider,
    Extension,
    ExtensionManager,
    Modifier,
    PanelBinding,
    Shortcut,
    ToolbarItem,
)
from workbench.host import ActiveFile, Host, HostSnapshot, WorkbenchHost
from workbench.local_execution import LocalExecutionExtension

__all__ = [
    "LOCAL_EXECUTION_COMMANDS",
    "ActiveFile",
    "AlreadyInitializedError",
    "CommandResolver",
    "Contribution",
    "ContributionRegistry",
    "DuplicateExtensionError",
    "EchoScript",
    "EditorProvider",
    "Executor",
    "ExecutorBusyError",
    "ExecutorState",
    "Extension",
    "ExtensionInitializationError",
    "ExtensionManager",
    "Host",
    "HostSnapshot",
    "LocalExecutionExtension",
    "Modifier",
    "NoActiveTargetError",
    "PanelBinding",
    "RunOutcome",
    "RunStatus",
    "SaveError",
    "Settings",
    "ShellCommand",
    "Shortcut",
    "SubprocessTerminalBridge",
    "TerminalBridge",
    "ToolbarItem",
    "UnsupportedLanguageError",
    "WorkbenchError",
    "WorkbenchHost",
    "language_for_path",
    "load_settings",
    "sanitize_path",
]
