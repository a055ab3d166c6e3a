"""Error taxonomy for the workbench core.

Resolution and executor-state errors are handled inside the extensions that
trigger them. Wiring errors (duplicate ids, double initialization) are fatal
at start-up. Save failures are forwarded to the host notification channel.
"""

from __future__ import annotations


class WorkbenchError(Exception):
    """Base class for workbench errors."""


class UnsupportedLanguageError(WorkbenchError):
    """No command template exists for a language identifier."""

    def __init__(self, language_id: str) -> None:
        super().__init__(f"No local execution commands for language: {language_id!r}")
        self.language_id = language_id


class ExecutorBusyError(WorkbenchError):
    """A run was requested while another command sequence is in flight."""


class NoActiveTargetError(WorkbenchError):
    """There is no active file to run."""


class DuplicateExtensionError(WorkbenchError):
    """An extension with the same identity is already registered."""

    def __init__(self, extension_id: str) -> None:
        super().__init__(f"Extension already registered: {extension_id}")
        self.extension_id = extension_id


class AlreadyInitializedError(WorkbenchError):
    """The extension manager has already run its initialization pass."""


class ExtensionInitializationError(WorkbenchError):
    """An extension failed inside its initialize hook."""

    def __init__(self, extension_id: str, cause: BaseException) -> None:
        super().__init__(f"Extension {extension_id} failed to initialize: {cause}")
        self.extension_id = extension_id


class SaveError(WorkbenchError):
    """Writing the active file to disk failed."""
