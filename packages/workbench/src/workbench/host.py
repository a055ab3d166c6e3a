"""Host collaborators consumed by extensions.

Extensions only see the host through ``Host``. Visibility predicates receive a
``HostSnapshot`` instead, a read-only view built fresh for each render pass.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Literal

from workbench.commands.languages import language_for_path
from workbench.errors import NoActiveTargetError, SaveError
from workbench.execution.executor import ExecutorState

if TYPE_CHECKING:
    from workbench.config import Settings
    from workbench.execution.bridge import TerminalBridge
    from workbench.execution.executor import Executor

logger = logging.getLogger(__name__)

NotificationLevel = Literal["info", "warning", "error"]


@dataclass(frozen=True)
class ActiveFile:
    """The file shown in the active editor."""

    path: Path
    language_id: str
    is_local: bool = True


@dataclass(frozen=True)
class HostSnapshot:
    """Read-only view of host state passed to visibility predicates."""

    active_file: ActiveFile | None = None
    executor_state: ExecutorState = ExecutorState.IDLE


@dataclass(frozen=True)
class Notification:
    message: str
    level: NotificationLevel = "info"


class Host(ABC):
    """Services the host exposes to extensions."""

    settings: Settings
    executor: Executor

    @property
    def bridge(self) -> TerminalBridge:
        return self.executor.bridge

    @property
    @abstractmethod
    def active_file(self) -> ActiveFile | None:
        """Return the active file, if any."""

    def snapshot(self) -> HostSnapshot:
        """Build a read-only view of the current host state."""
        return HostSnapshot(active_file=self.active_file, executor_state=self.executor.state)

    @abstractmethod
    async def save_active_file(self) -> None:
        """Persist the active file's current content."""

    @abstractmethod
    def notify(self, message: str, level: NotificationLevel = "info") -> None:
        """Show a message to the user."""


@dataclass
class _OpenEditor:
    file: ActiveFile
    content: str | None
    dirty: bool = False


class WorkbenchHost(Host):
    """In-memory host tracking open editors backed by local files."""

    def __init__(self, settings: Settings, executor: Executor) -> None:
        self.settings = settings
        self.executor = executor
        self._editors: dict[Path, _OpenEditor] = {}
        self._active: Path | None = None
        self.notifications: list[Notification] = []

    @property
    def active_file(self) -> ActiveFile | None:
        if self._active is None:
            return None
        return self._editors[self._active].file

    @property
    def open_files(self) -> list[ActiveFile]:
        return [editor.file for editor in self._editors.values()]

    def open_file(
        self,
        path: str | Path,
        content: str | None = None,
        language_id: str | None = None,
        *,
        is_local: bool = True,
    ) -> ActiveFile:
        """Open a file in an editor and make it active.

        Without ``content`` the editor mirrors the file on disk and saving is a
        no-op until the content is updated.
        """
        resolved = Path(path).expanduser().absolute()
        language = language_id or language_for_path(resolved) or "txt"
        active = ActiveFile(path=resolved, language_id=language, is_local=is_local)
        self._editors[resolved] = _OpenEditor(
            file=active, content=content, dirty=content is not None
        )
        self._active = resolved
        return active

    def set_active(self, path: str | Path | None) -> None:
        if path is None:
            self._active = None
            return
        resolved = Path(path).expanduser().absolute()
        if resolved not in self._editors:
            msg = f"File is not open: {resolved}"
            raise KeyError(msg)
        self._active = resolved

    def close_file(self, path: str | Path) -> None:
        resolved = Path(path).expanduser().absolute()
        self._editors.pop(resolved, None)
        if self._active == resolved:
            self._active = next(iter(self._editors), None)

    def update_content(self, content: str) -> None:
        """Replace the active editor's buffer."""
        editor = self._active_editor()
        editor.content = content
        editor.dirty = True

    async def save_active_file(self) -> None:
        editor = self._active_editor()
        if not editor.dirty or editor.content is None:
            return
        if not editor.file.is_local:
            msg = f"Cannot save remote file locally: {editor.file.path}"
            raise SaveError(msg)
        try:
            editor.file.path.parent.mkdir(parents=True, exist_ok=True)
            editor.file.path.write_text(editor.content, encoding="utf-8")
        except OSError as exc:
            msg = f"Failed to save {editor.file.path}: {exc}"
            raise SaveError(msg) from exc
        editor.dirty = False
        logger.debug("Saved %s", editor.file.path)

    def notify(self, message: str, level: NotificationLevel = "info") -> None:
        self.notifications.append(Notification(message=message, level=level))
        log_level = {"info": logging.INFO, "warning": logging.WARNING}.get(level, logging.ERROR)
        logger.log(log_level, message)

    def _active_editor(self) -> _OpenEditor:
        if self._active is None:
            msg = "No active file"
            raise NoActiveTargetError(msg)
        return self._editors[self._active]
