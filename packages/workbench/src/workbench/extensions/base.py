"""Extension base class."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from workbench.extensions.api import Contribution
    from workbench.host import Host


class Extension(ABC):
    """A capability provider that contributes affordances to the host.

    Subclasses set ``extension_id`` and implement ``initialize``, which the
    ExtensionManager calls exactly once at start-up.
    """

    extension_id: ClassVar[str]

    @abstractmethod
    def initialize(self, host: Host, contribution: Contribution) -> None:
        """Register contributions and wire behavior into the host."""
