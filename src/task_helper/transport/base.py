"""Abstract base class for transport handles."""

from abc import ABC, abstractmethod
from typing import Any


class Transport(ABC):
    """A live connection to a remote target.

    Handles are issued by a transport registry for a single task run. Task
    logic reaches them through `TaskContext.transport`.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Identity of the transport, e.g. for reporting where a task ran."""

    @property
    def config(self) -> dict[str, Any]:
        """Target configuration the handle was created from."""
        return {}
