"""Per-run state that task logic can reach through `self.context`."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from task_helper.errors import NoTransportError
from task_helper.transport.resolver import TARGET_KEY


@dataclass(slots=True)
class TaskContext:
    """What a single task run knows besides its parameters."""

    params: dict[str, Any] = field(default_factory=dict)
    _transport: Any | None = None

    @property
    def has_transport(self) -> bool:
        return self._transport is not None

    @property
    def transport(self) -> Any:
        """The transport resolved from `_target`.

        Raises:
            NoTransportError: If the run had no target.
        """
        if self._transport is None:
            raise NoTransportError("No transport is available: the task was not given a _target")
        return self._transport

    @property
    def target(self) -> dict[str, Any] | None:
        return self.params.get(TARGET_KEY)
