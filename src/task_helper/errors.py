"""Structured task failures.

Every failure a task run can end with is a `TaskError`: a kind identifier
(`domain/reason`), a human readable message and an optional JSON payload.
"""

from __future__ import annotations

from typing import Any

NOT_IMPLEMENTED_MESSAGE = "The task author must implement the `task` method in the task"


class TaskError(Exception):
    """A deliberate, structured task failure.

    Task authors raise this (or a subclass) to end the run with a failure
    envelope instead of a result.
    """

    default_kind = "tasklib/error"

    def __init__(self, msg: str, kind: str | None = None, details: Any = None) -> None:
        super().__init__(msg)
        self.msg = msg
        self.kind = kind or self.default_kind
        self.details = {} if details is None else details

    def to_json(self) -> dict[str, Any]:
        return {"kind": self.kind, "msg": self.msg, "details": self.details}

    def __repr__(self) -> str:
        return f"{type(self).__name__}(msg={self.msg!r}, kind={self.kind!r})"


class ParseError(TaskError):
    """Standard input did not hold a JSON document."""

    default_kind = "tasklib/parse-error"


class TaskNotImplementedError(TaskError):
    """The task class never overrode `task`."""

    default_kind = "tasklib/not-implemented"

    def __init__(self, msg: str = NOT_IMPLEMENTED_MESSAGE, kind: str | None = None) -> None:
        super().__init__(msg, kind)


class TransportError(TaskError):
    default_kind = "tasklib/transport-error"


class NoTransportError(TaskError):
    """Task logic asked for a transport but the input had no target."""

    default_kind = "tasklib/no-transport"


class SerializationError(TaskError):
    default_kind = "tasklib/serialization-error"


class UnexpectedError(TaskError):
    """Wraps a fault that is not a `TaskError`."""

    default_kind = "tasklib/unexpected-error"

    @classmethod
    def from_exception(cls, exc: BaseException) -> UnexpectedError:
        name = type(exc).__name__
        return cls(str(exc) or name, details={"class": name})
