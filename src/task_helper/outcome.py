"""The single result of a task run and its JSON rendering."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from task_helper.errors import SerializationError, TaskError


def dump_json(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, allow_nan=False)


@dataclass(frozen=True, slots=True)
class Success:
    value: Any

    exit_code = 0

    def render(self) -> str:
        return dump_json(self.value)


@dataclass(frozen=True, slots=True)
class Failure:
    error: TaskError

    exit_code = 1

    @property
    def kind(self) -> str:
        return self.error.kind

    def render(self) -> str:
        return dump_json(self.error.to_json())


Outcome = Success | Failure


def render(outcome: Outcome) -> tuple[str, Outcome]:
    """Serialize an outcome, turning unserializable results into a failure.

    Returns the envelope text and the outcome it was rendered from.
    """

    try:
        return outcome.render(), outcome
    except (TypeError, ValueError, RecursionError) as e:
        failure = Failure(
            SerializationError(
                f"The task result could not be serialized to JSON: {e}",
                details={"class": type(e).__name__},
            )
        )
        if isinstance(outcome, Failure):
            # Author supplied details that do not serialize; keep kind and message.
            failure = Failure(
                SerializationError(
                    str(outcome.error.msg),
                    kind=str(outcome.error.kind),
                    details={"unserializable": True},
                )
            )
        return failure.render(), failure
