"""Resolve the optional `_target` of a task's parameters into a transport."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError

from task_helper.errors import TaskError, TransportError
from task_helper.transport.registry import SupportsConnect

logger = logging.getLogger(__name__)

TARGET_KEY = "_target"


class TargetDescriptor(BaseModel):
    """The `_target` entry: a protocol plus transport specific fields."""

    model_config = ConfigDict(extra="allow", frozen=True)

    protocol: str


def parse_target(params: dict[str, Any]) -> TargetDescriptor | None:
    raw = params.get(TARGET_KEY)
    if raw is None:
        return None
    try:
        return TargetDescriptor.model_validate(raw)
    except ValidationError as e:
        raise TransportError(
            "Invalid target description",
            details={"errors": [err["msg"] for err in e.errors()]},
        ) from e


def resolve_transport(params: dict[str, Any], registry: SupportsConnect) -> Any | None:
    """Return a transport handle for the target in `params`, or None.

    The registry gets the protocol as the kind and the whole `_target`
    mapping as configuration. Failures surface as `TransportError`.
    """

    target = parse_target(params)
    if target is None:
        return None

    config = params[TARGET_KEY]
    logger.debug("Resolving transport", extra={"protocol": target.protocol})
    try:
        return registry.connect(target.protocol, config)
    except TaskError:
        raise
    except Exception as e:
        raise TransportError(
            f"Could not connect transport {target.protocol}: {e}",
            details={"kind": target.protocol, "class": type(e).__name__},
        ) from e
