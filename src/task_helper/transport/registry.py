"""Registry of transport factories owned by the host environment."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any, Protocol

from task_helper.errors import TransportError
from task_helper.transport.base import Transport

logger = logging.getLogger(__name__)

TransportFactory = Callable[[dict[str, Any]], Transport]

REMOTE_PROTOCOL = "remote"
REMOTE_TRANSPORT_KEY = "remote-transport"


class SupportsConnect(Protocol):
    """Anything that can hand out transports by (kind, config)."""

    def connect(self, kind: str, config: dict[str, Any]) -> Any: ...


class TransportRegistry:
    """Maps transport kinds to factories.

    The `remote` protocol does not name a factory itself; it delegates to the
    factory named by the `remote-transport` field of the target configuration.
    """

    def __init__(self, factories: Mapping[str, TransportFactory] | None = None) -> None:
        self._factories: dict[str, TransportFactory] = dict(factories or {})

    def register(self, kind: str, factory: TransportFactory) -> None:
        if not kind or kind == REMOTE_PROTOCOL:
            raise ValueError(f"Invalid transport kind: {kind!r}")
        self._factories[kind] = factory
        logger.debug("Registered transport", extra={"kind": kind})

    def unregister(self, kind: str) -> None:
        self._factories.pop(kind, None)

    def kinds(self) -> list[str]:
        return sorted(self._factories)

    def connect(self, kind: str, config: dict[str, Any]) -> Transport:
        """Create a transport for `kind` from the full target configuration.

        Raises:
            TransportError: If the kind is unknown or the factory fails.
        """
        factory_kind = kind
        if kind == REMOTE_PROTOCOL:
            factory_kind = config.get(REMOTE_TRANSPORT_KEY)
            if not isinstance(factory_kind, str) or not factory_kind:
                raise TransportError(
                    "A remote target must name its transport in 'remote-transport'",
                    details={"protocol": kind},
                )

        factory = self._factories.get(factory_kind)
        if factory is None:
            raise TransportError(
                f"Unsupported transport: {factory_kind}",
                details={"kind": factory_kind, "available": self.kinds()},
            )

        logger.info("Connecting transport", extra={"kind": factory_kind})
        try:
            return factory(config)
        except TransportError:
            raise
        except Exception as e:
            raise TransportError(
                f"Could not connect transport {factory_kind}: {e}",
                details={"kind": factory_kind, "class": type(e).__name__},
            ) from e


default_registry = TransportRegistry()
