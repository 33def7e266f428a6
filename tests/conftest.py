"""Test configuration and fixtures."""

import io
import json
import logging
from collections.abc import Callable, Iterator
from typing import Any
from unittest.mock import Mock

import pytest

from task_helper.transport import Transport, TransportRegistry


class FakeTransport(Transport):
    """A transport that only knows its name and configuration."""

    def __init__(self, config: dict[str, Any], name: str = "fake_transport") -> None:
        self._config = config
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    @property
    def config(self) -> dict[str, Any]:
        return self._config


@pytest.fixture
def stdin() -> Callable[[Any], io.StringIO]:
    """Build a standard input stream from a value (dumped as JSON) or raw text."""

    def _make(value: Any) -> io.StringIO:
        raw = value if isinstance(value, str) else json.dumps(value)
        return io.StringIO(raw)

    return _make


@pytest.fixture
def stdout() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def make_transport() -> Callable[..., FakeTransport]:
    """Provide a factory for simple named transports."""
    return FakeTransport


@pytest.fixture
def registry() -> TransportRegistry:
    """Provide a registry with a `wibble` transport."""
    return TransportRegistry(
        {"wibble": lambda config: FakeTransport(config, name="wibble_transport")}
    )


@pytest.fixture
def mock_registry() -> Mock:
    """Provide a host registry double returning a named transport."""
    transport = Mock()
    transport.name = "wibble_transport"
    registry = Mock()
    registry.connect.return_value = transport
    return registry


@pytest.fixture
def restore_root_logging() -> Iterator[None]:
    """Undo `configure_logging` side effects on the root logger."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    helper_level = logging.getLogger("task_helper").level
    yield
    for handler in list(root.handlers):
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)
    logging.getLogger("task_helper").setLevel(helper_level)
