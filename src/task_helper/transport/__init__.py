"""Transport package initialization."""

from task_helper.transport.base import Transport
from task_helper.transport.registry import TransportRegistry, default_registry
from task_helper.transport.resolver import TARGET_KEY, TargetDescriptor, resolve_transport

__all__ = [
    "TARGET_KEY",
    "TargetDescriptor",
    "Transport",
    "TransportRegistry",
    "default_registry",
    "resolve_transport",
]
