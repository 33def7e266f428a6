"""Task Helper.

Base class and invocation protocol for tasks that take a JSON document on
standard input and answer with exactly one JSON document on standard output.
"""

__version__ = "0.1.0"

from task_helper.context import TaskContext
from task_helper.errors import (
    NoTransportError,
    ParseError,
    TaskError,
    TaskNotImplementedError,
    TransportError,
)
from task_helper.task import TaskHelper
from task_helper.transport import Transport, TransportRegistry, default_registry

__all__ = [
    "__version__",
    "NoTransportError",
    "ParseError",
    "TaskContext",
    "TaskError",
    "TaskHelper",
    "TaskNotImplementedError",
    "Transport",
    "TransportError",
    "TransportRegistry",
    "default_registry",
]
