"""The base class task authors subclass.

A task run is one process: read a JSON document from standard input, resolve
the optional `_target` transport, call `task`, write exactly one JSON
document to standard output and exit 0 on success or 1 on failure.

    class EchoTask(TaskHelper):
        def task(self, name=None):
            return {"result": f"Hi, my name is {name}"}

    if __name__ == "__main__":
        EchoTask.run()
"""

from __future__ import annotations

import inspect
import logging
import sys
from typing import Any, NoReturn, TextIO

from task_helper.config import load_settings
from task_helper.context import TaskContext
from task_helper.errors import TaskError, TaskNotImplementedError, UnexpectedError
from task_helper.logging import configure_logging
from task_helper.outcome import Failure, Outcome, Success, render
from task_helper.params import identifier_key, read_params
from task_helper.transport.registry import SupportsConnect, default_registry
from task_helper.transport.resolver import resolve_transport

logger = logging.getLogger(__name__)

_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
_KEYWORD = (inspect.Parameter.POSITIONAL_OR_KEYWORD, inspect.Parameter.KEYWORD_ONLY)


def _keyword_bindings(declared: list[inspect.Parameter], params: dict[str, Any]) -> dict[str, Any]:
    """Map declared keyword-capable parameters to parameter values.

    An exact key wins over a key that only matches by identifier form.
    """

    aliases: dict[str, str] = {}
    for key in params:
        aliases.setdefault(identifier_key(key), key)

    bound: dict[str, Any] = {}
    for p in declared:
        if p.kind not in _KEYWORD:
            continue
        if p.name in params:
            bound[p.name] = params[p.name]
        elif p.name in aliases:
            bound[p.name] = params[aliases[p.name]]
    return bound


class TaskHelper:
    """Base class for tasks driven over standard input/output.

    Subclasses implement `task`, either as `task(self, params)` taking the
    whole parameter mapping, or with keyword parameters such as
    `task(self, name=None)` / `task(self, **params)`. The run's transport, if
    any, is available as `self.context.transport`.
    """

    transport_registry: SupportsConnect = default_registry

    def __init__(self) -> None:
        self.context = TaskContext()

    def task(self, params: dict[str, Any]) -> Any:
        """Task logic. Must be overridden."""
        raise TaskNotImplementedError()

    @classmethod
    def implements_task(cls) -> bool:
        """Whether the class provides its own `task`, checked without calling it."""
        impl = getattr(cls, "task", None)
        return callable(impl) and impl is not TaskHelper.task

    def call_task(self, params: dict[str, Any]) -> Any:
        """Call `task` in the style its signature asks for.

        A single required parameter gets the whole mapping, unless it is a
        positional-or-keyword parameter whose name matches a key. Any other
        signature is bound by keyword: declared names take the matching key
        (or the key whose identifier form matches), and `**kwargs` takes every
        key that does not clash with the method's own bound parameters.
        """

        declared = list(inspect.signature(self.task).parameters.values())
        bound = _keyword_bindings(declared, params)

        if len(declared) == 1 and declared[0].kind in _POSITIONAL:
            only = declared[0]
            if only.default is inspect.Parameter.empty and (
                only.kind is inspect.Parameter.POSITIONAL_ONLY or only.name not in bound
            ):
                return self.task(params)

        if any(p.kind is inspect.Parameter.VAR_KEYWORD for p in declared):
            names = {p.name for p in declared if p.kind in _KEYWORD}
            own = set(inspect.signature(type(self).task).parameters) - {p.name for p in declared}
            dropped = own.intersection(params)
            if dropped:
                logger.debug("Keys not passed as arguments", extra={"keys": sorted(dropped)})
            extra = {k: v for k, v in params.items() if k not in own and k not in names}
            return self.task(**extra, **bound)

        return self.task(**bound)

    def dispatch(self, params: dict[str, Any]) -> Outcome:
        """Resolve the transport and run the task logic once."""

        self.context = TaskContext(params=params)
        try:
            transport = resolve_transport(params, self.transport_registry)
            self.context = TaskContext(params=params, _transport=transport)

            if not self.implements_task():
                raise TaskNotImplementedError()

            logger.info("Running task", extra={"task": type(self).__name__})
            return Success(self.call_task(params))
        except TaskError as e:
            logger.info("Task failed", extra={"kind": e.kind, "error_message": e.msg})
            return Failure(e)
        except Exception as e:
            logger.exception("Task failed with an unexpected error")
            return Failure(UnexpectedError.from_exception(e))

    @classmethod
    def execute(cls, stdin: TextIO | None = None) -> Outcome:
        try:
            params = read_params(stdin)
        except TaskError as e:
            logger.info("Could not read parameters", extra={"kind": e.kind})
            return Failure(e)
        return cls().dispatch(params)

    @classmethod
    def main(cls, stdin: TextIO | None = None, stdout: TextIO | None = None) -> int:
        """Run the task once and write its envelope. Returns the exit code."""

        stdout = sys.stdout if stdout is None else stdout
        envelope, outcome = render(cls.execute(stdin))
        stdout.write(envelope)
        stdout.flush()
        return outcome.exit_code

    @classmethod
    def run(cls) -> NoReturn:
        """Process entry point: configure logging, run, and exit."""

        settings = load_settings()
        configure_logging(settings.log_level, settings.log_format, settings.debug)
        raise SystemExit(cls.main())
