"""CLI entrypoint: run a task class given as `module:Class`."""

from __future__ import annotations

import argparse
import importlib
import logging
import os
import sys

from task_helper import __version__
from task_helper.config import load_settings
from task_helper.logging import configure_logging
from task_helper.task import TaskHelper

logger = logging.getLogger(__name__)


def load_task_class(target: str) -> type[TaskHelper]:
    """Import `module:Class` and check that it is a task.

    Raises:
        ValueError: If the target is malformed or not a TaskHelper subclass.
        ImportError: If the module cannot be imported.
    """

    module_name, sep, attr = target.partition(":")
    if not sep or not module_name or not attr:
        raise ValueError(f"Task must be given as 'module:Class', got {target!r}")

    module = importlib.import_module(module_name)
    obj = module
    for part in attr.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError:
            raise ValueError(f"{module_name} has no attribute {attr!r}") from None

    if not (isinstance(obj, type) and issubclass(obj, TaskHelper)):
        raise ValueError(f"{target} is not a TaskHelper subclass")
    return obj


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="task-helper",
        description="Run a task: JSON parameters on stdin, one JSON result on stdout",
    )
    parser.add_argument("--version", action="version", version=f"task-helper {__version__}")
    parser.add_argument(
        "--path",
        action="append",
        default=None,
        help="Directory to import the task from (repeatable; defaults to the current directory)",
    )
    parser.add_argument("task", help="Task class in the form 'package.module:ClassName'")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    settings = load_settings()
    configure_logging(settings.log_level, settings.log_format, settings.debug)

    for path in reversed(args.path or [os.getcwd()]):
        path = os.path.abspath(path)
        if path not in sys.path:
            sys.path.insert(0, path)

    try:
        task_cls = load_task_class(args.task)
    except (ImportError, ValueError) as e:
        logger.error("Could not load task", extra={"target": args.task})
        print(f"task-helper: {e}", file=sys.stderr)
        return 2

    return task_cls.main()


if __name__ == "__main__":
    raise SystemExit(main())
