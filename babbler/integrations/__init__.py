"""Chat surfaces that feed the babbler."""

from .console import ConsoleReplySink, run_console

__all__ = ["ConsoleReplySink", "run_console"]
