"""Adapters around the external Fudge-Proto compiler."""

from __future__ import annotations

import shutil
import subprocess
from typing import Callable, Protocol, Sequence, runtime_checkable

from .config import DEFAULT_COMPILER, GeneratorConfig
from .logging import get_logger

logger = get_logger("compiler")


@runtime_checkable
class ProtoCompiler(Protocol):
    """Capability offered by the schema compiler."""

    def check_environment(self) -> bool:
        """Return True when the compiler can run in this environment."""

    def compile(self, arguments: Sequence[str]) -> int:
        """Run the compiler and return its status; zero means success."""


class CommandLineCompiler:
    """Runs the compiler as a child process."""

    def __init__(
        self,
        command: Sequence[str] = DEFAULT_COMPILER,
        *,
        runner: Callable[[Sequence[str]], int] | None = None,
    ) -> None:
        if not command:
            raise ValueError("Compiler command must not be empty")
        self.command = tuple(command)
        self._runner = runner or self._default_runner

    def check_environment(self) -> bool:
        return shutil.which(self.command[0]) is not None

    def compile(self, arguments: Sequence[str]) -> int:
        args = [*self.command, *arguments]
        logger.debug("Running %s", self.command[0])
        return self._runner(args)

    @staticmethod
    def _default_runner(args: Sequence[str]) -> int:
        completed = subprocess.run(list(args), check=False)
        return completed.returncode


def load_compiler(config: GeneratorConfig) -> CommandLineCompiler:
    """Return the adapter for the configured command.

    Availability is not checked here; callers run ``check_environment()`` once.
    """
    return CommandLineCompiler(config.compiler)


__all__ = ["CommandLineCompiler", "ProtoCompiler", "load_compiler"]
