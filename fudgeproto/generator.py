"""Pipeline that turns a source tree into one Fudge-Proto compiler run."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional

from .arguments import build_arguments
from .compiler import ProtoCompiler, load_compiler
from .config import ConfigError, GeneratorConfig
from .discovery import ProtoScanner
from .logging import get_logger
from .models import GenerationResult


class BuildFailure(RuntimeError):
    """Raised when the compiler ran but generation did not succeed."""


class Generator:
    """Checks configuration, assembles arguments and invokes the compiler once."""

    def __init__(
        self,
        compiler: ProtoCompiler | None = None,
        *,
        loader: Callable[[GeneratorConfig], Optional[ProtoCompiler]] = load_compiler,
    ) -> None:
        self._compiler = compiler
        self._loader = loader
        self.logger = get_logger("generator")

    def run(self, config: GeneratorConfig, *, dry_run: bool = False) -> GenerationResult:
        """Generate sources for every out-of-date proto file under the source root.

        With ``dry_run`` the argument list is assembled and returned without
        checking for or invoking the compiler.
        """
        config.validate()
        compiler = None if dry_run else self._checked_compiler(config)

        source_dir = config.source_dir or ""
        args = build_arguments(config)
        seeded = len(args)
        count = ProtoScanner(config).add_files(Path(source_dir), args)
        self.logger.debug("Discovered %d proto file(s) under %s", count, source_dir)
        if config.verbose:
            self.logger.info("Commandline: %s", " ".join(args))

        result = GenerationResult(arguments=args, file_count=count, files=args[seeded:])
        if compiler is None:
            self.logger.info("Dry-run completed; compiler not invoked")
            return result

        self.logger.info("Fudge-Proto generator started, directory: %s", source_dir)
        try:
            status = compiler.compile(list(args))
        except Exception as exc:
            raise BuildFailure(f"Error while running Fudge-Proto generator: {exc}") from exc
        result.status = status
        if status != 0:
            raise BuildFailure("Compilation failed")
        self.logger.info("Fudge-Proto generator completed")
        return result

    def _checked_compiler(self, config: GeneratorConfig) -> ProtoCompiler:
        compiler = self._compiler if self._compiler is not None else self._loader(config)
        if compiler is None:
            raise ConfigError(
                f"Fudge-Proto compiler not found: {' '.join(config.compiler)}"
            )
        for method in ("check_environment", "compile"):
            if not callable(getattr(compiler, method, None)):
                raise ConfigError(
                    f"Fudge-Proto compiler {type(compiler).__name__} does not provide {method}()"
                )
        if not compiler.check_environment():
            raise ConfigError("Fudge-Proto compiler is not available in this environment")
        return compiler


__all__ = ["BuildFailure", "Generator"]
