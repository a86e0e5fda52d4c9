"""Build plugin that runs the Fudge-Proto compiler over a source tree."""

from .config import ConfigError, GeneratorConfig, load_config
from .generator import BuildFailure, Generator

__all__ = ["BuildFailure", "ConfigError", "Generator", "GeneratorConfig", "load_config"]
