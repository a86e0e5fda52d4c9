"""Core data models shared across fudgeproto components."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class Verbosity(Enum):
    """Compiler output level derived from the verbose and list-files options."""

    NONE = None
    LOW = "-v"
    LIST = "-vv"
    FULL = "-vvv"

    @classmethod
    def from_flags(cls, verbose: bool, list_files: bool) -> "Verbosity":
        if verbose:
            return cls.FULL if list_files else cls.LOW
        if list_files:
            return cls.LIST
        return cls.NONE

    @property
    def flag(self) -> Optional[str]:
        return self.value


@dataclass
class GenerationResult:
    """Outcome of one generator invocation."""

    arguments: List[str]
    file_count: int
    status: Optional[int] = None
    files: List[str] = field(default_factory=list)
