"""Discovery of proto files and search directories under a source root."""

from __future__ import annotations

import os
from pathlib import Path
from typing import List, Optional

from .config import ConfigError, GeneratorConfig
from .logging import get_logger
from .patterns import matches_any

PROTO_SUFFIX = ".proto"
GENERATED_SUFFIX = ".java"

# Prefix that makes a search directory relative to the nearest ancestor of
# the source root containing it.
RELATIVE_MARKERS = ("..{RELATIVE}../", "..{RELATIVE}..\\")
_MARKER_LENGTH = len(RELATIVE_MARKERS[0])

logger = get_logger("discovery")


def is_proto_file(name: str) -> bool:
    index = name.rfind(".")
    return index >= 0 and name[index:] == PROTO_SUFFIX


def generated_output_path(source: Path) -> Path:
    """Return the Java file the compiler writes for ``source``."""
    return source.with_name(source.name[: -len(PROTO_SUFFIX)] + GENERATED_SUFFIX)


def is_up_to_date(source: Path) -> bool:
    """True when the generated output exists and is strictly newer than ``source``."""
    target = generated_output_path(source)
    if not target.exists():
        return False
    return target.stat().st_mtime_ns > source.stat().st_mtime_ns


def relative_path(path: Path | str, source_dir: str) -> str:
    """Strip the source root and one leading separator from the absolute ``path``.

    Both sides are normalised first. Paths outside ``source_dir`` are
    returned as absolute paths.
    """
    root = os.path.abspath(source_dir)
    absolute = os.path.abspath(str(path))
    if absolute.startswith(root):
        absolute = absolute[len(root):]
        if absolute.startswith(("/", "\\")):
            absolute = absolute[1:]
    return absolute


def resolve_search_dir(entry: str, source_dir: str) -> Optional[str]:
    """Resolve one configured search directory.

    Returns ``None`` when the entry points at the source root itself.
    """
    resolved = entry
    if resolved.startswith(RELATIVE_MARKERS):
        resolved = resolved[_MARKER_LENGTH:]
        for base in Path(source_dir).parents:
            candidate = base / resolved
            if candidate.exists():
                resolved = str(candidate)
                break

    try:
        same_as_root = Path(resolved).resolve() == Path(source_dir).resolve()
    except (OSError, RuntimeError) as exc:
        raise ConfigError(f"Unable to resolve search directory: {entry}") from exc
    if same_as_root:
        return None
    if not Path(resolved).exists():
        raise ConfigError(f"Unable to find search directory: {entry}")
    return resolved


def resolve_search_dirs(config: GeneratorConfig) -> List[str]:
    source_dir = config.source_dir or ""
    resolved_dirs: List[str] = []
    for entry in config.search_dir_entries:
        resolved = resolve_search_dir(entry, source_dir)
        if resolved is None:
            logger.debug("Skipping search directory %s; it is the source directory", entry)
            continue
        if config.verbose:
            logger.info("Searching %s", resolved)
        resolved_dirs.append(resolved)
    return resolved_dirs


class ProtoScanner:
    """Walks the source root collecting proto files that need compiling."""

    def __init__(self, config: GeneratorConfig) -> None:
        self._config = config
        self._source_dir = config.source_dir or ""
        self._root = os.path.abspath(self._source_dir)
        self._excludes = config.exclude_patterns

    def scan(self) -> List[str]:
        """Return the relative paths of every proto file to compile."""
        names: List[str] = []
        self.add_files(Path(self._source_dir), names)
        return names

    def add_files(self, directory: Path, names: List[str]) -> int:
        """Append matching files below ``directory`` to ``names`` and return how many."""
        if not directory.exists():
            return 0
        echo = self._config.list_each_file
        count = 0
        for path in directory.iterdir():
            if path.is_dir():
                count += self.add_files(path, names)
                continue
            if not is_proto_file(path.name):
                continue
            if not self._config.rebuild_all and is_up_to_date(path):
                if echo:
                    logger.info("Ignoring %s", path)
                continue
            rel_path = relative_path(path, self._root)
            if self._excludes and matches_any(self._excludes, rel_path):
                if echo:
                    logger.info("Excluding %s", path)
                continue
            if echo:
                logger.info("Found %s", path)
            names.append(rel_path)
            count += 1
        return count


__all__ = [
    "ProtoScanner",
    "generated_output_path",
    "is_proto_file",
    "is_up_to_date",
    "relative_path",
    "resolve_search_dir",
    "resolve_search_dirs",
]
