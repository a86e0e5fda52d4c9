"""Configuration loading for the Fudge-Proto generator (.fudgeproto.yml)."""

from __future__ import annotations

import os
import shlex
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

import yaml

from .models import Verbosity

CONFIG_FILENAME = ".fudgeproto.yml"
ENV_PREFIX = "FUDGE_PROTO_"
DEFAULT_COMPILER: Tuple[str, ...] = ("fudge-proto",)
LIST_SEPARATOR = ";"


class ConfigError(RuntimeError):
    """Raised when the generator is misconfigured and cannot start."""


@dataclass(frozen=True)
class GeneratorConfig:
    """Options for a single generator invocation."""

    source_dir: Optional[str] = None
    excludes: Optional[str] = None
    search_dirs: Optional[str] = None
    verbose: bool = False
    list_files: bool = False
    rebuild_all: bool = False
    git_ignore: bool = False
    equals: bool = True
    hash_code: bool = True
    to_string: bool = True
    fudge_context: Optional[str] = None
    fields_mutable: Optional[bool] = None
    fields_required: Optional[bool] = None
    file_header: Optional[str] = None
    file_footer: Optional[str] = None
    compiler: Tuple[str, ...] = DEFAULT_COMPILER

    @property
    def exclude_patterns(self) -> List[str]:
        return _split_list(self.excludes)

    @property
    def search_dir_entries(self) -> List[str]:
        return _split_list(self.search_dirs)

    @property
    def verbosity(self) -> Verbosity:
        return Verbosity.from_flags(self.verbose, self.list_files)

    @property
    def list_each_file(self) -> bool:
        """True when per-file found/ignored/excluded lines should be echoed."""
        return self.verbose and self.list_files

    def validate(self) -> None:
        if not self.source_dir:
            raise ConfigError("Source directory must not be null")


# Aliases accepted for the parameter names used by the Maven plugin.
_ALIASES = {
    "sourceDir": "source_dir",
    "searchDir": "search_dirs",
    "search_dir": "search_dirs",
    "listFiles": "list_files",
    "rebuildAll": "rebuild_all",
    "gitIgnore": "git_ignore",
    "hashCode": "hash_code",
    "toString": "to_string",
    "fudgeContext": "fudge_context",
    "fieldsMutable": "fields_mutable",
    "fieldsRequired": "fields_required",
    "fileHeader": "file_header",
    "fileFooter": "file_footer",
}

_BOOL_FIELDS = (
    "verbose",
    "list_files",
    "rebuild_all",
    "git_ignore",
    "equals",
    "hash_code",
    "to_string",
)
_TRISTATE_FIELDS = ("fields_mutable", "fields_required")
_TEXT_FIELDS = ("fudge_context", "file_header", "file_footer")
_LIST_FIELDS = ("excludes", "search_dirs")
_FIELD_NAMES = tuple(item.name for item in fields(GeneratorConfig))


def load_config(
    project_path: Path | str | None = None,
    overrides: Mapping[str, Any] | None = None,
    environ: Mapping[str, str] | None = None,
) -> GeneratorConfig:
    """Build the configuration from the config file, environment and overrides.

    Later sources win: defaults, then ``.fudgeproto.yml``, then
    ``FUDGE_PROTO_*`` environment variables, then ``overrides``. A relative
    ``source_dir`` in the file is taken relative to the file's directory;
    elsewhere it is taken relative to the current directory.
    """
    config_file = _resolve_config_path(Path(project_path) if project_path else Path.cwd())
    values: Dict[str, Any] = {}

    if config_file.exists():
        data = _read_config(config_file)
        file_values = _parse_values(_normalise_keys(data), source=config_file.name)
        if file_values.get("source_dir"):
            file_values["source_dir"] = _absolute(file_values["source_dir"], config_file.parent)
        values.update(file_values)

    env_values = _parse_values(_environment_values(environ), source="environment")
    if env_values.get("source_dir"):
        env_values["source_dir"] = _absolute(env_values["source_dir"], Path.cwd())
    values.update(env_values)

    if overrides:
        given = {key: value for key, value in overrides.items() if value is not None}
        override_values = _parse_values(_normalise_keys(given), source="overrides")
        if override_values.get("source_dir"):
            override_values["source_dir"] = _absolute(override_values["source_dir"], Path.cwd())
        values.update(override_values)

    return GeneratorConfig(**values)


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if not config_path.exists():
        raise ConfigError(f"Config file not found: {config_path}")
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Unable to read {path.name}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ConfigError(f"{path.name} must contain a mapping at the root")
    return loaded


def _environment_values(environ: Mapping[str, str] | None) -> Dict[str, Any]:
    environ = os.environ if environ is None else environ
    values: Dict[str, Any] = {}
    for name in _FIELD_NAMES:
        raw = environ.get(f"{ENV_PREFIX}{name.upper()}")
        if raw is not None and raw != "":
            values[name] = raw
    return values


def _normalise_keys(data: Mapping[str, Any]) -> Dict[str, Any]:
    result: Dict[str, Any] = {}
    for key, value in data.items():
        name = _ALIASES.get(str(key), str(key))
        if name in _FIELD_NAMES:
            result[name] = value
    return result


def _parse_values(data: Mapping[str, Any], *, source: str) -> Dict[str, Any]:
    values: Dict[str, Any] = {}
    for key, raw in data.items():
        if raw is None:
            continue
        if key in _BOOL_FIELDS or key in _TRISTATE_FIELDS:
            parsed = _as_bool(raw)
            if parsed is None:
                raise ConfigError(f"Invalid boolean for '{key}' in {source}: {raw!r}")
            values[key] = parsed
        elif key in _LIST_FIELDS:
            values[key] = _as_joined_list(raw)
        elif key in _TEXT_FIELDS or key == "source_dir":
            values[key] = _as_str(raw)
        elif key == "compiler":
            values[key] = _as_command(raw, source=source)
    return values


def _absolute(value: str, base: Path) -> str:
    path = Path(value).expanduser()
    if not path.is_absolute():
        path = base / path
    return str(path.resolve())


def _split_list(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [item for item in value.split(LIST_SEPARATOR) if item]


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_joined_list(value: Any) -> Optional[str]:
    if isinstance(value, str):
        return value
    if isinstance(value, Sequence):
        items = [str(item) for item in value if isinstance(item, (str, int, float))]
        return LIST_SEPARATOR.join(items) if items else None
    return None


def _as_command(value: Any, *, source: str) -> Tuple[str, ...]:
    if isinstance(value, str):
        command = tuple(shlex.split(value))
    elif isinstance(value, Sequence):
        command = tuple(str(item) for item in value)
    else:
        command = ()
    if not command:
        raise ConfigError(f"Compiler command in {source} must not be empty")
    return command


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "DEFAULT_COMPILER",
    "GeneratorConfig",
    "load_config",
]
