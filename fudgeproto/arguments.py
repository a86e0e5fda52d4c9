"""Translation of generator options into compiler command-line flags."""

from __future__ import annotations

from typing import List, Optional, Sequence

from .config import GeneratorConfig
from .discovery import resolve_search_dirs

OUTPUT_LANGUAGE = "Java"


def build_arguments(
    config: GeneratorConfig, search_dirs: Optional[Sequence[str]] = None
) -> List[str]:
    """Return the global flags for the compiler, in the order it expects them.

    ``search_dirs`` defaults to resolving ``config.search_dirs`` against
    the filesystem.
    """
    source_dir = config.source_dir or ""
    if search_dirs is None:
        search_dirs = resolve_search_dirs(config)

    args = [f"-d{source_dir}", f"-s{source_dir}", f"-l{OUTPUT_LANGUAGE}"]
    if config.fields_mutable is not None:
        args.append("-fmutable" if config.fields_mutable else "-freadonly")
    if config.fields_required is not None:
        args.append("-frequired" if config.fields_required else "-foptional")
    args.extend(f"-p{directory}" for directory in search_dirs)
    if config.equals:
        args.append("-Xequals")
    if config.to_string:
        args.append("-XtoString")
    if config.hash_code:
        args.append("-XhashCode")
    if config.fudge_context is not None:
        args.append(f"-XfudgeContext={config.fudge_context}")
    if config.git_ignore:
        args.append("-XgitIgnore")
    if config.file_header is not None:
        args.append(f"-XfileHeader={config.file_header}")
    if config.file_footer is not None:
        args.append(f"-XfileFooter={config.file_footer}")
    verbosity_flag = config.verbosity.flag
    if verbosity_flag:
        args.append(verbosity_flag)
    return args


__all__ = ["OUTPUT_LANGUAGE", "build_arguments"]
