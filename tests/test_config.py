"""Tests for fudgeproto.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from fudgeproto.config import DEFAULT_COMPILER, ConfigError, GeneratorConfig, load_config


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path, environ={})

    assert isinstance(config, GeneratorConfig)
    assert config.source_dir is None
    assert config.excludes is None
    assert config.search_dirs is None
    assert config.verbose is False
    assert config.list_files is False
    assert config.rebuild_all is False
    assert config.git_ignore is False
    assert config.equals is True
    assert config.hash_code is True
    assert config.to_string is True
    assert config.fudge_context is None
    assert config.fields_mutable is None
    assert config.fields_required is None
    assert config.file_header is None
    assert config.file_footer is None
    assert config.compiler == DEFAULT_COMPILER


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    (tmp_path / "protos").mkdir()
    config_file = tmp_path / ".fudgeproto.yml"
    config_file.write_text(
        """
source_dir: protos
excludes:
  - "legacy/**"
  - "sub/*"
search_dirs: "../shared;..{RELATIVE}../common"
verbose: true
list_files: "yes"
rebuild_all: false
git_ignore: true
hash_code: false
fudge_context: FudgeContext.GLOBAL_DEFAULT
fields_mutable: false
file_header: |
  // Copyright Acme
file_footer: "// end"
compiler: "java -jar fudge-proto.jar"
""",
        encoding="utf-8",
    )

    config = load_config(config_file, environ={})

    assert config.source_dir == str((tmp_path / "protos").resolve())
    assert config.excludes == "legacy/**;sub/*"
    assert config.exclude_patterns == ["legacy/**", "sub/*"]
    assert config.search_dir_entries == ["../shared", "..{RELATIVE}../common"]
    assert config.verbose is True
    assert config.list_files is True
    assert config.rebuild_all is False
    assert config.git_ignore is True
    assert config.equals is True
    assert config.hash_code is False
    assert config.fudge_context == "FudgeContext.GLOBAL_DEFAULT"
    assert config.fields_mutable is False
    assert config.fields_required is None
    assert config.file_header == "// Copyright Acme\n"
    assert config.file_footer == "// end"
    assert config.compiler == ("java", "-jar", "fudge-proto.jar")


def test_load_config_accepts_maven_parameter_names(tmp_path: Path) -> None:
    (tmp_path / ".fudgeproto.yml").write_text(
        "sourceDir: /abs/src\nlistFiles: true\nhashCode: false\nfieldsRequired: true\nsearchDir: x;y\n",
        encoding="utf-8",
    )

    config = load_config(tmp_path, environ={})

    assert config.source_dir == str(Path("/abs/src").resolve())
    assert config.list_files is True
    assert config.hash_code is False
    assert config.fields_required is True
    assert config.search_dir_entries == ["x", "y"]


def test_environment_overrides_file_and_overrides_win(tmp_path: Path) -> None:
    (tmp_path / ".fudgeproto.yml").write_text(
        "source_dir: /from/file\nverbose: false\nexcludes: a/*\n",
        encoding="utf-8",
    )
    environ = {
        "FUDGE_PROTO_VERBOSE": "true",
        "FUDGE_PROTO_EXCLUDES": "b/*",
        "FUDGE_PROTO_FIELDS_MUTABLE": "1",
    }

    config = load_config(
        tmp_path,
        overrides={"excludes": "c/*", "rebuild_all": None},
        environ=environ,
    )

    assert config.source_dir == str(Path("/from/file").resolve())
    assert config.verbose is True
    assert config.fields_mutable is True
    assert config.excludes == "c/*"
    assert config.rebuild_all is False


def test_relative_override_source_dir_uses_cwd(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)

    config = load_config(tmp_path, overrides={"source_dir": "src/main/java"}, environ={})

    assert config.source_dir == str((tmp_path / "src" / "main" / "java").resolve())


def test_invalid_boolean_raises(tmp_path: Path) -> None:
    (tmp_path / ".fudgeproto.yml").write_text("verbose: maybe\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="verbose"):
        load_config(tmp_path, environ={})


def test_non_mapping_root_raises(tmp_path: Path) -> None:
    (tmp_path / ".fudgeproto.yml").write_text("- a\n- b\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="mapping"):
        load_config(tmp_path, environ={})


def test_invalid_yaml_raises(tmp_path: Path) -> None:
    (tmp_path / ".fudgeproto.yml").write_text("source_dir: [unclosed\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="Failed to parse"):
        load_config(tmp_path, environ={})


def test_empty_compiler_raises(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="Compiler command"):
        load_config(tmp_path, overrides={"compiler": "  "}, environ={})


def test_validate_requires_source_dir() -> None:
    with pytest.raises(ConfigError, match="Source directory must not be null"):
        GeneratorConfig().validate()
    with pytest.raises(ConfigError):
        GeneratorConfig(source_dir="").validate()
    GeneratorConfig(source_dir="/s").validate()


def test_config_is_immutable() -> None:
    config = GeneratorConfig(source_dir="/s")
    with pytest.raises(AttributeError):
        config.verbose = True  # type: ignore[misc]


def test_explicit_missing_config_file_raises(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="Config file not found"):
        load_config(tmp_path / "typo.yml", environ={})


def test_directory_without_config_file_uses_defaults(tmp_path: Path) -> None:
    assert load_config(tmp_path, environ={}) == GeneratorConfig()
