import argparse
from collections.abc import Callable
from dataclasses import FrozenInstanceError
from pathlib import Path

import pytest

from actorgen.config import (ConfigError, ExpansionConfig, MAX_INDENT, VALID_ERROR_CODES,
                             validate_indent, validate_path_exists, write_output)


def _assert_config_code(exc_info: pytest.ExceptionInfo[Exception], code: str) -> None:
    err = exc_info.value
    assert getattr(err, "code") == code
    assert getattr(err, "code") in VALID_ERROR_CODES


def test_defaults() -> None:
    config = ExpansionConfig()

    assert config.validate_fields is True
    assert config.color is True
    assert config.verbose is False
    assert config.indent == 4


def test_config_is_frozen() -> None:
    config = ExpansionConfig()

    with pytest.raises(FrozenInstanceError):
        config.indent = 2  # type: ignore[misc]


def test_from_args_maps_flags(make_args: Callable[..., argparse.Namespace]) -> None:
    config = ExpansionConfig.from_args(make_args(allow_missing_fields=True, no_color=True, verbose=True, indent=2))

    assert config == ExpansionConfig(validate_fields=False, color=False, verbose=True, indent=2)


def test_from_args_tolerates_subcommands_without_expansion_flags() -> None:
    assert ExpansionConfig.from_args(argparse.Namespace()) == ExpansionConfig()


@pytest.mark.parametrize("indent", [0, -1, MAX_INDENT + 1, True, "4", 2.0])
def test_invalid_indent(indent: object) -> None:
    with pytest.raises(ConfigError) as exc_info:
        ExpansionConfig(indent=indent)  # type: ignore[arg-type]

    _assert_config_code(exc_info, "INVALID_INDENT")
    assert exc_info.value.suggestion is not None


@pytest.mark.parametrize("indent", [1, 4, MAX_INDENT])
def test_valid_indent(indent: int) -> None:
    assert validate_indent(indent) == indent


def test_validate_path_exists(tmp_path: Path) -> None:
    source = tmp_path / "unit.rs"
    source.write_text("struct A {}\n", encoding="utf-8")

    assert validate_path_exists(source, "FILE") == source


@pytest.mark.parametrize("name", [None, "missing.rs", "."])
def test_validate_path_exists_rejects(tmp_path: Path, name: str | None) -> None:
    path = None if name is None else tmp_path / name

    with pytest.raises(ConfigError) as exc_info:
        validate_path_exists(path, "FILE")

    _assert_config_code(exc_info, "PATH_NOT_FOUND")


def test_unknown_error_code_is_a_programming_error() -> None:
    with pytest.raises(ValueError, match="Unknown config error code"):
        ConfigError("NOPE", "message")


def test_write_output(tmp_path: Path) -> None:
    target = tmp_path / "expanded.rs"

    assert write_output(target, "struct A {}\n") == target
    assert target.read_text(encoding="utf-8") == "struct A {}\n"


def test_write_output_to_a_missing_directory(tmp_path: Path) -> None:
    with pytest.raises(ConfigError) as exc_info:
        write_output(tmp_path / "missing" / "expanded.rs", "struct A {}\n")

    _assert_config_code(exc_info, "OUTPUT_NOT_WRITABLE")
    assert isinstance(exc_info.value.__cause__, OSError)
