from collections.abc import Callable
from pathlib import Path

import pytest

from actorgen import cli


def test_build_argument_parser_exposes_subcommands_and_defaults() -> None:
    parser = cli.build_argument_parser()

    args = parser.parse_args(["expand", "unit.rs"])
    assert args.command == "expand"
    assert args.file == Path("unit.rs")
    assert args.output is None
    assert args.allow_missing_fields is False
    assert args.indent == 4

    assert parser.parse_args(["check", "unit.rs", "--emit-ir"]).emit_ir is True
    assert parser.parse_args(["interface"]).command == "interface"


def test_a_subcommand_is_required() -> None:
    with pytest.raises(SystemExit) as exc_info:
        cli.main([])

    assert exc_info.value.code == 2


def test_interface_prints_the_trait(capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["interface", "--indent", "2"]) == 0

    out = capsys.readouterr().out
    assert out.startswith("pub trait GameActor {\n  fn get_type_name(&self) -> &str;\n")


def test_expand_writes_to_stdout(capsys: pytest.CaptureFixture[str], fixture_path: Callable[[str], Path]) -> None:
    assert cli.main(["expand", str(fixture_path("enemy.rs"))]) == 0

    out = capsys.readouterr().out
    assert "pub struct Enemy {\n    pub health: u64,\n    pub mana: u64,\n}" in out
    assert "impl GameActor for Enemy {" in out


def test_expand_to_output_file(
    capsys: pytest.CaptureFixture[str], fixture_path: Callable[[str], Path], tmp_path: Path
) -> None:
    output = tmp_path / "expanded.rs"

    assert cli.main(["expand", str(fixture_path("adventurer.rs")), "-o", str(output), "--verbose"]) == 0

    captured = capsys.readouterr()
    assert captured.out == ""
    assert f"[actorgen] wrote {output}" in captured.err
    assert "impl GameActor for Adventurer {" in output.read_text(encoding="utf-8")


def test_expand_reports_compile_errors(
    capsys: pytest.CaptureFixture[str], fixture_path: Callable[[str], Path]
) -> None:
    path = fixture_path("kind.rs")

    assert cli.main(["expand", str(path), "--no-color"]) == 1

    captured = capsys.readouterr()
    assert captured.out == ""
    assert "error: `#[add_game_actor_attributes]` has to be used with structs with named fields" in captured.err
    assert f"{path}:8:10" in captured.err


def test_expand_missing_fields_flag(
    capsys: pytest.CaptureFixture[str], write_source: Callable[..., Path]
) -> None:
    path = write_source("#[derive(GameActor)]\nstruct Enemy {}\n")

    assert cli.main(["expand", str(path), "--no-color"]) == 1
    assert "has no field `health`" in capsys.readouterr().err

    assert cli.main(["expand", str(path), "--allow-missing-fields"]) == 0
    assert "&self.health" in capsys.readouterr().out


def test_missing_file_is_a_config_error(capsys: pytest.CaptureFixture[str], tmp_path: Path) -> None:
    assert cli.main(["expand", str(tmp_path / "missing.rs")]) == 2

    err = capsys.readouterr().err
    assert "Config error [PATH_NOT_FOUND]" in err
    assert "Hint:" in err


def test_bad_indent_is_a_config_error(capsys: pytest.CaptureFixture[str], fixture_path: Callable[[str], Path]) -> None:
    assert cli.main(["expand", str(fixture_path("enemy.rs")), "--indent", "0"]) == 2
    assert "Config error [INVALID_INDENT]" in capsys.readouterr().err

    assert cli.main(["interface", "--indent", "12"]) == 2


def test_parse_prints_the_model_or_canonical_text(
    capsys: pytest.CaptureFixture[str], write_source: Callable[..., Path]
) -> None:
    path = write_source("pub struct Enemy { pub level : u8 }")

    assert cli.main(["parse", str(path)]) == 0
    assert capsys.readouterr().out.startswith("TypeDefinition(Name: Enemy, Keyword: struct, Kind: RECORD")

    assert cli.main(["parse", str(path), "--emit"]) == 0
    assert capsys.readouterr().out == "pub struct Enemy {\n    pub level: u8,\n}\n"


def test_parse_reports_malformed_syntax(
    capsys: pytest.CaptureFixture[str], write_source: Callable[..., Path]
) -> None:
    path = write_source("struct Enemy<T> {}")

    assert cli.main(["parse", str(path), "--no-color"]) == 1

    err = capsys.readouterr().err
    assert "error: unexpected '<' `<` in struct definition" in err
    assert "= help: generic parameters and lifetimes are not supported on declarations" in err


def test_check_accepts_expanded_code(
    capsys: pytest.CaptureFixture[str], fixture_path: Callable[[str], Path], tmp_path: Path
) -> None:
    expanded = tmp_path / "expanded.rs"
    source = fixture_path("enemy.rs").read_text(encoding="utf-8")
    # Only items are compiled; drop the `use` lines.
    expanded.write_text("\n".join(line for line in source.splitlines() if not line.startswith("use ")), encoding="utf-8")
    assert cli.main(["expand", str(expanded), "-o", str(expanded)]) == 0

    assert cli.main(["check", str(expanded)]) == 0
    assert capsys.readouterr().out == f"{expanded}: ok (1 struct(s), 5 method(s))\n"

    assert cli.main(["check", str(expanded), "--emit-ir"]) == 0
    assert "Enemy__get_health" in capsys.readouterr().out


def test_check_reports_the_undefined_field(
    capsys: pytest.CaptureFixture[str], fixture_path: Callable[[str], Path]
) -> None:
    assert cli.main(["check", str(fixture_path("standalone_enemy.rs")), "--no-color"]) == 1

    err = capsys.readouterr().err
    assert "error: no field `health` on type `Enemy`" in err
    assert err.count("error:") == 1


def test_unwritable_output_is_a_config_error(
    capsys: pytest.CaptureFixture[str], fixture_path: Callable[[str], Path], tmp_path: Path
) -> None:
    output = tmp_path / "missing" / "expanded.rs"

    assert cli.main(["expand", str(fixture_path("enemy.rs")), "-o", str(output)]) == 2

    captured = capsys.readouterr()
    assert "Config error [OUTPUT_NOT_WRITABLE]" in captured.err
    assert "Hint:" in captured.err
    assert captured.out == ""
    assert not output.exists()
