import argparse
from collections.abc import Callable
from pathlib import Path

import pytest

from actorgen.ast2.nodes import TypeDefinition
from actorgen.utils.helpers import parse

FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures"


@pytest.fixture
def fixture_path() -> Callable[[str], Path]:
    def _fixture_path(name: str) -> Path:
        return FIXTURES_DIR / name

    return _fixture_path


@pytest.fixture
def read_fixture(fixture_path: Callable[[str], Path]) -> Callable[[str], str]:
    def _read_fixture(name: str) -> str:
        return fixture_path(name).read_text(encoding="utf-8")

    return _read_fixture


@pytest.fixture
def make_record() -> Callable[..., TypeDefinition]:
    """Parses `struct <name> { <fields> }` from `(name, type)` pairs."""
    def _make_record(name: str = "Enemy", fields: tuple[tuple[str, str], ...] = (), pub: bool = True) -> TypeDefinition:
        body = ", ".join(f"pub {field}: {type_name}" for field, type_name in fields)
        prefix = "pub " if pub else ""
        return parse(f"{prefix}struct {name} {{ {body} }}")

    return _make_record


@pytest.fixture
def write_source(tmp_path: Path) -> Callable[[str, str], Path]:
    def _write_source(text: str, name: str = "unit.rs") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write_source


@pytest.fixture
def make_args() -> Callable[..., argparse.Namespace]:
    def _make_args(**overrides: object) -> argparse.Namespace:
        base_args: dict[str, object] = {
            "allow_missing_fields": False,
            "no_color": False,
            "verbose": False,
            "indent": 4,
        }
        base_args.update(overrides)
        return argparse.Namespace(**base_args)

    return _make_args
