from collections.abc import Callable

import pytest

from actorgen.ast2.nodes import PathType, TypeDefinition, Visibility
from actorgen.compiletime.errors import NotARecordType
from actorgen.emitter import emit
from actorgen.expansion import inject, INJECTED_FIELDS
from actorgen.utils.helpers import parse


def _fields(defn: TypeDefinition) -> list[tuple[str, str]]:
    return [(f.name, str(f.type)) for f in defn.fields]


def test_inject_appends_health_and_mana_after_existing_fields() -> None:
    defn = parse("pub struct Adventurer { pub items: HashMap<String, String> }")

    inject(defn)

    assert _fields(defn) == [
        ("items", "HashMap<String, String>"),
        ("health", "u64"),
        ("mana", "u64"),
    ]


def test_inject_into_empty_record(make_record: Callable[..., TypeDefinition]) -> None:
    defn = inject(make_record("Enemy"))

    assert _fields(defn) == list(INJECTED_FIELDS)
    assert emit(defn) == "pub struct Enemy {\n    pub health: u64,\n    pub mana: u64,\n}"


def test_injected_fields_are_public_u64() -> None:
    defn = inject(parse("struct Enemy {}"))

    for field in defn.fields:
        assert field.visibility is Visibility.PUBLIC
        assert field.type == PathType("u64")
        assert field.attributes == []


def test_inject_mutates_and_returns_the_same_declaration(make_record: Callable[..., TypeDefinition]) -> None:
    defn = make_record("Enemy", fields=(("level", "u8"),))

    assert inject(defn) is defn
    assert defn.name == "Enemy"
    assert defn.visibility is Visibility.PUBLIC


def test_inject_keeps_attributes_and_name() -> None:
    defn = parse("#[derive(Debug)] pub(crate) struct Npc { name: String }")

    inject(defn)

    assert [a.name for a in defn.attributes] == ["derive"]
    assert defn.visibility is Visibility.CRATE
    assert defn.fields[0].visibility is Visibility.DEFAULT


def test_inject_does_not_deduplicate_existing_fields(make_record: Callable[..., TypeDefinition]) -> None:
    defn = inject(make_record("Enemy", fields=(("health", "u32"),)))

    assert _fields(defn) == [("health", "u32"), ("health", "u64"), ("mana", "u64")]


def test_injecting_twice_appends_twice() -> None:
    defn = inject(inject(parse("struct Enemy {}")))

    assert [f.name for f in defn.fields] == ["health", "mana", "health", "mana"]


@pytest.mark.parametrize(
    ("code", "described"),
    [
        ("pub enum Kind { Adventurer, Enemy }", "an enum"),
        ("union Bits { a: u32 }", "a union"),
        ("struct Point(u8, u8);", "a tuple struct"),
        ("struct Marker;", "a unit struct"),
    ],
)
def test_inject_rejects_everything_but_records(code: str, described: str) -> None:
    defn = parse(code)
    before = emit(defn)

    with pytest.raises(NotARecordType) as exc_info:
        inject(defn)

    err = exc_info.value
    assert err.message == (
        f"`#[add_game_actor_attributes]` has to be used with structs with named fields, "
        f"but `{defn.name}` is {described}"
    )
    assert err.type_name == defn.name
    assert (err.lineno, err.col) == (defn.lineno, defn.col_offset)
    assert emit(defn) == before
