from concurrent.futures import ThreadPoolExecutor

import pytest

from actorgen.ast2.nodes import (Attribute, ImplBlock, Literal, PathType, Receiver, Shape,
                                 TraitDeclaration, TypeDefinition, TypeKind, Visibility)
from actorgen.compiletime.errors import MalformedSyntax
from actorgen.utils.helpers import parse, parse_code, parse_item


def test_parse_named_struct() -> None:
    defn = parse("pub struct Adventurer {\n    pub items: HashMap<String, String>,\n    level: u8,\n}")

    assert isinstance(defn, TypeDefinition)
    assert defn.name == "Adventurer"
    assert defn.kind is TypeKind.RECORD
    assert defn.visibility is Visibility.PUBLIC
    assert defn.field_names() == ["items", "level"]
    assert str(defn.fields[0].type) == "HashMap<String, String>"
    assert defn.fields[0].visibility is Visibility.PUBLIC
    assert defn.fields[1].visibility is Visibility.DEFAULT


def test_parse_empty_struct_without_trailing_comma() -> None:
    defn = parse("struct Enemy {}")

    assert defn.kind is TypeKind.RECORD
    assert defn.fields == []
    assert defn.visibility is Visibility.DEFAULT


@pytest.mark.parametrize(
    ("code", "keyword", "shape"),
    [
        ("struct Point(pub u8, u8);", "struct", Shape.TUPLE),
        ("struct Marker;", "struct", Shape.UNIT),
        ("union Bits { a: u32, b: f32 }", "union", Shape.NAMED),
        ("enum Kind { Adventurer, Enemy }", "enum", Shape.NAMED),
    ],
)
def test_everything_but_named_structs_is_other(code: str, keyword: str, shape: Shape) -> None:
    defn = parse(code)

    assert defn.keyword == keyword
    assert defn.shape is shape
    assert defn.kind is TypeKind.OTHER


def test_parse_enum_variants_and_discriminants() -> None:
    defn = parse("enum Kind { Adventurer = 1, Enemy, Boss(u8), Npc { name: String }, Ghost = -3 }")

    assert [v.name for v in defn.variants] == ["Adventurer", "Enemy", "Boss", "Npc", "Ghost"]
    assert [v.discriminant for v in defn.variants] == [1, None, None, None, -3]
    assert defn.variants[2].shape is Shape.TUPLE
    assert defn.variants[3].fields[0].name == "name"


@pytest.mark.parametrize(
    ("type_text", "expected"),
    [
        ("u64", "u64"),
        ("std::string::String", "std::string::String"),
        ("Vec<HashMap<String, u8>>", "Vec<HashMap<String, u8>>"),
        ("&str", "&str"),
        ("&mut u64", "&mut u64"),
        ("[u8; 4]", "[u8; 4]"),
        ("[u8]", "[u8]"),
        ("(u8, bool)", "(u8, bool)"),
        ("(u8,)", "(u8,)"),
        ("(u8)", "u8"),
        ("()", "()"),
    ],
)
def test_field_types_render_canonically(type_text: str, expected: str) -> None:
    defn = parse(f"struct A {{ x: {type_text} }}")

    assert str(defn.fields[0].type) == expected


def test_path_type_name_and_arguments() -> None:
    field_type = parse("struct A { x: std::collections::HashMap<String, u8> }").fields[0].type

    assert isinstance(field_type, PathType)
    assert field_type.path == ["std", "collections", "HashMap"]
    assert field_type.base_name == "HashMap"
    assert [str(a) for a in field_type.args] == ["String", "u8"]


def test_attributes_in_all_meta_forms() -> None:
    defn = parse(
        '#[add_game_actor_attributes]\n'
        '#[derive(GameActor, Debug)]\n'
        '#[serde(rename = "hero", default)]\n'
        '#[doc = "A hero"]\n'
        'struct Hero { #[serde(skip)] cache: u8 }'
    )

    assert [a.name for a in defn.attributes] == ["add_game_actor_attributes", "derive", "serde", "doc"]
    derive = defn.get_attr("derive")
    assert [a.name for a in derive.args] == ["GameActor", "Debug"]
    serde = defn.get_attr("serde")
    assert serde.args[0] == Attribute("rename", value=Literal("hero", "str"))
    assert defn.get_attr("doc").value.value == "A hero"
    assert defn.fields[0].has_attr("serde")


def test_remove_attr_reports_whether_anything_was_dropped() -> None:
    defn = parse("#[add_game_actor_attributes] #[derive(Debug)] struct A {}")

    assert defn.remove_attr("add_game_actor_attributes") is True
    assert defn.remove_attr("add_game_actor_attributes") is False
    assert [a.name for a in defn.attributes] == ["derive"]


@pytest.mark.parametrize(
    ("code", "visibility"),
    [
        ("pub(crate) struct A {}", Visibility.CRATE),
        ("pub(super) struct A {}", Visibility.SUPER),
    ],
)
def test_restricted_visibility(code: str, visibility: Visibility) -> None:
    assert parse(code).visibility is visibility


def test_node_locations_point_at_the_name() -> None:
    defn = parse("\n\n    pub struct Goblin {\n        pub loot: u8,\n    }")

    assert (defn.lineno, defn.col_offset) == (3, 16)
    assert (defn.fields[0].lineno, defn.fields[0].col_offset) == (4, 13)


def test_structural_equality_ignores_locations() -> None:
    assert parse("struct A { x: u8 }") == parse("\n\n struct   A {\n x : u8, }")
    assert parse("struct A { x: u8 }") != parse("struct A { x: u16 }")


def test_parse_trait_and_impl_items() -> None:
    program = parse_code(
        "trait Named { fn name(&self) -> &str; }\n"
        "impl Named for A {\n"
        "    fn name(&self) -> &str { return stringify!(A) }\n"
        "}\n"
    )

    trait, impl = program.items
    assert isinstance(trait, TraitDeclaration)
    assert trait.methods[0].is_signature
    assert isinstance(impl, ImplBlock)
    assert (impl.trait_name, impl.target) == ("Named", "A")
    assert impl.methods[0].receiver is Receiver.REF


def test_parse_method_receivers_and_params() -> None:
    impl = parse_item(
        "impl A {\n"
        "    fn a(self) {}\n"
        "    fn b(mut self, x: u8,) {}\n"
        "    fn c(&mut self, mut amount: u64) -> () { self.x = amount; }\n"
        "    fn d(x: u8, y: &str) -> u8 { x }\n"
        "}"
    )

    receivers = [m.receiver for m in impl.methods]
    assert receivers == [Receiver.VALUE, Receiver.MUT_VALUE, Receiver.REF_MUT, None]
    assert impl.methods[1].params[0].name == "x"
    assert impl.methods[2].params[0].mutable is True
    assert [p.name for p in impl.methods[3].params] == ["x", "y"]


def test_program_keeps_item_order_and_filename() -> None:
    program = parse_code("struct A {}\nenum B { X }\nstruct C;", filename="game.rs")

    assert [item.name for item in program.items] == ["A", "B", "C"]
    assert all(item.filename == "game.rs" for item in program.items)


def test_parse_empty_program() -> None:
    assert parse_code("  // nothing here\n").items == []


def test_syntax_error_carries_location() -> None:
    with pytest.raises(MalformedSyntax) as exc_info:
        parse("struct A {\n    x u64,\n}", filename="a.rs")

    err = exc_info.value
    assert (err.lineno, err.col) == (2, 7)
    assert err.filename == "a.rs"
    assert "unexpected identifier `u64` in struct definition" in err.message


def test_keyword_typo_gets_a_hint() -> None:
    with pytest.raises(MalformedSyntax) as exc_info:
        parse("strcut A {}")

    assert exc_info.value.hint == "did you mean 'struct'?"


@pytest.mark.parametrize(
    "code",
    [
        "struct Wrapper<T> { inner: T }",
        "struct Named<'a> { name: &'a str }",
    ],
)
def test_generics_and_lifetimes_are_rejected(code: str) -> None:
    with pytest.raises(MalformedSyntax) as exc_info:
        parse(code)

    assert "generic" in exc_info.value.hint


def test_end_of_input_names_the_open_delimiter() -> None:
    with pytest.raises(MalformedSyntax) as exc_info:
        parse("struct A { x: u8,")

    assert exc_info.value.message == "unexpected end of input in struct definition"
    assert exc_info.value.hint == "unclosed brace '{'"


def test_unknown_character_is_malformed() -> None:
    with pytest.raises(MalformedSyntax) as exc_info:
        parse("struct A { x: u8 ` }")

    assert exc_info.value.message == "unknown character ```"
    assert exc_info.value.col == 18


@pytest.mark.parametrize(
    ("code", "message"),
    [
        ("", "expected an item, found end of input"),
        ("struct A {}\nstruct B {}", "expected a single item, found more than one"),
        ("trait T {}", "expected a type declaration (`struct`, `enum` or `union`)"),
    ],
)
def test_parse_wants_exactly_one_declaration(code: str, message: str) -> None:
    with pytest.raises(MalformedSyntax) as exc_info:
        parse(code)

    assert exc_info.value.message == message


def test_pub_impl_is_rejected() -> None:
    with pytest.raises(MalformedSyntax) as exc_info:
        parse_code("pub impl A {}")

    assert "not permitted on impl blocks" in exc_info.value.message


def test_parsing_is_safe_from_several_threads() -> None:
    sources = [f"struct S{i} {{ pub f{i}: u{8 * (1 + i % 4)} }}" for i in range(24)]

    with ThreadPoolExecutor(max_workers=6) as pool:
        results = list(pool.map(parse, sources))

    assert [d.name for d in results] == [f"S{i}" for i in range(24)]
    assert [d.fields[0].name for d in results] == [f"f{i}" for i in range(24)]


def test_doc_comments_become_doc_attributes() -> None:
    defn = parse("/// An enemy.\nstruct Enemy {\n    /** Hit points. */\n    pub health: u64,\n}")

    assert defn.attributes == [Attribute("doc", value=Literal(" An enemy.", "doc"))]
    assert defn.fields[0].get_attr("doc").value == Literal(" Hit points. ", "block_doc")


def test_doc_comments_on_methods_and_variants() -> None:
    impl = parse_item("impl A {\n    /// Says hi.\n    pub fn hi(&self) {}\n}")
    kind = parse("enum Kind {\n    /// The hero.\n    Adventurer,\n}")

    assert impl.methods[0].get_attr("doc").value.value == " Says hi."
    assert impl.methods[0].visibility is Visibility.PUBLIC
    assert kind.variants[0].get_attr("doc").value.value == " The hero."
