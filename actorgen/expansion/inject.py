from ..ast2.nodes import FieldDefinition, PathType, TypeKind, Shape, Visibility
from ..compiletime.errors import NotARecordType

INJECT_MARKER = "add_game_actor_attributes"

# (name, type) pairs appended, in this order, to every injected record.
INJECTED_FIELDS = (("health", "u64"), ("mana", "u64"))


def describe_kind(defn):
    if defn.keyword == "enum":
        return "an enum"
    if defn.keyword == "union":
        return "a union"
    if defn.shape is Shape.TUPLE:
        return "a tuple struct"
    if defn.shape is Shape.UNIT:
        return "a unit struct"
    return "a struct"


def injected_field(name, type_name):
    return FieldDefinition(name, PathType(type_name), visibility=Visibility.PUBLIC)


def inject(defn):
    """
    Appends `pub health: u64` and `pub mana: u64` to a record's fields.

    Mutates `defn` in place and returns it. Existing fields, including ones
    already named `health` or `mana`, are left alone.
    """
    if defn.kind is not TypeKind.RECORD:
        raise NotARecordType(
            f"`#[{INJECT_MARKER}]` has to be used with structs with named fields, "
            f"but `{defn.name}` is {describe_kind(defn)}",
            hint="declare it as `struct Name { ... }`",
            lineno=defn.lineno, col=defn.col_offset,
            filename=getattr(defn, "filename", None), type_name=defn.name)
    for name, type_name in INJECTED_FIELDS:
        defn.fields.append(injected_field(name, type_name))
    return defn
