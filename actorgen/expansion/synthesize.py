from ..ast2.nodes import *
from ..compiletime.errors import MissingRequiredField
from .inject import INJECT_MARKER, INJECTED_FIELDS
from .interface import TRAIT_NAME, GET_TYPE_NAME, GET_HEALTH, GET_MANA, SET_HEALTH, SET_MANA


# <Method name=getter args=[method_name, field]>
# <Description>
# fn <method_name>(&self) -> &u64 { &self.<field> }
def getter(method_name, field):
    body = Block(tail=Borrow(FieldAccess(SelfRef(), field)))
    return MethodDefinition(method_name, Receiver.REF, return_type=ReferenceType(PathType("u64")), body=body)


# <Method name=setter args=[method_name, field]>
# <Description>
# fn <method_name>(&mut self, amount: u64) -> () { self.<field> = amount; }
def setter(method_name, field):
    assign = Assign(FieldAccess(SelfRef(), field), Identifier("amount"))
    return MethodDefinition(
        method_name, Receiver.REF_MUT,
        params=[Param("amount", PathType("u64"))],
        return_type=unit_type(),
        body=Block([ExpressionStatement(assign)]))


def type_name_getter(name):
    body = Block(tail=ReturnStatement(MacroCall("stringify", [Identifier(name)]), terminated=False))
    return MethodDefinition(GET_TYPE_NAME, Receiver.REF, return_type=ReferenceType(PathType("str")), body=body)


def synthesize(defn):
    """
    Builds `impl GameActor for <Name>` from the declaration's name alone.

    The field accesses are spliced in by name; nothing checks that `health`
    and `mana` exist. See check_required_fields.
    """
    block = GeneratedBlock(TRAIT_NAME, defn.name, [
        type_name_getter(defn.name),
        getter(GET_HEALTH, "health"),
        getter(GET_MANA, "mana"),
        setter(SET_HEALTH, "health"),
        setter(SET_MANA, "mana"),
    ])
    return block.located_like(defn)


def check_required_fields(defn):
    """Raises MissingRequiredField unless `health` and `mana` are declared as `u64`."""
    for name, type_name in INJECTED_FIELDS:
        field = defn.get_field(name)
        if field is None:
            raise MissingRequiredField(
                f"`{defn.name}` has no field `{name}`, which `{TRAIT_NAME}` reads and writes",
                hint=f"add `#[{INJECT_MARKER}]` above the declaration or declare `pub {name}: {type_name}`",
                lineno=defn.lineno, col=defn.col_offset,
                filename=getattr(defn, "filename", None), type_name=defn.name)
        if str(field.type) != type_name:
            raise MissingRequiredField(
                f"field `{name}` of `{defn.name}` is `{field.type}`, expected `{type_name}`",
                hint=f"declare it as `{name}: {type_name}`",
                lineno=field.lineno or defn.lineno, col=field.col_offset or defn.col_offset,
                filename=getattr(defn, "filename", None), type_name=defn.name)
    return defn
