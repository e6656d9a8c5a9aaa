from .essentials import *


# ---------------------------------------------------------------------------
# <Method name=convert_type args=[<Compiler>, <TypeReference>, <bool>]>
# <Description>
# Maps a host type to its LLVM representation.
# Integers keep their width (signedness lives in the type name, not in LLVM),
# declared structs are laid out by value, enums are i32 and every other named
# type (String, HashMap<..>, str) is an opaque i8 handle.
# `in_field` turns `()` into an empty struct so it can occupy a field slot.
# </Description>
def convert_type(compiler: Compiler, type_ref: TypeReference, in_field: bool = False) -> ir.Type:
    if isinstance(type_ref, ReferenceType):
        pointee = compiler.convert_type(type_ref.pointee, in_field=True)
        return pointee.as_pointer()

    if isinstance(type_ref, TupleType):
        if type_ref.is_unit:
            return ir.LiteralStructType([]) if in_field else ir.VoidType()
        return ir.LiteralStructType([compiler.convert_type(e, in_field=True) for e in type_ref.elements])

    if isinstance(type_ref, ArrayType):
        return ir.ArrayType(compiler.convert_type(type_ref.element, in_field=True), type_ref.length)

    if isinstance(type_ref, SliceType):
        return ir.IntType(8).as_pointer()

    if isinstance(type_ref, PathType):
        name = type_ref.name
        if name in INTEGER_WIDTHS:
            return ir.IntType(INTEGER_WIDTHS[name])
        if name == "bool":
            return ir.IntType(8)
        if name == "f32":
            return ir.FloatType()
        if name == "f64":
            return ir.DoubleType()
        if name == "str":
            # &str is an i8 pointer
            return ir.IntType(8)
        if name in compiler.struct_types:
            return compiler.struct_types[name]
        if name in compiler.enum_types:
            return compiler.enum_types[name]
        return ir.IntType(8).as_pointer()

    compiler.errors.error(type_ref, f"Unsupported type '{type_ref}'.")


def convert_return_type(compiler: Compiler, type_ref: Optional[TypeReference]) -> ir.Type:
    if type_ref is None:
        return ir.VoidType()
    return compiler.convert_type(type_ref)


def is_unit(type_ref: Optional[TypeReference]) -> bool:
    return type_ref is None or (isinstance(type_ref, TupleType) and type_ref.is_unit)


def type_text(type_ref: Optional[TypeReference]) -> str:
    """Canonical text of a type; a missing return type reads as `()`."""
    return "()" if type_ref is None else str(type_ref)
