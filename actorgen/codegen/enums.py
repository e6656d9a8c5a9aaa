from .essentials import *


# ---------------------------------------------------------------------------
# <Method name=compile_enum_declaration args=[<Compiler>, <TypeDefinition>]>
# <Description>
# Lowers a C-like enum to i32 member constants.
# Explicit discriminants are honoured; the rest auto-increment from the
# previous value. Variants carrying data have no lowering.
# </Description>
def compile_enum_declaration(compiler: Compiler, ast: TypeDefinition):
    enum_name = ast.name
    llvm_enum_underlying_type = ir.IntType(ENUM_UNDERLYING_BITS)

    member_map = {}
    next_value = 0
    for variant in ast.variants:
        member_name = variant.name
        if variant.shape is not Shape.UNIT:
            compiler.errors.error(
                variant,
                f"Enum '{enum_name}' variant '{member_name}' carries data, which the backend cannot lay out.",
                hint="only enums with unit variants are supported",
                type_name=enum_name)

        if member_name in member_map:
            compiler.errors.error(variant, f"Enum '{enum_name}' has duplicate member '{member_name}'.",
                                  type_name=enum_name)

        if variant.discriminant is not None:
            # Explicit Value: A = 5
            assigned_value = variant.discriminant
            member_val = ir.Constant(llvm_enum_underlying_type, assigned_value)
            next_value = assigned_value + 1
        else:
            # Implicit Value: B (Auto-increment)
            member_val = ir.Constant(llvm_enum_underlying_type, next_value)
            next_value += 1

        member_map[member_name] = member_val

    # Register in Compiler State
    compiler.enum_types[enum_name] = llvm_enum_underlying_type
    compiler.enum_members[enum_name] = member_map


def enum_value(compiler: Compiler, enum_name: str, member_name: str) -> int:
    """Integer value of `enum_name::member_name`."""
    if enum_name not in compiler.enum_members:
        raise KeyError(f"Enum '{enum_name}' is not defined.")
    members = compiler.enum_members[enum_name]
    if member_name not in members:
        raise KeyError(f"Enum '{enum_name}' has no member '{member_name}'. "
                       f"Available members: {', '.join(members.keys())}")
    return members[member_name].constant
