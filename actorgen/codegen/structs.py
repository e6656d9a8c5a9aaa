# =============================================================================
# actorgen - GameActor code generation for Rust-style declarations
#
# Made with ❤️
#
# This project is genuinely built on love, dedication, and care.
#
# “What is made with love is never made in vain.”
# “Love is the reason this code exists; logic is how it survives.”
#
# -----------------------------------------------------------------------------
# Author: M1778
# Profile: https://github.com/M1778M/
#
# -----------------------------------------------------------------------------
# Copyright (C) 2025 M1778
#
# This file is part of actorgen.
#
# actorgen is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# actorgen is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with actorgen.  If not, see <https://www.gnu.org/licenses/>.
#
# -----------------------------------------------------------------------------
# “Code fades. Love leaves a signature.”
# =============================================================================
from .essentials import *


# ---------------------------------------------------------------------------
# <Method name=declare_type args=[<Compiler>, <TypeDefinition>]>
# <Description>
# Pass 1 (Scouting).
#    - Structs get an opaque identified type so that later declarations can
#      embed them in any order.
#    - Enums are lowered right away; they only need their own variants.
# </Description>
def declare_type(compiler: Compiler, ast: TypeDefinition):
    name = ast.name
    if name in compiler.struct_types or name in compiler.enum_types:
        compiler.errors.error(ast, f"Type '{name}' is defined multiple times.",
                              hint="each type may only be declared once per unit", type_name=name)

    if ast.keyword == "union":
        compiler.errors.error(ast, f"Union '{name}' is not supported by the backend.",
                              hint="use a struct with named fields", type_name=name)

    if ast.keyword == "enum":
        compiler.compile_enum_declaration(ast)
        return

    compiler.struct_types[name] = compiler.context.get_identified_type(name)
    compiler.struct_asts[name] = ast


# ---------------------------------------------------------------------------
# <Method name=compile_struct args=[<Compiler>, <TypeDefinition>]>
# <Description>
# Pass 2: Defines Memory Layout.
# Named fields are indexed in declaration order, tuple fields by position and
# unit structs get an empty body.
# </Description>
def compile_struct(compiler: Compiler, ast: TypeDefinition):
    name = ast.name
    struct_ty = compiler.struct_types[name]

    member_types = []
    field_indices = {}

    if ast.shape is Shape.NAMED:
        for index, field in enumerate(ast.fields):
            if field.name in field_indices:
                compiler.errors.error(
                    field, f"Field '{field.name}' is already declared in struct '{name}'.",
                    hint="field names must be unique", type_name=name)
            field_indices[field.name] = index
            member_types.append(compiler.convert_type(field.type, in_field=True))
    elif ast.shape is Shape.TUPLE:
        for index, element in enumerate(ast.elements):
            field_indices[str(index)] = index
            member_types.append(compiler.convert_type(element.type, in_field=True))

    struct_ty.set_body(*member_types)
    compiler.struct_field_indices[name] = field_indices
    return struct_ty


# ---------------------------------------------------------------------------
# <Method name=compile_struct_field_access args=[<Compiler>, <ir.Value>, <str>, <Node>, <bool>]>
# <Description>
# Resolves `<ptr>.<field>` to a GEP. Returns the field pointer (L-Value)
# when `want_pointer` is set, otherwise loads it.
# A field the struct does not declare is an UndefinedField error.
# </Description>
def compile_struct_field_access(compiler: Compiler, struct_ptr: ir.Value, field_name: str, node: Node = None,
                                want_pointer: bool = False):
    # 1. Handle Auto-Dereferencing (Pointer to Pointer to Struct)
    if isinstance(struct_ptr.type, ir.PointerType) and \
       isinstance(struct_ptr.type.pointee, ir.PointerType):
           struct_ptr = compiler.builder.load(struct_ptr, name="deref_struct")

    # 2. Get LLVM Type
    struct_llvm_type = getattr(struct_ptr.type, "pointee", None)
    if not isinstance(struct_llvm_type, ir.IdentifiedStructType):
        compiler.errors.error(
            node,
            f"Cannot access field '{field_name}': Not a struct type.",
            hint="Ensure the left-hand side is a valid struct instance.")

    type_name = struct_llvm_type.name

    # 3. Find Field Index
    indices = compiler.struct_field_indices.get(type_name, {})
    if field_name not in indices:
        known = ", ".join(f"`{f}`" for f in indices) or "none"
        compiler.errors.error(
            node,
            f"no field `{field_name}` on type `{type_name}`",
            hint=f"available fields: {known}",
            kind=UndefinedField,
            type_name=type_name)

    idx = indices[field_name]

    # 4. GEP (Get Element Pointer)
    zero = ir.Constant(ir.IntType(32), 0)
    idx_val = ir.Constant(ir.IntType(32), idx)
    field_ptr = compiler.builder.gep(struct_ptr, [zero, idx_val], inbounds=True, name=f"field_{field_name}")

    if want_pointer:
        return field_ptr

    # 5. Load (R-Value)
    return compiler.builder.load(field_ptr, name=f"val_{field_name}")
