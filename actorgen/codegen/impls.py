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
from .types import type_text
from ..emitter import SourceEmitter


def _signature(method):
    return SourceEmitter().signature(method, 0)


# ---------------------------------------------------------------------------
# <Method name=compile_trait args=[<Compiler>, <TraitDeclaration>]>
# <Description>
# Registers a trait so impls of it can be checked. Re-declaring a trait with
# the same method signatures (e.g. the built-in GameActor) is accepted; doc
# comments may differ.
# </Description>
def compile_trait(compiler: Compiler, ast: TraitDeclaration):
    existing = compiler.traits.get(ast.name)
    if existing is not None:
        if [_signature(m) for m in existing.methods] == [_signature(m) for m in ast.methods]:
            return
        compiler.errors.error(ast, f"Trait '{ast.name}' is defined multiple times.",
                              hint="the existing definition has a different method list")
    compiler.traits[ast.name] = ast


# ---------------------------------------------------------------------------
# <Method name=_verify_trait_implementation args=[<Compiler>, <ImplBlock>, <TraitDeclaration>]>
# <Description>
# Verifies that the impl provides every required method of the trait with
# the same receiver, parameter types and return type, and nothing else.
# Types are compared by their canonical text.
# </Description>
def _verify_trait_implementation(compiler: Compiler, ast: ImplBlock, trait: TraitDeclaration):
    target = ast.target
    declared = {m.name: m for m in trait.methods}
    implemented = {m.name: m for m in ast.methods}

    # 1. Everything in the impl must belong to the trait
    for impl in ast.methods:
        if impl.name not in declared:
            compiler.errors.error(
                impl,
                f"method `{impl.name}` is not a member of trait `{trait.name}`",
                hint="move it to an inherent `impl` block",
                type_name=target)

    # 2. Check each requirement
    for req in trait.required_methods():
        # A. Check Existence
        if req.name not in implemented:
            compiler.errors.error(
                ast,
                f"not all trait items implemented, missing: `{req.name}` in impl of `{trait.name}` for `{target}`",
                hint=f"Missing implementation: {_signature(req)}",
                type_name=target)

        impl = implemented[req.name]

        # B. Check Receiver
        if req.receiver != impl.receiver:
            expected = req.receiver.value if req.receiver else "no receiver"
            found = impl.receiver.value if impl.receiver else "no receiver"
            compiler.errors.error(
                impl,
                f"method `{req.name}` has a `{found}` receiver, but the trait declares `{expected}`",
                hint=f"Expected signature: {_signature(req)}",
                type_name=target)

        # C. Check Parameter Count
        if len(req.params) != len(impl.params):
            compiler.errors.error(
                impl,
                f"Method '{req.name}' parameter count mismatch.",
                hint=f"Expected {len(req.params)} parameters, got {len(impl.params)}.",
                type_name=target)

        # D. Check Parameter Types
        for req_param, impl_param in zip(req.params, impl.params):
            if type_text(req_param.type) != type_text(impl_param.type):
                compiler.errors.error(
                    impl_param,
                    f"method `{req.name}` has an incompatible type for parameter `{impl_param.name}`",
                    hint=f"Trait expects '{req_param.type}', impl provides '{impl_param.type}'.",
                    type_name=target)

        # E. Check Return Type
        if type_text(req.return_type) != type_text(impl.return_type):
            compiler.errors.error(
                impl,
                f"Method '{req.name}' return type mismatch.",
                hint=f"Trait expects '{type_text(req.return_type)}', impl provides '{type_text(impl.return_type)}'.",
                type_name=target)


# ---------------------------------------------------------------------------
# <Method name=compile_impl args=[<Compiler>, <ImplBlock>]>
# <Description>
# Checks trait conformance (for `impl Trait for Type`) and lowers each method.
# </Description>
def compile_impl(compiler: Compiler, ast: ImplBlock):
    target = ast.target
    if target not in compiler.struct_types:
        if target in compiler.enum_types:
            compiler.errors.error(ast, f"impl blocks for enum `{target}` are not supported by the backend.",
                                  type_name=target)
        compiler.errors.error(ast, f"cannot find type `{target}` in this scope",
                              hint="declare the struct in the same unit", type_name=target)

    if ast.trait_name is not None:
        trait = compiler.traits.get(ast.trait_name)
        if trait is None:
            compiler.errors.error(ast, f"cannot find trait `{ast.trait_name}` in this scope", type_name=target)
        for trait_name, _ in compiler.impls.get(target, []):
            if trait_name == ast.trait_name:
                compiler.errors.error(
                    ast, f"conflicting implementations of trait `{trait_name}` for type `{target}`",
                    type_name=target)
        _verify_trait_implementation(compiler, ast, trait)

    for method in ast.methods:
        compiler.compile_method(target, method)

    compiler.impls.setdefault(target, []).append((ast.trait_name, ast))


# ---------------------------------------------------------------------------
# <Method name=compile_method args=[<Compiler>, <str>, <MethodDefinition>]>
# <Description>
# Lowers one method to `<Type>__<method>`. The receiver, if any, is passed
# as a pointer to the struct; parameters are plain SSA values.
# </Description>
def compile_method(compiler: Compiler, target: str, method: MethodDefinition):
    fn_name = f"{target}{METHOD_SEPARATOR}{method.name}"
    if fn_name in compiler.methods:
        compiler.errors.error(method, f"duplicate definitions with name `{method.name}` for `{target}`",
                              type_name=target)

    struct_ty = compiler.struct_types[target]
    arg_types = []
    if method.receiver is not None:
        arg_types.append(struct_ty.as_pointer())
    seen = set()
    for param in method.params:
        if param.name in seen:
            compiler.errors.error(param, f"identifier `{param.name}` is bound more than once in this parameter list")
        seen.add(param.name)
        arg_types.append(compiler.convert_type(param.type))

    ret_type = compiler.convert_return_type(method.return_type)
    func = ir.Function(compiler.module, ir.FunctionType(ret_type, arg_types), name=fn_name)
    compiler.methods[fn_name] = (func, method)

    previous_function = compiler.function
    previous_method = compiler.current_method
    compiler.function = func
    compiler.current_method = method
    compiler.builder = ir.IRBuilder(func.append_basic_block("entry"))
    compiler.enter_scope()
    try:
        args = iter(func.args)
        if method.receiver is not None:
            self_arg = next(args)
            self_arg.name = "self"
            mutable = method.receiver in (Receiver.REF_MUT, Receiver.MUT_VALUE)
            compiler.current_scope.define("self", self_arg, PathType(target), mutable=mutable)
        for param, arg in zip(method.params, args):
            arg.name = param.name
            compiler.current_scope.define(param.name, arg, param.type, mutable=param.mutable)

        body = method.body
        for stmt in body.statements:
            if compiler.builder.block.is_terminated:
                # Anything after `return` is unreachable.
                break
            compiler.compile_statement(stmt)

        if not compiler.builder.block.is_terminated:
            if body.tail is not None:
                tail = body.tail
                value = tail.value if isinstance(tail, ReturnStatement) else tail
                compiler.compile_return(value, tail)
            elif isinstance(ret_type, ir.VoidType):
                compiler.builder.ret_void()
            else:
                compiler.errors.error(
                    method, f"mismatched types: `{method.name}` returns `{method.return_type}` but its body has no value",
                    hint="end the body with an expression or a `return`", type_name=target)
    finally:
        compiler.exit_scope()
        compiler.builder = None
        compiler.function = previous_function
        compiler.current_method = previous_method
    return func


# ==============================================================================
#                                 STATEMENTS
# ==============================================================================

def compile_statement(compiler: Compiler, stmt: Node):
    if isinstance(stmt, ReturnStatement):
        return compiler.compile_return(stmt.value, stmt)
    if isinstance(stmt, ExpressionStatement):
        return compiler.compile_expression(stmt.expression)
    compiler.errors.error(stmt, f"Unsupported statement: {type(stmt).__name__}")


def compile_return(compiler: Compiler, value_node: Optional[Node], node: Node):
    ret_type = compiler.function.function_type.return_type
    if isinstance(ret_type, ir.VoidType):
        value = compiler.compile_expression(value_node) if value_node is not None else None
        if value is not None:
            compiler.errors.error(node, f"mismatched types: expected `()`, found `{value.type}`")
        compiler.builder.ret_void()
        return

    if value_node is None:
        compiler.errors.error(node, f"mismatched types: expected a `{compiler.current_method.return_type}` value, found `()`")
    value = compiler.compile_expression(value_node, expected=ret_type)
    compiler.builder.ret(compiler.coerce(value, ret_type, value_node))


def coerce(compiler: Compiler, value: Optional[ir.Value], target_type: ir.Type, node: Node) -> ir.Value:
    if value is None:
        compiler.errors.error(node, f"mismatched types: expected `{target_type}`, found `()`")
    if value.type == target_type:
        return value
    if isinstance(value.type, ir.IntType) and isinstance(target_type, ir.IntType):
        if isinstance(value, ir.Constant):
            return ir.Constant(target_type, value.constant)
        if value.type.width > target_type.width:
            return compiler.builder.trunc(value, target_type)
        return compiler.builder.zext(value, target_type)
    compiler.errors.error(node, f"mismatched types: expected `{target_type}`, found `{value.type}`")


# ==============================================================================
#                                 EXPRESSIONS
# ==============================================================================

def compile_expression(compiler: Compiler, node: Node, expected: Optional[ir.Type] = None):
    """Returns the value of `node`, or None for expressions of type `()`."""
    if isinstance(node, SelfRef):
        return compiler.resolve_self(node)

    if isinstance(node, Identifier):
        value = compiler.current_scope.resolve(node.name)
        if value is None:
            compiler.errors.error(node, f"cannot find value `{node.name}` in this scope")
        return value

    if isinstance(node, FieldAccess):
        struct_ptr = compiler.compile_place(node.target)
        return compiler.compile_struct_field_access(struct_ptr, node.field, node)

    if isinstance(node, Borrow):
        return compiler.compile_borrow(node)

    if isinstance(node, Assign):
        return compiler.compile_assign(node)

    if isinstance(node, MacroCall):
        if node.name != "stringify":
            compiler.errors.error(node, f"cannot find macro `{node.name}` in this scope",
                                  hint="only `stringify!` is available in generated code")
        emitter = SourceEmitter()
        return compiler.create_global_string(", ".join(emitter.expression(a) for a in node.args))

    if isinstance(node, Literal):
        return compiler.compile_literal(node, expected)

    if isinstance(node, UnitLiteral):
        return None

    compiler.errors.error(node, f"Unsupported expression: {type(node).__name__}")


def resolve_self(compiler: Compiler, node: Node) -> ir.Value:
    value = compiler.current_scope.resolve("self")
    if value is None:
        compiler.errors.error(node, "`self` is not available here",
                              hint="add a `&self` receiver to the method")
    return value


def compile_place(compiler: Compiler, node: Node) -> ir.Value:
    """Pointer to the struct or field that `node` names."""
    if isinstance(node, SelfRef):
        return compiler.resolve_self(node)
    if isinstance(node, FieldAccess):
        struct_ptr = compiler.compile_place(node.target)
        return compiler.compile_struct_field_access(struct_ptr, node.field, node, want_pointer=True)
    if isinstance(node, Identifier):
        value = compiler.compile_expression(node)
        if isinstance(value.type, ir.PointerType):
            return value
    compiler.errors.error(node, "expected a place expression (`self`, a field or a reference)")


def _root_binding(node: Node) -> Optional[str]:
    while isinstance(node, FieldAccess):
        node = node.target
    if isinstance(node, SelfRef):
        return "self"
    if isinstance(node, Identifier):
        return node.name
    return None


def _require_mutable(compiler: Compiler, node: Node, action: str):
    root = _root_binding(node)
    info = compiler.current_scope._resolve_info(root) if root else None
    if info is not None and not info.mutable:
        hint = "declare the receiver as `&mut self`" if root == "self" else f"declare it as `mut {root}`"
        compiler.errors.error(node, f"cannot {action} `{SourceEmitter().expression(node)}`, as `{root}` is not mutable",
                              hint=hint)


def compile_borrow(compiler: Compiler, node: Borrow) -> ir.Value:
    target = node.target
    if isinstance(target, (SelfRef, FieldAccess)):
        if node.mutable:
            compiler._require_mutable(target, "borrow as mutable")
        return compiler.compile_place(target)

    # Temporaries are spilled to the stack.
    value = compiler.compile_expression(target)
    if value is None:
        compiler.errors.error(node, "cannot borrow a `()` value")
    slot = compiler.builder.alloca(value.type, name="tmp")
    compiler.builder.store(value, slot)
    return slot


def compile_assign(compiler: Compiler, node: Assign):
    target = node.target
    if isinstance(target, Identifier):
        compiler.errors.error(node, f"cannot assign twice to immutable variable `{target.name}`")
    if not isinstance(target, FieldAccess):
        compiler.errors.error(node, "invalid left-hand side of assignment")

    compiler._require_mutable(target, "assign to")
    ptr = compiler.compile_place(target)
    value = compiler.compile_expression(node.value, expected=ptr.type.pointee)
    compiler.builder.store(compiler.coerce(value, ptr.type.pointee, node.value), ptr)
    return None


def _unescape(text: str) -> str:
    if "\\" not in text:
        return text
    return text.encode("utf-8").decode("unicode_escape")


def compile_literal(compiler: Compiler, node: Literal, expected: Optional[ir.Type] = None) -> ir.Value:
    if node.kind == "int":
        ty = expected if isinstance(expected, ir.IntType) else ir.IntType(64)
        return ir.Constant(ty, node.value)
    if node.kind == "char":
        return ir.Constant(ir.IntType(32), ord(_unescape(node.value)[0]))
    if node.kind == "float":
        ty = expected if isinstance(expected, (ir.FloatType, ir.DoubleType)) else ir.DoubleType()
        return ir.Constant(ty, node.value)
    if node.kind == "raw":
        text = node.value[1:].strip("#")[1:-1]
        return compiler.create_global_string(text)
    return compiler.create_global_string(_unescape(node.value))


def create_global_string(compiler: Compiler, text: str) -> ir.Value:
    """NUL-terminated private constant; returns an i8 pointer to its first byte."""
    if text not in compiler.global_strings:
        data = bytearray(text.encode("utf-8") + b"\00")
        str_ty = ir.ArrayType(ir.IntType(8), len(data))
        gv = ir.GlobalVariable(compiler.module, str_ty, name=f".str.{len(compiler.global_strings)}")
        gv.linkage = "private"
        gv.global_constant = True
        gv.unnamed_addr = True
        gv.initializer = ir.Constant(str_ty, data)
        compiler.global_strings[text] = gv
    gv = compiler.global_strings[text]
    zero = ir.Constant(ir.IntType(32), 0)
    return compiler.builder.gep(gv, [zero, zero], inbounds=True, name="str_ptr")
