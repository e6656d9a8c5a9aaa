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
# compiler.py : the backend that checks generated impls the way a later
# compilation stage would.
from .essentials import *
from .types import convert_type, convert_return_type
from .structs import declare_type, compile_struct, compile_struct_field_access
from .enums import compile_enum_declaration
from .impls import (compile_trait, compile_impl, compile_method, compile_statement, compile_return, coerce,
                    compile_expression, resolve_self, compile_place, compile_borrow, compile_assign,
                    compile_literal, create_global_string, _require_mutable)
from ..utils.helpers import parse_code
from ..expansion.interface import capability_interface


class ActorCompiler(Compiler):
    # --- Type Helpers (types.py) ---
    convert_type = convert_type
    convert_return_type = convert_return_type

    # --- Struct Helpers (structs.py) ---
    declare_type = declare_type
    compile_struct = compile_struct
    compile_struct_field_access = compile_struct_field_access

    # --- Enum Helpers (enums.py) ---
    compile_enum_declaration = compile_enum_declaration

    # --- Impl Helpers (impls.py) ---
    compile_trait = compile_trait
    compile_impl = compile_impl
    compile_method = compile_method
    compile_statement = compile_statement
    compile_return = compile_return
    coerce = coerce
    compile_expression = compile_expression
    resolve_self = resolve_self
    compile_place = compile_place
    compile_borrow = compile_borrow
    compile_assign = compile_assign
    compile_literal = compile_literal
    create_global_string = create_global_string
    _require_mutable = _require_mutable

    def __init__(self, source_code: str = "", file_name: str = "<input>", color: bool = True,
                 quiet: bool = True, stream=None):
        # Initialize ErrorHandler
        self.errors = ErrorHandler(source_code, file_name, color=color, stream=stream, quiet=quiet)
        # Initialize binding
        binding.initialize_native_target()
        binding.initialize_native_asmprinter()

        # ------------------ Declare module ---------------------
        # A private context keeps identified struct names per compiler.
        self.context = ir.Context()
        self.module = ir.Module(name="actorgen_module", context=self.context)
        self.target_triple = binding.get_default_triple()
        target = binding.Target.from_triple(self.target_triple)
        self.target_machine = target.create_target_machine()
        self.module.triple = self.target_triple
        self.module.data_layout = str(self.target_machine.target_data)

        self.builder = None
        self.function = None
        self.current_method = None

        # Scopes
        self.global_scope = Scope(parent=None)
        self.current_scope = self.global_scope

        # Registries
        self.struct_types = {}
        self.struct_field_indices = {}
        self.struct_asts = {}
        self.enum_types = {}
        self.enum_members = {}
        self.traits = {}
        self.impls = {}
        self.methods = {}
        self.global_strings = {}

        # GameActor is always known
        self.compile_trait(capability_interface())

    def enter_scope(self):
        self.current_scope = Scope(parent=self.current_scope)

    def exit_scope(self):
        self.current_scope = self.current_scope.parent

    def compile(self, ast: Node):
        if ast is None:
            return
        if isinstance(ast, Program):
            return self.compile_program(ast)
        elif isinstance(ast, TraitDeclaration):
            return self.compile_trait(ast)
        elif isinstance(ast, TypeDefinition):
            self.declare_type(ast)
            if ast.keyword == "struct":
                return self.compile_struct(ast)
            return self.enum_types[ast.name]
        elif isinstance(ast, ImplBlock):
            return self.compile_impl(ast)
        else:
            self.errors.error(ast, f"Unsupported AST node type: {type(ast)}")

    def compile_program(self, program: Program) -> ir.Module:
        """
        Lowers a whole unit: traits first, then every type name (so declarations
        may refer to each other in any order), then layouts, then impls.
        """
        try:
            types = [i for i in program.items if isinstance(i, TypeDefinition)]
            for item in program.items:
                if isinstance(item, TraitDeclaration):
                    self.compile_trait(item)
            for item in types:
                self.declare_type(item)
            for item in types:
                if item.keyword == "struct":
                    self.compile_struct(item)
            for item in program.items:
                if isinstance(item, ImplBlock):
                    self.compile_impl(item)
        except CompileError as exc:
            self.errors.report(exc)
            raise
        self.verify()
        return self.module

    def compile_source(self, source_code: str) -> ir.Module:
        self.errors.source_code = source_code
        self.errors.lines = source_code.splitlines()
        try:
            program = parse_code(source_code, self.errors.filename)
        except CompileError as exc:
            self.errors.report(exc)
            raise
        return self.compile_program(program)

    def verify(self):
        """Parses the textual IR back with LLVM and runs the verifier."""
        llvm_module = binding.parse_assembly(str(self.module))
        llvm_module.verify()
        return llvm_module

    def generate_ir(self):
        return str(self.module)

    def get_method(self, type_name: str, method_name: str) -> Tuple[ir.Function, MethodDefinition]:
        return self.methods[f"{type_name}{METHOD_SEPARATOR}{method_name}"]
