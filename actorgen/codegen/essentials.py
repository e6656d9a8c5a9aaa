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
# essentials.py : Easy import for the backend parts
from __future__ import annotations
from typing import Dict, List, Optional, Any, Tuple

# --- LLVM Imports ---
from llvmlite import ir
from llvmlite import binding

# --- Internal Imports ---
from ..semantics.scope import Scope
from ..ast2.nodes import *
from ..compiletime.errors import ErrorHandler, CompileError, UndefinedField

# Width of each integer primitive in bits.
INTEGER_WIDTHS = {
    "u8": 8, "i8": 8,
    "u16": 16, "i16": 16,
    "u32": 32, "i32": 32, "char": 32,
    "u64": 64, "i64": 64, "usize": 64, "isize": 64,
    "u128": 128, "i128": 128,
}

ENUM_UNDERLYING_BITS = 32

# Separator between type and method in function names: Adventurer__get_health
METHOD_SEPARATOR = "__"


class Compiler:
    """
    The Central Compiler State.
    This class holds the LLVM Module, Builder, registries and the error handler.
    It acts as the 'Context' passed to all generation functions.
    """
    errors: ErrorHandler
    # =========================================================================
    # 1. LLVM Core State
    # =========================================================================
    context: ir.Context
    module: ir.Module
    builder: Optional[ir.IRBuilder]
    target_triple: str
    target_machine: Optional[binding.TargetMachine]

    # =========================================================================
    # 2. Scopes & Execution State
    # =========================================================================
    global_scope: Scope
    current_scope: Scope

    # =========================================================================
    # 3. Type System Registries
    # =========================================================================

    # Maps Type Name -> LLVM Type (e.g. "Adventurer" -> %Adventurer)
    struct_types: Dict[str, ir.IdentifiedStructType]

    # Maps Type Name -> { FieldName: Index }
    struct_field_indices: Dict[str, Dict[str, int]]

    # Maps Type Name -> declaration (used by the JIT mirror)
    struct_asts: Dict[str, TypeDefinition]

    # Enums
    enum_types: Dict[str, ir.Type]
    enum_members: Dict[str, Dict[str, ir.Constant]]

    # Maps Trait Name -> TraitDeclaration
    traits: Dict[str, TraitDeclaration]

    # Maps Type Name -> [(trait name or None, ImplBlock)]
    impls: Dict[str, List[Tuple[Optional[str], ImplBlock]]]

    # =========================================================================
    # 4. Functions & Context
    # =========================================================================

    # The function being compiled (for appending blocks)
    function: Optional[ir.Function]
    current_method: Optional[MethodDefinition]

    # Maps "Type__method" -> (ir.Function, MethodDefinition)
    methods: Dict[str, Tuple[ir.Function, MethodDefinition]]

    # String Interning
    global_strings: Dict[str, ir.Value]

    # =========================================================================
    # CORE METHODS (Signatures)
    # =========================================================================

    def compile(self, node: Node) -> Any:
        """Main dispatch. Compiles an item into LLVM IR."""
        ...

    def enter_scope(self) -> None:
        ...

    def exit_scope(self) -> None:
        ...

    # --- Type Helpers (types.py) ---
    def convert_type(self, type_ref: TypeReference, in_field: bool = False) -> ir.Type:
        """Converts a TypeReference to an LLVM type."""
        ...

    def convert_return_type(self, type_ref: Optional[TypeReference]) -> ir.Type:
        ...

    # --- Struct Helpers (structs.py) ---
    def declare_type(self, ast: TypeDefinition) -> None:
        """Pass 1: registers the name as an opaque struct or an enum."""
        ...

    def compile_struct(self, ast: TypeDefinition) -> ir.Type:
        """Pass 2: defines the memory layout."""
        ...

    def compile_struct_field_access(self, struct_ptr: ir.Value, field_name: str, node: Node = None,
                                    want_pointer: bool = False) -> ir.Value:
        ...

    # --- Impl Helpers (impls.py) ---
    def compile_trait(self, ast: TraitDeclaration) -> None:
        ...

    def compile_impl(self, ast: ImplBlock) -> None:
        ...

    def create_global_string(self, text: str) -> ir.Value:
        ...
