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
# Structural model of the host grammar: type declarations, traits, impl blocks.
import enum


LOCATION_ATTRS = frozenset({"lineno", "lexpos", "col_offset", "end_lineno", "end_col_offset", "filename"})


class Node:
    lineno: int = 0
    lexpos: int = -1
    col_offset: int = 0
    end_lineno: int = 0
    end_col_offset: int = 0
    filename: str = "<unknown>"

    def at(self, p, index=1):
        """
        Helper to attach location info from PLY slice.
        Usage in parser: p[0] = MyNode(...).at(p, 1)
        """
        self.lineno = p.lineno(index)
        self.lexpos = p.lexpos(index)
        data = p.lexer.lexdata
        self.col_offset = self.lexpos - data.rfind("\n", 0, self.lexpos)
        return self

    def located_like(self, other):
        self.lineno = getattr(other, "lineno", 0)
        self.lexpos = getattr(other, "lexpos", -1)
        self.col_offset = getattr(other, "col_offset", 0)
        return self

    def _structure(self):
        return {k: v for k, v in vars(self).items() if k not in LOCATION_ATTRS}

    # Structural equality ignores source locations so that
    # parse(emit(x)) == x holds for synthesized nodes too.
    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return self._structure() == other._structure()

    __hash__ = None


# --- Enums ---
class TypeKind(enum.Enum):
    RECORD = "record"
    OTHER = "other"


class Shape(enum.Enum):
    NAMED = "named"
    TUPLE = "tuple"
    UNIT = "unit"


class Visibility(str, enum.Enum):
    PUBLIC = "pub"
    CRATE = "pub(crate)"
    SUPER = "pub(super)"
    DEFAULT = ""


class Receiver(str, enum.Enum):
    REF = "&self"
    REF_MUT = "&mut self"
    VALUE = "self"
    MUT_VALUE = "mut self"


# --- Attributes ---
class Attribute(Node):
    """
    One meta item: `#[path]`, `#[path(args...)]` or `#[path = value]`.
    Nested meta items in `args` are Attribute nodes, literals are Literal nodes.
    """
    def __init__(self, path, args=None, value=None):
        self.path = path
        self.args = args
        self.value = value

    @property
    def name(self):
        return self.path.rsplit("::", 1)[-1]

    def __repr__(self):
        if self.args is not None:
            return f"#[{self.path}({', '.join(repr(a) for a in self.args)})]"
        if self.value is not None:
            return f"#[{self.path} = {self.value!r}]"
        return f"#[{self.path}]"


# Mixin for nodes that support attributes
class Attributable:
    def __init__(self):
        self.attributes = []

    def add_attributes(self, attr_list):
        if not attr_list: return
        self.attributes.extend(attr_list)

    def get_attr(self, name, default=None):
        for attr in self.attributes:
            if attr.name == name:
                return attr
        return default

    def has_attr(self, name):
        return self.get_attr(name) is not None

    def remove_attr(self, name):
        """Drops every attribute called `name`. Returns True if one was removed."""
        kept = [a for a in self.attributes if a.name != name]
        removed = len(kept) != len(self.attributes)
        self.attributes = kept
        return removed


# --- Types ---
class TypeReference(Node):
    """Base class for every type expression. Renders to host syntax via str()."""

    def __str__(self):
        raise NotImplementedError

    def __repr__(self):
        return f"{type(self).__name__}({self})"


class PathType(TypeReference):
    def __init__(self, path, args=None):
        if isinstance(path, str):
            path = path.split("::")
        self.path = list(path)
        self.args = list(args or [])

    @property
    def name(self):
        return "::".join(self.path)

    @property
    def base_name(self):
        return self.path[-1]

    def __str__(self):
        if self.args:
            return f"{self.name}<{', '.join(str(a) for a in self.args)}>"
        return self.name


class ReferenceType(TypeReference):
    def __init__(self, pointee, mutable=False):
        self.pointee = pointee
        self.mutable = mutable

    def __str__(self):
        return f"&mut {self.pointee}" if self.mutable else f"&{self.pointee}"


class TupleType(TypeReference):
    def __init__(self, elements):
        self.elements = list(elements)

    @property
    def is_unit(self):
        return not self.elements

    def __str__(self):
        if len(self.elements) == 1:
            return f"({self.elements[0]},)"
        return f"({', '.join(str(e) for e in self.elements)})"


class ArrayType(TypeReference):
    def __init__(self, element, length):
        self.element = element
        self.length = length

    def __str__(self):
        return f"[{self.element}; {self.length}]"


class SliceType(TypeReference):
    def __init__(self, element):
        self.element = element

    def __str__(self):
        return f"[{self.element}]"


def unit_type():
    return TupleType([])


# --- Declarations ---
class FieldDefinition(Node, Attributable):
    def __init__(self, name, var_type, visibility=Visibility.DEFAULT, attributes=None):
        Attributable.__init__(self)
        self.add_attributes(attributes)
        self.name = name
        self.type = var_type
        self.visibility = visibility

    def __repr__(self):
        vis = f"{self.visibility.value} " if self.visibility.value else ""
        return f"FieldDefinition({vis}{self.name}: {self.type})"


class TupleField(Node, Attributable):
    def __init__(self, var_type, visibility=Visibility.DEFAULT, attributes=None):
        Attributable.__init__(self)
        self.add_attributes(attributes)
        self.type = var_type
        self.visibility = visibility

    def __repr__(self):
        return f"TupleField({self.visibility.value} {self.type})"


class VariantDefinition(Node, Attributable):
    def __init__(self, name, shape=Shape.UNIT, fields=None, elements=None, discriminant=None, attributes=None):
        Attributable.__init__(self)
        self.add_attributes(attributes)
        self.name = name
        self.shape = shape
        self.fields = list(fields or [])
        self.elements = list(elements or [])
        self.discriminant = discriminant

    def __repr__(self):
        return f"Variant({self.name}, {self.shape.value})"


class TypeDefinition(Node, Attributable):
    """
    A `struct`, `union` or `enum` declaration.

    `kind` is RECORD only for structs with named fields; tuple and unit structs,
    unions and enums are all OTHER.
    """
    def __init__(self, name, keyword="struct", fields=None, shape=Shape.NAMED,
                 elements=None, variants=None, visibility=Visibility.DEFAULT, attributes=None):
        Attributable.__init__(self)
        self.add_attributes(attributes)
        self.name = name
        self.keyword = keyword
        self.shape = shape
        self.fields = list(fields or [])
        self.elements = list(elements or [])
        self.variants = list(variants or [])
        self.visibility = visibility

    @property
    def kind(self):
        if self.keyword == "struct" and self.shape is Shape.NAMED:
            return TypeKind.RECORD
        return TypeKind.OTHER

    def get_field(self, name):
        for field in self.fields:
            if field.name == name:
                return field
        return None

    def field_names(self):
        return [f.name for f in self.fields]

    def __repr__(self):
        return (f"TypeDefinition(Name: {self.name}, Keyword: {self.keyword}, Kind: {self.kind.name}, "
                f"Fields: {self.fields}, Variants: {self.variants}, Visibility: {self.visibility.name}, "
                f"Attributes: {self.attributes})")


# --- Functions ---
class Param(Node):
    def __init__(self, name, var_type, mutable=False):
        self.name = name
        self.type = var_type
        self.mutable = mutable

    def __repr__(self):
        return f"Param({self.name}: {self.type})"


class MethodDefinition(Node, Attributable):
    """A method inside an impl or trait. `body` is None for a bare signature."""
    def __init__(self, name, receiver=None, params=None, return_type=None, body=None, visibility=Visibility.DEFAULT,
                 attributes=None):
        Attributable.__init__(self)
        self.add_attributes(attributes)
        self.name = name
        self.visibility = visibility
        self.receiver = receiver
        self.params = list(params or [])
        self.return_type = return_type
        self.body = body

    @property
    def is_signature(self):
        return self.body is None

    def __repr__(self):
        recv = self.receiver.value if self.receiver else "-"
        return f"MethodDefinition(Name: {self.name}, Receiver: {recv}, Params: {self.params}, Return Type: {self.return_type})"


class ImplBlock(Node, Attributable):
    def __init__(self, trait_name, target, methods=None, attributes=None):
        Attributable.__init__(self)
        self.add_attributes(attributes)
        self.trait_name = trait_name
        self.target = target
        self.methods = list(methods or [])

    def get_method(self, name):
        for method in self.methods:
            if method.name == name:
                return method
        return None

    def __repr__(self):
        return f"ImplBlock({self.trait_name} for {self.target}, Methods: {self.methods})"


# The generated implementation of the capability interface.
GeneratedBlock = ImplBlock


class TraitDeclaration(Node, Attributable):
    def __init__(self, name, methods=None, visibility=Visibility.DEFAULT, attributes=None):
        Attributable.__init__(self)
        self.add_attributes(attributes)
        self.name = name
        self.methods = list(methods or [])
        self.visibility = visibility

    def required_methods(self):
        return [m for m in self.methods if m.is_signature]

    def __repr__(self):
        return f"TraitDeclaration(Name: {self.name}, Methods: {self.methods}, Visibility: {self.visibility.name})"


class Program(Node):
    def __init__(self, items):
        self.items = items

    def __repr__(self):
        t = ""
        for i in self.items:
            t += str(i) + "\n\n"
        return f"Program({t})"


# --- Statements & Expressions ---
class Block(Node):
    def __init__(self, statements=None, tail=None):
        self.statements = list(statements or [])
        self.tail = tail

    def __repr__(self):
        return f"Block({self.statements}, Tail: {self.tail})"


class ReturnStatement(Node):
    def __init__(self, value=None, terminated=True):
        self.value = value
        self.terminated = terminated

    def __repr__(self):
        return f"Return({self.value})"


class ExpressionStatement(Node):
    def __init__(self, expression):
        self.expression = expression

    def __repr__(self):
        return f"Stmt({self.expression})"


class SelfRef(Node):
    def __repr__(self):
        return "Self"


class Identifier(Node):
    def __init__(self, name):
        self.name = name

    def __repr__(self):
        return f"Identifier({self.name})"


class FieldAccess(Node):
    def __init__(self, target, field):
        self.target = target
        self.field = field

    def __repr__(self):
        return f"FieldAccess({self.target}.{self.field})"


class Borrow(Node):
    def __init__(self, target, mutable=False):
        self.target = target
        self.mutable = mutable

    def __repr__(self):
        return f"Borrow({'mut ' if self.mutable else ''}{self.target})"


class Assign(Node):
    def __init__(self, target, value):
        self.target = target
        self.value = value

    def __repr__(self):
        return f"Assign({self.target} = {self.value})"


class MacroCall(Node):
    def __init__(self, name, args):
        self.name = name
        self.args = args or []

    def __repr__(self):
        return f"MacroCall({self.name}, {self.args})"


class Literal(Node):
    """
    `kind` is "int", "float", "char", "str" or "raw"; raw strings keep their full token text.
    Doc comments are "doc" (`///`) or "block_doc" (`/** */`) and keep the text between the markers.
    """
    def __init__(self, value, kind="int"):
        self.value = value
        self.kind = kind

    def __repr__(self):
        return f"Literal({self.value!r})"


class UnitLiteral(Node):
    def __repr__(self):
        return "Unit"
