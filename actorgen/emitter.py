from .ast2.nodes import *


class SourceEmitter:
    """
    Renders structural nodes back to host source text.

    Dispatches on the node class name (`emit_TypeDefinition`, ...). Output is
    canonical: one field or method per line, trailing commas, `Name {}` for
    empty braced bodies.
    """
    def __init__(self, indent=4):
        self.unit = " " * indent

    def emit(self, node, depth=0):
        method = getattr(self, f"emit_{type(node).__name__}", None)
        if method is None:
            raise TypeError(f"cannot emit {type(node).__name__}")
        return method(node, depth)

    def pad(self, depth):
        return self.unit * depth

    # --- Attributes & literals ---
    def meta(self, node):
        if isinstance(node, Literal):
            return self.emit_Literal(node)
        if node.args is not None:
            return f"{node.path}({', '.join(self.meta(a) for a in node.args)})"
        if node.value is not None:
            return f"{node.path} = {self.emit_Literal(node.value)}"
        return node.path

    def attribute(self, node):
        doc = node.value if node.path == "doc" else None
        if isinstance(doc, Literal) and doc.kind == "doc":
            return f"///{doc.value}"
        if isinstance(doc, Literal) and doc.kind == "block_doc":
            return f"/**{doc.value}*/"
        return f"#[{self.meta(node)}]"

    def attribute_lines(self, node, depth):
        return [self.pad(depth) + self.attribute(a) for a in node.attributes]

    def emit_Attribute(self, node, depth=0):
        return self.pad(depth) + self.attribute(node)

    def emit_Literal(self, node, depth=0):
        if node.kind == "str":
            return f'"{node.value}"'
        if node.kind in ("doc", "block_doc"):
            # Inline positions such as tuple fields need the `#[doc = "..."]` form.
            text = node.value.replace("\\", "\\\\").replace('"', '\\"')
            return f'"{text}"'
        if node.kind == "char":
            return f"'{node.value}'"
        if node.kind == "float":
            return repr(node.value)
        return str(node.value)

    @staticmethod
    def vis(visibility):
        return f"{visibility.value} " if visibility.value else ""

    # --- Declarations ---
    def field(self, node, depth):
        lines = self.attribute_lines(node, depth)
        lines.append(f"{self.pad(depth)}{self.vis(node.visibility)}{node.name}: {node.type},")
        return lines

    def named_body(self, fields, depth):
        if not fields:
            return "{}"
        lines = ["{"]
        for f in fields:
            lines.extend(self.field(f, depth + 1))
        lines.append(f"{self.pad(depth)}}}")
        return "\n".join(lines)

    def inline_attributes(self, node):
        return "".join(f"#[{self.meta(a)}] " for a in node.attributes)

    def tuple_body(self, elements):
        parts = []
        for e in elements:
            parts.append(f"{self.inline_attributes(e)}{self.vis(e.visibility)}{e.type}")
        return f"({', '.join(parts)})"

    def variant(self, node, depth):
        lines = self.attribute_lines(node, depth)
        text = f"{self.pad(depth)}{node.name}"
        if node.shape is Shape.TUPLE:
            text += self.tuple_body(node.elements)
        elif node.shape is Shape.NAMED:
            if node.fields:
                text += " { " + ", ".join(
                    f"{self.inline_attributes(f)}{self.vis(f.visibility)}{f.name}: {f.type}" for f in node.fields) + " }"
            else:
                text += " {}"
        if node.discriminant is not None:
            text += f" = {node.discriminant}"
        lines.append(text + ",")
        return lines

    def emit_TypeDefinition(self, node, depth=0):
        lines = self.attribute_lines(node, depth)
        head = f"{self.pad(depth)}{self.vis(node.visibility)}{node.keyword} {node.name}"
        if node.keyword == "enum":
            if node.variants:
                body = ["{"]
                for v in node.variants:
                    body.extend(self.variant(v, depth + 1))
                body.append(f"{self.pad(depth)}}}")
                head += " " + "\n".join(body)
            else:
                head += " {}"
        elif node.shape is Shape.TUPLE:
            head += self.tuple_body(node.elements) + ";"
        elif node.shape is Shape.UNIT:
            head += ";"
        else:
            head += " " + self.named_body(node.fields, depth)
        lines.append(head)
        return "\n".join(lines)

    # --- Traits & impls ---
    def signature(self, node, depth):
        params = [node.receiver.value] if node.receiver else []
        params += [f"{'mut ' if p.mutable else ''}{p.name}: {p.type}" for p in node.params]
        text = f"{self.pad(depth)}{self.vis(node.visibility)}fn {node.name}({', '.join(params)})"
        if node.return_type is not None:
            text += f" -> {node.return_type}"
        return text

    def emit_MethodDefinition(self, node, depth=0):
        lines = self.attribute_lines(node, depth)
        if node.is_signature:
            lines.append(self.signature(node, depth) + ";")
        else:
            lines.append(self.signature(node, depth) + " " + self.emit_Block(node.body, depth))
        return "\n".join(lines)

    def emit_TraitDeclaration(self, node, depth=0):
        lines = self.attribute_lines(node, depth)
        head = f"{self.pad(depth)}{self.vis(node.visibility)}trait {node.name}"
        if not node.methods:
            lines.append(head + " {}")
            return "\n".join(lines)
        lines.append(head + " {")
        for m in node.methods:
            lines.append(self.emit_MethodDefinition(m, depth + 1))
        lines.append(f"{self.pad(depth)}}}")
        return "\n".join(lines)

    def emit_ImplBlock(self, node, depth=0):
        lines = self.attribute_lines(node, depth)
        head = f"{self.pad(depth)}impl "
        if node.trait_name:
            head += f"{node.trait_name} for "
        head += node.target
        if not node.methods:
            lines.append(head + " {}")
            return "\n".join(lines)
        methods = "\n\n".join(self.emit_MethodDefinition(m, depth + 1) for m in node.methods)
        lines.append(f"{head} {{\n{methods}\n{self.pad(depth)}}}")
        return "\n".join(lines)

    def emit_Program(self, node, depth=0):
        if not node.items:
            return ""
        return "\n\n".join(self.emit(item, depth) for item in node.items) + "\n"

    # --- Blocks & statements ---
    def emit_Block(self, node, depth=0):
        if not node.statements and node.tail is None:
            return "{}"
        lines = ["{"]
        for stmt in node.statements:
            lines.append(self.pad(depth + 1) + self.statement(stmt))
        if node.tail is not None:
            lines.append(self.pad(depth + 1) + self.expression(node.tail))
        lines.append(f"{self.pad(depth)}}}")
        return "\n".join(lines)

    def statement(self, node):
        if isinstance(node, ReturnStatement):
            return self.expression(node)
        return self.expression(node.expression) + ";"

    # --- Expressions ---
    def expression(self, node):
        if isinstance(node, ReturnStatement):
            text = "return" if node.value is None else f"return {self.expression(node.value)}"
            return text + ";" if node.terminated else text
        if isinstance(node, SelfRef):
            return "self"
        if isinstance(node, Identifier):
            return node.name
        if isinstance(node, FieldAccess):
            target = self.expression(node.target)
            if isinstance(node.target, (Borrow, Assign)):
                target = f"({target})"
            return f"{target}.{node.field}"
        if isinstance(node, Borrow):
            target = self.expression(node.target)
            if isinstance(node.target, Assign):
                target = f"({target})"
            return f"&mut {target}" if node.mutable else f"&{target}"
        if isinstance(node, Assign):
            return f"{self.expression(node.target)} = {self.expression(node.value)}"
        if isinstance(node, MacroCall):
            return f"{node.name}!({', '.join(self.expression(a) for a in node.args)})"
        if isinstance(node, Literal):
            return self.emit_Literal(node)
        if isinstance(node, UnitLiteral):
            return "()"
        raise TypeError(f"cannot emit expression {type(node).__name__}")


def emit(node, indent=4):
    """Renders a declaration, impl block, trait or whole program as source text."""
    return SourceEmitter(indent).emit(node)
