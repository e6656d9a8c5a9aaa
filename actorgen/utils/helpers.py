import threading

from ..lexer.lexer import fresh_lexer
from ..parser import parser
from ..parser import utilities
from ..parser.packages.errors import DiagnosticEngine
from ..compiletime.errors import MalformedSyntax
from ..ast2.nodes import TypeDefinition

# The LALR tables are shared; one parse runs at a time.
_parse_lock = threading.Lock()


def tokenize(code):
    """Scans `code` without failing on unknown characters (they are skipped)."""
    lexer = fresh_lexer()
    lexer.input(code)
    return list(iter(lexer.token, None))


def parse_code(code, filename="<input>"):
    with _parse_lock:
        lexer = fresh_lexer()
        # Set the filename on the lexer so DiagnosticEngine can read it
        lexer.filename = filename
        diagnostics = DiagnosticEngine(parser, lexer, filename)
        lexer.diagnostics = diagnostics
        utilities.diagnostics = diagnostics
        try:
            ast = parser.parse(code, lexer=lexer, tracking=True)
        finally:
            utilities.diagnostics = None
    for item in ast.items:
        item.filename = filename
    return ast


def parse_file(path):
    with open(path, "r", encoding="utf-8") as f:
        code = f.read()
    # Pass the path to parse_code
    return parse_code(code, filename=path)


def parse_item(code, filename="<input>"):
    """Parses exactly one item: a type declaration, a trait or an impl block."""
    program = parse_code(code, filename)
    if not program.items:
        raise MalformedSyntax("expected an item, found end of input", filename=filename)
    if len(program.items) > 1:
        extra = program.items[1]
        raise MalformedSyntax(
            "expected a single item, found more than one",
            hint="pass one declaration at a time",
            lineno=extra.lineno, col=extra.col_offset, filename=filename)
    return program.items[0]


def parse(code, filename="<input>"):
    """Parses the text of one type declaration into a TypeDefinition."""
    item = parse_item(code, filename)
    if not isinstance(item, TypeDefinition):
        raise MalformedSyntax(
            "expected a type declaration (`struct`, `enum` or `union`)",
            lineno=item.lineno, col=item.col_offset, filename=filename)
    return item
