import sys
from dataclasses import dataclass, field

from ..ast2.nodes import Attribute
from ..compiletime.errors import CompileError
from ..config import ExpansionConfig
from ..emitter import emit
from ..lexer.lexer import find_column
from ..utils.helpers import tokenize, parse
from .inject import inject, INJECT_MARKER
from .synthesize import synthesize, check_required_fields
from .interface import TRAIT_NAME


DECLARATION_START = ('HASH', 'DOC_COMMENT', 'PUB', 'PUB_RESTRICTED', 'STRUCT', 'ENUM', 'UNION')


@dataclass
class Declaration:
    """An item-level struct/enum/union found in a compilation unit."""
    name: str
    start: int
    end: int
    lineno: int
    col: int
    markers: list = field(default_factory=list)

    @property
    def marked(self):
        return bool(self.markers)


def _matching(tokens, index, open_type, close_type):
    depth = 0
    for k in range(index, len(tokens)):
        if tokens[k].type == open_type:
            depth += 1
        elif tokens[k].type == close_type:
            depth -= 1
            if depth == 0:
                return k
    return None


def _attribute_end(tokens, index):
    """Index of the `]` closing an outer `#[...]` or inner `#![...]` attribute at `index`."""
    if tokens[index].type != 'HASH':
        return None
    j = index + 1
    if j < len(tokens) and tokens[j].type == 'NOT':
        j += 1
    if j >= len(tokens) or tokens[j].type != 'LBRACKET':
        return None
    return _matching(tokens, j, 'LBRACKET', 'RBRACKET')


def _attribute_markers(tokens, start, end):
    """Markers requested by the attribute spanning tokens[start..end] (`#` to `]`)."""
    body = tokens[start + 2:end]
    path = []
    for tok in body:
        if tok.type == 'IDENTIFIER':
            path.append(tok.value)
        elif tok.type != 'DOUBLE_COLON':
            break
    if not path:
        return []
    if path[-1] == INJECT_MARKER:
        return ["inject"]
    if path == ["derive"]:
        if any(tok.type == 'IDENTIFIER' and tok.value == TRAIT_NAME for tok in body[1:]):
            return ["derive"]
    return []


def _match_declaration(source, tokens, index):
    j = index
    markers = []
    while j < len(tokens) and tokens[j].type in ('HASH', 'DOC_COMMENT'):
        if tokens[j].type == 'DOC_COMMENT':
            j += 1
            continue
        if j + 1 >= len(tokens) or tokens[j + 1].type != 'LBRACKET':
            return None
        close = _matching(tokens, j + 1, 'LBRACKET', 'RBRACKET')
        if close is None:
            return None
        markers.extend(_attribute_markers(tokens, j, close))
        j = close + 1

    if j < len(tokens) and tokens[j].type in ('PUB', 'PUB_RESTRICTED'):
        j += 1
    if j + 1 >= len(tokens) or tokens[j].type not in ('STRUCT', 'ENUM', 'UNION'):
        return None
    if tokens[j + 1].type != 'IDENTIFIER':
        return None

    depth = 0
    for k in range(j + 2, len(tokens)):
        kind = tokens[k].type
        if kind in ('LPAREN', 'LBRACKET'):
            depth += 1
        elif kind in ('RPAREN', 'RBRACKET'):
            depth -= 1
        elif kind == 'SEMICOLON' and depth == 0:
            end = k
            break
        elif kind == 'LBRACE' and depth == 0:
            end = _matching(tokens, k, 'LBRACE', 'RBRACE')
            if end is None:
                return None
            break
    else:
        return None

    first = tokens[index]
    return Declaration(
        name=tokens[j + 1].value,
        start=first.lexpos,
        end=tokens[end].lexpos + 1,
        lineno=first.lineno,
        col=find_column(source, first.lexpos),
        markers=markers,
    ), end


def locate_declarations(source):
    """
    Finds item-level type declarations at the top of the unit or inside
    inline `mod name { ... }` blocks. Bodies of functions, impls and other
    blocks are skipped.
    """
    tokens = tokenize(source)
    found = []
    scopes = []  # 'mod' or 'block'
    item_start = True
    i = 0
    while i < len(tokens):
        tok = tokens[i]
        item_scope = all(s == 'mod' for s in scopes)

        if item_scope and item_start and tok.type in DECLARATION_START:
            match = _match_declaration(source, tokens, i)
            if match is not None:
                declaration, end = match
                found.append(declaration)
                i = end + 1
                item_start = True
                continue

        if (item_scope and tok.type == 'IDENTIFIER' and tok.value == 'mod'
                and i + 2 < len(tokens) and tokens[i + 1].type == 'IDENTIFIER'
                and tokens[i + 2].type == 'LBRACE'):
            scopes.append('mod')
            i += 3
            item_start = True
            continue

        # An attribute or doc comment that did not open a declaration still
        # leaves the scanner at the start of an item.
        close = _attribute_end(tokens, i)
        if close is not None:
            i = close + 1
            item_start = True
            continue
        if tok.type == 'DOC_COMMENT':
            i += 1
            item_start = True
            continue

        if tok.type == 'LBRACE':
            scopes.append('block')
        elif tok.type == 'RBRACE' and scopes:
            scopes.pop()
        item_start = tok.type in ('SEMICOLON', 'RBRACE')
        i += 1
    return found


def _strip_derive(defn):
    """Removes GameActor from `#[derive(...)]`. Returns True if it was there."""
    found = False
    kept = []
    for attr in defn.attributes:
        if attr.name == "derive" and attr.args:
            args = [a for a in attr.args if not (isinstance(a, Attribute) and a.name == TRAIT_NAME)]
            if len(args) != len(attr.args):
                found = True
                attr.args = args
                if not args:
                    continue
        kept.append(attr)
    defn.attributes = kept
    return found


def _reindent(text, leading):
    if not leading:
        return text
    lines = text.split("\n")
    return "\n".join([lines[0]] + [leading + line if line else line for line in lines[1:]])


def expand_declaration(source, declaration, config, filename="<input>"):
    fragment = source[declaration.start:declaration.end]
    # Pad so locations in the parsed fragment match the unit.
    padded = "\n" * (declaration.lineno - 1) + " " * (declaration.col - 1) + fragment
    defn = parse(padded, filename)

    applied = []
    if defn.remove_attr(INJECT_MARKER):
        inject(defn)
        applied.append("inject")

    generated = None
    if _strip_derive(defn):
        if config.validate_fields:
            check_required_fields(defn)
        generated = synthesize(defn)
        applied.append("derive")

    if config.verbose:
        print(f"[actorgen] expanding {defn.name}: {', '.join(applied) or 'nothing'}", file=sys.stderr)

    text = emit(defn, config.indent)
    if generated is not None:
        text += "\n\n" + emit(generated, config.indent)

    line_start = source.rfind("\n", 0, declaration.start) + 1
    leading = source[line_start:declaration.start]
    if leading.strip():
        leading = ""
    return _reindent(text, leading)


def expand(source, config=None, filename="<input>", handler=None):
    """
    Expands every marked declaration in a compilation unit.

    Unmarked text is returned unchanged. The first error aborts the whole
    unit; when `handler` is given it renders the diagnostic before the
    exception propagates.
    """
    config = config or ExpansionConfig()
    try:
        pieces = []
        cursor = 0
        for declaration in locate_declarations(source):
            if not declaration.marked:
                continue
            pieces.append(source[cursor:declaration.start])
            pieces.append(expand_declaration(source, declaration, config, filename))
            cursor = declaration.end
        pieces.append(source[cursor:])
    except CompileError as exc:
        if exc.filename is None:
            exc.filename = filename
        if handler is not None:
            handler.report(exc)
        raise
    return "".join(pieces)


def expand_file(path, config=None, handler=None):
    with open(path, "r", encoding="utf-8") as f:
        source = f.read()
    return expand(source, config, filename=str(path), handler=handler)
