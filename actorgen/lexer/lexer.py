import ply.lex as lex

tokens = ('PUB', 'PUB_RESTRICTED',
    'STRUCT', 'ENUM', 'UNION', 'TRAIT', 'IMPL', 'FOR',
    'FN', 'RETURN', 'SELF', 'MUT',

    'HASH', 'NOT', 'LBRACKET', 'RBRACKET',
    'LPAREN', 'RPAREN', 'LBRACE', 'RBRACE',
    'LT', 'GT', 'COMMA', 'COLON', 'DOUBLE_COLON', 'SEMICOLON',
    'EQUAL', 'ARROW', 'FAT_ARROW', 'AMPERSAND', 'DOT', 'MINUS',
    'PUNCT', 'DOC_COMMENT',

    'INTEGER', 'FLOAT', 'STRING_LITERAL', 'RAW_STRING', 'CHAR_LITERAL', 'LIFETIME',
    'IDENTIFIER')

t_HASH = r'\#'
t_NOT = r'!'
t_LBRACKET = r'\['
t_RBRACKET = r'\]'
t_LPAREN = r'\('
t_RPAREN = r'\)'
t_LBRACE = r'\{'
t_RBRACE = r'\}'
t_LT = r'<'
t_GT = r'>'
t_COMMA = r','
t_COLON = r':'
t_DOUBLE_COLON = r'::'
t_SEMICOLON = r';'
t_EQUAL = r'='
t_ARROW = r'->'
t_FAT_ARROW = r'=>'
t_AMPERSAND = r'&'
t_DOT = r'\.'
t_MINUS = r'-'
# Operators the grammar never uses; kept so whole units can be scanned.
t_PUNCT = r'[+*/%^|?~@$]'


# Outer doc comments are `#[doc]` attributes. `////`, `/**/` and `/***` are
# plain comments; inner `//!` docs are ignored.
def t_DOC_COMMENT(t):
    r'///(?!/)[^\n]*|/\*\*(?![*/])[\s\S]*?\*/'
    t.lexer.lineno += t.value.count('\n')
    return t


def t_BLOCK_COMMENT(t):
    r'/\*[\s\S]*?\*/'
    t.lexer.lineno += t.value.count('\n')
    pass # Explicitly ignore


def t_LINE_COMMENT(t):
    r'//[^\n]*'
    pass


keywords = {
    'pub': 'PUB',
    'struct': 'STRUCT',
    'enum': 'ENUM',
    'union': 'UNION',
    'trait': 'TRAIT',
    'impl': 'IMPL',
    'for': 'FOR',
    'fn': 'FN',
    'return': 'RETURN',
    'self': 'SELF',
    'mut': 'MUT',
}


def t_PUB_RESTRICTED(t):
    r'pub\s*\(\s*(?:crate|super)\s*\)'
    t.value = "pub(crate)" if "crate" in t.value else "pub(super)"
    return t


def t_RAW_STRING(t):
    r'r\#\#"[\s\S]*?"\#\#|r\#"[\s\S]*?"\#|r"[^"]*"'
    t.lexer.lineno += t.value.count('\n')
    return t


def t_IDENTIFIER(t):
    r'[a-zA-Z_][a-zA-Z0-9_]*'
    t.type = keywords.get(t.value, 'IDENTIFIER')
    return t


def t_FLOAT(t):
    r'\d[\d_]*\.\d[\d_]*(?:f32|f64)?'
    t.value = float(t.value.replace('_', '').removesuffix('f32').removesuffix('f64'))
    return t


def t_INTEGER(t):
    r'(?:0x[0-9a-fA-F_]+|\d[\d_]*)(?:[ui](?:8|16|32|64|128|size))?'
    text = t.value.replace('_', '')
    for suffix in ('size', '128', '64', '32', '16', '8'):
        if text[-len(suffix) - 1:-len(suffix)] in ('u', 'i') and text.endswith(suffix):
            text = text[:-len(suffix) - 1]
            break
    t.value = int(text, 16) if text.startswith('0x') else int(text)
    return t


def t_STRING_LITERAL(t):
    r'\"([^\\\"]|\\.)*\"'
    t.lexer.lineno += t.value.count('\n')
    t.value = t.value[1:-1]
    return t


def t_CHAR_LITERAL(t):
    r'\'([^\\\']|\\.)\''
    t.value = t.value[1:-1]
    return t


def t_LIFETIME(t):
    r'\'[a-zA-Z_][a-zA-Z0-9_]*'
    return t


t_ignore = ' \t\r'


def t_newline(t):
    r'\n+'
    t.lexer.lineno += len(t.value)


def t_error(t):
    # Strict lexers (used for parsing) report through their diagnostics engine;
    # scanning lexers only record the character and move on.
    diagnostics = getattr(t.lexer, 'diagnostics', None)
    if diagnostics is not None:
        diagnostics.illegal_character(t)
    t.lexer.illegal.append((t.value[0], t.lineno, t.lexpos))
    t.lexer.skip(1)


def find_column(input_text, token_or_lexpos):
    """
    Calculates the 1-based column number.
    Accepts either a Token object or a raw integer lexpos.
    """
    # 1. Extract integer position
    lexpos = 0
    if isinstance(token_or_lexpos, int):
        lexpos = token_or_lexpos
    elif hasattr(token_or_lexpos, 'lexpos'):
        lexpos = token_or_lexpos.lexpos
    else:
        return 0

    # 2. Calculate column
    last_cr = input_text.rfind('\n', 0, lexpos)
    if last_cr < 0:
        last_cr = -1

    return (lexpos - last_cr)


lexer = lex.lex()
lexer.diagnostics = None
lexer.illegal = []


def fresh_lexer(diagnostics=None):
    """Independent lexer for one parse or scan; the module-level lexer is never fed input."""
    clone = lexer.clone()
    clone.lineno = 1
    clone.diagnostics = diagnostics
    clone.illegal = []
    return clone
