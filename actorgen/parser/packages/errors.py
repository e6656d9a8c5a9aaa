import difflib

from ...compiletime.errors import MalformedSyntax


class DiagnosticEngine:
    """
    Turns PLY failures into MalformedSyntax errors carrying a location,
    a readable token name and, where it can guess one, a hint.
    """
    def __init__(self, parser, lexer, filename="<input>"):
        self.parser = parser
        self.lexer = lexer
        self.filename = filename
        self.errors = []
        self.TYPO_CUTOFF = 0.8

        self.TOKEN_MAP = {
            'LPAREN': "'('", 'RPAREN': "')'",
            'LBRACE': "'{'", 'RBRACE': "'}'",
            'LBRACKET': "'['", 'RBRACKET': "']'",
            'SEMICOLON': "';'", 'COLON': "':'", 'DOUBLE_COLON': "'::'",
            'COMMA': "','", 'DOT': "'.'", 'HASH': "'#'", 'NOT': "'!'",
            'EQUAL': "'='", 'ARROW': "'->'", 'FAT_ARROW': "'=>'",
            'LT': "'<'", 'GT': "'>'", 'MINUS': "'-'",
            'AMPERSAND': "'&'", 'PUNCT': "operator",
            'IDENTIFIER': "identifier", 'STRING_LITERAL': "string",
            'RAW_STRING': "raw string", 'CHAR_LITERAL': "character",
            'INTEGER': "integer", 'FLOAT': "float", 'LIFETIME': "lifetime",
            'PUB_RESTRICTED': "visibility", 'DOC_COMMENT': "doc comment",
            'EOF': "end of input"
        }

        self.KEYWORDS = [
            "pub", "struct", "enum", "union", "trait", "impl",
            "for", "fn", "return", "self", "mut"
        ]

    def get_friendly_name(self, token_type):
        friendly = self.TOKEN_MAP.get(token_type)
        if friendly:
            return friendly
        return f"keyword '{token_type.lower()}'"

    def find_column(self, token):
        if token is None: return 0
        input_data = self.lexer.lexdata
        line_start = input_data.rfind('\n', 0, token.lexpos) + 1
        return (token.lexpos - line_start) + 1

    def check_typo(self, value):
        if value in self.KEYWORDS: return None
        matches = difflib.get_close_matches(value, self.KEYWORDS, n=1, cutoff=self.TYPO_CUTOFF)
        return matches[0] if matches else None

    def analyze_context(self):
        stack = getattr(self.parser, 'symstack', None) or []
        for item in reversed(stack):
            kind = getattr(item, 'type', None)
            if kind == 'STRUCT': return "struct definition"
            if kind == 'ENUM': return "enum definition"
            if kind == 'UNION': return "union definition"
            if kind == 'TRAIT': return "trait definition"
            if kind == 'IMPL': return "impl block"
            if kind == 'FN': return "method definition"
            if kind == 'HASH': return "attribute"
        return "item position"

    def analyze_unclosed_delimiters(self):
        stack = getattr(self.parser, 'symstack', None) or []
        for sym in reversed(stack):
            kind = getattr(sym, 'type', None)
            if kind == 'LPAREN': return "unclosed parenthesis '('"
            if kind == 'LBRACE': return "unclosed brace '{'"
            if kind == 'LBRACKET': return "unclosed bracket '['"
            if kind == 'LT': return "unclosed angle bracket '<'"
        return None

    def fail(self, message, lineno=0, col=0, hint=None):
        exc = MalformedSyntax(message, hint=hint, lineno=lineno, col=col, filename=self.filename)
        self.errors.append(exc)
        raise exc

    def syntax_error(self, token):
        """Called from p_error. `token` is None at end of input."""
        if token is None:
            hint = self.analyze_unclosed_delimiters()
            lineno = self.lexer.lineno
            col = len(self.lexer.lexdata) - self.lexer.lexdata.rfind('\n') if self.lexer.lexdata else 0
            self.fail(f"unexpected end of input in {self.analyze_context()}", lineno, col, hint)

        hint = None
        if token.type == 'IDENTIFIER':
            typo = self.check_typo(token.value)
            if typo:
                hint = f"did you mean '{typo}'?"
        elif token.type == 'LIFETIME' or (token.type == 'LT' and self.analyze_context() != "item position"):
            hint = "generic parameters and lifetimes are not supported on declarations"

        self.fail(
            f"unexpected {self.get_friendly_name(token.type)} `{token.value}` in {self.analyze_context()}",
            token.lineno, self.find_column(token), hint)

    def illegal_character(self, t):
        self.fail(f"unknown character `{t.value[0]}`", t.lineno, self.find_column(t))
