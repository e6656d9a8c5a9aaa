# ==============================================================================
#                                 UTILITIES
# ==============================================================================

# DiagnosticEngine of the parse in progress; set by the parse session.
diagnostics = None


def p_empty(p):
    "empty :"
    p[0] = None


def p_error(p):
    if diagnostics is not None:
        diagnostics.syntax_error(p)
    if p:
        raise SyntaxError(f"Syntax error at '{p.value}' (line {p.lineno})")
    raise SyntaxError("Syntax error at EOF")
