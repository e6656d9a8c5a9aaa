from ..ast2.nodes import *


# ==============================================================================
#                                 TYPES
# ==============================================================================

def p_path(p):
    """path : IDENTIFIER
    | path DOUBLE_COLON IDENTIFIER"""
    if len(p) == 2:
        p[0] = [p[1]]
    else:
        p[0] = p[1] + [p[3]]


def p_path_type(p):
    """path_type : path
    | path LT type_list GT"""
    if len(p) == 2:
        p[0] = PathType(p[1]).at(p, 1)
    else:
        p[0] = PathType(p[1], p[3]).at(p, 1)


def p_type_path(p):
    "type : path_type"
    p[0] = p[1]


def p_type_reference(p):
    """type : AMPERSAND type
    | AMPERSAND MUT type"""
    if len(p) == 3:
        p[0] = ReferenceType(p[2]).at(p, 1)
    else:
        p[0] = ReferenceType(p[3], mutable=True).at(p, 1)


def p_type_tuple(p):
    """type : LPAREN RPAREN
    | LPAREN type_list RPAREN
    | LPAREN type_list COMMA RPAREN"""
    if len(p) == 3:
        p[0] = TupleType([]).at(p, 1)
    elif len(p) == 4 and len(p[2]) == 1:
        # (T) is just a parenthesized T
        p[0] = p[2][0]
    else:
        p[0] = TupleType(p[2]).at(p, 1)


def p_type_array(p):
    """type : LBRACKET type RBRACKET
    | LBRACKET type SEMICOLON INTEGER RBRACKET"""
    if len(p) == 4:
        p[0] = SliceType(p[2]).at(p, 1)
    else:
        p[0] = ArrayType(p[2], p[4]).at(p, 1)


def p_type_list(p):
    """type_list : type_list COMMA type
    | type"""
    if len(p) == 4:
        p[0] = p[1] + [p[3]]
    else:
        p[0] = [p[1]]
