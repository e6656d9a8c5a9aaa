from ..ast2.nodes import *


# ==============================================================================
#                                 ATTRIBUTES
# ==============================================================================

def p_attributes(p):
    """attributes : attributes attribute
    | empty"""
    if len(p) == 3:
        p[0] = p[1] + [p[2]]
    else:
        p[0] = []


def p_attribute(p):
    "attribute : HASH LBRACKET meta RBRACKET"
    p[0] = p[3].at(p, 1)


def p_attribute_doc(p):
    "attribute : DOC_COMMENT"
    text = p[1]
    if text.startswith("///"):
        doc = Literal(text[3:], "doc")
    else:
        doc = Literal(text[3:-2], "block_doc")
    p[0] = Attribute("doc", value=doc.at(p, 1)).at(p, 1)


def p_meta_word(p):
    "meta : path"
    p[0] = Attribute("::".join(p[1]))


def p_meta_name_value(p):
    "meta : path EQUAL literal"
    p[0] = Attribute("::".join(p[1]), value=p[3])


def p_meta_list(p):
    "meta : path LPAREN meta_args RPAREN"
    p[0] = Attribute("::".join(p[1]), args=p[3])


def p_meta_args(p):
    """meta_args : meta_arg_list
    | meta_arg_list COMMA
    | empty"""
    p[0] = p[1] if p[1] is not None else []


def p_meta_arg_list(p):
    """meta_arg_list : meta_arg_list COMMA meta_arg
    | meta_arg"""
    if len(p) == 4:
        p[0] = p[1] + [p[3]]
    else:
        p[0] = [p[1]]


def p_meta_arg(p):
    """meta_arg : meta
    | literal"""
    p[0] = p[1]


def p_literal_int(p):
    """literal : INTEGER
    | MINUS INTEGER"""
    if len(p) == 3:
        p[0] = Literal(-p[2], "int").at(p, 1)
    else:
        p[0] = Literal(p[1], "int").at(p, 1)


def p_literal_str(p):
    "literal : STRING_LITERAL"
    p[0] = Literal(p[1], "str").at(p, 1)


def p_literal_raw(p):
    "literal : RAW_STRING"
    p[0] = Literal(p[1], "raw").at(p, 1)


def p_literal_char(p):
    "literal : CHAR_LITERAL"
    p[0] = Literal(p[1], "char").at(p, 1)


def p_literal_float(p):
    "literal : FLOAT"
    p[0] = Literal(p[1], "float").at(p, 1)
