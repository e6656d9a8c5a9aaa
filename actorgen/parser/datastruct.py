from ..ast2.nodes import *


# ==============================================================================
#                                 DATA STRUCTURES
# ==============================================================================

def p_struct_declaration(p):
    "type_declaration : STRUCT IDENTIFIER LBRACE field_list RBRACE"
    p[0] = TypeDefinition(p[2], "struct", fields=p[4], shape=Shape.NAMED).at(p, 2)


def p_tuple_struct_declaration(p):
    "type_declaration : STRUCT IDENTIFIER LPAREN tuple_field_list RPAREN SEMICOLON"
    p[0] = TypeDefinition(p[2], "struct", elements=p[4], shape=Shape.TUPLE).at(p, 2)


def p_unit_struct_declaration(p):
    "type_declaration : STRUCT IDENTIFIER SEMICOLON"
    p[0] = TypeDefinition(p[2], "struct", shape=Shape.UNIT).at(p, 2)


def p_union_declaration(p):
    "type_declaration : UNION IDENTIFIER LBRACE field_list RBRACE"
    p[0] = TypeDefinition(p[2], "union", fields=p[4], shape=Shape.NAMED).at(p, 2)


def p_enum_declaration(p):
    "type_declaration : ENUM IDENTIFIER LBRACE variant_list RBRACE"
    p[0] = TypeDefinition(p[2], "enum", variants=p[4], shape=Shape.NAMED).at(p, 2)


# --- Named fields ---
def p_field_list(p):
    """field_list : fields
    | fields COMMA
    | empty"""
    p[0] = p[1] if p[1] is not None else []


def p_fields_single(p):
    "fields : field"
    p[0] = [p[1]]


def p_fields_multiple(p):
    "fields : fields COMMA field"
    p[0] = p[1] + [p[3]]


def p_field(p):
    "field : attributes visibility IDENTIFIER COLON type"
    p[0] = FieldDefinition(p[3], p[5], visibility=p[2], attributes=p[1]).at(p, 3)


# --- Positional fields ---
def p_tuple_field_list(p):
    """tuple_field_list : tuple_fields
    | tuple_fields COMMA
    | empty"""
    p[0] = p[1] if p[1] is not None else []


def p_tuple_fields(p):
    """tuple_fields : tuple_fields COMMA tuple_field
    | tuple_field"""
    if len(p) == 4:
        p[0] = p[1] + [p[3]]
    else:
        p[0] = [p[1]]


def p_tuple_field(p):
    "tuple_field : attributes visibility type"
    p[0] = TupleField(p[3], visibility=p[2], attributes=p[1]).located_like(p[3])


# --- Enum variants ---
def p_variant_list(p):
    """variant_list : variants
    | variants COMMA
    | empty"""
    p[0] = p[1] if p[1] is not None else []


def p_variants(p):
    """variants : variants COMMA variant
    | variant"""
    if len(p) == 4:
        p[0] = p[1] + [p[3]]
    else:
        p[0] = [p[1]]


def p_variant_unit(p):
    """variant : attributes IDENTIFIER
    | attributes IDENTIFIER EQUAL discriminant"""
    discriminant = p[4] if len(p) == 5 else None
    p[0] = VariantDefinition(p[2], Shape.UNIT, discriminant=discriminant, attributes=p[1]).at(p, 2)


def p_variant_tuple(p):
    "variant : attributes IDENTIFIER LPAREN tuple_field_list RPAREN"
    p[0] = VariantDefinition(p[2], Shape.TUPLE, elements=p[4], attributes=p[1]).at(p, 2)


def p_variant_named(p):
    "variant : attributes IDENTIFIER LBRACE field_list RBRACE"
    p[0] = VariantDefinition(p[2], Shape.NAMED, fields=p[4], attributes=p[1]).at(p, 2)


def p_discriminant(p):
    """discriminant : INTEGER
    | MINUS INTEGER"""
    p[0] = -p[2] if len(p) == 3 else p[1]
