from ..ast2.nodes import *


# ==============================================================================
#                                 TRAITS & IMPLS
# ==============================================================================

def p_trait_declaration(p):
    "trait_declaration : TRAIT IDENTIFIER LBRACE trait_items RBRACE"
    p[0] = TraitDeclaration(p[2], p[4]).at(p, 2)


def p_trait_items(p):
    """trait_items : trait_items trait_item
    | empty"""
    if len(p) == 3:
        p[0] = p[1] + [p[2]]
    else:
        p[0] = []


def p_trait_item(p):
    """trait_item : attributes function_head SEMICOLON
    | attributes function_head block"""
    method = p[2]
    method.attributes = p[1]
    if isinstance(p[3], Block):
        method.body = p[3]
    p[0] = method


def p_impl_trait(p):
    "impl_block : IMPL path FOR path_type LBRACE impl_items RBRACE"
    p[0] = ImplBlock("::".join(p[2]), str(p[4]), p[6]).at(p, 1)


def p_impl_inherent(p):
    "impl_block : IMPL path_type LBRACE impl_items RBRACE"
    p[0] = ImplBlock(None, str(p[2]), p[4]).at(p, 1)


def p_impl_items(p):
    """impl_items : impl_items impl_item
    | empty"""
    if len(p) == 3:
        p[0] = p[1] + [p[2]]
    else:
        p[0] = []


def p_impl_item(p):
    "impl_item : attributes visibility function_head block"
    method = p[3]
    method.attributes = p[1]
    method.visibility = p[2]
    method.body = p[4]
    p[0] = method


# ==============================================================================
#                                 FUNCTIONS
# ==============================================================================

def p_function_head(p):
    "function_head : FN IDENTIFIER LPAREN param_spec RPAREN return_type"
    receiver, params = p[4]
    p[0] = MethodDefinition(p[2], receiver, params, p[6]).at(p, 2)


def p_param_spec(p):
    """param_spec : receiver
    | receiver COMMA
    | receiver COMMA param_list
    | param_list
    | empty"""
    if p[1] is None:
        p[0] = (None, [])
    elif isinstance(p[1], Receiver):
        p[0] = (p[1], p[3] if len(p) == 4 else [])
    else:
        p[0] = (None, p[1])


def p_receiver(p):
    """receiver : AMPERSAND SELF
    | AMPERSAND MUT SELF
    | SELF
    | MUT SELF"""
    p[0] = Receiver(" ".join(p[1:]).replace("& ", "&"))


def p_param_list(p):
    """param_list : params
    | params COMMA"""
    p[0] = p[1]


def p_params(p):
    """params : params COMMA param
    | param"""
    if len(p) == 4:
        p[0] = p[1] + [p[3]]
    else:
        p[0] = [p[1]]


def p_param(p):
    """param : IDENTIFIER COLON type
    | MUT IDENTIFIER COLON type"""
    if len(p) == 4:
        p[0] = Param(p[1], p[3]).at(p, 1)
    else:
        p[0] = Param(p[2], p[4], mutable=True).at(p, 2)


def p_return_type(p):
    """return_type : ARROW type
    | empty"""
    p[0] = p[2] if len(p) == 3 else None


# ==============================================================================
#                                 BLOCKS & STATEMENTS
# ==============================================================================

def p_block(p):
    "block : LBRACE block_body RBRACE"
    p[0] = p[2].at(p, 1)


def p_block_body(p):
    """block_body : statements tail
    | statements"""
    p[0] = Block(p[1], p[2] if len(p) == 3 else None)


def p_statements(p):
    """statements : statements statement
    | empty"""
    if len(p) == 3:
        p[0] = p[1] + [p[2]]
    else:
        p[0] = []


def p_statement_expression(p):
    "statement : expression SEMICOLON"
    p[0] = ExpressionStatement(p[1]).located_like(p[1])


def p_statement_return(p):
    """statement : RETURN expression SEMICOLON
    | RETURN SEMICOLON"""
    value = p[2] if len(p) == 4 else None
    p[0] = ReturnStatement(value).at(p, 1)


def p_tail(p):
    "tail : expression"
    p[0] = p[1]


def p_tail_return(p):
    """tail : RETURN expression
    | RETURN"""
    value = p[2] if len(p) == 3 else None
    p[0] = ReturnStatement(value, terminated=False).at(p, 1)


# ==============================================================================
#                                 EXPRESSIONS
# ==============================================================================

def p_expression_assign(p):
    "expression : unary EQUAL expression"
    p[0] = Assign(p[1], p[3]).at(p, 2)


def p_expression(p):
    "expression : unary"
    p[0] = p[1]


def p_unary_borrow(p):
    """unary : AMPERSAND unary
    | AMPERSAND MUT unary"""
    if len(p) == 3:
        p[0] = Borrow(p[2]).at(p, 1)
    else:
        p[0] = Borrow(p[3], mutable=True).at(p, 1)


def p_unary(p):
    "unary : postfix"
    p[0] = p[1]


def p_postfix_field(p):
    "postfix : postfix DOT IDENTIFIER"
    p[0] = FieldAccess(p[1], p[3]).at(p, 3)


def p_postfix(p):
    "postfix : primary"
    p[0] = p[1]


def p_primary_self(p):
    "primary : SELF"
    p[0] = SelfRef().at(p, 1)


def p_primary_identifier(p):
    "primary : IDENTIFIER"
    p[0] = Identifier(p[1]).at(p, 1)


def p_primary_literal(p):
    "primary : literal"
    p[0] = p[1]


def p_primary_unit(p):
    "primary : LPAREN RPAREN"
    p[0] = UnitLiteral().at(p, 1)


def p_primary_group(p):
    "primary : LPAREN expression RPAREN"
    p[0] = p[2]


def p_primary_macro(p):
    "primary : IDENTIFIER NOT LPAREN macro_args RPAREN"
    p[0] = MacroCall(p[1], p[4]).at(p, 1)


def p_macro_args(p):
    """macro_args : macro_arg_list
    | macro_arg_list COMMA
    | empty"""
    p[0] = p[1] if p[1] is not None else []


def p_macro_arg_list(p):
    """macro_arg_list : macro_arg_list COMMA expression
    | expression"""
    if len(p) == 4:
        p[0] = p[1] + [p[3]]
    else:
        p[0] = [p[1]]
