from ..ast2.nodes import *
from . import utilities


# ==============================================================================
#                                 PROGRAM STRUCTURE
# ==============================================================================

def p_program(p):
    "program : item_list"
    p[0] = Program(p[1])


def p_item_list(p):
    """item_list : item_list item
    | empty"""
    if len(p) == 3:
        p[0] = p[1] + [p[2]]
    else:
        p[0] = []


def p_item(p):
    """item : attributes visibility type_declaration
    | attributes visibility trait_declaration
    | attributes visibility impl_block"""
    node = p[3]
    if isinstance(node, ImplBlock):
        if p[2] is not Visibility.DEFAULT:
            utilities.diagnostics.fail(
                "visibility qualifiers are not permitted on impl blocks",
                node.lineno, node.col_offset,
                "place `pub` on the individual items instead")
    else:
        node.visibility = p[2]
    # Outer attributes come first in source order.
    node.attributes = p[1] + node.attributes
    p[0] = node


def p_visibility(p):
    """visibility : PUB
    | PUB_RESTRICTED
    | empty"""
    if p[1] is None:
        p[0] = Visibility.DEFAULT
    else:
        p[0] = Visibility(p[1])
