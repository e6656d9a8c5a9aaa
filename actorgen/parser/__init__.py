import ply.yacc as yacc

from ..lexer.lexer import tokens
from .utilities import *
from .program import *
from .attributes import *
from .types import *
from .datastruct import *
from .impls import *

start = "program"

parser = yacc.yacc(debug=False, write_tables=False, errorlog=yacc.NullLogger())
