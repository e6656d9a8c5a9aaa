from .lexer import tokens, keywords, fresh_lexer, find_column
