from .compiletime.errors import (CompileError, MalformedSyntax, NotARecordType,
                                 MissingRequiredField, UndefinedField)
from .utils.helpers import parse, parse_item, parse_code as parse_program
from .emitter import emit
from .expansion import (inject, synthesize, check_required_fields, expand, expand_file,
                        capability_interface, CAPABILITY_INTERFACE)
from .items import items, starting_items, STARTING_ITEMS
from .config import ExpansionConfig, ConfigError

__version__ = "0.1.0"
