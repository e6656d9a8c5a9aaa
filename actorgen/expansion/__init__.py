from .inject import inject, INJECT_MARKER, INJECTED_FIELDS
from .synthesize import synthesize, check_required_fields
from .interface import TRAIT_NAME, capability_interface, CAPABILITY_INTERFACE
from .expander import expand, expand_file, locate_declarations
