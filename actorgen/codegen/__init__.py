from .compiler import ActorCompiler
from .jit import ActorModule, ActorInstance
