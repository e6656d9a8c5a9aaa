import ctypes

from llvmlite import binding

from ..ast2.nodes import *
from .compiler import ActorCompiler
from .essentials import METHOD_SEPARATOR
from .types import is_unit

CTYPES_BY_NAME = {
    "u8": ctypes.c_uint8, "i8": ctypes.c_int8,
    "u16": ctypes.c_uint16, "i16": ctypes.c_int16,
    "u32": ctypes.c_uint32, "i32": ctypes.c_int32, "char": ctypes.c_uint32,
    "u64": ctypes.c_uint64, "i64": ctypes.c_int64,
    "usize": ctypes.c_uint64, "isize": ctypes.c_int64,
    "bool": ctypes.c_bool,
    "f32": ctypes.c_float, "f64": ctypes.c_double,
}


class ActorModule:
    """
    Compiles a unit and runs it with MCJIT.

    Instances are ctypes mirrors of the LLVM structs; fields whose type is
    an opaque handle (String, HashMap<..>, ...) are kept on the Python side.
    """
    def __init__(self, program_or_source, file_name="<input>"):
        source = program_or_source if isinstance(program_or_source, str) else ""
        self.compiler = ActorCompiler(source, file_name)
        if isinstance(program_or_source, str):
            self.compiler.compile_source(program_or_source)
        else:
            self.compiler.compile_program(program_or_source)

        self.llvm_module = self.compiler.verify()
        self.engine = binding.create_mcjit_compiler(self.llvm_module, self.compiler.target_machine)
        self.engine.finalize_object()
        self._mirrors = {}
        self._functions = {}

    # --- Type mirrors ---
    def ctype_for(self, type_ref):
        """ctypes type of a field, or None when the field is a Python-side handle."""
        if isinstance(type_ref, PathType):
            name = type_ref.name
            if name in CTYPES_BY_NAME:
                return CTYPES_BY_NAME[name]
            if name in ("u128", "i128"):
                raise TypeError(f"128-bit field type `{name}` cannot be mirrored")
            if name in self.compiler.struct_asts:
                return self.mirror(name)
            if name in self.compiler.enum_types:
                return ctypes.c_int32
            return None
        if isinstance(type_ref, ArrayType):
            element = self.ctype_for(type_ref.element)
            if element is None:
                raise TypeError(f"array of handles `{type_ref}` cannot be mirrored")
            return element * type_ref.length
        if isinstance(type_ref, TupleType):
            members = [(str(i), self.ctype_for(e) or ctypes.c_void_p) for i, e in enumerate(type_ref.elements)]
            return type("tuple", (ctypes.Structure,), {"_fields_": members})
        # References and slices
        return None

    def declared_fields(self, type_name):
        ast = self.compiler.struct_asts[type_name]
        if ast.shape is Shape.NAMED:
            return [(f.name, f.type) for f in ast.fields]
        return [(str(i), e.type) for i, e in enumerate(ast.elements)]

    def mirror(self, type_name):
        if type_name not in self._mirrors:
            members = []
            for name, type_ref in self.declared_fields(type_name):
                members.append((name, self.ctype_for(type_ref) or ctypes.c_void_p))
            self._mirrors[type_name] = type(type_name, (ctypes.Structure,), {"_fields_": members})
        return self._mirrors[type_name]

    def handle_fields(self, type_name):
        return {name for name, type_ref in self.declared_fields(type_name) if self.ctype_for(type_ref) is None}

    # --- Construction ---
    def construct(self, type_name, **fields):
        if type_name not in self.compiler.struct_asts:
            raise KeyError(f"cannot find struct `{type_name}`")

        declared = [name for name, _ in self.declared_fields(type_name)]
        missing = [name for name in declared if name not in fields]
        if missing:
            names = " and ".join(f"`{m}`" for m in missing)
            raise TypeError(f"missing field{'s' if len(missing) > 1 else ''} {names} in initializer of `{type_name}`")
        for name in fields:
            if name not in declared:
                raise TypeError(f"struct `{type_name}` has no field named `{name}`")

        struct = self.mirror(type_name)()
        handles = {}
        handle_names = self.handle_fields(type_name)
        for name in declared:
            value = fields[name]
            if name in handle_names:
                handles[name] = value
                continue
            if isinstance(value, ActorInstance):
                value = value._struct
            setattr(struct, name, value)
        return ActorInstance(self, type_name, struct, handles)

    # --- Calls ---
    def _value_ctype(self, type_ref, role):
        if is_unit(type_ref):
            return None
        if isinstance(type_ref, ReferenceType):
            pointee = type_ref.pointee
            if isinstance(pointee, PathType) and pointee.name == "str":
                return ctypes.c_char_p
            inner = self.ctype_for(pointee)
            if inner is not None:
                return ctypes.POINTER(inner)
        elif isinstance(type_ref, PathType):
            inner = self.ctype_for(type_ref)
            if inner is not None and not issubclass(inner, ctypes.Structure):
                return inner
        raise TypeError(f"{role} type `{type_ref}` cannot cross the JIT boundary")

    def function(self, type_name, method_name):
        key = f"{type_name}{METHOD_SEPARATOR}{method_name}"
        if key not in self._functions:
            _, method = self.compiler.get_method(type_name, method_name)
            restype = self._value_ctype(method.return_type, "return")
            argtypes = [ctypes.c_void_p] if method.receiver is not None else []
            argtypes += [self._value_ctype(p.type, "parameter") for p in method.params]
            address = self.engine.get_function_address(key)
            self._functions[key] = (ctypes.CFUNCTYPE(restype, *argtypes)(address), method)
        return self._functions[key]

    def call(self, instance, method_name, *args):
        cfunc, method = self.function(instance._type_name, method_name)
        if len(args) != len(method.params):
            raise TypeError(f"{method_name}() takes {len(method.params)} argument(s) but {len(args)} were given")
        cargs = [ctypes.addressof(instance._struct)] if method.receiver is not None else []
        for param, arg in zip(method.params, args):
            if isinstance(arg, str):
                arg = arg.encode("utf-8")
            cargs.append(arg)
        result = cfunc(*cargs)
        return self._convert_result(result, method.return_type)

    @staticmethod
    def _convert_result(result, return_type):
        if isinstance(result, bytes):
            return result.decode("utf-8")
        if isinstance(return_type, ReferenceType) and result is not None:
            contents = result.contents
            return getattr(contents, "value", contents)
        return result


class ActorInstance:
    """A struct value living in a ctypes buffer that JIT-compiled methods operate on."""

    def __init__(self, module, type_name, struct, handles):
        object.__setattr__(self, "_module", module)
        object.__setattr__(self, "_type_name", type_name)
        object.__setattr__(self, "_struct", struct)
        object.__setattr__(self, "_handles", handles)

    def _field_names(self):
        return [name for name, _ in self._module.declared_fields(self._type_name)]

    def __getattr__(self, name):
        if name.startswith("_"):
            raise AttributeError(name)
        if name in self._handles:
            return self._handles[name]
        if name in self._field_names():
            return getattr(self._struct, name)
        try:
            self._module.function(self._type_name, name)
        except KeyError:
            raise AttributeError(f"`{self._type_name}` has no field or method `{name}`") from None
        return lambda *args: self._module.call(self, name, *args)

    def __setattr__(self, name, value):
        if name in self._handles:
            self._handles[name] = value
        elif name in self._field_names():
            setattr(self._struct, name, value)
        else:
            raise AttributeError(f"`{self._type_name}` has no field `{name}`")

    def __repr__(self):
        names = self._field_names()
        if not names:
            return self._type_name
        parts = ", ".join(f"{name}: {getattr(self, name)!r}" for name in names)
        return f"{self._type_name} {{ {parts} }}"
