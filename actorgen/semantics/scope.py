class SymbolInfo:
    def __init__(self, llvm_value, type_ref, mutable=False):
        self.llvm_value = llvm_value
        self.type_ref = type_ref
        self.mutable = mutable

class Scope:
    def __init__(self, parent=None):
        self.parent = parent
        self.symbols = {} # Maps name -> SymbolInfo

    # --- Symbols (self, parameters) ---
    def define(self, name, llvm_value, type_ref=None, mutable=False):
        if name in self.symbols:
            raise Exception(f"Symbol '{name}' already defined in this scope.")
        self.symbols[name] = SymbolInfo(llvm_value, type_ref, mutable)

    def resolve(self, name):
        info = self._resolve_info(name)
        return info.llvm_value if info else None

    def resolve_type(self, name):
        info = self._resolve_info(name)
        return info.type_ref if info else None

    def _resolve_info(self, name):
        if name in self.symbols: return self.symbols[name]
        if self.parent: return self.parent._resolve_info(name)
        return None

    def __repr__(self):
        return f"Scope(symbols={list(self.symbols)}, parent={'yes' if self.parent else 'no'})"
