from minicpp.lang import language

class SymbolTable:
    """Flat name -> declared type mapping for one parse.

    There is no scoping: a later declaration of the same name replaces the
    earlier entry without a diagnostic.
    """

    def __init__(self):
        self.symbols = {}

    def declare(self, name, typeName):
        self.symbols[name] = typeName

    def lookup(self, name):
        return self.symbols.get(name)

    def baseType(self, name):
        typeName = self.lookup(name)
        if typeName is None:
            return None
        words = [w for w in typeName.rstrip("*&").split() if w not in language["typeModifiers"]]
        return words[-1] if words else None

    def __contains__(self, name):
        return name in self.symbols

    def __len__(self):
        return len(self.symbols)
