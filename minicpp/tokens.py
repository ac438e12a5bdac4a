from collections import namedtuple

class Token(namedtuple("Token", ["kind", "text", "offset"])):
    __slots__ = ()

    def __new__(cls, kind, text, offset=0):
        return super().__new__(cls, kind, text, offset)

    def __repr__(self):
        return "Token(%s, %s)" % (self.kind, self.text)

    def isA(self, kind, text=None):
        return self.kind == kind and (text is None or self.text == text)
