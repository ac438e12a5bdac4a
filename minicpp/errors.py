class CompileError(Exception):
    """Base class for everything that aborts a compilation attempt."""

class LexicalError(CompileError):
    def __init__(self, offset, character):
        self.offset = offset
        self.character = character
        super().__init__("Syntax error at position %d: '%s'" % (offset, character))

class ParseError(CompileError, SyntaxError):
    def __init__(self, message, expected=None, found=None):
        self.expected = expected
        self.found = found
        super().__init__(message)

    def __str__(self):
        return self.args[0]

class InvalidStatementError(ParseError):
    def __init__(self, token):
        self.token = token
        text = token.text if token is not None else "end of input"
        super().__init__("Invalid statement: " + text, found=token)

class NestingTooDeepError(ParseError):
    def __init__(self, limit, token=None, where=None):
        self.limit = limit
        if where is None:
            where = "at " + describeToken(token)
        super().__init__("Nesting deeper than %d levels %s" % (limit, where), found=token)

class TypeMismatchError(CompileError):
    def __init__(self, message, name):
        self.name = name
        super().__init__(message)

class ProgramFault(Exception):
    """Raised by generated code while it runs."""

class InputExhausted(ProgramFault):
    def __init__(self):
        super().__init__("No more input")

class UnimplementedFunction(ProgramFault):
    def __init__(self, name):
        self.name = name
        super().__init__(name + " not implemented")

def describeToken(token):
    if token is None:
        return "end of input"
    return "%s '%s'" % (token.kind, token.text)
