import ast
import builtins
import logging
import math
import operator
import re
from types import SimpleNamespace

from minicpp.errors import InputExhausted, UnimplementedFunction
from minicpp.lang import language

def splitInput(text):
    return [t for t in re.split(r"\s+", text.strip()) if t]

def cDiv(left, right):
    if isinstance(left, int) and isinstance(right, int):
        quotient = abs(left) // abs(right)
        return quotient if (left < 0) == (right < 0) else -quotient
    return left / right

def cMod(left, right):
    if isinstance(left, int) and isinstance(right, int):
        return left - right * cDiv(left, right)
    return math.fmod(left, right)

class Runtime:
    """Helpers the generated program reaches through its __rt global."""

    InputExhausted = InputExhausted
    UnimplementedFunction = UnimplementedFunction

    operators = {
        "+": operator.add,
        "-": operator.sub,
        "*": operator.mul,
        "/": cDiv,
        "%": cMod,
    }

    div = staticmethod(cDiv)
    mod = staticmethod(cMod)

    @staticmethod
    def number(token):
        try:
            return int(token)
        except ValueError:
            pass
        try:
            return float(token)
        except ValueError:
            return math.nan

    @staticmethod
    def show(value):
        if value is None:
            return ""
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, float):
            if math.isnan(value):
                return "NaN"
            if math.isinf(value):
                return "Infinity" if value > 0 else "-Infinity"
            if value.is_integer():
                return str(int(value))
            return repr(value)
        if isinstance(value, list):
            return ",".join(Runtime.show(v) for v in value)
        return str(value)

    def store(self, owner, key, value):
        owner[key] = value
        return value

    def update(self, owner, key, op, value, postfix=False):
        old = owner[key]
        owner[key] = self.operators[op](old, value)
        return old if postfix else owner[key]

    def storeAttr(self, owner, name, value):
        setattr(owner, name, value)
        return value

    def updateAttr(self, owner, name, op, value, postfix=False):
        old = getattr(owner, name)
        setattr(owner, name, self.operators[op](old, value))
        return old if postfix else getattr(owner, name)

    def newArray(self, size, typeName):
        default = language["defaultValues"].get(typeName)
        element = None if default is None else ast.literal_eval(default)
        return [element] * int(size)

    def newObject(self, typeName):
        return SimpleNamespace(__type__=typeName)

def runProgram(code, inputs, runtime=None):
    namespace = {"__rt": runtime or Runtime(), "__builtins__": builtins}
    exec(compile(code, "<minicpp>", "exec"), namespace)
    return namespace["__program"](list(inputs))

RUNTIME_ERROR = "Runtime error: "

def execute(code, inputs, runtime=None):
    """Run generated code against the program input tokens.

    Returns the program output, or a "Runtime error: ..." string when the
    program faults for any reason.
    """
    try:
        return runProgram(code, inputs, runtime)
    except Exception as e:
        logging.info("Program faulted: %s: %s", type(e).__name__, e)
        return RUNTIME_ERROR + str(e)
