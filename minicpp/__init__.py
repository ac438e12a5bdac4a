from minicpp.codegen import generate
from minicpp.compiler import Compiler
from minicpp.errors import (CompileError, InputExhausted, InvalidStatementError, LexicalError,
                            NestingTooDeepError, ParseError, ProgramFault, TypeMismatchError,
                            UnimplementedFunction)
from minicpp.lexer import tokenize
from minicpp.parser import parse
from minicpp.runtime import execute, splitInput

__version__ = "0.1.0"
