# This file is part of the minicpp project.
#
# Copyright (C) 2025 GiladLeef
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

import keyword
import logging
import re

from minicpp import ast
from minicpp.errors import NestingTooDeepError
from minicpp.lang import language as defaultLanguage

# Kept below the Python compiler's own limits of 100 indentation levels
# and 200 nested brackets.
MAX_INDENT = 90
MAX_EXPRESSION_DEPTH = 150

# Escapes C and Python read the same way; any other C escape stands for the
# character itself.
PYTHON_ESCAPES = "\\'\"abfnrtvuU01234567"
C_ESCAPE = re.compile(r"\\(x[0-9a-fA-F]+|.)")

def safeName(name):
    """Rename identifiers that would clash with Python or the program's own helpers."""
    if keyword.iskeyword(name) or name.startswith("__"):
        return name + "_"
    return name

def pythonLiteral(text):
    """Rewrite the escapes of a C string or char literal for Python."""
    def escape(match):
        sequence = match.group(1)
        if sequence[0] == "x" and len(sequence) > 1:
            return "\\x%02x" % (int(sequence[1:], 16) & 0xFF)
        if sequence in PYTHON_ESCAPES:
            return match.group(0)
        return sequence
    return C_ESCAPE.sub(escape, text)

def isLineBreak(part):
    if isinstance(part, ast.String):
        return part.isEndl
    if isinstance(part, ast.Scope):
        return isLineBreak(part.right)
    return False

def needsImplicitMain(statements):
    return not any(isinstance(s, ast.Function) and s.name == "main" for s in statements)

class Codegen:
    def __init__(self, language=defaultLanguage):
        self.language = language
        self.pythonOps = language["operators"]["python"]
        self.defaultValues = language["defaultValues"]
        self.typeModifiers = language["typeModifiers"]
        self.indent = 0
        self.lines = []
        self.includes = []
        self.scopes = []
        # One entry per enclosing loop: what must run before a continue, or None.
        self.loops = []
        # Source name to Python name for bindings a for initializer declares.
        self.renames = []
        self.loopBindings = 0
        self.expressionDepth = 0

    def line(self, text):
        self.lines.append("    " * self.indent + text)

    def codegen(self, node):
        nodeType = node.__class__.__name__
        method = getattr(self, nodeType, None)
        if method is None:
            raise NotImplementedError("Codegen not implemented for " + nodeType)
        if not isinstance(node, ast.Expression):
            return method(node)
        self.expressionDepth += 1
        try:
            if self.expressionDepth > MAX_EXPRESSION_DEPTH:
                raise NestingTooDeepError(MAX_EXPRESSION_DEPTH, where="in an expression")
            return method(node)
        finally:
            self.expressionDepth -= 1

    def bind(self, name):
        for renames in reversed(self.renames):
            if name in renames:
                return renames[name]
        return safeName(name)

    def generateCode(self, statements, isTopLevel=True):
        self.indent = 0
        self.lines = []
        self.includes = []
        self.scopes = []
        self.loops = []
        self.renames = []
        self.loopBindings = 0
        self.expressionDepth = 0
        if isTopLevel:
            self.program(statements)
        else:
            self.emitSequence(statements)
        return "\n".join(self.lines) + "\n"

    def program(self, statements):
        prototypes = self.hoist(statements)
        self.line("def __program(__input):")
        self.indent += 1
        self.prologue()
        for proto in prototypes:
            self.stub(proto)
        rest = [s for s in statements if not isinstance(s, ast.FunctionDecl)]
        if needsImplicitMain(statements):
            logging.debug("No main() defined, wrapping %d top-level statements", len(rest))
            self.scopes.append({p.name for p in prototypes})
            self.function("main", [], rest)
        else:
            self.scopes.append(self.boundNames(statements))
            self.emitSequence(rest)
        self.scopes.pop()
        self.line("main()")
        self.line('return "".join(__outputs)')
        self.indent -= 1

    def hoist(self, statements):
        prototypes = []
        for node in statements:
            if isinstance(node, ast.Include):
                self.includes.append(node.path)
            elif isinstance(node, ast.FunctionDecl):
                prototypes.append(node)
        if self.includes:
            logging.debug("Includes: %s", ", ".join(self.includes))
        if prototypes:
            logging.debug("Stubbing prototypes: %s", ", ".join(p.name for p in prototypes))
        return prototypes

    def prologue(self):
        self.line("def __read():")
        self.indent += 1
        self.line("if not __input:")
        self.line("    raise __rt.InputExhausted()")
        self.line("return __rt.number(__input.pop(0))")
        self.indent -= 1
        self.line("__outputs = []")

    def stub(self, proto):
        self.line("def %s(%s):" % (safeName(proto.name), self.paramList(proto.name, proto.params)))
        self.line("    raise __rt.UnimplementedFunction(%r)" % proto.name)

    def emitSequence(self, statements):
        # Definitions come first so calls may precede them in the source.
        for node in statements:
            if isinstance(node, ast.FunctionDecl):
                self.codegen(node)
        for node in statements:
            if isinstance(node, ast.Function):
                self.codegen(node)
        for node in statements:
            if not isinstance(node, (ast.Function, ast.FunctionDecl)):
                self.codegen(node)

    def suite(self, statements, before=None):
        self.indent += 1
        if self.indent > MAX_INDENT:
            raise NestingTooDeepError(MAX_INDENT, where="of blocks")
        start = len(self.lines)
        self.emitSequence(statements)
        if before is not None:
            before()
        if len(self.lines) == start:
            self.line("pass")
        self.indent -= 1

    def boundNames(self, statements):
        names = set()
        for node in ast.walk(statements):
            if isinstance(node, (ast.Declaration, ast.Function, ast.FunctionDecl)):
                names.add(node.name)
        return names

    def assignedNames(self, statements):
        names = set()
        for node in ast.walk(statements):
            if isinstance(node, ast.Assign):
                targets = [node.target]
            elif isinstance(node, (ast.Unary, ast.Postfix)) and node.op in ("++", "--"):
                targets = [node.operand]
            elif isinstance(node, ast.Input):
                targets = node.targets
            else:
                continue
            names.update(t.name for t in targets if isinstance(t, ast.Identifier))
        return names

    def paramList(self, name, params):
        default = "=None" if name == "main" else ""
        return ", ".join(safeName(p.name) + default for p in params)

    def function(self, name, params, statements):
        bound = {p.name for p in params} | self.boundNames(statements)
        enclosing = set().union(*self.scopes) if self.scopes else set()
        nonlocals = sorted((self.assignedNames(statements) - bound) & enclosing)
        self.line("def %s(%s):" % (safeName(name), self.paramList(name, params)))
        self.indent += 1
        if nonlocals:
            self.line("nonlocal " + ", ".join(self.bind(n) for n in nonlocals))
        self.indent -= 1
        self.scopes.append(bound)
        loops, self.loops = self.loops, []
        self.suite(statements)
        self.loops = loops
        self.scopes.pop()

    # Statements

    def Include(self, node):
        pass

    def Using(self, node):
        pass

    def FunctionDecl(self, node):
        self.stub(node)

    def Function(self, node):
        self.function(node.name, node.params, node.body.statements)

    def Declaration(self, node):
        if node.initializer is not None:
            value = self.codegen(node.initializer)
        else:
            value = self.defaultValue(node.varType)
        self.line("%s = %s" % (self.bind(node.name), value))

    def defaultValue(self, varType):
        if varType.endswith(("*", "&", "[]")):
            return "None"
        words = [w for w in varType.split() if w not in self.typeModifiers]
        return self.defaultValues.get(words[-1] if words else "", "None")

    def Block(self, node):
        self.emitSequence(node.statements)

    def Input(self, node):
        for target in node.targets:
            self.line("%s = __read()" % self.codegen(target))

    def Print(self, node):
        if not node.parts:
            return
        pieces = []
        previous = None
        for part in node.parts:
            if previous is not None and not isLineBreak(previous) and not isLineBreak(part):
                pieces.append('" "')
            pieces.append(self.shown(part))
            previous = part
        self.line("__outputs.append(%s)" % " + ".join(pieces))

    def shown(self, part):
        if isinstance(part, ast.String):
            return self.codegen(part)
        return "__rt.show(%s)" % self.codegen(part)

    def If(self, node, opener="if"):
        self.line("%s %s:" % (opener, self.codegen(node.condition)))
        self.suite([node.thenStmt])
        if isinstance(node.elseStmt, ast.If):
            self.If(node.elseStmt, "elif")
        elif node.elseStmt is not None:
            self.line("else:")
            self.suite([node.elseStmt])

    def While(self, node):
        self.line("while %s:" % self.codegen(node.condition))
        self.loop(node.body, None)

    def DoWhile(self, node):
        condition = self.codegen(node.condition)

        def exitCheck():
            self.line("if not %s:" % condition)
            self.line("    break")

        self.line("while True:")
        self.loop(node.body, exitCheck)

    def For(self, node):
        # Python has no block scope, so a declared loop variable gets its own
        # name for the extent of the loop.
        renames = {}
        if isinstance(node.init, ast.Declaration):
            self.loopBindings += 1
            renames[node.init.name] = "__%s_%d" % (node.init.name, self.loopBindings)
        self.renames.append(renames)
        if node.init is not None:
            self.codegen(node.init)
        self.line("while %s:" % self.codegen(node.condition))
        update = None
        if node.update is not None:
            update = lambda: self.expressionStatement(node.update)
        self.loop(node.body, update)
        self.renames.pop()

    def loop(self, body, beforeNext):
        self.loops.append(beforeNext)
        self.suite([body], beforeNext)
        self.loops.pop()

    def Return(self, node):
        if node.value is None:
            self.line("return")
        else:
            self.line("return " + self.codegen(node.value))

    def Break(self, node):
        self.line("break")

    def Continue(self, node):
        if self.loops and self.loops[-1] is not None:
            self.loops[-1]()
        self.line("continue")

    def ExpressionStatement(self, node):
        self.expressionStatement(node.expression)

    def expressionStatement(self, expr):
        if isinstance(expr, ast.Assign):
            target, value = self.codegen(expr.target), self.codegen(expr.value)
            if expr.op == "=":
                self.line("%s = %s" % (target, value))
            elif expr.op not in ("/=", "%="):
                self.line("%s %s %s" % (target, expr.op, value))
            elif isinstance(expr.target, ast.Identifier):
                self.line("%s = %s" % (target, self.binary(expr.op[:-1], target, value)))
            else:
                self.line(self.codegen(expr))
        elif isinstance(expr, (ast.Unary, ast.Postfix)) and expr.op in ("++", "--"):
            self.line("%s %s= 1" % (self.codegen(expr.operand), expr.op[0]))
        else:
            self.line(self.codegen(expr))

    # Expressions

    def Number(self, node):
        text = node.text
        if re.fullmatch(r"0\d+", text):
            return str(int(text, 8)) if re.fullmatch(r"[0-7]+", text) else str(int(text))
        return text

    def String(self, node):
        return pythonLiteral(node.text)

    def Char(self, node):
        return pythonLiteral(node.text)

    def Boolean(self, node):
        return "True" if node.value else "False"

    def Identifier(self, node):
        return self.bind(node.name)

    def Unary(self, node):
        if node.op in ("++", "--"):
            return self.increment(node.operand, node.op[0], False)
        op = self.pythonOps.get(node.op, node.op)
        return "(%s%s)" % (op, self.codegen(node.operand))

    def Postfix(self, node):
        return self.increment(node.operand, node.op[0], True)

    def increment(self, target, op, postfix):
        if isinstance(target, ast.Identifier):
            name = self.bind(target.name)
            text = "(%s := %s %s 1)" % (name, name, op)
            if postfix:
                undo = "-" if op == "+" else "+"
                text = "(%s %s 1)" % (text, undo)
            return text
        if isinstance(target, ast.Index):
            return "__rt.update(%s, %s, %r, 1, %s)" % (
                self.codegen(target.target), self.codegen(target.index), op, postfix)
        return "__rt.updateAttr(%s, %r, %r, 1, %s)" % (
            self.codegen(target.target), safeName(target.name), op, postfix)

    def binary(self, op, left, right):
        if op == "/":
            return "__rt.div(%s, %s)" % (left, right)
        if op == "%":
            return "__rt.mod(%s, %s)" % (left, right)
        return "(%s %s %s)" % (left, self.pythonOps.get(op, op), right)

    def Binary(self, node):
        return self.binary(node.op, self.codegen(node.left), self.codegen(node.right))

    def Assign(self, node):
        value = self.codegen(node.value)
        target = node.target
        op = node.op[:-1]
        if isinstance(target, ast.Identifier):
            name = self.bind(target.name)
            if op:
                value = self.binary(op, name, value)
            return "(%s := %s)" % (name, value)
        if isinstance(target, ast.Index):
            owner, key = self.codegen(target.target), self.codegen(target.index)
            if op:
                return "__rt.update(%s, %s, %r, %s)" % (owner, key, op, value)
            return "__rt.store(%s, %s, %s)" % (owner, key, value)
        owner, attr = self.codegen(target.target), safeName(target.name)
        if op:
            return "__rt.updateAttr(%s, %r, %r, %s)" % (owner, attr, op, value)
        return "__rt.storeAttr(%s, %r, %s)" % (owner, attr, value)

    def Call(self, node):
        return "%s(%s)" % (self.codegen(node.callee), ", ".join(self.codegen(a) for a in node.args))

    def Member(self, node):
        return "%s.%s" % (self.codegen(node.target), safeName(node.name))

    def Scope(self, node):
        if isinstance(node.left, ast.Identifier) and node.left.name == "std":
            return self.codegen(node.right)
        return "%s.%s" % (self.codegen(node.left), self.codegen(node.right))

    def Index(self, node):
        return "%s[%s]" % (self.codegen(node.target), self.codegen(node.index))

    def ListLiteral(self, node):
        return "[%s]" % self.codegen(node.element)

    def New(self, node):
        if node.size is None:
            return "__rt.newObject(%r)" % node.typeName
        return "__rt.newArray(%s, %r)" % (self.codegen(node.size), node.typeName)

def generate(statements, isTopLevel=True):
    return Codegen().generateCode(statements, isTopLevel)
