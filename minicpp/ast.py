class ASTNode:
    fields = ()

    def __eq__(self, other):
        return type(self) is type(other) and all(
            getattr(self, f) == getattr(other, f) for f in self.fields)

    def __ne__(self, other):
        return not self == other

    __hash__ = None

    def __repr__(self):
        return type(self).__name__ + "(" + ", ".join(repr(getattr(self, f)) for f in self.fields) + ")"

class Expression(ASTNode):
    def render(self):
        raise NotImplementedError(type(self).__name__)

    def __str__(self):
        return self.render()

# Statements

class Include(ASTNode):
    fields = ("path",)

    def __init__(self, path):
        self.path = path

class Using(ASTNode):
    fields = ("namespace",)

    def __init__(self, namespace):
        self.namespace = namespace

class Parameter(ASTNode):
    fields = ("type", "name")

    def __init__(self, type, name):
        self.type = type
        self.name = name

class Declaration(ASTNode):
    fields = ("varType", "name", "initializer")

    def __init__(self, varType, name, initializer=None):
        self.varType = varType
        self.name = name
        self.initializer = initializer

class FunctionDecl(ASTNode):
    fields = ("returnType", "name", "params")

    def __init__(self, returnType, name, params):
        self.returnType = returnType
        self.name = name
        self.params = params

class Function(ASTNode):
    fields = ("returnType", "name", "params", "body")

    def __init__(self, returnType, name, params, body):
        self.returnType = returnType
        self.name = name
        self.params = params
        self.body = body

class Block(ASTNode):
    fields = ("statements",)

    def __init__(self, statements):
        self.statements = statements

class Input(ASTNode):
    fields = ("targets",)

    def __init__(self, targets):
        self.targets = targets

class Print(ASTNode):
    fields = ("parts",)

    def __init__(self, parts):
        self.parts = parts

class If(ASTNode):
    fields = ("condition", "thenStmt", "elseStmt")

    def __init__(self, condition, thenStmt, elseStmt=None):
        self.condition = condition
        self.thenStmt = thenStmt
        self.elseStmt = elseStmt

class While(ASTNode):
    fields = ("condition", "body")

    def __init__(self, condition, body):
        self.condition = condition
        self.body = body

class DoWhile(ASTNode):
    fields = ("condition", "body")

    def __init__(self, condition, body):
        self.condition = condition
        self.body = body

class For(ASTNode):
    fields = ("init", "condition", "update", "body")

    def __init__(self, init, condition, update, body):
        self.init = init
        self.condition = condition
        self.update = update
        self.body = body

class Return(ASTNode):
    fields = ("value",)

    def __init__(self, value=None):
        self.value = value

class Break(ASTNode):
    pass

class Continue(ASTNode):
    pass

class ExpressionStatement(ASTNode):
    fields = ("expression",)

    def __init__(self, expression):
        self.expression = expression

# Expressions. render() gives the fully parenthesized source form.

class Number(Expression):
    fields = ("text",)

    def __init__(self, text):
        self.text = text

    def isDecimal(self):
        return any(c in self.text for c in ".eE")

    def render(self):
        return self.text

class String(Expression):
    fields = ("text", "isEndl")

    def __init__(self, text, isEndl=False):
        self.text = text
        self.isEndl = isEndl

    def render(self):
        return self.text

NEWLINE = '"\\n"'

def endl():
    return String(NEWLINE, True)

class Char(Expression):
    fields = ("text",)

    def __init__(self, text):
        self.text = text

    def render(self):
        return self.text

class Boolean(Expression):
    fields = ("value",)

    def __init__(self, value):
        self.value = value

    def render(self):
        return "true" if self.value else "false"

class Identifier(Expression):
    fields = ("name",)

    def __init__(self, name):
        self.name = name

    def render(self):
        return self.name

class Unary(Expression):
    fields = ("op", "operand")

    def __init__(self, op, operand):
        self.op = op
        self.operand = operand

    def render(self):
        return "(%s%s)" % (self.op, self.operand.render())

class Postfix(Expression):
    fields = ("op", "operand")

    def __init__(self, op, operand):
        self.op = op
        self.operand = operand

    def render(self):
        return "(%s%s)" % (self.operand.render(), self.op)

class Binary(Expression):
    fields = ("op", "left", "right")

    def __init__(self, op, left, right):
        self.op = op
        self.left = left
        self.right = right

    def render(self):
        return "(%s %s %s)" % (self.left.render(), self.op, self.right.render())

class Assign(Expression):
    fields = ("op", "target", "value")

    def __init__(self, op, target, value):
        self.op = op
        self.target = target
        self.value = value

    def render(self):
        return "(%s %s %s)" % (self.target.render(), self.op, self.value.render())

class Call(Expression):
    fields = ("callee", "args")

    def __init__(self, callee, args):
        self.callee = callee
        self.args = args

    def render(self):
        return "%s(%s)" % (self.callee.render(), ", ".join(a.render() for a in self.args))

class Member(Expression):
    fields = ("op", "target", "name")

    def __init__(self, op, target, name):
        self.op = op
        self.target = target
        self.name = name

    def render(self):
        return "(%s%s%s)" % (self.target.render(), self.op, self.name)

class Scope(Expression):
    fields = ("left", "right")

    def __init__(self, left, right):
        self.left = left
        self.right = right

    def render(self):
        return "(%s::%s)" % (self.left.render(), self.right.render())

class Index(Expression):
    fields = ("target", "index")

    def __init__(self, target, index):
        self.target = target
        self.index = index

    def render(self):
        return "%s[%s]" % (self.target.render(), self.index.render())

class ListLiteral(Expression):
    fields = ("element",)

    def __init__(self, element):
        self.element = element

    def render(self):
        return "[%s]" % self.element.render()

class New(Expression):
    fields = ("typeName", "size")

    def __init__(self, typeName, size=None):
        self.typeName = typeName
        self.size = size

    def render(self):
        if self.size is None:
            return "new %s()" % self.typeName
        return "new %s[%s]" % (self.typeName, self.size.render())

ASSIGNABLE = (Identifier, Index, Member)

def iterChildren(node):
    for name in node.fields:
        value = getattr(node, name)
        if isinstance(value, ASTNode):
            yield value
        elif isinstance(value, list):
            for item in value:
                if isinstance(item, ASTNode):
                    yield item

def walk(nodes, intoFunctions=False):
    """Yield every node reachable from nodes, depth first.

    Function bodies are only entered when intoFunctions is set; the Function
    node itself is always yielded.
    """
    stack = list(reversed(nodes))
    while stack:
        node = stack.pop()
        yield node
        if isinstance(node, Function) and not intoFunctions:
            continue
        stack.extend(reversed(list(iterChildren(node))))
