import logging
import re
from contextlib import contextmanager

from minicpp import ast
from minicpp.errors import InvalidStatementError, NestingTooDeepError, ParseError, TypeMismatchError, describeToken
from minicpp.lang import language as defaultLanguage
from minicpp.symbols import SymbolTable

class Parser:
    def __init__(self, tokens, language=defaultLanguage, maxDepth=200):
        self.language = language
        self.tokens = tokens
        self.pos = 0
        self.symbols = SymbolTable()
        self.maxDepth = maxDepth
        self.depth = 0
        # While set, << and >> end a cin/cout operand instead of shifting.
        self.inStream = False
        self.statementParseMap = {}
        for key, funcName in language["statementParseMap"].items():
            self.statementParseMap[key] = getattr(self, funcName)
        operators = language["operators"]
        self.precedences = operators["precedences"]
        self.assignmentOps = operators["assignment"]
        self.prefixOps = operators["prefix"]
        self.postfixOps = operators["postfix"]
        self.memberOps = operators["member"]
        self.datatypes = language["datatypes"]
        self.typeModifiers = language["typeModifiers"]
        self.declarationKeywords = language["declarationKeywords"]

    def currentToken(self):
        return self.tokens[self.pos] if self.pos < len(self.tokens) else None

    def match(self, kind, text=None):
        token = self.currentToken()
        return token is not None and token.isA(kind, text)

    def advance(self):
        token = self.currentToken()
        self.pos += 1
        return token

    def consumeToken(self, kind, text=None):
        if self.match(kind, text):
            return self.advance()
        expected = kind if text is None else "%s '%s'" % (kind, text)
        token = self.currentToken()
        raise ParseError("Expected %s, got %s" % (expected, describeToken(token)), expected, token)

    def consumePairedTokens(self, openText, closeText, parseFunc):
        self.consumeToken("DELIMITER", openText)
        inStream, self.inStream = self.inStream, False
        try:
            result = parseFunc()
        finally:
            self.inStream = inStream
        self.consumeToken("DELIMITER", closeText)
        return result

    def parseDelimitedList(self, endText, delimiterText, parseFunc):
        result = []
        if not self.match("DELIMITER", endText):
            result.append(parseFunc())
            while self.match("DELIMITER", delimiterText):
                self.advance()
                result.append(parseFunc())
        return result

    @contextmanager
    def nested(self, token):
        self.depth += 1
        try:
            if self.depth > self.maxDepth:
                raise NestingTooDeepError(self.maxDepth, token)
            yield
        finally:
            self.depth -= 1

    @contextmanager
    def streamOperands(self):
        inStream, self.inStream = self.inStream, True
        try:
            yield
        finally:
            self.inStream = inStream

    def parseProgram(self):
        statements = []
        while self.currentToken() is not None:
            statements.append(self.parseStatement())
        logging.debug("Parsed %d top-level statements, %d symbols", len(statements), len(self.symbols))
        return statements

    # Statements

    def parseStatement(self):
        token = self.currentToken()
        if token is None:
            raise ParseError("Unexpected end of input, expected a statement", "statement", None)
        with self.nested(token):
            if token.kind == "INCLUDE":
                return self.parseInclude()
            if token.kind in ("KEYWORD", "DELIMITER") and token.text in self.statementParseMap:
                return self.statementParseMap[token.text]()
            if token.kind == "KEYWORD":
                if token.text in self.declarationKeywords:
                    return self.parseDeclaration()
                raise ParseError("Unsupported keyword: " + token.text, "statement", token)
            return self.parseExpressionStatement()

    def parseInclude(self):
        token = self.consumeToken("INCLUDE")
        return ast.Include(re.search(r"<([^>]+)>", token.text).group(1).strip())

    def parseUsing(self):
        self.consumeToken("KEYWORD", "using")
        self.consumeToken("KEYWORD", "namespace")
        name = self.consumeToken("IDENTIFIER").text
        self.consumeToken("DELIMITER", ";")
        return ast.Using(name)

    def parseType(self):
        words = []
        while self.currentToken() is not None and self.currentToken().kind == "KEYWORD" \
                and self.currentToken().text in self.typeModifiers:
            words.append(self.advance().text)
        token = self.currentToken()
        if token is not None and token.kind == "KEYWORD" and token.text in self.declarationKeywords \
                and token.text not in self.typeModifiers:
            words.append(self.advance().text)
        else:
            words.append(self.consumeToken("IDENTIFIER").text)
        typeName = " ".join(words)
        while self.match("OPERATOR", "*") or self.match("OPERATOR", "&"):
            typeName += self.advance().text
        return typeName

    def parseArraySuffix(self, typeName):
        if not self.match("DELIMITER", "["):
            return typeName, None
        self.advance()
        size = None if self.match("DELIMITER", "]") else self.parseExpression()
        self.consumeToken("DELIMITER", "]")
        return typeName + "[]", size

    def parseDeclaration(self):
        typeName = self.parseType()
        name = self.consumeToken("IDENTIFIER").text
        if self.match("DELIMITER", "("):
            self.symbols.declare(name, typeName)
            params = self.consumePairedTokens("(", ")",
                                              lambda: self.parseDelimitedList(")", ",", self.parseParameter))
            if self.match("DELIMITER", "{"):
                body = self.parseBlock()
                return ast.Function(typeName, name, params, body)
            self.consumeToken("DELIMITER", ";")
            return ast.FunctionDecl(typeName, name, params)

        varType, size = self.parseArraySuffix(typeName)
        self.symbols.declare(name, varType)
        initializer = None
        if size is not None:
            initializer = ast.New(typeName.split()[-1].rstrip("*&"), size)
        if self.match("OPERATOR", "="):
            self.advance()
            initializer = self.parseExpression()
        self.consumeToken("DELIMITER", ";")
        return ast.Declaration(varType, name, initializer)

    def parseParameter(self):
        typeName = self.parseType()
        name = self.consumeToken("IDENTIFIER").text
        typeName, _ = self.parseArraySuffix(typeName)
        self.symbols.declare(name, typeName)
        return ast.Parameter(typeName, name)

    def parseBlock(self):
        return ast.Block(self.consumePairedTokens("{", "}", self.parseBlockBody))

    def parseBlockBody(self):
        stmts = []
        while self.currentToken() is not None and not self.match("DELIMITER", "}"):
            stmts.append(self.parseStatement())
        return stmts

    def parseInput(self):
        self.consumeToken("KEYWORD", "cin")
        targets = []
        with self.streamOperands():
            while self.match("STREAM", ">>"):
                self.advance()
                token = self.currentToken()
                target = self.parseExpression()
                if not isinstance(target, ast.ASSIGNABLE):
                    raise ParseError("Cannot read input into " + target.render(), "assignable expression", token)
                targets.append(target)
        self.consumeToken("DELIMITER", ";")
        return ast.Input(targets)

    def parsePrint(self):
        self.consumeToken("KEYWORD", "cout")
        parts = []
        with self.streamOperands():
            while not self.match("DELIMITER", ";"):
                if self.match("STREAM", "<<"):
                    self.advance()
                    parts.append(self.parseExpression())
                elif self.match("KEYWORD", "endl"):
                    self.advance()
                    parts.append(ast.endl())
                else:
                    token = self.currentToken()
                    raise ParseError("Expected '<<' or 'endl' in cout, got " + describeToken(token),
                                     "STREAM '<<'", token)
        self.consumeToken("DELIMITER", ";")
        return ast.Print(parts)

    def parseCondition(self):
        return self.consumePairedTokens("(", ")", self.parseExpression)

    def parseIf(self):
        self.consumeToken("KEYWORD", "if")
        condition = self.parseCondition()
        thenStmt = self.parseStatement()
        elseStmt = None
        if self.match("KEYWORD", "else"):
            self.advance()
            elseStmt = self.parseStatement()
        return ast.If(condition, thenStmt, elseStmt)

    def parseWhile(self):
        self.consumeToken("KEYWORD", "while")
        condition = self.parseCondition()
        return ast.While(condition, self.parseStatement())

    def parseDoWhile(self):
        self.consumeToken("KEYWORD", "do")
        body = self.parseStatement()
        self.consumeToken("KEYWORD", "while")
        condition = self.parseCondition()
        self.consumeToken("DELIMITER", ";")
        return ast.DoWhile(condition, body)

    def parseFor(self):
        self.consumeToken("KEYWORD", "for")
        self.consumeToken("DELIMITER", "(")
        init = None
        if self.match("DELIMITER", ";"):
            self.advance()
        else:
            init = self.parseStatement()
        condition = ast.Boolean(True)
        if not self.match("DELIMITER", ";"):
            condition = self.parseExpression()
        self.consumeToken("DELIMITER", ";")
        update = None
        if not self.match("DELIMITER", ")"):
            update = self.parseExpression()
        self.consumeToken("DELIMITER", ")")
        return ast.For(init, condition, update, self.parseStatement())

    def parseReturn(self):
        self.consumeToken("KEYWORD", "return")
        value = None
        if not self.match("DELIMITER", ";"):
            value = self.parseExpression()
        self.consumeToken("DELIMITER", ";")
        return ast.Return(value)

    def parseBreak(self):
        self.consumeToken("KEYWORD", "break")
        self.consumeToken("DELIMITER", ";")
        return ast.Break()

    def parseContinue(self):
        self.consumeToken("KEYWORD", "continue")
        self.consumeToken("DELIMITER", ";")
        return ast.Continue()

    def parseExpressionStatement(self):
        token = self.currentToken()
        try:
            expr = self.parseExpression()
            self.checkAssignment(expr)
            self.consumeToken("DELIMITER", ";")
        except NestingTooDeepError:
            raise
        except ParseError as e:
            raise InvalidStatementError(token) from e
        return ast.ExpressionStatement(expr)

    def checkAssignment(self, expr):
        if not (isinstance(expr, ast.Assign) and expr.op == "=" and isinstance(expr.target, ast.Identifier)):
            return
        name = expr.target.name
        if name not in self.symbols:
            raise TypeMismatchError("Undeclared variable '%s'" % name, name)
        declared = self.symbols.baseType(name)
        value = expr.value
        if declared in ("int", "float") and isinstance(value, ast.String):
            raise TypeMismatchError("Type error: cannot assign string to %s '%s'" % (declared, name), name)
        if declared == "int" and isinstance(value, ast.Number) and value.isDecimal():
            raise TypeMismatchError("Type error: cannot assign float to int '%s'" % name, name)
        if declared == "string" and isinstance(value, ast.Number):
            raise TypeMismatchError("Type error: cannot assign number to string '%s'" % name, name)

    # Expressions

    def binaryOperator(self, token):
        if token is None:
            return None
        if token.kind in ("OPERATOR", "SCOPE") and token.text in self.precedences:
            return token.text
        if token.kind == "STREAM" and not self.inStream:
            return token.text
        return None

    def parseExpression(self, minPrecedence=1):
        left = self.parsePrimary()
        while True:
            op = self.binaryOperator(self.currentToken())
            if op is None or self.precedences[op] < minPrecedence:
                break
            precedence = self.precedences[op]
            token = self.advance()
            if op in self.memberOps:
                name = self.consumeToken("IDENTIFIER").text
                left = self.parsePostfixChain(ast.Member(op, left, name))
                continue
            if op in self.assignmentOps:
                if not isinstance(left, ast.ASSIGNABLE):
                    raise ParseError("Invalid left-hand side for assignment", "assignable expression", token)
                left = ast.Assign(op, left, self.parseExpression(precedence))
                continue
            right = self.parseExpression(precedence + 1)
            if op == "::":
                left = ast.Scope(left, right)
            else:
                left = ast.Binary(op, left, right)
        return left

    def parsePrimary(self):
        token = self.currentToken()
        if token is None:
            raise ParseError("Unexpected end of input in expression", "expression", None)
        with self.nested(token):
            if token.kind == "OPERATOR" and token.text in self.prefixOps:
                self.advance()
                operand = self.parsePrimary()
                if token.text in self.postfixOps and not isinstance(operand, ast.ASSIGNABLE):
                    raise ParseError("Invalid operand for " + token.text, "assignable expression", token)
                return ast.Unary(token.text, operand)
            if token.kind == "NUMBER":
                return ast.Number(self.advance().text)
            if token.kind == "STRING":
                return ast.String(self.advance().text)
            if token.kind == "CHAR":
                return ast.Char(self.advance().text)
            if token.isA("KEYWORD", "true") or token.isA("KEYWORD", "false"):
                return ast.Boolean(self.advance().text == "true")
            if token.isA("KEYWORD", "endl"):
                self.advance()
                return ast.endl()
            if token.kind == "IDENTIFIER":
                self.advance()
                node = self.parsePostfixChain(ast.Identifier(token.text))
                return self.parseAssignmentOrPostfix(node)
            if token.isA("DELIMITER", "("):
                return self.consumePairedTokens("(", ")", self.parseExpression)
            if token.isA("DELIMITER", "["):
                return ast.ListLiteral(self.consumePairedTokens("[", "]", self.parseExpression))
            if token.isA("KEYWORD", "new"):
                return self.parseNew()
        raise ParseError("Unexpected token in expression: " + token.text, "expression", token)

    def parsePostfixChain(self, node):
        while True:
            if self.match("DELIMITER", "("):
                args = self.consumePairedTokens("(", ")",
                                                lambda: self.parseDelimitedList(")", ",", self.parseExpression))
                node = ast.Call(node, args)
            elif self.match("DELIMITER", "["):
                node = ast.Index(node, self.consumePairedTokens("[", "]", self.parseExpression))
            elif self.currentToken() is not None and self.currentToken().kind == "OPERATOR" \
                    and self.currentToken().text in self.memberOps:
                op = self.advance().text
                node = ast.Member(op, node, self.consumeToken("IDENTIFIER").text)
            else:
                return node

    def parseAssignmentOrPostfix(self, node):
        token = self.currentToken()
        if token is None or token.kind != "OPERATOR":
            return node
        if token.text in self.assignmentOps or token.text in self.postfixOps:
            if not isinstance(node, ast.ASSIGNABLE):
                raise ParseError("Invalid left-hand side for " + token.text, "assignable expression", token)
            self.advance()
            if token.text in self.postfixOps:
                return ast.Postfix(token.text, node)
            return ast.Assign(token.text, node, self.parseExpression(self.precedences[token.text]))
        return node

    def parseNew(self):
        self.consumeToken("KEYWORD", "new")
        token = self.currentToken()
        if token is not None and token.kind == "KEYWORD" and token.text in self.datatypes:
            typeName = self.advance().text
        else:
            typeName = self.consumeToken("IDENTIFIER").text
        if self.match("DELIMITER", "["):
            return ast.New(typeName, self.consumePairedTokens("[", "]", self.parseExpression))
        if self.match("DELIMITER", "("):
            self.advance()
            self.consumeToken("DELIMITER", ")")
        return ast.New(typeName)

def parse(tokens, maxDepth=200):
    return Parser(tokens, maxDepth=maxDepth).parseProgram()
