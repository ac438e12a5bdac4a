"""Tests for statement and expression parsing."""

import pytest

from minicpp import ast
from minicpp.errors import InvalidStatementError, NestingTooDeepError, ParseError, TypeMismatchError
from minicpp.lexer import tokenize
from minicpp.parser import Parser, parse


def parseSource(source):
    return parse(tokenize(source))


@pytest.mark.parametrize(
    "source, rendered",
    [
        ("1 + 2 * 3", "(1 + (2 * 3))"),
        ("a = b = 1", "(a = (b = 1))"),
        ("x.y.z", "((x.y).z)"),
        ("p->next->value", "((p->next)->value)"),
        ("a - b - c", "((a - b) - c)"),
        ("a || b && c", "(a || (b && c))"),
        ("a | b ^ c & d", "(a | (b ^ (c & d)))"),
        ("a == b < c", "(a == (b < c))"),
        ("!a == b", "((!a) == b)"),
        ("-x * +y", "((-x) * (+y))"),
        ("i++ + ++j", "((i++) + (++j))"),
        ("(1 + 2) * 3", "((1 + 2) * 3)"),
        ("f(1, a + 2)", "f(1, (a + 2))"),
        ("f()", "f()"),
        ("a[i + 1] = 3", "(a[(i + 1)] = 3)"),
        ("x += y * 2", "(x += (y * 2))"),
        ("1 << 2 + 1", "(1 << (2 + 1))"),
        ("std::max(a, b)", "(std::max(a, b))"),
        ("new Node", "new Node()"),
        ("new int[n * 2]", "new int[(n * 2)]"),
        ("[1]", "[1]"),
        ("true && false", "(true && false)"),
        ("endl", '"\\n"'),
    ],
)
def test_expression_rendering(expr, source, rendered):
    assert expr(source) == rendered


def test_expression_tree_shape():
    node = Parser(tokenize("1 + 2 * 3")).parseExpression()
    assert node == ast.Binary("+", ast.Number("1"), ast.Binary("*", ast.Number("2"), ast.Number("3")))


@pytest.mark.parametrize("source", [")", "f() = 1", "3 +", "++f()", "new 5"])
def test_malformed_expressions(source):
    with pytest.raises(ParseError):
        Parser(tokenize(source)).parseExpression()


def test_variable_declarations():
    assert parseSource("int x = 5; const int* p; double d;") == [
        ast.Declaration("int", "x", ast.Number("5")),
        ast.Declaration("const int*", "p"),
        ast.Declaration("double", "d"),
    ]


def test_array_declaration_allocates():
    assert parseSource("int a[3];") == [ast.Declaration("int[]", "a", ast.New("int", ast.Number("3")))]


def test_function_definition_and_prototype():
    statements = parseSource("int add(int a, int b) { return a + b; }\nvoid f(int n);")
    assert statements == [
        ast.Function(
            "int",
            "add",
            [ast.Parameter("int", "a"), ast.Parameter("int", "b")],
            ast.Block([ast.Return(ast.Binary("+", ast.Identifier("a"), ast.Identifier("b")))]),
        ),
        ast.FunctionDecl("void", "f", [ast.Parameter("int", "n")]),
    ]


def test_include_and_using():
    assert parseSource("#include <iostream>\nusing namespace std;") == [ast.Include("iostream"), ast.Using("std")]


def test_input_statement():
    statements = parseSource("int a; int b[2]; cin >> a >> b[1];")
    assert statements[-1] == ast.Input([ast.Identifier("a"), ast.Index(ast.Identifier("b"), ast.Number("1"))])


def test_print_statement_with_endl():
    statements = parseSource('cout << "n = " << n << endl;')
    assert statements == [ast.Print([ast.String('"n = "'), ast.Identifier("n"), ast.endl()])]
    assert statements[0].parts[-1].isEndl


def test_print_accepts_bare_endl():
    assert parseSource("cout << 1 endl;") == [ast.Print([ast.Number("1"), ast.endl()])]


def test_print_shift_needs_parentheses():
    assert parseSource("cout << (1 << 2) << 3;") == [
        ast.Print([ast.Binary("<<", ast.Number("1"), ast.Number("2")), ast.Number("3")])
    ]


def test_control_flow_statements():
    statements = parseSource(
        "int x; int y;"
        "if (x) y = 1; else if (y) { y = 2; } else y = 3;"
        "while (x < 3) x++;"
        "do { x--; } while (x);"
    )
    ifStmt, whileStmt, doStmt = statements[2:]
    assert isinstance(ifStmt, ast.If)
    assert isinstance(ifStmt.elseStmt, ast.If)
    assert isinstance(ifStmt.elseStmt.thenStmt, ast.Block)
    assert whileStmt == ast.While(
        ast.Binary("<", ast.Identifier("x"), ast.Number("3")),
        ast.ExpressionStatement(ast.Postfix("++", ast.Identifier("x"))),
    )
    assert doStmt == ast.DoWhile(
        ast.Identifier("x"),
        ast.Block([ast.ExpressionStatement(ast.Postfix("--", ast.Identifier("x")))]),
    )


def test_for_clauses_are_optional():
    assert parseSource("for (;;) break;") == [ast.For(None, ast.Boolean(True), None, ast.Break())]


def test_for_with_declaration():
    (loop,) = parseSource("for (int i = 0; i < 3; i++) continue;")
    assert loop.init == ast.Declaration("int", "i", ast.Number("0"))
    assert loop.update == ast.Postfix("++", ast.Identifier("i"))
    assert loop.body == ast.Continue()


def test_return_without_value():
    assert parseSource("void f() { return; }")[0].body == ast.Block([ast.Return()])


def test_missing_closing_brace():
    with pytest.raises(SyntaxError) as excinfo:
        parseSource("int main() { int a;")
    assert excinfo.value.expected == "DELIMITER '}'"
    assert excinfo.value.found is None
    assert str(excinfo.value) == "Expected DELIMITER '}', got end of input"


def test_missing_closing_paren_names_found_token():
    with pytest.raises(ParseError) as excinfo:
        parseSource("while (x { }")
    assert str(excinfo.value) == "Expected DELIMITER ')', got DELIMITER '{'"


def test_unsupported_keyword():
    with pytest.raises(ParseError, match="Unsupported keyword: class"):
        parseSource("class Foo {};")


def test_print_rejects_stray_operand():
    with pytest.raises(ParseError, match="Expected '<<' or 'endl' in cout, got NUMBER '2'"):
        parseSource("cout << 1 2;")


def test_input_needs_assignable_target():
    with pytest.raises(ParseError):
        parseSource("cin >> 5;")


def test_invalid_statement_keeps_cause():
    with pytest.raises(InvalidStatementError) as excinfo:
        parseSource("x + ;")
    assert str(excinfo.value) == "Invalid statement: x"
    assert isinstance(excinfo.value.__cause__, ParseError)
    assert "Unexpected token in expression" in str(excinfo.value.__cause__)


def test_missing_semicolon_is_invalid_statement():
    with pytest.raises(InvalidStatementError):
        parseSource("int x; x = 1")


@pytest.mark.parametrize(
    "source, message",
    [
        ('int x; x = "hi";', "Type error: cannot assign string to int 'x'"),
        ('float f; f = "hi";', "Type error: cannot assign string to float 'f'"),
        ("int x; x = 1.5;", "Type error: cannot assign float to int 'x'"),
        ("string s; s = 5;", "Type error: cannot assign number to string 's'"),
        ("const int k = 1; k = endl;", "Type error: cannot assign string to int 'k'"),
        ("y = 1;", "Undeclared variable 'y'"),
    ],
)
def test_assignment_type_mismatch(source, message):
    with pytest.raises(TypeMismatchError) as excinfo:
        parseSource(source)
    assert str(excinfo.value) == message


@pytest.mark.parametrize(
    "source",
    [
        'int x = "hi";',
        'int x; int y; x = y = "s";',
        "float f; f = 1.5;",
        'string s; s = "ok";',
        "void f(int n) { n = 2; }",
        "int a[2]; a[0] = 1.5;",
    ],
)
def test_assignments_outside_the_checked_pattern(source):
    parseSource(source)


def test_symbol_table_is_flat_and_overwrites():
    parser = Parser(tokenize("int x; void f(string s) { float x; }"))
    parser.parseProgram()
    assert parser.symbols.lookup("x") == "float"
    assert parser.symbols.lookup("s") == "string"
    assert parser.symbols.lookup("f") == "void"


def test_nesting_limit_on_expressions():
    with pytest.raises(NestingTooDeepError):
        Parser(tokenize("((((1))))"), maxDepth=3).parseExpression()


def test_nesting_limit_is_not_hidden_by_statement_wrapping():
    source = "int x; x = " + "(" * 300 + "1" + ")" * 300 + ";"
    with pytest.raises(NestingTooDeepError):
        parseSource(source)


def test_nesting_limit_on_blocks():
    with pytest.raises(NestingTooDeepError):
        Parser(tokenize("{" * 10 + "}" * 10), maxDepth=5).parseProgram()
