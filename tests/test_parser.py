import pytest

from pylox import AstPrinter, parse, scan
from pylox.syntax import (
    Assign, Binary, Block, Call, Expression, Get, Literal, Set, Var, While,
)


def parse_source(source):
    tokens, diagnostics = scan(source)
    assert diagnostics == []
    return parse(tokens)


def parse_expression(source):
    statements, diagnostics = parse_source(source + ";")
    assert diagnostics == []
    return statements[0].expression


def messages(diagnostics):
    return [diagnostic.message for diagnostic in diagnostics]


def test_precedence():
    printer = AstPrinter()
    assert printer.print(parse_expression("1 + 2 * 3 - -4")) == "((1 + (2 * 3)) - (-4))"
    assert printer.print(parse_expression("!a == b or c and d")) == "(((!a) == b) or (c and d))"
    assert printer.print(parse_expression("1 < 2 == 3 >= 4")) == "((1 < 2) == (3 >= 4))"


def test_assignment_is_right_associative():
    expr = parse_expression("a = b = c")
    assert isinstance(expr, Assign)
    assert isinstance(expr.value, Assign)
    assert expr.value.name.lexeme == "b"


def test_property_assignment_becomes_set():
    expr = parse_expression("a.b.c = 1")
    assert isinstance(expr, Set)
    assert expr.name.lexeme == "c"
    assert isinstance(expr.object, Get)


def test_invalid_assignment_target():
    statements, diagnostics = parse_source("1 + 2 = 3;")
    assert messages(diagnostics) == ["Invalid assignment target."]
    assert diagnostics[0].where == " at '='"
    # Reported, but the statement still parses.
    assert isinstance(statements[0], Expression)


def test_calls_and_gets_chain_left_to_right():
    expr = parse_expression("a(b)(c).d(e)")
    assert isinstance(expr, Call)
    assert isinstance(expr.callee, Get)
    assert expr.callee.name.lexeme == "d"
    inner = expr.callee.object
    assert isinstance(inner, Call)
    assert isinstance(inner.callee, Call)
    assert AstPrinter().print(expr) == "a(b)(c).d(e)"


def test_for_desugars_to_while():
    statements, diagnostics = parse_source("for (var i = 0; i < 3; i = i + 1) print i;")
    assert diagnostics == []
    outer = statements[0]
    assert isinstance(outer, Block)
    initializer, loop = outer.statements
    assert isinstance(initializer, Var)
    assert isinstance(loop, While)
    body, increment = loop.body.statements
    assert isinstance(increment, Expression)
    assert isinstance(increment.expression, Assign)


def test_for_without_clauses_loops_on_true():
    statements, diagnostics = parse_source("for (;;) print 1;")
    assert diagnostics == []
    loop = statements[0]
    assert isinstance(loop, While)
    assert isinstance(loop.condition, Literal)
    assert loop.condition.value is True


def test_error_recovery_reports_each_bad_statement():
    statements, diagnostics = parse_source("var = 1;\nprint 2;\nprint ;\nvar x = 3;")
    assert messages(diagnostics) == [
        "Expected variable name.",
        "Expected expression.",
    ]
    assert [d.line for d in diagnostics] == [1, 3]
    assert statements[0] is None
    assert statements[2] is None
    assert isinstance(statements[3], Var)


def test_missing_semicolon_at_end():
    _, diagnostics = parse_source("print 1")
    assert len(diagnostics) == 1
    assert str(diagnostics[0]) == "[line 1] Error at end: Expected ';' after value."


def test_too_many_arguments_is_a_soft_limit():
    arguments = ", ".join(["1"] * 256)
    statements, diagnostics = parse_source(f"f({arguments});")
    assert messages(diagnostics) == ["Can't have more than 255 arguments."]
    assert len(statements[0].expression.arguments) == 256


def test_too_many_parameters_is_reported():
    params = ", ".join(f"p{i}" for i in range(256))
    _, diagnostics = parse_source(f"fun f({params}) {{}}")
    assert messages(diagnostics) == ["Can't have more than 255 parameters."]


def test_identical_references_are_distinct_nodes():
    expr = parse_expression("a + a")
    assert isinstance(expr, Binary)
    assert expr.left is not expr.right
    assert expr.left != expr.right
    assert len({expr.left, expr.right}) == 2


@pytest.mark.parametrize("source", [
    "1 + 2 * 3",
    "-(1 - 2) / 4",
    "!!true == (nil != false)",
    "((1.5 + 2) * (3 - -4)) >= \"a\" + \"b\"",
    "0.0000001 + 1",
    "10000000000000000 * 2",
])
def test_printed_form_is_stable_under_reparsing(source):
    printer = AstPrinter()
    printed = printer.print(parse_expression(source))
    assert printer.print(parse_expression(printed)) == printed


@pytest.mark.parametrize("source, expected", [
    ("0.0000001 + 1", "(0.0000001 + 1)"),
    ("10000000000000000 * 2", "(10000000000000000 * 2)"),
    ("100 - 2.50", "(100 - 2.5)"),
])
def test_number_literals_print_without_exponents(source, expected):
    assert AstPrinter().print(parse_expression(source)) == expected
