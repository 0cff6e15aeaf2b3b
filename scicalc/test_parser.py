import pytest

from scicalc.errors import LexerError, ParseError
from scicalc.lexer import COMMA, EOF, IDENT, LPAREN, NUMBER, OP, RPAREN, tokenize
from scicalc.nodes import BinaryOp, Call, ConstantRef, NumberLiteral, UnaryMinus
from scicalc.parser import parse


def num(value):
    return NumberLiteral(float(value))


def test_lex_numbers_identifiers_and_symbols():
    toks = tokenize("12.5*pi+pow(2,.5)**3")
    assert [t.type for t in toks] == [
        NUMBER, OP, IDENT, OP, IDENT, LPAREN, NUMBER, COMMA, NUMBER, RPAREN, OP, NUMBER, EOF,
    ]
    assert toks[0].value == "12.5"
    assert toks[8].value == ".5"
    assert toks[10].value == "**"


def test_lex_exponent_literals():
    assert tokenize("2e3")[0].value == "2e3"
    assert tokenize("1.5E-2")[0].value == "1.5E-2"
    with pytest.raises(LexerError):
        tokenize("1e+")


def test_lex_invalid_character_raises_parse_error():
    with pytest.raises(ParseError):
        tokenize("1 @ 2")
    with pytest.raises(ParseError):
        tokenize(".")


def test_precedence_and_left_associativity():
    assert parse("1+2*3") == BinaryOp('+', num(1), BinaryOp('*', num(2), num(3)))
    assert parse("8-3-2") == BinaryOp('-', BinaryOp('-', num(8), num(3)), num(2))
    assert parse("8/4/2") == BinaryOp('/', BinaryOp('/', num(8), num(4)), num(2))


def test_power_is_right_associative():
    assert parse("2**3**2") == BinaryOp('**', num(2), BinaryOp('**', num(3), num(2)))


def test_unary_minus_binds_looser_than_power():
    assert parse("-2**2") == UnaryMinus(BinaryOp('**', num(2), num(2)))
    assert parse("2**-1") == BinaryOp('**', num(2), UnaryMinus(num(1)))
    assert parse("-2*3") == BinaryOp('*', UnaryMinus(num(2)), num(3))
    assert parse("--3") == UnaryMinus(UnaryMinus(num(3)))
    assert parse("+5") == num(5)


def test_identifiers_and_calls():
    assert parse("pi") == ConstantRef("pi")
    assert parse("pow(2,3)") == Call("pow", (num(2), num(3)))
    assert parse("sin()") == Call("sin", ())
    assert parse("sin(cos(0))") == Call("sin", (Call("cos", (num(0),)),))


def test_unknown_identifiers_are_not_rejected_at_parse_time():
    assert parse("foo(bar)") == Call("foo", (ConstantRef("bar"),))


def test_parentheses_group():
    assert parse("(1+2)*3") == BinaryOp('*', BinaryOp('+', num(1), num(2)), num(3))


@pytest.mark.parametrize("expr", [
    "",
    "2+",
    "2**",
    "*1",
    "(2",
    "2)",
    "()",
    "(1)(2)",
    "2(3)",
    "2pi",
    "1.2.3",
    "1,2",
    "pow(2,)",
    "f(1,,2)",
    "f(1(2))",
    "2***3",
])
def test_malformed_expressions_raise(expr):
    with pytest.raises(ParseError):
        parse(expr)


def test_parse_error_kind():
    with pytest.raises(ParseError) as excinfo:
        parse("2+")
    assert excinfo.value.kind == "SyntaxError"
