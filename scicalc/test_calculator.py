import math

import pytest

from scicalc import (
    AngleMode,
    ArityMismatchError,
    Calculation,
    InvalidCharacterError,
    NonFiniteResultError,
    ParseError,
    UnknownIdentifierError,
    calculate,
    canonicalize,
    compute,
)

DEG = AngleMode.DEGREES
RAD = AngleMode.RADIANS


@pytest.mark.parametrize("raw, mode, expected", [
    ("5!", DEG, "120"),
    ("(3+2)!", DEG, "120"),
    ("sin(90)", DEG, "1"),
    ("sin(pi/2)", RAD, "1"),
    ("10%", DEG, "0.1"),
    ("asin(1)", DEG, "90"),
    ("asin(1)", RAD, "1.570796"),
])
def test_reference_results(raw, mode, expected):
    assert compute(raw, mode) == expected


@pytest.mark.parametrize("raw, expected", [
    ("2^10", "1024"),
    ("2 ^ -1", "0.5"),
    ("-2^2", "-4"),
    ("2^3^2", "512"),
    ("2^3!", "64"),
    ("2*(3)!", "12"),
    ("2-3!", "-4"),
    ("5!+1", "121"),
    ("(2+3)!/5!", "1"),
    ("2*-3!", "-12"),
    ("(-3!)", "-6"),
    ("2*(5!)", "3628800"),
    ("1/128", "0.007813"),
    ("-1/128", "-0.007813"),
    ("2^-7", "0.007813"),
    ("0!", "1"),
    ("50%*200", "100"),
    ("π", "3.141593"),
    ("2*π", "6.283185"),
    ("e", "2.718282"),
    ("1/3", "0.333333"),
    ("0.1+0.2", "0.3"),
    ("cos(60)", "0.5"),
    ("tan(45)", "1"),
    ("sin(180)", "0"),
    ("log(1000)", "3"),
    ("ln(e)", "1"),
    ("sqrt(2)", "1.414214"),
    ("abs(-3)", "3"),
    ("pow(2, 0.5)", "1.414214"),
    ("2e3", "2000"),
    ("1/(1/0)", "0"),
    (" 1 +\t2 ", "3"),
    ("2 3", "23"),
    (".5+5.", "5.5"),
])
def test_expressions_in_degrees(raw, expected):
    assert compute(raw, DEG) == expected


def test_default_angle_mode_is_degrees():
    assert compute("sin(90)") == "1"


def test_angle_mode_accepts_strings():
    assert compute("asin(1)", "rad") == "1.570796"


def test_calculate_returns_value_and_display():
    calc = calculate("1/3")
    assert isinstance(calc, Calculation)
    assert calc.expression == "1/3"
    assert math.isclose(calc.value, 1 / 3)
    assert calc.display == "0.333333"


def test_large_factorial_has_no_exponent():
    out = compute("170!")
    assert out.isdigit()
    assert len(out) == 307


def test_canonicalize():
    assert canonicalize("2^3! + 10%") == "2**factorial(3)+10/100"
    assert "!" not in canonicalize("(3+2)!!")


@pytest.mark.parametrize("raw, error", [
    ("1/0", NonFiniteResultError),
    ("-1!", NonFiniteResultError),
    ("3.5!", NonFiniteResultError),
    ("171!", NonFiniteResultError),
    ("asin(2)", NonFiniteResultError),
    ("sqrt(-4)", NonFiniteResultError),
    ("10^400", NonFiniteResultError),
    ("2+", ParseError),
    ("", ParseError),
    ("   ", ParseError),
    ("(1+2", ParseError),
    ("1,2", ParseError),
    ("2@3", InvalidCharacterError),
    ("2√4", InvalidCharacterError),
    ("x+1", UnknownIdentifierError),
    ("sinh(1)", UnknownIdentifierError),
    ("pow(2)", ArityMismatchError),
    ("3!!", UnknownIdentifierError),
    ("sqrt(4)!", UnknownIdentifierError),
    ("sin(3!)", NonFiniteResultError),
    ("2+!", ArityMismatchError),
])
def test_failures_are_typed(raw, error):
    with pytest.raises(error):
        compute(raw, DEG)


@pytest.mark.parametrize("raw, kind", [
    ("1/0", "NonFiniteResult"),
    ("2+", "SyntaxError"),
    ("2@3", "InvalidCharacter"),
    ("foo", "UnknownIdentifier"),
    ("sin(1,2)", "ArityMismatch"),
])
def test_error_kinds(raw, kind):
    with pytest.raises(Exception) as excinfo:
        compute(raw)
    assert excinfo.value.kind == kind


def test_pipeline_always_finite_or_typed_failure():
    samples = ["1-1", "2^0.5", "(-8)^(1/3)", "0^0", "0^-1", "-(2)", "1e308*10", "tan(90)", "acos(-1)"]
    for raw in samples:
        try:
            out = compute(raw)
        except NonFiniteResultError:
            continue
        assert "nan" not in out and "inf" not in out


def test_deep_nesting_is_a_syntax_error():
    with pytest.raises(ParseError):
        compute("(" * 1000 + "1" + ")" * 1000)
    with pytest.raises(ParseError):
        compute("0" + "!" * 600)
    # the pipeline stays usable afterwards
    assert compute("(((1+1)))") == "2"
