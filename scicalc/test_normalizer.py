import pytest

from scicalc.errors import InvalidCharacterError
from scicalc.normalizer import normalize


def test_substitutes_shorthand_symbols():
    assert normalize("π*2") == "pi*2"
    assert normalize("2^3") == "2**3"
    assert normalize("50%") == "50/100"


def test_strips_all_whitespace():
    assert normalize(" 1 +\t2\n") == "1+2"
    # whitespace is removed, not treated as a separator
    assert normalize("2 3") == "23"


def test_leaves_factorial_and_functions_alone():
    assert normalize("sin(30) + 5!") == "sin(30)+5!"


def test_percent_after_power_keeps_division():
    assert normalize("2^50%") == "2**50/100"


@pytest.mark.parametrize("raw", ["2@3", "1 & 2", "√4", "2²", "a_b", "1;2", "x\x00", "3€"])
def test_rejects_characters_outside_permitted_set(raw):
    with pytest.raises(InvalidCharacterError):
        normalize(raw)


def test_empty_input_passes_through():
    assert normalize("") == ""
