import pytest

from avrcmd.parser import CommandError, ExpressionError, evaluate, parse_expression


def _lookup(values):
    return values.get


def test_integer_literal():
    assert evaluate("42") == 42


def test_multiplication_binds_tighter():
    assert evaluate("2 + 3 * 4") == 14


def test_parentheses_group():
    assert evaluate("(2 + 3) * 4") == evaluate("5 * 4")
    assert evaluate("(2 + 3) * 4") != evaluate("2 + 3 * 4")


def test_subtraction_is_left_associative():
    assert evaluate("10 - 3 - 2") == evaluate("(10 - 3) - 2")
    assert evaluate("10 - 3 - 2") != evaluate("10 - (3 - 2)")


def test_division_truncates_toward_zero():
    assert evaluate("-7 / 2") == -3
    assert evaluate("7 / 2") == -evaluate("-7 / 2")


def test_spaces_are_ignored():
    assert evaluate("  1 +   2 ") == evaluate("1+2")


def test_unary_minus():
    assert evaluate("--5") == evaluate("5")
    assert evaluate("-(2+3)") == -evaluate("2+3")
    assert evaluate("- 4") == evaluate("-4")


def test_sixteen_bit_wraparound():
    assert evaluate("32767 + 1") == -32768
    assert evaluate("32768") == evaluate("-32768")


def test_variable_lookup():
    lookup = _lookup({"x": 5, "a1": 9})
    assert evaluate("x", lookup) == 5
    assert evaluate("x * 2", lookup) == evaluate("5 * 2")
    assert evaluate("a1 - x", lookup) == evaluate("9 - 5")


def test_eight_character_name_accepted():
    lookup = _lookup({"abcdefgh": 3})
    assert evaluate("abcdefgh", lookup) == 3


def test_nine_character_name_rejected():
    lookup = _lookup({"abcdefghi": 3})
    with pytest.raises(ExpressionError):
        evaluate("abcdefghi", lookup)


def test_unknown_variable():
    with pytest.raises(ExpressionError):
        evaluate("y + 1", _lookup({"x": 1}))


def test_no_lookup_means_no_variables():
    with pytest.raises(ExpressionError):
        evaluate("x")


@pytest.mark.parametrize(
    "text",
    ["", "   ", "2 3", "3abc", "(1+2", "1 +", "*3", "2 $ 3", "1+)", "4(2)", "2**3", "1 / 0", "5\t"],
)
def test_invalid_expressions(text):
    with pytest.raises(ExpressionError):
        evaluate(text)


def test_variable_followed_by_parenthesis_is_invalid():
    with pytest.raises(ExpressionError):
        evaluate("x(1)", _lookup({"x": 1}))


def test_expression_error_is_a_command_error():
    with pytest.raises(CommandError):
        evaluate("(")


def test_parse_stops_at_unmatched_parenthesis():
    text = "3) + 1"
    value, end = parse_expression(text)
    assert value == 3
    assert end == text.index(")")
    assert evaluate(text) == 3


def test_parse_from_start_position():
    text = "x = 4 + 1"
    value, end = parse_expression(text, None, text.index("=") + 1)
    assert value == evaluate("4 + 1")
    assert end == len(text)