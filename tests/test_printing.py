import pytest

from avrcmd.parser import CommandError, evaluate
from avrcmd.printing import handle_print
from avrcmd.variables import VariableTable


@pytest.fixture
def variables():
    return VariableTable()


def _message(excinfo):
    return str(excinfo.value)


def test_plain_string(variables):
    assert handle_print('"hello world"', variables) == "hello world"


def test_variable_value(variables):
    variables.set("x", 42)
    assert handle_print("x", variables) == "42"


def test_string_and_variable(variables):
    variables.set("n", 7)
    assert handle_print('"n=", n', variables) == "n=7"


def test_expression_matches_evaluator(variables):
    assert handle_print("2*3+1", variables) == str(evaluate("2*3+1"))


def test_negative_value(variables):
    assert handle_print("-5", variables) == "-5"


def test_empty_input_prints_nothing(variables):
    assert handle_print("", variables) == ""
    assert handle_print(None, variables) == ""


def test_spaces_around_separators(variables):
    assert handle_print('"a" , "b"', variables) == "ab"


def test_expression_with_trailing_space_before_comma(variables):
    variables.set("x", 3)
    assert handle_print("x , x", variables) == "33"


def test_string_after_expression(variables):
    variables.set("v", 12)
    assert handle_print('v, " units"', variables) == "12 units"


def test_longest_string_that_fits(variables):
    text = "a" * 158
    assert handle_print('"' + text + '"', variables) == text


def test_string_filling_buffer_is_unterminated(variables):
    with pytest.raises(CommandError) as excinfo:
        handle_print('"' + "a" * 159 + '"', variables)
    assert _message(excinfo) == "UNTERMINATED STRING"


@pytest.mark.parametrize(
    "values, message",
    [
        (' "a"', "EXPECTED VALUE OR STRING"),
        (',"a"', "EXPECTED VALUE OR STRING"),
        ('"a" x', "UNEXPECTED CHARACTER, EXPECTED SEPARATOR"),
        ('"a",,"b"', "EXPECTED VALUE OR STRING, INAPPROPRIATE SEPARATOR"),
        ('"abc', "UNTERMINATED STRING"),
        ('"a",', "TRAILING SEPARATOR"),
        ('"a", ', "TRAILING SEPARATOR"),
        ("y", "INVALID EXPRESSION"),
        ("1+", "INVALID EXPRESSION"),
        ('1", "a"', "INVALID EXPRESSION"),
        ("1" * 32, "EXPRESSION TOO LONG"),
    ],
)
def test_errors(variables, values, message):
    with pytest.raises(CommandError) as excinfo:
        handle_print(values, variables)
    assert _message(excinfo) == message


def test_error_in_later_item_stops_printing(variables):
    with pytest.raises(CommandError) as excinfo:
        handle_print('"ok", missing', variables)
    assert _message(excinfo) == "INVALID EXPRESSION"