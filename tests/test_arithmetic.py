import pytest

from monkey.environment import new_environment
from monkey.parser import parse_program
from monkey.runtime import evaluate
from monkey.tokenizer import tokenize
from monkey.value import FALSE, TRUE, Boolean, Error, Integer, Value


@pytest.mark.parametrize(
    "code, expected_ret_val",
    [
        pytest.param("5", Integer(5)),
        pytest.param("-5", Integer(-5)),
        pytest.param("--5", Integer(5)),
        pytest.param("1+2", Integer(3)),
        pytest.param("(1+2)", Integer(3)),
        pytest.param("-(1+2)", Integer(-3)),
        pytest.param("(((1)))", Integer(1)),
        pytest.param("1 * 4 + 5", Integer(9)),
        pytest.param("1 + 4 * 5", Integer(21)),
        pytest.param("5 + 5 * 2 - 10", Integer(5)),
        pytest.param("-50 + 100 + -50", Integer(0)),
        pytest.param("20 + 2 * -10", Integer(0)),
        pytest.param("3 * (3 * 3) + 10", Integer(37)),
        pytest.param("(5 + 10 * 2 + 15 / 3) * 2 + -10", Integer(50)),
        pytest.param("100 / 5 / 2 / 2", Integer(5)),
        pytest.param("7 / 2", Integer(3)),
        pytest.param("-7 / 2", Integer(-3)),
        pytest.param("7 / -2", Integer(-3)),
        pytest.param("-7 / -2", Integer(3)),
        pytest.param("9223372036854775807 + 1", Integer(2**63)),
        # comparisons
        pytest.param("1 < 2", TRUE),
        pytest.param("1 > 2", FALSE),
        pytest.param("1 < 1", FALSE),
        pytest.param("1 == 1", TRUE),
        pytest.param("1 != 1", FALSE),
        pytest.param("1 == 2", FALSE),
        pytest.param("(1 < 2) == true", TRUE),
        pytest.param("(1 > 2) == true", FALSE),
        # variables
        pytest.param("let a = 1; a", Integer(1)),
        pytest.param("let a = 1; let b = 2; a + b", Integer(3)),
        pytest.param("let a = 5 * 5; let b = a; let c = a + b + 5; c", Integer(55)),
    ],
)
def test_eval_arithmetic(code: str, expected_ret_val: Value) -> None:
    program, errors = parse_program(tokenize(code))
    assert errors == []
    result = evaluate(program, new_environment())
    assert result == expected_ret_val


def test_division_by_zero() -> None:
    program, _ = parse_program(tokenize("1 + 10 / (5 - 5)"))
    assert evaluate(program, new_environment()) == Error("division by zero")


def test_comparison_results_are_shared_booleans() -> None:
    program, _ = parse_program(tokenize("1 < 2"))
    result = evaluate(program, new_environment())
    assert isinstance(result, Boolean)
    assert result is TRUE
