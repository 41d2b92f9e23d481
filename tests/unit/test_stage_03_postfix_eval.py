"""Unit тесты для STAGE 3: Postfix Evaluation.

Coverage:
- Арифметика и порядок операндов (num1 OP num2)
- Унарный минус и функции
- Дисциплина стека: EvalError
- DivisionByZeroError / DomainError
- Чтение EngineConfig (angle mode, taylor terms)
"""

import math

import pytest

from calcengine.core.domain import AngleMode, EngineConfig, Token, TokenKind
from calcengine.core.errors import (
    DivisionByZeroError,
    DomainError,
    EngineArithmeticError,
    EvalError,
)
from calcengine.pipeline.stages.stage_01_tokenize import tokenize
from calcengine.pipeline.stages.stage_02_shunting_yard import to_postfix
from calcengine.pipeline.stages.stage_03_postfix_eval import (
    Stage03PostfixEval,
    evaluate_postfix,
)


@pytest.fixture
def stage03():
    """Fixture для STAGE 3."""
    return Stage03PostfixEval()


def number(text):
    return Token(kind=TokenKind.NUMBER, text=text)


def operator(text):
    return Token(kind=TokenKind.OPERATOR, text=text)


def run(stage03, expression, config):
    return stage03.evaluate(to_postfix(tokenize(expression)), config)


# =============================================================================
# PASS SCENARIOS
# =============================================================================


@pytest.mark.parametrize(
    "expression,expected",
    [
        ("3+4*2", 11.0),
        ("2+3*4", 14.0),
        ("(2+3)*4", 20.0),
        ("10-4", 6.0),
        ("10/4", 2.5),
        ("2^3^2", 512.0),
        ("2^-1", 0.5),
        ("-3+5", 2.0),
        ("-(3)", -3.0),
        ("0-3", -3.0),
        ("--3", 3.0),
        ("-3^2", 9.0),
    ],
)
def test_stage03_arithmetic(stage03, config, expression, expected):
    """PASS: арифметика по таблице приоритетов."""
    result = run(stage03, expression, config)

    assert result.ok
    assert result.value == pytest.approx(expected)


def test_stage03_operand_order(stage03, config):
    """num2 снимается первым: 7 2 - → 5, 8 2 / → 4."""
    assert stage03.evaluate((number("7"), number("2"), operator("-")), config).value == 5.0
    assert stage03.evaluate((number("8"), number("2"), operator("/")), config).value == 4.0


def test_stage03_functions(stage03, config):
    """PASS: sin/cos через ряд Тейлора."""
    assert run(stage03, "sin(0)", config).value == 0.0
    assert run(stage03, "cos(0)", config).value == 1.0
    assert run(stage03, "sin(0)+1", config).value == 1.0


def test_stage03_degrees_mode(stage03):
    """PASS: AngleMode.DEGREES из EngineConfig."""
    config = EngineConfig(angle_mode=AngleMode.DEGREES)

    assert run(stage03, "sin(30)", config).value == pytest.approx(0.5, abs=1e-12)


def test_stage03_taylor_terms_from_config(stage03):
    """taylor_terms из EngineConfig: при одном члене sin θ ≈ θ."""
    config = EngineConfig(taylor_terms=1)

    assert run(stage03, "sin(0.5)", config).value == 0.5


def test_stage03_details(stage03, config):
    """details при успехе."""
    assert run(stage03, "1", config).details == "evaluated"


# =============================================================================
# STACK DISCIPLINE
# =============================================================================


def test_stage03_not_enough_operands_binary(stage03, config):
    """FAIL: бинарному оператору не хватает операнда."""
    result = stage03.evaluate((number("1"), operator("+")), config)

    assert isinstance(result.error, EvalError)
    assert str(result.error) == "Invalid expression: not enough operands"
    assert result.value is None


def test_stage03_not_enough_operands_unary(stage03, config):
    """FAIL: унарный минус на пустом стеке."""
    result = stage03.evaluate((operator("u-"),), config)

    assert isinstance(result.error, EvalError)
    assert "not enough operands" in str(result.error)


def test_stage03_not_enough_operands_function(stage03, config):
    """FAIL: функция без аргумента."""
    result = stage03.evaluate((Token(kind=TokenKind.FUNCTION, text="sin"),), config)

    assert isinstance(result.error, EvalError)


def test_stage03_too_few_operands(stage03, config):
    """FAIL: пустая постфиксная запись."""
    result = stage03.evaluate((), config)

    assert isinstance(result.error, EvalError)
    assert str(result.error) == "Invalid expression: too few operands"


def test_stage03_too_many_operands(stage03, config):
    """FAIL: на стеке остаётся больше одного значения."""
    result = run(stage03, "2 3", config)

    assert isinstance(result.error, EvalError)
    assert str(result.error) == "Invalid expression: too many operands"


def test_stage03_unknown_operator(stage03, config):
    """FAIL: неизвестный символ оператора."""
    result = stage03.evaluate((number("1"), number("2"), operator("%")), config)

    assert isinstance(result.error, EvalError)
    assert "Unknown operator" in str(result.error)


def test_stage03_paren_in_postfix(stage03, config):
    """FAIL: скобка в постфиксной записи."""
    result = stage03.evaluate((Token(kind=TokenKind.LEFT_PAREN, text="("),), config)

    assert isinstance(result.error, EvalError)


# =============================================================================
# ARITHMETIC ERRORS
# =============================================================================


@pytest.mark.parametrize("expression", ["1/0", "1/(2-2)", "5/-0"])
def test_stage03_division_by_zero(stage03, config, expression):
    """FAIL: деление на ноль → DivisionByZeroError."""
    result = run(stage03, expression, config)

    assert isinstance(result.error, DivisionByZeroError)
    assert str(result.error) == "Division by zero"


def test_stage03_tan_pole(stage03, config):
    """FAIL: tan(pi/2) → DomainError."""
    result = run(stage03, "tan(pi/2)", config)

    assert isinstance(result.error, DomainError)


def test_stage03_undefined_power(stage03, config):
    """FAIL: (-8)^0.5 → DomainError."""
    result = run(stage03, "(-8)^0.5", config)

    assert isinstance(result.error, DomainError)


def test_evaluate_postfix_raises(config):
    """evaluate_postfix() выбрасывает ошибку вместо tagged result."""
    with pytest.raises(DivisionByZeroError):
        evaluate_postfix(to_postfix(tokenize("1/0")), config)

    assert evaluate_postfix(to_postfix(tokenize("6/3")), config) == 2.0


# =============================================================================
# NON-FINITE VALUES
# =============================================================================


def test_stage03_function_with_unary_minus(stage03, config):
    """PASS: sin -1 = -sin(1)."""
    negated = run(stage03, "sin -1", config)

    assert negated.ok
    assert negated.value == pytest.approx(-run(stage03, "sin(1)", config).value)


@pytest.mark.parametrize(
    "expression",
    ["9^300 * 9^300", "10^308 + 10^308", "0 - 10^308 - 10^308"],
)
def test_stage03_binary_overflow(stage03, config, expression):
    """FAIL: переполнение + - * → EngineArithmeticError, а не inf."""
    result = run(stage03, expression, config)

    assert isinstance(result.error, EngineArithmeticError)
    assert "Arithmetic overflow" in str(result.error)
    assert result.value is None


def test_stage03_huge_literal(stage03, config):
    """FAIL: литерал вне диапазона float → EngineArithmeticError."""
    result = stage03.evaluate((number("1" + "0" * 400),), config)

    assert isinstance(result.error, EngineArithmeticError)


def test_stage03_large_taylor_terms(stage03):
    """PASS: большое taylor_terms не переполняет ряд."""
    config = EngineConfig(taylor_terms=400)

    result = run(stage03, "sin(3)", config)

    assert result.ok
    assert result.value == pytest.approx(math.sin(3.0), abs=1e-12)
