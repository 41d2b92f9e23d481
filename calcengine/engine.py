"""CalculatorEngine — фасад вычислительного ядра

Цепочка для выражений:
- STAGE 1: Tokenize
- STAGE 2: Shunting-Yard
- STAGE 3: Postfix Evaluation
- snap-to-zero результата
- запись в history sink (если history_enabled)

Каждая стадия возвращает tagged result; первая неуспешная стадия
завершает вычисление (short-circuit), частичный результат не возвращается.

TVM solver — независимая точка входа поверх тех же настроек.

Настройки — immutable EngineConfig. configure() валидирует обновление и
подменяет снапшот целиком; вычисление читает снапшот один раз в начале.
"""

from dataclasses import dataclass
from typing import Any, Mapping, Optional

import structlog
from pydantic import ValidationError

from calcengine.config import EngineSettings, get_settings
from calcengine.core.domain.engine_config import EngineConfig
from calcengine.core.domain.history_record import HistoryRecord
from calcengine.core.domain.token import Token, token_texts
from calcengine.core.errors import ConfigError, EngineError
from calcengine.core.math import tvm
from calcengine.core.math.numerical_safeguards import snap_to_zero
from calcengine.history import HistorySink, InMemoryHistorySink, JsonLinesHistorySink
from calcengine.pipeline.stages import (
    Stage01Tokenize,
    Stage02ShuntingYard,
    Stage03PostfixEval,
)

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class EvaluationResult:
    """Результат вычисления выражения."""

    expression: str
    value: Optional[float]
    error: Optional[EngineError]

    # Промежуточные формы (пустые, если стадия не выполнилась)
    tokens: tuple[Token, ...] = ()
    postfix: tuple[Token, ...] = ()

    # Стадия, на которой произошла ошибка
    failed_stage: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> float:
        """Значение или исходная ошибка движка."""
        if self.error is not None:
            raise self.error
        return self.value


class CalculatorEngine:
    """Вычислительное ядро: выражения и TVM solver.

    Порядок evaluate_result:
    1. Снапшот EngineConfig
    2. STAGE 1 → ошибка? return
    3. STAGE 2 → ошибка? return
    4. STAGE 3 → ошибка? return
    5. snap-to-zero, history sink
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        history_sink: Optional[HistorySink] = None,
    ):
        """
        Args:
            config: начальные настройки (default: EngineConfig())
            history_sink: приёмник истории (default: InMemoryHistorySink)
        """
        self._config = config or EngineConfig()
        self.history_sink = history_sink if history_sink is not None else InMemoryHistorySink()

        self._tokenizer = Stage01Tokenize()
        self._converter = Stage02ShuntingYard()
        self._evaluator = Stage03PostfixEval()

    @classmethod
    def from_settings(cls, settings: Optional[EngineSettings] = None) -> "CalculatorEngine":
        """Движок по EngineSettings (env / .env) с JSON lines историей."""
        settings = settings or get_settings()
        return cls(
            config=settings.to_engine_config(),
            history_sink=JsonLinesHistorySink(settings.history_path),
        )

    @property
    def config(self) -> EngineConfig:
        return self._config

    # =========================================================================
    # SETTINGS
    # =========================================================================

    def configure(
        self, options: Optional[Mapping[str, Any]] = None, **kwargs: Any
    ) -> EngineConfig:
        """Валидирующее обновление настроек.

        Обновление атомарно: при любой ошибке ни одна настройка не меняется.

        Args:
            options: опции по snake_case или camelCase именам
                (angleMode, taylorTerms, errorThreshold, initialGuessInterest,
                initialGuessPeriods, historyEnabled)
            **kwargs: те же опции как keyword-аргументы

        Returns:
            новый снапшот EngineConfig

        Raises:
            ConfigError: неизвестная опция или значение вне домена;
                ConfigError.setting содержит имя опции
        """
        requested = {**(options or {}), **kwargs}
        option_names = EngineConfig.option_names()

        updates: dict[str, Any] = {}
        for option, value in requested.items():
            field_name = option_names.get(option)
            if field_name is None:
                raise ConfigError(f"Unknown setting: {option}", setting=option)
            updates[field_name] = value

        candidate = self._config.model_dump()
        for field_name, value in updates.items():
            candidate[field_name] = value
            try:
                EngineConfig.model_validate(candidate)
            except ValidationError as exc:
                message = exc.errors()[0]["msg"]
                logger.warning(
                    "config_rejected",
                    setting=field_name,
                    value=repr(value),
                    reason=message,
                )
                raise ConfigError(
                    f"Invalid value for {field_name}: {message}", setting=field_name
                ) from exc

        self._config = EngineConfig.model_validate(candidate)
        if updates:
            logger.info("config_updated", **{k: repr(v) for k, v in updates.items()})
        return self._config

    # =========================================================================
    # EXPRESSIONS
    # =========================================================================

    def evaluate_result(self, expression: str) -> EvaluationResult:
        """Вычисление выражения с tagged result вместо exception.

        Args:
            expression: инфиксное выражение

        Returns:
            EvaluationResult (ok/value или error с именем стадии)
        """
        config = self._config

        lexed = self._tokenizer.evaluate(expression)
        if not lexed.ok:
            return self._rejected(expression, lexed.error, "tokenize")

        converted = self._converter.evaluate(lexed.tokens)
        if not converted.ok:
            return self._rejected(expression, converted.error, "shunting_yard", lexed.tokens)

        evaluated = self._evaluator.evaluate(converted.postfix, config)
        if not evaluated.ok:
            return self._rejected(
                expression,
                evaluated.error,
                "postfix_eval",
                lexed.tokens,
                converted.postfix,
            )

        value = snap_to_zero(evaluated.value, config.error_threshold)

        if config.history_enabled:
            try:
                self.history_sink.append(
                    HistoryRecord(
                        expression=expression,
                        tokens=tuple(token_texts(lexed.tokens)),
                        postfix=tuple(token_texts(converted.postfix)),
                        result=value,
                    )
                )
            except EngineError as exc:
                return self._rejected(
                    expression, exc, "history", lexed.tokens, converted.postfix
                )

        logger.debug("expression_evaluated", expression=expression, result=value)
        return EvaluationResult(
            expression=expression,
            value=value,
            error=None,
            tokens=lexed.tokens,
            postfix=converted.postfix,
        )

    def evaluate(self, expression: str) -> float:
        """Вычисление выражения.

        Raises:
            EngineError: LexError, ExpressionSyntaxError, EvalError,
                EngineArithmeticError (DivisionByZeroError, DomainError),
                HistoryError
        """
        return self.evaluate_result(expression).unwrap()

    def _rejected(
        self,
        expression: str,
        error: EngineError,
        stage: str,
        tokens: tuple[Token, ...] = (),
        postfix: tuple[Token, ...] = (),
    ) -> EvaluationResult:
        logger.debug(
            "expression_rejected",
            expression=expression,
            stage=stage,
            error_type=type(error).__name__,
            error=str(error),
        )
        return EvaluationResult(
            expression=expression,
            value=None,
            error=error,
            tokens=tokens,
            postfix=postfix,
            failed_stage=stage,
        )

    # =========================================================================
    # TIME VALUE OF MONEY
    # =========================================================================

    def calculate_fv(self, pv: float, pmt: float, i: float, n: float) -> float:
        """Future value (см. tvm.calculate_fv)."""
        return tvm.calculate_fv(pv, pmt, i, n, threshold=self._config.error_threshold)

    def calculate_pv(self, fv: float, pmt: float, i: float, n: float) -> float:
        """Present value (см. tvm.calculate_pv)."""
        return tvm.calculate_pv(fv, pmt, i, n, threshold=self._config.error_threshold)

    def calculate_pmt(self, pv: float, fv: float, i: float, n: float) -> float:
        """Платёж за период (см. tvm.calculate_pmt)."""
        return tvm.calculate_pmt(pv, fv, i, n, threshold=self._config.error_threshold)

    def calculate_interest(self, pv: float, fv: float, pmt: float, n: float) -> float:
        """Ставка за период, Newton-Raphson от initial_guess_interest."""
        config = self._config
        return tvm.calculate_interest(
            pv,
            fv,
            pmt,
            n,
            initial_guess=config.initial_guess_interest,
            threshold=config.error_threshold,
        )

    def calculate_number_of_periods(
        self, pv: float, fv: float, pmt: float, i: float
    ) -> float:
        """Число периодов, Newton-Raphson от initial_guess_periods."""
        config = self._config
        return tvm.calculate_number_of_periods(
            pv,
            fv,
            pmt,
            i,
            initial_guess=config.initial_guess_periods,
            threshold=config.error_threshold,
        )
