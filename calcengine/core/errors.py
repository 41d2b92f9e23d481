"""
Engine Errors — таксономия ошибок вычислительного ядра

Все ошибки ядра наследуются от EngineError, поэтому presentation-слой может
ловить один базовый тип и различать конкретный вид ошибки по подклассу.

Каждая ошибка терминальна для одного вызова: ядро не делает retry и не
хранит состояние ошибки между вызовами.
"""


class EngineError(Exception):
    """Базовая ошибка вычислительного ядра."""

    pass


class LexError(EngineError):
    """
    Некорректный поток символов при токенизации.

    Примеры: неизвестный символ, несколько десятичных точек в числе,
    неизвестное слово.
    """

    def __init__(self, message: str, position: int | None = None):
        super().__init__(message)
        self.position = position


class ExpressionSyntaxError(EngineError):
    """Структурная ошибка выражения: несбалансированные скобки."""

    pass


class EvalError(EngineError):
    """Нарушение дисциплины стека операндов (слишком мало/много операндов)."""

    pass


class EngineArithmeticError(EngineError, ArithmeticError):
    """Арифметическая ошибка при вычислении (деление на ноль, переполнение)."""

    pass


class DivisionByZeroError(EngineArithmeticError):
    """Деление на ноль в выражении."""

    pass


class DomainError(EngineArithmeticError):
    """
    Значение вне области определения.

    Тангенс при cos ≈ 0, неопределённая степень, недопустимые входы
    финансовых формул (rate <= 0, periods <= 0).
    """

    pass


class ConvergenceError(EngineError):
    """Newton-Raphson не сошёлся за MAX_ITERATIONS или покинул домен."""

    pass


class ConfigError(EngineError):
    """
    Недопустимое обновление настроек.

    Attributes:
        setting: имя настройки, не прошедшей валидацию
    """

    def __init__(self, message: str, setting: str | None = None):
        super().__init__(message)
        self.setting = setting


class HistoryError(EngineError):
    """History sink не смог записать запись."""

    pass
