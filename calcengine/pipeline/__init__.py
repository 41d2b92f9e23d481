"""Pipeline — цепочка стадий вычисления выражения.

- STAGE 1: Tokenize
- STAGE 2: Shunting-Yard
- STAGE 3: Postfix Evaluation
"""

from .stages import (
    Stage01Result,
    Stage01Tokenize,
    Stage02Result,
    Stage02ShuntingYard,
    Stage03PostfixEval,
    Stage03Result,
)

__all__ = [
    "Stage01Tokenize",
    "Stage01Result",
    "Stage02ShuntingYard",
    "Stage02Result",
    "Stage03PostfixEval",
    "Stage03Result",
]
