"""Stages — индивидуальные стадии pipeline.

- STAGE 1: Tokenize (строка → токены)
- STAGE 2: Shunting-Yard (токены → постфиксная запись)
- STAGE 3: Postfix Evaluation (постфиксная запись → float)
"""

from .stage_01_tokenize import (
    ScanState,
    Stage01Result,
    Stage01Tokenize,
    next_scan_state,
    tokenize,
)
from .stage_02_shunting_yard import (
    FUNCTION_PRECEDENCE,
    PRECEDENCE,
    Stage02Result,
    Stage02ShuntingYard,
    get_precedence,
    is_left_associative,
    to_postfix,
)
from .stage_03_postfix_eval import (
    Stage03PostfixEval,
    Stage03Result,
    evaluate_postfix,
)

__all__ = [
    "ScanState",
    "Stage01Tokenize",
    "Stage01Result",
    "next_scan_state",
    "tokenize",
    "FUNCTION_PRECEDENCE",
    "PRECEDENCE",
    "Stage02ShuntingYard",
    "Stage02Result",
    "get_precedence",
    "is_left_associative",
    "to_postfix",
    "Stage03PostfixEval",
    "Stage03Result",
    "evaluate_postfix",
]
