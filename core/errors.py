"""core/errors.py - 表达式处理各阶段的错误类型"""
from enum import Enum


class LexErrorKind(Enum):
    INVALID_CHARACTER = "invalid_character"


class ParseErrorKind(Enum):
    UNBALANCED_PARENTHESES = "unbalanced_parentheses"


class EvalErrorKind(Enum):
    DIVISION_BY_ZERO = "division_by_zero"
    MALFORMED_EXPRESSION = "malformed_expression"
    UNKNOWN_OPERATOR = "unknown_operator"
    INVALID_NUMBER = "invalid_number"


class CompileStage(Enum):
    INPUT = "input"
    TOKENIZE = "tokenize"
    CONVERT = "convert"
    EVALUATE = "evaluate"


class ExpressionError(ValueError):
    """所有表达式错误的基类，message 可直接展示给用户"""

    def __init__(self, kind, message):
        super().__init__(message)
        self.kind = kind
        self.message = message


class LexError(ExpressionError):
    """词法错误：遇到无法识别的字符"""

    def __init__(self, position, character):
        super().__init__(LexErrorKind.INVALID_CHARACTER,
                         f"Invalid character: {character} at position {position}")
        self.position = position
        self.character = character


class ParseError(ExpressionError):
    """括号不匹配（仅在严格模式下抛出）"""

    def __init__(self, position, message=None):
        super().__init__(ParseErrorKind.UNBALANCED_PARENTHESES,
                         message or f"Unbalanced parentheses at position {position}")
        self.position = position


class EvalError(ExpressionError):
    _MESSAGES = {
        EvalErrorKind.DIVISION_BY_ZERO: "Division by zero",
        EvalErrorKind.MALFORMED_EXPRESSION: "Invalid expression",
        EvalErrorKind.UNKNOWN_OPERATOR: "Unknown operator: {token}",
        EvalErrorKind.INVALID_NUMBER: "Invalid number: {token}",
    }

    def __init__(self, kind, token=None):
        super().__init__(kind, self._MESSAGES[kind].format(token=token))
        self.token = token


class CompileError(ExpressionError):
    """compile() 的统一错误，stage 标记出错的阶段"""

    def __init__(self, stage, message, cause=None):
        super().__init__(getattr(cause, 'kind', None), message)
        self.stage = stage
        self.cause = cause
