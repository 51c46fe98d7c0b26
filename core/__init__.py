"""核心模块 - 词法分析、中缀转后缀、RPN求值器和操作符"""
from .errors import (
    ExpressionError, LexError, ParseError, EvalError, CompileError,
    LexErrorKind, ParseErrorKind, EvalErrorKind, CompileStage
)
from .token_system import (
    TokenType, Token, Associativity, OperatorDescriptor, OPERATOR_DEFINITIONS,
    build_operator_table, Tokenizer, RPNValidator
)
from .postfix_converter import PostfixConverter
from .rpn_evaluator import RPNEvaluator, EvaluationStep, StepAction
from .operators import Operators

tokenize = Tokenizer.tokenize
to_postfix = PostfixConverter.to_postfix
evaluate = RPNEvaluator.evaluate

__all__ = [
    'ExpressionError', 'LexError', 'ParseError', 'EvalError', 'CompileError',
    'LexErrorKind', 'ParseErrorKind', 'EvalErrorKind', 'CompileStage',
    'TokenType', 'Token', 'Associativity', 'OperatorDescriptor', 'OPERATOR_DEFINITIONS',
    'build_operator_table', 'Tokenizer', 'RPNValidator',
    'PostfixConverter', 'RPNEvaluator', 'EvaluationStep', 'StepAction', 'Operators',
    'tokenize', 'to_postfix', 'evaluate'
]
