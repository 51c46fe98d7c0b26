"""RPN表达式求值器 - 调用统一的Operators类，并记录每一步的栈状态"""
from enum import Enum
import logging

import numpy as np

from core.errors import EvalError, EvalErrorKind
from core.token_system import TokenType, OPERATOR_DEFINITIONS
from core.operators import Operators

logger = logging.getLogger(__name__)


class StepAction(Enum):
    PUSH_OPERAND = "push_operand"
    APPLY_OPERATOR = "apply_operator"


class EvaluationStep:
    """求值过程中的一步；stack 为该步之后的栈快照（自底向顶）"""

    def __init__(self, index, token, action, stack, left=None, right=None, result=None):
        self.index = index  # 从 1 开始
        self.token = token
        self.action = action
        self.stack = tuple(stack)
        self.left = left
        self.right = right
        self.result = result

    @property
    def value(self):
        """入栈的值：操作数步骤为操作数本身，操作符步骤为计算结果"""
        return self.stack[-1]

    def __eq__(self, other):
        if not isinstance(other, EvaluationStep):
            return NotImplemented
        return (self.index, self.token, self.action, self.stack, self.left, self.right, self.result) == \
            (other.index, other.token, other.action, other.stack, other.left, other.right, other.result)

    def __repr__(self):
        return (f"EvaluationStep({self.index}, {self.token.text!r}, {self.action.name}, "
                f"stack={list(self.stack)})")


class RPNEvaluator:
    """评估后缀表达式的值，同时返回完整的求值轨迹"""

    @staticmethod
    def _parse_number(token):
        try:
            value = float(token.text)
        except ValueError:
            raise EvalError(EvalErrorKind.INVALID_NUMBER, token.text) from None
        if not np.isfinite(value):
            raise EvalError(EvalErrorKind.INVALID_NUMBER, token.text)
        return value

    @staticmethod
    def evaluate(postfix):
        """
        Args:
            postfix: 后缀 Token 序列
        Returns:
            (result, trace)，trace 为 EvaluationStep 元组
        Raises:
            EvalError: 除零 / 操作数不足或剩余 / 未知操作符 / 非法数字
        """
        stack = []
        trace = []

        for i, token in enumerate(postfix, 1):
            if token.type == TokenType.NUMBER:
                stack.append(RPNEvaluator._parse_number(token))
                trace.append(EvaluationStep(i, token, StepAction.PUSH_OPERAND, stack))
                continue

            # 先检查操作数个数，再检查操作符是否合法
            if len(stack) < 2:
                logger.debug(f"Insufficient operands for {token.text} at step {i}")
                raise EvalError(EvalErrorKind.MALFORMED_EXPRESSION, token.text)

            descriptor = OPERATOR_DEFINITIONS.get(token.text)
            if token.type != TokenType.OPERATOR or descriptor is None:
                raise EvalError(EvalErrorKind.UNKNOWN_OPERATOR, token.text)

            right = stack.pop()
            left = stack.pop()

            op_method = getattr(Operators, descriptor.name)
            result = op_method(left, right)
            stack.append(result)
            trace.append(EvaluationStep(i, token, StepAction.APPLY_OPERATOR, stack,
                                        left=left, right=right, result=result))

        if len(stack) != 1:
            logger.debug(f"Stack has {len(stack)} elements after evaluation, expected 1")
            raise EvalError(EvalErrorKind.MALFORMED_EXPRESSION)

        return stack[0], tuple(trace)
