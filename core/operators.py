"""core/operators.py"""
import numpy as np
import logging

from core.errors import EvalError, EvalErrorKind

logger = logging.getLogger(__name__)


class Operators:
    """所有二元操作符的静态方法集合，方法名与 OperatorDescriptor.name 对应"""

    @staticmethod
    def _as_float(operand):
        return np.float64(operand)

    @staticmethod
    def add(operand1, operand2):
        """加法操作符"""
        with np.errstate(over='ignore', invalid='ignore'):
            return float(Operators._as_float(operand1) + Operators._as_float(operand2))

    @staticmethod
    def sub(operand1, operand2):
        """减法操作符"""
        with np.errstate(over='ignore', invalid='ignore'):
            return float(Operators._as_float(operand1) - Operators._as_float(operand2))

    @staticmethod
    def mul(operand1, operand2):
        """乘法操作符，溢出时得到 inf"""
        with np.errstate(over='ignore', invalid='ignore'):
            return float(Operators._as_float(operand1) * Operators._as_float(operand2))

    @staticmethod
    def div(operand1, operand2):
        """除法操作符，右操作数恰好为 0 时报错（先检查再计算）"""
        if operand2 == 0:
            raise EvalError(EvalErrorKind.DIVISION_BY_ZERO, '/')
        with np.errstate(over='ignore', invalid='ignore'):
            return float(Operators._as_float(operand1) / Operators._as_float(operand2))

    @staticmethod
    def pow(operand1, operand2):
        # 负数的小数次幂得到 nan，溢出得到 inf
        with np.errstate(all='ignore'):
            return float(np.power(Operators._as_float(operand1), Operators._as_float(operand2)))
