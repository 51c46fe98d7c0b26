"""utils/trace_format.py"""
import numpy as np
import pandas as pd

from core.rpn_evaluator import StepAction
from core.operators import Operators
from core.token_system import OPERATOR_DEFINITIONS

TRACE_COLUMNS = ['step', 'token', 'action', 'left', 'right', 'result', 'stack', 'depth']


def format_number(value):
    """整数值去掉小数点（11.0 -> 11），其他保持 repr"""
    value = float(value)
    if np.isfinite(value) and value.is_integer():
        return str(int(value))
    return repr(value)


def format_tokens(tokens):
    return ' '.join(token.text for token in tokens)


def format_stack(stack):
    """栈顶在前"""
    if len(stack) == 0:
        return "(empty stack)"
    return "Stack (top first): " + ', '.join(format_number(v) for v in reversed(stack))


def format_step(step):
    """把一步渲染成若干文本行"""
    token = step.token.text
    if step.action == StepAction.PUSH_OPERAND:
        lines = [
            f"Step {step.index}: Push operand",
            f"Token: {token} (operand)",
            "Action: Push to stack",
        ]
    else:
        left, right, result = (format_number(v) for v in (step.left, step.right, step.result))
        lines = [
            f"Step {step.index}: Apply operator",
            f"Token: {token} (operator)",
            f"Action: Pop {right}, then pop {left}",
            f"Calculate: {left} {token} {right} = {result}",
            "Push result to stack",
        ]
    lines.append(format_stack(step.stack))
    return lines


def format_trace(trace):
    lines = []
    for step in trace:
        lines.extend(format_step(step))
    return lines


def trace_to_frame(trace):
    """每步一行的DataFrame，便于导出CSV"""
    rows = []
    for step in trace:
        rows.append({
            'step': step.index,
            'token': step.token.text,
            'action': step.action.value,
            'left': np.nan if step.left is None else step.left,
            'right': np.nan if step.right is None else step.right,
            'result': np.nan if step.result is None else step.result,
            'stack': ' '.join(format_number(v) for v in step.stack),
            'depth': len(step.stack),
        })
    return pd.DataFrame(rows, columns=TRACE_COLUMNS)


def replay_trace(trace):
    """
    只根据轨迹重建每一步的栈状态，并与记录的快照比对
    Returns:
        重建出的栈状态列表（每步之后）
    Raises:
        ValueError: 轨迹与重建结果不一致
    """
    stack = []
    states = []
    for step in trace:
        if step.action == StepAction.PUSH_OPERAND:
            stack.append(step.value)
        else:
            if len(stack) < 2:
                raise ValueError(f"Step {step.index}: not enough values to apply {step.token.text}")
            right = stack.pop()
            left = stack.pop()
            if not (_same_value(left, step.left) and _same_value(right, step.right)):
                raise ValueError(f"Step {step.index}: operands do not match the replayed stack")
            op_method = getattr(Operators, OPERATOR_DEFINITIONS[step.token.text].name)
            result = op_method(left, right)
            if not _same_value(result, step.result):
                raise ValueError(f"Step {step.index}: result {step.result} does not replay")
            stack.append(result)

        if len(stack) != len(step.stack) or not all(map(_same_value, stack, step.stack)):
            raise ValueError(f"Step {step.index}: stack snapshot does not match the replay")
        states.append(tuple(stack))
    return states


def _same_value(a, b):
    # nan 视为相等
    return a == b or (np.isnan(a) and np.isnan(b))
