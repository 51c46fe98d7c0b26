"""中缀转后缀 - 调度场算法"""
import logging

from core.errors import ParseError
from core.token_system import TokenType, Associativity, OPERATOR_DEFINITIONS

logger = logging.getLogger(__name__)


class PostfixConverter:

    @staticmethod
    def _should_pop(top, descriptor, operators):
        """栈顶操作符是否应在 descriptor 入栈前弹出"""
        top_precedence = operators[top.text].precedence
        if descriptor.associativity == Associativity.RIGHT:
            return top_precedence > descriptor.precedence
        return top_precedence >= descriptor.precedence

    @staticmethod
    def to_postfix(tokens, strict=True, operators=OPERATOR_DEFINITIONS):
        """
        把中缀 Token 序列转成后缀（逆波兰）序列
        Args:
            tokens: Tokenizer 输出的 Token 序列
            strict: 括号不匹配时是否抛出 ParseError；False 时静默吸收
            operators: 操作符表，见 build_operator_table
        Returns:
            后缀 Token 元组
        """
        output = []
        stack = []

        for token in tokens:
            if token.type == TokenType.NUMBER:
                output.append(token)

            elif token.type == TokenType.LEFT_PAREN:
                stack.append(token)

            elif token.type == TokenType.RIGHT_PAREN:
                while stack and stack[-1].type != TokenType.LEFT_PAREN:
                    output.append(stack.pop())
                if stack:
                    stack.pop()  # 丢弃 '('
                elif strict:
                    raise ParseError(token.position,
                                     f"Unmatched ')' at position {token.position}")

            else:
                descriptor = operators[token.text]
                while (stack and stack[-1].type != TokenType.LEFT_PAREN
                       and PostfixConverter._should_pop(stack[-1], descriptor, operators)):
                    output.append(stack.pop())
                stack.append(token)

        if strict:
            unmatched = [t for t in stack if t.type == TokenType.LEFT_PAREN]
            if unmatched:
                position = unmatched[0].position
                raise ParseError(position, f"Unmatched '(' at position {position}")

        # 宽松模式下残留的 '(' 也按出栈顺序进入输出
        while stack:
            output.append(stack.pop())

        logger.debug(f"Postfix: {' '.join(t.text for t in output)}")
        return tuple(output)
