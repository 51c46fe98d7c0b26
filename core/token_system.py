"""core/token_system.py"""
from enum import Enum
import logging

from core.errors import LexError

logger = logging.getLogger(__name__)


class TokenType(Enum):
    NUMBER = "number"            # 数字
    OPERATOR = "operator"        # + - * / ^
    LEFT_PAREN = "left_paren"    # (
    RIGHT_PAREN = "right_paren"  # )


class Associativity(Enum):
    LEFT = "left"
    RIGHT = "right"


class Token:
    """词法单元，创建后不可修改；相等性只比较类型和文本，不比较位置"""
    __slots__ = ('_type', '_text', '_position')

    def __init__(self, token_type, text, position=None):
        if not text:
            raise ValueError("Token text must not be empty")
        self._type = token_type
        self._text = text
        self._position = position

    @property
    def type(self):
        return self._type

    @property
    def text(self):
        return self._text

    @property
    def position(self):
        return self._position

    @property
    def is_number(self):
        return self._type == TokenType.NUMBER

    @property
    def is_operator(self):
        return self._type == TokenType.OPERATOR

    def __eq__(self, other):
        if not isinstance(other, Token):
            return NotImplemented
        return self._type == other._type and self._text == other._text

    def __hash__(self):
        return hash((self._type, self._text))

    def __str__(self):
        return self._text

    def __repr__(self):
        return f"Token({self._type.name}, {self._text!r}, position={self._position})"

    @classmethod
    def number(cls, text, position=None):
        return cls(TokenType.NUMBER, text, position)

    @classmethod
    def symbol(cls, char, position=None):
        return cls(SYMBOL_TYPES[char], char, position)


class OperatorDescriptor:
    def __init__(self, symbol, name, precedence, associativity=Associativity.LEFT):
        self.symbol = symbol
        self.name = name              # Operators 上对应的方法名
        self.precedence = precedence
        self.associativity = associativity

    def __repr__(self):
        return (f"OperatorDescriptor({self.symbol!r}, {self.name!r}, "
                f"precedence={self.precedence}, {self.associativity.name})")


# 操作符定义表（全部左结合，包括 ^）
OPERATOR_DEFINITIONS = {
    '^': OperatorDescriptor('^', 'pow', 4),
    '*': OperatorDescriptor('*', 'mul', 3),
    '/': OperatorDescriptor('/', 'div', 3),
    '+': OperatorDescriptor('+', 'add', 2),
    '-': OperatorDescriptor('-', 'sub', 2),
}

SYMBOL_TYPES = {
    '(': TokenType.LEFT_PAREN,
    ')': TokenType.RIGHT_PAREN,
}
SYMBOL_TYPES.update({symbol: TokenType.OPERATOR for symbol in OPERATOR_DEFINITIONS})

NUMBER_CHARS = frozenset('0123456789.')


def build_operator_table(power_associativity='left'):
    """
    构造操作符表
    Args:
        power_associativity: '^' 的结合性，'left'（默认）或 'right'
    Returns:
        symbol -> OperatorDescriptor 的字典
    """
    associativity = Associativity(power_associativity)
    if associativity == Associativity.LEFT:
        return OPERATOR_DEFINITIONS
    table = dict(OPERATOR_DEFINITIONS)
    table['^'] = OperatorDescriptor('^', 'pow', 4, associativity)
    return table


class Tokenizer:
    """把原始文本切分成 Token 序列，只做字符分类，不做数值校验"""

    @staticmethod
    def tokenize(text):
        tokens = []
        current = ''
        start = None

        for i, char in enumerate(text):
            if char.isspace():
                continue

            if char in NUMBER_CHARS:
                if not current:
                    start = i
                current += char
            elif char in SYMBOL_TYPES:
                if current:
                    tokens.append(Token.number(current, start))
                    current = ''
                tokens.append(Token.symbol(char, i))
            else:
                raise LexError(i, char)

        if current:
            tokens.append(Token.number(current, start))

        logger.debug(f"Tokenized {text!r} into {len(tokens)} tokens")
        return tuple(tokens)


class RPNValidator:
    """后缀序列的结构检查（只模拟栈深度，不计算数值）"""

    @staticmethod
    def is_well_formed(postfix):
        """每个操作符都有两个已有操作数，且最后栈中恰好剩一个值"""
        stack_size = 0
        for token in postfix:
            if token.is_number:
                stack_size += 1
            elif token.is_operator:
                if stack_size < 2:
                    return False
                stack_size -= 1
            else:
                # 括号不应出现在后缀序列中
                return False
        return stack_size == 1
