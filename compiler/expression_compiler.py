import logging
import threading
from collections import OrderedDict
from typing import Optional, Tuple

from config.config import PARSER_CONFIG, COMPILER_CONFIG
from core import (
    Tokenizer, PostfixConverter, RPNEvaluator, build_operator_table,
    ExpressionError, CompileError, CompileStage, EvaluationStep, Token
)

logger = logging.getLogger(__name__)

EMPTY_INPUT_MESSAGE = "Please enter an arithmetic expression"


class CompileResult:
    """一次 compile 的完整输出：Token、后缀序列、结果和求值轨迹"""

    def __init__(self, expression: str, tokens: Tuple[Token, ...], postfix: Tuple[Token, ...],
                 value: float, trace: Tuple[EvaluationStep, ...]):
        self.expression = expression  # 原始输入，Token 位置以此为准
        self.tokens = tokens
        self.postfix = postfix
        self.value = value
        self.trace = trace

    def __iter__(self):
        return iter((self.tokens, self.postfix, self.value, self.trace))

    def __repr__(self):
        return f"CompileResult({self.expression!r}, value={self.value})"


class ExpressionCompiler:

    def __init__(self, strict_parentheses: Optional[bool] = None,
                 power_associativity: Optional[str] = None,
                 cache_size: Optional[int] = None):
        if strict_parentheses is None:
            strict_parentheses = PARSER_CONFIG['strict_parentheses']
        if power_associativity is None:
            power_associativity = PARSER_CONFIG['power_associativity']
        if cache_size is None:
            cache_size = COMPILER_CONFIG['cache_size']

        self.strict_parentheses = strict_parentheses
        self.power_associativity = power_associativity
        self.operators = build_operator_table(power_associativity)
        # 使用有限大小的OrderedDict实现LRU缓存，多线程共享时由锁保护
        self.cache_size = cache_size
        self._result_cache = OrderedDict()
        self._cache_lock = threading.Lock()
        self._cache_hits = 0
        self._cache_misses = 0

    @property
    def cache_info(self):
        with self._cache_lock:
            return {'hits': self._cache_hits, 'misses': self._cache_misses,
                    'size': len(self._result_cache)}

    def _manage_cache(self):
        """管理缓存大小（调用方持有锁）"""
        while len(self._result_cache) > self.cache_size:
            # 删除最久未使用的条目
            self._result_cache.popitem(last=False)

    def clear_cache(self):
        """清空缓存（供外部调用）"""
        with self._cache_lock:
            self._result_cache.clear()
            logger.info(f"Cache cleared. Hits: {self._cache_hits}, Misses: {self._cache_misses}")
            self._cache_hits = 0
            self._cache_misses = 0

    def compile(self, text: str) -> CompileResult:
        """
        依次执行 tokenize -> to_postfix -> evaluate
        Args:
            text: 中缀表达式文本，Token 和错误位置均相对于原始文本
        Returns:
            CompileResult
        Raises:
            CompileError: stage 标记出错阶段，cause 为原始错误
        """
        if not text.strip():
            raise CompileError(CompileStage.INPUT, EMPTY_INPUT_MESSAGE)

        with self._cache_lock:
            result = self._result_cache.get(text)
            if result is not None:
                # 移到末尾（最近使用）
                self._result_cache.move_to_end(text)
                self._cache_hits += 1
                logger.debug(f"Cache hit for expression: {text[:50]}")
                return result
            self._cache_misses += 1

        result = self._compile_impl(text)

        if self.cache_size > 0:
            with self._cache_lock:
                self._result_cache[text] = result
                self._manage_cache()
        return result

    def _compile_impl(self, expression: str) -> CompileResult:
        stage = CompileStage.TOKENIZE
        try:
            tokens = Tokenizer.tokenize(expression)

            stage = CompileStage.CONVERT
            postfix = PostfixConverter.to_postfix(tokens, strict=self.strict_parentheses,
                                                  operators=self.operators)

            stage = CompileStage.EVALUATE
            value, trace = RPNEvaluator.evaluate(postfix)

        except ExpressionError as e:
            logger.warning(f"Failed to compile '{expression.strip()[:50]}' at {stage.value} stage: {e.message}")
            raise CompileError(stage, e.message, cause=e) from e

        return CompileResult(expression, tokens, postfix, value, trace)


_default_compiler = None
_default_compiler_lock = threading.Lock()


def compile_expression(text: str) -> CompileResult:
    """使用默认配置的共享编译器"""
    global _default_compiler
    with _default_compiler_lock:
        if _default_compiler is None:
            _default_compiler = ExpressionCompiler()
    return _default_compiler.compile(text)
