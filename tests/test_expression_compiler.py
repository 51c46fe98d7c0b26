"""Tests for ExpressionCompiler."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from compiler import ExpressionCompiler, compile_expression
from core import (
    CompileError, CompileStage, EvalError, EvalErrorKind, LexError, ParseError
)


@pytest.fixture
def compiler():
    return ExpressionCompiler(strict_parentheses=True, power_associativity="left", cache_size=8)


def test_compile_returns_all_stages(compiler):
    tokens, postfix, value, trace = compiler.compile("3 + 4 * 2")
    assert [t.text for t in tokens] == ["3", "+", "4", "*", "2"]
    assert [t.text for t in postfix] == ["3", "4", "2", "*", "+"]
    assert value == 11.0
    assert trace[-1].stack == (11.0,)


def test_positions_are_relative_to_original_input(compiler):
    result = compiler.compile("  (3 + 4) * 2  ")
    assert result.expression == "  (3 + 4) * 2  "
    assert result.value == 14.0
    assert [t.position for t in result.tokens][:2] == [2, 3]

    with pytest.raises(CompileError) as excinfo:
        compiler.compile("  3 & 4")
    assert excinfo.value.cause.position == 4


@pytest.mark.parametrize("text", ["", "   ", "\n"])
def test_empty_input(compiler, text):
    with pytest.raises(CompileError) as excinfo:
        compiler.compile(text)
    assert excinfo.value.stage == CompileStage.INPUT
    assert excinfo.value.message == "Please enter an arithmetic expression"
    assert excinfo.value.cause is None


@pytest.mark.parametrize("text,stage,cause_type", [
    ("3 & 4", CompileStage.TOKENIZE, LexError),
    ("(3 + 4", CompileStage.CONVERT, ParseError),
    ("5 / 0", CompileStage.EVALUATE, EvalError),
    ("3 +", CompileStage.EVALUATE, EvalError),
])
def test_failures_are_tagged_with_stage(compiler, text, stage, cause_type):
    with pytest.raises(CompileError) as excinfo:
        compiler.compile(text)
    assert excinfo.value.stage == stage
    assert isinstance(excinfo.value.cause, cause_type)
    assert excinfo.value.__cause__ is excinfo.value.cause
    assert excinfo.value.message == excinfo.value.cause.message


def test_lenient_parentheses():
    compiler = ExpressionCompiler(strict_parentheses=False)
    assert compiler.compile("3 + 4)").value == 7.0
    with pytest.raises(CompileError) as excinfo:
        compiler.compile("(3 + 4")
    assert excinfo.value.stage == CompileStage.EVALUATE
    assert excinfo.value.kind == EvalErrorKind.MALFORMED_EXPRESSION


def test_power_associativity_option():
    assert ExpressionCompiler(power_associativity="left").compile("2 ^ 3 ^ 2").value == 64.0
    assert ExpressionCompiler(power_associativity="right").compile("2 ^ 3 ^ 2").value == 512.0


def test_invalid_power_associativity():
    with pytest.raises(ValueError):
        ExpressionCompiler(power_associativity="sideways")


def test_cache_hits(compiler):
    first = compiler.compile("1 + 2")
    second = compiler.compile("1 + 2")
    assert first is second
    assert compiler.cache_info == {'hits': 1, 'misses': 1, 'size': 1}


def test_cache_keys_on_raw_text(compiler):
    # 位置不同的输入不能共享缓存结果
    first = compiler.compile("1 + 2")
    second = compiler.compile(" 1 + 2")
    assert first is not second
    assert second.tokens[0].position == 1


def test_shared_compiler_across_threads():
    compiler = ExpressionCompiler(cache_size=1)
    expressions = ["1 + 2", "3 * 4", "2 ^ 3", "8 / 2"] * 50
    with ThreadPoolExecutor(max_workers=8) as pool:
        values = list(pool.map(lambda e: compiler.compile(e).value, expressions))
    assert values == [3.0, 12.0, 8.0, 4.0] * 50
    info = compiler.cache_info
    assert info['size'] <= 1
    assert info['hits'] + info['misses'] == len(expressions)


def test_failures_are_not_cached(compiler):
    for _ in range(2):
        with pytest.raises(CompileError):
            compiler.compile("5 / 0")
    assert compiler.cache_info == {'hits': 0, 'misses': 2, 'size': 0}


def test_cache_evicts_least_recently_used():
    compiler = ExpressionCompiler(cache_size=2)
    compiler.compile("1")
    compiler.compile("2")
    compiler.compile("1")
    compiler.compile("3")  # evicts "2"
    assert compiler.cache_info['size'] == 2
    compiler.compile("2")
    assert compiler.cache_info['hits'] == 1


def test_cache_disabled():
    compiler = ExpressionCompiler(cache_size=0)
    assert compiler.compile("1 + 1") is not compiler.compile("1 + 1")
    assert compiler.cache_info['size'] == 0


def test_clear_cache(compiler):
    compiler.compile("1 + 2")
    compiler.compile("1 + 2")
    compiler.clear_cache()
    assert compiler.cache_info == {'hits': 0, 'misses': 0, 'size': 0}


def test_compile_expression_uses_defaults():
    result = compile_expression("(3 + 4) * 2")
    assert [t.text for t in result.postfix] == ["3", "4", "+", "2", "*"]
    assert result.value == 14.0
