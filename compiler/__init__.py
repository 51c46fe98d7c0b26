"""Compiler模块 - 串联词法分析、转换和求值"""
from .expression_compiler import ExpressionCompiler, CompileResult, compile_expression

__all__ = ['ExpressionCompiler', 'CompileResult', 'compile_expression']
