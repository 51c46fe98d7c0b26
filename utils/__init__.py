"""工具模块"""
from .trace_format import format_tokens, format_step, format_trace, trace_to_frame, replay_trace

__all__ = ['format_tokens', 'format_step', 'format_trace', 'trace_to_frame', 'replay_trace']
