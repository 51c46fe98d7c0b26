"""主程序入口 - 编译算术表达式并输出每一步的栈状态"""
import argparse
import logging
import sys

from config.config import *
from compiler import ExpressionCompiler
from core import CompileError
from utils.trace_format import format_tokens, format_trace, format_number, trace_to_frame

logger = logging.getLogger(__name__)


def setup_logging(level=None):
    logging.basicConfig(
        level=level or LOGGING_CONFIG['level'],
        format=LOGGING_CONFIG['format']
    )


def main(args):
    setup_logging(args.log_level)
    validate_config()

    compiler = ExpressionCompiler(
        strict_parentheses=not args.lenient_parentheses,
        power_associativity='right' if args.right_assoc_power else PARSER_CONFIG['power_associativity'],
    )

    failures = 0
    last_result = None
    for expression in args.expressions:
        logger.info(f"Input: {expression}")
        try:
            result = compiler.compile(expression)
        except CompileError as e:
            failures += 1
            logger.error(f"Error ({e.stage.value}): {e.message}")
            continue

        logger.info(f"Tokens: {format_tokens(result.tokens)}")
        logger.info(f"Postfix: {format_tokens(result.postfix)}")
        if args.show_trace:
            for line in format_trace(result.trace):
                logger.info(f"  {line}")
        logger.info(f"Result: {format_number(result.value)}")
        last_result = result

    if args.save_trace:
        if last_result is None:
            logger.warning("No successful expression, trace not saved")
        else:
            logger.info(f"Saving trace to {args.save_trace}")
            trace_to_frame(last_result.trace).to_csv(args.save_trace, index=False)

    return 1 if failures else 0


def build_parser():
    parser = argparse.ArgumentParser(description="Arithmetic expression tracer (infix -> postfix -> stack evaluation)")

    parser.add_argument(
        "expressions",
        nargs="+",
        help="Arithmetic expressions, e.g. \"(3 + 4) * 2\""
    )
    parser.add_argument(
        "--lenient_parentheses",
        action="store_true",
        help="Silently absorb unbalanced parentheses instead of reporting an error"
    )
    parser.add_argument(
        "--right_assoc_power",
        action="store_true",
        help="Treat '^' as right-associative (2^3^2 = 512 instead of 64)"
    )
    parser.add_argument(
        "--show_trace",
        action="store_true",
        help="Log every evaluation step with its stack snapshot"
    )
    parser.add_argument(
        "--save_trace",
        type=str,
        default=None,
        help="Path to save the trace of the last successful expression as CSV"
    )
    parser.add_argument(
        "--log_level",
        type=str,
        default=None,
        help="Logging level (default: LOGGING_CONFIG['level'])"
    )
    return parser


if __name__ == "__main__":
    sys.exit(main(build_parser().parse_args()))
