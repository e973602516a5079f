#!/usr/bin/env python3
"""
Command-line runner: bftape PROGRAM_FILE

Reads the file as raw bytes, runs it against stdin/stdout and reports any
execution failure on stderr.
"""

import argparse
import sys
from typing import List, Optional

from .config import CELL_OVERFLOW_MODES, JUMP_STRATEGIES, InterpreterConfig, load_config
from .debugger import BrainfuckDebugger
from .errors import BrainfuckError, ConfigError
from .instructions import parse_program
from .interpreter import BrainfuckInterpreter
from .io_adapter import StdinSource, StdoutSink

USAGE = "Please provide the name of the program file."


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="bftape", description="Run a Brainfuck program on a bounded memory tape")
    ap.add_argument("program", nargs="?", help="Path to the program file")
    ap.add_argument("--memory-size", type=int, default=None, help="Number of memory cells (default 30000)")
    ap.add_argument("--cell-overflow", choices=CELL_OVERFLOW_MODES, default=None,
                    help="wrap cells modulo 256, or trap on overflow/underflow")
    ap.add_argument("--jump-strategy", choices=JUMP_STRATEGIES, default=None,
                    help="precomputed jump table, or linear bracket scan on every jump")
    ap.add_argument("--max-steps", type=int, default=None, help="Abort after this many steps")
    ap.add_argument("--config", default=None, help="YAML file with interpreter settings")
    ap.add_argument("--trace", action="store_true", help="Print a step-by-step trace to stderr")
    return ap


def resolve_config(args: argparse.Namespace) -> InterpreterConfig:
    config = InterpreterConfig()
    if args.config:
        config = load_config(args.config, config)
    config = InterpreterConfig.from_env(config)
    return config.merged(
        memory_size=args.memory_size,
        cell_overflow=args.cell_overflow,
        jump_strategy=args.jump_strategy,
        max_steps=args.max_steps,
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if not args.program:
        print(USAGE)
        return 0

    try:
        config = resolve_config(args)
    except (ConfigError, OSError) as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 1

    try:
        with open(args.program, "rb") as f:
            code = f.read()
    except OSError as e:
        print(f"Failed to read from program file: {e}", file=sys.stderr)
        return 1

    program = parse_program(code)
    interpreter = BrainfuckDebugger(config) if args.trace else BrainfuckInterpreter(config)
    try:
        interpreter.execute(program, StdoutSink(), StdinSource())
    except BrainfuckError as e:
        print(f"\nProgram exited with error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
