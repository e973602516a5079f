"""Brainfuck interpreter with a bounded, configurable memory tape."""

from .config import InterpreterConfig, load_config
from .debugger import BrainfuckDebugger
from .errors import (
    BrainfuckError,
    CellOverflowError,
    ConfigError,
    OutputDeviceError,
    PointerOutOfRangeError,
    StepLimitError,
    UnmatchedBracketError,
)
from .instructions import Instruction, Program, decode_byte, parse_program
from .interpreter import BrainfuckInterpreter, run_program
from .io_adapter import BufferSink, BufferSource, ByteSink, ByteSource, StdinSource, StdoutSink
from .loops import JumpTableResolver, ScanResolver, build_jump_table, scan_backward, scan_forward
from .state import ExecutionState

__version__ = "0.1.0"
