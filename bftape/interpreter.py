"""
Brainfuck Interpreter

The execution driver: owns one ExecutionState per run and steps it until
the instruction pointer reaches the end of the program. The first failure
aborts the run and propagates to the caller unchanged.
"""

from typing import Optional, Union

from .config import InterpreterConfig
from .errors import StepLimitError
from .instructions import Instruction, Program, parse_program
from .io_adapter import BufferSink, BufferSource, ByteSink, ByteSource, StdinSource, StdoutSink
from .loops import make_resolver
from .state import ExecutionState

Source = Union[Program, bytes, bytearray, str]


class BrainfuckInterpreter:
    def __init__(self, config: Optional[InterpreterConfig] = None):
        self.config = config or InterpreterConfig()
        self.step_count = 0

    def execute(self, program: Program, sink: Optional[ByteSink] = None,
                source: Optional[ByteSource] = None) -> ExecutionState:
        """Run program to completion and return the final state."""
        sink = sink if sink is not None else StdoutSink()
        source = source if source is not None else StdinSource()
        resolver = make_resolver(program, self.config.jump_strategy)
        max_steps = self.config.max_steps
        wrap_cells = self.config.wrap_cells

        state = ExecutionState(self.config.memory_size)
        self.step_count = 0
        self._on_start(program, state)

        end = len(program)
        while state.instruction_pointer < end:
            if max_steps is not None and self.step_count >= max_steps:
                raise StepLimitError(max_steps)
            ins = program[state.instruction_pointer]
            position = state.instruction_pointer
            state.step(program, resolver, sink, source, wrap_cells)
            self.step_count += 1
            self._on_step(program, state, ins, position)

        self._on_finish(program, state)
        return state

    def run(self, code: Source, input_data: Union[bytes, bytearray, str] = b"") -> bytes:
        """Execute code against in-memory input and return everything it wrote."""
        program = code if isinstance(code, Program) else parse_program(code)
        sink = BufferSink()
        self.execute(program, sink, BufferSource(input_data))
        return sink.getvalue()

    # Hooks for subclasses; the plain interpreter does nothing here.

    def _on_start(self, program: Program, state: ExecutionState) -> None:
        pass

    def _on_step(self, program: Program, state: ExecutionState, ins: Instruction,
                 position: int) -> None:
        pass

    def _on_finish(self, program: Program, state: ExecutionState) -> None:
        pass


def run_program(code: Source, input_data: Union[bytes, bytearray, str] = b"",
                config: Optional[InterpreterConfig] = None) -> bytes:
    return BrainfuckInterpreter(config).run(code, input_data)
