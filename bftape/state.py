"""
Execution state and the single-step transition.

The state is one owned value mutated in place; nothing is copied per step.
"""

from typing import Optional

import numpy as np

from .errors import CellOverflowError, PointerOutOfRangeError
from .instructions import Instruction, Program
from .io_adapter import ByteSink, ByteSource
from .loops import LoopResolver


class ExecutionState:
    """Data pointer, instruction pointer and the memory tape."""

    __slots__ = ("data_pointer", "instruction_pointer", "memory")

    def __init__(self, memory_size: int):
        if memory_size < 1:
            raise ValueError(f"memory_size must be at least 1, got {memory_size}")
        self.data_pointer = 0
        self.instruction_pointer = 0
        self.memory = np.zeros(memory_size, dtype=np.uint8)

    @property
    def memory_size(self) -> int:
        return len(self.memory)

    @property
    def current_value(self) -> int:
        return int(self.memory[self.data_pointer])

    def is_terminal(self, program: Program) -> bool:
        return self.instruction_pointer >= len(program)

    def step(self, program: Program, resolver: LoopResolver,
             sink: ByteSink, source: ByteSource, wrap_cells: bool = True) -> "ExecutionState":
        """Execute the instruction at instruction_pointer and advance past it.

        Returns self so callers can chain; the state is changed in place.
        A failing step raises before touching memory or pointers.
        """
        ip = self.instruction_pointer
        ins = program[ip]

        if ins is Instruction.MOVE_RIGHT:
            self._move_to(self.data_pointer + 1)

        elif ins is Instruction.MOVE_LEFT:
            self._move_to(self.data_pointer - 1)

        elif ins is Instruction.INCREMENT:
            self._store(self.current_value + 1, wrap_cells)

        elif ins is Instruction.DECREMENT:
            self._store(self.current_value - 1, wrap_cells)

        elif ins is Instruction.OUTPUT:
            sink.write_byte(self.current_value)

        elif ins is Instruction.INPUT:
            value = source.read_byte()
            self.memory[self.data_pointer] = 0 if value is None else value

        elif ins is Instruction.JUMP_FORWARD:
            if self.current_value == 0:
                self.instruction_pointer = resolver.forward(ip)

        elif ins is Instruction.JUMP_BACKWARD:
            if self.current_value != 0:
                self.instruction_pointer = resolver.backward(ip)

        # Jumps land on the partner bracket; this moves one past it
        self.instruction_pointer += 1
        return self

    def _move_to(self, pointer: int) -> None:
        if not 0 <= pointer < len(self.memory):
            raise PointerOutOfRangeError(pointer, len(self.memory), self.instruction_pointer)
        self.data_pointer = pointer

    def _store(self, value: int, wrap_cells: bool) -> None:
        if not 0 <= value <= 255:
            if not wrap_cells:
                raise CellOverflowError(self.data_pointer, value, self.instruction_pointer)
            value %= 256
        self.memory[self.data_pointer] = value

    def snapshot(self, start: int = 0, end: Optional[int] = None):
        """Copy of memory[start:end] as plain ints."""
        return [int(v) for v in self.memory[start:end]]

    def __repr__(self) -> str:
        return (f"ExecutionState(data_pointer={self.data_pointer}, "
                f"instruction_pointer={self.instruction_pointer}, "
                f"memory_size={len(self.memory)})")
