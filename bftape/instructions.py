"""
Instruction decoding.

Brainfuck has only 8 commands:
    >   Move the pointer to the right
    <   Move the pointer to the left
    +   Increment the memory cell at the pointer
    -   Decrement the memory cell at the pointer
    .   Output the byte in the cell at the pointer
    ,   Input a byte and store it in the cell at the pointer
    [   Jump past the matching ] if the cell at the pointer is 0
    ]   Jump back to the matching [ if the cell at the pointer is nonzero

All other bytes are comments. They are dropped from the program entirely,
so they never occupy an instruction position.
"""

from enum import Enum
from typing import Dict, Iterator, Tuple, Union


class Instruction(Enum):
    """A decoded command. UNKNOWN marks a byte that is not a command."""
    MOVE_RIGHT = ">"
    MOVE_LEFT = "<"
    INCREMENT = "+"
    DECREMENT = "-"
    OUTPUT = "."
    INPUT = ","
    JUMP_FORWARD = "["
    JUMP_BACKWARD = "]"
    UNKNOWN = ""

    @property
    def symbol(self) -> str:
        return self.value


_DECODE_TABLE: Dict[int, Instruction] = {
    ord(ins.value): ins for ins in Instruction if ins is not Instruction.UNKNOWN
}


def decode_byte(byte: int) -> Instruction:
    """Map one raw byte to its instruction, or Instruction.UNKNOWN."""
    return _DECODE_TABLE.get(byte, Instruction.UNKNOWN)


class Program:
    """Immutable, filtered instruction sequence."""

    __slots__ = ("_instructions",)

    def __init__(self, instructions):
        instructions = tuple(instructions)
        if Instruction.UNKNOWN in instructions:
            raise ValueError("a program cannot contain Instruction.UNKNOWN")
        self._instructions: Tuple[Instruction, ...] = instructions

    @property
    def instructions(self) -> Tuple[Instruction, ...]:
        return self._instructions

    def __len__(self) -> int:
        return len(self._instructions)

    def __getitem__(self, index):
        return self._instructions[index]

    def __iter__(self) -> Iterator[Instruction]:
        return iter(self._instructions)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Program):
            return NotImplemented
        return self._instructions == other._instructions

    def __hash__(self) -> int:
        return hash(self._instructions)

    def __str__(self) -> str:
        return "".join(ins.symbol for ins in self._instructions)

    def __repr__(self) -> str:
        return f"Program({str(self)!r})"


def parse_program(source: Union[bytes, bytearray, str]) -> Program:
    """Decode a whole buffer, discarding every non-instruction byte."""
    if isinstance(source, str):
        source = source.encode("utf-8")
    decoded = (decode_byte(b) for b in source)
    return Program(ins for ins in decoded if ins is not Instruction.UNKNOWN)
