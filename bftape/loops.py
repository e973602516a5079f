"""
Loop resolution: find the partner of a bracket.

Two strategies give identical results:
  ScanResolver       re-scans the program on every loop crossing
  JumpTableResolver  pairs every bracket once, before execution

A bracket without a partner is only reported when a jump actually needs it,
so both strategies fail (or succeed) on exactly the same programs.
"""

from typing import Dict

from .errors import UnmatchedBracketError
from .instructions import Instruction, Program


def scan_forward(program: Program, position: int) -> int:
    """Return the index of the ']' matching the '[' at position."""
    depth = 1
    ip = position
    end = len(program)
    while depth > 0:
        ip += 1
        if ip >= end:
            raise UnmatchedBracketError(position, "[")
        ins = program[ip]
        if ins is Instruction.JUMP_FORWARD:
            depth += 1
        elif ins is Instruction.JUMP_BACKWARD:
            depth -= 1
    return ip


def scan_backward(program: Program, position: int) -> int:
    """Return the index of the '[' matching the ']' at position."""
    depth = 1
    ip = position
    while depth > 0:
        ip -= 1
        if ip < 0:
            raise UnmatchedBracketError(position, "]")
        ins = program[ip]
        if ins is Instruction.JUMP_BACKWARD:
            depth += 1
        elif ins is Instruction.JUMP_FORWARD:
            depth -= 1
    return ip


def build_jump_table(program: Program) -> Dict[int, int]:
    """Map each paired bracket position to its partner. Unpaired brackets are left out."""
    jump_table: Dict[int, int] = {}
    stack = []

    for i, ins in enumerate(program):
        if ins is Instruction.JUMP_FORWARD:
            stack.append(i)
        elif ins is Instruction.JUMP_BACKWARD and stack:
            start = stack.pop()
            jump_table[start] = i
            jump_table[i] = start

    return jump_table


class LoopResolver:
    """Interface used by the step transition to cross a loop boundary."""

    def __init__(self, program: Program):
        self.program = program

    def forward(self, position: int) -> int:
        raise NotImplementedError

    def backward(self, position: int) -> int:
        raise NotImplementedError


class ScanResolver(LoopResolver):
    """Linear re-scan on each crossing, O(len(program)) per jump."""

    def forward(self, position: int) -> int:
        return scan_forward(self.program, position)

    def backward(self, position: int) -> int:
        return scan_backward(self.program, position)


class JumpTableResolver(LoopResolver):
    """Constant-time lookup into a table built once per program."""

    def __init__(self, program: Program):
        super().__init__(program)
        self.jump_table = build_jump_table(program)

    def forward(self, position: int) -> int:
        try:
            return self.jump_table[position]
        except KeyError:
            raise UnmatchedBracketError(position, "[") from None

    def backward(self, position: int) -> int:
        try:
            return self.jump_table[position]
        except KeyError:
            raise UnmatchedBracketError(position, "]") from None


RESOLVERS = {
    "table": JumpTableResolver,
    "scan": ScanResolver,
}


def make_resolver(program: Program, strategy: str = "table") -> LoopResolver:
    try:
        resolver_cls = RESOLVERS[strategy]
    except KeyError:
        raise ValueError(f"unknown jump strategy '{strategy}' (expected one of {sorted(RESOLVERS)})") from None
    return resolver_cls(program)
