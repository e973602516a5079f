"""
Brainfuck Step-by-Step Debugger

Runs a program exactly like BrainfuckInterpreter, but prints the memory tape,
the instruction position and the output so far after every step. The trace
goes to stderr by default so it never mixes with the program's own output.
"""

import sys
from typing import List, Optional

from .config import InterpreterConfig
from .instructions import Instruction, Program
from .interpreter import BrainfuckInterpreter
from .state import ExecutionState


class BrainfuckDebugger(BrainfuckInterpreter):
    """Interpreter with step-by-step tracing."""

    def __init__(self, config: Optional[InterpreterConfig] = None,
                 show_memory_range: int = 10, stream=None):
        super().__init__(config)
        self.show_memory_range = max(1, show_memory_range)
        self.stream = stream if stream is not None else sys.stderr
        self.output: List[int] = []

    def _print(self, text: str = "") -> None:
        print(text, file=self.stream)

    def _on_start(self, program: Program, state: ExecutionState) -> None:
        self.output = []
        self._print("🐛 BRAINFUCK DEBUGGER")
        self._print(f"Program: {program}")
        self._print(f"Memory size: {state.memory_size}, "
                    f"cells: {self.config.cell_overflow}, jumps: {self.config.jump_strategy}")
        self._print("=" * 80)
        self._show_state(program, state, "INITIAL")

    def _on_step(self, program: Program, state: ExecutionState, ins: Instruction,
                 position: int) -> None:
        self._print(f"\nStep {self.step_count}: Execute '{ins.symbol}' at position {position}")
        dp = state.data_pointer
        value = state.current_value
        jumped = state.instruction_pointer != position + 1

        if ins is Instruction.MOVE_RIGHT:
            self._print(f"  Move pointer right → position {dp}")
        elif ins is Instruction.MOVE_LEFT:
            self._print(f"  Move pointer left → position {dp}")
        elif ins is Instruction.INCREMENT:
            self._print(f"  Increment cell[{dp}] → {value}")
        elif ins is Instruction.DECREMENT:
            self._print(f"  Decrement cell[{dp}] → {value}")
        elif ins is Instruction.OUTPUT:
            self.output.append(value)
            self._print(f"  Output cell[{dp}] = {value} → {bytes((value,))!r}")
        elif ins is Instruction.INPUT:
            self._print(f"  Read input → cell[{dp}] = {value}")
        elif ins is Instruction.JUMP_FORWARD:
            if jumped:
                self._print(f"  Loop start: cell[{dp}] = 0, jump to position {state.instruction_pointer - 1}")
            else:
                self._print(f"  Loop start: cell[{dp}] ≠ 0, enter loop")
        elif ins is Instruction.JUMP_BACKWARD:
            if jumped:
                self._print(f"  Loop end: cell[{dp}] ≠ 0, jump back to position {state.instruction_pointer - 1}")
            else:
                self._print(f"  Loop end: cell[{dp}] = 0, exit loop")

        self._show_state(program, state, f"AFTER STEP {self.step_count}")

    def _on_finish(self, program: Program, state: ExecutionState) -> None:
        self._print("\n🎯 FINAL RESULT:")
        self._print(f"Steps: {self.step_count}")
        self._print(f"Output: {bytes(self.output)!r} → {self.output}")

    def _show_state(self, program: Program, state: ExecutionState, label: str) -> None:
        """Show the program with the instruction pointer, the tape window and the output."""
        self._print(f"\n{label}:")

        program_display = ""
        for i, ins in enumerate(program):
            if i == state.instruction_pointer:
                program_display += f"[{ins.symbol}]"
            else:
                program_display += ins.symbol
        if state.instruction_pointer >= len(program):
            program_display += "[END]"
        self._print(f"Program:  {program_display}")

        start, end = self.memory_window(state)
        memory_vals = []
        memory_ptrs = []
        memory_addrs = []
        for i in range(start, end):
            memory_vals.append(f"{int(state.memory[i]):3d}")
            memory_ptrs.append(" ^ " if i == state.data_pointer else "   ")
            memory_addrs.append(f"{i:3d}")

        self._print("Memory:   [" + "|".join(memory_vals) + "]")
        self._print("Pointer:   " + " ".join(memory_ptrs))
        self._print("Address:   " + " ".join(memory_addrs))

        if self.output:
            self._print(f"Output:   {bytes(self.output)!r} → {self.output}")
        else:
            self._print("Output:   (empty)")

    def memory_window(self, state: ExecutionState):
        """Half-open range of addresses to display, centred on the data pointer."""
        size = state.memory_size
        start = max(0, state.data_pointer - self.show_memory_range // 2)
        end = min(size, start + self.show_memory_range)

        # Adjust start if we're near the end
        if end - start < self.show_memory_range:
            start = max(0, end - self.show_memory_range)
        return start, end
