"""Failures raised while running a Brainfuck program."""

from typing import Optional


class BrainfuckError(Exception):
    """Base class for every fatal execution failure."""


class ConfigError(BrainfuckError, ValueError):
    """Invalid interpreter configuration."""


class OutputDeviceError(BrainfuckError):
    """The output sink rejected a write."""


class PointerOutOfRangeError(BrainfuckError):
    """The data pointer tried to leave the memory tape."""

    def __init__(self, pointer: int, memory_size: int, instruction_pointer: Optional[int] = None):
        self.pointer = pointer
        self.memory_size = memory_size
        self.instruction_pointer = instruction_pointer
        where = f" at instruction {instruction_pointer}" if instruction_pointer is not None else ""
        super().__init__(
            f"data pointer moved to {pointer}, outside tape [0, {memory_size}){where}"
        )


class UnmatchedBracketError(BrainfuckError):
    """A loop bracket has no partner in the program."""

    def __init__(self, position: int, bracket: str):
        self.position = position
        self.bracket = bracket
        super().__init__(f"unmatched '{bracket}' at position {position}")


class CellOverflowError(BrainfuckError):
    """A cell left the 0-255 range while running in trap mode."""

    def __init__(self, address: int, value: int, instruction_pointer: int):
        self.address = address
        self.value = value
        self.instruction_pointer = instruction_pointer
        super().__init__(
            f"cell[{address}] would become {value} at instruction {instruction_pointer}"
        )


class StepLimitError(BrainfuckError):
    """The configured step limit ran out before the program finished."""

    def __init__(self, max_steps: int):
        self.max_steps = max_steps
        super().__init__(f"execution stopped after {max_steps} steps (possible infinite loop)")
