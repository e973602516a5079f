"""
Interpreter configuration.

Values come from, in increasing priority:
  1. InterpreterConfig defaults
  2. a YAML file (load_config)
  3. BF_* environment variables (InterpreterConfig.from_env)
  4. command-line flags
"""

import os
from dataclasses import dataclass, asdict, fields, replace
from typing import Any, Dict, Mapping, Optional

import yaml

from .errors import ConfigError

CELL_OVERFLOW_MODES = ("wrap", "trap")
JUMP_STRATEGIES = ("table", "scan")

ENV_VARS = {
    "memory_size": "BF_MEMORY_SIZE",
    "cell_overflow": "BF_CELL_OVERFLOW",
    "jump_strategy": "BF_JUMP_STRATEGY",
    "max_steps": "BF_STEP_LIMIT",
}


@dataclass(frozen=True)
class InterpreterConfig:
    """Configuration parameters for a run."""
    memory_size: int = 30000
    cell_overflow: str = "wrap"
    jump_strategy: str = "table"
    max_steps: Optional[int] = None  # None means run until the program ends

    def __post_init__(self):
        if isinstance(self.memory_size, bool) or not isinstance(self.memory_size, int):
            raise ConfigError(f"memory_size must be an integer, got {self.memory_size!r}")
        if self.memory_size < 1:
            raise ConfigError(f"memory_size must be at least 1, got {self.memory_size}")
        if self.cell_overflow not in CELL_OVERFLOW_MODES:
            raise ConfigError(f"cell_overflow must be one of {CELL_OVERFLOW_MODES}, got {self.cell_overflow!r}")
        if self.jump_strategy not in JUMP_STRATEGIES:
            raise ConfigError(f"jump_strategy must be one of {JUMP_STRATEGIES}, got {self.jump_strategy!r}")
        if self.max_steps is not None:
            if isinstance(self.max_steps, bool) or not isinstance(self.max_steps, int) or self.max_steps < 1:
                raise ConfigError(f"max_steps must be a positive integer or None, got {self.max_steps!r}")

    @property
    def wrap_cells(self) -> bool:
        return self.cell_overflow == "wrap"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "InterpreterConfig":
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ConfigError(f"unknown config keys: {', '.join(sorted(str(k) for k in unknown))}")
        return cls(**dict(data))

    def merged(self, **overrides) -> "InterpreterConfig":
        """Copy with every non-None override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes)

    @classmethod
    def from_env(cls, base: Optional["InterpreterConfig"] = None,
                 environ: Optional[Mapping[str, str]] = None) -> "InterpreterConfig":
        """Apply BF_* environment variables on top of base."""
        base = base or cls()
        environ = os.environ if environ is None else environ
        overrides: Dict[str, Any] = {}
        for name, var in ENV_VARS.items():
            raw = environ.get(var)
            if raw is None or raw.strip() == "":
                continue
            raw = raw.strip()
            if name in ("memory_size", "max_steps"):
                try:
                    overrides[name] = int(raw)
                except ValueError:
                    raise ConfigError(f"{var} must be an integer, got {raw!r}") from None
            else:
                overrides[name] = raw.lower()
        return base.merged(**overrides)


def load_config(path: str, base: Optional[InterpreterConfig] = None) -> InterpreterConfig:
    """Load a YAML mapping of config keys, e.g.:

        memory_size: 8
        cell_overflow: trap
        jump_strategy: scan
        max_steps: 100000
    """
    with open(path, "rb") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"failed to parse config file {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"config file {path} must contain a mapping, got {type(data).__name__}")

    base = base or InterpreterConfig()
    merged = base.to_dict()
    merged.update(data)
    return InterpreterConfig.from_dict(merged)
