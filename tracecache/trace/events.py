from __future__ import annotations
from enum import Enum
from typing import NamedTuple


class Op(str, Enum):
    """Memory operation recorded in a trace."""
    READ = "R"
    WRITE = "W"

    def __str__(self) -> str:
        return self.value


class TraceEvent(NamedTuple):
    op: Op
    address: int
    pc: int = 0
