"""Arithmetic logic unit: dispatches instruction mnemonics."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from asmsim.instructions.arithmetic import add, dec, inc, mul, neg, sub
from asmsim.instructions.bit_logic import (
    bitwise_and,
    bitwise_not,
    bitwise_or,
    bitwise_xor,
)
from asmsim.instructions.moves import mov, pop, push, xchg
from asmsim.memory import CpuState
from asmsim.mmu import MMU

_OPERATIONS: dict[str, Callable[[CpuState, MMU], None]] = {
    "sub": sub,
    "dec": dec,
    "inc": inc,
    "mul": mul,
    "neg": neg,
    "and": bitwise_and,
    "not": bitwise_not,
    "or": bitwise_or,
    "xor": bitwise_xor,
    "mov": mov,
    "pop": pop,
    "push": push,
    "xchg": xchg,
}


@dataclass
class ALU:
    """Runs instructions by mnemonic; an unknown mnemonic raises the gpf flag."""

    instruction: str = "NULL"
    lifetime: int = 0
    gpf: bool = False

    def execute_instruction(
        self, state: CpuState, mmu: MMU, instruction: str, operand1: int, operand2: int
    ) -> None:
        """Execute ``instruction``; only ``add`` uses the two operands."""
        if instruction == "add":
            add(state, mmu, operand1, operand2)
            return
        operation = _OPERATIONS.get(instruction)
        if operation is None:
            self.gpf = True
            return
        operation(state, mmu)