"""Bitwise instructions: and, or, not and xor.

Operands are taken straight from the data bus while the program counter
walks over the instruction; addresses are not translated through the MMU
and no step is reported. Both buses are cleared afterwards.
"""

from __future__ import annotations

import operator
from typing import Callable

from asmsim.memory import CpuState
from asmsim.mmu import MMU
from asmsim.registers import U32_MAX


def _load_first(state: CpuState, mmu: MMU) -> int:
    """Step to the first operand, latch its address and read its value into eax."""
    offsets = state.offsets
    offsets.increment_program_counter()
    offsets.increment_program_counter()
    mmu.address_bus = offsets.eip
    end1 = mmu.address_bus
    offsets.write("edi", end1)
    offsets.write("esi", end1)
    value = mmu.data_bus
    state.main.write("eax", value)
    return value


def _load_second(state: CpuState, mmu: MMU) -> int:
    """Step to the second operand, latch its address in esi and return its value."""
    offsets = state.offsets
    offsets.increment_program_counter()
    mmu.address_bus = offsets.eip
    offsets.write("esi", mmu.address_bus)
    return mmu.data_bus


def _store(state: CpuState, mmu: MMU, value: int) -> None:
    """Put the result in eax, send it to the destination and clear the buses."""
    state.main.write("eax", value)
    mmu.address_bus = state.offsets.edi
    mmu.data_bus = state.main.eax
    mmu.data_bus = 0
    mmu.address_bus = 0


def _binary(state: CpuState, mmu: MMU, combine: Callable[[int, int], int]) -> None:
    first = _load_first(state, mmu)
    second = _load_second(state, mmu)
    _store(state, mmu, combine(first, second))


def bitwise_and(state: CpuState, mmu: MMU) -> None:
    """AND DST, SRC: bitwise and of both operands into the destination."""
    _binary(state, mmu, operator.and_)


def bitwise_or(state: CpuState, mmu: MMU) -> None:
    """OR DST, SRC: bitwise or of both operands into the destination."""
    _binary(state, mmu, operator.or_)


def bitwise_xor(state: CpuState, mmu: MMU) -> None:
    """XOR DST, SRC: bitwise exclusive or of both operands into the destination."""
    _binary(state, mmu, operator.xor)


def bitwise_not(state: CpuState, mmu: MMU) -> None:
    """NOT DST: invert every bit of the destination operand."""
    value = _load_first(state, mmu)
    _store(state, mmu, value ^ U32_MAX)