"""Arithmetic instructions: add, sub, inc, dec, mul and neg.

Each instruction walks through its fetch and operand cycles on the MMU buses,
reporting every step, and leaves both buses cleared. Status flags are not
changed by these instructions.
"""

from __future__ import annotations

from asmsim.memory import CpuState
from asmsim.mmu import MMU
from asmsim.registers import U32_MAX, check_u32
from asmsim.report import describe_working_states

_I32_MIN = -(1 << 31)
_I32_MAX = (1 << 31) - 1


def _as_i32(value: int) -> int:
    return value - (1 << 32) if value > _I32_MAX else value


def _checked_i32(value: int, operation: str) -> int:
    if not _I32_MIN <= value <= _I32_MAX:
        raise OverflowError(f"{operation} overflows a signed 32-bit value")
    return value & U32_MAX


def _send_address(state: CpuState, mmu: MMU, segment: str, offset: int) -> int:
    address = mmu.physical_address(segment, offset, state.flags)
    mmu.address_bus = address
    describe_working_states(state, mmu, False, False)
    return address


def _fetch(state: CpuState, mmu: MMU) -> int:
    return _send_address(state, mmu, "cs", state.offsets.eip)


def _got_data(state: CpuState, mmu: MMU) -> None:
    describe_working_states(state, mmu, True, True)


def _write_back(state: CpuState, mmu: MMU) -> None:
    _send_address(state, mmu, "ds", state.offsets.edi)
    mmu.data_bus = state.main.eax
    describe_working_states(state, mmu, True, False)


def _clear_buses(mmu: MMU) -> None:
    mmu.data_bus = 0
    mmu.address_bus = 0


def _read_destination(state: CpuState, mmu: MMU) -> int:
    """Latch the destination address from the data bus and read its value."""
    state.offsets.increment_program_counter()
    _fetch(state, mmu)
    state.offsets.increment_program_counter()
    end1 = mmu.data_bus
    state.offsets.write("edi", end1)
    state.offsets.write("esi", end1)
    _got_data(state, mmu)
    _send_address(state, mmu, "ds", end1)
    value = mmu.data_bus
    state.main.write("eax", value)
    _got_data(state, mmu)
    return value


def add(state: CpuState, mmu: MMU, dst: int, src: int) -> None:
    """ADD DST, SRC: add the source operand to the destination operand."""
    check_u32(dst)
    check_u32(src)
    state.offsets.increment_program_counter()
    _fetch(state, mmu)
    state.offsets.increment_program_counter()

    mmu.data_bus = dst
    state.offsets.write("edi", dst)
    state.offsets.write("esi", dst)
    _got_data(state, mmu)
    _send_address(state, mmu, "ds", dst)
    x = mmu.data_bus
    state.main.write("eax", x)
    _got_data(state, mmu)

    _fetch(state, mmu)
    state.offsets.increment_program_counter()
    mmu.data_bus = src
    state.offsets.write("esi", src)
    _got_data(state, mmu)
    _send_address(state, mmu, "ds", src)
    y = mmu.data_bus
    state.main.write("ebx", y)
    _got_data(state, mmu)

    state.main.write("eax", _checked_i32(_as_i32(x) + _as_i32(y), "add"))
    _write_back(state, mmu)
    _clear_buses(mmu)


def sub(state: CpuState, mmu: MMU) -> None:
    """SUB DST, SRC: subtract the source operand from the destination operand."""
    x = _read_destination(state, mmu)

    _fetch(state, mmu)
    state.offsets.increment_program_counter()
    end2 = mmu.data_bus
    state.offsets.write("esi", end2)
    _got_data(state, mmu)
    _send_address(state, mmu, "ds", end2)
    y = mmu.data_bus
    state.main.write("ebx", y)
    _got_data(state, mmu)

    state.main.write("eax", _checked_i32(_as_i32(x) - _as_i32(y), "sub"))
    _write_back(state, mmu)
    _clear_buses(mmu)


def inc(state: CpuState, mmu: MMU) -> None:
    """INC DST: add one to the destination operand."""
    x = _read_destination(state, mmu)
    if x == U32_MAX:
        raise OverflowError("inc overflows an unsigned 32-bit value")
    state.main.write("eax", x + 1)
    _write_back(state, mmu)
    _clear_buses(mmu)


def dec(state: CpuState, mmu: MMU) -> None:
    """DEC DST: subtract one from the destination operand."""
    x = _read_destination(state, mmu)
    if x == 0:
        raise OverflowError("dec underflows an unsigned 32-bit value")
    state.main.write("eax", x - 1)
    _write_back(state, mmu)
    _clear_buses(mmu)


def mul(state: CpuState, mmu: MMU) -> None:
    """MUL SRC: multiply eax by the source operand (unsigned)."""
    state.offsets.increment_program_counter()
    _fetch(state, mmu)
    state.offsets.increment_program_counter()
    end1 = mmu.data_bus
    state.offsets.write("esi", end1)
    _got_data(state, mmu)
    _send_address(state, mmu, "ds", end1)
    value = mmu.data_bus
    state.main.write("ebx", value)
    _got_data(state, mmu)

    product = state.main.eax * value
    if product > U32_MAX:
        raise OverflowError("mul overflows an unsigned 32-bit value")
    state.main.write("eax", product)
    _clear_buses(mmu)


def neg(state: CpuState, mmu: MMU) -> None:
    """NEG DST: negate the destination operand (subtract it from zero)."""
    state.offsets.increment_program_counter()
    code_address = _fetch(state, mmu)
    state.offsets.increment_program_counter()
    end1 = mmu.data_bus
    state.offsets.write("edi", end1)
    state.offsets.write("esi", end1)
    _got_data(state, mmu)
    # The operand address is derived from the fetched code address here.
    _send_address(state, mmu, "ds", code_address)
    x = mmu.data_bus
    state.main.write("eax", x)
    _got_data(state, mmu)

    state.main.write("eax", _checked_i32(-_as_i32(x), "neg"))
    _write_back(state, mmu)
    _clear_buses(mmu)