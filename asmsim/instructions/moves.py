"""Data movement instructions: mov, pop, push and xchg.

Each instruction walks through its fetch and operand cycles on the MMU buses,
reporting every step, and leaves both buses cleared.
"""

from __future__ import annotations

from asmsim.memory import CpuState
from asmsim.mmu import MMU
from asmsim.registers import U32_MAX
from asmsim.report import describe_working_states


def _put_address(state: CpuState, mmu: MMU, address: int) -> None:
    mmu.address_bus = address
    describe_working_states(state, mmu, False, False)


def _send_address(state: CpuState, mmu: MMU, segment: str, offset: int) -> int:
    address = mmu.physical_address(segment, offset, state.flags)
    _put_address(state, mmu, address)
    return address


def _fetch(state: CpuState, mmu: MMU) -> int:
    return _send_address(state, mmu, "cs", state.offsets.eip)


def _got_data(state: CpuState, mmu: MMU) -> None:
    describe_working_states(state, mmu, True, True)


def _send_data(state: CpuState, mmu: MMU, value: int) -> None:
    mmu.data_bus = value
    describe_working_states(state, mmu, True, False)


def _clear_buses(mmu: MMU) -> None:
    mmu.data_bus = 0
    mmu.address_bus = 0


def _read_first_operand(state: CpuState, mmu: MMU) -> tuple[int, int]:
    """Fetch the first operand address and its value; return both."""
    offsets = state.offsets
    offsets.increment_program_counter()
    _fetch(state, mmu)
    offsets.increment_program_counter()
    end1 = mmu.data_bus
    offsets.write("edi", end1)
    offsets.write("esi", end1)
    _got_data(state, mmu)
    _send_address(state, mmu, "ds", end1)
    value = mmu.data_bus
    state.main.write("eax", value)
    _got_data(state, mmu)
    return end1, value


def _read_second_operand(state: CpuState, mmu: MMU, register: str) -> tuple[int, int]:
    """Fetch the second operand address and load its value into ``register``."""
    _fetch(state, mmu)
    state.offsets.increment_program_counter()
    end2 = mmu.data_bus
    state.offsets.write("esi", end2)
    _got_data(state, mmu)
    _send_address(state, mmu, "ds", end2)
    value = mmu.data_bus
    state.main.write(register, value)
    _got_data(state, mmu)
    return end2, value


def mov(state: CpuState, mmu: MMU) -> None:
    """MOV DST, SRC: copy the source operand into the destination."""
    offsets = state.offsets
    offsets.increment_program_counter()
    _fetch(state, mmu)
    offsets.increment_program_counter()
    end1 = mmu.data_bus
    offsets.write("edi", end1)
    offsets.write("esi", end1)
    _got_data(state, mmu)

    _, x = _read_second_operand(state, mmu, "eax")

    _send_address(state, mmu, "ds", end1)
    _send_data(state, mmu, x)
    _clear_buses(mmu)


def pop(state: CpuState, mmu: MMU) -> None:
    """POP DST: take the value at the stack top and store it in the destination."""
    offsets = state.offsets
    offsets.increment_program_counter()

    top = mmu.physical_address("ss", offsets.esp, state.flags) + 2
    if top > U32_MAX:
        raise OverflowError("stack top address exceeds 32 bits")
    _put_address(state, mmu, top)

    x = mmu.data_bus
    offsets.decrease_stack_pointer()
    state.main.write("eax", x)
    _got_data(state, mmu)

    _fetch(state, mmu)
    offsets.increment_program_counter()
    end1 = mmu.data_bus
    offsets.write("edi", end1)
    end1 = mmu.physical_address("ds", end1, state.flags)
    _got_data(state, mmu)

    _put_address(state, mmu, end1)
    _send_data(state, mmu, x)
    _clear_buses(mmu)


def push(state: CpuState, mmu: MMU) -> None:
    """PUSH SRC: move the stack pointer down and store the source at the new top."""
    _, x = _read_first_operand(state, mmu)

    if state.offsets.esp < 2:
        raise OverflowError("stack pointer underflow")
    top = state.offsets.esp - 2
    state.offsets.write("esp", top)
    _send_address(state, mmu, "ss", top)
    _send_data(state, mmu, x)
    _clear_buses(mmu)


def xchg(state: CpuState, mmu: MMU) -> None:
    """XCHG A, B: swap the values of both operands."""
    end1, x = _read_first_operand(state, mmu)
    end2, y = _read_second_operand(state, mmu, "ebx")

    _put_address(state, mmu, end1)
    mmu.data_bus = y
    describe_working_states(state, mmu, False, True)
    _put_address(state, mmu, end2)
    mmu.data_bus = x
    describe_working_states(state, mmu, False, True)
    _clear_buses(mmu)